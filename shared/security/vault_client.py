"""HashiCorp Vault client for secrets management.

Reads static secrets from a KV v2 mount. Used at startup to source the
weather provider API key when it is not supplied through the environment.
"""

from typing import Any, Dict, Optional

import hvac
import requests
from hvac.exceptions import VaultError

# Errors from the Vault server itself, or from reaching it at all
VAULT_ERRORS = (VaultError, requests.exceptions.RequestException)


class VaultClient:
    """HashiCorp Vault client wrapper."""

    def __init__(
        self,
        vault_url: str = "http://vault:8200",
        vault_token: Optional[str] = None,
        role_id: Optional[str] = None,
        secret_id: Optional[str] = None,
        namespace: Optional[str] = None,
        client: Optional[hvac.Client] = None,
    ) -> None:
        """Initialize Vault client.

        Args:
            vault_url: Vault server URL
            vault_token: Vault token (for token auth)
            role_id: Role ID (for AppRole auth)
            secret_id: Secret ID (for AppRole auth)
            namespace: Vault Enterprise namespace
            client: Pre-built hvac client (mainly for tests)

        Raises:
            ValueError: If no authentication method is provided
            RuntimeError: If AppRole login fails or Vault is unreachable
        """
        self.vault_url = vault_url
        self.client = client if client is not None else hvac.Client(url=vault_url, namespace=namespace)

        if vault_token:
            self.client.token = vault_token
        elif role_id and secret_id:
            self._authenticate_approle(role_id, secret_id)
        else:
            raise ValueError("No authentication method provided for Vault")

    def _authenticate_approle(self, role_id: str, secret_id: str) -> None:
        """Authenticate using AppRole method.

        Args:
            role_id: AppRole role ID
            secret_id: AppRole secret ID
        """
        try:
            response = self.client.auth.approle.login(
                role_id=role_id, secret_id=secret_id
            )
            self.client.token = response["auth"]["client_token"]
        except VAULT_ERRORS as e:
            raise RuntimeError(f"Failed to authenticate with Vault: {e}")

    def get_secret(self, path: str, mount_point: str = "secret") -> Dict[str, Any]:
        """Get secret from Vault KV store.

        Args:
            path: Secret path (e.g., "weather-service")
            mount_point: KV mount point (default: "secret")

        Returns:
            Secret data dictionary

        Raises:
            RuntimeError: If the secret cannot be read or Vault is unreachable
        """
        try:
            response = self.client.secrets.kv.v2.read_secret_version(
                path=path, mount_point=mount_point
            )
            return response["data"]["data"]
        except VAULT_ERRORS as e:
            raise RuntimeError(f"Failed to read secret {path}: {e}")

    def get_secret_field(
        self, path: str, field: str, mount_point: str = "secret"
    ) -> Optional[str]:
        """Get a single field of a KV secret.

        Returns:
            The field value, or None when the secret has no such field
        """
        value = self.get_secret(path, mount_point=mount_point).get(field)
        return None if value is None else str(value)
