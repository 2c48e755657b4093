"""
OpenWeather API key handling.

The raw key is captured once at startup, from the environment or from
Vault, and pattern-checked on every request so that a bad key surfaces as a
500 on /weather rather than a refusal to start.
"""

import re
from typing import Optional

import structlog

from weather_api.src.config import Settings
from weather_api.src.exceptions import InvalidAPIKeyFormatError, MissingAPIKeyError
from shared.security import VaultClient

logger = structlog.get_logger(__name__)

API_KEY_PATTERN = re.compile(r"[a-f0-9]{32}")


def get_api_key(raw: Optional[str]) -> str:
    """
    Validate an OpenWeather API key.

    Args:
        raw: Raw key as configured (may be None or padded with whitespace)

    Returns:
        The trimmed key

    Raises:
        MissingAPIKeyError: If no key is configured
        InvalidAPIKeyFormatError: If the key is not 32 lowercase hex characters
    """
    api_key = (raw or "").strip()
    if not api_key:
        raise MissingAPIKeyError("OPENWEATHER_API_KEY is not set")
    if not API_KEY_PATTERN.fullmatch(api_key):
        raise InvalidAPIKeyFormatError("API key failed pattern check")
    return api_key


def build_vault_client(settings: Settings) -> VaultClient:
    """Create a Vault client from settings."""
    return VaultClient(
        vault_url=settings.vault_url,
        vault_token=settings.vault_token,
        role_id=settings.vault_role_id,
        secret_id=settings.vault_secret_id,
        namespace=settings.vault_namespace,
    )


def load_raw_api_key(
    settings: Settings,
    vault_client: Optional[VaultClient] = None,
) -> Optional[str]:
    """
    Resolve the raw API key at startup.

    When Vault is disabled this is simply OPENWEATHER_API_KEY. When Vault is
    enabled the key is read from the configured KV secret; a Vault failure
    is logged and yields None, so lookups fail with a credential error.

    Args:
        settings: Application settings
        vault_client: Optional pre-built Vault client

    Returns:
        The raw key, or None if it could not be resolved
    """
    if not settings.vault_enabled:
        return settings.openweather_api_key

    try:
        client = vault_client or build_vault_client(settings)
        api_key = client.get_secret_field(
            settings.vault_path,
            settings.vault_api_key_field,
            mount_point=settings.vault_mount_point,
        )
    except (RuntimeError, ValueError) as e:
        logger.error(
            "vault_api_key_load_failed",
            vault_url=settings.vault_url,
            path=settings.vault_path,
            error=str(e),
        )
        return None

    if api_key is None:
        logger.error(
            "vault_api_key_missing",
            path=settings.vault_path,
            field=settings.vault_api_key_field,
        )
    else:
        logger.info("vault_api_key_loaded", path=settings.vault_path)
    return api_key
