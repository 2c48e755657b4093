"""Security module for secrets management."""

from .vault_client import VaultClient

__all__ = [
    "VaultClient",
]
