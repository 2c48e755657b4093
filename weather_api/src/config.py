"""
Weather service configuration using Pydantic Settings.

Provides centralized configuration for:
- HTTP listen address and port
- OpenWeather API key and endpoint
- Upstream request timeout
- Vault integration for the API key
- Logging, metrics and security headers

All settings support environment variable overrides and .env file loading.
The settings object is built once at startup and passed to the application
factory; request handling never reads the environment directly.
"""

import ipaddress
from functools import lru_cache
from typing import NamedTuple, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_api.src.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Variables are read without a prefix, so HTTP_LISTEN_ADDR,
    HTTP_LISTEN_PORT and OPENWEATHER_API_KEY map straight onto the fields
    below.

    Environment variables are loaded from:
    1. System environment
    2. .env file in the current directory
    3. Default values defined below
    """

    # =========================================================================
    # API Settings
    # =========================================================================

    app_name: str = Field(
        default="weather-service",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="API version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode - enables verbose logging"
    )
    environment: str = Field(
        default="production",
        description="Environment: development|staging|production"
    )

    # Kept as raw strings; see get_http_listen_address()
    http_listen_addr: Optional[str] = Field(
        default=None,
        description="IP literal the HTTP server binds to"
    )
    http_listen_port: Optional[str] = Field(
        default=None,
        description="TCP port the HTTP server binds to (1-65535)"
    )

    # =========================================================================
    # Weather Provider Settings
    # =========================================================================

    openweather_api_key: Optional[str] = Field(
        default=None,
        description="OpenWeather API key (32 lowercase hex characters)",
        repr=False,
    )
    openweather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/weather",
        description="OpenWeather current weather endpoint"
    )
    upstream_timeout_seconds: float = Field(
        default=10.0,
        description="Total timeout for one upstream request (seconds)",
        gt=0,
        le=120
    )

    # =========================================================================
    # HashiCorp Vault Settings
    # =========================================================================

    vault_enabled: bool = Field(
        default=False,
        description="Read the API key from Vault instead of OPENWEATHER_API_KEY"
    )
    vault_url: str = Field(
        default="http://vault:8200",
        description="Vault server URL"
    )
    vault_token: Optional[str] = Field(
        default=None,
        description="Vault token (dev only - use AppRole in production)",
        repr=False,
    )
    vault_role_id: Optional[str] = Field(
        default=None,
        description="Vault AppRole role_id (production)"
    )
    vault_secret_id: Optional[str] = Field(
        default=None,
        description="Vault AppRole secret_id (production)",
        repr=False,
    )
    vault_namespace: Optional[str] = Field(
        default=None,
        description="Vault namespace (Vault Enterprise)"
    )
    vault_mount_point: str = Field(
        default="secret",
        description="Vault KV v2 mount point"
    )
    vault_path: str = Field(
        default="weather-service",
        description="Vault secret path"
    )
    vault_api_key_field: str = Field(
        default="openweather_api_key",
        description="Field of the Vault secret holding the API key"
    )

    # =========================================================================
    # Security and Monitoring
    # =========================================================================

    security_headers_enabled: bool = Field(
        default=True,
        description="Enable security headers (X-Frame-Options, etc.)"
    )
    metrics_enabled: bool = Field(
        default=True,
        description="Expose Prometheus metrics on /metrics"
    )

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG|INFO|WARNING|ERROR|CRITICAL"
    )
    log_format: str = Field(
        default="json",
        description="Log format: json|text"
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got: {v}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of {allowed}, got: {v}")
        return v_lower

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        allowed = ["json", "text"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got: {v}")
        return v_lower

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    # =========================================================================
    # Model Config
    # =========================================================================

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()


# ============================================================================
# Listen Address
# ============================================================================


class ListenAddress(NamedTuple):
    """Validated address the HTTP server binds to."""

    host: str
    port: int

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def get_http_listen_address(settings: Settings) -> ListenAddress:
    """
    Validate the configured listen address and port.

    Args:
        settings: Application settings

    Returns:
        ListenAddress whose string form is "addr:port"

    Raises:
        ConfigurationError: With a distinct message for a missing address,
            a missing port, an invalid IP literal or an invalid port number
    """
    raw_addr = settings.http_listen_addr or ""
    raw_port = settings.http_listen_port or ""

    if not raw_addr.strip():
        raise ConfigurationError("missing IP address (HTTP_LISTEN_ADDR not set)")

    if not raw_port.strip():
        raise ConfigurationError("missing port (HTTP_LISTEN_PORT not set)")

    try:
        ipaddress.ip_address(raw_addr)
    except ValueError:
        raise ConfigurationError(f"invalid IP address: {raw_addr}")

    if not (raw_port.isascii() and raw_port.isdigit()) or not 1 <= int(raw_port) <= 65535:
        raise ConfigurationError(f"invalid port number: {raw_port}")

    return ListenAddress(host=raw_addr, port=int(raw_port))
