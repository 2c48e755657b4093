"""
Unit tests for settings and listen address validation.

Tests cover:
- Environment variable mapping (no prefix)
- Field validators for log level, log format and environment
- Distinct listen address errors
- Fatal exit from the entry point on bad configuration
"""

import pytest
from unittest.mock import patch
from pydantic import ValidationError

from weather_api.src.config import ListenAddress, Settings, get_http_listen_address
from weather_api.src.exceptions import ConfigurationError
from weather_api.src import main


ENV_VARS = (
    "HTTP_LISTEN_ADDR",
    "HTTP_LISTEN_PORT",
    "OPENWEATHER_API_KEY",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "ENVIRONMENT",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Make sure we don't accidentally have something set"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def listen_settings(addr=None, port=None) -> Settings:
    return Settings(_env_file=None, http_listen_addr=addr, http_listen_port=port)


# ============================================================================
# SETTINGS
# ============================================================================


class TestSettings:
    """Test settings loading"""

    def test_reads_unprefixed_environment(self, clean_env):
        """Test that the service's environment variables map onto fields"""
        clean_env.setenv("HTTP_LISTEN_ADDR", "127.0.0.1")
        clean_env.setenv("HTTP_LISTEN_PORT", "8080")
        clean_env.setenv("OPENWEATHER_API_KEY", "abcdef0123456789abcdef0123456789")

        settings = Settings(_env_file=None)

        assert settings.http_listen_addr == "127.0.0.1"
        assert settings.http_listen_port == "8080"
        assert settings.openweather_api_key == "abcdef0123456789abcdef0123456789"

    def test_api_key_hidden_from_repr(self):
        """Test that the API key never appears in the settings repr"""
        settings = Settings(_env_file=None, openweather_api_key="abcdef0123456789abcdef0123456789")

        assert "abcdef0123456789" not in repr(settings)

    def test_defaults(self, clean_env):
        """Test default values"""
        settings = Settings(_env_file=None)

        assert settings.openweather_base_url == "https://api.openweathermap.org/data/2.5/weather"
        assert settings.upstream_timeout_seconds == 10.0
        assert settings.vault_enabled is False
        assert settings.is_production

    def test_log_level_normalized(self):
        """Test that log levels are upper-cased"""
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("log_level", "verbose"),
            ("log_format", "xml"),
            ("environment", "qa"),
            ("upstream_timeout_seconds", 0),
        ],
    )
    def test_invalid_values_rejected(self, field, value):
        """Test that validators reject unknown values"""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})


# ============================================================================
# LISTEN ADDRESS
# ============================================================================


class TestGetHttpListenAddress:
    """Test listen address validation"""

    def test_missing_all(self):
        """Test that a missing address is reported first"""
        with pytest.raises(ConfigurationError) as exc_info:
            get_http_listen_address(listen_settings())

        assert str(exc_info.value) == "missing IP address (HTTP_LISTEN_ADDR not set)"

    def test_missing_port(self):
        """Test that a missing port is reported when the address is set"""
        with pytest.raises(ConfigurationError) as exc_info:
            get_http_listen_address(listen_settings(addr="127.0.0.1"))

        assert str(exc_info.value) == "missing port (HTTP_LISTEN_PORT not set)"

    def test_blank_values_count_as_missing(self):
        """Test that whitespace-only values are treated as unset"""
        with pytest.raises(ConfigurationError, match="missing IP address"):
            get_http_listen_address(listen_settings(addr="  ", port="8080"))

    def test_valid(self):
        """Test that a valid pair renders as addr:port"""
        address = get_http_listen_address(listen_settings(addr="127.0.0.1", port="8080"))

        assert address == ListenAddress(host="127.0.0.1", port=8080)
        assert str(address) == "127.0.0.1:8080"

    def test_valid_from_environment(self, clean_env):
        """Test the full path from environment variables"""
        clean_env.setenv("HTTP_LISTEN_ADDR", "0.0.0.0")
        clean_env.setenv("HTTP_LISTEN_PORT", "65535")

        address = get_http_listen_address(Settings(_env_file=None))

        assert str(address) == "0.0.0.0:65535"

    def test_ipv6(self):
        """Test that IPv6 literals are accepted and bracketed"""
        address = get_http_listen_address(listen_settings(addr="::1", port="8080"))

        assert address.host == "::1"
        assert str(address) == "[::1]:8080"

    @pytest.mark.parametrize("addr", ["invalid_address", "localhost", "256.1.1.1", "127.0.0.1:80"])
    def test_invalid_ip_address(self, addr):
        """Test that non-IP addresses are rejected"""
        with pytest.raises(ConfigurationError) as exc_info:
            get_http_listen_address(listen_settings(addr=addr, port="8080"))

        assert str(exc_info.value) == f"invalid IP address: {addr}"

    @pytest.mark.parametrize("port", ["invalid_port", "0", "65536", "-1", "80.5", " 80"])
    def test_invalid_port_number(self, port):
        """Test that ports outside 1-65535 or non-integers are rejected"""
        with pytest.raises(ConfigurationError) as exc_info:
            get_http_listen_address(listen_settings(addr="127.0.0.1", port=port))

        assert str(exc_info.value) == f"invalid port number: {port}"


# ============================================================================
# ENTRY POINT
# ============================================================================


class TestRun:
    """Test the console entry point"""

    @pytest.fixture(autouse=True)
    def no_logging_setup(self):
        """Keep global logging configuration untouched"""
        with patch.object(main, "configure_logging"):
            yield

    def test_invalid_listen_address_exits_non_zero(self):
        """Test that a bad listen address is fatal"""
        with patch.object(main, "get_settings", return_value=listen_settings(addr="nope", port="8080")), \
                patch.object(main.uvicorn, "run") as uvicorn_run:
            with pytest.raises(SystemExit) as exc_info:
                main.run()

        assert exc_info.value.code == 1
        uvicorn_run.assert_not_called()

    def test_invalid_settings_exit_non_zero(self):
        """Test that settings validation errors are fatal"""
        def broken_settings():
            return Settings(_env_file=None, log_level="loud")

        with patch.object(main, "get_settings", side_effect=broken_settings), \
                patch.object(main.uvicorn, "run") as uvicorn_run:
            with pytest.raises(SystemExit) as exc_info:
                main.run()

        assert exc_info.value.code == 1
        uvicorn_run.assert_not_called()

    def test_valid_configuration_starts_server(self):
        """Test that uvicorn is started on the validated address"""
        with patch.object(main, "get_settings", return_value=listen_settings(addr="127.0.0.1", port="8080")), \
                patch.object(main.uvicorn, "run") as uvicorn_run:
            main.run()

        uvicorn_run.assert_called_once()
        _, kwargs = uvicorn_run.call_args
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8080
