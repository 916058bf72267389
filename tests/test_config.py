"""
Unit tests for client configuration loading
"""

import io
import json
import logging

import pytest

from gaekit.auth import BasicAuthenticator, NoAuthenticator, OAuthAuthenticator
from gaekit.config import (
    ConfigManager,
    LoggingConfig,
    CONFIG_ENV_VAR,
    configure_logging,
    load_config_from_file,
    load_config_from_json,
)
from gaekit.exceptions import ConfigError
from gaekit.oauth import SignatureMethod
from gaekit.transport import RequestsTransport


def config_dict():
    return {
        "config_format_version": "1.0",
        "environments": {
            "development": {
                "http": {"timeout": 5.0, "verify_ssl": False, "default_headers": {"Accept": "application/json"}},
                "logging": {"level": "DEBUG"},
                "auth": {"scheme": "none"},
            },
            "staging": {
                "auth": {"scheme": "basic", "username": "u", "password": "p"},
            },
            "production": {
                "http": {"follow_redirects": False, "allow_truncate": True},
                "auth": {
                    "scheme": "oauth",
                    "consumer_key": "ck",
                    "consumer_secret": "cs",
                    "token": "tk",
                    "token_secret": "ts",
                    "signature_method": "PLAINTEXT",
                },
            },
        },
        "defaults": {"environment": "development"},
    }


class TestConfigLoading:
    """Test loading configuration documents"""

    def test_from_json(self):
        manager = load_config_from_json(json.dumps(config_dict()))
        assert manager.current_environment == "development"
        assert manager.list_environments() == ["development", "staging", "production"]
        assert manager.get_http_config().timeout == 5.0
        assert manager.get_logging_config().level == "DEBUG"

    def test_section_defaults(self):
        manager = load_config_from_json(json.dumps(config_dict()), "staging")
        http = manager.get_http_config()
        assert http.timeout == 30.0
        assert http.verify_ssl is True
        assert manager.get_logging_config().level == "INFO"

    def test_from_file(self, tmp_path):
        path = tmp_path / "gaekit.json"
        path.write_text(json.dumps(config_dict()), encoding="utf-8")
        manager = load_config_from_file(path, "production")
        assert manager.current_environment == "production"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager.from_file(tmp_path / "missing.json")
        assert exc_info.value.error_code == "FILE_ERROR"

    def test_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "env.json"
        path.write_text(json.dumps(config_dict()), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert ConfigManager.from_env().current_environment == "development"
        assert ConfigManager.load_default("staging").current_environment == "staging"

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        with pytest.raises(ConfigError):
            ConfigManager.from_env()

    def test_load_default_searches_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "gaekit.json").write_text(json.dumps(config_dict()), encoding="utf-8")

        assert ConfigManager.load_default().current_environment == "development"

    def test_load_default_not_found(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager.load_default()
        assert exc_info.value.error_code == "FILE_NOT_FOUND"

    def test_parse_error(self):
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json("{not json")
        assert exc_info.value.error_code == "PARSE_ERROR"

    def test_invalid_format(self):
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json(json.dumps({"environments": {}}))
        assert exc_info.value.error_code == "INVALID_FORMAT"

    def test_unknown_field(self):
        data = config_dict()
        data["environments"]["development"]["http"]["retries"] = 3
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json(json.dumps(data))
        assert exc_info.value.error_code == "INVALID_FORMAT"


class TestConfigValidation:
    """Test configuration validation"""

    def test_unknown_default_environment(self):
        data = config_dict()
        data["defaults"]["environment"] = "qa"
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json(json.dumps(data))
        assert exc_info.value.error_code == "INVALID_DEFAULT_ENVIRONMENT"

    def test_unknown_selected_environment(self):
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json(json.dumps(config_dict()), "qa")
        assert exc_info.value.error_code == "ENVIRONMENT_NOT_FOUND"

    def test_unknown_auth_scheme(self):
        data = config_dict()
        data["environments"]["staging"]["auth"]["scheme"] = "digest"
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json(json.dumps(data))
        assert exc_info.value.error_code == "INVALID_AUTH_CONFIG"

    def test_unsupported_signature_method(self):
        data = config_dict()
        data["environments"]["production"]["auth"]["signature_method"] = "RSA-SHA1"
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json(json.dumps(data))
        assert exc_info.value.error_code == "INVALID_AUTH_CONFIG"

    def test_invalid_timeout(self):
        data = config_dict()
        data["environments"]["development"]["http"]["timeout"] = 0
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json(json.dumps(data))
        assert exc_info.value.error_code == "INVALID_HTTP_CONFIG"

    def test_invalid_log_level(self):
        data = config_dict()
        data["environments"]["development"]["logging"]["level"] = "CHATTY"
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json(json.dumps(data))
        assert exc_info.value.error_code == "INVALID_LOGGING_CONFIG"

    def test_non_string_log_level(self):
        data = config_dict()
        data["environments"]["development"]["logging"]["level"] = 10
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_json(json.dumps(data))
        assert exc_info.value.error_code == "INVALID_LOGGING_CONFIG"

    def test_set_environment(self):
        manager = load_config_from_json(json.dumps(config_dict()))
        manager.set_environment("staging")
        assert manager.current_environment == "staging"

        with pytest.raises(ConfigError):
            manager.set_environment("qa")


class TestRuntimeObjects:
    """Test building authenticators, options and clients"""

    def test_no_auth(self):
        manager = load_config_from_json(json.dumps(config_dict()))
        assert isinstance(manager.to_authenticator(), NoAuthenticator)

    def test_basic_auth(self):
        manager = load_config_from_json(json.dumps(config_dict()), "staging")
        authenticator = manager.to_authenticator()
        assert isinstance(authenticator, BasicAuthenticator)
        assert authenticator.authorization == "Basic dTpw"

    def test_oauth(self):
        manager = load_config_from_json(json.dumps(config_dict()), "production")
        authenticator = manager.to_authenticator()
        assert isinstance(authenticator, OAuthAuthenticator)
        assert authenticator.credentials.consumer_key == "ck"
        assert authenticator.credentials.signature_method is SignatureMethod.PLAINTEXT

    def test_fetch_options(self):
        manager = load_config_from_json(json.dumps(config_dict()), "production")
        options = manager.to_fetch_options()
        assert options.follow_redirects is False
        assert options.allow_truncate is True

    def test_create_client(self):
        manager = load_config_from_json(json.dumps(config_dict()))
        client = manager.create_client()
        assert isinstance(client.transport, RequestsTransport)
        assert client.options.timeout == 5.0
        assert client.options.verify_ssl is False
        assert client.default_headers == {"Accept": "application/json"}


class TestConfigureLogging:

    def test_configures_package_logger(self):
        stream = io.StringIO()
        package_logger = configure_logging(LoggingConfig(level="debug", format="%(levelname)s %(message)s"), stream)

        logging.getLogger("gaekit.oauth.signer").debug("hello")

        assert package_logger.level == logging.DEBUG
        assert "DEBUG hello" in stream.getvalue()

    def test_replaces_previous_handler(self):
        configure_logging(LoggingConfig(level="INFO"), io.StringIO())
        package_logger = configure_logging(LoggingConfig(level="WARNING"), io.StringIO())

        installed = [h for h in package_logger.handlers if getattr(h, "_gaekit_handler", False)]
        assert len(installed) == 1
        assert package_logger.level == logging.WARNING
