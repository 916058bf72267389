"""
Client configuration management for GAEKit

Loads a JSON configuration document with per-environment HTTP, logging and
authentication settings, and builds the runtime objects (authenticator,
fetch options, client) from it.
"""

import json
import logging
import os
import sys
from typing import Dict, List, Optional, Any, Union
from dataclasses import dataclass, field
from pathlib import Path

from ..auth import Authenticator, BasicAuthenticator, NoAuthenticator, OAuthAuthenticator
from ..exceptions import ConfigError, GAEKitError
from ..http_client import HttpClient
from ..oauth.types import OAuthCredentials, SignatureMethod
from ..transport import FetchOptions

CONFIG_ENV_VAR = "GAEKIT_CONFIG"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
AUTH_SCHEMES = ("none", "basic", "oauth")


@dataclass
class HttpConfig:
    """HTTP configuration"""
    timeout: float = 30.0
    verify_ssl: bool = True
    follow_redirects: bool = True
    allow_truncate: bool = False
    default_headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class AuthConfig:
    """Authentication configuration"""
    scheme: str = "none"
    username: str = ""
    password: str = ""
    consumer_key: str = ""
    consumer_secret: str = ""
    token: str = ""
    token_secret: str = ""
    signature_method: str = SignatureMethod.HMAC_SHA1.value


@dataclass
class EnvironmentConfig:
    """Environment-specific configuration"""
    http: HttpConfig
    logging: LoggingConfig
    auth: AuthConfig


@dataclass
class DefaultConfig:
    """Default configuration values"""
    environment: str


@dataclass
class ClientConfig:
    """Client configuration structure"""
    config_format_version: str
    environments: Dict[str, EnvironmentConfig]
    defaults: DefaultConfig


class ConfigManager:
    """Configuration manager for GAEKit clients"""

    def __init__(self, config: ClientConfig, environment: Optional[str] = None):
        self.config = config
        self.current_environment = environment or config.defaults.environment
        self._validate()

    @classmethod
    def from_json(cls, json_string: str, environment: Optional[str] = None) -> 'ConfigManager':
        """Load configuration from JSON string"""
        try:
            data = json.loads(json_string)
            config = cls._parse_config_dict(data)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ConfigError(f"Invalid configuration format: {e}", "INVALID_FORMAT")
        return cls(config, environment)

    @classmethod
    def from_file(cls, file_path: Union[str, Path], environment: Optional[str] = None) -> 'ConfigManager':
        """Load configuration from file"""
        try:
            path = Path(file_path)
            with open(path, 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}", "FILE_ERROR")
        return cls.from_json(json_string, environment)

    @classmethod
    def from_env(cls, environment: Optional[str] = None) -> 'ConfigManager':
        """Load configuration from the file named by GAEKIT_CONFIG"""
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            raise ConfigError(f"{CONFIG_ENV_VAR} is not set", "FILE_NOT_FOUND")
        return cls.from_file(path, environment)

    @classmethod
    def load_default(cls, environment: Optional[str] = None) -> 'ConfigManager':
        """Load default configuration"""
        if os.environ.get(CONFIG_ENV_VAR):
            return cls.from_env(environment)

        default_paths = [
            Path("gaekit.json"),
            Path("config/gaekit.json"),
            Path.home() / ".gaekit" / "config.json",
        ]

        for path in default_paths:
            if path.exists():
                return cls.from_file(path, environment)

        raise ConfigError("Default configuration file not found", "FILE_NOT_FOUND")

    def set_environment(self, environment: str) -> None:
        """Set current environment"""
        if environment not in self.config.environments:
            raise ConfigError(f"Environment '{environment}' not found", "ENVIRONMENT_NOT_FOUND")
        self.current_environment = environment

    def get_current_environment_config(self) -> EnvironmentConfig:
        """Get current environment configuration"""
        env_config = self.config.environments.get(self.current_environment)
        if not env_config:
            raise ConfigError(f"Environment '{self.current_environment}' not found", "ENVIRONMENT_NOT_FOUND")
        return env_config

    def list_environments(self) -> List[str]:
        """List available environments"""
        return list(self.config.environments.keys())

    def get_logging_config(self) -> LoggingConfig:
        return self.get_current_environment_config().logging

    def get_http_config(self) -> HttpConfig:
        return self.get_current_environment_config().http

    def get_auth_config(self) -> AuthConfig:
        return self.get_current_environment_config().auth

    def to_credentials(self) -> OAuthCredentials:
        """Build the OAuth credential set of the current environment"""
        auth = self.get_auth_config()
        return OAuthCredentials(
            consumer_key=auth.consumer_key,
            consumer_secret=auth.consumer_secret,
            token=auth.token,
            token_secret=auth.token_secret,
            signature_method=auth.signature_method,
        )

    def to_authenticator(self) -> Authenticator:
        """Build the authenticator of the current environment"""
        auth = self.get_auth_config()
        if auth.scheme == "basic":
            return BasicAuthenticator(auth.username, auth.password)
        if auth.scheme == "oauth":
            return OAuthAuthenticator(self.to_credentials())
        return NoAuthenticator()

    def to_fetch_options(self) -> FetchOptions:
        """Build fetch options of the current environment"""
        http = self.get_http_config()
        return FetchOptions(
            allow_truncate=http.allow_truncate,
            follow_redirects=http.follow_redirects,
            timeout=http.timeout,
            verify_ssl=http.verify_ssl,
        )

    def create_client(self) -> HttpClient:
        """Create an HTTP client for the current environment"""
        return HttpClient(
            authenticator=self.to_authenticator(),
            options=self.to_fetch_options(),
            default_headers=self.get_http_config().default_headers,
        )

    def _validate(self) -> None:
        """Validate the configuration"""
        if self.config.defaults.environment not in self.config.environments:
            raise ConfigError(
                f"Default environment '{self.config.defaults.environment}' not found",
                "INVALID_DEFAULT_ENVIRONMENT"
            )

        if self.current_environment not in self.config.environments:
            raise ConfigError(f"Environment '{self.current_environment}' not found", "ENVIRONMENT_NOT_FOUND")

        for env_name, env_config in self.config.environments.items():
            if env_config.auth.scheme not in AUTH_SCHEMES:
                raise ConfigError(
                    f"Environment '{env_name}' has unknown auth scheme '{env_config.auth.scheme}'",
                    "INVALID_AUTH_CONFIG"
                )

            if env_config.auth.scheme == "oauth":
                try:
                    SignatureMethod.parse(env_config.auth.signature_method)
                except GAEKitError as e:
                    raise ConfigError(
                        f"Environment '{env_name}': {e.message}",
                        "INVALID_AUTH_CONFIG"
                    )

            if env_config.http.timeout <= 0:
                raise ConfigError(
                    f"Environment '{env_name}' has invalid HTTP timeout",
                    "INVALID_HTTP_CONFIG"
                )

            level = env_config.logging.level
            if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
                raise ConfigError(
                    f"Environment '{env_name}' has invalid log level '{env_config.logging.level}'",
                    "INVALID_LOGGING_CONFIG"
                )

    @staticmethod
    def _parse_config_dict(data: Dict[str, Any]) -> ClientConfig:
        """Parse configuration dictionary into structured objects"""
        environments = {}
        for env_name, env_data in data['environments'].items():
            environments[env_name] = EnvironmentConfig(
                http=HttpConfig(**env_data.get('http', {})),
                logging=LoggingConfig(**env_data.get('logging', {})),
                auth=AuthConfig(**env_data.get('auth', {})),
            )

        return ClientConfig(
            config_format_version=data['config_format_version'],
            environments=environments,
            defaults=DefaultConfig(**data['defaults']),
        )


def configure_logging(config: LoggingConfig, stream=None) -> logging.Logger:
    """
    Attach a stream handler to the gaekit logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        config: Logging configuration
        stream: Output stream (defaults to stderr)

    Returns:
        logging.Logger: The configured package logger
    """
    package_logger = logging.getLogger("gaekit")
    package_logger.setLevel(config.level.upper())

    for handler in list(package_logger.handlers):
        if getattr(handler, "_gaekit_handler", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(config.format))
    handler._gaekit_handler = True
    package_logger.addHandler(handler)

    return package_logger


def load_config_from_json(json_string: str, environment: Optional[str] = None) -> ConfigManager:
    """Load configuration from JSON string"""
    return ConfigManager.from_json(json_string, environment)


def load_config_from_file(file_path: Union[str, Path], environment: Optional[str] = None) -> ConfigManager:
    """Load configuration from file"""
    return ConfigManager.from_file(file_path, environment)


def load_default_config(environment: Optional[str] = None) -> ConfigManager:
    """Load default configuration"""
    return ConfigManager.load_default(environment)
