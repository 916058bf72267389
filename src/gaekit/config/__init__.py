"""
Configuration management for GAEKit

This module loads per-environment HTTP, logging and authentication settings
from JSON and builds clients from them.
"""

from .client_config import (
    ClientConfig,
    ConfigManager,
    EnvironmentConfig,
    HttpConfig,
    LoggingConfig,
    AuthConfig,
    DefaultConfig,
    CONFIG_ENV_VAR,
    configure_logging,
    load_config_from_json,
    load_config_from_file,
    load_default_config,
)

__all__ = [
    'ClientConfig',
    'ConfigManager',
    'EnvironmentConfig',
    'HttpConfig',
    'LoggingConfig',
    'AuthConfig',
    'DefaultConfig',
    'CONFIG_ENV_VAR',
    'configure_logging',
    'load_config_from_json',
    'load_config_from_file',
    'load_default_config',
]
