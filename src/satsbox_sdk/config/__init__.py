"""
Configuration management for Satsbox Python SDK
"""

from .client_config import (
    ClientConfig,
    load_config_from_dict,
    load_config_from_json,
    load_config_from_file,
    load_config_from_env,
    configure_logging,
    DEFAULT_TIMEOUT,
    ENV_BASE_URL,
    ENV_SECRET_KEY,
)

__all__ = [
    'ClientConfig',
    'load_config_from_dict',
    'load_config_from_json',
    'load_config_from_file',
    'load_config_from_env',
    'configure_logging',
    'DEFAULT_TIMEOUT',
    'ENV_BASE_URL',
    'ENV_SECRET_KEY',
]
