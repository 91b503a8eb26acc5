"""
Client configuration for Satsbox Python SDK

Provides the connection settings of the Satsbox API client and loaders for
JSON documents, files and environment variables.
"""

import os
import json
import logging
from typing import Dict, Optional, Any, Union
from dataclasses import dataclass, asdict, field
from pathlib import Path
from urllib.parse import urlparse

from ..exceptions import ConfigError

DEFAULT_TIMEOUT = 60.0
DEFAULT_USER_AGENT = "Satsbox-Python-SDK/0.1.0"

ENV_BASE_URL = "SATSBOX_API_BASE_URL"
ENV_SECRET_KEY = "SATSBOX_SECRET_KEY"
ENV_TIMEOUT = "SATSBOX_TIMEOUT"
ENV_VERIFY_SSL = "SATSBOX_VERIFY_SSL"
ENV_LOG_LEVEL = "SATSBOX_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ClientConfig:
    """Configuration for Satsbox API connection."""
    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    secret_key: Optional[str] = field(default=None, repr=False)
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate client configuration."""
        if not self.base_url:
            raise ConfigError("Server base_url cannot be empty")

        parsed = urlparse(self.base_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ConfigError(f"Invalid server URL format: {self.base_url}")

        # Request paths are appended verbatim
        self.base_url = self.base_url.rstrip('/')

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise ConfigError("Timeout must be positive")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}")

    def to_dict(self, include_secret: bool = False) -> Dict[str, Any]:
        data = asdict(self)
        if not include_secret:
            data.pop('secret_key')
        return data


def load_config_from_dict(data: Dict[str, Any]) -> ClientConfig:
    """
    Create a client configuration from a dictionary.

    Raises:
        ConfigError: If required fields are missing or unknown fields are given
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    known = set(ClientConfig.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")

    if 'base_url' not in data:
        raise ConfigError("Missing required configuration field: base_url")

    return ClientConfig(**data)


def load_config_from_json(json_str: str) -> ClientConfig:
    """Create a client configuration from a JSON string."""
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON configuration: {e}")
    return load_config_from_dict(data)


def load_config_from_file(path: Union[str, Path]) -> ClientConfig:
    """Create a client configuration from a JSON file."""
    path = Path(path)
    try:
        content = path.read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file {path}: {e}")
    return load_config_from_json(content)


def load_config_from_env(environ: Optional[Dict[str, str]] = None, **overrides) -> ClientConfig:
    """
    Create a client configuration from ``SATSBOX_*`` environment variables.

    Keyword overrides that are not None take precedence over the environment.
    """
    env = os.environ if environ is None else environ

    data: Dict[str, Any] = {}
    if env.get(ENV_BASE_URL):
        data['base_url'] = env[ENV_BASE_URL]
    if env.get(ENV_SECRET_KEY):
        data['secret_key'] = env[ENV_SECRET_KEY]
    if env.get(ENV_TIMEOUT):
        try:
            data['timeout'] = float(env[ENV_TIMEOUT])
        except ValueError:
            raise ConfigError(f"{ENV_TIMEOUT} must be a number")
    if env.get(ENV_VERIFY_SSL):
        data['verify_ssl'] = env[ENV_VERIFY_SSL].strip().lower() not in ('0', 'false', 'no', 'off')
    if env.get(ENV_LOG_LEVEL):
        data['log_level'] = env[ENV_LOG_LEVEL]

    data.update({key: value for key, value in overrides.items() if value is not None})

    if 'base_url' not in data:
        raise ConfigError(f"Server base URL not configured; set {ENV_BASE_URL}")

    return load_config_from_dict(data)


def configure_logging(level: str = "WARNING") -> None:
    """
    Apply a basic logging setup for command-line use.

    Calling it again only changes the root level.
    """
    numeric_level = getattr(logging, str(level).upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    logging.getLogger().setLevel(numeric_level)
