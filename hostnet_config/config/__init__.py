"""Module de configuration."""

from hostnet_config.config.loader import (
    ConfigLoader,
    FileConfigLoader,
)
from hostnet_config.config.manager import (
    DEFAULT_ENV_PREFIX,
    ConfigurationLoader,
)

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
    "ConfigurationLoader",
    "DEFAULT_ENV_PREFIX",
]
