"""Module de gestion des erreurs."""

from hostnet_config.errors.exceptions import (ApplicationError,
                                              ConfigurationError,
                                              FileConfigurationError,
                                              DnsConfigurationError,
                                              DhcpConfigurationError)


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "FileConfigurationError",
    "DnsConfigurationError",
    "DhcpConfigurationError",
]
