"""
Hostnet Config - Configuration du proxy reseau hote.

Modules disponibles:
- logging: Interface Logger injectable et SourceLogger
- errors: Hierarchie des exceptions de configuration
- network: Modele de configuration (Configuration,
  DhcpConfiguration, DnsForwarderConfig) et parseurs tolerants
- config: Chargement des sources brutes (parametres, environnement,
  fichiers TOML/JSON)
"""

__version__ = "1.0.0"

from hostnet_config.logging import Logger, SourceLogger
from hostnet_config.errors import (
    ApplicationError,
    ConfigurationError,
    FileConfigurationError,
    DnsConfigurationError,
    DhcpConfigurationError,
)
from hostnet_config.network import (
    # Modeles
    Configuration,
    DhcpConfiguration,
    Resolver,
    DnsForwarderConfig,
    DnsServer,
    DEFAULT_CONFIGURATION,
    # Parseurs
    parse_ipv4,
    parse_ipv4_list,
    parse_int,
    parse_resolver,
    parse_dns,
    parse_macaddr,
    parse_host_names,
    parse_json,
)
from hostnet_config.config import (
    ConfigLoader,
    FileConfigLoader,
    ConfigurationLoader,
)

__all__ = [
    # Logging
    "Logger",
    "SourceLogger",
    # Errors
    "ApplicationError",
    "ConfigurationError",
    "FileConfigurationError",
    "DnsConfigurationError",
    "DhcpConfigurationError",
    # Network - Modeles
    "Configuration",
    "DhcpConfiguration",
    "Resolver",
    "DnsForwarderConfig",
    "DnsServer",
    "DEFAULT_CONFIGURATION",
    # Network - Parseurs
    "parse_ipv4",
    "parse_ipv4_list",
    "parse_int",
    "parse_resolver",
    "parse_dns",
    "parse_macaddr",
    "parse_host_names",
    "parse_json",
    # Config
    "ConfigLoader",
    "FileConfigLoader",
    "ConfigurationLoader",
]
