"""Module reseau : modele de configuration et parseurs tolerants.

Ce module fournit la configuration immuable du proxy, la
configuration du forwarder DNS et les parseurs de champs qui
remplacent toute valeur invalide par un defaut journalise.
"""

from hostnet_config.network.config import (
    DEFAULT_CONFIGURATION,
    DEFAULT_DOMAIN,
    DEFAULT_EXTRA_DNS,
    DEFAULT_GATEWAY_IP,
    DEFAULT_HIGHEST_IP,
    DEFAULT_HOST_NAMES,
    DEFAULT_LOWEST_IP,
    DEFAULT_MTU,
    DEFAULT_PORT_MAX_IDLE_TIME,
    DEFAULT_RESOLVER,
    DEFAULT_SERVER_MACADDR,
    Configuration,
    DhcpConfiguration,
    Resolver,
)
from hostnet_config.network.dns_forward import (
    NO_DNS_SERVERS,
    DnsForwarderConfig,
    DnsServer,
)
from hostnet_config.network.parsers import (
    parse_dns,
    parse_host_names,
    parse_int,
    parse_ipv4,
    parse_ipv4_list,
    parse_json,
    parse_macaddr,
    parse_resolver,
)
from hostnet_config.network.validators import (
    validate_dns_name,
    validate_ipv4,
    validate_mac,
)

__all__ = [
    # Modeles
    "Configuration",
    "DhcpConfiguration",
    "Resolver",
    "DnsForwarderConfig",
    "DnsServer",
    # Valeurs par defaut
    "DEFAULT_CONFIGURATION",
    "DEFAULT_DOMAIN",
    "DEFAULT_EXTRA_DNS",
    "DEFAULT_GATEWAY_IP",
    "DEFAULT_HIGHEST_IP",
    "DEFAULT_HOST_NAMES",
    "DEFAULT_LOWEST_IP",
    "DEFAULT_MTU",
    "DEFAULT_PORT_MAX_IDLE_TIME",
    "DEFAULT_RESOLVER",
    "DEFAULT_SERVER_MACADDR",
    "NO_DNS_SERVERS",
    # Parseurs
    "parse_ipv4",
    "parse_ipv4_list",
    "parse_int",
    "parse_resolver",
    "parse_dns",
    "parse_macaddr",
    "parse_host_names",
    "parse_json",
    # Validateurs
    "validate_ipv4",
    "validate_mac",
    "validate_dns_name",
]
