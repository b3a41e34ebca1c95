"""Classes de configuration du service proxy reseau.

Ce module definit les dataclasses immuables de la configuration
(Configuration, DhcpConfiguration), la strategie de resolution
et le registre des valeurs par defaut.

Les rendus to_string() servent uniquement aux logs : aucun parseur
ne les relit.
"""

import ipaddress
import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Iterable, List, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from hostnet_config.errors import DhcpConfigurationError
from hostnet_config.logging.base import Logger
from hostnet_config.network.dns_forward import (
    NO_DNS_SERVERS,
    DnsForwarderConfig,
)
from hostnet_config.network.validators import validate_mac


class Resolver(StrEnum):
    """Strategie de resolution des noms."""

    HOST = "host"
    UPSTREAM = "upstream"

    @property
    def label(self) -> str:
        """Nom affiche dans les diagnostics (Host, Upstream)."""
        return self.value.capitalize()


class _DhcpSchema(BaseModel):
    """Schema strict du JSON d'options DHCP."""

    model_config = ConfigDict(extra="ignore", strict=True)

    search_domains: List[str] = Field(
        default_factory=list, alias="searchDomains"
    )
    domain_name: Optional[str] = Field(default=None, alias="domainName")

    @field_validator("domain_name", mode="before")
    @classmethod
    def validate_domain_name(cls, v: Any) -> Any:
        """Refuse un domainName present mais null."""
        if v is None:
            raise ValueError("domainName doit etre une chaine, recu null")
        return v


@dataclass(frozen=True)
class DhcpConfiguration:
    """Options DHCP annoncees aux clients.

    Attributes:
        search_domains: Domaines de recherche, dans l'ordre.
        domain_name: Nom de domaine optionnel.
    """

    search_domains: Tuple[str, ...] = ()
    domain_name: Optional[str] = None

    def __post_init__(self) -> None:
        """Fige la liste des domaines en tuple."""
        object.__setattr__(
            self, "search_domains", tuple(self.search_domains)
        )

    def to_string(self) -> str:
        """Rendu lisible pour les logs."""
        domain_name = (
            "None" if self.domain_name is None else self.domain_name
        )
        return (
            f"{{ searchDomains = {', '.join(self.search_domains)}; "
            f"domainName = {domain_name} }}"
        )

    @classmethod
    def from_string(
        cls, text: str, logger: Logger
    ) -> Optional["DhcpConfiguration"]:
        """Analyse le JSON d'options DHCP.

        Les cles "searchDomains" et "domainName" sont facultatives,
        les cles inconnues ignorees. Un texte qui n'est pas un objet
        JSON est journalise et donne None.

        Args:
            text: Texte JSON brut.
            logger: Logger recevant les erreurs de parsing.

        Returns:
            La configuration DHCP, ou None si le JSON est invalide.

        Raises:
            DhcpConfigurationError: Si une cle presente a un type
                JSON incorrect.
        """
        try:
            data = json.loads(text)
        except (ValueError, RecursionError):
            data = None
        if not isinstance(data, dict):
            logger.log_error(
                f"Echec du parsing de la configuration DHCP json : {text}"
            )
            return None

        try:
            schema = _DhcpSchema.model_validate(data)
        except ValidationError as exc:
            raise DhcpConfigurationError(
                f"Configuration DHCP json mal typee : {text} ({exc})"
            ) from exc
        return cls(
            search_domains=tuple(schema.search_domains),
            domain_name=schema.domain_name,
        )


DEFAULT_DOMAIN = "localdomain"
DEFAULT_GATEWAY_IP = ipaddress.IPv4Address("192.168.65.1")
DEFAULT_LOWEST_IP = ipaddress.IPv4Address("192.168.65.2")
DEFAULT_HIGHEST_IP = ipaddress.IPv4Address("192.168.65.254")
DEFAULT_EXTRA_DNS: Tuple[ipaddress.IPv4Address, ...] = ()
# Limite par la taille maximale d'un message sur socket Hyper-V (< 8192)
DEFAULT_MTU = 1500
DEFAULT_PORT_MAX_IDLE_TIME = 300
DEFAULT_SERVER_MACADDR = "F6:16:36:BC:F9:C6"
DEFAULT_HOST_NAMES: Tuple[str, ...] = ("vpnkit.host",)
DEFAULT_RESOLVER = Resolver.HOST


def _option(value: Any) -> str:
    """Rend une valeur optionnelle ("None" si absente)."""
    return "None" if value is None else str(value)


def _joined(values: Iterable[Any]) -> str:
    """Joint une sequence par des virgules."""
    return ", ".join(str(v) for v in values)


@dataclass(frozen=True)
class Configuration:
    """Configuration complete d'une instance du proxy.

    Construite une seule fois ; toute modification passe par
    dataclasses.replace().

    Attributes:
        server_macaddr: Adresse MAC de l'interface virtuelle serveur.
        max_connections: Plafond de connexions (None = illimite).
        dns: Configuration du forwarder DNS.
        dns_path: Fichier source de dns.
        resolver: Strategie de resolution des noms.
        domain: Suffixe de domaine local.
        allowed_bind_addresses: Adresses autorisees pour les binds.
        gateway_ip: Adresse de la passerelle.
        lowest_ip: Debut du pool d'adresses.
        highest_ip: Fin du pool d'adresses.
        extra_dns: Serveurs DNS supplementaires annonces.
        dhcp_json_path: Fichier source de dhcp_configuration.
        dhcp_configuration: Options DHCP.
        mtu: MTU du lien ethernet virtuel.
        http_intercept: Valeur JSON opaque de l'interception HTTP.
        http_intercept_path: Fichier source de http_intercept.
        port_max_idle_time: Inactivite maximale d'un port (secondes).
        host_names: Noms DNS de cette instance.
    """

    server_macaddr: str = DEFAULT_SERVER_MACADDR
    max_connections: Optional[int] = None
    dns: DnsForwarderConfig = NO_DNS_SERVERS
    dns_path: Optional[str] = None
    resolver: Resolver = DEFAULT_RESOLVER
    domain: Optional[str] = None
    allowed_bind_addresses: Tuple[ipaddress.IPv4Address, ...] = ()
    gateway_ip: ipaddress.IPv4Address = DEFAULT_GATEWAY_IP
    lowest_ip: ipaddress.IPv4Address = DEFAULT_LOWEST_IP
    highest_ip: ipaddress.IPv4Address = DEFAULT_HIGHEST_IP
    extra_dns: Tuple[ipaddress.IPv4Address, ...] = DEFAULT_EXTRA_DNS
    dhcp_json_path: Optional[str] = None
    dhcp_configuration: Optional[DhcpConfiguration] = None
    mtu: int = DEFAULT_MTU
    http_intercept: Optional[Any] = None
    http_intercept_path: Optional[str] = None
    port_max_idle_time: int = DEFAULT_PORT_MAX_IDLE_TIME
    host_names: Tuple[str, ...] = DEFAULT_HOST_NAMES

    def __post_init__(self) -> None:
        """Normalise l'adresse MAC et fige les sequences.

        Raises:
            ValueError: Si l'adresse MAC est invalide.
        """
        object.__setattr__(
            self, "server_macaddr", validate_mac(self.server_macaddr)
        )
        for name in (
            "allowed_bind_addresses", "extra_dns", "host_names"
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @classmethod
    def default(cls) -> "Configuration":
        """Retourne l'instance canonique par defaut."""
        return DEFAULT_CONFIGURATION

    def to_string(self) -> str:
        """Rendu lisible de tous les champs, pour les logs.

        Returns:
            Chaine de diagnostic (non relue par aucun parseur).
        """
        dhcp = (
            "None" if self.dhcp_configuration is None
            else self.dhcp_configuration.to_string()
        )
        intercept = (
            "None" if self.http_intercept is None
            else json.dumps(self.http_intercept)
        )
        return "; ".join([
            f"server_macaddr = {self.server_macaddr}",
            f"max_connections = {_option(self.max_connections)}",
            f"dns_path = {_option(self.dns_path)}",
            f"dns = {self.dns.to_string()}",
            f"resolver = {self.resolver.label}",
            f"domain = {_option(self.domain)}",
            "allowed_bind_addresses = "
            f"{_joined(self.allowed_bind_addresses)}",
            f"gateway_ip = {self.gateway_ip}",
            f"lowest_ip = {self.lowest_ip}",
            f"highest_ip = {self.highest_ip}",
            f"extra_dns = {_joined(self.extra_dns)}",
            f"dhcp_json_path = {_option(self.dhcp_json_path)}",
            f"dhcp_configuration = {dhcp}",
            f"mtu = {self.mtu}",
            f"http_intercept = {intercept}",
            f"http_intercept_path = {_option(self.http_intercept_path)}",
            f"port_max_idle_time = {self.port_max_idle_time}",
            f"host_names = {_joined(self.host_names)}",
        ])


DEFAULT_CONFIGURATION = Configuration()
