"""Configuration du forwarder DNS amont.

Ce module definit les dataclasses immuables decrivant les serveurs
DNS amont, la liste de recherche et le seuil de detection hors-ligne,
ainsi que le parseur du format texte de type resolv.conf :

    # zone example.com
    # timeout 2000
    nameserver 10.0.0.2#5353
    nameserver 8.8.8.8
    search corp.example.com example.com
    # assume_offline_after_drops 3

Les directives "# zone" et "# timeout" s'appliquent au nameserver
suivant uniquement.
"""

import ipaddress
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from hostnet_config.errors import DnsConfigurationError
from hostnet_config.network.validators import validate_dns_name

DEFAULT_DNS_PORT = 53

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass(frozen=True)
class DnsServer:
    """Serveur DNS amont.

    Attributes:
        address: Adresse IP du serveur.
        port: Port UDP/TCP du serveur.
        zones: Zones servies exclusivement par ce serveur
            (vide = toutes).
        timeout_ms: Delai de reponse maximal en millisecondes.
        order: Position du serveur dans le fichier.
    """

    address: IPAddress
    port: int = DEFAULT_DNS_PORT
    zones: Tuple[str, ...] = ()
    timeout_ms: Optional[int] = None
    order: int = 0

    def to_string(self) -> str:
        """Rendu lisible du serveur pour les logs."""
        host = str(self.address)
        if self.address.version == 6:
            host = f"[{host}]"
        text = f"{host}:{self.port}"
        if self.zones:
            text += f" zones={','.join(self.zones)}"
        if self.timeout_ms is not None:
            text += f" timeout={self.timeout_ms}ms"
        return text


@dataclass(frozen=True)
class DnsForwarderConfig:
    """Configuration complete du forwarder DNS.

    Attributes:
        servers: Serveurs amont, dans l'ordre du fichier.
        search: Domaines de recherche.
        assume_offline_after_drops: Nombre de requetes perdues avant
            de considerer un serveur hors-ligne (None = jamais).
    """

    servers: Tuple[DnsServer, ...] = ()
    search: Tuple[str, ...] = ()
    assume_offline_after_drops: Optional[int] = None

    def __post_init__(self) -> None:
        """Fige les sequences en tuples."""
        object.__setattr__(self, "servers", tuple(self.servers))
        object.__setattr__(self, "search", tuple(self.search))

    def to_string(self) -> str:
        """Rendu lisible de la configuration, sans garantie d'aller-retour.

        Returns:
            Chaine de diagnostic.
        """
        drops = self.assume_offline_after_drops
        return (
            "{ servers = "
            + ", ".join(s.to_string() for s in self.servers)
            + "; search = "
            + ", ".join(self.search)
            + "; assume_offline_after_drops = "
            + ("None" if drops is None else str(drops))
            + " }"
        )

    @classmethod
    def from_string(cls, text: str) -> "DnsForwarderConfig":
        """Analyse un texte de configuration de type resolv.conf.

        Les commentaires ordinaires, lignes vides et mots-cles
        resolv.conf inconnus (domain, options...) sont ignores.

        Args:
            text: Contenu du fichier de configuration.

        Returns:
            Instance de DnsForwarderConfig.

        Raises:
            DnsConfigurationError: Si une adresse, un port, un delai
                ou un seuil est invalide.
        """
        servers: List[DnsServer] = []
        search: Tuple[str, ...] = ()
        drops: Optional[int] = None
        zones: Tuple[str, ...] = ()
        timeout_ms: Optional[int] = None

        for line_no, line in enumerate(text.splitlines(), 1):
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.startswith("#"):
                words = stripped[1:].split()
                if not words:
                    continue
                directive, args = words[0].rstrip(":"), words[1:]
                if directive == "zone":
                    zones = _parse_domains(args, line_no)
                elif directive == "timeout":
                    timeout_ms = _parse_count(args, "timeout", line_no)
                elif directive == "assume_offline_after_drops":
                    drops = _parse_count(
                        args, "assume_offline_after_drops", line_no
                    )
                continue

            words = stripped.split()
            keyword, args = words[0], words[1:]
            if keyword == "nameserver":
                if len(args) != 1:
                    raise DnsConfigurationError(
                        f"ligne {line_no} : nameserver attend "
                        f"une adresse, recu {args!r}"
                    )
                address, port = _parse_server(args[0], line_no)
                server = DnsServer(
                    address=address,
                    port=port,
                    zones=zones,
                    timeout_ms=timeout_ms,
                    order=len(servers),
                )
                if not any(
                    _same_server(server, s) for s in servers
                ):
                    servers.append(server)
                zones, timeout_ms = (), None
            elif keyword == "search":
                search = _parse_domains(args, line_no)

        return cls(
            servers=tuple(servers),
            search=search,
            assume_offline_after_drops=drops,
        )


NO_DNS_SERVERS = DnsForwarderConfig()


def _same_server(a: DnsServer, b: DnsServer) -> bool:
    """Compare deux serveurs en ignorant leur position."""
    return (a.address, a.port, a.zones, a.timeout_ms) == (
        b.address, b.port, b.zones, b.timeout_ms
    )


def _parse_server(raw: str, line_no: int) -> Tuple[IPAddress, int]:
    """Decoupe "adresse[#port]" en adresse IP et port."""
    host, sep, port_text = raw.partition("#")
    try:
        address = ipaddress.ip_address(host)
    except ValueError as exc:
        raise DnsConfigurationError(
            f"ligne {line_no} : adresse de nameserver invalide {host!r}"
        ) from exc
    if not sep:
        return address, DEFAULT_DNS_PORT
    try:
        port = int(port_text)
    except ValueError as exc:
        raise DnsConfigurationError(
            f"ligne {line_no} : port invalide {port_text!r}"
        ) from exc
    if not 1 <= port <= 65535:
        raise DnsConfigurationError(
            f"ligne {line_no} : port hors plage (1-65535) : {port}"
        )
    return address, port


def _parse_count(args: List[str], name: str, line_no: int) -> int:
    """Lit l'entier positif unique d'une directive."""
    if len(args) != 1:
        raise DnsConfigurationError(
            f"ligne {line_no} : {name} attend un entier, recu {args!r}"
        )
    try:
        value = int(args[0])
    except ValueError as exc:
        raise DnsConfigurationError(
            f"ligne {line_no} : {name} invalide {args[0]!r}"
        ) from exc
    if value < 0:
        raise DnsConfigurationError(
            f"ligne {line_no} : {name} negatif : {value}"
        )
    return value


def _parse_domains(args: List[str], line_no: int) -> Tuple[str, ...]:
    """Valide une liste de domaines."""
    try:
        return tuple(validate_dns_name(a) for a in args)
    except ValueError as exc:
        raise DnsConfigurationError(f"ligne {line_no} : {exc}") from exc
