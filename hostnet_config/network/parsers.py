"""Parseurs tolerants des champs de configuration.

Chaque parseur convertit une chaine brute en valeur typee et ne leve
jamais d'exception vers l'appelant : une entree invalide est
journalisee au niveau erreur via le Logger fourni, puis remplacee.

Contrats de repli :
- parse_ipv4, parse_ipv4_list, parse_macaddr, parse_host_names :
  retournent le defaut fourni par l'appelant.
- parse_int, parse_dns, parse_json : retournent toujours None,
  jamais un defaut de l'appelant.
- parse_resolver : classification silencieuse, sans erreur possible.
"""

import ipaddress
import json
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from hostnet_config.errors import DnsConfigurationError
from hostnet_config.logging.base import Logger
from hostnet_config.network.config import Resolver
from hostnet_config.network.dns_forward import DnsForwarderConfig
from hostnet_config.network.validators import (
    validate_dns_name,
    validate_ipv4,
    validate_mac,
)

T = TypeVar("T")


def parse_ipv4(
    raw: str,
    default: ipaddress.IPv4Address,
    logger: Logger,
) -> ipaddress.IPv4Address:
    """Analyse une adresse IPv4 pointee, espaces ignores.

    Args:
        raw: Texte brut.
        default: Valeur retournee si le texte est invalide.
        logger: Logger recevant l'erreur.

    Returns:
        L'adresse analysee ou default.
    """
    try:
        return validate_ipv4(raw.strip())
    except ValueError:
        logger.log_error(
            f"Echec du parsing de l'adresse IPv4 '{raw}', "
            f"utilisation du defaut {default}"
        )
        return default


def _parse_list(
    raw: str,
    convert: Callable[[str], T],
) -> Optional[List[T]]:
    """Convertit une liste separee par des virgules, tout ou rien.

    Returns:
        La liste convertie, ou None si un element est invalide.
    """
    segments = [s.strip() for s in raw.split(",")]
    try:
        return [convert(s) for s in segments if s]
    except ValueError:
        return None


def parse_ipv4_list(
    raw: str,
    default: Sequence[ipaddress.IPv4Address],
    logger: Logger,
) -> List[ipaddress.IPv4Address]:
    """Analyse une liste d'adresses IPv4 separees par des virgules.

    Les segments vides sont ignores ; l'ordre et les doublons sont
    conserves. Un seul segment invalide invalide toute la liste.

    Args:
        raw: Texte brut.
        default: Liste retournee si un segment est invalide.
        logger: Logger recevant l'erreur.

    Returns:
        Les adresses analysees ou default.
    """
    addresses = _parse_list(raw, validate_ipv4)
    if addresses is None:
        logger.log_error(
            f"Echec du parsing de la liste d'adresses IPv4 '{raw}', "
            f"utilisation du defaut {','.join(str(a) for a in default)}"
        )
        return list(default)
    return addresses


def parse_int(raw: Optional[str], logger: Logger) -> Optional[int]:
    """Analyse un entier en base 10.

    Le repli est toujours None, jamais un defaut de l'appelant.

    Args:
        raw: Texte brut, ou None si la source est absente.
        logger: Logger recevant l'erreur.

    Returns:
        L'entier, ou None si absent (sans log) ou invalide (avec log).
    """
    if raw is None:
        return None
    try:
        return int(raw.strip(), 10)
    except ValueError:
        logger.log_error(f"Echec du parsing de l'entier : '{raw}'")
        return None


def parse_resolver(raw: Optional[str]) -> Resolver:
    """Classe la strategie de resolution.

    Seule la valeur exacte "host" donne Resolver.HOST ; tout le
    reste, None et variantes de casse compris, donne
    Resolver.UPSTREAM sans journalisation.
    """
    if raw is not None and raw.strip() == Resolver.HOST.value:
        return Resolver.HOST
    return Resolver.UPSTREAM


def parse_dns(raw: str, logger: Logger) -> Optional[DnsForwarderConfig]:
    """Analyse un texte de configuration du forwarder DNS.

    Args:
        raw: Texte de configuration de type resolv.conf.
        logger: Logger recevant l'erreur.

    Returns:
        La configuration, ou None si le texte est invalide.
    """
    try:
        return DnsForwarderConfig.from_string(raw)
    except DnsConfigurationError as exc:
        logger.log_error(
            f"Echec du parsing de la configuration dns : {exc}"
        )
        return None


def parse_macaddr(raw: str, default: str, logger: Logger) -> str:
    """Analyse une adresse MAC (normalisee en minuscules).

    Args:
        raw: Texte brut.
        default: Valeur retournee si le texte est invalide.
        logger: Logger recevant l'erreur.

    Returns:
        L'adresse MAC ou default.
    """
    try:
        return validate_mac(raw.strip())
    except ValueError:
        logger.log_error(
            f"Echec du parsing de l'adresse MAC '{raw}', "
            f"utilisation du defaut {default}"
        )
        return default


def parse_host_names(
    raw: str,
    default: Sequence[str],
    logger: Logger,
) -> List[str]:
    """Analyse une liste de noms DNS separes par des virgules.

    Meme politique tout ou rien que parse_ipv4_list.
    """
    names = _parse_list(raw, validate_dns_name)
    if names is None:
        logger.log_error(
            f"Echec du parsing de la liste de noms DNS '{raw}', "
            f"utilisation du defaut {','.join(default)}"
        )
        return list(default)
    return names


def parse_json(raw: str, logger: Logger) -> Optional[Any]:
    """Analyse une valeur JSON opaque, transmise telle quelle.

    Args:
        raw: Texte JSON brut.
        logger: Logger recevant l'erreur.

    Returns:
        La valeur JSON, ou None si le texte est invalide.
    """
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        logger.log_error(f"Echec du parsing de la valeur json : {raw}")
        return None
