"""Fonctions de validation pour les donnees reseau.

Ce module fournit des validateurs pour les adresses IPv4,
les adresses MAC et les noms DNS. Ils levent ValueError ;
la tolerance aux erreurs est du ressort des parseurs.
"""

import ipaddress
import re


def validate_ipv4(ip: str) -> ipaddress.IPv4Address:
    """Valide et convertit une adresse IPv4 pointee.

    Args:
        ip: Adresse IPv4 sous forme de chaine.

    Returns:
        L'adresse IPv4 validee.

    Raises:
        ValueError: Si l'adresse est invalide.
    """
    try:
        return ipaddress.IPv4Address(ip)
    except ipaddress.AddressValueError as exc:
        raise ValueError(f"Adresse IPv4 invalide : {ip!r}") from exc


def validate_mac(mac: str) -> str:
    """Valide et normalise une adresse MAC.

    Args:
        mac: Adresse MAC sous forme de chaine.

    Returns:
        L'adresse MAC normalisee en minuscules.

    Raises:
        ValueError: Si l'adresse MAC est invalide.
    """
    pattern = r"^([0-9a-fA-F]{2}:){5}[0-9a-fA-F]{2}$"
    if not re.match(pattern, mac):
        raise ValueError(f"Adresse MAC invalide : {mac!r}")
    return mac.lower()


def validate_dns_name(name: str) -> str:
    """Valide un nom DNS (un ou plusieurs labels).

    Chaque label suit la RFC 1123 ; un point final est retire.

    Args:
        name: Nom DNS a valider.

    Returns:
        Le nom DNS sans point final.

    Raises:
        ValueError: Si le nom est vide, trop long ou invalide.
    """
    if name.endswith("."):
        name = name[:-1]
    if not name:
        raise ValueError("Le nom DNS ne peut pas etre vide")
    if len(name) > 253:
        raise ValueError(
            f"Nom DNS trop long ({len(name)} > 253) : {name!r}"
        )
    pattern = r"^[a-zA-Z0-9_]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$"
    for label in name.split("."):
        if not re.match(pattern, label):
            raise ValueError(
                f"Label DNS invalide {label!r} dans {name!r}"
            )
    return name
