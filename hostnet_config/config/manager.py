"""Construction de la Configuration a partir des sources brutes."""

import dataclasses
import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from hostnet_config.config.loader import ConfigLoader, FileConfigLoader
from hostnet_config.logging.base import Logger
from hostnet_config.network.config import (
    DEFAULT_CONFIGURATION,
    Configuration,
    DhcpConfiguration,
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

DEFAULT_ENV_PREFIX = "HOSTNET_"

# Champs dont la valeur est lue depuis un fichier reference
_PATH_FIELDS = ("dns_path", "dhcp_json_path", "http_intercept_path")


def _to_raw(value: Any) -> Optional[str]:
    """Ramene une valeur de fichier de parametres a sa forme texte.

    Les listes sont jointes par des virgules, les objets serialises
    en JSON ; None signifie une source absente.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_to_raw(v) or "" for v in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


class ConfigurationLoader:
    """
    Construit une Configuration en surchargeant l'instance par defaut.

    Chaque parametre present passe par son parseur tolerant : une
    valeur invalide est journalisee et le champ garde sa valeur de
    base. Les fichiers references par dns_path, dhcp_json_path et
    http_intercept_path sont lus via le ConfigLoader injecte.

    Seule exception propagee : DhcpConfigurationError, lorsqu'une cle
    DHCP presente a un type JSON incorrect.
    """

    def __init__(
        self,
        logger: Logger,
        file_loader: Optional[ConfigLoader] = None,
        base: Configuration = DEFAULT_CONFIGURATION,
    ) -> None:
        """
        Initialise le chargeur.

        Args:
            logger: Logger transmis a chaque parseur
            file_loader: Chargeur de fichiers (FileConfigLoader par defaut)
            base: Configuration de depart (defaut canonique)
        """
        self._logger = logger
        self._file_loader = file_loader or FileConfigLoader()
        self._base = base
        self._parsers: Dict[str, Callable[[str], Dict[str, Any]]] = {
            "server_macaddr": self._parse_server_macaddr,
            "max_connections": self._parse_max_connections,
            "dns": self._parse_dns,
            "dns_path": self._load_dns_path,
            "resolver": self._parse_resolver,
            "domain": self._parse_domain,
            "allowed_bind_addresses": self._ipv4_list_parser(
                "allowed_bind_addresses"
            ),
            "gateway_ip": self._ipv4_parser("gateway_ip"),
            "lowest_ip": self._ipv4_parser("lowest_ip"),
            "highest_ip": self._ipv4_parser("highest_ip"),
            "extra_dns": self._ipv4_list_parser("extra_dns"),
            "dhcp_configuration": self._parse_dhcp_configuration,
            "dhcp_json_path": self._load_dhcp_json_path,
            "mtu": self._int_parser("mtu"),
            "http_intercept": self._parse_http_intercept,
            "http_intercept_path": self._load_http_intercept_path,
            "port_max_idle_time": self._int_parser("port_max_idle_time"),
            "host_names": self._parse_host_names,
        }

    def load(self, settings: Mapping[str, Any]) -> Configuration:
        """
        Construit la configuration depuis des parametres bruts.

        Args:
            settings: Parametres indexes par nom de champ ; valeurs
                textuelles (les autres scalaires sont convertis)

        Returns:
            Nouvelle instance de Configuration
        """
        updates: Dict[str, Any] = {}
        # Les fichiers references passent apres les valeurs en ligne
        ordered = sorted(
            settings.items(), key=lambda item: item[0] in _PATH_FIELDS
        )
        for key, value in ordered:
            raw = _to_raw(value)
            if raw is None:
                continue
            parser = self._parsers.get(key)
            if parser is None:
                self._logger.log_warning(
                    f"Parametre de configuration inconnu ignore : {key}"
                )
                continue
            updates.update(parser(raw))

        configuration = dataclasses.replace(self._base, **updates)
        self._logger.log_info(
            f"Configuration : {configuration.to_string()}"
        )
        return configuration

    def load_environment(
        self,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = DEFAULT_ENV_PREFIX,
    ) -> Configuration:
        """
        Construit la configuration depuis des variables d'environnement.

        HOSTNET_GATEWAY_IP alimente gateway_ip, etc.

        Args:
            environ: Variables (os.environ par defaut)
            prefix: Prefixe des variables prises en compte

        Returns:
            Nouvelle instance de Configuration
        """
        environ = os.environ if environ is None else environ
        settings = {
            name[len(prefix):].lower(): value
            for name, value in environ.items()
            if name.startswith(prefix)
        }
        return self.load(settings)

    def load_file(self, config_path: Union[str, Path]) -> Configuration:
        """
        Construit la configuration depuis un fichier TOML ou JSON.

        Args:
            config_path: Chemin du fichier de parametres

        Returns:
            Nouvelle instance de Configuration

        Raises:
            FileConfigurationError: Si le fichier est absent ou invalide
        """
        return self.load(self._file_loader.load(config_path))

    def _read_source(self, path: str) -> Optional[str]:
        """Lit un fichier reference ; None (journalise) si illisible."""
        try:
            return self._file_loader.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            self._logger.log_error(
                f"Lecture impossible de {path} : {exc}"
            )
            return None

    def _parse_server_macaddr(self, raw: str) -> Dict[str, Any]:
        return {
            "server_macaddr": parse_macaddr(
                raw, self._base.server_macaddr, self._logger
            )
        }

    def _parse_max_connections(self, raw: str) -> Dict[str, Any]:
        return {"max_connections": parse_int(raw, self._logger)}

    def _parse_dns(self, raw: str) -> Dict[str, Any]:
        dns = parse_dns(raw, self._logger)
        return {} if dns is None else {"dns": dns}

    def _load_dns_path(self, raw: str) -> Dict[str, Any]:
        updates: Dict[str, Any] = {"dns_path": raw}
        text = self._read_source(raw)
        if text is not None:
            updates.update(self._parse_dns(text))
        return updates

    def _parse_resolver(self, raw: str) -> Dict[str, Any]:
        return {"resolver": parse_resolver(raw)}

    def _parse_domain(self, raw: str) -> Dict[str, Any]:
        return {"domain": raw.strip() or None}

    def _parse_dhcp_configuration(self, raw: str) -> Dict[str, Any]:
        return {
            "dhcp_configuration": DhcpConfiguration.from_string(
                raw, self._logger
            )
        }

    def _load_dhcp_json_path(self, raw: str) -> Dict[str, Any]:
        updates: Dict[str, Any] = {"dhcp_json_path": raw}
        text = self._read_source(raw)
        if text is not None:
            updates.update(self._parse_dhcp_configuration(text))
        return updates

    def _parse_http_intercept(self, raw: str) -> Dict[str, Any]:
        return {"http_intercept": parse_json(raw, self._logger)}

    def _load_http_intercept_path(self, raw: str) -> Dict[str, Any]:
        updates: Dict[str, Any] = {"http_intercept_path": raw}
        text = self._read_source(raw)
        if text is not None:
            updates.update(self._parse_http_intercept(text))
        return updates

    def _parse_host_names(self, raw: str) -> Dict[str, Any]:
        return {
            "host_names": parse_host_names(
                raw, self._base.host_names, self._logger
            )
        }

    def _ipv4_parser(self, name: str) -> Callable[[str], Dict[str, Any]]:
        """Parseur d'une adresse IPv4, repli sur la valeur de base."""
        def parse(raw: str) -> Dict[str, Any]:
            default = getattr(self._base, name)
            return {name: parse_ipv4(raw, default, self._logger)}
        return parse

    def _ipv4_list_parser(
        self, name: str
    ) -> Callable[[str], Dict[str, Any]]:
        """Parseur d'une liste IPv4, repli sur la valeur de base."""
        def parse(raw: str) -> Dict[str, Any]:
            default = getattr(self._base, name)
            return {name: parse_ipv4_list(raw, default, self._logger)}
        return parse

    def _int_parser(self, name: str) -> Callable[[str], Dict[str, Any]]:
        """Parseur d'un entier obligatoire : None devient la valeur de base."""
        def parse(raw: str) -> Dict[str, Any]:
            value = parse_int(raw, self._logger)
            return {} if value is None else {name: value}
        return parse
