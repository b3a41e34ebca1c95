"""Chargement des sources de configuration brutes."""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Union

from hostnet_config.errors import FileConfigurationError


class ConfigLoader(ABC):
    """
    Interface abstraite pour le chargement de configuration.

    Permet l'injection de dependance et facilite les tests
    en permettant de substituer l'implementation reelle par un mock.
    """

    @abstractmethod
    def load(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Charge un fichier de parametres.

        Args:
            config_path: Chemin vers le fichier de parametres

        Returns:
            Dictionnaire des parametres bruts

        Raises:
            FileConfigurationError: Si le fichier est absent, illisible
                ou d'un format non supporte
        """
        pass

    @abstractmethod
    def read_text(self, path: Union[str, Path]) -> str:
        """
        Lit le contenu texte d'un fichier reference par un parametre.

        Args:
            path: Chemin du fichier (dns_path, dhcp_json_path, ...)

        Returns:
            Contenu du fichier

        Raises:
            OSError: Si le fichier ne peut pas etre lu
            UnicodeDecodeError: Si le contenu n'est pas du texte UTF-8
        """
        pass


class FileConfigLoader(ConfigLoader):
    """
    Implementation du chargeur depuis le systeme de fichiers.

    Supporte les formats TOML et JSON, detectes automatiquement
    par l'extension du fichier.
    """

    def load(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Charge un fichier de parametres TOML ou JSON.

        Args:
            config_path: Chemin vers le fichier de parametres

        Returns:
            Dictionnaire des parametres bruts

        Raises:
            FileConfigurationError: Si le fichier n'existe pas, si
                l'extension n'est pas supportee ou si le contenu est
                invalide
        """
        path = Path(config_path)

        if not path.exists():
            raise FileConfigurationError(
                f"Fichier de configuration non trouve: {path}"
            )

        suffix = path.suffix.lower()

        try:
            if suffix == ".toml":
                with open(path, "rb") as f:
                    raw_config = tomllib.load(f)
            elif suffix == ".json":
                with open(path, "r", encoding="utf-8") as f:
                    raw_config = json.load(f)
            else:
                raise FileConfigurationError(
                    f"Extension non supportee: {suffix}. "
                    "Utilisez .toml ou .json"
                )
        except (
            tomllib.TOMLDecodeError,
            json.JSONDecodeError,
            UnicodeDecodeError,
        ) as exc:
            raise FileConfigurationError(
                f"Fichier de configuration invalide {path}: {exc}"
            ) from exc
        except OSError as exc:
            raise FileConfigurationError(
                f"Lecture impossible du fichier {path}: {exc}"
            ) from exc

        if not isinstance(raw_config, dict):
            raise FileConfigurationError(
                f"Le fichier {path} doit contenir un objet, "
                f"recu {type(raw_config).__name__}"
            )
        return raw_config

    def read_text(self, path: Union[str, Path]) -> str:
        """Lit un fichier texte en UTF-8."""
        return Path(path).read_text(encoding="utf-8")
