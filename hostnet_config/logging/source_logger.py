"""Implementation concrete du logger basee sur le module logging."""

import logging
import os
from typing import Any, Dict, Optional

from hostnet_config.logging.base import Logger

DEFAULT_SOURCE = "hostnet.configuration"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class SourceLogger(Logger):
    """
    Logger attache a une source nommee (ex: "hostnet.configuration").

    Caracteristiques:
    - Un logger par source, niveau INFO par defaut
    - Sortie console activee par defaut, fichier optionnel
    - Encodage UTF-8 explicite pour le fichier
    - Flush immediat apres chaque log
    - Pas de propagation (evite les logs en double)
    """

    def __init__(
        self,
        source: str = DEFAULT_SOURCE,
        config: Optional[Dict[str, Any]] = None,
        log_file: Optional[str] = None,
        console_output: bool = True
    ) -> None:
        """
        Initialise le logger.

        Args:
            source: Nom de la source de logs
            config: Configuration optionnelle
                    Cles supportees: logging.level, logging.format
            log_file: Chemin d'un fichier de log optionnel
            console_output: Activer la sortie console
        """
        self.source = source
        self.log_file = log_file

        logging_cfg = (config or {}).get("logging", {})
        log_level_str = str(logging_cfg.get("level", "INFO")).upper()
        log_format = logging_cfg.get("format", DEFAULT_FORMAT)
        log_level = getattr(logging, log_level_str, logging.INFO)

        self.logger = logging.getLogger(source)
        self.logger.setLevel(log_level)

        # Eviter les handlers dupliques
        if not self.logger.handlers:
            formatter = logging.Formatter(log_format)
            if log_file:
                log_dir = os.path.dirname(log_file)
                if log_dir and not os.path.exists(log_dir):
                    os.makedirs(log_dir, exist_ok=True)
                file_handler = logging.FileHandler(
                    log_file, encoding="utf-8"
                )
                file_handler.setLevel(log_level)
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)
            if console_output:
                console_handler = logging.StreamHandler()
                console_handler.setLevel(log_level)
                console_handler.setFormatter(formatter)
                self.logger.addHandler(console_handler)

        self.logger.propagate = False

    def _flush(self) -> None:
        """Force l'ecriture immediate de tous les handlers."""
        for handler in self.logger.handlers:
            handler.flush()

    def log_info(self, message: str) -> None:
        """Log un message d'information."""
        self.logger.info(message)
        self._flush()

    def log_warning(self, message: str) -> None:
        """Log un avertissement."""
        self.logger.warning(message)
        self._flush()

    def log_error(self, message: str) -> None:
        """Log une erreur."""
        self.logger.error(message)
        self._flush()
