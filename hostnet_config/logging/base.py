"""Interface abstraite pour le logging."""

from abc import ABC, abstractmethod


class Logger(ABC):
    """Interface pour le systeme de logging.

    Injectee explicitement dans chaque parseur : aucun logger global
    n'est utilise par la couche de parsing.
    """

    @abstractmethod
    def log_info(self, message: str) -> None:
        """Log un message d'information."""
        pass

    @abstractmethod
    def log_warning(self, message: str) -> None:
        """Log un avertissement."""
        pass

    @abstractmethod
    def log_error(self, message: str) -> None:
        """Log une erreur."""
        pass
