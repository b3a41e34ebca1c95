"""
Module contenant les exceptions personnalisees pour hostnet_config.

Ce module suit le principe SRP en isolant la gestion des exceptions.
"""


class ApplicationError(Exception):
    """Exception de base pour toute l'application."""
    pass


class ConfigurationError(ApplicationError):
    """Exception de base pour toutes les configurations."""
    pass


class FileConfigurationError(ConfigurationError):
    """Fichier de configuration absent, illisible ou non supporte."""
    pass


class DnsConfigurationError(ConfigurationError, ValueError):
    """Texte de configuration du forwarder DNS invalide."""
    pass


class DhcpConfigurationError(ConfigurationError, ValueError):
    """Cle DHCP presente avec un type JSON incorrect."""
    pass
