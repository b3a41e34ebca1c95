"""Module de logging."""

from hostnet_config.logging.base import Logger
from hostnet_config.logging.source_logger import SourceLogger

__all__ = [
    "Logger",
    "SourceLogger",
]
