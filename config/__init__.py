"""Application configuration."""

from .settings import Settings
from .logging_config import configure_logging

__all__ = ["Settings", "configure_logging"]
