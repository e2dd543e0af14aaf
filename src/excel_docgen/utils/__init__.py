"""Utility modules for the Excel documentation toolkit."""

from .config import Config, get_config
from .logging import get_logger

__all__ = [
    "Config",
    "get_config",
    "get_logger",
]
