"""Logging setup."""

from .handlers import LocalFileHandler
from .manager import SessionLogger

__all__ = [
    "SessionLogger",
    "LocalFileHandler",
]
