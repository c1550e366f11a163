"""Logging setup for tuning sessions."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.logging import RichHandler

from .handlers import LocalFileHandler

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "debug.log"


class SessionLogger:
    """Console logging through rich plus a debug log file.

    The console shows INFO and above (DEBUG when verbose); the file gets
    every record.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        file_path: Optional[str] = DEFAULT_LOG_FILE,
        log_level: str = "INFO",
        verbose: bool = False,
    ):
        self.console = console or Console()
        self.file_path = file_path
        self.log_level = logging.DEBUG if verbose else getattr(logging, log_level.upper())
        self.handlers: List[logging.Handler] = []

    @classmethod
    def from_config(
        cls,
        logging_config: Optional[Dict[str, Any]],
        console: Optional[Console] = None,
        file_path: Optional[str] = None,
        verbose: bool = False,
    ) -> SessionLogger:
        """Build from the ``logging`` section of a configuration file.

        An explicit ``file_path`` wins over the configured one.
        """
        logging_config = logging_config or {}
        return cls(
            console=console,
            file_path=file_path or logging_config.get("file_path", DEFAULT_LOG_FILE),
            log_level=logging_config.get("log_level", "INFO"),
            verbose=verbose,
        )

    def setup(self) -> SessionLogger:
        """Attach handlers to the root logger."""
        root = logging.getLogger()
        root.setLevel(logging.DEBUG)

        console_handler = RichHandler(rich_tracebacks=True, console=self.console)
        console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        console_handler.setLevel(self.log_level)
        self.handlers.append(console_handler)

        if self.file_path:
            file_handler = LocalFileHandler(self.file_path)
            file_handler.setLevel(logging.DEBUG)
            self.handlers.append(file_handler)

        for handler in self.handlers:
            root.addHandler(handler)

        if self.file_path:
            logger.debug(f"Debug log is written to {self.file_path}")
        return self

    def close(self):
        """Detach and close the handlers added by setup()."""
        root = logging.getLogger()
        for handler in self.handlers:
            root.removeHandler(handler)
            try:
                handler.close()
            except Exception as e:
                logger.warning(f"Failed to close log handler {handler}: {e}")
        self.handlers.clear()

    def __enter__(self) -> SessionLogger:
        return self.setup()

    def __exit__(self, exc_type, exc, tb):
        self.close()
