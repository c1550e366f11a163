"""Exception hierarchy for auto-tune-ceph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .results import SearchResult


class AutoTuneCephError(Exception):
    """Root of all auto-tune-ceph errors."""


class CatalogError(AutoTuneCephError):
    """The option catalog could not be loaded or failed validation."""


class CommandError(AutoTuneCephError):
    """An external cluster command failed."""

    def __init__(self, message: str, returncode: int | None = None, output: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class BenchmarkError(AutoTuneCephError):
    """The benchmark did not produce a score."""


class SearchAbortedError(AutoTuneCephError):
    """The search stopped on a fatal error.

    ``result`` holds the best configuration found before the abort.
    """

    def __init__(self, reason: str, result: SearchResult):
        super().__init__(reason)
        self.reason = reason
        self.result = result
