"""Thin wrapper around the ceph/rados command line tools."""

from __future__ import annotations

import logging
import subprocess
from typing import Callable, Optional, Sequence

from ..core.errors import CommandError

logger = logging.getLogger(__name__)

# ceph exits with EINVAL for e.g. `config get` on an option the daemon
# does not know; the output is still usable.
TOLERATED_EXIT_CODES = frozenset({22})

CommandRunner = Callable[[str, Sequence[str]], str]


def run_command(
    command: str, arguments: Sequence[str], timeout: Optional[float] = None
) -> str:
    """Run ``command`` with ``arguments`` and return its stdout.

    Raises:
        CommandError: the binary is missing, timed out or exited non-zero
            with a status other than the tolerated ones.
    """
    cmd = [command, *arguments]
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        process = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CommandError(f"Command not found: {command}") from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(
            f"Command timed out after {timeout}s: {' '.join(cmd)}"
        ) from e

    if process.returncode != 0 and process.returncode not in TOLERATED_EXIT_CODES:
        stderr = (process.stderr or "").strip()
        raise CommandError(
            f"Issues executing command {' '.join(cmd)} "
            f"(exit status {process.returncode}): {stderr}",
            returncode=process.returncode,
            output=process.stdout or "",
        )

    if process.returncode in TOLERATED_EXIT_CODES:
        logger.debug(
            f"Command {' '.join(cmd)} exited with tolerated status {process.returncode}"
        )
    return process.stdout or ""
