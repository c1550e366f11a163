"""Benchmark provider implementations."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional

from typing_extensions import override

from ..core.errors import BenchmarkError, CommandError
from ..utils.commands import CommandRunner, run_command
from .config import BenchmarkConfig

logger = logging.getLogger(__name__)

# Integers and floats, e.g. "Average IOPS:           183"
NUMBER_PATTERN = re.compile(r"[-+]?[0-9]*\.?[0-9]+")


class BenchmarkProvider(ABC):
    """Abstract benchmark provider interface."""

    def __init__(self, config: BenchmarkConfig, runner: Optional[CommandRunner] = None):
        self.config = config
        self._runner = runner or run_command
        self._logger = logger  # Default to module logger

    def set_logger(self, custom_logger):
        """Set a custom logger for this benchmark provider."""
        self._logger = custom_logger

    def prepare(self):
        """Hook run once after the benchmark pool exists."""

    @abstractmethod
    def run_benchmark(self) -> float:
        """
        Run the benchmark to completion and return its score.

        Raises:
            BenchmarkError: the benchmark failed or produced no score.
        """
        pass

    def parse_score(self, output: str) -> float:
        """
        Extract the score from benchmark output.

        The first line containing ``config.score_label`` wins; its first
        number is the score.
        """
        label = self.config.score_label
        for line in output.splitlines():
            if label not in line:
                continue
            # Search after the label so digits in the label itself are skipped
            match = NUMBER_PATTERN.search(line, line.index(label) + len(label))
            if match is None:
                raise BenchmarkError(f"No number on score line: {line.strip()!r}")
            return float(match.group())
        raise BenchmarkError(f"Could not find '{label}' in benchmark output")


class RadosBenchmark(BenchmarkProvider):
    """``rados bench`` against the dedicated benchmark pool."""

    def __init__(
        self,
        config: BenchmarkConfig,
        rados_binary: str = "/usr/bin/rados",
        runner: Optional[CommandRunner] = None,
    ):
        super().__init__(config, runner)
        self.rados_binary = rados_binary

    def build_command(self, bench_type: Optional[str] = None, no_cleanup: bool = False) -> List[str]:
        """Arguments for one ``rados bench`` run."""
        config = self.config
        args = [
            "bench",
            "-p", config.pool,
            str(config.seconds),
            bench_type or config.bench_type,
            "-t", str(config.concurrency),
            "-b", str(config.block_size_bytes),
            "-O", str(config.object_size_bytes),
        ]
        if no_cleanup:
            args.append("--no-cleanup")
        return args

    @override
    def prepare(self):
        """Seed the pool with objects so read benchmarks have data."""
        if not self.config.needs_prefill:
            return
        self._logger.info(
            f"Writing benchmark objects to pool {self.config.pool} "
            f"for {self.config.bench_type} benchmarks"
        )
        try:
            self._runner(
                self.rados_binary,
                self.build_command("write", no_cleanup=True),
                timeout=self.config.timeout_seconds,
            )
        except CommandError as e:
            raise BenchmarkError(f"Could not prefill benchmark pool: {e}") from e

    @override
    def run_benchmark(self) -> float:
        args = self.build_command()
        self._logger.debug(f"Running: {self.rados_binary} {' '.join(args)}")
        try:
            output = self._runner(
                self.rados_binary, args, timeout=self.config.timeout_seconds
            )
        except CommandError as e:
            self._logger.error(f"Error getting score: {e}")
            raise BenchmarkError(f"rados bench failed: {e}") from e

        score = self.parse_score(output)
        self._logger.debug(f"Benchmark score: {score}")
        return score
