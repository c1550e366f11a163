"""Control surfaces for the cluster under test."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional

from ..benchmarks import BENCHMARK_PROVIDERS, BenchmarkConfig, BenchmarkProvider
from ..core.config import ClusterConfig
from ..core.errors import CommandError
from ..core.trial import CurrentConfigValue
from ..utils.commands import CommandRunner, run_command

logger = logging.getLogger(__name__)


class ControlSurface(ABC):
    """Everything the search loop needs from the system being tuned.

    Only ``run_benchmark`` may raise; the other calls log their failures
    and return a neutral value.
    """

    @abstractmethod
    def apply_option(self, name: str, value: str) -> bool:
        """Set a live option. Returns False if the cluster rejected it."""
        pass

    @abstractmethod
    def read_option(self, name: str) -> str:
        """Current live value of an option, or "" if it cannot be read."""
        pass

    @abstractmethod
    def snapshot_config(self) -> List[CurrentConfigValue]:
        """Full current configuration, or [] if it cannot be read."""
        pass

    @abstractmethod
    def run_benchmark(self) -> float:
        """Benchmark the cluster. Raises BenchmarkError on failure."""
        pass

    @abstractmethod
    def create_pool(self):
        """Create the ephemeral benchmark pool."""
        pass

    @abstractmethod
    def destroy_pool(self):
        """Remove the benchmark pool."""
        pass

    @contextmanager
    def benchmark_pool(self) -> Iterator[ControlSurface]:
        """Hold the benchmark pool for the duration of the block.

        The pool is destroyed on every exit path, including a failed creation.
        """
        try:
            self.create_pool()
            yield self
        finally:
            self.destroy_pool()


class CephControlSurface(ControlSurface):
    """Drives a Ceph cluster through the ``ceph`` and ``rados`` CLIs."""

    def __init__(
        self,
        cluster: Optional[ClusterConfig] = None,
        benchmark: Optional[BenchmarkConfig] = None,
        provider: Optional[BenchmarkProvider] = None,
        runner: Optional[CommandRunner] = None,
    ):
        self.cluster = cluster or ClusterConfig()
        self.benchmark = benchmark or BenchmarkConfig()
        self._runner = runner or run_command
        self.provider = provider or self._create_benchmark_provider()

    def _create_benchmark_provider(self) -> BenchmarkProvider:
        benchmark_type = self.benchmark.benchmark_type
        provider_class = BENCHMARK_PROVIDERS.get(benchmark_type)
        if provider_class is None:
            raise ValueError(
                f"Unknown benchmark type '{benchmark_type}'. "
                f"Valid options: {sorted(BENCHMARK_PROVIDERS)}"
            )
        return provider_class(
            self.benchmark, rados_binary=self.cluster.rados_binary, runner=self._runner
        )

    def _ceph(self, *arguments: str) -> str:
        return self._runner(
            self.cluster.ceph_binary, list(arguments), timeout=self.cluster.command_timeout
        )

    def apply_option(self, name: str, value: str) -> bool:
        try:
            self._ceph("tell", self.cluster.inject_target, "injectargs", f"--{name}={value}")
        except CommandError as e:
            logger.error(f"Issues setting value {name} to {value}: {e}")
            return False
        return True

    def read_option(self, name: str) -> str:
        try:
            output = self._ceph("config", "get", self.cluster.daemon, name)
        except CommandError as e:
            logger.error(
                f"Cannot execute ceph command to get current value for {name}: {e}"
            )
            return ""
        return output.strip()

    def snapshot_config(self) -> List[CurrentConfigValue]:
        daemon = self.cluster.daemon
        try:
            output = self._ceph("config", "show", daemon, "-f", "json")
        except CommandError as e:
            logger.error(
                f"Cannot execute ceph command to get current config for {daemon}: {e}"
            )
            return []

        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            logger.error(f"Cannot parse current config of {daemon}: {e}")
            return []

        if not isinstance(data, list):
            logger.error(
                f"Unexpected config format for {daemon}: expected a list, "
                f"got {type(data).__name__}"
            )
            return []

        return [CurrentConfigValue.from_dict(entry) for entry in data if isinstance(entry, dict)]

    def run_benchmark(self) -> float:
        return self.provider.run_benchmark()

    def create_pool(self):
        pool = self.benchmark.pool
        pgs = str(self.benchmark.pool_pgs)
        logger.info(f"Creating benchmark pool {pool} with {pgs} placement groups")
        for arguments in (
            ("osd", "pool", "create", pool, pgs, pgs),
            ("osd", "pool", "application", "enable", pool, "rbd"),
        ):
            try:
                self._ceph(*arguments)
            except CommandError as e:
                logger.error(f"Issues setting up benchmark pool {pool}: {e}")
        self.provider.prepare()

    def destroy_pool(self):
        pool = self.benchmark.pool
        logger.info(f"Removing benchmark pool {pool}")
        for arguments in (
            ("tell", "mon.*", "injectargs", "--mon_allow_pool_delete", "true"),
            ("osd", "pool", "delete", pool, pool, "--yes-i-really-really-mean-it"),
        ):
            try:
                self._ceph(*arguments)
            except CommandError as e:
                logger.error(f"Issues removing benchmark pool {pool}: {e}")
