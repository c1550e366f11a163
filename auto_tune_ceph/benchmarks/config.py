"""Benchmark configuration."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

BENCH_TYPES = ("write", "seq", "rand")


@dataclass
class BenchmarkConfig:
    """Configuration for the throughput benchmark and its pool.

    Sizes are given in KiB and converted to bytes on the ``rados`` command line.
    """

    benchmark_type: str = "rados"  # provider name
    pool: str = "testbench"
    pool_pgs: int = 64  # pg_num and pgp_num of the benchmark pool
    seconds: int = 30
    bench_type: str = "write"  # "write", "seq" or "rand"
    concurrency: int = 4  # concurrent IOs
    block_size_kb: int = 4000
    object_size_kb: int = 4000
    score_label: str = "Average IOPS"
    timeout_seconds: Optional[float] = None  # kill rados bench after this long

    def __post_init__(self):
        """Validate benchmark configuration."""
        if self.bench_type not in BENCH_TYPES:
            raise ValueError(
                f"Invalid bench_type '{self.bench_type}'. Valid options: {BENCH_TYPES}"
            )
        for name in ("pool_pgs", "seconds", "concurrency", "block_size_kb", "object_size_kb"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"Benchmark '{name}' must be a positive integer, got {value!r}")
        if not self.pool:
            raise ValueError("Benchmark pool name must not be empty")
        if not self.score_label:
            raise ValueError("Benchmark score_label must not be empty")

    def merge_overrides(self, overrides: Dict[str, Any]) -> "BenchmarkConfig":
        """Return a new instance with the non-None ``overrides`` applied."""
        current_values = {
            field.name: getattr(self, field.name)
            for field in self.__dataclass_fields__.values()
        }
        current_values.update({k: v for k, v in overrides.items() if v is not None})
        return BenchmarkConfig(**current_values)

    @property
    def block_size_bytes(self) -> int:
        return self.block_size_kb * 1024

    @property
    def object_size_bytes(self) -> int:
        return self.object_size_kb * 1024

    @property
    def needs_prefill(self) -> bool:
        """Read benchmarks need objects written beforehand."""
        return self.bench_type in ("seq", "rand")
