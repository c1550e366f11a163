"""Benchmark providers and interfaces."""

from .config import BenchmarkConfig
from .providers import BenchmarkProvider, RadosBenchmark

# Registry for provider lookup by BenchmarkConfig.benchmark_type
BENCHMARK_PROVIDERS = {
    "rados": RadosBenchmark,
}

__all__ = [
    "BenchmarkProvider",
    "RadosBenchmark",
    "BenchmarkConfig",
    "BENCHMARK_PROVIDERS",
]
