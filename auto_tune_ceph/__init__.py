"""
Auto-Tune Ceph: hill-climbing search over live Ceph OSD options.

This package provides:
- Option catalogs loaded from YAML with load-time validation
- A single-option greedy search driven by rados bench throughput
- A Ceph control surface built on the ceph/rados command line tools
"""

__version__ = "0.1.0"

# Main public API
from .benchmarks.providers import BenchmarkProvider, RadosBenchmark
from .core.config import SearchSettings, TunerConfig
from .core.parameters import ConfigOption
from .core.search import SearchController
from .execution.backends import CephControlSurface, ControlSurface

__all__ = [
    "SearchController",
    "SearchSettings",
    "TunerConfig",
    "ConfigOption",
    "ControlSurface",
    "CephControlSurface",
    "BenchmarkProvider",
    "RadosBenchmark",
]
