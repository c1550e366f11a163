"""Core components for auto-tune-ceph."""

from .config import ClusterConfig, SearchSettings, TunerConfig
from .parameters import ConfigOption, OptionType
from .results import ResultTracker, SearchResult
from .search import SearchController
from .trial import CurrentConfigValue, TrialRecord

__all__ = [
    "SearchController",
    "SearchSettings",
    "ClusterConfig",
    "TunerConfig",
    "ConfigOption",
    "OptionType",
    "ResultTracker",
    "SearchResult",
    "CurrentConfigValue",
    "TrialRecord",
]
