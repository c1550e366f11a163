"""Best-configuration tracking and reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from .trial import CurrentConfigValue, TrialRecord


def format_config(config: Iterable[CurrentConfigValue]) -> List[str]:
    """Render a snapshot as ``name = value`` lines, keeping its order."""
    return [f"{entry.name} = {entry.value}" for entry in config]


class ResultTracker:
    """Holds the best score and the full snapshot that produced it."""

    def __init__(self):
        self._best: Tuple[float, Tuple[CurrentConfigValue, ...]] = (0.0, ())

    @property
    def best_score(self) -> float:
        return self._best[0]

    @property
    def best_config(self) -> Tuple[CurrentConfigValue, ...]:
        return self._best[1]

    def record(self, score: float, config: Iterable[CurrentConfigValue]):
        """Replace the tracked best with ``score`` and ``config`` in one step."""
        self._best = (float(score), tuple(config))

    def report(self) -> List[str]:
        return format_config(self.best_config)


@dataclass
class SearchResult:
    """Final (or partial, on abort) outcome of a search."""

    highest_score: float = 0.0
    best_config: Tuple[CurrentConfigValue, ...] = ()
    trials: int = 0
    history: List[TrialRecord] = field(default_factory=list)

    @property
    def attempted(self) -> bool:
        """False when the search never ran a trial."""
        return self.trials > 0

    @property
    def found_improvement(self) -> bool:
        return any(record.improved for record in self.history)

    def report(self) -> List[str]:
        return format_config(self.best_config)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "highest_score": self.highest_score,
            "trials": self.trials,
            "best_config": [
                {"name": entry.name, "value": entry.value, "source": entry.source}
                for entry in self.best_config
            ],
            "history": [record.to_dict() for record in self.history],
        }
