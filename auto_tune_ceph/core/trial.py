"""Trial data structures."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CurrentConfigValue:
    """A live option value as reported by ``ceph config show``."""

    name: str
    value: str
    source: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CurrentConfigValue:
        """Build from one entry of the JSON output, tolerating key case."""
        lowered = {str(k).lower(): v for k, v in data.items()}
        return cls(
            name=str(lowered.get("name", "")),
            value="" if lowered.get("value") is None else str(lowered["value"]),
            source="" if lowered.get("source") is None else str(lowered["source"]),
        )


@dataclass
class TrialRecord:
    """Outcome of one perturb/evaluate/decide cycle."""

    number: int
    option: str
    old_value: Optional[str]
    new_value: str
    score: float
    improved: bool
    highest_score: float
    started_at: float = field(default_factory=time.time)
    duration_seconds: Optional[float] = None

    def mark_completed(self):
        """Stamp the trial duration."""
        self.duration_seconds = time.time() - self.started_at

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
