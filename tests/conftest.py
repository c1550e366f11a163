"""Shared test fixtures for the auto-tune-ceph test suite."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

import pytest

from auto_tune_ceph.core.errors import BenchmarkError
from auto_tune_ceph.core.trial import CurrentConfigValue
from auto_tune_ceph.execution.backends import ControlSurface


class FakeControlSurface(ControlSurface):
    """In-memory cluster that records every call.

    ``scores`` is either a sequence consumed one per benchmark (the last
    value repeats) or a callable receiving the live config. An exception
    instance in the sequence is raised instead of returned.
    """

    def __init__(
        self,
        scores: Union[Sequence[Union[float, Exception]], Callable[[Dict[str, str]], float]] = (0.0,),
        initial: Optional[Dict[str, str]] = None,
        unreadable: Iterable[str] = (),
    ):
        self.scores = scores
        self.live: Dict[str, str] = dict(initial or {})
        self.unreadable = set(unreadable)
        self.calls: List[tuple] = []
        self.benchmarks = 0

    def apply_option(self, name: str, value: str) -> bool:
        self.calls.append(("apply", name, value))
        self.live[name] = value
        return True

    def read_option(self, name: str) -> str:
        self.calls.append(("read", name))
        if name in self.unreadable:
            return ""
        return self.live.get(name, "")

    def snapshot_config(self) -> List[CurrentConfigValue]:
        self.calls.append(("snapshot",))
        return [
            CurrentConfigValue(name=name, value=value, source="override")
            for name, value in sorted(self.live.items())
        ]

    def run_benchmark(self) -> float:
        self.calls.append(("benchmark",))
        self.benchmarks += 1
        if callable(self.scores):
            return self.scores(dict(self.live))
        index = min(self.benchmarks - 1, len(self.scores) - 1)
        score = self.scores[index]
        if isinstance(score, Exception):
            raise score
        return score

    def create_pool(self):
        self.calls.append(("create_pool",))

    def destroy_pool(self):
        self.calls.append(("destroy_pool",))

    def count(self, kind: str) -> int:
        return sum(1 for call in self.calls if call[0] == kind)


@pytest.fixture
def fake_control():
    return FakeControlSurface


@pytest.fixture
def failing_benchmark():
    return BenchmarkError("could not find score in output")


@pytest.fixture
def no_sleep():
    """Sleep replacement that records the requested delays."""
    delays: List[float] = []

    def sleep(seconds: float):
        delays.append(seconds)

    sleep.delays = delays
    return sleep
