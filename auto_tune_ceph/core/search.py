"""Single-option hill climbing over live cluster options."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence, Tuple

from .candidates import generate_candidate
from .config import SearchSettings, TunerConfig
from .errors import BenchmarkError, CatalogError, SearchAbortedError
from .parameters import ConfigOption
from .results import ResultTracker, SearchResult
from .trial import CurrentConfigValue, TrialRecord

if TYPE_CHECKING:
    from ..execution.backends import ControlSurface

logger = logging.getLogger(__name__)


@dataclass
class SearchState:
    """Mutable state of one search run."""

    highest_score: float = 0.0
    best_config: Tuple[CurrentConfigValue, ...] = ()
    stall_count: int = 0
    trials: int = 0
    history: List[TrialRecord] = field(default_factory=list)
    # last value this search put in place per option: start value or kept candidate
    committed: Dict[str, str] = field(default_factory=dict)


class SearchController:
    """Greedy local search that perturbs one random option per trial.

    A trial reads the option's live value, applies a fresh candidate and
    benchmarks the cluster. A strictly higher score keeps the change and
    snapshots the whole configuration; anything else reverts the option.
    Every trial is charged against the stall budget after its decision, an
    improvement first resetting the count, so the search stops after
    ``settings.timeout`` attempts without a new best.
    """

    def __init__(
        self,
        control: ControlSurface,
        options: Sequence[ConfigOption],
        settings: Optional[SearchSettings] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.control = control
        self.options: Tuple[ConfigOption, ...] = tuple(options)
        self.settings = settings or SearchSettings()
        self.rng = rng or random.Random(self.settings.seed)
        self._sleep = sleep
        self.tracker = ResultTracker()
        self.state = SearchState()

    @classmethod
    def create_from_config(
        cls, control: ControlSurface, config: TunerConfig, **kwargs
    ) -> SearchController:
        """Create a controller from a loaded configuration."""
        return cls(control, config.options, config.search, **kwargs)

    def run(self) -> SearchResult:
        """Run the whole search inside a benchmark pool.

        Raises:
            CatalogError: the catalog is empty; nothing is touched.
            SearchAbortedError: benchmarking failed. The pool is released
                and the error carries the best result found so far.
        """
        if not self.options:
            raise CatalogError("You need to supply at least one config option")

        logger.info(
            "All config options that will be used to optimize Ceph: "
            f"{[option.name for option in self.options]}"
        )
        self.state = SearchState()
        self.tracker = ResultTracker()

        try:
            with self.control.benchmark_pool():
                self.apply_start_values()
                self._search()
        except BenchmarkError as e:
            logger.error(f"Cannot get new score - aborting search: {e}")
            partial = self.result()
            log_best_config(partial)
            raise SearchAbortedError(str(e), partial) from e

        logger.info(
            f"Search has ended after {self.settings.timeout} tries "
            f"without finding a better config"
        )
        result = self.result()
        log_best_config(result)
        return result

    def apply_start_values(self):
        """Apply every non-empty start value once, in catalog order."""
        for option in self.options:
            if option.start_value is None:
                continue
            logger.debug(f"Setting {option.name} to start value {option.start_value}")
            self.control.apply_option(option.name, option.start_value)
            self.state.committed[option.name] = option.start_value

    def _search(self):
        state = self.state
        while state.stall_count < self.settings.timeout:
            self.run_trial()
            state.stall_count += 1
            self._sleep(self.settings.settle_seconds)

    def run_trial(self) -> TrialRecord:
        """One perturb/evaluate/decide cycle."""
        state = self.state
        option = self.rng.choice(self.options)

        old_value = self.control.read_option(option.name) or state.committed.get(option.name)
        new_value = generate_candidate(option, self.rng)
        self.control.apply_option(option.name, new_value)
        logger.debug(f"Setting {option.name} to {new_value} - old value was {old_value}")

        state.trials += 1
        score = self.control.run_benchmark()

        improved = score > state.highest_score
        if improved:
            snapshot = self.control.snapshot_config()
            if not snapshot:
                logger.warning("Snapshot of the current config is empty")
            self.tracker.record(score, snapshot)
            state.highest_score = self.tracker.best_score
            state.best_config = self.tracker.best_config
            state.stall_count = 0
            state.committed[option.name] = new_value
            logger.info(
                f"Found new best config! New Avg IOPs {int(score)} "
                f"(tuned_option={option.name}, new_value={new_value})"
            )
        else:
            logger.info(f"No new best config (score {score})")
            self._revert(option, old_value)

        record = TrialRecord(
            number=state.trials,
            option=option.name,
            old_value=old_value,
            new_value=new_value,
            score=score,
            improved=improved,
            highest_score=state.highest_score,
        )
        record.mark_completed()
        state.history.append(record)
        return record

    def _revert(self, option: ConfigOption, old_value: Optional[str]):
        if old_value is None:
            logger.warning(
                f"Cannot revert {option.name}: its previous value is unknown"
            )
            return
        self.control.apply_option(option.name, old_value)

    def result(self) -> SearchResult:
        """Snapshot of the current best as a SearchResult."""
        return SearchResult(
            highest_score=self.state.highest_score,
            best_config=self.state.best_config,
            trials=self.state.trials,
            history=list(self.state.history),
        )


def log_best_config(result: SearchResult):
    """Log the best configuration block, even when it is empty."""
    lines = "\n".join(result.report())
    logger.info(f"Best config is (score {result.highest_score}):\n{lines}")
