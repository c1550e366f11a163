"""Configuration management with validation."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from ..benchmarks.config import BenchmarkConfig
from .errors import CatalogError
from .parameters import ConfigOption

logger = logging.getLogger(__name__)


@dataclass
class SearchSettings:
    """Settings of the hill-climbing loop."""

    timeout: int = 30  # consecutive non-improving attempts before stopping
    settle_seconds: float = 2  # pause after every trial
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate search settings."""
        # 0 runs no trial at all and reports the empty best config
        if not isinstance(self.timeout, int) or isinstance(self.timeout, bool) or self.timeout < 0:
            raise ValueError(
                f"Search timeout must be a non-negative integer, got {self.timeout!r}"
            )
        if self.settle_seconds < 0:
            raise ValueError(
                f"Settle delay must not be negative, got {self.settle_seconds}"
            )


@dataclass
class ClusterConfig:
    """Where the ceph tools live and which daemons they talk to."""

    ceph_binary: str = "/usr/bin/ceph"
    rados_binary: str = "/usr/bin/rados"
    daemon: str = "osd.0"  # daemon whose config is read and snapshotted
    inject_target: str = "osd.*"  # daemons new values are injected into
    command_timeout: Optional[float] = None

    def __post_init__(self):
        """Validate cluster configuration."""
        for name in ("ceph_binary", "rados_binary", "daemon", "inject_target"):
            if not getattr(self, name):
                raise ValueError(f"Cluster setting '{name}' must not be empty")
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ValueError(
                f"Cluster command_timeout must be positive, got {self.command_timeout}"
            )


@dataclass
class TunerConfig:
    """Complete tuning configuration."""

    options: List[ConfigOption]
    search: SearchSettings = field(default_factory=SearchSettings)
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)
    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    logging_config: Optional[Dict[str, Any]] = None

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> TunerConfig:
        """Load and validate configuration from YAML file."""
        return ConfigValidator().load_and_validate(config_path)

    def with_overrides(
        self,
        search: Optional[Dict[str, Any]] = None,
        benchmark: Optional[Dict[str, Any]] = None,
    ) -> TunerConfig:
        """Return a copy with the non-None command line overrides applied."""
        search_values = {
            "timeout": self.search.timeout,
            "settle_seconds": self.search.settle_seconds,
            "seed": self.search.seed,
        }
        search_values.update({k: v for k, v in (search or {}).items() if v is not None})
        return TunerConfig(
            options=list(self.options),
            search=SearchSettings(**search_values),
            benchmark=self.benchmark.merge_overrides(benchmark or {}),
            cluster=self.cluster,
            logging_config=self.logging_config,
        )


class ConfigValidator:
    """Validates option catalogs and the optional settings around them."""

    SECTIONS = {"options", "search", "benchmark", "cluster", "logging"}

    def load_and_validate(self, config_path: Union[str, Path]) -> TunerConfig:
        """Load and validate configuration with environment variable expansion."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise CatalogError(f"Configuration file not found: {config_path}")

        with open(config_path) as f:
            raw_config = f.read()

        expanded_config = self.expand_environment_variables(raw_config)
        try:
            raw_config = yaml.safe_load(expanded_config)
        except yaml.YAMLError as e:
            raise CatalogError(f"Unmarshal error for config list {config_path}: {e}") from e

        return self.validate(raw_config)

    def expand_environment_variables(self, yaml_content: str) -> str:
        """
        Expand environment variables in YAML content.

        Supports ``${VAR_NAME}`` (empty string if unset) and
        ``${VAR_NAME:-default_value}``.
        """

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""

            env_value = os.getenv(var_name)
            if env_value is None:
                if not default_value:
                    logger.warning(
                        f"Environment variable '{var_name}' not found, using empty string"
                    )
                return default_value
            return env_value

        pattern = r"\$\{([A-Za-z_][A-Za-z0-9_]*?)(?::-(.*?))?\}"
        return re.sub(pattern, replace_env_var, yaml_content)

    def validate(self, raw_config: Any) -> TunerConfig:
        """Build a TunerConfig from parsed YAML.

        A bare list is an option catalog; a mapping carries the catalog under
        ``options`` next to optional ``search``, ``benchmark``, ``cluster``
        and ``logging`` sections.
        """
        if raw_config is None:
            raw_config = []
        if isinstance(raw_config, list):
            raw_config = {"options": raw_config}
        if not isinstance(raw_config, dict):
            raise CatalogError(
                "Configuration must be a list of options or a mapping with an "
                f"'options' list, got {type(raw_config).__name__}"
            )

        unknown = set(raw_config) - self.SECTIONS
        if unknown:
            raise CatalogError(f"Unknown configuration sections: {sorted(unknown)}")

        options = self.validate_options(raw_config.get("options") or [])

        try:
            search = SearchSettings(**self._section(raw_config, "search"))
            benchmark = BenchmarkConfig(**self._section(raw_config, "benchmark"))
            cluster = ClusterConfig(**self._section(raw_config, "cluster"))
        except (TypeError, ValueError) as e:
            raise CatalogError(f"Invalid configuration: {e}") from e

        return TunerConfig(
            options=options,
            search=search,
            benchmark=benchmark,
            cluster=cluster,
            logging_config=raw_config.get("logging"),
        )

    def validate_options(self, raw_options: Any) -> List[ConfigOption]:
        """Validate the option catalog. An empty catalog is an error."""
        if not isinstance(raw_options, list):
            raise CatalogError("Options must be provided as a list")

        options: List[ConfigOption] = []
        seen = set()
        for index, raw_option in enumerate(raw_options):
            if not isinstance(raw_option, dict):
                raise CatalogError(f"Option #{index} must be a mapping, got {raw_option!r}")
            try:
                option = ConfigOption.model_validate(raw_option)
            except ValidationError as e:
                name = raw_option.get("name", f"#{index}")
                raise CatalogError(f"Invalid config option {name}: {e}") from e

            if option.name in seen:
                raise CatalogError(f"Config option '{option.name}' is listed twice")
            seen.add(option.name)
            options.append(option)

        if not options:
            raise CatalogError("You need to supply at least one config option")
        return options

    @staticmethod
    def _section(raw_config: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = raw_config.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise CatalogError(f"Configuration section '{name}' must be a mapping")
        return section
