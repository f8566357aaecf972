"""Configuration management for the fleet simulator."""

import logging
import os
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .catalog import TimeRange
from .generators import BASE_DATE, BASE_SEED

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """Synthetic fleet parameters."""

    base_seed: int = BASE_SEED
    fleet_size: int = 10
    history_days: int = 90
    base_date: date = BASE_DATE

    def __post_init__(self):
        if isinstance(self.base_date, str):
            self.base_date = date.fromisoformat(self.base_date)
        if self.fleet_size < 0:
            raise ValueError(f"fleet_size must be >= 0, got {self.fleet_size}")
        if self.history_days < 0:
            raise ValueError(f"history_days must be >= 0, got {self.history_days}")


@dataclass
class ReportConfig:
    """Report and detail view parameters."""

    top_n: int = 5
    defect_type_limit: int = 8
    trend_window: int = 7  # Days per throughput trend window
    default_time_range: str = TimeRange.LAST_30_DAYS.value

    def __post_init__(self):
        if self.top_n < 0:
            raise ValueError(f"top_n must be >= 0, got {self.top_n}")
        if self.defect_type_limit < 0:
            raise ValueError(f"defect_type_limit must be >= 0, got {self.defect_type_limit}")
        if self.trend_window < 1:
            raise ValueError(f"trend_window must be >= 1, got {self.trend_window}")
        # Raises ValueError for anything other than 7d/30d/90d
        TimeRange(self.default_time_range)

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(self.default_time_range)


@dataclass
class Config:
    """Main configuration container."""

    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    @classmethod
    def default(cls) -> "Config":
        return cls()

    @classmethod
    def from_yaml(cls, config_path: Path) -> "Config":
        """Load configuration from YAML file."""
        if not config_path.exists():
            logger.warning(f"Config file {config_path} not found, using defaults")
            return cls.default()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Config":
        """Load configuration from environment variables (and a .env file)."""
        if env_file is None or env_file.exists():
            load_dotenv(env_file)

        config = cls.default()

        config.generator = GeneratorConfig(
            base_seed=int(os.getenv("FLEET_BASE_SEED", config.generator.base_seed)),
            fleet_size=int(os.getenv("FLEET_SIZE", config.generator.fleet_size)),
            history_days=int(os.getenv("FLEET_HISTORY_DAYS", config.generator.history_days)),
            base_date=os.getenv("FLEET_BASE_DATE", config.generator.base_date.isoformat()),
        )

        top_n = os.getenv("FLEET_TOP_N")
        if top_n:
            config.report = replace(config.report, top_n=int(top_n))

        return config

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary.

        Overrides go through the dataclass constructors, so out-of-range
        values raise ``ValueError``. Empty sections keep their defaults.
        """
        config = cls.default()

        if "generator" in data:
            gen_data = data["generator"] or {}
            config.generator = GeneratorConfig(
                base_seed=gen_data.get("base_seed", config.generator.base_seed),
                fleet_size=gen_data.get("fleet_size", config.generator.fleet_size),
                history_days=gen_data.get("history_days", config.generator.history_days),
                base_date=gen_data.get("base_date", config.generator.base_date),
            )

        if "report" in data:
            report_data = data["report"] or {}
            config.report = ReportConfig(
                top_n=report_data.get("top_n", config.report.top_n),
                defect_type_limit=report_data.get(
                    "defect_type_limit", config.report.defect_type_limit
                ),
                trend_window=report_data.get("trend_window", config.report.trend_window),
                default_time_range=str(
                    report_data.get("default_time_range", config.report.default_time_range)
                ),
            )

        # Top-level 'fleet_size' overrides generator.fleet_size
        if "fleet_size" in data:
            config.generator = replace(config.generator, fleet_size=int(data["fleet_size"]))

        return config

    def to_yaml(self, path: Path) -> None:
        """Save configuration to YAML file."""
        data = {
            "generator": {
                "base_seed": self.generator.base_seed,
                "fleet_size": self.generator.fleet_size,
                "history_days": self.generator.history_days,
                "base_date": self.generator.base_date.isoformat(),
            },
            "report": {
                "top_n": self.report.top_n,
                "defect_type_limit": self.report.defect_type_limit,
                "trend_window": self.report.trend_window,
                "default_time_range": self.report.default_time_range,
            },
        }

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
