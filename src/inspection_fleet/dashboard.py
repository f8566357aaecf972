"""Dashboard session owning one generated fleet.

The session generates the fleet once, lazily generates the fleet history on
first use, and assembles the report payloads behind the fleet report and
system detail views. The generated data is never modified afterwards; every
view derives fresh lists from it.
"""

import logging
from typing import Any, Dict, List, Optional

from .analytics import (
    defect_rate,
    defect_type_frequency,
    history_window,
    location_rollup,
    online_share,
    performance_summary,
    status_distribution,
    system_defect_breakdown,
    system_performance,
    top_performers,
    under_performers,
)
from .catalog import TimeRange
from .config import Config
from .generators import (
    HistoricalDataPoint,
    InspectionSystem,
    generate_asset_metadata,
    generate_fleet,
    generate_fleet_history,
)
from .metrics import FleetMetrics, compute_fleet_metrics

logger = logging.getLogger(__name__)


class SystemNotFoundError(KeyError):
    """Raised when a system id is not part of the generated fleet."""


class FleetDashboard:
    """Generated fleet plus the reports derived from it."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config.default()
        gen = self.config.generator

        self._systems: List[InspectionSystem] = generate_fleet(gen.fleet_size, gen.base_seed)
        self._by_id: Dict[str, InspectionSystem] = {s.id: s for s in self._systems}
        self._history: Optional[List[HistoricalDataPoint]] = None

        logger.info(f"Generated fleet of {len(self._systems)} systems (seed {gen.base_seed})")

    @property
    def systems(self) -> List[InspectionSystem]:
        return list(self._systems)

    @property
    def history(self) -> List[HistoricalDataPoint]:
        if self._history is None:
            gen = self.config.generator
            self._history = generate_fleet_history(self._systems, gen.history_days, gen.base_date)
            logger.debug(f"Generated {len(self._history)} historical data points")
        return list(self._history)

    def get_system(self, system_id: str) -> InspectionSystem:
        try:
            return self._by_id[system_id]
        except KeyError:
            raise SystemNotFoundError(system_id) from None

    def metrics(self) -> FleetMetrics:
        return compute_fleet_metrics(self._systems)

    def fleet_report(self) -> Dict[str, Any]:
        """Assemble the fleet report view."""
        report = self.config.report
        metrics = self.metrics()

        return {
            "metrics": metrics.to_dict(),
            "online_share_pct": online_share(metrics),
            "status_distribution": {
                status.value: count
                for status, count in status_distribution(self._systems).items()
            },
            "system_performance": system_performance(self._systems),
            "defect_types": [
                d.to_dict()
                for d in defect_type_frequency(self._systems, report.defect_type_limit)
            ],
            "top_performers": [s.id for s in top_performers(self._systems, report.top_n)],
            "under_performers": [s.id for s in under_performers(self._systems, report.top_n)],
            "locations": [loc.to_dict() for loc in location_rollup(self._systems)],
        }

    def system_report(self, system_id: str, time_range: Optional[TimeRange] = None) -> Dict[str, Any]:
        """Assemble the system detail view for one system."""
        system = self.get_system(system_id)
        time_range = time_range or self.config.report.time_range
        points = history_window(self.history, system.id, time_range)

        return {
            "system": system.to_dict(),
            "asset": generate_asset_metadata(system, self.config.generator.base_seed).to_dict(),
            "time_range": time_range.value,
            "performance": performance_summary(points, self.config.report.trend_window),
            "defect_breakdown": [d.to_dict() for d in system_defect_breakdown(system)],
            "daily": [
                {
                    "date": p.timestamp.isoformat(),
                    "units_inspected": p.units_inspected,
                    "defects_detected": p.defects_detected,
                    "defect_rate": round(defect_rate(p), 2),
                }
                for p in points
            ],
        }
