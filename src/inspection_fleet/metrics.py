"""Fleet-wide summary metrics."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

from .catalog import STATUSES, Severity, SystemStatus
from .generators import InspectionSystem, UnitsInspected


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to ``digits`` decimals with halves going up (2.25 -> 2.3)."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


@dataclass(frozen=True)
class FleetMetrics:
    """Aggregate view of a fleet; recomputed from the systems on demand."""

    total_systems: int = 0
    online_systems: int = 0
    offline_systems: int = 0
    maintenance_systems: int = 0
    total_units_inspected: UnitsInspected = field(default_factory=UnitsInspected)
    total_defects: Dict[Severity, int] = field(
        default_factory=lambda: {severity: 0 for severity in Severity}
    )
    average_uptime: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_systems": self.total_systems,
            "online_systems": self.online_systems,
            "offline_systems": self.offline_systems,
            "maintenance_systems": self.maintenance_systems,
            "total_units_inspected": self.total_units_inspected.to_dict(),
            "total_defects": {s.value: count for s, count in self.total_defects.items()},
            "average_uptime": self.average_uptime,
        }


def compute_fleet_metrics(systems: Sequence[InspectionSystem]) -> FleetMetrics:
    """Compute status counts, throughput, defect totals and mean uptime.

    An empty fleet yields zero counts and an average uptime of 0.0.
    """
    status_counts = {status: 0 for status in STATUSES}
    total_units = UnitsInspected()
    total_defects = {severity: 0 for severity in Severity}
    uptime_sum = 0

    for system in systems:
        status_counts[system.status] += 1
        total_units = total_units + system.units_inspected
        uptime_sum += system.uptime
        for defect in system.defects:
            total_defects[defect.severity] += defect.count

    total = len(systems)
    average_uptime = round_half_up(uptime_sum / total) if total else 0.0

    return FleetMetrics(
        total_systems=total,
        online_systems=status_counts[SystemStatus.ONLINE],
        offline_systems=status_counts[SystemStatus.OFFLINE],
        maintenance_systems=status_counts[SystemStatus.MAINTENANCE],
        total_units_inspected=total_units,
        total_defects=total_defects,
        average_uptime=average_uptime,
    )
