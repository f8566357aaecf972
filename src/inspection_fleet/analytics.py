"""Derived analytics behind the fleet report and system detail views.

Every function is a pure projection: inputs are never reordered or mutated,
results are new lists/dicts built from them.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .catalog import (
    SEVERITY_ORDER,
    STATUSES,
    Severity,
    SystemStatus,
    TimeRange,
    defect_label,
    severity_for,
)
from .generators import DefectObservation, HistoricalDataPoint, InspectionSystem
from .metrics import FleetMetrics, round_half_up

TOP_N = 5
DEFECT_TYPE_LIMIT = 8
TREND_WINDOW = 7


# =============================================================================
# Ranking & Filtering
# =============================================================================


def top_performers(systems: Sequence[InspectionSystem], limit: int = TOP_N) -> List[InspectionSystem]:
    """Systems with the highest uptime; ties keep fleet order."""
    return sorted(systems, key=lambda s: s.uptime, reverse=True)[: max(limit, 0)]


def under_performers(systems: Sequence[InspectionSystem], limit: int = TOP_N) -> List[InspectionSystem]:
    """Systems with the lowest uptime; ties keep fleet order."""
    return sorted(systems, key=lambda s: s.uptime)[: max(limit, 0)]


def filter_systems(
    systems: Sequence[InspectionSystem],
    status: Optional[SystemStatus] = None,
    location: Optional[str] = None,
) -> List[InspectionSystem]:
    """Systems matching a status and/or location; ``None`` matches all."""
    return [
        s for s in systems
        if (status is None or s.status == status)
        and (location is None or s.location == location)
    ]


def unique_locations(systems: Iterable[InspectionSystem]) -> List[str]:
    return sorted({s.location for s in systems})


def status_distribution(systems: Iterable[InspectionSystem]) -> Dict[SystemStatus, int]:
    """Count of systems per status, zero-filled, in status table order."""
    counts = {status: 0 for status in STATUSES}
    for system in systems:
        counts[system.status] += 1
    return counts


def online_share(metrics: FleetMetrics) -> float:
    """Percentage of the fleet currently online (0.0 for an empty fleet)."""
    if metrics.total_systems == 0:
        return 0.0
    return round_half_up(metrics.online_systems / metrics.total_systems * 100)


# =============================================================================
# Defect Analysis
# =============================================================================


@dataclass(frozen=True)
class DefectTypeSummary:
    """Accumulated count of one defect type."""

    type: str
    count: int
    severity: Severity
    percentage: Optional[float] = None

    @property
    def label(self) -> str:
        return defect_label(self.type)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": self.type,
            "label": self.label,
            "count": self.count,
            "severity": self.severity.value,
        }
        if self.percentage is not None:
            data["percentage"] = self.percentage
        return data


def _sum_by_type(defects: Iterable[DefectObservation]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for defect in defects:
        totals[defect.type] = totals.get(defect.type, 0) + defect.count
    return totals


def _group_by_severity(totals: Dict[str, int]) -> List[DefectTypeSummary]:
    groups: Dict[Severity, List[DefectTypeSummary]] = {s: [] for s in SEVERITY_ORDER}
    for defect_type, count in totals.items():
        severity = severity_for(defect_type)
        groups[severity].append(DefectTypeSummary(defect_type, count, severity))

    ordered: List[DefectTypeSummary] = []
    for severity in SEVERITY_ORDER:
        ordered.extend(sorted(groups[severity], key=lambda d: d.count, reverse=True))
    return ordered


def defect_type_frequency(
    systems: Iterable[InspectionSystem], limit: Optional[int] = DEFECT_TYPE_LIMIT
) -> List[DefectTypeSummary]:
    """Fleet defect counts per type, high severity first, largest first."""
    totals = _sum_by_type(d for system in systems for d in system.defects)
    ordered = _group_by_severity(totals)
    return ordered if limit is None else ordered[: max(limit, 0)]


def system_defect_breakdown(system: InspectionSystem) -> List[DefectTypeSummary]:
    """One system's defect types with their share of its total defects."""
    totals = _sum_by_type(system.defects)
    grand_total = sum(totals.values())

    return [
        DefectTypeSummary(
            type=d.type,
            count=d.count,
            severity=d.severity,
            percentage=round_half_up(d.count / grand_total * 100) if grand_total else 0.0,
        )
        for d in _group_by_severity(totals)
    ]


# =============================================================================
# Location & System Rollups
# =============================================================================


@dataclass(frozen=True)
class LocationSummary:
    location: str
    systems: int
    avg_uptime: float
    total_units: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "systems": self.systems,
            "avg_uptime": self.avg_uptime,
            "total_units": self.total_units,
        }


def location_rollup(systems: Iterable[InspectionSystem]) -> List[LocationSummary]:
    """Per-location system count, mean uptime and daily units, best uptime first."""
    grouped: Dict[str, List[InspectionSystem]] = defaultdict(list)
    for system in systems:
        grouped[system.location].append(system)

    summaries = [
        LocationSummary(
            location=location,
            systems=len(members),
            avg_uptime=round_half_up(sum(s.uptime for s in members) / len(members)),
            total_units=sum(s.units_inspected.daily for s in members),
        )
        for location, members in grouped.items()
    ]
    return sorted(summaries, key=lambda summary: summary.avg_uptime, reverse=True)


def system_performance(systems: Sequence[InspectionSystem]) -> List[Dict[str, Any]]:
    """Per-system uptime, daily units and defect rate, best uptime first."""
    rows = []
    for system in systems:
        daily = system.units_inspected.daily
        total_defects = system.total_defects
        rows.append({
            "id": system.id,
            "name": system.name,
            "uptime": system.uptime,
            "daily_units": daily,
            "total_defects": total_defects,
            "defect_rate": total_defects / daily * 100 if daily > 0 else 0.0,
        })
    return sorted(rows, key=lambda row: row["uptime"], reverse=True)


# =============================================================================
# Historical Analysis
# =============================================================================


def defect_rate(point: HistoricalDataPoint) -> float:
    """Defects per hundred inspected units for one day (0 with no units)."""
    if point.units_inspected == 0:
        return 0.0
    return point.defects_detected / point.units_inspected * 100


def _mean_units(points: Sequence[HistoricalDataPoint]) -> float:
    if not points:
        return 0.0
    return sum(p.units_inspected for p in points) / len(points)


def throughput_trend(points: Sequence[HistoricalDataPoint], window: int = TREND_WINDOW) -> float:
    """Percent change of mean daily units, last ``window`` days vs the ones before."""
    if window < 1:
        return 0.0

    recent = points[-window:]
    previous = points[-2 * window:-window]

    previous_mean = _mean_units(previous)
    if previous_mean == 0:
        return 0.0
    return (_mean_units(recent) - previous_mean) / previous_mean * 100


def history_window(
    points: Iterable[HistoricalDataPoint], system_id: str, time_range: TimeRange
) -> List[HistoricalDataPoint]:
    """The most recent ``time_range`` days of one system's history, oldest first."""
    own = sorted((p for p in points if p.system_id == system_id), key=lambda p: p.timestamp)
    return own[-time_range.days:]


def performance_summary(points: Sequence[HistoricalDataPoint], window: int = TREND_WINDOW) -> Dict[str, Any]:
    """Totals, average defect rate and throughput trend over a history slice."""
    total_units = sum(p.units_inspected for p in points)
    total_defects = sum(p.defects_detected for p in points)

    return {
        "total_units": total_units,
        "total_defects": total_defects,
        "avg_defect_rate": total_defects / total_units * 100 if total_units > 0 else 0.0,
        "throughput_trend": throughput_trend(points, window),
    }
