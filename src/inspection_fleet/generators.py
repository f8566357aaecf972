"""Deterministic generators for inspection systems and their history.

This module produces the synthetic fleet consumed by the dashboard:

- **Inspection systems**: status, uptime, throughput and defects per machine
- **Defect observations**: 2-5 distinct defect types with fixed severities
- **Historical series**: one data point per system per day
- **Asset metadata**: descriptive OEM/service data for the detail view

Every value is derived from an integer seed through :mod:`.prng`; there is
no wall-clock or global random state involved, so two calls with the same
arguments return equal records.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Sequence, Tuple

from faker import Faker

from .catalog import (
    DEFECT_TYPES,
    LOCATIONS,
    STATUSES,
    UPTIME_RANGES,
    Severity,
    SystemStatus,
    severity_for,
)
from .prng import SeedCounter, pick_distinct

logger = logging.getLogger(__name__)

fake = Faker()

BASE_SEED = 12345
BASE_DATE = date(2024, 1, 1)
LAST_UPDATED = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

_SYSTEM_NUMBER = re.compile(r"\s*([+-]?\d+)")


# =============================================================================
# Data Model
# =============================================================================


@dataclass(frozen=True)
class DefectObservation:
    """One defect type seen on a system, with its accumulated count."""

    type: str
    count: int
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "count": self.count, "severity": self.severity.value}


@dataclass(frozen=True)
class UnitsInspected:
    """Throughput of a system over three windows."""

    daily: int = 0
    weekly: int = 0
    monthly: int = 0

    def __add__(self, other: "UnitsInspected") -> "UnitsInspected":
        return UnitsInspected(
            daily=self.daily + other.daily,
            weekly=self.weekly + other.weekly,
            monthly=self.monthly + other.monthly,
        )

    def to_dict(self) -> Dict[str, int]:
        return {"daily": self.daily, "weekly": self.weekly, "monthly": self.monthly}


@dataclass(frozen=True)
class InspectionSystem:
    """A monitored inspection machine."""

    id: str
    name: str
    location: str
    status: SystemStatus
    uptime: int  # percentage
    units_inspected: UnitsInspected
    defects: Tuple[DefectObservation, ...] = ()
    last_updated: datetime = LAST_UPDATED

    @property
    def total_defects(self) -> int:
        return sum(d.count for d in self.defects)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "status": self.status.value,
            "uptime": self.uptime,
            "units_inspected": self.units_inspected.to_dict(),
            "defects": [d.to_dict() for d in self.defects],
            "last_updated": self.last_updated.isoformat(),
        }


@dataclass(frozen=True)
class HistoricalDataPoint:
    """One system's inspection totals for one day.

    ``defect_types`` counts are sampled independently of ``defects_detected``
    and do not have to add up to it.
    """

    system_id: str
    timestamp: date
    units_inspected: int
    defects_detected: int
    defect_types: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system_id": self.system_id,
            "timestamp": self.timestamp.isoformat(),
            "units_inspected": self.units_inspected,
            "defects_detected": self.defects_detected,
            "defect_types": dict(self.defect_types),
        }


@dataclass(frozen=True)
class AssetMetadata:
    """Descriptive metadata for an inspection system.

    Static data shown next to the live figures: OEM, model, serial number,
    installation date and the responsible field engineer.
    """

    system_id: str
    manufacturer: str
    model: str
    serial_number: str
    install_date: date
    field_engineer: str
    capabilities: Tuple[str, ...] = ()
    as_of: date = LAST_UPDATED.date()  # Reference date for operational_years

    @property
    def operational_years(self) -> float:
        return round((self.as_of - self.install_date).days / 365.25, 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system_id": self.system_id,
            "manufacturer": self.manufacturer,
            "model": self.model,
            "serial_number": self.serial_number,
            "install_date": self.install_date.isoformat(),
            "operational_years": self.operational_years,
            "field_engineer": self.field_engineer,
            "capabilities": list(self.capabilities),
        }


# =============================================================================
# Defect Synthesizer
# =============================================================================


def generate_defects(seed: int) -> List[DefectObservation]:
    """Generate 2-5 distinct defect observations for ``seed``."""
    num_types = SeedCounter(seed).next_int(4, offset=2)

    counter = SeedCounter(seed)
    selected = pick_distinct(DEFECT_TYPES, num_types, counter)

    return [
        DefectObservation(
            type=defect_type,
            count=counter.next_int(50, offset=1),
            severity=severity_for(defect_type),
        )
        for defect_type in selected
    ]


# =============================================================================
# Fleet Generator
# =============================================================================


def _draw_int(seed: int, upper: int, offset: int = 0) -> int:
    return SeedCounter(seed).next_int(upper, offset=offset)


def generate_system(index: int, base_seed: int = BASE_SEED,
                    last_updated: datetime = LAST_UPDATED) -> InspectionSystem:
    """Generate the inspection system with 1-based ordinal ``index``."""
    seed = base_seed + index

    status = STATUSES[_draw_int(seed, len(STATUSES))]
    uptime_floor, uptime_width = UPTIME_RANGES[status]
    uptime = _draw_int(seed + 1, uptime_width, offset=uptime_floor)

    daily = _draw_int(seed + 2, 800, offset=200)
    weekly = daily * _draw_int(seed + 3, 3, offset=5)  # 5-7 days
    monthly = weekly * _draw_int(seed + 4, 2, offset=4)  # 4-5 weeks

    return InspectionSystem(
        id=f"system-{index:03d}",
        name=f"Inspection System {index}",
        location=LOCATIONS[_draw_int(seed + 5, len(LOCATIONS))],
        status=status,
        uptime=uptime,
        units_inspected=UnitsInspected(daily=daily, weekly=weekly, monthly=monthly),
        defects=tuple(generate_defects(seed + 6)),
        last_updated=last_updated,
    )


def generate_fleet(count: int, base_seed: int = BASE_SEED,
                   last_updated: datetime = LAST_UPDATED) -> List[InspectionSystem]:
    """Generate ``count`` inspection systems, ``system-001`` onwards."""
    if count < 0:
        logger.debug(f"Clamping fleet size {count} to 0")
        count = 0

    return [generate_system(i, base_seed, last_updated) for i in range(1, count + 1)]


# =============================================================================
# Historical Series Generator
# =============================================================================


def system_seed(system_id: str) -> int:
    """Seed of a system's history: the number after the last '-' (1 if none)."""
    match = _SYSTEM_NUMBER.match(system_id.split("-")[-1])
    return int(match.group(1)) if match else 1


def _generate_day(system_id: str, seed: int, day: date) -> HistoricalDataPoint:
    units_inspected = _draw_int(seed, 1000, offset=200)
    defects_detected = _draw_int(seed + 100, 50, offset=5)

    num_types = _draw_int(seed + 200, 3, offset=1)
    selected = pick_distinct(DEFECT_TYPES, num_types, SeedCounter(seed + 300))

    # Per-type counts are independent draws, not a split of defects_detected.
    defect_types = {
        defect_type: _draw_int(seed + 400 + index, defects_detected)
        for index, defect_type in enumerate(selected)
    }

    return HistoricalDataPoint(
        system_id=system_id,
        timestamp=day,
        units_inspected=units_inspected,
        defects_detected=defects_detected,
        defect_types=defect_types,
    )


def generate_history(system_id: str, days: int = 30,
                     base_date: date = BASE_DATE) -> List[HistoricalDataPoint]:
    """Generate ``days`` daily data points for a system, oldest first."""
    if days < 0:
        logger.debug(f"Clamping history length {days} to 0 for {system_id}")
        days = 0

    seed = system_seed(system_id)
    return [
        _generate_day(system_id, seed + i, base_date + timedelta(days=i))
        for i in range(days)
    ]


def generate_fleet_history(systems: Sequence[InspectionSystem], days: int = 90,
                           base_date: date = BASE_DATE) -> List[HistoricalDataPoint]:
    """Concatenate the history of every system, in fleet order."""
    history: List[HistoricalDataPoint] = []
    for system in systems:
        history.extend(generate_history(system.id, days, base_date))
    return history


# =============================================================================
# Asset Metadata (Descriptive)
# =============================================================================


OEM_MODELS = [
    ("Cognex", "In-Sight 9912", ["2D_vision", "surface_inspection", "ocr"]),
    ("Cognex", "3D-A5000", ["3D_vision", "dimensional_gauging"]),
    ("Keyence", "CV-X480", ["2D_vision", "color_inspection", "defect_classification"]),
    ("Keyence", "LJ-X8000", ["laser_profiling", "dimensional_gauging"]),
    ("Zeiss", "ABIS II", ["surface_inspection", "defect_classification"]),
    ("Basler", "ace 2 Pro", ["2D_vision", "high_speed"]),
]


def generate_asset_metadata(system: InspectionSystem,
                            base_seed: int = BASE_SEED) -> AssetMetadata:
    """Create asset metadata for a system, stable for a given id and seed.

    Reseeds the module-level ``fake`` instance, so any other user of ``fake``
    sees its sequence restart after this call. The install date falls between
    one and about seven years before ``system.last_updated``.
    """
    fake.seed_instance(base_seed + system_seed(system.id))

    oem, model, caps = fake.random_element(OEM_MODELS)
    reference = system.last_updated.date()
    install_date = fake.date_between_dates(
        date_start=reference - timedelta(days=2500),
        date_end=reference - timedelta(days=365),
    )

    return AssetMetadata(
        system_id=system.id,
        manufacturer=oem,
        model=model,
        serial_number=fake.bothify("SN-######-??").upper(),
        install_date=install_date,
        field_engineer=fake.name(),
        capabilities=tuple(caps),
        as_of=reference,
    )
