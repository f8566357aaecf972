"""Fixed enumerations shared by the generators and analytics.

Statuses, severities, defect types and facility locations never change at
runtime. The order of each table matters: generators index into them with
seeded draws, so reordering an entry changes every generated fleet.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class SystemStatus(Enum):
    """Operational status of an inspection system."""

    ONLINE = "online"
    OFFLINE = "offline"
    MAINTENANCE = "maintenance"


class Severity(Enum):
    """Fixed classification of a defect type."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimeRange(Enum):
    """History windows offered by the system detail view."""

    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"

    @property
    def days(self) -> int:
        return int(self.value[:-1])


# Indexed by floor(rand * 3); order is part of the generated data.
STATUSES: Tuple[SystemStatus, ...] = (
    SystemStatus.ONLINE,
    SystemStatus.OFFLINE,
    SystemStatus.MAINTENANCE,
)

# Report ordering: most severe group first.
SEVERITY_ORDER: Tuple[Severity, ...] = (Severity.HIGH, Severity.MEDIUM, Severity.LOW)

DEFECT_TYPES: Tuple[str, ...] = (
    "scratches",
    "dents",
    "misalignment",
    "contamination",
    "cracks",
    "discoloration",
    "surface_roughness",
    "dimensional_variance",
)

DEFECT_SEVERITY: Mapping[str, Severity] = MappingProxyType(
    {
        "scratches": Severity.LOW,
        "discoloration": Severity.LOW,
        "surface_roughness": Severity.LOW,
        "dents": Severity.MEDIUM,
        "misalignment": Severity.MEDIUM,
        "dimensional_variance": Severity.MEDIUM,
        "cracks": Severity.HIGH,
        "contamination": Severity.HIGH,
    }
)

LOCATIONS: Tuple[str, ...] = (
    "Production Line A",
    "Production Line B",
    "Production Line C",
    "Quality Control Station 1",
    "Quality Control Station 2",
    "Final Inspection Bay",
    "Packaging Line Alpha",
    "Packaging Line Beta",
    "Assembly Station 1",
    "Assembly Station 2",
    "Testing Lab",
    "Shipping Dock",
)

# (lower bound, width) of the integer uptime percentage per status.
UPTIME_RANGES: Mapping[SystemStatus, Tuple[int, int]] = MappingProxyType(
    {
        SystemStatus.ONLINE: (80, 20),
        SystemStatus.MAINTENANCE: (50, 30),
        SystemStatus.OFFLINE: (20, 40),
    }
)


def severity_for(defect_type: str) -> Severity:
    """Look up the severity of a defect type; unknown types count as low."""
    return DEFECT_SEVERITY.get(defect_type, Severity.LOW)


def defect_label(defect_type: str) -> str:
    """Display label for a defect type, e.g. ``SURFACE ROUGHNESS``."""
    return defect_type.replace("_", " ").upper()
