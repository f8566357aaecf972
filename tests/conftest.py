"""Shared fixtures for the test suite."""

import pytest

from inspection_fleet.catalog import SystemStatus, severity_for
from inspection_fleet.generators import (
    DefectObservation,
    InspectionSystem,
    UnitsInspected,
    generate_fleet,
)


def _build_system(
    system_id="system-001",
    uptime=90,
    status=SystemStatus.ONLINE,
    location="Testing Lab",
    daily=100,
    defects=(),
):
    return InspectionSystem(
        id=system_id,
        name=f"Inspection System {int(system_id.split('-')[-1])}",
        location=location,
        status=status,
        uptime=uptime,
        units_inspected=UnitsInspected(daily=daily, weekly=daily * 5, monthly=daily * 20),
        defects=tuple(
            DefectObservation(type=t, count=c, severity=severity_for(t)) for t, c in defects
        ),
    )


@pytest.fixture
def make_system():
    """Factory for InspectionSystem records with hand-picked values."""
    return _build_system


@pytest.fixture
def fleet():
    return generate_fleet(10)
