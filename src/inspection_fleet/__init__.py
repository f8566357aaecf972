"""Inspection Fleet Simulator - deterministic fleet monitoring data."""

__version__ = "0.1.0"

from .generators import generate_fleet, generate_history
from .metrics import compute_fleet_metrics
from .config import Config
from .dashboard import FleetDashboard

__all__ = [
    "generate_fleet",
    "generate_history",
    "compute_fleet_metrics",
    "Config",
    "FleetDashboard",
    "__version__",
]
