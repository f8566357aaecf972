"""Tests for fleet, defect, history and asset generators."""

import math
from datetime import date, datetime, timedelta, timezone

import pytest

from inspection_fleet import generators
from inspection_fleet.catalog import (
    DEFECT_SEVERITY,
    DEFECT_TYPES,
    LOCATIONS,
    STATUSES,
    UPTIME_RANGES,
    SystemStatus,
)
from inspection_fleet.generators import (
    BASE_DATE,
    LAST_UPDATED,
    generate_asset_metadata,
    generate_defects,
    generate_fleet,
    generate_fleet_history,
    generate_history,
    generate_system,
    system_seed,
)
from inspection_fleet.prng import SeedCounter, pick_distinct, seeded_random


class TestGenerateDefects:
    """Tests for the defect synthesizer."""

    @pytest.mark.parametrize("seed", [1, 17, 12351, 12360, 99999])
    def test_two_to_five_distinct_types(self, seed):
        defects = generate_defects(seed)
        types = [d.type for d in defects]

        assert 2 <= len(defects) <= 5
        assert len(set(types)) == len(types)
        assert set(types) <= set(DEFECT_TYPES)

    def test_counts_in_range(self):
        for seed in range(0, 300):
            for defect in generate_defects(seed):
                assert 1 <= defect.count <= 50

    def test_severity_matches_table(self):
        for seed in range(0, 100):
            for defect in generate_defects(seed):
                assert defect.severity == DEFECT_SEVERITY[defect.type]

    def test_deterministic(self):
        assert generate_defects(4242) == generate_defects(4242)


class TestGenerateFleet:
    """Tests for generate_fleet."""

    def test_generates_requested_count(self, fleet):
        assert len(fleet) == 10

    def test_ids_are_unique_and_padded(self, fleet):
        ids = [s.id for s in fleet]

        assert len(set(ids)) == 10
        assert ids[0] == "system-001"
        assert ids[9] == "system-010"
        assert fleet[6].name == "Inspection System 7"

    def test_deterministic_across_calls(self):
        assert generate_fleet(25) == generate_fleet(25)

    def test_prefix_stable_for_larger_fleet(self):
        assert generate_fleet(20)[:10] == generate_fleet(10)

    def test_zero_and_negative_count_give_empty_fleet(self):
        assert generate_fleet(0) == []
        assert generate_fleet(-3) == []

    def test_uptime_within_status_range(self):
        for system in generate_fleet(100):
            low, width = UPTIME_RANGES[system.status]
            assert low <= system.uptime < low + width

    def test_unit_rollup_is_monotonic(self):
        for system in generate_fleet(100):
            units = system.units_inspected
            assert 200 <= units.daily < 1000
            assert units.daily * 5 <= units.weekly <= units.daily * 7
            assert units.weekly * 4 <= units.monthly <= units.weekly * 5
            assert units.weekly % units.daily == 0
            assert units.monthly % units.weekly == 0

    def test_location_and_status_from_tables(self):
        for system in generate_fleet(50):
            assert system.location in LOCATIONS
            assert isinstance(system.status, SystemStatus)

    def test_every_system_has_valid_defects(self, fleet):
        for system in fleet:
            types = [d.type for d in system.defects]
            assert 2 <= len(types) <= 5
            assert len(set(types)) == len(types)

    def test_last_updated_is_fixed(self, fleet):
        assert all(s.last_updated == LAST_UPDATED for s in fleet)

    def test_base_seed_changes_fleet(self):
        assert generate_fleet(10, base_seed=1) != generate_fleet(10)

    def test_generate_system_matches_fleet_entry(self, fleet):
        assert generate_system(4) == fleet[3]

    def test_fields_follow_seed_offsets(self, fleet):
        seed = 12345 + 1
        system = fleet[0]

        status = STATUSES[math.floor(seeded_random(seed) * 3)]
        uptime_floor, uptime_width = UPTIME_RANGES[status]
        daily = math.floor(seeded_random(seed + 2) * 800) + 200
        weekly = daily * (math.floor(seeded_random(seed + 3) * 3) + 5)
        monthly = weekly * (math.floor(seeded_random(seed + 4) * 2) + 4)

        assert system.status == status
        assert system.uptime == math.floor(seeded_random(seed + 1) * uptime_width) + uptime_floor
        assert system.units_inspected.daily == daily
        assert system.units_inspected.weekly == weekly
        assert system.units_inspected.monthly == monthly
        assert system.location == LOCATIONS[math.floor(seeded_random(seed + 5) * 12)]
        assert list(system.defects) == generate_defects(seed + 6)

    def test_to_dict(self, fleet):
        data = fleet[0].to_dict()

        assert data["id"] == "system-001"
        assert data["status"] in {"online", "offline", "maintenance"}
        assert set(data["units_inspected"]) == {"daily", "weekly", "monthly"}
        assert data["last_updated"] == "2024-01-15T10:30:00+00:00"
        assert all("severity" in d for d in data["defects"])


class TestSeverityConsistency:
    """The same defect type always carries the same severity."""

    def test_consistent_across_fleet(self):
        seen = {}
        for system in generate_fleet(200):
            for defect in system.defects:
                assert seen.setdefault(defect.type, defect.severity) == defect.severity


class TestSystemSeed:
    """Tests for system_seed."""

    @pytest.mark.parametrize(
        "system_id,expected",
        [
            ("system-007", 7),
            ("system-120", 120),
            ("line-a-42", 42),
            ("unit-12x", 12),
            ("system-abc", 1),
            ("", 1),
        ],
    )
    def test_parses_trailing_number(self, system_id, expected):
        assert system_seed(system_id) == expected


class TestGenerateHistory:
    """Tests for generate_history."""

    def test_thirty_days_for_system_007(self):
        points = generate_history("system-007", 30)

        assert len(points) == 30
        for point in points:
            assert point.system_id == "system-007"
            assert 200 <= point.units_inspected < 1200
            assert 5 <= point.defects_detected < 55

    @pytest.mark.parametrize("day", [0, 3])
    def test_day_follows_seed_offsets(self, day):
        point = generate_history("system-007", 5)[day]
        seed = 7 + day

        defects = math.floor(seeded_random(seed + 100) * 50) + 5
        num_types = math.floor(seeded_random(seed + 200) * 3) + 1
        selected = pick_distinct(DEFECT_TYPES, num_types, SeedCounter(seed + 300))

        assert point.timestamp == BASE_DATE + timedelta(days=day)
        assert point.units_inspected == math.floor(seeded_random(seed) * 1000) + 200
        assert point.defects_detected == defects
        assert point.defect_types == {
            defect_type: math.floor(seeded_random(seed + 400 + index) * defects)
            for index, defect_type in enumerate(selected)
        }

    def test_strictly_ascending_dates(self):
        points = generate_history("system-007", 30)
        dates = [p.timestamp for p in points]

        assert dates[0] == BASE_DATE
        assert all(later - earlier == timedelta(days=1) for earlier, later in zip(dates, dates[1:]))

    def test_defect_type_breakdown(self):
        for point in generate_history("system-003", 90):
            assert 1 <= len(point.defect_types) <= 3
            assert set(point.defect_types) <= set(DEFECT_TYPES)
            for count in point.defect_types.values():
                assert 0 <= count < point.defects_detected

    def test_deterministic(self):
        assert generate_history("system-005", 45) == generate_history("system-005", 45)

    def test_shorter_window_is_prefix(self):
        assert generate_history("system-002", 90)[:30] == generate_history("system-002", 30)

    def test_zero_and_negative_days(self):
        assert generate_history("system-001", 0) == []
        assert generate_history("system-001", -5) == []

    def test_unparseable_id_uses_seed_one(self):
        assert [p.units_inspected for p in generate_history("custom", 10)] == [
            p.units_inspected for p in generate_history("system-001", 10)
        ]

    def test_custom_base_date(self):
        start = date(2025, 3, 1)
        points = generate_history("system-001", 3, base_date=start)
        assert [p.timestamp for p in points] == [
            date(2025, 3, 1), date(2025, 3, 2), date(2025, 3, 3)
        ]

    def test_to_dict(self):
        data = generate_history("system-001", 1)[0].to_dict()

        assert data["timestamp"] == "2024-01-01"
        assert isinstance(data["defect_types"], dict)


class TestGenerateFleetHistory:
    """Tests for generate_fleet_history."""

    def test_concatenates_per_system_history(self, fleet):
        history = generate_fleet_history(fleet[:3], days=5)

        assert len(history) == 15
        assert [p.system_id for p in history[:5]] == ["system-001"] * 5
        assert history[5:10] == generate_history("system-002", 5)


class TestAssetMetadata:
    """Tests for generate_asset_metadata."""

    def test_stable_per_system(self, fleet):
        first = generate_asset_metadata(fleet[2])
        second = generate_asset_metadata(fleet[2])

        assert first == second

    def test_fields_populated(self, fleet):
        asset = generate_asset_metadata(fleet[0])

        assert asset.system_id == "system-001"
        assert asset.manufacturer
        assert asset.model
        assert asset.serial_number.startswith("SN-")
        assert asset.field_engineer
        assert asset.install_date < LAST_UPDATED.date()
        assert asset.operational_years >= 1.0

    def test_years_measured_from_system_last_updated(self):
        last_updated = datetime(2030, 6, 1, tzinfo=timezone.utc)
        system = generate_system(1, last_updated=last_updated)

        asset = generate_asset_metadata(system)

        assert asset.as_of == date(2030, 6, 1)
        assert date(2023, 6, 1) < asset.install_date < date(2029, 6, 2)
        assert 1.0 <= asset.operational_years <= 6.9

    def test_reseeds_module_faker(self, fleet):
        generate_asset_metadata(fleet[0])
        first = generators.fake.name()

        generate_asset_metadata(fleet[0])
        second = generators.fake.name()

        assert first == second

    def test_to_dict(self, fleet):
        data = generate_asset_metadata(fleet[0]).to_dict()

        assert data["system_id"] == "system-001"
        assert isinstance(data["capabilities"], list)
        assert isinstance(data["install_date"], str)
