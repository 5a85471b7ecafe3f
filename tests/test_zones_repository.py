import json
from pathlib import Path

import pytest

from src.delivery_zones.data import zones_repository
from src.delivery_zones.data.seed import reference_zones
from src.delivery_zones.data.zones_repository import (
    FileZoneRepository,
    InMemoryZoneRepository,
    SupabaseZoneRepository,
    load_zone_records,
    zone_from_record,
    zone_to_record,
)
from src.delivery_zones.models.domain import Coordinate
from src.delivery_zones.services.zoning.errors import ZoneValidationError
from src.delivery_zones.services.zoning.resolver import resolve_zone


def _record(**overrides) -> dict:
    row = {
        "id": "zone_a",
        "zone_name": "Zone A - Primary",
        "center_lat": 13.0827,
        "center_lng": 80.2707,
        "radius_km": 5,
        "delivery_charge": 0,
        "min_order_amount": 30000,
        "is_active": True,
        "delivery_slots": [],
    }
    row.update(overrides)
    return row


def test_zone_from_record_builds_zone():
    zone = zone_from_record(_record())

    assert zone.id == "zone_a"
    assert zone.name == "Zone A - Primary"
    assert zone.center == Coordinate(13.0827, 80.2707)
    assert zone.radius_km == 5.0
    assert zone.min_order_amount == 30000
    assert zone.delivery_slots == ()


def test_zone_from_record_accepts_nested_center_and_legacy_slot_names():
    zone = zone_from_record(
        _record(
            center={"latitude": 12.9, "longitude": 80.1},
            center_lat=None,
            center_lng=None,
            delivery_slots=json.dumps(
                [
                    {
                        "id": "sunrise",
                        "name": "Sunrise Delivery",
                        "name_tamil": "விடியற்காலை டெலிவரி",
                        "time_range": "6:00 AM - 8:00 AM",
                        "icon": "🌅",
                        "description": "Perfect for early morning cooking",
                    }
                ]
            ),
        )
    )

    assert zone.center == Coordinate(12.9, 80.1)
    assert zone.delivery_slots[0].name_localized == "விடியற்காலை டெலிவரி"
    assert zone.delivery_slots[0].price == 0


def test_zone_from_record_allows_missing_center():
    zone = zone_from_record(_record(center_lat=None, center_lng=None))

    assert zone.center is None
    assert not zone.has_valid_geofence


@pytest.mark.parametrize(
    "overrides",
    [
        {"radius_km": 0},
        {"radius_km": -2.5},
        {"radius_km": None},
        {"delivery_charge": -1},
        {"min_order_amount": -100},
        {"min_order_amount": "lots"},
        {"id": None},
        {"zone_name": ""},
    ],
)
def test_zone_from_record_rejects_invalid_records(overrides):
    with pytest.raises(ZoneValidationError):
        zone_from_record(_record(**overrides))


def test_load_zone_records_skips_invalid_rows():
    zones = load_zone_records([_record(), _record(id="bad", radius_km=0), _record(id="zone_b", radius_km=10)])

    assert [zone.id for zone in zones] == ["zone_a", "zone_b"]


def test_record_round_trip_keeps_slots():
    zone = reference_zones()[0]

    assert zone_from_record(zone_to_record(zone)) == zone


def test_in_memory_repository_filters_inactive():
    zones = load_zone_records([_record(), _record(id="off", is_active=False)])
    repository = InMemoryZoneRepository(zones)

    assert [zone.id for zone in repository.list_active_zones()] == ["zone_a"]
    assert repository.get_zone("off").is_active is False
    assert repository.get_zone("missing") is None


def test_file_repository_reads_wrapped_and_bare_lists(tmp_path: Path):
    wrapped = tmp_path / "wrapped.json"
    bare = tmp_path / "bare.json"
    wrapped.write_text(json.dumps({"zones": [_record(), _record(id="off", is_active=False)]}), encoding="utf-8")
    bare.write_text(json.dumps([_record(id="zone_b", radius_km=10)]), encoding="utf-8")

    assert [zone.id for zone in FileZoneRepository(wrapped).list_active_zones()] == ["zone_a"]
    assert FileZoneRepository(wrapped).get_zone("off") is not None
    assert [zone.id for zone in FileZoneRepository(bare).list_active_zones()] == ["zone_b"]


def test_file_repository_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        FileZoneRepository(tmp_path / "absent.json").list_active_zones()


class _FakeQuery:
    def __init__(self, rows, fail=False):
        self.rows = rows
        self.fail = fail
        self.filters = []
        self.upserted = None

    def select(self, *_):
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def limit(self, _):
        return self

    def upsert(self, records):
        self.upserted = records
        return self

    def execute(self):
        if self.fail:
            raise RuntimeError("network down")
        rows = [r for r in self.rows if all(r.get(c) == v for c, v in self.filters)]
        return type("Response", (), {"data": rows})()


class _FakeClient:
    def __init__(self, rows, fail=False):
        self.query = _FakeQuery(rows, fail)
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        self.query.filters = []
        return self.query


def test_supabase_repository_queries_active_zones():
    client = _FakeClient([_record(), _record(id="off", is_active=False)])
    repository = SupabaseZoneRepository(client, table="zone")

    zones = repository.list_active_zones()

    assert [zone.id for zone in zones] == ["zone_a"]
    assert client.tables == ["zone"]
    assert ("is_active", True) in client.query.filters
    assert repository.get_zone("off").id == "off"


def test_supabase_repository_failure_raises_connection_error():
    repository = SupabaseZoneRepository(_FakeClient([], fail=True), table="zone")

    with pytest.raises(ConnectionError):
        repository.list_active_zones()


def test_supabase_repository_upsert_uses_flat_records():
    client = _FakeClient([])
    count = SupabaseZoneRepository(client, table="zone").upsert_zones(reference_zones())

    assert count == 4
    assert client.query.upserted[0]["zone_name"] == "Zone A - Primary"
    assert client.query.upserted[0]["center_lat"] == pytest.approx(13.0827)


def test_get_zone_repository_falls_back_to_file_then_seed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(zones_repository, "get_supabase_client", lambda: None)
    monkeypatch.setattr(zones_repository.settings, "zones_file", tmp_path / "zones.json")

    zones_repository.get_zone_repository.cache_clear()
    try:
        seeded = zones_repository.get_zone_repository()
        assert isinstance(seeded, InMemoryZoneRepository)
        assert len(seeded.list_active_zones()) == 4

        (tmp_path / "zones.json").write_text(json.dumps({"zones": [_record()]}), encoding="utf-8")
        zones_repository.get_zone_repository.cache_clear()
        from_file = zones_repository.get_zone_repository()
        assert isinstance(from_file, FileZoneRepository)
        assert [zone.id for zone in from_file.list_active_zones()] == ["zone_a"]
    finally:
        zones_repository.get_zone_repository.cache_clear()


@pytest.mark.parametrize(
    "overrides",
    [
        {"radius_km": float("nan")},
        {"radius_km": "NaN"},
        {"radius_km": float("inf")},
        {"center_lat": float("nan")},
        {"center": {"latitude": 13.0, "longitude": float("inf")}},
        {"delivery_charge": float("inf")},
    ],
)
def test_zone_from_record_rejects_non_finite_numbers(overrides):
    with pytest.raises(ZoneValidationError):
        zone_from_record(_record(**overrides))


def test_nan_radius_row_is_skipped_and_smallest_zone_still_wins():
    zones = load_zone_records(
        [_record(id="big", radius_km=10), _record(id="bad", radius_km=float("nan")), _record(id="small", radius_km=5)]
    )

    assert [zone.id for zone in zones] == ["big", "small"]
    assert resolve_zone(Coordinate(13.0827, 80.2707), zones).id == "small"


@pytest.mark.parametrize(
    "slots",
    [
        ["sunrise"],
        {"id": "sunrise", "name": "Sunrise Delivery"},
        '{"id": "sunrise"}',
        [{"id": "sunrise", "name": "Sunrise Delivery"}, 42],
        [{"name": "Nameless id"}],
        [{"id": "sunrise", "name": "Sunrise Delivery", "popular": "sometimes"}],
    ],
)
def test_malformed_slots_skip_only_their_zone(slots):
    zones = load_zone_records([_record(id="a"), _record(id="b", radius_km=10, delivery_slots=slots)])

    assert [zone.id for zone in zones] == ["a"]


def test_is_active_accepts_boolean_strings_only():
    assert zone_from_record(_record(is_active="false")).is_active is False
    assert zone_from_record(_record(is_active="True")).is_active is True
    with pytest.raises(ZoneValidationError):
        zone_from_record(_record(is_active="no"))
    with pytest.raises(ZoneValidationError):
        zone_from_record(_record(is_active=1))


def test_file_repository_with_string_inactive_flag(tmp_path: Path):
    zones_file = tmp_path / "zones.json"
    zones_file.write_text(
        json.dumps({"zones": [_record(id="off", is_active="false"), _record(id="on", radius_km=10)]}),
        encoding="utf-8",
    )

    assert [zone.id for zone in FileZoneRepository(zones_file).list_active_zones()] == ["on"]
