"""Zone store: read access to zone records, validated at the boundary.

The resolver only needs ``list_active_zones``; how the records are persisted
is up to the store. Three stores are provided: an in-memory snapshot, a JSON
file, and a Supabase table.
"""

from __future__ import annotations

import functools
import json
import logging
import math
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Coordinate, DeliverySlot, Zone
from ..services.zoning.errors import ZoneValidationError

logger = logging.getLogger(__name__)


class ZoneRepository(Protocol):
    def list_active_zones(self) -> Sequence[Zone]:
        ...

    def get_zone(self, zone_id: str) -> Optional[Zone]:
        ...


def _coerce_int(value: Any, field_name: str) -> int:
    try:
        number = int(round(float(value)))
    except (TypeError, ValueError, OverflowError) as exc:
        raise ZoneValidationError(f"{field_name} must be a number, got {value!r}") from exc
    if number < 0:
        raise ZoneValidationError(f"{field_name} must be non-negative, got {number}")
    return number


def _coerce_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ZoneValidationError(f"{field_name} must be a boolean, got {value!r}")


def _parse_center(row: Mapping[str, Any]) -> Optional[Coordinate]:
    center = row.get("center")
    if isinstance(center, Mapping):
        lat = center.get("latitude", center.get("lat"))
        lng = center.get("longitude", center.get("lng"))
    else:
        lat = row.get("center_lat")
        lng = row.get("center_lng")
    if lat is None or lng is None:
        return None
    try:
        latitude, longitude = float(lat), float(lng)
    except (TypeError, ValueError) as exc:
        raise ZoneValidationError(f"center must be numeric, got ({lat!r}, {lng!r})") from exc
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ZoneValidationError(f"center must be finite, got ({lat!r}, {lng!r})")
    return Coordinate(latitude=latitude, longitude=longitude)


def slot_from_record(row: Mapping[str, Any]) -> DeliverySlot:
    """Build a slot from a stored record; ``name_tamil`` is accepted as the localized name."""

    try:
        slot_id = str(row["id"])
        name = str(row["name"])
    except KeyError as exc:
        raise ZoneValidationError(f"delivery slot missing field {exc.args[0]!r}") from exc
    return DeliverySlot(
        id=slot_id,
        name=name,
        name_localized=str(row.get("name_localized") or row.get("name_tamil") or name),
        time_range=str(row.get("time_range") or ""),
        time_range_localized=row.get("time_range_localized"),
        icon=str(row.get("icon") or ""),
        description=str(row.get("description") or ""),
        price=_coerce_int(row.get("price", 0), "price"),
        popular=_coerce_bool(row.get("popular", False), "popular"),
    )


def zone_from_record(row: Mapping[str, Any]) -> Zone:
    """Validate a stored zone record and convert it into a ``Zone``.

    Raises:
        ZoneValidationError: if the record has no id or name, a non-finite or
            non-positive radius, a negative delivery charge or minimum order
            amount, or malformed slots.
    """
    zone_id = row.get("id")
    name = row.get("zone_name") or row.get("name")
    if not zone_id:
        raise ZoneValidationError("zone record missing 'id'")
    if not name:
        raise ZoneValidationError(f"zone '{zone_id}' missing 'zone_name'")

    try:
        radius_km = float(row.get("radius_km"))
    except (TypeError, ValueError) as exc:
        raise ZoneValidationError(f"zone '{zone_id}' radius_km must be a number") from exc
    if not math.isfinite(radius_km) or radius_km <= 0:
        raise ZoneValidationError(f"zone '{zone_id}' radius_km must be a positive finite number, got {radius_km}")

    slots_raw = row.get("delivery_slots") or []
    if isinstance(slots_raw, str):
        slots_raw = json.loads(slots_raw)
    if not isinstance(slots_raw, list) or not all(isinstance(slot, Mapping) for slot in slots_raw):
        raise ZoneValidationError(f"zone '{zone_id}' delivery_slots must be a list of slot objects")

    return Zone(
        id=str(zone_id),
        name=str(name),
        center=_parse_center(row),
        radius_km=radius_km,
        delivery_charge=_coerce_int(row.get("delivery_charge", 0), "delivery_charge"),
        min_order_amount=_coerce_int(row.get("min_order_amount", 0), "min_order_amount"),
        is_active=_coerce_bool(row.get("is_active", True), "is_active"),
        delivery_slots=tuple(slot_from_record(slot) for slot in slots_raw),
    )


def zone_to_record(zone: Zone) -> dict[str, Any]:
    """Flat record layout shared by the JSON file and the Supabase table."""

    return {
        "id": zone.id,
        "zone_name": zone.name,
        "center_lat": zone.center.latitude if zone.center else None,
        "center_lng": zone.center.longitude if zone.center else None,
        "radius_km": zone.radius_km,
        "delivery_charge": zone.delivery_charge,
        "min_order_amount": zone.min_order_amount,
        "is_active": zone.is_active,
        "delivery_slots": [slot.to_dict() for slot in zone.delivery_slots],
    }


def load_zone_records(rows: Iterable[Mapping[str, Any]]) -> tuple[Zone, ...]:
    """Convert raw rows, skipping (and logging) any that fail validation."""

    zones: list[Zone] = []
    for row in rows:
        try:
            zones.append(zone_from_record(row))
        except (ZoneValidationError, json.JSONDecodeError) as exc:
            logging.warning(f"Skipping invalid zone record {row.get('id')!r}: {exc}")
    return tuple(zones)


class InMemoryZoneRepository:
    """Holds an immutable snapshot of zones."""

    def __init__(self, zones: Iterable[Zone]) -> None:
        self._zones = tuple(zones)

    def list_active_zones(self) -> Sequence[Zone]:
        return tuple(zone for zone in self._zones if zone.is_active)

    def get_zone(self, zone_id: str) -> Optional[Zone]:
        for zone in self._zones:
            if zone.id == zone_id:
                return zone
        return None


class FileZoneRepository:
    """Reads zone records from a JSON file on every call.

    The file holds either ``{"zones": [...]}`` or a bare list of records.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or settings.zones_file

    def _load(self) -> tuple[Zone, ...]:
        if not self.path.exists():
            raise FileNotFoundError(f"Zone file not found: {self.path}")
        with self.path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        rows = payload.get("zones", []) if isinstance(payload, dict) else payload
        return load_zone_records(rows)

    def list_active_zones(self) -> Sequence[Zone]:
        return tuple(zone for zone in self._load() if zone.is_active)

    def get_zone(self, zone_id: str) -> Optional[Zone]:
        for zone in self._load():
            if zone.id == zone_id:
                return zone
        return None


class SupabaseZoneRepository:
    """Reads zone records from a Supabase table."""

    def __init__(self, client, table: str | None = None) -> None:
        self.client = client
        self.table = table or settings.zones_table

    def list_active_zones(self) -> Sequence[Zone]:
        try:
            response = self.client.table(self.table).select("*").eq("is_active", True).execute()
        except Exception as exc:
            logger.warning(f"Zone query against '{self.table}' failed: {exc}")
            raise ConnectionError(f"Unable to load zones from database: {exc}") from exc
        return tuple(zone for zone in load_zone_records(response.data or []) if zone.is_active)

    def get_zone(self, zone_id: str) -> Optional[Zone]:
        try:
            response = self.client.table(self.table).select("*").eq("id", zone_id).limit(1).execute()
        except Exception as exc:
            logger.warning(f"Zone lookup for '{zone_id}' failed: {exc}")
            raise ConnectionError(f"Unable to load zone from database: {exc}") from exc
        zones = load_zone_records(response.data or [])
        return zones[0] if zones else None

    def upsert_zones(self, zones: Iterable[Zone]) -> int:
        records = [zone_to_record(zone) for zone in zones]
        if not records:
            return 0
        self.client.table(self.table).upsert(records).execute()
        return len(records)


@functools.lru_cache(maxsize=1)
def get_zone_repository() -> ZoneRepository:
    """Supabase when configured, then the JSON zone file, then the reference seed."""

    client = get_supabase_client()
    if client is not None:
        return SupabaseZoneRepository(client)

    if settings.zones_file.exists():
        logging.info(f"Supabase not configured - reading zones from {settings.zones_file}")
        return FileZoneRepository(settings.zones_file)

    from .seed import reference_zones

    logging.warning("No zone store configured - serving the reference zones")
    return InMemoryZoneRepository(reference_zones())
