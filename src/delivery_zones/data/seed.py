"""Reference zones for the Chennai business center."""

from __future__ import annotations

from ..config import settings
from ..models.domain import Coordinate, Zone
from ..services.zoning.slots import DEFAULT_DELIVERY_SLOTS

# (id, name, radius_km, delivery_charge, min_order_amount); money in paise
REFERENCE_ZONE_TABLE: tuple[tuple[str, str, float, int, int], ...] = (
    ("zone_a", "Zone A - Primary", 5.0, 0, 30000),
    ("zone_b", "Zone B - Secondary", 10.0, 3000, 40000),
    ("zone_c", "Zone C - Extended", 15.0, 5000, 50000),
    ("zone_d", "Zone D - Outer", 25.0, 8000, 70000),
)


def reference_zones(center: Coordinate | None = None) -> tuple[Zone, ...]:
    """Concentric zones around ``center`` (defaults to the configured business center)."""

    center = center or Coordinate(settings.default_center_lat, settings.default_center_lng)
    return tuple(
        Zone(
            id=zone_id,
            name=name,
            center=center,
            radius_km=radius_km,
            delivery_charge=delivery_charge,
            min_order_amount=min_order_amount,
            is_active=True,
            delivery_slots=DEFAULT_DELIVERY_SLOTS,
        )
        for zone_id, name, radius_km, delivery_charge, min_order_amount in REFERENCE_ZONE_TABLE
    )
