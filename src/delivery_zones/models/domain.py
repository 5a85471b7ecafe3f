"""Domain models for delivery zones and delivery slots."""

import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A point in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class DeliverySlot:
    """A named delivery time window offered within a zone or by default."""

    id: str
    name: str
    name_localized: str
    time_range: str
    icon: str
    description: str
    time_range_localized: Optional[str] = None
    price: int = 0  # surcharge in paise
    popular: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "name_localized": self.name_localized,
            "time_range": self.time_range,
            "time_range_localized": self.time_range_localized,
            "icon": self.icon,
            "description": self.description,
            "price": self.price,
            "popular": self.popular,
        }


@dataclass(frozen=True, slots=True)
class Zone:
    """A geofenced delivery area with its own pricing and time slots.

    Monetary fields are in minor currency units (paise). Field validation
    happens where records enter the system (see ``zone_from_record``), so a
    ``Zone`` built directly may still carry a degenerate geofence.
    """

    id: str
    name: str
    center: Optional[Coordinate]
    radius_km: float
    delivery_charge: int
    min_order_amount: int
    is_active: bool = True
    delivery_slots: tuple[DeliverySlot, ...] = field(default_factory=tuple)

    @property
    def has_valid_geofence(self) -> bool:
        if self.center is None:
            return False
        values = (self.center.latitude, self.center.longitude, self.radius_km)
        return all(math.isfinite(value) for value in values) and self.radius_km > 0
