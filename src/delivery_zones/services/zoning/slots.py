"""Delivery slot lookup with a process-wide default table."""

from __future__ import annotations

from typing import Optional

from ...models.domain import DeliverySlot, Zone

DEFAULT_DELIVERY_SLOTS: tuple[DeliverySlot, ...] = (
    DeliverySlot(
        id="sunrise",
        name="Sunrise Delivery",
        name_localized="விடியற்காலை டெலிவரி",
        time_range="6:00 AM - 8:00 AM",
        time_range_localized="காலை 6:00 - 8:00",
        icon="🌅",
        description="Perfect for early morning cooking",
        price=0,
    ),
    DeliverySlot(
        id="morning",
        name="Morning Delivery",
        name_localized="காலை டெலிவரி",
        time_range="8:00 AM - 12:00 PM",
        time_range_localized="காலை 8:00 - மதியம் 12:00",
        icon="🌞",
        description="Standard morning delivery",
        price=0,
        popular=True,
    ),
    DeliverySlot(
        id="evening",
        name="Evening Delivery",
        name_localized="மாலை டெலிவரி",
        time_range="4:00 PM - 7:00 PM",
        time_range_localized="மாலை 4:00 - 7:00",
        icon="🌆",
        description="Evening delivery for dinner prep",
        price=3000,
    ),
)


def resolve_slots(zone: Optional[Zone]) -> list[DeliverySlot]:
    """Return the zone's own slots, or the default table when it has none."""

    if zone is not None and zone.delivery_slots:
        return list(zone.delivery_slots)
    return list(DEFAULT_DELIVERY_SLOTS)

