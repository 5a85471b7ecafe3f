"""Utilities to serialize zones and slots into API payloads."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from ...config import settings
from ...models.domain import DeliverySlot, Zone


def format_currency(amount_in_paise: int) -> str:
    """Render a paise amount as whole rupees, e.g. ``30000 -> "₹300"``; halves round up."""

    rupees = (Decimal(amount_in_paise) / 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{settings.currency_symbol}{rupees}"


def slots_to_payload(slots: Sequence[DeliverySlot]) -> list[dict]:
    return [slot.to_dict() for slot in slots]


def zone_summary_payload(zone: Zone) -> dict:
    """Checkout-facing summary returned by the zone check."""

    return {
        "id": zone.id,
        "zone_name": zone.name,
        "delivery_charge": zone.delivery_charge,
        "min_order_amount": zone.min_order_amount,
        "delivery_slots": slots_to_payload(zone.delivery_slots),
    }


def zone_payload(zone: Zone) -> dict:
    return {
        **zone_summary_payload(zone),
        "center_lat": zone.center.latitude if zone.center else None,
        "center_lng": zone.center.longitude if zone.center else None,
        "radius_km": zone.radius_km,
        "is_active": zone.is_active,
    }
