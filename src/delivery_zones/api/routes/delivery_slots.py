"""API routes for delivery slots."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query, status

from ...schemas.zones import DeliverySlotsResponse
from ...services.outputs.formatter import slots_to_payload
from ...services.zoning.service import get_zone_service

router = APIRouter(prefix="/delivery-slots", tags=["delivery-slots"])


@router.get("", response_model=DeliverySlotsResponse, status_code=status.HTTP_200_OK)
def delivery_slots(
    zone_id: str | None = Query(default=None, alias="zoneId", description="Zone to fetch custom slots for"),
) -> dict[str, Any]:
    """Slots for a zone, or the default table when the zone has none or is not given."""
    try:
        slots = get_zone_service().delivery_slots(zone_id)
    except ConnectionError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Zone store unavailable: {exc}",
        ) from exc
    except Exception as exc:
        logging.exception(f"Error loading delivery slots: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load delivery slots: {exc}",
        ) from exc

    return {"delivery_slots": slots_to_payload(slots)}
