"""API routes for delivery zone lookup."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, status

from ...schemas.zones import (
    FeatureCollectionResponse,
    MinimumOrderRequest,
    MinimumOrderResponse,
    ZoneCheckRequest,
    ZoneCheckResponse,
    ZoneListResponse,
)
from ...services.export.geojson import zones_to_feature_collection
from ...services.outputs.formatter import zone_payload, zone_summary_payload
from ...services.zoning.errors import OutsideDeliveryAreaError, ZoneNotFoundError
from ...services.zoning.service import get_zone_service

router = APIRouter(prefix="/zones", tags=["zones"])

OUTSIDE_DELIVERY_AREA = {
    "error": "Address is outside our delivery area",
    "message": "We currently don't deliver to this location. Please try a different address.",
}


def _store_unavailable(exc: ConnectionError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Zone store unavailable: {exc}",
    )


def _internal_error(action: str, exc: Exception) -> HTTPException:
    logging.exception(f"Error {action}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed {action}: {exc}",
    )


@router.post("/check", response_model=ZoneCheckResponse, status_code=status.HTTP_200_OK)
def check_zone(payload: Optional[ZoneCheckRequest] = None) -> dict[str, Any]:
    """Find the delivery zone for a coordinate.

    Responds 400 when either coordinate is missing and 404 when the point is
    outside every active zone; the latter is a normal business outcome. A
    request without a body is treated like one without coordinates.
    """
    if payload is None or payload.latitude is None or payload.longitude is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Latitude and longitude are required"},
        )

    try:
        zone = get_zone_service().check_zone(payload.latitude, payload.longitude)
    except OutsideDeliveryAreaError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=OUTSIDE_DELIVERY_AREA)
    except ConnectionError as exc:
        raise _store_unavailable(exc) from exc
    except Exception as exc:
        raise _internal_error("checking zone", exc) from exc

    return {"zone": zone_summary_payload(zone)}


@router.get("", response_model=ZoneListResponse, status_code=status.HTTP_200_OK)
def list_zones() -> dict[str, Any]:
    """List active zones, most specific first."""
    try:
        zones = get_zone_service().list_zones()
    except ConnectionError as exc:
        raise _store_unavailable(exc) from exc
    except Exception as exc:
        raise _internal_error("listing zones", exc) from exc

    return {"zones": [zone_payload(zone) for zone in zones]}


@router.get("/geojson", response_model=FeatureCollectionResponse, status_code=status.HTTP_200_OK)
def zones_geojson() -> dict[str, Any]:
    """Active zone geofences as a GeoJSON FeatureCollection for map overlays."""
    try:
        zones = get_zone_service().list_zones()
        return zones_to_feature_collection(zones)
    except ConnectionError as exc:
        raise _store_unavailable(exc) from exc
    except Exception as exc:
        raise _internal_error("exporting zones", exc) from exc


@router.post(
    "/{zone_id}/validate-order",
    response_model=MinimumOrderResponse,
    status_code=status.HTTP_200_OK,
)
def validate_order(zone_id: str, payload: MinimumOrderRequest) -> dict[str, Any]:
    """Check an order subtotal against the zone's minimum order amount."""
    try:
        check = get_zone_service().validate_minimum_order(zone_id, payload.order_amount)
    except ZoneNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConnectionError as exc:
        raise _store_unavailable(exc) from exc
    except Exception as exc:
        raise _internal_error("validating order", exc) from exc

    return {
        "valid": check.valid,
        "min_order_amount": check.min_order_amount,
        "shortfall": check.shortfall,
        "message": check.message,
    }
