"""Pydantic request/response models for zone and delivery slot endpoints."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class ZoneCheckRequest(BaseModel):
    # missing coordinates are rejected by the route with a 400
    latitude: Optional[float] = Field(default=None, description="Latitude in decimal degrees.")
    longitude: Optional[float] = Field(default=None, description="Longitude in decimal degrees.")


class DeliverySlotModel(BaseModel):
    id: str
    name: str
    name_localized: str
    time_range: str
    time_range_localized: Optional[str] = None
    icon: str
    description: str
    price: int = 0
    popular: bool = False


class ZoneSummaryModel(BaseModel):
    id: str
    zone_name: str
    delivery_charge: int
    min_order_amount: int
    delivery_slots: List[DeliverySlotModel]


class ZoneCheckResponse(BaseModel):
    zone: ZoneSummaryModel


class ZoneModel(ZoneSummaryModel):
    center_lat: Optional[float] = None
    center_lng: Optional[float] = None
    radius_km: float
    is_active: bool


class ZoneListResponse(BaseModel):
    zones: List[ZoneModel]


class DeliverySlotsResponse(BaseModel):
    delivery_slots: List[DeliverySlotModel]


class MinimumOrderRequest(BaseModel):
    order_amount: int = Field(..., ge=0, description="Order subtotal in paise.")


class MinimumOrderResponse(BaseModel):
    valid: bool
    min_order_amount: int
    shortfall: int
    message: str


class FeatureCollectionResponse(BaseModel):
    type: str = "FeatureCollection"
    features: List[dict[str, Any]]
