# --- File: tripdesk/schemas/custom_inquiry/inquiry_response.py ---
"""
Custom trip inquiry response schemas.

Resource references are rendered either as a display snapshot (resolved)
or as the raw identifier (unresolved); both shapes are part of the contract.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import Field

from tripdesk.schemas.common.base import BaseSchema
from tripdesk.schemas.common.enums import InquiryStatus
from tripdesk.schemas.common.pagination import PaginationMeta
from tripdesk.schemas.custom_inquiry.inquiry_base import (
    ContactInfo,
    HotelTier,
    LegacyResourceSnapshot,
    TripDetails,
)

__all__ = [
    "VehicleSnapshot",
    "TourGuideSnapshot",
    "DriverSnapshot",
    "PlaceSnapshot",
    "ItineraryItemOut",
    "PreferencesOut",
    "CostBreakdownOut",
    "QuoteOut",
    "CustomInquiryResponse",
    "CustomInquiryEnvelope",
    "CustomInquiryListData",
]


class VehicleSnapshot(BaseSchema):
    id: str
    name: str
    type: Optional[str] = None
    capacity: Optional[int] = None


class TourGuideSnapshot(BaseSchema):
    id: str
    name: str
    languages: List[str] = Field(default_factory=list)
    rating: Optional[float] = None


class DriverSnapshot(BaseSchema):
    id: str
    name: str
    license_type: Optional[str] = None
    rating: Optional[float] = None


class PlaceSnapshot(BaseSchema):
    id: str
    name: str
    location: Optional[str] = None


class ItineraryItemOut(BaseSchema):
    place: Union[PlaceSnapshot, str]
    day: int
    time_of_day: str
    nights: int
    order: int


class PreferencesOut(BaseSchema):
    """Preferences as displayed: references resolved where possible."""

    hotel_tier: Optional[HotelTier] = None
    selected_vehicle: Union[VehicleSnapshot, str, None] = None
    selected_tour_guide: Union[TourGuideSnapshot, str, None] = None
    selected_driver: Union[DriverSnapshot, str, None] = None

    # Read-only projection for older clients
    vehicle: Optional[LegacyResourceSnapshot] = None
    tour_guide: Optional[LegacyResourceSnapshot] = None
    driver: Optional[LegacyResourceSnapshot] = None


class CostBreakdownOut(BaseSchema):
    hotel_cost: float = 0
    transport_cost: float = 0
    guide_cost: float = 0
    driver_cost: float = 0
    taxes: float = 0
    total_cost: float


class QuoteOut(BaseSchema):
    final_price: float
    valid_until: Optional[datetime] = None
    terms: Optional[str] = None


class CustomInquiryResponse(BaseSchema):
    """
    Full inquiry as returned by every read and write endpoint.
    """

    id: str
    user: Optional[str] = Field(default=None, description="Owner id, absent for anonymous inquiries")
    contact_info: ContactInfo
    trip_details: TripDetails
    itinerary: List[ItineraryItemOut]
    preferences: PreferencesOut = Field(default_factory=PreferencesOut)
    cost_breakdown: CostBreakdownOut
    additional_requirements: Optional[str] = None
    status: InquiryStatus
    admin_notes: Optional[str] = None
    quote: Optional[QuoteOut] = None
    created_at: datetime
    updated_at: datetime
    reviewed_at: Optional[datetime] = None
    quoted_at: Optional[datetime] = None


class CustomInquiryEnvelope(BaseSchema):
    inquiry: CustomInquiryResponse


class CustomInquiryListData(BaseSchema):
    inquiries: List[CustomInquiryResponse]
    pagination: PaginationMeta
