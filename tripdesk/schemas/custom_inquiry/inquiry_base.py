# --- File: tripdesk/schemas/custom_inquiry/inquiry_base.py ---
"""
Custom trip inquiry submission schemas.

Field *shapes* are checked here. Itinerary bounds and cost values are left
loosely typed on purpose: they are checked by the itinerary validator and the
cost aggregator so that both the HTTP layer and internal callers get the same
field-level messages.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import ConfigDict, EmailStr, Field, StrictInt, field_validator

from tripdesk.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "ContactInfo",
    "TripDetails",
    "ItineraryItemIn",
    "HotelTier",
    "LegacyResourceSnapshot",
    "PreferencesIn",
    "CostBreakdownIn",
    "CustomInquiryCreate",
]


class ContactInfo(BaseSchema):
    """Who to get back to about the inquiry."""

    name: str = Field(
        ...,
        min_length=2,
        max_length=100,
        description="Full name of the person making the inquiry",
    )
    email: EmailStr = Field(..., description="Email address for communication")
    phone: Optional[str] = Field(default=None, max_length=30)
    country: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class TripDetails(BaseSchema):
    """Dates and party size of the requested trip."""

    start_date: datetime = Field(..., description="First day of the trip")
    travellers: int = Field(..., ge=1, le=50, description="Number of travellers (1-50)")
    total_days: int = Field(..., ge=1, description="Trip length in days")
    total_nights: int = Field(..., ge=0, description="Trip length in nights")


class ItineraryItemIn(BaseSchema):
    """
    One stop of a submitted itinerary.

    ``order`` is accepted for compatibility with older clients and ignored;
    the server recomputes it from array position.
    """
    model_config = ConfigDict(extra="ignore")

    place: Optional[str] = Field(default=None, description="Place reference")
    day: Optional[StrictInt] = None
    time_of_day: Optional[str] = None
    nights: Optional[StrictInt] = None
    order: Optional[int] = None


class HotelTier(BaseSchema):
    """Accommodation level chosen for the trip."""

    id: Optional[str] = None
    name: Optional[str] = None
    stars: Optional[int] = Field(default=None, ge=1, le=7)
    price_per_night: Optional[float] = Field(default=None, ge=0)


class LegacyResourceSnapshot(BaseSchema):
    """Inline vehicle/guide/driver object sent by older clients."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None
    price_per_day: Optional[float] = None


class PreferencesIn(BaseSchema):
    """
    Optional trip preferences.

    Reference fields take any value: malformed identifiers are nulled by the
    resource resolver rather than rejected here.
    """
    model_config = ConfigDict(extra="ignore")

    hotel_tier: Optional[HotelTier] = None
    selected_vehicle: Optional[Any] = None
    selected_tour_guide: Optional[Any] = None
    selected_driver: Optional[Any] = None

    # Legacy inline snapshots
    vehicle: Optional[LegacyResourceSnapshot] = None
    tour_guide: Optional[LegacyResourceSnapshot] = None
    driver: Optional[LegacyResourceSnapshot] = None


class CostBreakdownIn(BaseSchema):
    """Itemized estimate supplied by the client."""
    model_config = ConfigDict(extra="ignore")

    hotel_cost: Optional[float] = Field(default=None, allow_inf_nan=False)
    transport_cost: Optional[float] = Field(default=None, allow_inf_nan=False)
    guide_cost: Optional[float] = Field(default=None, allow_inf_nan=False)
    driver_cost: Optional[float] = Field(default=None, allow_inf_nan=False)
    taxes: Optional[float] = Field(default=None, allow_inf_nan=False)
    total_cost: Optional[float] = Field(default=None, allow_inf_nan=False)


class CustomInquiryCreate(BaseCreateSchema):
    """
    Body of a custom trip inquiry submission.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "contactInfo": {
                    "name": "Nimali Perera",
                    "email": "nimali@example.com",
                    "phone": "+94771234567",
                    "country": "Sri Lanka",
                },
                "tripDetails": {
                    "startDate": "2030-03-01",
                    "travellers": 2,
                    "totalDays": 5,
                    "totalNights": 4,
                },
                "itinerary": [
                    {"place": "5b0c6a55-4e1b-4c51-9a1f-0f3a2b1c9d10", "day": 1, "timeOfDay": "day", "nights": 1},
                    {"place": "1c2d3e4f-5a6b-4c7d-8e9f-a0b1c2d3e4f5", "day": 2, "timeOfDay": "night", "nights": 1},
                ],
                "preferences": {
                    "hotelTier": {"id": "deluxe", "name": "Deluxe", "stars": 4, "pricePerNight": 120},
                    "selectedVehicle": "7d8e9f10-1a2b-4c3d-9e4f-5a6b7c8d9e0f",
                },
                "costBreakdown": {"hotelCost": 480, "transportCost": 200, "taxes": 20, "totalCost": 700},
                "additionalRequirements": "Vegetarian meals please",
            }
        }
    )

    contact_info: ContactInfo
    trip_details: TripDetails
    itinerary: List[ItineraryItemIn] = Field(default_factory=list)
    preferences: Optional[PreferencesIn] = None
    cost_breakdown: CostBreakdownIn
    additional_requirements: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Anything else the team should know",
    )

    @field_validator("additional_requirements")
    @classmethod
    def clean_requirements(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) == 0:
            return None
        return v
