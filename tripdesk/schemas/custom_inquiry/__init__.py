"""
Custom trip inquiry schemas.
"""

from tripdesk.schemas.custom_inquiry.inquiry_base import (
    ContactInfo,
    CostBreakdownIn,
    CustomInquiryCreate,
    HotelTier,
    ItineraryItemIn,
    LegacyResourceSnapshot,
    PreferencesIn,
    TripDetails,
)
from tripdesk.schemas.custom_inquiry.inquiry_response import (
    CostBreakdownOut,
    CustomInquiryEnvelope,
    CustomInquiryListData,
    CustomInquiryResponse,
    DriverSnapshot,
    ItineraryItemOut,
    PlaceSnapshot,
    PreferencesOut,
    QuoteOut,
    TourGuideSnapshot,
    VehicleSnapshot,
)
from tripdesk.schemas.custom_inquiry.inquiry_status import InquiryQuoteCreate, InquiryStatusUpdate

__all__ = [
    # Submission
    "ContactInfo",
    "TripDetails",
    "ItineraryItemIn",
    "HotelTier",
    "LegacyResourceSnapshot",
    "PreferencesIn",
    "CostBreakdownIn",
    "CustomInquiryCreate",
    # Staff mutations
    "InquiryStatusUpdate",
    "InquiryQuoteCreate",
    # Responses
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
