"""
Custom trip inquiry services.
"""

from tripdesk.services.custom_inquiry.cost_aggregator import CostAggregator, components_total
from tripdesk.services.custom_inquiry.custom_inquiry_service import CustomInquiryService
from tripdesk.services.custom_inquiry.itinerary_validator import (
    ItineraryValidator,
    ensure_future_start,
    reindex,
)
from tripdesk.services.custom_inquiry.resource_resolver import (
    Resolution,
    ResolutionState,
    ResourceResolver,
)
from tripdesk.services.custom_inquiry.state_machine import (
    TERMINAL_STATUSES,
    InquiryStateMachine,
)

__all__ = [
    "CostAggregator",
    "components_total",
    "CustomInquiryService",
    "ItineraryValidator",
    "ensure_future_start",
    "reindex",
    "Resolution",
    "ResolutionState",
    "ResourceResolver",
    "TERMINAL_STATUSES",
    "InquiryStateMachine",
]
