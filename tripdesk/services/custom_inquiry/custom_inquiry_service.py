"""
Custom inquiry orchestration.

Runs submissions through the itinerary validator, cost aggregator and
reference sanitiser before storing them, applies owner-or-admin checks on
reads and deletes, and renders every inquiry with its references resolved.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.orm import Session

from tripdesk.core.exceptions import AuthorizationError, ResourceNotFoundError
from tripdesk.core.pagination import build_pagination_meta, normalize_pagination
from tripdesk.core.security import CurrentUser
from tripdesk.models.custom_inquiry import CustomInquiry
from tripdesk.repositories.catalog_repository import CatalogRepository
from tripdesk.repositories.custom_inquiry_repository import (
    CustomInquiryFilter,
    CustomInquiryRepository,
)
from tripdesk.schemas.common.enums import InquiryStatus
from tripdesk.schemas.custom_inquiry import (
    CustomInquiryCreate,
    CustomInquiryListData,
    CustomInquiryResponse,
    InquiryQuoteCreate,
    InquiryStatusUpdate,
)
from tripdesk.services.base import BaseService
from tripdesk.services.custom_inquiry.cost_aggregator import CostAggregator
from tripdesk.services.custom_inquiry.itinerary_validator import (
    ItineraryValidator,
    ensure_future_start,
)
from tripdesk.services.custom_inquiry.resource_resolver import ResourceResolver
from tripdesk.services.custom_inquiry.state_machine import InquiryStateMachine, parse_status


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CustomInquiryService(BaseService[CustomInquiryRepository]):
    """
    Submit, list, fetch, update and delete custom trip inquiries.
    """

    def __init__(
        self,
        repository: CustomInquiryRepository,
        db_session: Session,
        resolver: Optional[ResourceResolver] = None,
        validator: Optional[ItineraryValidator] = None,
        cost_aggregator: Optional[CostAggregator] = None,
        state_machine: Optional[InquiryStateMachine] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        super().__init__(repository, db_session)
        self.clock = clock or _utcnow
        self.resolver = resolver or ResourceResolver(CatalogRepository(db_session))
        self.validator = validator or ItineraryValidator()
        self.cost_aggregator = cost_aggregator or CostAggregator()
        self.state_machine = state_machine or InquiryStateMachine(clock=self.clock)

    # -------------------------------------------------------------------------
    # Write operations
    # -------------------------------------------------------------------------

    def submit(
        self,
        payload: CustomInquiryCreate,
        user: Optional[CurrentUser] = None,
    ) -> CustomInquiryResponse:
        """
        Validate and store a new inquiry in ``pending`` status.

        Args:
            payload: Submitted inquiry
            user: Caller identity, None for anonymous submissions

        Returns:
            The stored inquiry with references resolved

        Raises:
            ValidationError: start date not in the future, bad itinerary,
                bad cost values, or (strict policy) bad references
        """
        ensure_future_start(payload.trip_details.start_date, today=self.clock().astimezone(timezone.utc).date())

        trip_details = payload.trip_details.model_dump(by_alias=True, mode="json")
        itinerary = self.validator.validate(
            trip_details,
            [item.model_dump(by_alias=True) for item in payload.itinerary],
        )
        cost = self.cost_aggregator.validate_cost(payload.cost_breakdown.model_dump(by_alias=True))

        preferences = {}
        if payload.preferences is not None:
            preferences = payload.preferences.model_dump(by_alias=True, mode="json", exclude_none=True)
        preferences = self.resolver.sanitize_references(preferences)

        contact_info = payload.contact_info.model_dump(by_alias=True, mode="json")

        inquiry = CustomInquiry(
            user_id=user.id if user else None,
            contact_info=contact_info,
            contact_email=contact_info["email"],
            trip_details=trip_details,
            itinerary=itinerary.value,
            preferences=preferences,
            cost_breakdown=cost.value,
            additional_requirements=payload.additional_requirements,
            status=InquiryStatus.PENDING,
        )
        inquiry = self.repository.create(inquiry)

        self._log_operation(
            "submit_custom_inquiry",
            inquiry.id,
            {
                "anonymous": inquiry.is_anonymous,
                "stops": len(inquiry.itinerary),
                "warnings": len(itinerary.warnings) + len(cost.warnings),
            },
        )
        return self.to_view(inquiry)

    def update_status(
        self,
        inquiry_id: str,
        payload: InquiryStatusUpdate,
        admin: CurrentUser,
    ) -> CustomInquiryResponse:
        """Move an inquiry to another status (staff only)."""
        inquiry = self._find_or_404(inquiry_id)
        self.state_machine.transition(inquiry, payload.status, payload.admin_notes)
        inquiry = self.repository.update(inquiry)

        self._log_operation(
            "update_custom_inquiry_status",
            inquiry.id,
            {"status": inquiry.status.value, "admin_id": admin.id},
        )
        return self.to_view(inquiry)

    def add_quote(
        self,
        inquiry_id: str,
        payload: InquiryQuoteCreate,
        admin: CurrentUser,
    ) -> CustomInquiryResponse:
        """Attach a quote to an inquiry (staff only)."""
        inquiry = self._find_or_404(inquiry_id)
        self.state_machine.add_quote(
            inquiry,
            payload.final_price,
            valid_until=payload.valid_until,
            terms=payload.terms,
        )
        inquiry = self.repository.update(inquiry)

        self._log_operation(
            "quote_custom_inquiry",
            inquiry.id,
            {"final_price": payload.final_price, "admin_id": admin.id},
        )
        return self.to_view(inquiry)

    def delete(self, inquiry_id: str, user: CurrentUser) -> None:
        """Delete an inquiry owned by ``user``, or any inquiry for staff."""
        inquiry = self._find_owned(inquiry_id, user, action="delete")
        self.repository.delete(inquiry)
        self._log_operation("delete_custom_inquiry", inquiry_id, {"by": user.id})

    # -------------------------------------------------------------------------
    # Read operations
    # -------------------------------------------------------------------------

    def get(self, inquiry_id: str, user: CurrentUser) -> CustomInquiryResponse:
        return self.to_view(self._find_owned(inquiry_id, user))

    def list_inquiries(
        self,
        user: CurrentUser,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
    ) -> CustomInquiryListData:
        """
        Page through inquiries visible to ``user``, newest first.

        Staff see every inquiry, anonymous ones included; everyone else sees
        only their own.
        """
        params = normalize_pagination(page, limit)
        filters = CustomInquiryFilter(
            status=parse_status(status) if status else None,
            user_id=None if user.is_admin else user.id,
        )
        items, total = self.repository.list(filters, offset=params.offset, limit=params.limit)

        return CustomInquiryListData(
            inquiries=[self.to_view(item) for item in items],
            pagination=build_pagination_meta(params, total),
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _find_or_404(self, inquiry_id: str) -> CustomInquiry:
        inquiry = self.repository.find_by_id(inquiry_id)
        if inquiry is None:
            raise ResourceNotFoundError("Custom inquiry", str(inquiry_id), "Custom inquiry not found")
        return inquiry

    def _find_owned(self, inquiry_id: str, user: CurrentUser, action: str = "access") -> CustomInquiry:
        inquiry = self._find_or_404(inquiry_id)
        if not user.is_admin and not inquiry.is_owned_by(user.id):
            self._logger.warning(
                f"User {user.id} denied {action} on inquiry {inquiry_id}",
                extra={"inquiry_owner": inquiry.user_id},
            )
            raise AuthorizationError(f"Not authorized to {action} this inquiry")
        return inquiry

    def to_view(self, inquiry: CustomInquiry) -> CustomInquiryResponse:
        """Render ``inquiry`` for clients; nothing resolved here is stored."""
        return CustomInquiryResponse.model_validate({
            "id": inquiry.id,
            "user": inquiry.user_id,
            "contactInfo": inquiry.contact_info,
            "tripDetails": inquiry.trip_details,
            "itinerary": self.resolver.enrich_itinerary(inquiry.itinerary),
            "preferences": self.resolver.enrich(inquiry.preferences),
            "costBreakdown": inquiry.cost_breakdown,
            "additionalRequirements": inquiry.additional_requirements,
            "status": inquiry.status,
            "adminNotes": inquiry.admin_notes,
            "quote": inquiry.quote,
            "createdAt": inquiry.created_at,
            "updatedAt": inquiry.updated_at,
            "reviewedAt": inquiry.reviewed_at,
            "quotedAt": inquiry.quoted_at,
        })
