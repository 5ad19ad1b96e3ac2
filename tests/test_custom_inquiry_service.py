import uuid
from datetime import datetime, timezone

import pytest

from tripdesk.core.exceptions import (
    AuthorizationError,
    InvalidStatusError,
    InvalidTransitionError,
    ResourceNotFoundError,
    ValidationError,
)
from tripdesk.core.security import CurrentUser
from tripdesk.models.custom_inquiry import CustomInquiry
from tripdesk.repositories import CatalogRepository, CustomInquiryRepository
from tripdesk.schemas.common.enums import InquiryStatus
from tripdesk.schemas.custom_inquiry import (
    CustomInquiryCreate,
    InquiryQuoteCreate,
    InquiryStatusUpdate,
)
from tripdesk.services.custom_inquiry import (
    CostAggregator,
    CustomInquiryService,
    InquiryStateMachine,
    ResourceResolver,
)


@pytest.fixture
def owner(user_id):
    return CurrentUser(id=user_id)


@pytest.fixture
def stranger(other_user_id):
    return CurrentUser(id=other_user_id)


@pytest.fixture
def admin(admin_id):
    return CurrentUser(id=admin_id, role="admin")


def build(payload):
    return CustomInquiryCreate.model_validate(payload)


class TestSubmit:
    def test_stores_pending_inquiry_with_owner(self, service, db, inquiry_payload, owner):
        view = service.submit(build(inquiry_payload), user=owner)

        stored = db.get(CustomInquiry, view.id)
        assert stored.user_id == owner.id
        assert stored.status is InquiryStatus.PENDING
        assert stored.contact_email == "nimali.perera@mailbox.org"
        assert [item["order"] for item in stored.itinerary] == [1, 2]
        assert stored.cost_breakdown["totalCost"] == 500
        assert stored.cost_breakdown["hotelCost"] == 0

    def test_anonymous_submission_has_no_owner(self, service, inquiry_payload):
        view = service.submit(build(inquiry_payload))

        assert view.user is None

    def test_start_date_must_be_in_the_future(self, service, inquiry_payload):
        inquiry_payload["tripDetails"]["startDate"] = datetime.now(timezone.utc).isoformat()

        with pytest.raises(ValidationError) as exc_info:
            service.submit(build(inquiry_payload))

        assert "tripDetails.startDate" in exc_info.value.field_errors

    def test_nothing_is_stored_when_itinerary_is_invalid(self, service, db, inquiry_payload):
        inquiry_payload["itinerary"][1]["day"] = 400

        with pytest.raises(ValidationError):
            service.submit(build(inquiry_payload))

        assert db.query(CustomInquiry).count() == 0

    def test_legacy_vehicle_is_stored_as_reference(self, service, db, inquiry_payload, vehicle):
        inquiry_payload["preferences"] = {
            "vehicle": {"id": vehicle.id, "name": "Old van name", "pricePerDay": 10},
        }

        view = service.submit(build(inquiry_payload))

        stored = db.get(CustomInquiry, view.id)
        assert stored.preferences["selectedVehicle"] == vehicle.id
        assert "vehicle" not in stored.preferences
        assert view.preferences.selected_vehicle.name == "Toyota KDH Van"
        assert view.preferences.vehicle.price_per_day == 65.0

    def test_malformed_reference_is_dropped(self, service, db, inquiry_payload):
        inquiry_payload["preferences"] = {"selectedDriver": "driver-123"}

        view = service.submit(build(inquiry_payload))

        assert db.get(CustomInquiry, view.id).preferences["selectedDriver"] is None
        assert view.preferences.selected_driver is None

    def test_strict_reference_policy(self, db, inquiry_payload):
        service = CustomInquiryService(
            CustomInquiryRepository(db),
            db,
            resolver=ResourceResolver(CatalogRepository(db), policy="strict"),
        )
        inquiry_payload["preferences"] = {"selectedDriver": "driver-123"}

        with pytest.raises(ValidationError) as exc_info:
            service.submit(build(inquiry_payload))

        assert "preferences.selectedDriver" in exc_info.value.field_errors

    def test_strict_cost_policy(self, db, inquiry_payload):
        service = CustomInquiryService(
            CustomInquiryRepository(db),
            db,
            cost_aggregator=CostAggregator(strict_total=True),
        )
        inquiry_payload["costBreakdown"] = {"hotelCost": 100, "taxes": 10, "totalCost": 500}

        with pytest.raises(ValidationError) as exc_info:
            service.submit(build(inquiry_payload))

        assert "costBreakdown.totalCost" in exc_info.value.field_errors

    def test_places_are_resolved_in_view(self, service, inquiry_payload, places):
        view = service.submit(build(inquiry_payload))

        assert view.itinerary[0].place.name == "Sigiriya"
        assert view.itinerary[1].place.name == "Galle Fort"


class TestOwnership:
    def test_owner_can_get(self, service, inquiry_payload, owner):
        created = service.submit(build(inquiry_payload), user=owner)

        assert service.get(created.id, owner).id == created.id

    def test_stranger_cannot_get(self, service, inquiry_payload, owner, stranger):
        created = service.submit(build(inquiry_payload), user=owner)

        with pytest.raises(AuthorizationError):
            service.get(created.id, stranger)

    def test_admin_can_get_anonymous(self, service, inquiry_payload, admin):
        created = service.submit(build(inquiry_payload))

        assert service.get(created.id, admin).id == created.id

    def test_anonymous_inquiry_is_admin_only(self, service, inquiry_payload, owner):
        created = service.submit(build(inquiry_payload))

        with pytest.raises(AuthorizationError):
            service.get(created.id, owner)

    def test_unknown_id(self, service, owner):
        with pytest.raises(ResourceNotFoundError):
            service.get(str(uuid.uuid4()), owner)

    def test_stranger_cannot_delete(self, service, db, inquiry_payload, owner, stranger):
        created = service.submit(build(inquiry_payload), user=owner)

        with pytest.raises(AuthorizationError) as exc_info:
            service.delete(created.id, stranger)

        assert exc_info.value.message == "Not authorized to delete this inquiry"
        assert db.get(CustomInquiry, created.id) is not None

    def test_owner_can_delete(self, service, db, inquiry_payload, owner):
        created = service.submit(build(inquiry_payload), user=owner)

        service.delete(created.id, owner)

        assert db.get(CustomInquiry, created.id) is None


class TestList:
    def test_non_admin_only_sees_own(self, service, inquiry_payload, owner, stranger, admin):
        mine = service.submit(build(inquiry_payload), user=owner)
        service.submit(build(inquiry_payload), user=stranger)
        service.submit(build(inquiry_payload))

        data = service.list_inquiries(owner)

        assert [item.id for item in data.inquiries] == [mine.id]
        assert all(item.user == owner.id for item in data.inquiries)
        assert data.pagination.total_items == 1

    def test_admin_sees_everything(self, service, inquiry_payload, owner, stranger, admin):
        service.submit(build(inquiry_payload), user=owner)
        service.submit(build(inquiry_payload), user=stranger)
        service.submit(build(inquiry_payload))

        data = service.list_inquiries(admin)

        assert data.pagination.total_items == 3

    def test_pagination(self, service, inquiry_payload, owner):
        for _ in range(3):
            service.submit(build(inquiry_payload), user=owner)

        data = service.list_inquiries(owner, page=2, limit=2)

        assert len(data.inquiries) == 1
        assert data.pagination.current_page == 2
        assert data.pagination.total_pages == 2
        assert data.pagination.total_items == 3
        assert data.pagination.items_per_page == 2

    def test_status_filter(self, service, inquiry_payload, owner, admin):
        first = service.submit(build(inquiry_payload), user=owner)
        service.submit(build(inquiry_payload), user=owner)
        service.update_status(first.id, InquiryStatusUpdate(status="reviewed"), admin)

        data = service.list_inquiries(owner, status="reviewed")

        assert [item.id for item in data.inquiries] == [first.id]

    def test_unknown_status_filter(self, service, owner):
        with pytest.raises(InvalidStatusError):
            service.list_inquiries(owner, status="archived")


class TestStaffActions:
    def test_update_status(self, service, db, inquiry_payload, admin):
        created = service.submit(build(inquiry_payload))

        view = service.update_status(
            created.id,
            InquiryStatusUpdate(status="reviewed", admin_notes="Hotels available"),
            admin,
        )

        assert view.status is InquiryStatus.REVIEWED
        assert view.admin_notes == "Hotels available"
        assert view.reviewed_at is not None
        assert db.get(CustomInquiry, created.id).status is InquiryStatus.REVIEWED

    def test_add_quote_skips_review(self, service, inquiry_payload, admin):
        created = service.submit(build(inquiry_payload))

        view = service.add_quote(
            created.id,
            InquiryQuoteCreate(final_price=1450, terms="30% advance"),
            admin,
        )

        assert view.status is InquiryStatus.QUOTED
        assert view.quoted_at is not None
        assert view.quote.final_price == 1450
        assert view.quote.terms == "30% advance"

    def test_update_unknown_inquiry(self, service, admin):
        with pytest.raises(ResourceNotFoundError):
            service.update_status(str(uuid.uuid4()), InquiryStatusUpdate(status="reviewed"), admin)

    def test_terminal_guard(self, db, inquiry_payload, admin):
        service = CustomInquiryService(
            CustomInquiryRepository(db),
            db,
            state_machine=InquiryStateMachine(guard_terminal=True),
        )
        created = service.submit(build(inquiry_payload))
        service.update_status(created.id, InquiryStatusUpdate(status="completed"), admin)

        with pytest.raises(InvalidTransitionError):
            service.update_status(created.id, InquiryStatusUpdate(status="reviewed"), admin)
        with pytest.raises(InvalidTransitionError):
            service.add_quote(created.id, InquiryQuoteCreate(final_price=100), admin)
