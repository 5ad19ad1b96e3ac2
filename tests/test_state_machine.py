from datetime import datetime, timedelta, timezone

import pytest

from tripdesk.core.exceptions import InvalidStatusError, InvalidTransitionError, ValidationError
from tripdesk.models.custom_inquiry import CustomInquiry
from tripdesk.schemas.common.enums import InquiryStatus
from tripdesk.services.custom_inquiry import TERMINAL_STATUSES, InquiryStateMachine


class FakeClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2030, 1, 10, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def machine(clock):
    return InquiryStateMachine(clock=clock, guard_terminal=False)


def make_inquiry(status=InquiryStatus.PENDING):
    return CustomInquiry(id="inq-1", status=status, admin_notes=None)


def test_reviewed_stamps_reviewed_at(machine, clock):
    inquiry = make_inquiry()

    machine.transition(inquiry, "reviewed", "Looks feasible")

    assert inquiry.status is InquiryStatus.REVIEWED
    assert inquiry.admin_notes == "Looks feasible"
    assert inquiry.reviewed_at == clock.now
    assert inquiry.quoted_at is None


def test_reviewed_is_restamped_on_repeat(machine, clock):
    inquiry = make_inquiry()
    machine.transition(inquiry, "reviewed", None)
    first = inquiry.reviewed_at

    clock.advance(minutes=5)
    machine.transition(inquiry, "reviewed", None)

    assert inquiry.reviewed_at > first
    assert inquiry.reviewed_at == clock.now


def test_reviewed_at_is_not_in_the_future_with_real_clock():
    inquiry = make_inquiry()

    InquiryStateMachine(guard_terminal=False).transition(inquiry, InquiryStatus.REVIEWED, "")

    assert inquiry.reviewed_at <= datetime.now(timezone.utc)


def test_quoted_stamps_quoted_at(machine, clock):
    inquiry = make_inquiry(InquiryStatus.REVIEWED)

    machine.transition(inquiry, "quoted", "sent")

    assert inquiry.quoted_at == clock.now


def test_missing_notes_become_empty_string(machine):
    inquiry = make_inquiry()
    inquiry.admin_notes = "old notes"

    machine.transition(inquiry, "rejected", None)

    assert inquiry.admin_notes == ""


def test_unknown_status_is_rejected(machine):
    inquiry = make_inquiry()

    with pytest.raises(InvalidStatusError) as exc_info:
        machine.transition(inquiry, "archived", None)

    assert isinstance(exc_info.value, ValidationError)
    assert "status" in exc_info.value.field_errors
    assert inquiry.status is InquiryStatus.PENDING


def test_add_quote_from_pending_moves_to_quoted(machine, clock):
    inquiry = make_inquiry()
    valid_until = datetime(2030, 2, 1, tzinfo=timezone.utc)

    machine.add_quote(inquiry, 1450.0, valid_until=valid_until, terms="30% advance")

    assert inquiry.status is InquiryStatus.QUOTED
    assert inquiry.quoted_at == clock.now
    assert inquiry.quote == {
        "finalPrice": 1450.0,
        "validUntil": valid_until.isoformat(),
        "terms": "30% advance",
    }


def test_add_quote_ignores_current_status_when_unguarded(machine):
    inquiry = make_inquiry(InquiryStatus.REJECTED)

    machine.add_quote(inquiry, 0)

    assert inquiry.status is InquiryStatus.QUOTED


def test_negative_quote_is_rejected(machine):
    inquiry = make_inquiry()

    with pytest.raises(ValidationError) as exc_info:
        machine.add_quote(inquiry, -5)

    assert "finalPrice" in exc_info.value.field_errors
    assert inquiry.quote is None
    assert inquiry.status is InquiryStatus.PENDING


@pytest.mark.parametrize("price", [float("nan"), float("inf")])
def test_non_finite_quote_is_rejected(machine, price):
    inquiry = make_inquiry()

    with pytest.raises(ValidationError) as exc_info:
        machine.add_quote(inquiry, price)

    assert "finalPrice" in exc_info.value.field_errors
    assert inquiry.quote is None


def test_completed_reachable_from_every_status():
    for status in InquiryStatus:
        if status is not InquiryStatus.COMPLETED:
            assert InquiryStatus.COMPLETED in InquiryStateMachine.allowed_transitions(status)


def test_lifecycle_edges():
    assert InquiryStateMachine.allowed_transitions("pending") == {
        InquiryStatus.REVIEWED, InquiryStatus.REJECTED, InquiryStatus.COMPLETED,
    }
    assert InquiryStatus.ACCEPTED in InquiryStateMachine.allowed_transitions(InquiryStatus.QUOTED)
    assert InquiryStateMachine.allowed_transitions(InquiryStatus.COMPLETED) == frozenset()


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {InquiryStatus.ACCEPTED, InquiryStatus.REJECTED, InquiryStatus.COMPLETED}
    assert InquiryStateMachine.is_terminal("completed")
    assert not InquiryStateMachine.is_terminal("quoted")


class TestTerminalGuard:
    @pytest.fixture
    def guarded(self, clock):
        return InquiryStateMachine(clock=clock, guard_terminal=True)

    @pytest.mark.parametrize("status", sorted(TERMINAL_STATUSES, key=lambda s: s.value))
    def test_terminal_inquiry_cannot_change_status(self, guarded, status):
        inquiry = make_inquiry(status)

        with pytest.raises(InvalidTransitionError) as exc_info:
            guarded.transition(inquiry, "reviewed", "again")

        assert exc_info.value.status_code == 409
        assert inquiry.status is status

    def test_terminal_inquiry_cannot_be_quoted(self, guarded):
        inquiry = make_inquiry(InquiryStatus.COMPLETED)

        with pytest.raises(InvalidTransitionError):
            guarded.add_quote(inquiry, 100)

        assert inquiry.quote is None

    def test_open_inquiry_still_moves(self, guarded):
        inquiry = make_inquiry(InquiryStatus.QUOTED)

        guarded.transition(inquiry, "accepted", "Customer confirmed")

        assert inquiry.status is InquiryStatus.ACCEPTED
