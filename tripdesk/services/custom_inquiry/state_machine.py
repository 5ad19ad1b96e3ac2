"""
Custom inquiry lifecycle.

pending -> reviewed -> quoted -> accepted | rejected. ``rejected`` can be
reached from any non-terminal status and ``completed`` from any status.
Transitions are not enforced against this graph: staff may set any known
status, and quoting forces ``quoted`` from wherever the inquiry is. With the
terminal guard enabled, inquiries that are accepted, rejected or completed
can no longer be changed.
"""

import math
from datetime import datetime, timezone
from typing import Callable, Dict, FrozenSet, Optional

from tripdesk.config.settings import settings
from tripdesk.core.exceptions import InvalidStatusError, InvalidTransitionError, ValidationError
from tripdesk.core.logging import get_logger
from tripdesk.models.custom_inquiry import CustomInquiry
from tripdesk.schemas.common.enums import InquiryStatus

logger = get_logger(__name__)

TERMINAL_STATUSES: FrozenSet[InquiryStatus] = frozenset({
    InquiryStatus.ACCEPTED,
    InquiryStatus.REJECTED,
    InquiryStatus.COMPLETED,
})

LIFECYCLE: Dict[InquiryStatus, FrozenSet[InquiryStatus]] = {
    InquiryStatus.PENDING: frozenset({
        InquiryStatus.REVIEWED, InquiryStatus.REJECTED, InquiryStatus.COMPLETED,
    }),
    InquiryStatus.REVIEWED: frozenset({
        InquiryStatus.QUOTED, InquiryStatus.REJECTED, InquiryStatus.COMPLETED,
    }),
    InquiryStatus.QUOTED: frozenset({
        InquiryStatus.ACCEPTED, InquiryStatus.REJECTED, InquiryStatus.COMPLETED,
    }),
    InquiryStatus.ACCEPTED: frozenset({InquiryStatus.COMPLETED}),
    InquiryStatus.REJECTED: frozenset({InquiryStatus.COMPLETED}),
    InquiryStatus.COMPLETED: frozenset(),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_status(value) -> InquiryStatus:
    """Coerce ``value`` to an InquiryStatus or raise InvalidStatusError."""
    if isinstance(value, InquiryStatus):
        return value
    try:
        return InquiryStatus(value)
    except ValueError:
        raise InvalidStatusError(value, InquiryStatus.values()) from None


class InquiryStateMachine:
    """Apply status changes and quotes to an inquiry in place."""

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        guard_terminal: Optional[bool] = None,
    ):
        self.clock = clock or _utcnow
        if guard_terminal is None:
            guard_terminal = settings.INQUIRY_TERMINAL_GUARD
        self.guard_terminal = guard_terminal

    @staticmethod
    def allowed_transitions(status: InquiryStatus) -> FrozenSet[InquiryStatus]:
        """Lifecycle edges out of ``status``."""
        return LIFECYCLE[parse_status(status)]

    @staticmethod
    def is_terminal(status: InquiryStatus) -> bool:
        return parse_status(status) in TERMINAL_STATUSES

    def _check_guard(self, inquiry: CustomInquiry, requested: InquiryStatus) -> None:
        if self.guard_terminal and inquiry.status in TERMINAL_STATUSES:
            raise InvalidTransitionError(inquiry.status.value, requested.value)

    def transition(
        self,
        inquiry: CustomInquiry,
        new_status,
        admin_notes: Optional[str] = None,
    ) -> CustomInquiry:
        """
        Set the status and admin notes of ``inquiry``.

        ``reviewed`` stamps ``reviewed_at`` and ``quoted`` stamps
        ``quoted_at``, on every call.

        Raises:
            InvalidStatusError: ``new_status`` is not a known status
            InvalidTransitionError: terminal guard enabled and the inquiry
                is in a terminal status
        """
        status = parse_status(new_status)
        self._check_guard(inquiry, status)

        previous = inquiry.status
        inquiry.status = status
        inquiry.admin_notes = admin_notes if admin_notes is not None else ""

        now = self.clock()
        if status is InquiryStatus.REVIEWED:
            inquiry.reviewed_at = now
        elif status is InquiryStatus.QUOTED:
            inquiry.quoted_at = now

        if previous is not None and status not in LIFECYCLE.get(previous, frozenset()) and status != previous:
            logger.info(
                f"Inquiry {inquiry.id} moved off the usual lifecycle: {previous.value} -> {status.value}"
            )

        return inquiry

    def add_quote(
        self,
        inquiry: CustomInquiry,
        final_price: float,
        valid_until: Optional[datetime] = None,
        terms: Optional[str] = None,
    ) -> CustomInquiry:
        """
        Attach a quote and move the inquiry to ``quoted`` from any status.

        Raises:
            ValidationError: ``final_price`` is negative or not finite
            InvalidTransitionError: terminal guard enabled and the inquiry
                is in a terminal status
        """
        if final_price is None or not math.isfinite(final_price) or final_price < 0:
            raise ValidationError(
                "Quote is invalid",
                field_errors={"finalPrice": ["Final price must be a positive number"]},
            )
        self._check_guard(inquiry, InquiryStatus.QUOTED)

        inquiry.quote = {
            "finalPrice": final_price,
            "validUntil": valid_until.isoformat() if valid_until else None,
            "terms": terms,
        }
        inquiry.status = InquiryStatus.QUOTED
        inquiry.quoted_at = self.clock()
        return inquiry
