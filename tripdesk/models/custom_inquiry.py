# --- File: tripdesk/models/custom_inquiry.py ---
"""
Custom trip inquiry model.

An inquiry is a document-shaped aggregate: contact details, trip details,
the itinerary, preferences, cost breakdown and quote are embedded JSON
documents stored with camelCase keys, exactly as they are exposed over the
API. Scalar lifecycle fields live in their own columns so they can be
filtered and indexed.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime, Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tripdesk.models.base import BaseModel, JSONType, TimestampMixin
from tripdesk.schemas.common.enums import InquiryStatus

__all__ = ["CustomInquiry"]


class CustomInquiry(TimestampMixin, BaseModel):
    """
    Visitor-assembled trip proposal awaiting staff review and quote.
    """

    __tablename__ = "custom_inquiries"

    # Owner; NULL for anonymous public submissions
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        index=True,
    )

    contact_info: Mapped[Dict[str, Any]] = mapped_column(JSONType, nullable=False)
    contact_email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Copy of contactInfo.email for lookups",
    )
    trip_details: Mapped[Dict[str, Any]] = mapped_column(JSONType, nullable=False)
    itinerary: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False)
    preferences: Mapped[Dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    cost_breakdown: Mapped[Dict[str, Any]] = mapped_column(JSONType, nullable=False)

    additional_requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[InquiryStatus] = mapped_column(
        Enum(
            InquiryStatus,
            name="custom_inquiry_status_enum",
            values_callable=lambda enum: [member.value for member in enum],
            create_constraint=True,
        ),
        nullable=False,
        default=InquiryStatus.PENDING,
        index=True,
    )
    admin_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    quote: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    quoted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_custom_inquiries_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        status = self.status.value if self.status else None
        return f"<CustomInquiry(id={self.id}, user_id={self.user_id}, status={status})>"

    @property
    def is_anonymous(self) -> bool:
        """Submitted without an authenticated identity."""
        return self.user_id is None

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        return self.user_id is not None and self.user_id == user_id
