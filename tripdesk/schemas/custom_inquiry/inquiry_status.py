# --- File: tripdesk/schemas/custom_inquiry/inquiry_status.py ---
"""
Staff-side inquiry mutation schemas: status changes and quotes.
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from tripdesk.schemas.common.base import BaseUpdateSchema

__all__ = [
    "InquiryStatusUpdate",
    "InquiryQuoteCreate",
]


class InquiryStatusUpdate(BaseUpdateSchema):
    """
    Move an inquiry to another status.

    ``status`` is kept as a plain string so an unknown value is reported by
    the state machine with the list of accepted statuses.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "reviewed",
                "adminNotes": "Checked availability with the Kandy hotel",
            }
        }
    )

    status: str = Field(..., description="New status")
    admin_notes: Optional[str] = Field(
        default=None,
        max_length=2000,
        description="Internal notes, replaces any previous notes",
    )


class InquiryQuoteCreate(BaseUpdateSchema):
    """
    Attach a quote to an inquiry.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "finalPrice": 1450,
                "validUntil": "2030-02-15T00:00:00Z",
                "terms": "30% advance, balance on arrival",
            }
        }
    )

    final_price: float = Field(..., allow_inf_nan=False, description="Quoted price for the whole trip")
    valid_until: Optional[datetime] = None
    terms: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("terms")
    @classmethod
    def clean_terms(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) == 0:
            return None
        return v
