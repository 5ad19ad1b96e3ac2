# tripdesk/dependencies.py
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from tripdesk.core.security import (
    CurrentUser,
    get_current_user,
    get_optional_user,
    require_admin,
)
from tripdesk.db.session import get_db
from tripdesk.repositories import CustomInquiryRepository
from tripdesk.services.custom_inquiry import CustomInquiryService


# ------------------------------------------------------------------ #
# Service factories
# ------------------------------------------------------------------ #
def get_custom_inquiry_service(db: Session = Depends(get_db)) -> CustomInquiryService:
    """
    Provide a CustomInquiryService bound to the request's session.
    """
    return CustomInquiryService(CustomInquiryRepository(db), db)


__all__ = [
    "CurrentUser",
    "get_db",
    "get_current_user",
    "get_optional_user",
    "require_admin",
    "get_custom_inquiry_service",
]
