"""
Custom inquiry repository: the persistence boundary for inquiries.

Ownership is decided by the service layer; this repository only applies the
filters it is given.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from tripdesk.models.custom_inquiry import CustomInquiry
from tripdesk.repositories.base import BaseRepository
from tripdesk.schemas.common.enums import InquiryStatus


@dataclass
class CustomInquiryFilter:
    """
    List filter.

    ``user_id`` restricts results to one owner; ``None`` means no owner
    restriction (admin view, anonymous inquiries included).
    """

    status: Optional[InquiryStatus] = None
    user_id: Optional[str] = None

    def criteria(self) -> list:
        clauses = []
        if self.status is not None:
            clauses.append(CustomInquiry.status == self.status)
        if self.user_id is not None:
            clauses.append(CustomInquiry.user_id == self.user_id)
        return clauses


class CustomInquiryRepository(BaseRepository[CustomInquiry]):
    """
    Create/find/list/update/delete for custom inquiries.
    """

    def __init__(self, db: Session):
        super().__init__(CustomInquiry, db)

    def list(
        self,
        filters: CustomInquiryFilter,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[CustomInquiry], int]:
        """
        Page through inquiries, newest first.

        Returns:
            (items on the requested page, total matching the filter)
        """
        criteria = filters.criteria()
        items = self.find_all(
            *criteria,
            order_by=[CustomInquiry.created_at.desc(), CustomInquiry.id.desc()],
            offset=offset,
            limit=limit,
        )
        return items, self.count(*criteria)

