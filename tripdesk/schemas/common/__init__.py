"""
Shared schema building blocks.
"""

from tripdesk.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema
from tripdesk.schemas.common.enums import InquiryStatus, TimeOfDay, UserRole
from tripdesk.schemas.common.pagination import PaginationMeta, PaginationParams
from tripdesk.schemas.common.response import ErrorDetail, ErrorResponse, MessageResponse, SuccessResponse

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "InquiryStatus",
    "TimeOfDay",
    "UserRole",
    "PaginationParams",
    "PaginationMeta",
    "SuccessResponse",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
]
