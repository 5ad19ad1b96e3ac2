"""
Custom trip inquiry endpoints.

Submission is public; an authenticated caller is attached as the owner.
Reads and deletes are owner-or-admin, status changes and quotes are admin only.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from tripdesk.dependencies import (
    CurrentUser,
    get_current_user,
    get_custom_inquiry_service,
    get_optional_user,
    require_admin,
)
from tripdesk.schemas.common.response import MessageResponse, SuccessResponse
from tripdesk.schemas.custom_inquiry import (
    CustomInquiryCreate,
    CustomInquiryEnvelope,
    CustomInquiryListData,
    InquiryQuoteCreate,
    InquiryStatusUpdate,
)
from tripdesk.services.custom_inquiry import CustomInquiryService

router = APIRouter(prefix="/custom-inquiries", tags=["Custom Inquiries"])


@router.post(
    "",
    response_model=SuccessResponse[CustomInquiryEnvelope],
    status_code=status.HTTP_201_CREATED,
    summary="Submit a custom trip inquiry",
)
def create_custom_inquiry(
    payload: CustomInquiryCreate,
    user: Optional[CurrentUser] = Depends(get_optional_user),
    service: CustomInquiryService = Depends(get_custom_inquiry_service),
):
    inquiry = service.submit(payload, user=user)
    return SuccessResponse[CustomInquiryEnvelope].create(
        message="Custom package inquiry submitted successfully",
        data=CustomInquiryEnvelope(inquiry=inquiry),
    )


@router.get(
    "",
    response_model=SuccessResponse[CustomInquiryListData],
    summary="List custom inquiries",
)
def list_custom_inquiries(
    page: Optional[int] = Query(None, description="Page number (1-indexed)"),
    limit: Optional[int] = Query(None, description="Items per page"),
    status_filter: Optional[str] = Query(None, alias="status", description="Only inquiries in this status"),
    user: CurrentUser = Depends(get_current_user),
    service: CustomInquiryService = Depends(get_custom_inquiry_service),
):
    """
    Admins see every inquiry; other callers see only their own.
    """
    data = service.list_inquiries(user, page=page, limit=limit, status=status_filter)
    return SuccessResponse[CustomInquiryListData].create(message="Custom inquiries retrieved successfully", data=data)


@router.get(
    "/{inquiry_id}",
    response_model=SuccessResponse[CustomInquiryEnvelope],
    summary="Get a custom inquiry",
)
def get_custom_inquiry(
    inquiry_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: CustomInquiryService = Depends(get_custom_inquiry_service),
):
    inquiry = service.get(inquiry_id, user)
    return SuccessResponse[CustomInquiryEnvelope].create(
        message="Custom inquiry retrieved successfully",
        data=CustomInquiryEnvelope(inquiry=inquiry),
    )


@router.put(
    "/{inquiry_id}/status",
    response_model=SuccessResponse[CustomInquiryEnvelope],
    summary="Update the status of a custom inquiry",
)
def update_custom_inquiry_status(
    inquiry_id: str,
    payload: InquiryStatusUpdate,
    admin: CurrentUser = Depends(require_admin),
    service: CustomInquiryService = Depends(get_custom_inquiry_service),
):
    inquiry = service.update_status(inquiry_id, payload, admin)
    return SuccessResponse[CustomInquiryEnvelope].create(
        message="Custom inquiry status updated successfully",
        data=CustomInquiryEnvelope(inquiry=inquiry),
    )


@router.put(
    "/{inquiry_id}/quote",
    response_model=SuccessResponse[CustomInquiryEnvelope],
    summary="Attach a quote to a custom inquiry",
)
def add_custom_inquiry_quote(
    inquiry_id: str,
    payload: InquiryQuoteCreate,
    admin: CurrentUser = Depends(require_admin),
    service: CustomInquiryService = Depends(get_custom_inquiry_service),
):
    inquiry = service.add_quote(inquiry_id, payload, admin)
    return SuccessResponse[CustomInquiryEnvelope].create(
        message="Quote added successfully",
        data=CustomInquiryEnvelope(inquiry=inquiry),
    )


@router.delete(
    "/{inquiry_id}",
    response_model=MessageResponse,
    summary="Delete a custom inquiry",
)
def delete_custom_inquiry(
    inquiry_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: CustomInquiryService = Depends(get_custom_inquiry_service),
):
    service.delete(inquiry_id, user)
    return MessageResponse(message="Custom inquiry deleted successfully")
