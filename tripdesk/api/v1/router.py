"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the trip inquiry service
"""
from fastapi import APIRouter

from tripdesk.api.v1 import custom_inquiries
from tripdesk.schemas.common.response import ErrorResponse

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request"},
        401: {"model": ErrorResponse, "description": "Unauthorized"},
        403: {"model": ErrorResponse, "description": "Forbidden"},
        404: {"model": ErrorResponse, "description": "Not Found"},
        409: {"model": ErrorResponse, "description": "Conflict"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"}
    }
)

router.include_router(custom_inquiries.router)
