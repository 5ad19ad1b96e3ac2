"""
Data access layer.
"""

from tripdesk.repositories.catalog_repository import CatalogRepository
from tripdesk.repositories.custom_inquiry_repository import CustomInquiryFilter, CustomInquiryRepository

__all__ = [
    "CatalogRepository",
    "CustomInquiryFilter",
    "CustomInquiryRepository",
]
