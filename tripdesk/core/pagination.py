# tripdesk/core/pagination.py
"""
Core pagination helpers.

This module provides:
- `normalize_pagination` to clean up page/limit inputs using defaults
  and clamping.
- `build_pagination_meta` to compute the page metadata returned by list
  endpoints.
"""

from __future__ import annotations

import math

from tripdesk.config.settings import settings
from tripdesk.core.constants import DEFAULT_PAGE
from tripdesk.schemas.common.pagination import PaginationMeta, PaginationParams


def normalize_pagination(
    page: int | None,
    limit: int | None,
) -> PaginationParams:
    """
    Normalize raw page & limit inputs into a PaginationParams object
    with sane defaults and a clamped max page size.

    Rules:
        - page < 1 or None -> DEFAULT_PAGE
        - limit < 1 or None -> settings.DEFAULT_PAGE_SIZE
        - limit > settings.MAX_PAGE_SIZE -> settings.MAX_PAGE_SIZE
    """
    if page is None or page < 1:
        page = DEFAULT_PAGE

    if limit is None or limit < 1:
        limit = settings.DEFAULT_PAGE_SIZE

    if limit > settings.MAX_PAGE_SIZE:
        limit = settings.MAX_PAGE_SIZE

    return PaginationParams(page=page, limit=limit)


def build_pagination_meta(params: PaginationParams, total_items: int) -> PaginationMeta:
    """Page metadata for a result set of ``total_items`` rows."""
    return PaginationMeta(
        current_page=params.page,
        total_pages=math.ceil(total_items / params.limit) if params.limit else 0,
        total_items=total_items,
        items_per_page=params.limit,
    )
