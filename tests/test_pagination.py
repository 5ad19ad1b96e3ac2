import pytest

from tripdesk.config.settings import settings
from tripdesk.core.pagination import build_pagination_meta, normalize_pagination


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, settings.DEFAULT_PAGE_SIZE)),
        (0, -3, (1, settings.DEFAULT_PAGE_SIZE)),
        (3, 25, (3, 25)),
        (2, 10_000, (2, settings.MAX_PAGE_SIZE)),
    ],
)
def test_normalize_pagination(page, limit, expected):
    params = normalize_pagination(page, limit)

    assert (params.page, params.limit) == expected


def test_offset():
    assert normalize_pagination(3, 20).offset == 40


@pytest.mark.parametrize("total, pages", [(0, 0), (1, 1), (10, 1), (11, 2)])
def test_total_pages(total, pages):
    meta = build_pagination_meta(normalize_pagination(1, 10), total)

    assert meta.total_pages == pages
    assert meta.total_items == total
    assert meta.items_per_page == 10
