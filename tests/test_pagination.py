"""Listing parameter clamping."""

import pytest

from assetdesk.api.pagination import (
    clamp_page,
    clamp_size,
    page_request,
    pagination_enabled,
    total_pages,
)
from assetdesk.ids import MAX_ID


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 0), ("0", 0), ("3", 3), ("-1", 0), ("abc", 0), ("", 0),
        ("5abc", 5), ("1_0", 1), ("+5", 5), (" 2", 2),
        ("100000000000000000000", MAX_ID),
    ],
)
def test_clamp_page(raw, expected):
    assert clamp_page(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 10), ("5", 5), ("1", 1), ("10", 10), ("0", 10), ("11", 10), ("1000", 10), ("x", 10),
        ("5abc", 5), ("1_0", 1), ("3.9", 3), ("100000000000000000000", 10),
    ],
)
def test_clamp_size(raw, expected):
    assert clamp_size(raw) == expected


@pytest.mark.parametrize("total,size,expected", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2)])
def test_total_pages(total, size, expected):
    assert total_pages(total, size) == expected


def test_page_request_offset_and_search():
    req = page_request(page="2", size="5", search=None)
    assert req.offset == 10
    assert req.search == ""


def test_pagination_flag():
    assert pagination_enabled(None) is True
    assert pagination_enabled("true") is True
    assert pagination_enabled("false") is False
