"""
TimeTracker Backend - Pagination Unit Tests
===========================================

What we test:
    ✅ Offset arithmetic
    ✅ Ceiling page count
    ✅ paginate() asks the store for the right slice
    ✅ A page past the end is empty but keeps the real totals
    ✅ camelCase envelope on the wire
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from timetracker.pagination import page_offset, paginate
from timetracker.schemas.common import PagedList, count_pages


def fake_store(records, total):
    store = MagicMock()
    store.list = AsyncMock(return_value=records)
    store.count = AsyncMock(return_value=total)
    return store


class TestArithmetic:
    @pytest.mark.parametrize(
        "page,size,expected",
        [(1, 5, 0), (2, 5, 5), (3, 10, 20)],
    )
    def test_page_offset(self, page, size, expected):
        assert page_offset(page, size) == expected

    @pytest.mark.parametrize(
        "total,size,expected",
        [(0, 5, 0), (1, 5, 1), (5, 5, 1), (6, 5, 2), (11, 5, 3), (3, 10, 1)],
    )
    def test_count_pages_is_ceiling(self, total, size, expected):
        assert count_pages(total, size) == expected


class TestPaginate:
    @pytest.mark.asyncio
    async def test_requests_the_page_slice(self):
        store = fake_store(["f", "g"], total=7)

        result = await paginate(store, page=2, page_size=5, project=str.upper)

        store.list.assert_awaited_once_with(skip=5, take=5)
        assert result.items == ["F", "G"]
        assert result.total_count == 7
        assert result.total_pages == 2

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self):
        store = fake_store([], total=3)

        result = await paginate(store, page=2, page_size=10, project=str)

        assert result.model_dump(by_alias=True) == {
            "items": [],
            "page": 2,
            "pageSize": 10,
            "totalCount": 3,
            "totalPages": 1,
        }

    @pytest.mark.asyncio
    async def test_items_never_exceed_page_size(self):
        store = fake_store(list(range(5)), total=42)

        result = await paginate(store, page=1, page_size=5, project=lambda r: r)

        assert len(result.items) <= result.page_size
        assert result.total_pages == 9


class TestPagedListSerialization:
    def test_json_uses_camel_case_and_computed_total_pages(self):
        paged = PagedList(items=[1, 2], page=1, page_size=2, total_count=5)

        dumped = paged.model_dump(mode="json", by_alias=True)

        assert dumped["pageSize"] == 2
        assert dumped["totalCount"] == 5
        assert dumped["totalPages"] == 3
