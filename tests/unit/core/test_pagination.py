import pytest
from sqlalchemy import select
from app.core.pagination import PageDTO, paginate
from app.domain import Venue


@pytest.mark.parametrize(
    "total, page_size, expected_pages",
    [
        (0, 10, 1),
        (10, 10, 1),
        (1, 10, 1),
        (0, 0, 1),
        (11, 10, 2),
        (20, 10, 2),
        (5, 2, 3),
        (100, -5, 1)
    ]
)
def test_pages_calculation(total, page_size, expected_pages):
    dto = PageDTO(items=[], total=total, page=1, page_size=page_size)
    assert dto.pages == expected_pages


@pytest.mark.parametrize(
    "total, page_size, page, expected_has_next",
    [
        (0, 10, 1, False),
        (10, 10, 1, False),
        (11, 10, 1, True),
        (11, 10, 2, False),
        (21, 10, 1, True),
        (21, 10, 3, False),
        (21, 0, 1, False),
        (21, 10, 5, False),
    ]
)
def test_has_next(total, page_size, page, expected_has_next):
    dto = PageDTO(items=[], total=total, page=page, page_size=page_size)
    assert dto.has_next == expected_has_next


@pytest.mark.asyncio
@pytest.mark.parametrize("page, page_size, expected_limit, expected_offset", [
    (1, 20, 20, 0),
    (3, 10, 10, 20),
    (0, 500, 200, 0),
])
async def test_paginate_clamps_page_and_size(mocker, page, page_size, expected_limit, expected_offset):
    result = mocker.Mock()
    result.all.return_value = ["a", "b"]
    db = mocker.Mock()
    db.scalar = mocker.AsyncMock(return_value=42)
    db.scalars = mocker.AsyncMock(return_value=result)

    items, total = await paginate(db, select(Venue), page=page, page_size=page_size, count_by=Venue.id)

    stmt = db.scalars.await_args.args[0]
    assert items == ["a", "b"]
    assert total == 42
    assert stmt._limit == expected_limit
    assert stmt._offset == expected_offset


@pytest.mark.asyncio
async def test_paginate_total_defaults_to_zero(mocker):
    result = mocker.Mock()
    result.all.return_value = []
    db = mocker.Mock()
    db.scalar = mocker.AsyncMock(return_value=None)
    db.scalars = mocker.AsyncMock(return_value=result)

    items, total = await paginate(db, select(Venue))

    assert items == []
    assert total == 0
