import pytest
from app.domain.exceptions import Conflict
from app.services import seat_allocation_service
from app.services.seat_allocation_service import FREE, TAKEN, find_free_gap, find_seats, mark, empty_matrix, resize_matrix


@pytest.mark.parametrize("row, start, size, expected", [
    ([0, 0, 0, 0], 0, 2, 0),
    ([1, 0, 0, 0], 0, 2, 1),
    ([0, 1, 0, 0], 0, 2, 2),
    ([0, 1, 0, 1], 0, 2, -1),
    ([0, 0, 0, 0], 3, 2, -1),
    ([0, 0, 0, 0], 2, 2, 2),
    ([0, 0], 0, 0, -1),
])
def test_find_free_gap(row, start, size, expected):
    assert find_free_gap(row, start, size) == expected


def test_contiguous_allocation_takes_first_row_with_a_gap():
    matrix = [[1, 0, 1, 0], [0, 0, 0, 1]]

    assert find_seats(matrix, 3, contiguous=True) == [(1, 0), (1, 1), (1, 2)]


def test_contiguous_allocation_without_gap_returns_nothing():
    matrix = [[1, 0, 1, 0], [0, 1, 0, 1]]

    assert find_seats(matrix, 2, contiguous=True) == []


def test_non_contiguous_allocation_fills_rows_in_order():
    matrix = [[1, 0, 1, 0], [0, 1, 0, 1]]

    assert find_seats(matrix, 3, contiguous=False) == [(0, 1), (0, 3), (1, 0)]


def test_non_contiguous_allocation_with_too_few_seats_returns_nothing():
    assert find_seats([[1, 0], [1, 1]], 2, contiguous=False) == []


def test_mark_returns_new_matrix():
    matrix = [[FREE, FREE]]

    updated = mark(matrix, [(0, 1)], TAKEN)

    assert updated == [[FREE, TAKEN]]
    assert matrix == [[FREE, FREE]]


@pytest.mark.parametrize("state, message", [(TAKEN, "Seat already taken"), (FREE, "Seat is not allocated")])
def test_mark_rejects_seat_already_in_state(state, message):
    with pytest.raises(Conflict) as e:
        mark([[state]], [(0, 0)], state)

    assert str(e.value) == message
    assert e.value.ctx == {"row": 1, "seat": 1}


def test_empty_matrix_has_section_dimensions(mocker):
    section = mocker.Mock(number_of_rows=2, row_capacity=3)

    assert empty_matrix(section) == [[0, 0, 0], [0, 0, 0]]


@pytest.mark.asyncio
async def test_allocate_seats_creates_allocation_and_returns_one_based_seats(mocker):
    section = mocker.Mock(id=3, number_of_rows=2, row_capacity=3, capacity=6)
    performance = mocker.Mock(id=5)
    mocker.patch(
        "app.services.seat_allocation_service.crud.get_section_allocation",
        new=mocker.AsyncMock(return_value=None)
    )
    created = mocker.patch(
        "app.services.seat_allocation_service.crud.create_section_allocation",
        new=mocker.AsyncMock(side_effect=lambda db, data: mocker.Mock(**data))
    )
    db = mocker.Mock()

    seats = await seat_allocation_service.allocate_seats(db, section, performance, 2, contiguous=True)

    data = created.await_args.args[1]
    assert data["allocated"] == [[0, 0, 0], [0, 0, 0]]
    assert [(s.row_number, s.seat_number) for s in seats] == [(1, 1), (1, 2)]
    assert all(s.section is section for s in seats)


@pytest.mark.asyncio
async def test_allocate_seats_updates_existing_allocation(mocker):
    section = mocker.Mock(id=3, number_of_rows=2, row_capacity=2, capacity=4)
    allocation = mocker.Mock(allocated=[[1, 1], [0, 0]], occupied_count=2)
    mocker.patch(
        "app.services.seat_allocation_service.crud.get_section_allocation",
        new=mocker.AsyncMock(return_value=allocation)
    )
    create_spy = mocker.patch(
        "app.services.seat_allocation_service.crud.create_section_allocation",
        new=mocker.AsyncMock()
    )

    seats = await seat_allocation_service.allocate_seats(mocker.Mock(), section, mocker.Mock(id=5), 2)

    create_spy.assert_not_awaited()
    assert [(s.row_number, s.seat_number) for s in seats] == [(2, 1), (2, 2)]
    assert allocation.allocated == [[1, 1], [1, 1]]
    assert allocation.occupied_count == 4


@pytest.mark.asyncio
@pytest.mark.parametrize("allocated, occupied, count, contiguous", [
    ([[1, 1], [1, 0]], 3, 2, True),
    ([[1, 0], [0, 1]], 2, 2, True),
    ([[0, 0], [0, 0]], 0, 5, False),
])
async def test_allocate_seats_without_room_raises_conflict(mocker, allocated, occupied, count, contiguous):
    section = mocker.Mock(id=3, number_of_rows=2, row_capacity=2, capacity=4)
    allocation = mocker.Mock(allocated=allocated, occupied_count=occupied)
    mocker.patch(
        "app.services.seat_allocation_service.crud.get_section_allocation",
        new=mocker.AsyncMock(return_value=allocation)
    )

    with pytest.raises(Conflict) as e:
        await seat_allocation_service.allocate_seats(
            mocker.Mock(), section, mocker.Mock(id=5), count, contiguous=contiguous
        )

    assert str(e.value) == "Not enough seats available"
    assert e.value.ctx["requested"] == count
    assert allocation.allocated == allocated


@pytest.mark.asyncio
async def test_deallocate_tickets_frees_seats_per_section(mocker):
    allocation = mocker.Mock(allocated=[[1, 1], [1, 0]], occupied_count=3)
    get_spy = mocker.patch(
        "app.services.seat_allocation_service.crud.get_section_allocation",
        new=mocker.AsyncMock(return_value=allocation)
    )
    tickets = [
        mocker.Mock(section_id=3, row_number=1, seat_number=2),
        mocker.Mock(section_id=3, row_number=2, seat_number=1),
    ]
    db = mocker.Mock()

    await seat_allocation_service.deallocate_tickets(db, 5, tickets)

    get_spy.assert_awaited_once_with(db, 5, 3)
    assert allocation.allocated == [[1, 0], [0, 0]]
    assert allocation.occupied_count == 1


@pytest.mark.asyncio
async def test_deallocate_tickets_without_allocation_is_skipped(mocker):
    mocker.patch(
        "app.services.seat_allocation_service.crud.get_section_allocation",
        new=mocker.AsyncMock(return_value=None)
    )

    await seat_allocation_service.deallocate_tickets(
        mocker.Mock(), 5, [mocker.Mock(section_id=3, row_number=1, seat_number=1)]
    )


@pytest.mark.parametrize("matrix, rows, capacity, expected", [
    ([[1, 1]], 2, 2, [[1, 1], [0, 0]]),
    ([[1, 0]], 1, 3, [[1, 0, 0]]),
    ([[1, 0, 0], [0, 0, 0]], 1, 2, [[1, 0]]),
    ([[0, 0]], 0, 2, []),
])
def test_resize_matrix_pads_and_trims_free_seats(matrix, rows, capacity, expected):
    assert resize_matrix(matrix, rows, capacity) == expected


@pytest.mark.parametrize("matrix, rows, capacity, taken", [
    ([[0, 0, 1]], 1, 2, {"row": 1, "seat": 3}),
    ([[0, 0], [0, 1]], 1, 2, {"row": 2, "seat": 2}),
])
def test_resize_matrix_refuses_to_drop_taken_seats(matrix, rows, capacity, taken):
    with pytest.raises(Conflict) as e:
        resize_matrix(matrix, rows, capacity)

    assert str(e.value) == "Allocated seat outside the new section dimensions"
    assert e.value.ctx == taken


@pytest.mark.asyncio
async def test_allocate_seats_in_grown_section_uses_new_rows(mocker):
    section = mocker.Mock(id=3, number_of_rows=2, row_capacity=2, capacity=4)
    allocation = mocker.Mock(allocated=[[1, 1]], occupied_count=2)
    mocker.patch(
        "app.services.seat_allocation_service.crud.get_section_allocation",
        new=mocker.AsyncMock(return_value=allocation)
    )

    seats = await seat_allocation_service.allocate_seats(mocker.Mock(), section, mocker.Mock(id=5), 2)

    assert [(s.row_number, s.seat_number) for s in seats] == [(2, 1), (2, 2)]
    assert allocation.allocated == [[1, 1], [1, 1]]


@pytest.mark.asyncio
async def test_allocate_seats_in_shrunk_section_stays_within_row_capacity(mocker):
    section = mocker.Mock(id=3, number_of_rows=2, row_capacity=2, capacity=4)
    allocation = mocker.Mock(allocated=[[1, 0, 0], [0, 0, 0]], occupied_count=1)
    mocker.patch(
        "app.services.seat_allocation_service.crud.get_section_allocation",
        new=mocker.AsyncMock(return_value=allocation)
    )

    seats = await seat_allocation_service.allocate_seats(mocker.Mock(), section, mocker.Mock(id=5), 2, contiguous=True)

    assert [(s.row_number, s.seat_number) for s in seats] == [(2, 1), (2, 2)]
    assert allocation.allocated == [[1, 0], [1, 1]]


@pytest.mark.asyncio
async def test_resize_allocations_updates_every_performance(mocker):
    allocations = [
        mocker.Mock(performance_id=5, allocated=[[1, 0]]),
        mocker.Mock(performance_id=6, allocated=[[0, 0]]),
    ]
    listed = mocker.patch(
        "app.services.seat_allocation_service.crud.list_section_allocations",
        new=mocker.AsyncMock(return_value=allocations)
    )
    db = mocker.Mock()

    await seat_allocation_service.resize_allocations(db, 3, 2, 2)

    listed.assert_awaited_once_with(db, 3)
    assert [a.allocated for a in allocations] == [[[1, 0], [0, 0]], [[0, 0], [0, 0]]]
