"""Seat bookkeeping per section and performance.

Seats are located with a first-fit scan over the rows of the section's
occupancy matrix. Row and seat numbers handed out are one-based.
"""
import logging
from typing import Iterable, NamedTuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import SEAT_ALLOCATION_CONTIGUOUS
from app.domain.booking import crud
from app.domain.booking.models import SectionAllocation, Ticket
from app.domain.shows.models import Performance
from app.domain.venues.models import Section
from app.domain.exceptions import Conflict

logger = logging.getLogger("app.seat_allocation")

FREE = 0
TAKEN = 1


class AllocatedSeat(NamedTuple):
    section: Section
    row_number: int
    seat_number: int


def empty_matrix(section: Section) -> list[list[int]]:
    return [[FREE] * section.row_capacity for _ in range(section.number_of_rows)]


def find_free_gap(row: list[int], start: int, size: int) -> int:
    """Index of the first run of ``size`` free seats at or after ``start``, or -1."""
    if size <= 0:
        return -1
    run_start, run_length = -1, 0
    for index in range(start, len(row)):
        if row[index] != FREE:
            run_length = 0
            continue
        if run_length == 0:
            run_start = index
        run_length += 1
        if run_length == size:
            return run_start
    return -1


def find_seats(matrix: list[list[int]], count: int, contiguous: bool) -> list[tuple[int, int]]:
    if count <= 0:
        return []
    if contiguous:
        for row_index, row in enumerate(matrix):
            start = find_free_gap(row, 0, count)
            if start >= 0:
                return [(row_index, start + offset) for offset in range(count)]
        return []

    positions = []
    for row_index, row in enumerate(matrix):
        for seat_index, state in enumerate(row):
            if state == FREE:
                positions.append((row_index, seat_index))
                if len(positions) == count:
                    return positions
    return []


def mark(matrix: list[list[int]], positions: Iterable[tuple[int, int]], state: int) -> list[list[int]]:
    updated = [list(row) for row in matrix]
    for row_index, seat_index in positions:
        if updated[row_index][seat_index] == state:
            raise Conflict(
                "Seat already taken" if state == TAKEN else "Seat is not allocated",
                ctx={"row": row_index + 1, "seat": seat_index + 1}
            )
        updated[row_index][seat_index] = state
    return updated


def resize_matrix(matrix: list[list[int]], number_of_rows: int, row_capacity: int) -> list[list[int]]:
    """Pad or trim the matrix to new section dimensions. Taken seats are never trimmed."""
    for row_index, row in enumerate(matrix):
        for seat_index, state in enumerate(row):
            if state == TAKEN and (row_index >= number_of_rows or seat_index >= row_capacity):
                raise Conflict(
                    "Allocated seat outside the new section dimensions",
                    ctx={"row": row_index + 1, "seat": seat_index + 1}
                )
    resized = []
    for row_index in range(number_of_rows):
        row = list(matrix[row_index][:row_capacity]) if row_index < len(matrix) else []
        resized.append(row + [FREE] * (row_capacity - len(row)))
    return resized


def _fits(matrix: list[list[int]], section: Section) -> bool:
    return len(matrix) == section.number_of_rows and all(len(row) == section.row_capacity for row in matrix)


async def resize_allocations(
        db: AsyncSession,
        section_id: int,
        number_of_rows: int,
        row_capacity: int
) -> None:
    for allocation in await crud.list_section_allocations(db, section_id):
        allocation.allocated = resize_matrix(allocation.allocated, number_of_rows, row_capacity)
        logger.info(
            "Resized allocation section=%s performance=%s to %dx%d",
            section_id, allocation.performance_id, number_of_rows, row_capacity
        )


async def get_or_create_allocation(
        db: AsyncSession,
        section: Section,
        performance: Performance
) -> SectionAllocation:
    allocation = await crud.get_section_allocation(db, performance.id, section.id)
    if allocation:
        if not _fits(allocation.allocated, section):
            allocation.allocated = resize_matrix(allocation.allocated, section.number_of_rows, section.row_capacity)
        return allocation
    return await crud.create_section_allocation(db, {
        "performance": performance,
        "section": section,
        "allocated": empty_matrix(section),
        "occupied_count": 0
    })


async def allocate_seats(
        db: AsyncSession,
        section: Section,
        performance: Performance,
        count: int,
        contiguous: bool = SEAT_ALLOCATION_CONTIGUOUS
) -> list[AllocatedSeat]:
    allocation = await get_or_create_allocation(db, section, performance)
    available = section.capacity - allocation.occupied_count
    positions = find_seats(allocation.allocated, count, contiguous) if count <= available else []
    if len(positions) != count:
        logger.warning(
            "Not enough seats section=%s performance=%s requested=%d available=%d contiguous=%s",
            section.id, performance.id, count, available, contiguous
        )
        raise Conflict(
            "Not enough seats available",
            ctx={"section_id": section.id, "performance_id": performance.id, "requested": count,
                 "available": available}
        )

    allocation.allocated = mark(allocation.allocated, positions, TAKEN)
    allocation.occupied_count += count
    return [AllocatedSeat(section, row + 1, seat + 1) for row, seat in positions]


async def deallocate_tickets(db: AsyncSession, performance_id: int, tickets: Iterable[Ticket]) -> None:
    positions_by_section: dict[int, list[tuple[int, int]]] = {}
    for ticket in tickets:
        positions_by_section.setdefault(ticket.section_id, []).append((ticket.row_number - 1, ticket.seat_number - 1))

    for section_id, positions in positions_by_section.items():
        allocation = await crud.get_section_allocation(db, performance_id, section_id)
        if not allocation:
            logger.warning("No allocation for section=%s performance=%s", section_id, performance_id)
            continue
        allocation.allocated = mark(allocation.allocated, positions, FREE)
        allocation.occupied_count = max(0, allocation.occupied_count - len(positions))
