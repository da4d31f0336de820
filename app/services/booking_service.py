import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auditing import AuditSpan
from app.core.config import MAX_TICKETS_PER_REQUEST
from app.core.pagination import PageDTO
from app.domain.booking import crud
from app.domain.booking.models import Booking, Ticket
from app.domain.booking.schemas import BookingCreateDTO, BookingReadDTO, BookingsQueryDTO, TicketRequestDTO
from app.domain.shows.models import Performance, TicketPrice
from app.domain.venues.models import Section
from app.services import seat_allocation_service
from app.services.show_service import get_performance, get_ticket_price
from app.domain.exceptions import NotFound, Conflict, InvalidInput, Unprocessable

logger = logging.getLogger("app.booking")


async def get_booking(db: AsyncSession, booking_id: int) -> Booking:
    booking = await crud.get_booking_by_id(db, booking_id)
    if not booking:
        raise NotFound("Booking not found", ctx={"booking_id": booking_id})
    return booking


async def list_bookings(db: AsyncSession, query: BookingsQueryDTO) -> PageDTO[BookingReadDTO]:
    bookings, total = await crud.list_bookings(
        db,
        page=query.page,
        page_size=query.page_size,
        performance_id=query.performance_id
    )
    items = [BookingReadDTO.model_validate(booking) for booking in bookings]
    return PageDTO(items=items, total=total, page=query.page, page_size=query.page_size)


def _merge_requests(requests: list[TicketRequestDTO]) -> dict[int, int]:
    quantities: dict[int, int] = {}
    for request in requests:
        quantities[request.ticket_price_id] = quantities.get(request.ticket_price_id, 0) + request.quantity
    total = sum(quantities.values())
    if total > MAX_TICKETS_PER_REQUEST:
        raise InvalidInput(
            "Too many tickets requested",
            ctx={"requested": total, "limit": MAX_TICKETS_PER_REQUEST}
        )
    return quantities


async def _load_ticket_prices(
        db: AsyncSession,
        performance: Performance,
        quantities: dict[int, int]
) -> dict[Section, list[tuple[TicketPrice, int]]]:
    by_section: dict[Section, list[tuple[TicketPrice, int]]] = {}
    for ticket_price_id, quantity in quantities.items():
        ticket_price = await get_ticket_price(db, ticket_price_id)
        if ticket_price.show_id != performance.show_id:
            raise Unprocessable(
                "Ticket price does not match performance",
                ctx={"ticket_price_id": ticket_price_id, "performance_id": performance.id}
            )
        by_section.setdefault(ticket_price.section, []).append((ticket_price, quantity))
    return by_section


async def create_booking(db: AsyncSession, schema: BookingCreateDTO) -> Booking:
    async with AuditSpan(
        scope="BOOKINGS",
        action="CREATE",
        object_type="booking",
        performance_id=schema.performance_id,
        meta={"ticket_requests": len(schema.ticket_requests)}
    ) as span:
        quantities = _merge_requests(schema.ticket_requests)
        performance = await get_performance(db, schema.performance_id)
        span.show_id = performance.show_id
        by_section = await _load_ticket_prices(db, performance, quantities)

        booking = await crud.create_booking(db, {"performance": performance, "contact_email": str(schema.email)})
        for section, requests in by_section.items():
            count = sum(quantity for _, quantity in requests)
            seats = iter(await seat_allocation_service.allocate_seats(db, section, performance, count))
            for ticket_price, quantity in requests:
                for _ in range(quantity):
                    seat = next(seats)
                    booking.tickets.append(Ticket(
                        section=section,
                        ticket_category=ticket_price.ticket_category,
                        row_number=seat.row_number,
                        seat_number=seat.seat_number,
                        price=ticket_price.price
                    ))

        try:
            await db.flush()
        except (IntegrityError, StaleDataError) as e:
            raise Conflict(
                "Seats were allocated concurrently, retry the booking",
                ctx={"performance_id": performance.id}
            ) from e

        logger.info(
            "Booking created id=%s performance=%s tickets=%d",
            booking.id, performance.id, len(booking.tickets)
        )
        span.object_id = booking.id
        span.booking_id = booking.id
        span.meta["tickets"] = len(booking.tickets)
        return booking


async def cancel_booking(db: AsyncSession, booking_id: int) -> None:
    async with AuditSpan(
        scope="BOOKINGS",
        action="CANCEL",
        object_type="booking",
        object_id=booking_id,
        booking_id=booking_id
    ) as span:
        booking = await get_booking(db, booking_id)
        span.performance_id = booking.performance_id
        await seat_allocation_service.deallocate_tickets(db, booking.performance_id, booking.tickets)
        await crud.delete_booking(db, booking)
        try:
            await db.flush()
        except StaleDataError as e:
            raise Conflict("Seats changed concurrently, retry the cancellation", ctx={"booking_id": booking_id}) from e
        logger.info("Booking cancelled id=%s performance=%s", booking_id, booking.performance_id)
