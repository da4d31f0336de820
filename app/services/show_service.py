from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import PageDTO
from app.core.auditing import AuditSpan
from app.domain.shows.models import Show, Performance, TicketPrice
from app.domain.shows.schemas import ShowCreateDTO, ShowReadDTO, ShowsQueryDTO, PerformanceCreateDTO, \
    TicketPriceCreateDTO
from app.domain.venues.models import Section
from app.domain.shows import crud
from app.services.event_service import get_event
from app.services.venue_service import get_venue, get_section
from app.services.ticket_category_service import get_ticket_category
from app.domain.exceptions import NotFound, Conflict, InvalidInput


def _ensure_section_in_venue(show: Show, section: Section) -> None:
    venue_id = show.venue.id if show.venue is not None else show.venue_id
    if section.venue_id != venue_id:
        raise InvalidInput(
            "Section does not belong to show venue",
            ctx={"section_id": section.id, "venue_id": venue_id}
        )


def _ensure_distinct_dates(performances: list[PerformanceCreateDTO]) -> None:
    seen = set()
    for performance in performances:
        if performance.date in seen:
            raise InvalidInput("Duplicate performance date", ctx={"date": performance.date})
        seen.add(performance.date)


def _ensure_distinct_prices(ticket_prices: list[TicketPriceCreateDTO]) -> None:
    seen = set()
    for ticket_price in ticket_prices:
        key = (ticket_price.section_id, ticket_price.ticket_category_id)
        if key in seen:
            raise InvalidInput(
                "Duplicate ticket price for section and ticket category",
                ctx={"section_id": key[0], "ticket_category_id": key[1]}
            )
        seen.add(key)


async def get_show(db: AsyncSession, show_id: int) -> Show:
    show = await crud.get_show_by_id(db, show_id)
    if not show:
        raise NotFound("Show not found", ctx={"show_id": show_id})
    return show


async def get_show_by_performance(db: AsyncSession, performance_id: int) -> Show:
    show = await crud.get_show_by_performance(db, performance_id)
    if not show:
        raise NotFound("Performance not found", ctx={"performance_id": performance_id})
    return show


async def list_shows(db: AsyncSession, query: ShowsQueryDTO) -> PageDTO[ShowReadDTO]:
    shows, total = await crud.list_shows(
        db,
        page=query.page,
        page_size=query.page_size,
        event_id=query.event_id,
        venue_id=query.venue_id
    )
    items = [ShowReadDTO.model_validate(show) for show in shows]
    return PageDTO(items=items, total=total, page=query.page, page_size=query.page_size)


async def _build_ticket_price(db: AsyncSession, show: Show, schema: TicketPriceCreateDTO) -> TicketPrice:
    section = await get_section(db, schema.section_id)
    _ensure_section_in_venue(show, section)
    ticket_category = await get_ticket_category(db, schema.ticket_category_id)
    return await crud.create_ticket_price(
        db,
        show,
        {"section": section, "ticket_category": ticket_category, "price": schema.price}
    )


async def create_show(db: AsyncSession, schema: ShowCreateDTO) -> Show:
    async with AuditSpan(
        scope="SHOWS",
        action="CREATE",
        object_type="show",
        event_id=schema.event_id,
        meta={
            "venue_id": schema.venue_id,
            "performances": len(schema.performances),
            "ticket_prices": len(schema.ticket_prices)
        }
    ) as span:
        _ensure_distinct_dates(schema.performances)
        _ensure_distinct_prices(schema.ticket_prices)
        event = await get_event(db, schema.event_id)
        venue = await get_venue(db, schema.venue_id)
        show = await crud.create_show(db, {"event": event, "venue": venue})
        for performance in schema.performances:
            await crud.create_performance(db, show, performance.model_dump())
        for ticket_price in schema.ticket_prices:
            await _build_ticket_price(db, show, ticket_price)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict(
                "Show for this event and venue already exists",
                ctx={"event_id": schema.event_id, "venue_id": schema.venue_id}
            ) from e
        span.object_id = show.id
        span.show_id = show.id
        return show


async def delete_show(db: AsyncSession, show_id: int) -> None:
    async with AuditSpan(
        scope="SHOWS",
        action="DELETE",
        object_type="show",
        object_id=show_id,
        show_id=show_id
    ) as span:
        show = await get_show(db, show_id)
        span.event_id = show.event_id
        span.meta.update({"performances": len(show.performances), "ticket_prices": len(show.ticket_prices)})
        await crud.delete_show(db, show)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Show has bookings", ctx={"show_id": show_id}) from e


async def get_performance(db: AsyncSession, performance_id: int) -> Performance:
    performance = await crud.get_performance_by_id(db, performance_id)
    if not performance:
        raise NotFound("Performance not found", ctx={"performance_id": performance_id})
    return performance


async def list_performances(db: AsyncSession, show_id: int) -> list[Performance]:
    await get_show(db, show_id)
    return await crud.list_performances_by_show(db, show_id)


async def create_performance(db: AsyncSession, show_id: int, schema: PerformanceCreateDTO) -> Performance:
    async with AuditSpan(
        scope="PERFORMANCES",
        action="CREATE",
        object_type="performance",
        show_id=show_id,
        meta={"date": schema.date}
    ) as span:
        show = await get_show(db, show_id)
        performance = await crud.create_performance(db, show, schema.model_dump())
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict(
                "Performance already scheduled at this date",
                ctx={"show_id": show_id, "date": schema.date}
            ) from e
        span.object_id = performance.id
        span.performance_id = performance.id
        return performance


async def delete_performance(db: AsyncSession, performance_id: int) -> None:
    async with AuditSpan(
        scope="PERFORMANCES",
        action="DELETE",
        object_type="performance",
        object_id=performance_id,
        performance_id=performance_id
    ) as span:
        performance = await get_performance(db, performance_id)
        span.show_id = performance.show_id
        await crud.delete_performance(db, performance)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Performance has bookings", ctx={"performance_id": performance_id}) from e


async def get_ticket_price(db: AsyncSession, ticket_price_id: int) -> TicketPrice:
    ticket_price = await crud.get_ticket_price_by_id(db, ticket_price_id)
    if not ticket_price:
        raise NotFound("Ticket price not found", ctx={"ticket_price_id": ticket_price_id})
    return ticket_price


async def list_ticket_prices(db: AsyncSession, show_id: int) -> list[TicketPrice]:
    await get_show(db, show_id)
    return await crud.list_ticket_prices_by_show(db, show_id)


async def create_ticket_price(db: AsyncSession, show_id: int, schema: TicketPriceCreateDTO) -> TicketPrice:
    async with AuditSpan(
        scope="TICKET_PRICES",
        action="CREATE",
        object_type="ticket_price",
        show_id=show_id,
        meta={"section_id": schema.section_id, "ticket_category_id": schema.ticket_category_id}
    ) as span:
        show = await get_show(db, show_id)
        ticket_price = await _build_ticket_price(db, show, schema)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict(
                "Ticket price already defined for this section and category",
                ctx={
                    "show_id": show_id,
                    "section_id": schema.section_id,
                    "ticket_category_id": schema.ticket_category_id
                }
            ) from e
        span.object_id = ticket_price.id
        return ticket_price


async def delete_ticket_price(db: AsyncSession, ticket_price_id: int) -> None:
    async with AuditSpan(
        scope="TICKET_PRICES",
        action="DELETE",
        object_type="ticket_price",
        object_id=ticket_price_id
    ) as span:
        ticket_price = await get_ticket_price(db, ticket_price_id)
        span.show_id = ticket_price.show_id
        await crud.delete_ticket_price(db, ticket_price)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Ticket price in use", ctx={"ticket_price_id": ticket_price_id}) from e
