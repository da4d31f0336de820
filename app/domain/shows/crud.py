from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import paginate
from app.domain.shows.models import Show, Performance, TicketPrice


async def get_show_by_id(db: AsyncSession, show_id: int) -> Show | None:
    stmt = select(Show).where(Show.id == show_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def get_show_by_performance(db: AsyncSession, performance_id: int) -> Show | None:
    stmt = select(Show).join(Show.performances).where(Performance.id == performance_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_shows(
        db: AsyncSession,
        page: int,
        page_size: int,
        *,
        event_id: int | None = None,
        venue_id: int | None = None
) -> tuple[list[Show], int]:
    where = []
    if event_id is not None:
        where.append(Show.event_id == event_id)
    if venue_id is not None:
        where.append(Show.venue_id == venue_id)

    return await paginate(
        db,
        base_stmt=select(Show),
        page=page,
        page_size=page_size,
        where=where,
        order_by=[Show.id],
        count_by=Show.id
    )


async def create_show(db: AsyncSession, data: dict) -> Show:
    show = Show(**data)
    db.add(show)
    return show


async def delete_show(db: AsyncSession, show: Show) -> None:
    await db.delete(show)


async def get_performance_by_id(db: AsyncSession, performance_id: int) -> Performance | None:
    stmt = select(Performance).where(Performance.id == performance_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_performances_by_show(db: AsyncSession, show_id: int) -> list[Performance]:
    stmt = select(Performance).where(Performance.show_id == show_id).order_by(Performance.date)
    result = await db.execute(stmt)
    return result.scalars().all()


async def create_performance(db: AsyncSession, show: Show, data: dict) -> Performance:
    performance = Performance(**data)
    show.performances.append(performance)
    db.add(performance)
    return performance


async def delete_performance(db: AsyncSession, performance: Performance) -> None:
    await db.delete(performance)


async def get_ticket_price_by_id(db: AsyncSession, ticket_price_id: int) -> TicketPrice | None:
    stmt = select(TicketPrice).where(TicketPrice.id == ticket_price_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_ticket_prices_by_show(db: AsyncSession, show_id: int) -> list[TicketPrice]:
    stmt = select(TicketPrice).where(TicketPrice.show_id == show_id).order_by(TicketPrice.id)
    result = await db.execute(stmt)
    return result.scalars().all()


async def create_ticket_price(db: AsyncSession, show: Show, data: dict) -> TicketPrice:
    ticket_price = TicketPrice(**data)
    show.ticket_prices.append(ticket_price)
    db.add(ticket_price)
    return ticket_price


async def delete_ticket_price(db: AsyncSession, ticket_price: TicketPrice) -> None:
    await db.delete(ticket_price)
