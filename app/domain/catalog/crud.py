from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import paginate
from app.domain.catalog.models import MediaItem, EventCategory, TicketCategory, Event


async def get_media_item_by_id(db: AsyncSession, media_item_id: int) -> MediaItem | None:
    stmt = select(MediaItem).where(MediaItem.id == media_item_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_media_items(db: AsyncSession) -> list[MediaItem]:
    stmt = select(MediaItem).order_by(MediaItem.id)
    result = await db.execute(stmt)
    return result.scalars().all()


async def create_media_item(db: AsyncSession, data: dict) -> MediaItem:
    media_item = MediaItem(**data)
    db.add(media_item)
    return media_item


async def get_event_category_by_id(db: AsyncSession, category_id: int) -> EventCategory | None:
    stmt = select(EventCategory).where(EventCategory.id == category_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_event_categories(db: AsyncSession) -> list[EventCategory]:
    stmt = select(EventCategory).order_by(EventCategory.description)
    result = await db.execute(stmt)
    return result.scalars().all()


async def create_event_category(db: AsyncSession, data: dict) -> EventCategory:
    category = EventCategory(**data)
    db.add(category)
    return category


async def get_ticket_category_by_id(db: AsyncSession, ticket_category_id: int) -> TicketCategory | None:
    stmt = select(TicketCategory).where(TicketCategory.id == ticket_category_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_ticket_categories(db: AsyncSession, page: int, page_size: int) -> tuple[list[TicketCategory], int]:
    return await paginate(
        db,
        base_stmt=select(TicketCategory),
        page=page,
        page_size=page_size,
        order_by=[TicketCategory.description, TicketCategory.id]
    )


async def create_ticket_category(db: AsyncSession, data: dict) -> TicketCategory:
    ticket_category = TicketCategory(**data)
    db.add(ticket_category)
    return ticket_category


async def delete_ticket_category(db: AsyncSession, ticket_category: TicketCategory) -> None:
    await db.delete(ticket_category)


async def get_event_by_id(db: AsyncSession, event_id: int) -> Event | None:
    stmt = select(Event).where(Event.id == event_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_events(
        db: AsyncSession,
        page: int,
        page_size: int,
        *,
        name: str | None = None,
        category_id: int | None = None
) -> tuple[list[Event], int]:
    where = []
    if name:
        where.append(Event.name.ilike(f"%{name}%"))
    if category_id is not None:
        where.append(Event.category_id == category_id)

    return await paginate(
        db,
        base_stmt=select(Event),
        page=page,
        page_size=page_size,
        where=where,
        order_by=[Event.name, Event.id],
        count_by=Event.id
    )


async def create_event(db: AsyncSession, data: dict) -> Event:
    event = Event(**data)
    db.add(event)
    return event


async def update_event(event: Event, data: dict) -> Event:
    for key, value in data.items():
        setattr(event, key, value)
    return event


async def delete_event(db: AsyncSession, event: Event) -> None:
    await db.delete(event)
