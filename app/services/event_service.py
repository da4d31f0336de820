from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import PageDTO
from app.core.auditing import AuditSpan
from app.domain.catalog.models import Event, EventCategory, MediaItem
from app.domain.catalog import crud
from app.domain.catalog.schemas import EventCreateDTO, EventUpdateDTO, EventReadDTO, EventsQueryDTO, \
    EventCategoryCreateDTO, MediaItemCreateDTO
from app.domain.exceptions import NotFound, Conflict


async def get_media_item(db: AsyncSession, media_item_id: int) -> MediaItem:
    media_item = await crud.get_media_item_by_id(db, media_item_id)
    if not media_item:
        raise NotFound("Media item not found", ctx={"media_item_id": media_item_id})
    return media_item


async def list_media_items(db: AsyncSession) -> list[MediaItem]:
    return await crud.list_media_items(db)


async def create_media_item(db: AsyncSession, schema: MediaItemCreateDTO) -> MediaItem:
    async with AuditSpan(
        scope="MEDIA_ITEMS",
        action="CREATE",
        object_type="media_item",
        meta={"media_type": schema.media_type.value}
    ) as span:
        media_item = await crud.create_media_item(db, schema.model_dump(exclude_none=True))
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Media item with this url already exists", ctx={"url": schema.url}) from e
        span.object_id = media_item.id
        return media_item


async def get_event_category(db: AsyncSession, category_id: int) -> EventCategory:
    category = await crud.get_event_category_by_id(db, category_id)
    if not category:
        raise NotFound("Event category not found", ctx={"category_id": category_id})
    return category


async def list_event_categories(db: AsyncSession) -> list[EventCategory]:
    return await crud.list_event_categories(db)


async def create_event_category(db: AsyncSession, schema: EventCategoryCreateDTO) -> EventCategory:
    async with AuditSpan(
        scope="EVENT_CATEGORIES",
        action="CREATE",
        object_type="event_category",
        meta={"description": schema.description}
    ) as span:
        category = await crud.create_event_category(db, schema.model_dump(exclude_none=True))
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Event category already exists", ctx={"description": schema.description}) from e
        span.object_id = category.id
        return category


async def get_event(db: AsyncSession, event_id: int) -> Event:
    event = await crud.get_event_by_id(db, event_id)
    if not event:
        raise NotFound("Event not found", ctx={"event_id": event_id})
    return event


async def list_events(db: AsyncSession, query: EventsQueryDTO) -> PageDTO[EventReadDTO]:
    events, total = await crud.list_events(
        db,
        page=query.page,
        page_size=query.page_size,
        name=query.name,
        category_id=query.category_id
    )
    items = [EventReadDTO.model_validate(event) for event in events]
    return PageDTO(items=items, total=total, page=query.page, page_size=query.page_size)


async def _resolve_references(db: AsyncSession, data: dict) -> dict:
    if "category_id" in data:
        data["category"] = await get_event_category(db, data.pop("category_id"))
    if "media_item_id" in data:
        data["media_item"] = await get_media_item(db, data.pop("media_item_id"))
    return data


async def create_event(db: AsyncSession, schema: EventCreateDTO) -> Event:
    async with AuditSpan(
        scope="EVENTS",
        action="CREATE",
        object_type="event",
        meta={"category_id": schema.category_id}
    ) as span:
        data = await _resolve_references(db, schema.model_dump(exclude_none=True))
        event = await crud.create_event(db, data)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Event with this name already exists", ctx={"name": schema.name}) from e
        span.object_id = event.id
        span.event_id = event.id
        return event


async def update_event(db: AsyncSession, schema: EventUpdateDTO, event_id: int) -> Event:
    fields = list(schema.model_dump(exclude_none=True).keys())
    async with AuditSpan(
        scope="EVENTS",
        action="UPDATE",
        object_type="event",
        object_id=event_id,
        event_id=event_id,
        meta={"fields": fields}
    ):
        event = await get_event(db, event_id)
        data = await _resolve_references(db, schema.model_dump(exclude_none=True))
        event = await crud.update_event(event, data)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Event with this name already exists", ctx={"event_id": event_id, "fields": fields}) from e
        return event


async def delete_event(db: AsyncSession, event_id: int) -> None:
    async with AuditSpan(
        scope="EVENTS",
        action="DELETE",
        object_type="event",
        object_id=event_id,
        event_id=event_id
    ):
        event = await get_event(db, event_id)
        await crud.delete_event(db, event)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Event has shows", ctx={"event_id": event_id}) from e
