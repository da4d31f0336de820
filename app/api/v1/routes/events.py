from fastapi import APIRouter, status, Depends, Response
from typing import Annotated
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.domain.catalog.schemas import EventCreateDTO, EventReadDTO, EventUpdateDTO, EventsQueryDTO, \
    EventCategoryCreateDTO, EventCategoryReadDTO, MediaItemCreateDTO, MediaItemReadDTO
from app.services import event_service


router = APIRouter(tags=["events"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.get(
    "/events",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[EventReadDTO]
)
async def list_events(db: db_dependency, query: Annotated[EventsQueryDTO, Depends()]):
    return await event_service.list_events(db, query)


@router.get(
    "/events/{event_id}",
    status_code=status.HTTP_200_OK,
    response_model=EventReadDTO
)
async def get_event(event_id: int, db: db_dependency):
    return await event_service.get_event(db, event_id)


@router.post(
    "/events",
    status_code=status.HTTP_201_CREATED,
    response_model=EventReadDTO
)
async def create_event(schema: EventCreateDTO, db: db_dependency, response: Response):
    event = await event_service.create_event(db, schema)
    response.headers["Location"] = f"/events/{event.id}"
    return event


@router.put(
    "/events/{event_id}",
    status_code=status.HTTP_200_OK,
    response_model=EventReadDTO
)
async def update_event(event_id: int, schema: EventUpdateDTO, db: db_dependency):
    return await event_service.update_event(db, schema, event_id)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: int, db: db_dependency):
    await event_service.delete_event(db, event_id)


@router.get(
    "/event-categories",
    status_code=status.HTTP_200_OK,
    response_model=list[EventCategoryReadDTO]
)
async def list_event_categories(db: db_dependency):
    return await event_service.list_event_categories(db)


@router.post(
    "/event-categories",
    status_code=status.HTTP_201_CREATED,
    response_model=EventCategoryReadDTO
)
async def create_event_category(schema: EventCategoryCreateDTO, db: db_dependency):
    return await event_service.create_event_category(db, schema)


@router.get(
    "/media-items",
    status_code=status.HTTP_200_OK,
    response_model=list[MediaItemReadDTO]
)
async def list_media_items(db: db_dependency):
    return await event_service.list_media_items(db)


@router.get(
    "/media-items/{media_item_id}",
    status_code=status.HTTP_200_OK,
    response_model=MediaItemReadDTO
)
async def get_media_item(media_item_id: int, db: db_dependency):
    return await event_service.get_media_item(db, media_item_id)


@router.post(
    "/media-items",
    status_code=status.HTTP_201_CREATED,
    response_model=MediaItemReadDTO
)
async def create_media_item(schema: MediaItemCreateDTO, db: db_dependency):
    return await event_service.create_media_item(db, schema)
