from app.core.pagination import PageDTO
from app.services import venue_service
from fastapi import APIRouter, status, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.domain.venues.schemas import (
    VenueCreateDTO,
    VenueUpdateDTO,
    VenueReadDTO,
    SectionReadDTO,
    SectionCreateDTO, VenuesQueryDTO
)
from typing import Annotated


router = APIRouter(prefix='/venues', tags=['venues'])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=VenueReadDTO
)
async def create_venue(
        schema: VenueCreateDTO,
        db: db_dependency,
        response: Response
):
    venue = await venue_service.create_venue(db, schema)
    response.headers["Location"] = f"{router.prefix}/{venue.id}"
    return venue


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[VenueReadDTO]
)
async def get_all_venues(db: db_dependency, query: Annotated[VenuesQueryDTO, Depends()]):
    return await venue_service.list_venues(db, query)


@router.get(
    "/{venue_id}",
    status_code=status.HTTP_200_OK,
    response_model=VenueReadDTO
)
async def get_venue(venue_id: int, db: db_dependency):
    return await venue_service.get_venue(db, venue_id)


@router.put(
    "/{venue_id}",
    status_code=status.HTTP_200_OK,
    response_model=VenueReadDTO
)
async def update_venue(
        venue_id: int,
        schema: VenueUpdateDTO,
        db: db_dependency
):
    return await venue_service.update_venue(db, schema, venue_id)


@router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_venue(venue_id: int, db: db_dependency):
    await venue_service.delete_venue(db, venue_id)


@router.post(
    "/{venue_id}/sections",
    status_code=status.HTTP_201_CREATED,
    response_model=SectionReadDTO,
    name="create_section_for_venue"
)
async def create_section_for_venue(
        venue_id: int,
        schema: SectionCreateDTO,
        db: db_dependency,
        response: Response,
):
    section = await venue_service.create_section(db, venue_id, schema)
    response.headers["Location"] = f"/sections/{section.id}"
    return section


@router.get(
    "/{venue_id}/sections",
    status_code=status.HTTP_200_OK,
    response_model=list[SectionReadDTO]
)
async def get_all_sections_by_venue(venue_id: int, db: db_dependency):
    return await venue_service.list_sections_by_venue(db, venue_id)
