from app.services import venue_service
from fastapi import APIRouter, status, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.domain.venues.schemas import SectionReadDTO, SectionUpdateDTO
from typing import Annotated


router = APIRouter(prefix='/sections', tags=['sections'])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.get(
    "/{section_id}",
    status_code=status.HTTP_200_OK,
    response_model=SectionReadDTO
)
async def get_section(section_id: int, db: db_dependency):
    return await venue_service.get_section(db, section_id)


@router.patch(
    "/{section_id}",
    status_code=status.HTTP_200_OK,
    response_model=SectionReadDTO
)
async def update_section(section_id: int, schema: SectionUpdateDTO, db: db_dependency):
    return await venue_service.update_section(db, schema, section_id)


@router.delete("/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_section(section_id: int, db: db_dependency):
    await venue_service.delete_section(db, section_id)
