from fastapi import APIRouter, status, Depends, Response
from typing import Annotated
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.domain.catalog.schemas import TicketCategoryCreateDTO, TicketCategoryReadDTO, TicketCategoriesQueryDTO
from app.services import ticket_category_service


router = APIRouter(prefix='/ticket-categories', tags=['ticket-categories'])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[TicketCategoryReadDTO]
)
async def list_ticket_categories(db: db_dependency, query: Annotated[TicketCategoriesQueryDTO, Depends()]):
    return await ticket_category_service.list_ticket_categories(db, query)


@router.get(
    "/{ticket_category_id}",
    status_code=status.HTTP_200_OK,
    response_model=TicketCategoryReadDTO
)
async def get_ticket_category(ticket_category_id: int, db: db_dependency):
    return await ticket_category_service.get_ticket_category(db, ticket_category_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TicketCategoryReadDTO
)
async def create_ticket_category(schema: TicketCategoryCreateDTO, db: db_dependency, response: Response):
    ticket_category = await ticket_category_service.create_ticket_category(db, schema)
    response.headers["Location"] = f"{router.prefix}/{ticket_category.id}"
    return ticket_category


@router.delete("/{ticket_category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket_category(ticket_category_id: int, db: db_dependency):
    await ticket_category_service.delete_ticket_category(db, ticket_category_id)
