from fastapi import APIRouter, status, Depends
from typing import Annotated
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.domain.shows.schemas import PerformanceReadDTO, TicketPriceReadDTO
from app.services import show_service


router = APIRouter(tags=['performances'])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.get(
    "/performances/{performance_id}",
    status_code=status.HTTP_200_OK,
    response_model=PerformanceReadDTO
)
async def get_performance(performance_id: int, db: db_dependency):
    return await show_service.get_performance(db, performance_id)


@router.delete("/performances/{performance_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_performance(performance_id: int, db: db_dependency):
    await show_service.delete_performance(db, performance_id)


@router.get(
    "/ticket-prices/{ticket_price_id}",
    status_code=status.HTTP_200_OK,
    response_model=TicketPriceReadDTO
)
async def get_ticket_price(ticket_price_id: int, db: db_dependency):
    return await show_service.get_ticket_price(db, ticket_price_id)


@router.delete("/ticket-prices/{ticket_price_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket_price(ticket_price_id: int, db: db_dependency):
    await show_service.delete_ticket_price(db, ticket_price_id)
