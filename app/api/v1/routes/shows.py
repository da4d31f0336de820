from fastapi import APIRouter, status, Depends, Response
from typing import Annotated
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.domain.shows.schemas import ShowCreateDTO, ShowReadDTO, ShowsQueryDTO, PerformanceCreateDTO, \
    PerformanceReadDTO, TicketPriceCreateDTO, TicketPriceReadDTO
from app.services import show_service


router = APIRouter(prefix='/shows', tags=['shows'])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[ShowReadDTO]
)
async def list_shows(db: db_dependency, query: Annotated[ShowsQueryDTO, Depends()]):
    return await show_service.list_shows(db, query)


@router.get(
    "/performance/{performance_id}",
    status_code=status.HTTP_200_OK,
    response_model=ShowReadDTO
)
async def get_show_by_performance(performance_id: int, db: db_dependency):
    return await show_service.get_show_by_performance(db, performance_id)


@router.get(
    "/{show_id}",
    status_code=status.HTTP_200_OK,
    response_model=ShowReadDTO
)
async def get_show(show_id: int, db: db_dependency):
    return await show_service.get_show(db, show_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ShowReadDTO
)
async def create_show(schema: ShowCreateDTO, db: db_dependency, response: Response):
    show = await show_service.create_show(db, schema)
    response.headers["Location"] = f"{router.prefix}/{show.id}"
    return show


@router.delete("/{show_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_show(show_id: int, db: db_dependency):
    await show_service.delete_show(db, show_id)


@router.get(
    "/{show_id}/performances",
    status_code=status.HTTP_200_OK,
    response_model=list[PerformanceReadDTO]
)
async def list_performances(show_id: int, db: db_dependency):
    return await show_service.list_performances(db, show_id)


@router.post(
    "/{show_id}/performances",
    status_code=status.HTTP_201_CREATED,
    response_model=PerformanceReadDTO
)
async def create_performance(show_id: int, schema: PerformanceCreateDTO, db: db_dependency, response: Response):
    performance = await show_service.create_performance(db, show_id, schema)
    response.headers["Location"] = f"/performances/{performance.id}"
    return performance


@router.get(
    "/{show_id}/ticket-prices",
    status_code=status.HTTP_200_OK,
    response_model=list[TicketPriceReadDTO]
)
async def list_ticket_prices(show_id: int, db: db_dependency):
    return await show_service.list_ticket_prices(db, show_id)


@router.post(
    "/{show_id}/ticket-prices",
    status_code=status.HTTP_201_CREATED,
    response_model=TicketPriceReadDTO
)
async def create_ticket_price(show_id: int, schema: TicketPriceCreateDTO, db: db_dependency, response: Response):
    ticket_price = await show_service.create_ticket_price(db, show_id, schema)
    response.headers["Location"] = f"/ticket-prices/{ticket_price.id}"
    return ticket_price
