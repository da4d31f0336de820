from fastapi import APIRouter, status, Depends, Response
from typing import Annotated
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.domain.booking.schemas import BookingCreateDTO, BookingReadDTO, BookingsQueryDTO
from app.services import booking_service


router = APIRouter(prefix='/bookings', tags=['bookings'])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[BookingReadDTO]
)
async def list_bookings(db: db_dependency, query: Annotated[BookingsQueryDTO, Depends()]):
    return await booking_service.list_bookings(db, query)


@router.get(
    "/{booking_id}",
    status_code=status.HTTP_200_OK,
    response_model=BookingReadDTO
)
async def get_booking(booking_id: int, db: db_dependency):
    return await booking_service.get_booking(db, booking_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BookingReadDTO
)
async def create_booking(schema: BookingCreateDTO, db: db_dependency, response: Response):
    booking = await booking_service.create_booking(db, schema)
    response.headers["Location"] = f"{router.prefix}/{booking.id}"
    return booking


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_booking(booking_id: int, db: db_dependency):
    await booking_service.cancel_booking(db, booking_id)
