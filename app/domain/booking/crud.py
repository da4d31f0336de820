from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import paginate
from app.domain.booking.models import Booking, SectionAllocation


async def get_booking_by_id(db: AsyncSession, booking_id: int) -> Booking | None:
    stmt = select(Booking).where(Booking.id == booking_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_bookings(
        db: AsyncSession,
        page: int,
        page_size: int,
        *,
        performance_id: int | None = None
) -> tuple[list[Booking], int]:
    where = []
    if performance_id is not None:
        where.append(Booking.performance_id == performance_id)

    return await paginate(
        db,
        base_stmt=select(Booking),
        page=page,
        page_size=page_size,
        where=where,
        order_by=[Booking.created_on.desc(), Booking.id],
        count_by=Booking.id
    )


async def create_booking(db: AsyncSession, data: dict) -> Booking:
    booking = Booking(**data)
    db.add(booking)
    return booking


async def delete_booking(db: AsyncSession, booking: Booking) -> None:
    await db.delete(booking)


async def get_section_allocation(db: AsyncSession, performance_id: int, section_id: int) -> SectionAllocation | None:
    stmt = select(SectionAllocation).where(
        SectionAllocation.performance_id == performance_id,
        SectionAllocation.section_id == section_id
    )
    result = await db.execute(stmt)
    return result.scalars().first()


async def create_section_allocation(db: AsyncSession, data: dict) -> SectionAllocation:
    allocation = SectionAllocation(**data)
    db.add(allocation)
    return allocation


async def list_section_allocations(db: AsyncSession, section_id: int) -> list[SectionAllocation]:
    stmt = select(SectionAllocation).where(SectionAllocation.section_id == section_id)
    result = await db.execute(stmt)
    return list(result.scalars().all())
