from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import paginate
from app.domain.venues.models import Venue, Section


async def get_venue_by_id(db: AsyncSession, venue_id: int) -> Venue | None:
    stmt = select(Venue).where(Venue.id == venue_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_all_venues(
        db: AsyncSession,
        page: int,
        page_size: int,
        name: str | None = None
) -> tuple[list[Venue], int]:
    where = []
    if name:
        where.append(Venue.name.ilike(f"%{name}%"))

    return await paginate(
        db,
        base_stmt=select(Venue),
        page=page,
        page_size=page_size,
        where=where,
        order_by=[Venue.name, Venue.id],
        count_by=Venue.id
    )


async def create_venue(db: AsyncSession, data: dict, sections: list[dict]) -> Venue:
    venue = Venue(**data)
    for section_data in sections:
        venue.sections.append(Section(**section_data))
    db.add(venue)
    return venue


async def update_venue(venue: Venue, data: dict) -> Venue:
    for key, value in data.items():
        setattr(venue, key, value)
    return venue


async def delete_venue(db: AsyncSession, venue: Venue) -> None:
    await db.delete(venue)


async def get_section_by_id(db: AsyncSession, section_id: int) -> Section | None:
    stmt = select(Section).where(Section.id == section_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_sections_by_venue(db: AsyncSession, venue_id: int) -> list[Section]:
    stmt = select(Section).where(Section.venue_id == venue_id).order_by(Section.name)
    result = await db.execute(stmt)
    return result.scalars().all()


async def create_section(db: AsyncSession, venue: Venue, data: dict) -> Section:
    section = Section(**data)
    venue.sections.append(section)
    db.add(section)
    return section


async def update_section(section: Section, data: dict) -> Section:
    for key, value in data.items():
        setattr(section, key, value)
    return section


async def delete_section(db: AsyncSession, section: Section) -> None:
    await db.delete(section)
