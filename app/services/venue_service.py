from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import PageDTO
from app.core.auditing import AuditSpan
from app.domain.venues.models import Venue, Section
from app.domain.venues.schemas import VenueCreateDTO, VenueUpdateDTO, VenueReadDTO, VenuesQueryDTO, \
    SectionCreateDTO, SectionUpdateDTO
from app.domain.venues import crud
from app.services.event_service import get_media_item
from app.services import seat_allocation_service
from app.domain.exceptions import NotFound, Conflict, InvalidInput

DIMENSIONS = {"number_of_rows", "row_capacity"}


def _ensure_unique_section_names(names: list[str]) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise InvalidInput("Duplicate section name", ctx={"name": name})
        seen.add(name)


async def get_venue(db: AsyncSession, venue_id: int) -> Venue:
    venue = await crud.get_venue_by_id(db, venue_id)
    if not venue:
        raise NotFound("Venue not found", ctx={"venue_id": venue_id})
    return venue


async def list_venues(db: AsyncSession, query: VenuesQueryDTO) -> PageDTO[VenueReadDTO]:
    venues, total = await crud.list_all_venues(db, query.page, query.page_size, name=query.name)
    items = [VenueReadDTO.model_validate(venue) for venue in venues]
    return PageDTO(
        items=items,
        total=total,
        page=query.page,
        page_size=query.page_size
    )


async def create_venue(db: AsyncSession, schema: VenueCreateDTO) -> Venue:
    async with AuditSpan(
        scope="VENUES",
        action="CREATE",
        object_type="venue",
        meta={"name": schema.name, "sections": len(schema.sections)}
    ) as span:
        _ensure_unique_section_names([s.name for s in schema.sections])
        data = schema.model_dump(exclude_none=True, exclude={"sections"})
        if "media_item_id" in data:
            data["media_item"] = await get_media_item(db, data.pop("media_item_id"))
        sections = [s.model_dump(exclude_none=True) for s in schema.sections]
        venue = await crud.create_venue(db, data, sections)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Venue with this name already exists", ctx={"name": schema.name}) from e
        span.object_id = venue.id
        return venue


async def update_venue(db: AsyncSession, schema: VenueUpdateDTO, venue_id: int) -> Venue:
    fields = list(schema.model_dump(exclude_none=True).keys())
    async with AuditSpan(
        scope="VENUES",
        action="UPDATE",
        object_type="venue",
        object_id=venue_id,
        meta={"fields": fields}
    ):
        venue = await get_venue(db, venue_id)
        data = schema.model_dump(exclude_none=True)
        if "media_item_id" in data:
            data["media_item"] = await get_media_item(db, data.pop("media_item_id"))
        venue = await crud.update_venue(venue, data)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict(
                "Venue with this name already exists",
                ctx={"venue_id": venue_id, "fields": fields}
            ) from e
        return venue


async def delete_venue(db: AsyncSession, venue_id: int) -> None:
    async with AuditSpan(
        scope="VENUES",
        action="DELETE",
        object_type="venue",
        object_id=venue_id
    ):
        venue = await get_venue(db, venue_id)
        await crud.delete_venue(db, venue)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Venue in use", ctx={"venue_id": venue_id}) from e


async def get_section(db: AsyncSession, section_id: int) -> Section:
    section = await crud.get_section_by_id(db, section_id)
    if not section:
        raise NotFound("Section not found", ctx={"section_id": section_id})
    return section


async def list_sections_by_venue(db: AsyncSession, venue_id: int) -> list[Section]:
    await get_venue(db, venue_id)
    return await crud.list_sections_by_venue(db, venue_id)


async def create_section(
        db: AsyncSession,
        venue_id: int,
        schema: SectionCreateDTO
) -> Section:
    async with AuditSpan(
        scope="SECTIONS",
        action="CREATE",
        object_type="section",
        meta={"venue_id": venue_id, "name": schema.name}
    ) as span:
        venue = await get_venue(db, venue_id)
        data = schema.model_dump(exclude_none=True)
        section = await crud.create_section(db, venue, data)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict(
                "Section name already in use for this venue",
                ctx={"venue_id": venue_id, "name": schema.name}
            ) from e
        span.object_id = section.id
        return section


async def update_section(
        db: AsyncSession,
        schema: SectionUpdateDTO,
        section_id: int
) -> Section:
    fields = list(schema.model_dump(exclude_none=True).keys())
    async with AuditSpan(
        scope="SECTIONS",
        action="UPDATE",
        object_type="section",
        object_id=section_id,
        meta={"fields": fields}
    ):
        section = await get_section(db, section_id)
        data = schema.model_dump(exclude_none=True)
        if DIMENSIONS & data.keys():
            await seat_allocation_service.resize_allocations(
                db,
                section_id,
                data.get("number_of_rows", section.number_of_rows),
                data.get("row_capacity", section.row_capacity)
            )
        section = await crud.update_section(section, data)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict(
                "Section name already in use for this venue",
                ctx={"section_id": section_id, "fields": fields}
            ) from e
        return section


async def delete_section(db: AsyncSession, section_id: int) -> None:
    async with AuditSpan(
        scope="SECTIONS",
        action="DELETE",
        object_type="section",
        object_id=section_id
    ):
        section = await get_section(db, section_id)
        await crud.delete_section(db, section)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Section in use", ctx={"section_id": section_id}) from e
