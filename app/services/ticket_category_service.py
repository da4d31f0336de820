from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.pagination import PageDTO
from app.core.auditing import AuditSpan
from app.domain.catalog.models import TicketCategory
from app.domain.catalog import crud
from app.domain.catalog.schemas import TicketCategoryCreateDTO, TicketCategoryReadDTO, TicketCategoriesQueryDTO
from app.domain.exceptions import NotFound, Conflict


async def get_ticket_category(db: AsyncSession, ticket_category_id: int) -> TicketCategory:
    ticket_category = await crud.get_ticket_category_by_id(db, ticket_category_id)
    if not ticket_category:
        raise NotFound("Ticket category not found", ctx={"ticket_category_id": ticket_category_id})
    return ticket_category


async def list_ticket_categories(
        db: AsyncSession,
        query: TicketCategoriesQueryDTO
) -> PageDTO[TicketCategoryReadDTO]:
    categories, total = await crud.list_ticket_categories(db, query.page, query.page_size)
    items = [TicketCategoryReadDTO.model_validate(category) for category in categories]
    return PageDTO(items=items, total=total, page=query.page, page_size=query.page_size)


async def create_ticket_category(db: AsyncSession, schema: TicketCategoryCreateDTO) -> TicketCategory:
    async with AuditSpan(
        scope="TICKET_CATEGORIES",
        action="CREATE",
        object_type="ticket_category",
        meta={"description": schema.description}
    ) as span:
        data = schema.model_dump(exclude_none=True)
        ticket_category = await crud.create_ticket_category(db, data)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Ticket category already exists", ctx={"description": schema.description}) from e
        span.object_id = ticket_category.id
        return ticket_category


async def delete_ticket_category(db: AsyncSession, ticket_category_id: int) -> None:
    async with AuditSpan(
        scope="TICKET_CATEGORIES",
        action="DELETE",
        object_type="ticket_category",
        object_id=ticket_category_id,
    ):
        ticket_category = await get_ticket_category(db, ticket_category_id)
        await crud.delete_ticket_category(db, ticket_category)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Ticket category in use", ctx={"ticket_category_id": ticket_category_id}) from e
