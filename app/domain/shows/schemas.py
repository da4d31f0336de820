from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict
from app.domain.catalog.schemas import EventReadDTO, TicketCategoryReadDTO
from app.domain.venues.schemas import VenueReadDTO, SectionReadDTO


class PerformanceCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    date: datetime


class PerformanceReadDTO(BaseModel):
    """Performances are emitted under their show; the show reference is left out."""
    model_config = ConfigDict(from_attributes=True, extra='ignore')

    id: int
    date: datetime


class TicketPriceCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    section_id: int = Field(gt=0)
    ticket_category_id: int = Field(gt=0)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


class TicketPriceReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='ignore')

    id: int
    price: Decimal
    description: str
    section: SectionReadDTO
    ticket_category: TicketCategoryReadDTO


class ShowCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    event_id: int = Field(gt=0)
    venue_id: int = Field(gt=0)
    performances: list[PerformanceCreateDTO] = Field(default_factory=list, max_length=1000)
    ticket_prices: list[TicketPriceCreateDTO] = Field(default_factory=list, max_length=1000)


class ShowReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='ignore')

    id: int
    event: EventReadDTO
    venue: VenueReadDTO
    performances: list[PerformanceReadDTO] = Field(default_factory=list)
    ticket_prices: list[TicketPriceReadDTO] = Field(default_factory=list)


class ShowsQueryDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=200)
    event_id: int | None = None
    venue_id: int | None = None
