from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict, EmailStr, field_validator
from app.core.text_utils import strip_text
from app.domain.catalog.schemas import TicketCategoryReadDTO


class TicketRequestDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    ticket_price_id: int = Field(gt=0)
    quantity: int = Field(ge=1)


class BookingCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    performance_id: int = Field(gt=0)
    email: EmailStr
    ticket_requests: list[TicketRequestDTO] = Field(min_length=1, max_length=50)

    _strip_email = field_validator("email", mode="before")(strip_text)


class TicketReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='ignore')

    id: int
    section_id: int
    row_number: int
    seat_number: int
    price: Decimal
    ticket_category: TicketCategoryReadDTO


class BookingReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='ignore')

    id: int
    performance_id: int
    cancellation_code: str
    created_on: datetime
    contact_email: str
    total_ticket_price: Decimal
    tickets: list[TicketReadDTO] = Field(default_factory=list)


class BookingsQueryDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=200)
    performance_id: int | None = None
