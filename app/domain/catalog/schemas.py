from pydantic import BaseModel, Field, ConfigDict, field_validator
from app.domain.catalog.models import MediaType
from app.core.text_utils import strip_text


class MediaItemCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    media_type: MediaType = Field(default=MediaType.IMAGE)
    url: str = Field(min_length=1, max_length=2000)

    _strip_url = field_validator("url", mode='before')(strip_text)


class MediaItemReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='forbid')

    id: int
    media_type: MediaType
    url: str


class EventCategoryCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    description: str = Field(min_length=1, max_length=255)

    _strip_description = field_validator("description", mode='before')(strip_text)


class EventCategoryReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='forbid')

    id: int
    description: str


class TicketCategoryCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    description: str = Field(min_length=1, max_length=255)

    _strip_description = field_validator("description", mode='before')(strip_text)


class TicketCategoryReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='forbid')

    id: int
    description: str


class EventCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field(min_length=5, max_length=50)
    description: str = Field(min_length=20, max_length=1000)
    category_id: int = Field(gt=0)
    media_item_id: int | None = Field(default=None, gt=0)

    _strip_name = field_validator("name", mode="before")(strip_text)
    _strip_desc = field_validator("description", mode="before")(strip_text)


class EventUpdateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str | None = Field(default=None, min_length=5, max_length=50)
    description: str | None = Field(default=None, min_length=20, max_length=1000)
    category_id: int | None = Field(default=None, gt=0)
    media_item_id: int | None = Field(default=None, gt=0)

    _strip_name = field_validator("name", mode="before")(strip_text)
    _strip_desc = field_validator("description", mode="before")(strip_text)


class EventReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='forbid')

    id: int
    name: str
    description: str
    category: EventCategoryReadDTO
    media_item: MediaItemReadDTO | None = None


class EventsQueryDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=200)
    name: str | None = None
    category_id: int | None = None


class TicketCategoriesQueryDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=200)
