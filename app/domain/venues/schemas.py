from pydantic import BaseModel, Field, ConfigDict, field_validator, computed_field
from app.core.text_utils import strip_text
from app.domain.catalog.schemas import MediaItemReadDTO


class SectionCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field(min_length=1, max_length=15)
    description: str = Field(min_length=1, max_length=255)
    number_of_rows: int = Field(ge=0)
    row_capacity: int = Field(ge=0)

    _strip_name = field_validator("name", mode='before')(strip_text)
    _strip_description = field_validator("description", mode='before')(strip_text)


class SectionUpdateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str | None = Field(default=None, min_length=1, max_length=15)
    description: str | None = Field(default=None, min_length=1, max_length=255)
    number_of_rows: int | None = Field(default=None, ge=0)
    row_capacity: int | None = Field(default=None, ge=0)

    _strip_name = field_validator("name", mode='before')(strip_text)
    _strip_description = field_validator("description", mode='before')(strip_text)


class SectionReadDTO(BaseModel):
    """A section as seen from its venue; the venue back-reference is never serialized."""
    model_config = ConfigDict(from_attributes=True, extra='ignore')

    id: int
    name: str
    description: str
    number_of_rows: int
    row_capacity: int

    @computed_field
    @property
    def capacity(self) -> int:
        return self.number_of_rows * self.row_capacity


class VenueCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    country: str = Field(min_length=1, max_length=100)
    capacity: int = Field(default=0, ge=0)
    media_item_id: int | None = Field(default=None, gt=0)
    sections: list[SectionCreateDTO] = Field(default_factory=list, max_length=500)

    _strip_name = field_validator("name", mode='before')(strip_text)
    _strip_street = field_validator("street", mode='before')(strip_text)
    _strip_city = field_validator("city", mode='before')(strip_text)
    _strip_country = field_validator("country", mode='before')(strip_text)


class VenueUpdateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    capacity: int | None = Field(default=None, ge=0)
    media_item_id: int | None = Field(default=None, gt=0)

    _strip_name = field_validator("name", mode='before')(strip_text)


class VenueReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='ignore')

    id: int
    name: str
    description: str | None = None
    street: str
    city: str
    country: str
    capacity: int
    media_item: MediaItemReadDTO | None = None
    sections: list[SectionReadDTO] = Field(default_factory=list)


class VenuesQueryDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=200)
    name: str | None = None
