from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Identity, Text, ForeignKey, Enum as SQLEnum
from app.core.database import Base
from app.domain.identity import NaturalKeyMixin
from app.domain.validation import constrained, NotEmpty, NotNull, Size
import enum


class MediaType(str, enum.Enum):
    IMAGE = "IMAGE"
    VIDEO_YOUTUBE = "VIDEO_YOUTUBE"


class MediaItem(NaturalKeyMixin, Base):
    __tablename__ = "media_items"
    __natural_key__ = ("url",)

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    media_type: Mapped[MediaType] = mapped_column(
        SQLEnum(MediaType, name="media_type"),
        nullable=False,
        default=MediaType.IMAGE
    )
    url: Mapped[str] = mapped_column(Text, nullable=False, unique=True, info=constrained(NotEmpty()))


class EventCategory(NaturalKeyMixin, Base):
    __tablename__ = "event_categories"
    __natural_key__ = ("description",)

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, unique=True, info=constrained(NotEmpty()))


class TicketCategory(NaturalKeyMixin, Base):
    """A kind of ticket (adult, child, concession) priced per show section."""
    __tablename__ = "ticket_categories"
    __natural_key__ = ("description",)

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, unique=True, info=constrained(NotEmpty()))

    def __str__(self) -> str:
        return f"TicketCategory description: {self.description}" if self.description else "TicketCategory"


class Event(NaturalKeyMixin, Base):
    __tablename__ = "events"
    __natural_key__ = ("name",)

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True, info=constrained(NotNull(), Size(5, 50)))
    description: Mapped[str] = mapped_column(Text, nullable=False, info=constrained(NotNull(), Size(20, 1000)))
    category_id: Mapped[int] = mapped_column(
        ForeignKey("event_categories.id", ondelete='RESTRICT'),
        nullable=False,
        index=True
    )
    media_item_id: Mapped[int | None] = mapped_column(
        ForeignKey("media_items.id", ondelete='SET NULL'),
        nullable=True
    )

    category: Mapped['EventCategory'] = relationship(lazy='selectin', info=constrained(NotNull()))
    media_item: Mapped['MediaItem'] = relationship(lazy='selectin')

    def __str__(self) -> str:
        return self.name or ""
