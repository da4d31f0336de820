from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Identity, Text, ForeignKey, Integer, UniqueConstraint, CheckConstraint
from app.core.database import Base
from app.domain.identity import NaturalKeyMixin
from app.domain.validation import constrained, NotEmpty, NotNull, Min


class Venue(NaturalKeyMixin, Base):
    __tablename__ = "venues"
    __natural_key__ = ("name",)

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True, info=constrained(NotEmpty()))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    street: Mapped[str] = mapped_column(Text, nullable=False, info=constrained(NotEmpty()))
    city: Mapped[str] = mapped_column(Text, nullable=False, info=constrained(NotEmpty()))
    country: Mapped[str] = mapped_column(Text, nullable=False, info=constrained(NotEmpty()))
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0, info=constrained(Min(0)))
    media_item_id: Mapped[int | None] = mapped_column(
        ForeignKey("media_items.id", ondelete='SET NULL'),
        nullable=True
    )

    media_item: Mapped['MediaItem'] = relationship(lazy='selectin')
    # Sections cross the REST boundary with their venue, so they load eagerly.
    sections: Mapped[list['Section']] = relationship(
        back_populates="venue",
        lazy='selectin',
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Section.name"
    )

    __table_args__ = (
        CheckConstraint("capacity >= 0", name="chk_venue_capacity"),
    )

    def __str__(self) -> str:
        return self.name or ""


class Section(NaturalKeyMixin, Base):
    __tablename__ = "sections"
    __natural_key__ = ("venue", "name")

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    venue_id: Mapped[int] = mapped_column(ForeignKey("venues.id", ondelete='CASCADE'), nullable=False, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, info=constrained(NotEmpty()))
    description: Mapped[str] = mapped_column(Text, nullable=False, info=constrained(NotEmpty()))
    number_of_rows: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    row_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    venue: Mapped['Venue'] = relationship(back_populates="sections", lazy='selectin', info=constrained(NotNull()))

    __table_args__ = (
        UniqueConstraint("venue_id", "name", name="uq_section_venue_name"),
        CheckConstraint("number_of_rows >= 0", name="chk_section_rows"),
        CheckConstraint("row_capacity >= 0", name="chk_section_row_capacity"),
    )

    @property
    def capacity(self) -> int:
        return (self.row_capacity or 0) * (self.number_of_rows or 0)

    def __str__(self) -> str:
        return self.name or ""
