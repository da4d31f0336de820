from datetime import datetime
from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Identity, ForeignKey, UniqueConstraint, CheckConstraint, TIMESTAMP, Numeric
from app.core.database import Base
from app.domain.identity import NaturalKeyMixin
from app.domain.validation import constrained, NotNull, Min


class Show(NaturalKeyMixin, Base):
    """An event taking place at a particular venue; the aggregate root of its performances and prices."""
    __tablename__ = "shows"
    __natural_key__ = ("event", "venue")

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id", ondelete='RESTRICT'), nullable=False, index=True)
    venue_id: Mapped[int] = mapped_column(ForeignKey("venues.id", ondelete='RESTRICT'), nullable=False, index=True)

    event: Mapped['Event'] = relationship(lazy='selectin', info=constrained(NotNull()))
    venue: Mapped['Venue'] = relationship(lazy='selectin', info=constrained(NotNull()))
    # Both collections are serialized after the session closes, so they load with the show.
    performances: Mapped[list['Performance']] = relationship(
        back_populates="show",
        lazy='selectin',
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Performance.date"
    )
    ticket_prices: Mapped[list['TicketPrice']] = relationship(
        back_populates="show",
        lazy='selectin',
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    __table_args__ = (
        UniqueConstraint("event_id", "venue_id", name="uq_show_event_venue"),
    )

    def __str__(self) -> str:
        return f"{self.event} at {self.venue}"


class Performance(NaturalKeyMixin, Base):
    __tablename__ = "performances"
    __natural_key__ = ("show", "date")

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    show_id: Mapped[int] = mapped_column(ForeignKey("shows.id", ondelete='CASCADE'), nullable=False, index=True)
    date: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False, info=constrained(NotNull()))

    show: Mapped['Show'] = relationship(back_populates="performances", lazy='selectin', info=constrained(NotNull()))

    __table_args__ = (
        UniqueConstraint("date", "show_id", name="uq_performance_date_show"),
    )


class TicketPrice(NaturalKeyMixin, Base):
    __tablename__ = "ticket_prices"
    __natural_key__ = ("section", "show", "ticket_category")

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    show_id: Mapped[int] = mapped_column(ForeignKey("shows.id", ondelete='CASCADE'), nullable=False, index=True)
    section_id: Mapped[int] = mapped_column(ForeignKey("sections.id", ondelete='RESTRICT'), nullable=False, index=True)
    ticket_category_id: Mapped[int] = mapped_column(
        ForeignKey("ticket_categories.id", ondelete='RESTRICT'),
        nullable=False,
        index=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, info=constrained(NotNull(), Min(0)))

    show: Mapped['Show'] = relationship(back_populates="ticket_prices", lazy='selectin', info=constrained(NotNull()))
    section: Mapped['Section'] = relationship(lazy='selectin', info=constrained(NotNull()))
    ticket_category: Mapped['TicketCategory'] = relationship(lazy='selectin', info=constrained(NotNull()))

    __table_args__ = (
        UniqueConstraint("section_id", "show_id", "ticket_category_id", name="uq_ticket_price_section_show_category"),
        CheckConstraint("price >= 0", name="chk_ticket_price"),
    )

    @property
    def description(self) -> str:
        return f"{self.section} ({self.ticket_category.description if self.ticket_category else ''})"
