import uuid
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Identity, Text, ForeignKey, Numeric, TIMESTAMP, Integer, JSON, UniqueConstraint, CheckConstraint
from app.core.database import Base
from app.domain.identity import NaturalKeyMixin
from app.domain.validation import constrained, NotEmpty, NotNull, Min, Email


def _cancellation_code() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Booking(NaturalKeyMixin, Base):
    __tablename__ = "bookings"
    __natural_key__ = ("cancellation_code",)

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    performance_id: Mapped[int] = mapped_column(
        ForeignKey("performances.id", ondelete='RESTRICT'),
        nullable=False,
        index=True
    )
    cancellation_code: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        default=_cancellation_code,
        info=constrained(NotEmpty())
    )
    created_on: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        info=constrained(NotNull())
    )
    contact_email: Mapped[str] = mapped_column(Text, nullable=False, info=constrained(NotEmpty(), Email()))

    performance: Mapped['Performance'] = relationship(lazy='selectin', info=constrained(NotNull()))
    tickets: Mapped[list['Ticket']] = relationship(
        back_populates="booking",
        lazy='selectin',
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __init__(self, **kwargs):
        # both are checked before the INSERT that would apply the column defaults
        kwargs.setdefault("cancellation_code", _cancellation_code())
        kwargs.setdefault("created_on", _utcnow())
        super().__init__(**kwargs)

    @property
    def total_ticket_price(self) -> Decimal:
        return sum((ticket.price for ticket in self.tickets), Decimal("0"))


class Ticket(NaturalKeyMixin, Base):
    __tablename__ = "tickets"
    __natural_key__ = ("booking", "section", "row_number", "seat_number")

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    booking_id: Mapped[int] = mapped_column(ForeignKey("bookings.id", ondelete='CASCADE'), nullable=False, index=True)
    section_id: Mapped[int] = mapped_column(ForeignKey("sections.id", ondelete='RESTRICT'), nullable=False)
    ticket_category_id: Mapped[int] = mapped_column(
        ForeignKey("ticket_categories.id", ondelete='RESTRICT'),
        nullable=False
    )
    row_number: Mapped[int] = mapped_column(Integer, nullable=False, info=constrained(NotNull(), Min(1)))
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False, info=constrained(NotNull(), Min(1)))
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, info=constrained(NotNull(), Min(0)))

    booking: Mapped['Booking'] = relationship(back_populates="tickets", lazy='selectin', info=constrained(NotNull()))
    section: Mapped['Section'] = relationship(lazy='selectin', info=constrained(NotNull()))
    ticket_category: Mapped['TicketCategory'] = relationship(lazy='selectin', info=constrained(NotNull()))

    __table_args__ = (
        UniqueConstraint("booking_id", "section_id", "row_number", "seat_number", name="uq_ticket_seat"),
        CheckConstraint("row_number >= 1", name="chk_ticket_row"),
        CheckConstraint("seat_number >= 1", name="chk_ticket_seat"),
        CheckConstraint("price >= 0", name="chk_ticket_price_nonneg"),
    )


class SectionAllocation(NaturalKeyMixin, Base):
    """Seat occupancy of one section for one performance.

    ``allocated[row][seat]`` is 1 for a taken seat and 0 for a free one (both zero-based).
    The matrix is always replaced, never mutated in place, so the JSON column is flagged dirty.
    """
    __tablename__ = "section_allocations"
    __natural_key__ = ("performance", "section")

    id: Mapped[int] = mapped_column(Identity(always=True), primary_key=True)
    performance_id: Mapped[int] = mapped_column(
        ForeignKey("performances.id", ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    section_id: Mapped[int] = mapped_column(ForeignKey("sections.id", ondelete='CASCADE'), nullable=False)
    allocated: Mapped[list] = mapped_column(JSON, nullable=False)
    occupied_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, info=constrained(Min(0)))
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    performance: Mapped['Performance'] = relationship(lazy='selectin', info=constrained(NotNull()))
    section: Mapped['Section'] = relationship(lazy='selectin', info=constrained(NotNull()))

    __table_args__ = (
        UniqueConstraint("performance_id", "section_id", name="uq_section_allocation"),
        CheckConstraint("occupied_count >= 0", name="chk_section_allocation_occupied"),
    )
    __mapper_args__ = {"version_id_col": version}
