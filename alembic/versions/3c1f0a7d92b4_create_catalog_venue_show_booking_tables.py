"""create catalog, venue, show and booking tables

Revision ID: 3c1f0a7d92b4
Revises:
Create Date: 2026-10-12 10:21:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f0a7d92b4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column('id', sa.Integer(), sa.Identity(always=True), primary_key=True)


def upgrade() -> None:
    media_type = sa.Enum('IMAGE', 'VIDEO_YOUTUBE', name='media_type')

    op.create_table(
        'media_items',
        _id(),
        sa.Column('media_type', media_type, nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.UniqueConstraint('url', name='uq_media_items_url'),
    )
    op.create_table(
        'event_categories',
        _id(),
        sa.Column('description', sa.Text(), nullable=False),
        sa.UniqueConstraint('description', name='uq_event_categories_description'),
    )
    op.create_table(
        'ticket_categories',
        _id(),
        sa.Column('description', sa.Text(), nullable=False),
        sa.UniqueConstraint('description', name='uq_ticket_categories_description'),
    )
    op.create_table(
        'events',
        _id(),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category_id', sa.Integer(),
                  sa.ForeignKey('event_categories.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('media_item_id', sa.Integer(),
                  sa.ForeignKey('media_items.id', ondelete='SET NULL'), nullable=True),
        sa.UniqueConstraint('name', name='uq_events_name'),
    )
    op.create_index('ix_events_category_id', 'events', ['category_id'])

    op.create_table(
        'venues',
        _id(),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('street', sa.Text(), nullable=False),
        sa.Column('city', sa.Text(), nullable=False),
        sa.Column('country', sa.Text(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('media_item_id', sa.Integer(),
                  sa.ForeignKey('media_items.id', ondelete='SET NULL'), nullable=True),
        sa.UniqueConstraint('name', name='uq_venues_name'),
        sa.CheckConstraint('capacity >= 0', name='chk_venue_capacity'),
    )
    op.create_table(
        'sections',
        _id(),
        sa.Column('venue_id', sa.Integer(), sa.ForeignKey('venues.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('number_of_rows', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('row_capacity', sa.Integer(), nullable=False, server_default='0'),
        sa.UniqueConstraint('venue_id', 'name', name='uq_section_venue_name'),
        sa.CheckConstraint('number_of_rows >= 0', name='chk_section_rows'),
        sa.CheckConstraint('row_capacity >= 0', name='chk_section_row_capacity'),
    )
    op.create_index('ix_sections_venue_id', 'sections', ['venue_id'])

    op.create_table(
        'shows',
        _id(),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('venue_id', sa.Integer(), sa.ForeignKey('venues.id', ondelete='RESTRICT'), nullable=False),
        sa.UniqueConstraint('event_id', 'venue_id', name='uq_show_event_venue'),
    )
    op.create_index('ix_shows_event_id', 'shows', ['event_id'])
    op.create_index('ix_shows_venue_id', 'shows', ['venue_id'])

    op.create_table(
        'performances',
        _id(),
        sa.Column('show_id', sa.Integer(), sa.ForeignKey('shows.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.UniqueConstraint('date', 'show_id', name='uq_performance_date_show'),
    )
    op.create_index('ix_performances_show_id', 'performances', ['show_id'])

    op.create_table(
        'ticket_prices',
        _id(),
        sa.Column('show_id', sa.Integer(), sa.ForeignKey('shows.id', ondelete='CASCADE'), nullable=False),
        sa.Column('section_id', sa.Integer(), sa.ForeignKey('sections.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('ticket_category_id', sa.Integer(),
                  sa.ForeignKey('ticket_categories.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.UniqueConstraint('section_id', 'show_id', 'ticket_category_id',
                            name='uq_ticket_price_section_show_category'),
        sa.CheckConstraint('price >= 0', name='chk_ticket_price'),
    )
    op.create_index('ix_ticket_prices_show_id', 'ticket_prices', ['show_id'])
    op.create_index('ix_ticket_prices_section_id', 'ticket_prices', ['section_id'])
    op.create_index('ix_ticket_prices_ticket_category_id', 'ticket_prices', ['ticket_category_id'])

    op.create_table(
        'bookings',
        _id(),
        sa.Column('performance_id', sa.Integer(),
                  sa.ForeignKey('performances.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('cancellation_code', sa.Text(), nullable=False),
        sa.Column('created_on', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('contact_email', sa.Text(), nullable=False),
        sa.UniqueConstraint('cancellation_code', name='uq_bookings_cancellation_code'),
    )
    op.create_index('ix_bookings_performance_id', 'bookings', ['performance_id'])

    op.create_table(
        'tickets',
        _id(),
        sa.Column('booking_id', sa.Integer(), sa.ForeignKey('bookings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('section_id', sa.Integer(), sa.ForeignKey('sections.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('ticket_category_id', sa.Integer(),
                  sa.ForeignKey('ticket_categories.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('row_number', sa.Integer(), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.UniqueConstraint('booking_id', 'section_id', 'row_number', 'seat_number', name='uq_ticket_seat'),
        sa.CheckConstraint('row_number >= 1', name='chk_ticket_row'),
        sa.CheckConstraint('seat_number >= 1', name='chk_ticket_seat'),
        sa.CheckConstraint('price >= 0', name='chk_ticket_price_nonneg'),
    )
    op.create_index('ix_tickets_booking_id', 'tickets', ['booking_id'])

    op.create_table(
        'section_allocations',
        _id(),
        sa.Column('performance_id', sa.Integer(),
                  sa.ForeignKey('performances.id', ondelete='CASCADE'), nullable=False),
        sa.Column('section_id', sa.Integer(), sa.ForeignKey('sections.id', ondelete='CASCADE'), nullable=False),
        sa.Column('allocated', sa.JSON(), nullable=False),
        sa.Column('occupied_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.UniqueConstraint('performance_id', 'section_id', name='uq_section_allocation'),
        sa.CheckConstraint('occupied_count >= 0', name='chk_section_allocation_occupied'),
    )
    op.create_index('ix_section_allocations_performance_id', 'section_allocations', ['performance_id'])


def downgrade() -> None:
    for table in (
        'section_allocations', 'tickets', 'bookings', 'ticket_prices', 'performances', 'shows',
        'sections', 'venues', 'events', 'ticket_categories', 'event_categories', 'media_items',
    ):
        op.drop_table(table)
    sa.Enum(name='media_type').drop(op.get_bind(), checkfirst=True)
