from .catalog.models import MediaType, MediaItem, EventCategory, TicketCategory, Event
from .venues.models import Venue, Section
from .shows.models import Show, Performance, TicketPrice
from .booking.models import Booking, Ticket, SectionAllocation

__all__ = (
    "MediaType", "MediaItem", "EventCategory", "TicketCategory", "Event", "Venue", "Section", "Show",
    "Performance", "TicketPrice", "Booking", "Ticket", "SectionAllocation"
)
