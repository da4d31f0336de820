from datetime import datetime, timezone
from decimal import Decimal
from fastapi import FastAPI
from app.domain import Event, EventCategory, Venue, Section, Show, Performance, TicketCategory, TicketPrice


def db_with_scalars_first(mocker, value):
    res = mocker.Mock()
    res.scalars.return_value.first.return_value = value
    db = mocker.Mock()
    db.execute = mocker.AsyncMock(return_value=res)
    return db, res


def db_with_flush(mocker, side_effect=None):
    db = mocker.Mock()
    db.flush = mocker.AsyncMock(side_effect=side_effect)
    return db


def rest_deployment(**kwargs) -> FastAPI:
    """The REST application with every router and the error handler, without the Redis lifespan."""
    from app.main import build_app
    return build_app(**kwargs)


def make_venue(name: str = "Roy Thomson Hall", sections: int = 2) -> Venue:
    venue = Venue(
        name=name,
        description="Concert hall",
        street="60 Simcoe Street",
        city="Toronto",
        country="Canada",
        capacity=2630
    )
    for index in range(sections):
        venue.sections.append(Section(
            name=f"A{index + 1}",
            description=f"Balcony {index + 1}",
            number_of_rows=10,
            row_capacity=20
        ))
    return venue


def make_event(name: str = "Rock concert of the decade") -> Event:
    return Event(
        name=name,
        description="Get ready to rock your night away with this megaconcert",
        category=EventCategory(description="Concert")
    )


def make_show(event: Event | None = None, venue: Venue | None = None) -> Show:
    event = event or make_event()
    venue = venue or make_venue()
    show = Show(event=event, venue=venue)
    show.performances.append(Performance(date=datetime(2027, 3, 1, 19, 30, tzinfo=timezone.utc)))
    show.performances.append(Performance(date=datetime(2027, 3, 2, 19, 30, tzinfo=timezone.utc)))
    show.ticket_prices.append(TicketPrice(
        section=venue.sections[0],
        ticket_category=TicketCategory(description="Adult"),
        price=Decimal("219.50")
    ))
    return show
