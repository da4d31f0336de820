import pytest
from pydantic import ValidationError
from app.domain.venues.schemas import VenueReadDTO, SectionCreateDTO, VenueCreateDTO
from app.domain.shows.schemas import ShowReadDTO
from app.domain.booking.schemas import BookingCreateDTO
from tests.helper import make_venue, make_show


def _with_ids(venue):
    venue.id = 1
    for index, section in enumerate(venue.sections, start=1):
        section.id = index
    return venue


def _show_with_ids():
    show = make_show(venue=_with_ids(make_venue()))
    show.id = 1
    show.event.id = 1
    show.event.category.id = 1
    for index, performance in enumerate(show.performances, start=1):
        performance.id = index
    price = show.ticket_prices[0]
    price.id = 1
    price.ticket_category.id = 1
    return show


def test_venue_dump_omits_venue_inside_sections():
    dumped = VenueReadDTO.model_validate(_with_ids(make_venue(sections=3))).model_dump()

    assert len(dumped["sections"]) == 3
    assert all("venue" not in section for section in dumped["sections"])
    assert dumped["sections"][0]["capacity"] == 200


def test_venue_round_trip_keeps_all_sections():
    venue = _with_ids(make_venue(sections=3))

    dumped = VenueReadDTO.model_validate(venue).model_dump(mode="json")
    restored = VenueReadDTO.model_validate(dumped)

    assert restored.name == venue.name
    assert [s.name for s in restored.sections] == [s.name for s in venue.sections]
    assert restored.model_dump(mode="json") == dumped


def test_show_dump_omits_show_inside_performances_and_prices():
    dumped = ShowReadDTO.model_validate(_show_with_ids()).model_dump(mode="json")

    assert len(dumped["performances"]) == 2
    assert all(set(p) == {"id", "date"} for p in dumped["performances"])
    assert all("show" not in price for price in dumped["ticket_prices"])
    assert dumped["ticket_prices"][0]["description"] == "A1 (Adult)"
    assert "venue" not in dumped["ticket_prices"][0]["section"]


@pytest.mark.parametrize("payload", [
    {"name": "", "description": "Balcony", "number_of_rows": 1, "row_capacity": 1},
    {"name": "A1", "description": "   ", "number_of_rows": 1, "row_capacity": 1},
    {"name": "A1", "description": "Balcony", "number_of_rows": -1, "row_capacity": 1},
])
def test_section_create_rejects_invalid_payload(payload):
    with pytest.raises(ValidationError):
        SectionCreateDTO(**payload)


def test_venue_create_strips_text_and_nests_sections():
    dto = VenueCreateDTO(
        name="  Roy Thomson Hall ",
        street="60 Simcoe Street",
        city="Toronto",
        country="Canada",
        sections=[{"name": " A1 ", "description": "Balcony", "number_of_rows": 2, "row_capacity": 3}]
    )

    assert dto.name == "Roy Thomson Hall"
    assert dto.sections[0].name == "A1"


@pytest.mark.parametrize("payload", [
    {"performance_id": 1, "email": "bob@example.com", "ticket_requests": []},
    {"performance_id": 1, "email": "not-an-email", "ticket_requests": [{"ticket_price_id": 1, "quantity": 1}]},
    {"performance_id": 1, "email": "bob@example.com", "ticket_requests": [{"ticket_price_id": 1, "quantity": 0}]},
])
def test_booking_create_rejects_invalid_payload(payload):
    with pytest.raises(ValidationError):
        BookingCreateDTO(**payload)
