import pytest
from sqlalchemy.exc import IntegrityError
from app.domain.catalog.schemas import EventCreateDTO, EventUpdateDTO
from app.domain.exceptions import NotFound, Conflict
from app.services import event_service
from tests.helper import db_with_flush

NAME = "Rock concert of the decade"
DESCRIPTION = "Get ready to rock your night away with this megaconcert"


@pytest.mark.asyncio
async def test_create_event_resolves_category_and_media_item(mocker, auditspan_stub):
    category, media_item = mocker.Mock(), mocker.Mock()
    get_category = mocker.patch(
        "app.services.event_service.crud.get_event_category_by_id",
        new=mocker.AsyncMock(return_value=category)
    )
    mocker.patch("app.services.event_service.crud.get_media_item_by_id", new=mocker.AsyncMock(return_value=media_item))
    event = mocker.Mock(id=8)
    create = mocker.patch("app.services.event_service.crud.create_event", new=mocker.AsyncMock(return_value=event))
    db = db_with_flush(mocker)
    dto = EventCreateDTO(name=NAME, description=DESCRIPTION, category_id=2, media_item_id=3)

    result = await event_service.create_event(db, dto)

    get_category.assert_awaited_once_with(db, 2)
    create.assert_awaited_once_with(
        db, {"name": NAME, "description": DESCRIPTION, "category": category, "media_item": media_item}
    )
    assert result is event
    assert auditspan_stub[0].event_id == 8


@pytest.mark.asyncio
async def test_create_event_with_unknown_category_raises_404(mocker):
    mocker.patch("app.services.event_service.crud.get_event_category_by_id", new=mocker.AsyncMock(return_value=None))
    create = mocker.patch("app.services.event_service.crud.create_event", new=mocker.AsyncMock())

    with pytest.raises(NotFound):
        await event_service.create_event(
            db_with_flush(mocker),
            EventCreateDTO(name=NAME, description=DESCRIPTION, category_id=2)
        )

    create.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_event_to_taken_name_raises_conflict(mocker):
    mocker.patch("app.services.event_service.crud.get_event_by_id", new=mocker.AsyncMock(return_value=mocker.Mock()))
    update = mocker.patch("app.services.event_service.crud.update_event", new=mocker.AsyncMock())
    db = db_with_flush(mocker, side_effect=IntegrityError("stmt", "params", "orig"))

    with pytest.raises(Conflict) as e:
        await event_service.update_event(db, EventUpdateDTO(name=NAME), 4)

    assert update.await_args.args[1] == {"name": NAME}
    assert e.value.ctx == {"event_id": 4, "fields": ["name"]}


@pytest.mark.asyncio
async def test_delete_event_with_shows_raises_conflict(mocker):
    mocker.patch("app.services.event_service.crud.get_event_by_id", new=mocker.AsyncMock(return_value=mocker.Mock()))
    mocker.patch("app.services.event_service.crud.delete_event", new=mocker.AsyncMock())
    db = db_with_flush(mocker, side_effect=IntegrityError("stmt", "params", "orig"))

    with pytest.raises(Conflict) as e:
        await event_service.delete_event(db, 4)

    assert str(e.value) == "Event has shows"
