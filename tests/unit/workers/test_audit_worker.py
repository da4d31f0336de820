import json
import pytest
from sqlalchemy.exc import SQLAlchemyError
from app.workers import audit_worker


def _entry(msg_id, payload):
    return msg_id, {"json": json.dumps(payload)}


def test_params_from_payload_fills_missing_references():
    params = audit_worker.params_from_payload({"scope": "BOOKINGS", "action": "CANCEL", "status": "fail"})

    assert params["status"] == "FAIL"
    assert params["booking_id"] is None
    assert params["meta"] == {}


@pytest.mark.parametrize("payload", [{}, {"scope": "BOOKINGS"}, {"action": "CREATE"}])
def test_params_from_payload_requires_scope_and_action(payload):
    with pytest.raises(ValueError):
        audit_worker.params_from_payload(payload)


def test_decode_entry_rejects_non_object():
    with pytest.raises(ValueError):
        audit_worker.decode_entry({"json": "[1, 2]"})


class _Nested:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


@pytest.mark.asyncio
async def test_store_entries_acks_stored_and_malformed_but_keeps_failed(mocker):
    r = mocker.Mock()
    r.xack = mocker.AsyncMock()
    db = mocker.Mock()
    db.begin_nested = mocker.Mock(side_effect=lambda: _Nested())
    db.execute = mocker.AsyncMock(side_effect=[None, SQLAlchemyError("down")])
    entries = [
        _entry("1-0", {"scope": "VENUES", "action": "CREATE"}),
        _entry("2-0", {"scope": "VENUES"}),
        _entry("3-0", {"scope": "SHOWS", "action": "DELETE"}),
    ]

    stored = await audit_worker.store_entries(r, db, entries)

    assert stored == 1
    acked = [c.args[2] for c in r.xack.await_args_list]
    assert acked == ["1-0", "2-0"]
