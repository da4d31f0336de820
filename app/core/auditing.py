"""Audit trail of service mutations.

Each ``AuditSpan`` emits one record to the audit Redis stream when it closes,
tagged SUCCESS or FAIL. Without a Redis client bound to the request nothing
is emitted. ``app/workers/audit_worker.py`` moves the stream into Postgres.
"""
import json
import logging
import time
from datetime import timezone, datetime
from typing import Any
from redis.exceptions import RedisError
from sqlalchemy.exc import IntegrityError
from app.core.config import AUDIT_STREAM
from app.core.ctx import current_request, get_redis
from app.domain.exceptions import AppError

logger = logging.getLogger("app.audit")

SUCCESS = "SUCCESS"
FAIL = "FAIL"

REFERENCE_FIELDS = ("object_type", "object_id", "event_id", "show_id", "performance_id", "booking_id")


def build_record(scope: str, action: str, status: str, *, reason: str | None = None,
                 meta: dict | None = None, **references: Any) -> dict:
    request = current_request()
    record = {
        "request_id": request.request_id,
        "route": request.route,
        "actor_ip": request.client_ip,
        "scope": scope,
        "action": action,
        "status": status,
        "reason": reason,
        "meta": dict(meta or {}),
    }
    record.update({name: references.get(name) for name in REFERENCE_FIELDS})
    return record


async def audit_emit(record: dict) -> str | None:
    r = get_redis()
    if r is None:
        return None
    try:
        return await r.xadd(AUDIT_STREAM, {"json": json.dumps(record, default=str)})
    except RedisError:
        logger.warning("Audit record dropped scope=%s action=%s", record["scope"], record["action"], exc_info=True)
        return None


def failure_reason(exception: BaseException | None) -> str | None:
    if exception is None:
        return None
    if isinstance(exception, IntegrityError):
        return "Integrity error"
    if isinstance(exception, AppError):
        return f"{type(exception).__name__}: {exception}"
    return type(exception).__name__


class AuditSpan:
    """Async context manager around one audited operation; references may be filled in while it runs."""

    def __init__(self, *, scope: str, action: str, meta: dict | None = None, **references: Any):
        unknown = set(references) - set(REFERENCE_FIELDS)
        if unknown:
            raise TypeError(f"Unknown audit references: {sorted(unknown)}")
        self.scope = scope
        self.action = action
        self.meta = dict(meta or {})
        for name in REFERENCE_FIELDS:
            setattr(self, name, references.get(name))
        self._started = 0.0

    async def __aenter__(self):
        self._started = time.perf_counter()
        self.meta.setdefault(
            "occurred_at",
            datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        )
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.meta["duration_ms"] = int((time.perf_counter() - self._started) * 1000)
        await audit_emit(build_record(
            self.scope,
            self.action,
            FAIL if exc else SUCCESS,
            reason=failure_reason(exc),
            meta=self.meta,
            **{name: getattr(self, name) for name in REFERENCE_FIELDS}
        ))
        return False
