import os
import json
import asyncio
import signal
import socket
import logging
import redis.asyncio as redis
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy import text, bindparam
from sqlalchemy.dialects.postgresql import JSONB, INET
from sqlalchemy.exc import SQLAlchemyError, DBAPIError
from app.core.config import DATABASE_URL, AUDIT_STREAM, AUDIT_GROUP, AUDIT_BATCH, AUDIT_BLOCK_MS, LOG_FORMAT
from app.core.redis import create_redis, close_redis


logger = logging.getLogger("audit.worker")

RECLAIM_EVERY_S = 30
RECLAIM_MIN_IDLE_MS = 60000

INSERT_AUDIT = text("""
    INSERT INTO audit.audit_logs
    (request_id, scope, action, actor_ip, route, object_type, object_id,
     event_id, show_id, performance_id, booking_id, status, reason, meta)
    VALUES
    (:request_id, :scope, :action, :actor_ip, :route, :object_type, :object_id,
     :event_id, :show_id, :performance_id, :booking_id, :status, :reason, :meta)
""").bindparams(
    bindparam("actor_ip", type_=INET),
    bindparam("meta", type_=JSONB),
)


def params_from_payload(payload: dict) -> dict:
    if not payload.get("scope") or not payload.get("action"):
        raise ValueError("missing required fields: scope/action")
    status = (payload.get("status") or "SUCCESS").upper()
    return {
        "request_id": payload.get("request_id"),
        "scope": payload["scope"],
        "action": payload["action"],
        "actor_ip": payload.get("actor_ip"),
        "route": payload.get("route"),
        "object_type": payload.get("object_type"),
        "object_id": payload.get("object_id"),
        "event_id": payload.get("event_id"),
        "show_id": payload.get("show_id"),
        "performance_id": payload.get("performance_id"),
        "booking_id": payload.get("booking_id"),
        "status": "SUCCESS" if status == "SUCCESS" else "FAIL",
        "reason": payload.get("reason"),
        "meta": dict(payload.get("meta") or {}),
    }


def decode_entry(fields: dict) -> dict:
    raw_json = fields.get("json")
    payload = json.loads(raw_json) if raw_json else {}
    if not isinstance(payload, dict):
        raise ValueError("payload is not a JSON object")
    return params_from_payload(payload)


async def _ensure_group(r: redis.Redis) -> None:
    try:
        await r.xgroup_create(
            name=AUDIT_STREAM,
            groupname=AUDIT_GROUP,
            id="$",
            mkstream=True,
        )
        logger.info("XGROUP created stream=%s group=%s", AUDIT_STREAM, AUDIT_GROUP)
    except redis.ResponseError as e:
        if "BUSYGROUP" in str(e):
            logger.info("XGROUP already exists stream=%s group=%s", AUDIT_STREAM, AUDIT_GROUP)
        else:
            raise


async def store_entries(r: redis.Redis, db: AsyncSession, entries: list) -> int:
    """Insert and ack each entry. DB failures stay pending for a later claim; malformed entries are acked."""
    stored = 0
    for msg_id, fields in entries:
        try:
            params = decode_entry(fields)
        except ValueError as e:
            logger.warning("Invalid payload; dropping id=%s err=%s", msg_id, e)
            await r.xack(AUDIT_STREAM, AUDIT_GROUP, msg_id)
            continue
        try:
            async with db.begin_nested():
                await db.execute(INSERT_AUDIT, params)
        except (DBAPIError, SQLAlchemyError):
            logger.exception("DB insert failed; keeping id=%s in PEL", msg_id)
            continue
        await r.xack(AUDIT_STREAM, AUDIT_GROUP, msg_id)
        stored += 1
    return stored


async def run() -> None:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    r = await create_redis()
    if r is None:
        raise RuntimeError("REDIS_URL is required by the audit worker")
    await _ensure_group(r)

    engine = create_async_engine(DATABASE_URL, pool_pre_ping=True)
    session = async_sessionmaker(bind=engine, expire_on_commit=False)

    stop = asyncio.Event()

    def _graceful(*_):
        stop.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _graceful)
        except NotImplementedError:
            pass

    consumer = f"{socket.gethostname()}-{os.getpid()}"
    logger.info(
        "Audit worker started | stream=%s group=%s consumer=%s batch=%d block_ms=%d",
        AUDIT_STREAM, AUDIT_GROUP, consumer, AUDIT_BATCH, AUDIT_BLOCK_MS,
    )

    last_reclaim = loop.time()

    try:
        while not stop.is_set():
            resp = await r.xreadgroup(
                groupname=AUDIT_GROUP,
                consumername=consumer,
                streams={AUDIT_STREAM: ">"},
                count=AUDIT_BATCH,
                block=AUDIT_BLOCK_MS,
            )
            if resp:
                async with session() as db:
                    async with db.begin():
                        await store_entries(r, db, resp[0][1])

            now = loop.time()
            if now - last_reclaim > RECLAIM_EVERY_S:
                last_reclaim = now
                _, msgs, _ = await r.xautoclaim(
                    name=AUDIT_STREAM,
                    groupname=AUDIT_GROUP,
                    consumername=consumer,
                    min_idle_time=RECLAIM_MIN_IDLE_MS,
                    start_id="0",
                    count=100,
                )
                if msgs:
                    logger.info("XAUTOCLAIM: retrying %d pending messages", len(msgs))
                    async with session() as db:
                        async with db.begin():
                            await store_entries(r, db, msgs)
    finally:
        logger.info("Shutting down audit worker...")
        await close_redis(r)
        await engine.dispose()
        logger.info("Audit worker stopped.")


if __name__ == "__main__":
    asyncio.run(run())
