import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.api.exceptions import register_error_handler
from app.api.v1.routes import venues, sections, events, shows, performances, ticket_categories, bookings
from app.core.config import LOG_LEVEL, LOG_FORMAT
from app.core.middleware.http_ctx import HttpContextMiddleware
from app.core.redis import create_redis, close_redis

logger = logging.getLogger("app")

ROUTERS = (
    venues.router,
    sections.router,
    events.router,
    shows.router,
    performances.router,
    ticket_categories.router,
    bookings.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    r = await create_redis()
    app.state.redis = r
    if r is None:
        logger.warning("REDIS_URL not set; audit events are disabled")
    try:
        yield
    finally:
        await close_redis(r)


def build_app(**kwargs) -> FastAPI:
    application = FastAPI(title="TicketMonster", **kwargs)
    application.add_middleware(HttpContextMiddleware, request_id_header="X-Request-ID")
    register_error_handler(application)
    for router in ROUTERS:
        application.include_router(router)
    return application


logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
app = build_app(lifespan=lifespan)
