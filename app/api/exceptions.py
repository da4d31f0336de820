import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from app.domain.exceptions import AppError, NotFound, Conflict, Unprocessable, InvalidInput, ValidationFailed
from app.core.ctx import get_request_id

logger = logging.getLogger("app.api")

MEDIA_TYPE = "application/problem+json"

# most specific class first; lookup walks the exception's MRO
PROBLEMS: dict[type[Exception], tuple[int, str]] = {
    NotFound: (status.HTTP_404_NOT_FOUND, "Not Found"),
    Conflict: (status.HTTP_409_CONFLICT, "Conflict"),
    InvalidInput: (status.HTTP_400_BAD_REQUEST, "Bad Request"),
    Unprocessable: (status.HTTP_422_UNPROCESSABLE_ENTITY, "Unprocessable Entity"),
    AppError: (status.HTTP_400_BAD_REQUEST, "Application Error"),
}


def problem_for(exc: Exception) -> tuple[int, str]:
    for cls in type(exc).mro():
        if cls in PROBLEMS:
            return PROBLEMS[cls]
    return status.HTTP_400_BAD_REQUEST, "Application Error"


def problem_response(request: Request, http_status: int, title: str, detail: str | None, **extra) -> JSONResponse:
    body = {
        "status": http_status,
        "title": title,
        "detail": detail,
        "instance": str(request.url),
    }
    trace_id = get_request_id()
    if trace_id:
        body["trace_id"] = trace_id
    body.update({k: v for k, v in extra.items() if v})
    return JSONResponse(status_code=http_status, content=body, media_type=MEDIA_TYPE)


def register_error_handler(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error_handler(request: Request, exc: AppError):
        http_status, title = problem_for(exc)
        violations = [v.as_dict() for v in exc.violations] if isinstance(exc, ValidationFailed) else None
        logger.info("%s %s -> %d %s", request.method, request.url.path, http_status, type(exc).__name__)
        return problem_response(
            request,
            http_status,
            title,
            str(exc) or None,
            context=exc.ctx,
            violations=violations
        )

    @app.exception_handler(IntegrityError)
    async def _integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning("%s %s -> unhandled integrity error: %s", request.method, request.url.path, exc.orig)
        return problem_response(
            request,
            status.HTTP_409_CONFLICT,
            "Conflict",
            "Integrity constraint violated"
        )
