from typing import Iterable, NamedTuple
from app.core.utils.serialization import normalize_ctx


class Violation(NamedTuple):
    entity: str
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"entity": self.entity, "field": self.field, "message": self.message}


class AppError(Exception):
    def __init__(self, message: str = "", *, ctx: dict | None = None) -> None:
        super().__init__(message or self.__class__.__name__)
        self.ctx = normalize_ctx(ctx or {})


class NotFound(AppError):
    pass
class Conflict(AppError):
    pass
class InvalidInput(AppError):
    pass
class Unprocessable(AppError):
    pass


class ValidationFailed(Unprocessable):
    def __init__(self, violations: Iterable[Violation], *, ctx: dict | None = None) -> None:
        self.violations = list(violations)
        fields = ", ".join(f"{v.entity}.{v.field}" for v in self.violations)
        super().__init__(f"Validation failed: {fields}", ctx=ctx)


class NaturalKeyFrozen(Conflict):
    pass
