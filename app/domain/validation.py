"""Declarative field constraints for mapped entities.

Constraints are attached to mapped attributes through ``info``::

    name: Mapped[str] = mapped_column(Text, nullable=False, info=constrained(NotEmpty()))
    venue: Mapped['Venue'] = relationship(..., info=constrained(NotNull()))

``validate`` evaluates every constraint of an entity and returns all
violations. A ``before_flush`` hook runs it over new and dirty instances and
raises ``ValidationFailed`` before any statement is emitted.
"""
import logging
from typing import Any, Iterable
from email_validator import validate_email, EmailNotValidError
from sqlalchemy import event, inspect
from sqlalchemy.orm import Session, RelationshipProperty, ColumnProperty
from app.domain.exceptions import Violation, ValidationFailed

logger = logging.getLogger("app.validation")


class Constraint:
    message = "is invalid"

    def check(self, value: Any) -> str | None:
        raise NotImplementedError


class NotNull(Constraint):
    message = "may not be null"

    def check(self, value: Any) -> str | None:
        return self.message if value is None else None


class NotEmpty(Constraint):
    message = "may not be empty"

    def check(self, value: Any) -> str | None:
        if value is None or (isinstance(value, str) and not value):
            return self.message
        return None


class Size(Constraint):
    def __init__(self, min_len: int = 0, max_len: int | None = None):
        self.min_len = min_len
        self.max_len = max_len

    def check(self, value: Any) -> str | None:
        if value is None:
            return None
        if len(value) < self.min_len or (self.max_len is not None and len(value) > self.max_len):
            upper = self.max_len if self.max_len is not None else "inf"
            return f"size must be between {self.min_len} and {upper}"
        return None


class Min(Constraint):
    def __init__(self, minimum: int | float):
        self.minimum = minimum

    def check(self, value: Any) -> str | None:
        if value is not None and value < self.minimum:
            return f"must be greater than or equal to {self.minimum}"
        return None


class Email(Constraint):
    message = "not a well-formed email address"

    def check(self, value: Any) -> str | None:
        if value is None:
            return None
        # same rules as the EmailStr fields of the DTOs
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return self.message
        return None


def constrained(*constraints: Constraint) -> dict:
    return {"constraints": constraints}


def _constraints_for(prop) -> tuple[Constraint, ...]:
    if isinstance(prop, RelationshipProperty):
        return prop.info.get("constraints", ())
    if isinstance(prop, ColumnProperty):
        return prop.columns[0].info.get("constraints", ())
    return ()


def _relationship_value(entity: Any, prop: RelationshipProperty) -> Any:
    value = getattr(entity, prop.key)
    if value is not None:
        return value
    fk_values = [getattr(entity, col.key, None) for col in prop.local_columns]
    if fk_values and all(v is not None for v in fk_values):
        return fk_values[0]
    return None


def validate(entity: Any) -> list[Violation]:
    mapper = inspect(type(entity))
    entity_name = type(entity).__name__
    violations: list[Violation] = []
    for prop in mapper.attrs:
        constraints = _constraints_for(prop)
        if not constraints:
            continue
        if isinstance(prop, RelationshipProperty):
            value = _relationship_value(entity, prop)
        else:
            value = getattr(entity, prop.key)
        for constraint in constraints:
            message = constraint.check(value)
            if message:
                violations.append(Violation(entity_name, prop.key, message))
    return violations


def ensure_valid(entities: Iterable[Any]) -> None:
    violations: list[Violation] = []
    for entity in entities:
        violations.extend(validate(entity))
    if violations:
        logger.debug("Rejecting flush with %d violation(s): %s", len(violations), violations)
        raise ValidationFailed(violations)


@event.listens_for(Session, "before_flush")
def _validate_before_flush(session: Session, flush_context, instances) -> None:
    ensure_valid(list(session.new) + list(session.dirty))
