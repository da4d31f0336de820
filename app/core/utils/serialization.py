from datetime import date, datetime
from decimal import Decimal
from typing import Any


def normalize(value: Any) -> Any:
    """Coerce a context value into something JSON can carry."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return [normalize(v) for v in value]
    if isinstance(value, dict):
        return normalize_ctx(value)
    return str(value)


def normalize_ctx(ctx: dict[str, Any]) -> dict[str, Any]:
    return {str(k): normalize(v) for k, v in ctx.items()}
