from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Type, TypeVar

from core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    """Accept an enum member, its value or its name."""
    if isinstance(value, enum_cls):
        return value
    raw = str(value or "").strip()
    for member in enum_cls:
        if raw == member.value or raw.upper() == member.name:
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(
        f"Invalid {field_name} '{value}'. Allowed: {allowed}.",
        code="FIELD_VALUE_INVALID",
    )


def coerce_date(value: Any, field_name: str) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValidationError(
            f"Invalid {field_name} '{value}'. Expected YYYY-MM-DD.",
            code="FIELD_VALUE_INVALID",
        ) from exc


def coerce_int(value: Any, field_name: str) -> int | None:
    """Whole numbers only; bools and fractional values are rejected."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name} '{value}'.", code="FIELD_VALUE_INVALID")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(
            f"Invalid {field_name} '{value}'. Expected a whole number.",
            code="FIELD_VALUE_INVALID",
        )
    try:
        return int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"Invalid {field_name} '{value}'. Expected a whole number.",
            code="FIELD_VALUE_INVALID",
        ) from exc


__all__ = ["coerce_enum", "coerce_date", "coerce_int"]
