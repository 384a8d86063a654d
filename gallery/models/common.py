"""Validation helpers shared by the gallery domain models."""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from gallery.errors import ValidationFailed

_E = TypeVar("_E", bound=Enum)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def require_id(value: Any, label: str) -> str:
    """Ensure a record identity is a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailed(f"{label} cannot be empty")
    return value


def require_text(value: Any, label: str) -> str:
    """Return ``value`` stripped, rejecting missing or blank text."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailed(f"{label} is required")
    return value.strip()


def optional_text(value: Any, label: str) -> Optional[str]:
    """Normalize optional text; blank strings collapse to ``None``."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationFailed(f"{label} must be a string")
    stripped = value.strip()
    return stripped or None


def plain_text(value: Any, label: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationFailed(f"{label} must be a string")
    return value


def require_number(value: Any, label: str) -> float:
    """Reject booleans, non-numbers and non-finite floats."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationFailed(f"{label} must be a number")
    if not math.isfinite(float(value)):
        raise ValidationFailed(f"{label} must be finite")
    return value


def coerce_enum(enum_cls: Type[_E], value: Any, label: str) -> _E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationFailed(
            f"{label} '{value}' is invalid. Expected one of: {allowed}"
        ) from exc


def ensure_utc(value: Any, label: str = "Timestamp") -> datetime:
    """Accept aware datetimes or ISO strings and normalize to UTC."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValidationFailed(
                f"{label} '{value}' is not an ISO-8601 timestamp"
            ) from exc
    if not isinstance(value, datetime):
        raise ValidationFailed(f"{label} must be a datetime")
    if value.tzinfo is None:
        raise ValidationFailed(
            f"{label} must include timezone information (UTC)"
        )
    if value.tzinfo != timezone.utc:
        return value.astimezone(timezone.utc)
    return value


def coerce_date(value: Any, label: str) -> date:
    """Accept ``date``/``datetime`` objects or ISO-8601 strings.

    Aware datetimes are reduced to their UTC calendar date.
    """
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValidationFailed(
                f"{label} '{text}' is not a valid date"
            ) from exc
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationFailed(f"{label} is required")
