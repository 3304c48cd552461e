from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_bit(value: Any, field_name: str) -> int:
    """Normalize a permission flag (0/1, bool or '0'/'1') to an int bit."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        value = value.strip()
    if value in (0, 1, "0", "1"):
        return int(value)
    raise ValidationError(f"{field_name} must be 0 or 1, got {value!r}")
