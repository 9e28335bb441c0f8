"""Numeric coercion and identifier validation helpers."""

import re
from typing import Any

from vpc_file.core.reason_code import ReasonCode
from vpc_file.exceptions import ValidationError

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_VOLUME_ID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def _parse_base10(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not _INTEGER_PATTERN.match(text):
        return None
    return int(text, 10)


def to_int(value: Any) -> int:
    """
    Best-effort integer conversion.

    Returns 0 for anything that is not a base-10 integer. The result is
    advisory only: use ``parse_int`` for capacity, IOPS and other fields
    where 0 would be a wrong answer rather than a default.
    """
    parsed = _parse_base10(value)
    return 0 if parsed is None else parsed


def parse_int(
    value: Any, field: str, *, reason_code: ReasonCode = ReasonCode.REQUIRED_FIELD_MISSING
) -> int:
    """
    Strict integer conversion.

    Args:
        value: An int or a base-10 numeric string.
        field: Field name reported in the error.
        reason_code: Reason code of the raised error.

    Raises:
        ValidationError: If ``value`` is missing or not an integer.
    """
    if value is None:
        msg = f"{field} is required"
        raise ValidationError(msg, field=field, reason_code=reason_code)

    parsed = _parse_base10(value)
    if parsed is None:
        msg = f"{field} must be an integer, got {value!r}"
        raise ValidationError(msg, field=field, reason_code=reason_code)
    return parsed


def is_valid_volume_id(volume_id: str | None) -> bool:
    """Check that ``volume_id`` has the canonical 8-4-4-4-12 UUID shape."""
    return bool(volume_id) and bool(_VOLUME_ID_PATTERN.match(volume_id))
