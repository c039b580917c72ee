"""Value rules shared by storage and both PDF outputs.

- ``coerce_updates()`` validates a partial update against the closed field
  registry and normalises each value to its storage type.
- ``is_checked()`` and ``format_date()`` are the single definition of
  checkbox truthiness and composed-date synthesis.
- ``calculate_progress()`` derives the completion percentage.
- ``display_value()`` is how both PDF outputs print a stored value.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from basel_compliance.forms.fields import (
    FIELD_SPEC_BY_ID,
    METADATA_KEYS,
    TOTAL_FORM_FIELDS,
    FieldId,
    FieldKind,
    FieldSpec,
)

_TRUE_STRINGS = frozenset({"1", "true"})
_FALSE_STRINGS = frozenset({"", "0", "false"})


class FieldValueError(ValueError):
    """Raised when an update names an unknown field or carries a bad value."""

    def __init__(self, field_id: str, message: str) -> None:
        super().__init__(f"{field_id}: {message}")
        self.field_id = field_id


# ---------------------------------------------------------------------------
# Checkbox truthiness / composed dates
# ---------------------------------------------------------------------------

def is_checked(value: Any) -> bool:
    """Return True for ``1``, ``True`` and ``"true"``; False for anything else."""
    if value is True:
        return True
    if isinstance(value, int) and not isinstance(value, bool):
        return value == 1
    return value == "true"


def format_date(month: Any = None, day: Any = None, year: Any = None) -> str:
    """Compose ``month/day/year`` from separately stored parts.

    Missing parts are omitted, so ``format_date(None, "5", "2024")`` is
    ``"5/2024"`` and three missing parts give ``""``.
    """
    parts = [str(p).strip() for p in (month, day, year) if p is not None]
    return "/".join(p for p in parts if p)


@dataclass(frozen=True)
class ComposedDate:
    """A date stored as three separate month/day/year fields."""

    name: str
    label: str
    month: FieldId
    day: FieldId
    year: FieldId

    @property
    def part_ids(self) -> tuple[str, str, str]:
        return (self.month.value, self.day.value, self.year.value)

    def compose(self, record: Mapping[str, Any]) -> str:
        return format_date(
            record.get(self.month.value),
            record.get(self.day.value),
            record.get(self.year.value),
        )


COMPOSED_DATES: tuple[ComposedDate, ...] = (
    ComposedDate(
        "first_departure",
        "First Departure",
        FieldId.FIRST_DEPARTURE_MONTH,
        FieldId.FIRST_DEPARTURE_DAY,
        FieldId.FIRST_DEPARTURE_YEAR,
    ),
    ComposedDate(
        "last_departure",
        "Last Departure",
        FieldId.LAST_DEPARTURE_MONTH,
        FieldId.LAST_DEPARTURE_DAY,
        FieldId.LAST_DEPARTURE_YEAR,
    ),
    ComposedDate(
        "declaration_date",
        "Declaration Date",
        FieldId.DECLARATION_MONTH,
        FieldId.DECLARATION_DAY,
        FieldId.DECLARATION_YEAR,
    ),
)

COMPOSED_DATE_BY_NAME: dict[str, ComposedDate] = {d.name: d for d in COMPOSED_DATES}


def composed_dates(record: Mapping[str, Any]) -> dict[str, str]:
    """Return ``{composed date name: formatted string}`` for *record*."""
    return {d.name: d.compose(record) for d in COMPOSED_DATES}


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------

def _coerce_checkbox(spec: FieldSpec, value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        if value in (0, 1):
            return value
        raise FieldValueError(spec.field_id.value, f"checkbox value must be 0 or 1, got {value!r}")
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return 1
        if lowered in _FALSE_STRINGS:
            return 0
    raise FieldValueError(spec.field_id.value, f"invalid checkbox value {value!r}")


def _coerce_number(spec: FieldSpec, value: Any) -> int | float | None:
    if isinstance(value, bool):
        raise FieldValueError(spec.field_id.value, "expected a number, got a boolean")
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise FieldValueError(spec.field_id.value, f"expected a number, got {value!r}")
    if not math.isfinite(number):
        raise FieldValueError(spec.field_id.value, f"expected a finite number, got {value!r}")
    if spec.kind is FieldKind.INTEGER:
        if not number.is_integer():
            raise FieldValueError(spec.field_id.value, f"expected a whole number, got {value!r}")
        return int(number)
    return number


def coerce_value(field_id: str, value: Any) -> Any:
    """Return *value* converted to the storage type of *field_id*."""
    spec = FIELD_SPEC_BY_ID.get(field_id)
    if spec is None:
        raise FieldValueError(field_id, "unknown field identifier")
    if value is None:
        return None
    if spec.kind is FieldKind.CHECKBOX:
        return _coerce_checkbox(spec, value)
    if spec.kind in (FieldKind.INTEGER, FieldKind.DECIMAL):
        return _coerce_number(spec, value)
    if isinstance(value, (dict, list)):
        raise FieldValueError(field_id, "expected a scalar value")
    return str(value)


def coerce_updates(updates: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and coerce a partial field update.

    Metadata keys are not accepted here; status changes go through their
    own code path.
    """
    return {field_id: coerce_value(field_id, value) for field_id, value in updates.items()}


# ---------------------------------------------------------------------------
# Completion percentage
# ---------------------------------------------------------------------------

def is_filled(value: Any) -> bool:
    return value is not None and value != ""


def count_filled(record: Mapping[str, Any]) -> int:
    """Count non-metadata attributes of *record* that hold a value."""
    return sum(
        1 for key, value in record.items()
        if key not in METADATA_KEYS and is_filled(value)
    )


def calculate_progress(record: Mapping[str, Any]) -> int:
    """Return ``round(100 * filled / 115)``, capped at 100."""
    filled = count_filled(record)
    return min(100, round(100 * filled / TOTAL_FORM_FIELDS))


def display_value(value: Any) -> str:
    """Render a stored value as text; whole-number floats lose their ``.0``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
