"""Internal field identifier to external PDF field name.

Most identifiers are used verbatim as the template's field names, so the
default is identity.  ``FIELD_NAME_OVERRIDES`` lists only the exceptions:
the composed dates, which have no single source identifier, plus anything
declared in ``config/pdf_field_overrides.yaml``.

An override value of ``null`` in the YAML file marks an identifier as
having no counterpart on the template.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from basel_compliance.forms.fields import FIELD_IDS
from basel_compliance.forms.values import COMPOSED_DATE_BY_NAME

logger = logging.getLogger(__name__)

FIELD_NAME_OVERRIDES: dict[str, str | None] = {
    "first_departure": "6_intended_period_first_departure_date",
    "last_departure": "6_intended_period_last_departure_date",
    "declaration_date": "17_exporter_declaration_date",
}

_MAPPABLE_KEYS: frozenset[str] = FIELD_IDS | frozenset(COMPOSED_DATE_BY_NAME)


def load_field_overrides(path: str | Path) -> dict[str, str | None]:
    """Read extra overrides from *path*.

    A missing file yields no overrides.  The document must be a mapping with
    an ``overrides`` mapping whose keys are field identifiers or composed
    date names and whose values are strings or ``null``; anything else
    raises ``ValueError``.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug("No PDF field override file at %s", path)
        return {}

    with open(path, "r", encoding="utf-8") as fh:
        doc = yaml.safe_load(fh) or {}

    if not isinstance(doc, dict):
        raise ValueError(f"{path}: expected a YAML mapping, got {type(doc).__name__}")

    raw = doc.get("overrides") or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: 'overrides' must be a mapping")

    overrides: dict[str, str | None] = {}
    for key, value in raw.items():
        key = str(key)
        if key not in _MAPPABLE_KEYS:
            raise ValueError(f"{path}: unknown field identifier {key!r}")
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{path}: override for {key!r} must be a string or null")
        overrides[key] = value
    return overrides


class FieldMapping:
    """Resolve internal identifiers to template field names."""

    def __init__(self, overrides: Mapping[str, str | None] | None = None) -> None:
        self._overrides: dict[str, str | None] = dict(FIELD_NAME_OVERRIDES)
        if overrides:
            self._overrides.update(overrides)

    @classmethod
    def from_file(cls, path: str | Path) -> FieldMapping:
        return cls(load_field_overrides(path))

    @property
    def overrides(self) -> dict[str, str | None]:
        return dict(self._overrides)

    def lookup(self, field_id: str) -> str | None:
        """Return the external name for *field_id*, or ``None`` when unmapped."""
        if field_id in self._overrides:
            return self._overrides[field_id]
        if field_id in FIELD_IDS:
            return field_id
        return None


def get_field_mapping() -> FieldMapping:
    from basel_compliance.core.settings import get_settings

    return FieldMapping.from_file(get_settings().pdf_field_overrides_path)
