"""Sample scenario loader.

Loads a filled-in notification scenario from a YAML file with the keys
``scenario``, ``description`` and ``data``.  Used by the "load test data"
endpoint and by ``scripts/generate_sample_pdf.py``.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from basel_compliance.forms.values import coerce_updates

_REQUIRED_KEYS: frozenset[str] = frozenset({"scenario", "data"})


@dataclass
class SampleScenario:
    """A named set of field values."""

    scenario: str
    description: str
    data: dict[str, Any]


def load_sample_scenario(path: str | Path) -> SampleScenario:
    """Load and validate a sample scenario.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the document is not a mapping, misses a required key, or names a
        field that is not in the registry.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as fh:
        doc = yaml.safe_load(fh)

    if not isinstance(doc, dict):
        raise ValueError(f"{path}: expected a YAML mapping, got {type(doc).__name__}")

    missing = _REQUIRED_KEYS - doc.keys()
    if missing:
        raise ValueError(f"{path}: missing required keys: {sorted(missing)}")

    if not isinstance(doc["data"], dict):
        raise ValueError(f"{path}: 'data' must be a mapping")

    return SampleScenario(
        scenario=str(doc["scenario"]),
        description=str(doc.get("description") or ""),
        data=coerce_updates({str(k): v for k, v in doc["data"].items()}),
    )
