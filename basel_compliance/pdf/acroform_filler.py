"""Fill the official notification template from a Notification Record.

The output keeps the template's interactive fields (nothing is flattened);
``NeedAppearances`` is set so viewers redraw every value.

Values are never logged, only field identifiers and counts.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from basel_compliance.forms.fields import METADATA_KEYS
from basel_compliance.forms.values import COMPOSED_DATES, display_value, is_checked, is_filled
from basel_compliance.pdf.acroform import AcroForm, FormFieldKind
from basel_compliance.pdf.field_mapping import FieldMapping

logger = logging.getLogger(__name__)


@dataclass
class FillResult:
    pdf_bytes: bytes
    filled_count: int
    skipped: list[str] = field(default_factory=list)


class AcroFormFiller:
    """Stamp a record's values into a fixed AcroForm template."""

    def __init__(self, template_path: str | Path, mapping: FieldMapping | None = None) -> None:
        self.template_path = Path(template_path)
        self.mapping = mapping or FieldMapping()

    def fill(self, record: Mapping[str, Any]) -> FillResult:
        """Return the filled document.

        Unknown, unmapped or type-mismatched fields are skipped and reported
        in ``FillResult.skipped``.  Raises ``TemplateLoadError`` when the
        template cannot be opened and ``PdfGenerationError`` when the result
        cannot be serialized.
        """
        form = AcroForm.open(self.template_path)
        logger.info("Loaded template %s with %d form fields", self.template_path.name, len(form))

        filled = 0
        skipped: list[str] = []

        for key, value in record.items():
            if key in METADATA_KEYS or not is_filled(value):
                continue
            if self._write(form, key, value):
                filled += 1
            else:
                skipped.append(key)

        for composed in COMPOSED_DATES:
            value = composed.compose(record)
            if not value:
                continue
            if self._write(form, composed.name, value):
                filled += 1
            else:
                skipped.append(composed.name)

        pdf_bytes = form.to_bytes()
        logger.info("Filled %d fields (%d skipped)", filled, len(skipped))
        return FillResult(pdf_bytes=pdf_bytes, filled_count=filled, skipped=skipped)

    def _write(self, form: AcroForm, key: str, value: Any) -> bool:
        name = self.mapping.lookup(key)
        if name is None or name not in form:
            logger.debug("No template field for %s", key)
            return False

        kind = form.kind(name)
        try:
            if kind is FormFieldKind.TEXT:
                return form.set_text(name, display_value(value))
            if kind is FormFieldKind.CHECKBOX:
                return form.set_checkbox(name, is_checked(value))
        except Exception as exc:
            logger.debug("Could not fill %s (%s): %s", key, name, type(exc).__name__)
            return False

        logger.debug("Template field %s for %s is neither text nor checkbox", name, key)
        return False


def get_acroform_filler() -> AcroFormFiller:
    from basel_compliance.core.settings import get_settings
    from basel_compliance.pdf.field_mapping import get_field_mapping

    return AcroFormFiller(get_settings().pdf_template_path, get_field_mapping())
