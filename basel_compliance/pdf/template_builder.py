"""Build a bare AcroForm template.

The government notification form is not distributed with the code.  This
module writes a stand-in with one widget per mapped field (text or
checkbox, no page artwork) so exports work in development and tests.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from math import ceil
from pathlib import Path

from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DictionaryObject,
    NameObject,
    NumberObject,
    RectangleObject,
    TextStringObject,
)

from basel_compliance.forms.fields import FIELD_SPECS, FieldKind
from basel_compliance.forms.values import COMPOSED_DATES
from basel_compliance.pdf.acroform import FormFieldKind
from basel_compliance.pdf.field_mapping import FieldMapping

logger = logging.getLogger(__name__)

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
_MARGIN = 36
_ROW_HEIGHT = 18
_ROWS_PER_PAGE = (PAGE_HEIGHT - 2 * _MARGIN) // _ROW_HEIGHT
_LABEL_WIDTH = 220
_FF_MULTILINE = 1 << 12


@dataclass(frozen=True)
class TemplateField:
    kind: FormFieldKind
    label: str = ""
    multiline: bool = False


def dev_template_fields(mapping: FieldMapping | None = None) -> dict[str, TemplateField]:
    """Fields of the development template, keyed by external name.

    Date parts are left out; the template carries the composed dates
    instead, as the official form does.
    """
    mapping = mapping or FieldMapping()
    fields: dict[str, TemplateField] = {}
    for spec in FIELD_SPECS:
        if spec.kind is FieldKind.DATE_PART:
            continue
        name = mapping.lookup(spec.field_id.value)
        if name is None:
            continue
        if spec.kind is FieldKind.CHECKBOX:
            fields[name] = TemplateField(FormFieldKind.CHECKBOX, spec.label)
        else:
            fields[name] = TemplateField(
                FormFieldKind.TEXT, spec.label, multiline=spec.kind is FieldKind.TEXTAREA
            )
    for composed in COMPOSED_DATES:
        name = mapping.lookup(composed.name)
        if name is not None:
            fields[name] = TemplateField(FormFieldKind.TEXT, composed.label)
    return fields


def _helvetica() -> DictionaryObject:
    return DictionaryObject({
        NameObject("/Type"): NameObject("/Font"),
        NameObject("/Subtype"): NameObject("/Type1"),
        NameObject("/BaseFont"): NameObject("/Helvetica"),
        NameObject("/Encoding"): NameObject("/WinAnsiEncoding"),
    })


def _widget(name: str, spec: TemplateField, top: float) -> DictionaryObject:
    x0 = _MARGIN + _LABEL_WIDTH
    if spec.kind is FormFieldKind.CHECKBOX:
        rect = [x0, top - 12, x0 + 12, top]
    else:
        rect = [x0, top - 14, PAGE_WIDTH - _MARGIN, top]

    widget = DictionaryObject({
        NameObject("/Type"): NameObject("/Annot"),
        NameObject("/Subtype"): NameObject("/Widget"),
        NameObject("/T"): TextStringObject(name),
        NameObject("/Rect"): RectangleObject(rect),
        NameObject("/F"): NumberObject(4),
    })
    if spec.label:
        widget[NameObject("/TU")] = TextStringObject(spec.label)

    if spec.kind is FormFieldKind.CHECKBOX:
        widget[NameObject("/FT")] = NameObject("/Btn")
        widget[NameObject("/V")] = NameObject("/Off")
        widget[NameObject("/AS")] = NameObject("/Off")
    else:
        widget[NameObject("/FT")] = NameObject("/Tx")
        widget[NameObject("/DA")] = TextStringObject("/Helv 8 Tf 0 g")
        if spec.multiline:
            widget[NameObject("/Ff")] = NumberObject(_FF_MULTILINE)
    return widget


def build_template(path: str | Path, fields: Mapping[str, TemplateField]) -> Path:
    """Write an AcroForm PDF with *fields* laid out one per row."""
    path = Path(path)
    writer = PdfWriter()
    items = list(fields.items())
    for _ in range(max(1, ceil(len(items) / _ROWS_PER_PAGE))):
        writer.add_blank_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)

    refs = ArrayObject()
    for index, (name, spec) in enumerate(items):
        page_index, row = divmod(index, _ROWS_PER_PAGE)
        top = PAGE_HEIGHT - _MARGIN - row * _ROW_HEIGHT
        added = writer.add_annotation(page_number=page_index, annotation=_widget(name, spec, top))
        refs.append(added.indirect_reference)

    writer.root_object[NameObject("/AcroForm")] = DictionaryObject({
        NameObject("/Fields"): refs,
        NameObject("/DA"): TextStringObject("/Helv 0 Tf 0 g"),
        NameObject("/DR"): DictionaryObject({
            NameObject("/Font"): DictionaryObject({NameObject("/Helv"): _helvetica()}),
        }),
    })

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as fh:
        writer.write(fh)
    logger.info("Wrote template %s with %d fields on %d pages", path, len(items), len(writer.pages))
    return path


def build_dev_template(path: str | Path, mapping: FieldMapping | None = None) -> Path:
    return build_template(path, dev_template_fields(mapping))
