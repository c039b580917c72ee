"""Thin view over the interactive form of a PDF template.

Wraps a pypdf ``PdfWriter`` cloned from the template and indexes every
widget annotation by its fully qualified field name, so callers can ask
"is there a text field called X?" and write to it without caring how the
template nests its field hierarchy.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from pypdf.generic import DictionaryObject, NameObject, TextStringObject

from basel_compliance.pdf.errors import PdfGenerationError, TemplateLoadError

logger = logging.getLogger(__name__)

# Field flag bits (PDF 32000-1, table 226).
_FF_RADIO = 1 << 15
_FF_PUSHBUTTON = 1 << 16

_OFF = NameObject("/Off")
_DEFAULT_ON = NameObject("/Yes")


class FormFieldKind(str, Enum):
    TEXT = "text"
    CHECKBOX = "checkbox"
    OTHER = "other"


@dataclass
class FormField:
    name: str
    kind: FormFieldKind
    node: DictionaryObject
    widgets: list[tuple[int, DictionaryObject]] = field(default_factory=list)


def _inherited(node: DictionaryObject, key: str) -> Any:
    while node is not None:
        if key in node:
            return node[key]
        parent = node.get("/Parent")
        node = parent.get_object() if parent is not None else None
    return None


def qualified_name(node: DictionaryObject) -> str:
    parts: list[str] = []
    while node is not None:
        if "/T" in node:
            parts.append(str(node["/T"]))
        parent = node.get("/Parent")
        node = parent.get_object() if parent is not None else None
    return ".".join(reversed(parts))


def _field_kind(node: DictionaryObject) -> FormFieldKind:
    field_type = _inherited(node, "/FT")
    flags = int(_inherited(node, "/Ff") or 0)
    if field_type == "/Tx":
        return FormFieldKind.TEXT
    if field_type == "/Btn" and not flags & (_FF_RADIO | _FF_PUSHBUTTON):
        return FormFieldKind.CHECKBOX
    return FormFieldKind.OTHER


def _on_state(widget: DictionaryObject) -> NameObject:
    appearance = widget.get("/AP")
    if appearance is not None:
        normal = appearance.get_object().get("/N")
        if normal is not None and hasattr(normal.get_object(), "keys"):
            for state in normal.get_object().keys():
                if state != "/Off":
                    return NameObject(state)
    return _DEFAULT_ON


class AcroForm:
    """Writable copy of a template's form fields."""

    def __init__(self, writer: PdfWriter) -> None:
        self._writer = writer
        self._fields: dict[str, FormField] = {}
        self._index_widgets()

    @classmethod
    def open(cls, path: str | Path) -> AcroForm:
        path = Path(path)
        if not path.is_file():
            raise TemplateLoadError(f"PDF template not found: {path}")
        try:
            reader = PdfReader(path)
            return cls(PdfWriter(clone_from=reader))
        except (PyPdfError, OSError, ValueError, KeyError, TypeError) as exc:
            raise TemplateLoadError(f"Could not read PDF template {path.name}: {exc}") from exc

    def _index_widgets(self) -> None:
        for page_index, page in enumerate(self._writer.pages):
            annots = page.get("/Annots")
            if annots is None:
                continue
            for ref in annots.get_object():
                widget = ref.get_object()
                if widget.get("/Subtype") != "/Widget":
                    continue
                if "/T" in widget:
                    node = widget
                else:
                    parent = widget.get("/Parent")
                    if parent is None:
                        continue
                    node = parent.get_object()
                name = qualified_name(node)
                if not name:
                    continue
                entry = self._fields.get(name)
                if entry is None:
                    entry = self._fields[name] = FormField(name=name, kind=_field_kind(node), node=node)
                entry.widgets.append((page_index, widget))
        logger.debug("Indexed %d form fields", len(self._fields))

    # -- queries -------------------------------------------------------------

    @property
    def field_names(self) -> frozenset[str]:
        return frozenset(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def kind(self, name: str) -> FormFieldKind | None:
        entry = self._fields.get(name)
        return entry.kind if entry is not None else None

    # -- writes --------------------------------------------------------------

    def set_text(self, name: str, value: str) -> bool:
        """Write *value* into text field *name*; False when it is not one."""
        entry = self._fields.get(name)
        if entry is None or entry.kind is not FormFieldKind.TEXT:
            return False
        entry.node[NameObject("/V")] = TextStringObject(value)
        for page_index in sorted({page_index for page_index, _ in entry.widgets}):
            try:
                self._writer.update_page_form_field_values(
                    self._writer.pages[page_index],
                    {name: value},
                    auto_regenerate=False,
                )
            except Exception as exc:
                # /V is already set and NeedAppearances makes viewers redraw it.
                logger.debug("No appearance stream for %s: %s", name, type(exc).__name__)
        return True

    def set_checkbox(self, name: str, checked: bool) -> bool:
        """Set checkbox *name* to its on-state or ``/Off``; False when it is not one."""
        entry = self._fields.get(name)
        if entry is None or entry.kind is not FormFieldKind.CHECKBOX:
            return False
        value = _OFF
        for _, widget in entry.widgets:
            state = _on_state(widget) if checked else _OFF
            widget[NameObject("/AS")] = state
            if state != _OFF:
                value = state
        entry.node[NameObject("/V")] = value
        return True

    # -- output --------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Serialize with ``NeedAppearances`` set; the form stays editable."""
        try:
            self._writer.set_need_appearances_writer(True)
            buffer = io.BytesIO()
            self._writer.write(buffer)
        except (PyPdfError, OSError, ValueError, TypeError) as exc:
            raise PdfGenerationError(f"Failed to serialize filled PDF: {exc}") from exc
        return buffer.getvalue()
