"""Custom four-page notification report.

Page 1 is an executive summary; pages 2-4 list every section of the form in
a two-column grid.  All record values pass through :func:`escape` before
they reach the markup, and the shell in ``templates/`` is filled with
``string.Template`` so user data is never parsed as a template.
"""
from __future__ import annotations

import html
import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from string import Template
from typing import Any

from basel_compliance.forms.fields import SECTIONS, FieldId, FieldKind, fields_in_section
from basel_compliance.forms.values import COMPOSED_DATES, composed_dates, display_value, is_checked
from basel_compliance.reports.converters import HtmlToPdfConverter

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
TOTAL_PAGES = 4

# page number -> (caption, sections)
DETAIL_PAGES: dict[int, tuple[str, tuple[int, ...]]] = {
    2: ("Parties", (1, 2, 8, 9, 10)),
    3: ("Waste and Shipment", (3, 4, 5, 6, 7, 11, 12, 13)),
    4: ("Codes, Routing and Annexes", (14, 15, 16, 17, 18)),
}

_COMPOSED_BY_GROUP = {d.label: d for d in COMPOSED_DATES}


# ---------------------------------------------------------------------------
# Escaping / glyphs
# ---------------------------------------------------------------------------

def escape(value: Any) -> str:
    """HTML-escape a record value; newlines become ``<br>``."""
    if value is None or value == "":
        return ""
    text = html.escape(display_value(value), quote=True)
    return text.replace("\r\n", "\n").replace("\n", "<br>")


def checkbox(value: Any) -> str:
    if is_checked(value):
        return '<span class="checkbox checked"></span>'
    return '<span class="checkbox"></span>'


def _get(record: Mapping[str, Any], field_id: FieldId) -> Any:
    return record.get(field_id.value)


def _checked_labels(record: Mapping[str, Any], options: Iterable[tuple[FieldId, str]]) -> list[str]:
    return [label for field_id, label in options if is_checked(_get(record, field_id))]


# ---------------------------------------------------------------------------
# Page 1: executive summary
# ---------------------------------------------------------------------------

_TRANSPORT_MODES = (
    (FieldId.TRANSPORT_ROAD, "Road"),
    (FieldId.TRANSPORT_TRAIN, "Train"),
    (FieldId.TRANSPORT_SEA, "Sea"),
    (FieldId.TRANSPORT_AIR, "Air"),
    (FieldId.TRANSPORT_INLAND_WATERWAYS, "Inland waterways"),
)

_PACKAGING_TYPES = (
    (FieldId.PACKAGING_DRUM, "Drums"),
    (FieldId.PACKAGING_WOODEN_BARREL, "Wooden barrels"),
    (FieldId.PACKAGING_JERRICAN, "Jerricans"),
    (FieldId.PACKAGING_BOX, "Boxes"),
    (FieldId.PACKAGING_BAG, "Bags"),
    (FieldId.PACKAGING_COMPOSITE, "Composite packaging"),
    (FieldId.PACKAGING_PRESSURE_RECEPTACLE, "Pressure receptacles"),
    (FieldId.PACKAGING_BULK, "Bulk"),
)

_ANNEX_TYPES = (
    (FieldId.ANNEX_CHEMICAL_ANALYSIS, "Chemical analysis report"),
    (FieldId.ANNEX_FACILITY_PERMITS, "Facility permits"),
    (FieldId.ANNEX_TRANSPORT_CONTRACTS, "Transport contract"),
    (FieldId.ANNEX_INSURANCE, "Insurance certificates"),
    (FieldId.ANNEX_PROCESS_DESCRIPTIONS, "Process descriptions"),
    (FieldId.ANNEX_SAFETY_DATA_SHEETS, "Safety Data Sheets"),
    (FieldId.ANNEX_ROUTING, "Routing information"),
    (FieldId.ANNEX_EMERGENCY, "Emergency procedures"),
)

_PARTY_CARDS = (
    ("EXPORTER", "1_exporter_notifier"),
    ("IMPORTER", "2_importer_consignee"),
    ("FACILITY", "10_disposal_recovery_facility"),
)

_CLASSIFICATION_CODES = (
    ("Basel", FieldId.BASEL_ANNEX),
    ("OECD", FieldId.OECD_CODE),
    ("Y-Code", FieldId.Y_CODE),
    ("H-Code", FieldId.H_CODE),
    ("Export Code", FieldId.NATIONAL_CODE_EXPORT),
    ("Import Code", FieldId.NATIONAL_CODE_IMPORT),
    ("Customs", FieldId.CUSTOMS_CODE),
)


def _notification_id(record: Mapping[str, Any]) -> str:
    return escape(_get(record, FieldId.NOTIFICATION_NO) or "N/A")


def _purpose(record: Mapping[str, Any]) -> str:
    if is_checked(_get(record, FieldId.OPERATION_RECOVERY)):
        operation = "Recovery"
    elif is_checked(_get(record, FieldId.OPERATION_DISPOSAL)):
        operation = "Disposal"
    else:
        operation = "Not specified"
    code = escape(_get(record, FieldId.OPERATION_CODE))
    return f"{operation} - {code}" if code else operation


def _transport(record: Mapping[str, Any]) -> str:
    modes = ", ".join(_checked_labels(record, _TRANSPORT_MODES)) or "Unspecified"
    text = f"{modes} transport"
    carrier = escape(_get(record, FieldId.CARRIER_NAME))
    if carrier:
        text += f" via {carrier}"
    transit = escape(_get(record, FieldId.STATES_OF_TRANSIT))
    if transit:
        text += f". Transit: {transit}"
    return text


def _packaging(record: Mapping[str, Any]) -> str:
    kinds = [html.escape(label) for label in _checked_labels(record, _PACKAGING_TYPES)]
    other = escape(_get(record, FieldId.PACKAGING_OTHER))
    if other:
        kinds.append(other)
    handling = (
        "Special handling required"
        if is_checked(_get(record, FieldId.SPECIAL_HANDLING_YES))
        else "No special handling"
    )
    return f"{', '.join(kinds) or 'Not specified'}. {handling}."


def _status(record: Mapping[str, Any]) -> str:
    status = escape(record.get("status") or "draft").capitalize()
    consent = (
        "Pre-consented recovery facility"
        if is_checked(_get(record, FieldId.PRE_CONSENTED_YES))
        else "Not pre-consented"
    )
    return f"{status} - {consent}"


def _party_card(record: Mapping[str, Any], title: str, prefix: str) -> str:
    name = escape(record.get(f"{prefix}_name"))
    lines = [
        f"<strong>{name}</strong>" if name else "",
        escape(record.get(f"{prefix}_contact_person")),
        escape(record.get(f"{prefix}_address")),
        escape(record.get(f"{prefix}_email")),
        escape(record.get(f"{prefix}_tel")),
    ]
    return (
        '<div class="party-card">'
        f'<div class="party-card-title">{title}</div>'
        f'<div class="party-card-content">{"<br>".join(line for line in lines if line)}</div>'
        "</div>"
    )


def _summary_rows(record: Mapping[str, Any], dates: Mapping[str, str]) -> list[tuple[str, str]]:
    designation = escape(_get(record, FieldId.WASTE_DESIGNATION))
    quantity = (
        f"{escape(_get(record, FieldId.QUANTITY_TONNES))} tonnes "
        f"({escape(_get(record, FieldId.QUANTITY_M3))} m&sup3;) across "
        f"{escape(_get(record, FieldId.TOTAL_SHIPMENTS))} shipments"
    )
    route = (
        f"{escape(_get(record, FieldId.EXPORT_STATE))} ({escape(_get(record, FieldId.EXPORT_POINT_EXIT))})"
        " &rarr; "
        f"{escape(_get(record, FieldId.IMPORT_STATE))} ({escape(_get(record, FieldId.IMPORT_POINT_ENTRY))})"
    )
    hazards = (
        f"{escape(_get(record, FieldId.WASTE_HAZARDOUS_CONSTITUENTS))}<br>"
        f"UN Class {escape(_get(record, FieldId.UN_CLASS))}, {escape(_get(record, FieldId.UN_NUMBER))}"
    )
    return [
        ("WHAT", designation),
        ("HOW MUCH", quantity),
        ("WHEN", f"{html.escape(dates['first_departure'])} - {html.escape(dates['last_departure'])}"),
        ("FROM", route),
        ("PURPOSE", _purpose(record)),
        ("WHY EXPORT", escape(_get(record, FieldId.OPERATION_REASON_EXPORT))),
        ("TRANSPORT", _transport(record)),
        ("HAZARDS", hazards),
        ("PACKAGING", _packaging(record)),
        ("STATUS", _status(record)),
    ]


def render_summary_page(record: Mapping[str, Any]) -> str:
    dates = composed_dates(record)
    grid = "".join(
        f'<div class="exec-label">{label}:</div><div class="exec-value">{value}</div>'
        for label, value in _summary_rows(record, dates)
    )
    parties = "".join(_party_card(record, title, prefix) for title, prefix in _PARTY_CARDS)
    codes = " &nbsp;|&nbsp; ".join(
        f"<strong>{label}:</strong> {escape(_get(record, field_id))}"
        for label, field_id in _CLASSIFICATION_CODES
    )
    documents = " &nbsp;|&nbsp; ".join(
        f"&#10003; {html.escape(label)}" for label in _checked_labels(record, _ANNEX_TYPES)
    ) or "None listed"

    return (
        '<div class="page">'
        '<div class="exec-header"><h1>BASEL CONVENTION NOTIFICATION</h1>'
        f'<div class="notification-id">{_notification_id(record)}</div></div>'
        '<div class="scenario-box"><strong>Waste Description:</strong> '
        f"{escape(_get(record, FieldId.WASTE_DESIGNATION))}</div>"
        '<div class="exec-summary-box"><div class="exec-summary-title">Executive Summary</div>'
        f'<div class="exec-grid">{grid}</div>'
        '<div class="exec-divider"></div>'
        f'<div class="key-parties">{parties}</div></div>'
        '<div class="info-box codes"><div class="info-title">CLASSIFICATION CODES</div>'
        f"{codes}</div>"
        '<div class="info-box documents"><div class="info-title">'
        f"SUPPORTING DOCUMENTS ({escape(_get(record, FieldId.ANNEXES_TOTAL)) or 0} total)</div>"
        f"{documents}</div>"
        f'<div class="page-number">Page 1 of {TOTAL_PAGES} - Executive Summary</div>'
        "</div>"
    )


# ---------------------------------------------------------------------------
# Pages 2-4: section detail
# ---------------------------------------------------------------------------

def _field_block(label: str, value_html: str) -> str:
    return (
        '<div class="field">'
        f'<div class="field-label">{html.escape(label)}</div>'
        f'<div class="field-value">{value_html}</div>'
        "</div>"
    )


def _checkbox_block(label: str, items: list[tuple[str, Any]]) -> str:
    glyphs = "".join(
        f'<span class="checkbox-item">{checkbox(value)} {html.escape(item_label)}</span>'
        for item_label, value in items
    )
    return _field_block(label, f'<div class="checkbox-group">{glyphs}</div>')


def render_section(record: Mapping[str, Any], section: int) -> str:
    """Render one numbered form section.

    Consecutive checkboxes sharing a group render as one glyph row; date
    parts collapse into their composed date.
    """
    blocks: list[str] = []
    pending_group: str | None = None
    pending_items: list[tuple[str, Any]] = []
    seen_dates: set[str] = set()

    def flush() -> None:
        nonlocal pending_group, pending_items
        if pending_items:
            blocks.append(_checkbox_block(pending_group or "", pending_items))
        pending_group, pending_items = None, []

    for spec in fields_in_section(section):
        value = record.get(spec.field_id.value)
        if spec.kind is FieldKind.CHECKBOX:
            if spec.group != pending_group:
                flush()
                pending_group = spec.group
            pending_items.append((spec.label, value))
            continue

        flush()
        if spec.kind is FieldKind.DATE_PART:
            composed = _COMPOSED_BY_GROUP.get(spec.group or "")
            if composed is None or composed.name in seen_dates:
                continue
            seen_dates.add(composed.name)
            blocks.append(_field_block(composed.label, html.escape(composed.compose(record))))
            continue

        blocks.append(_field_block(spec.label, escape(value)))
    flush()

    return (
        '<div class="section">'
        f'<div class="section-title">{section}. {html.escape(SECTIONS[section])}</div>'
        f'{"".join(blocks)}'
        "</div>"
    )


def render_detail_page(record: Mapping[str, Any], page_number: int) -> str:
    caption, sections = DETAIL_PAGES[page_number]
    body = "".join(render_section(record, section) for section in sections)
    return (
        '<div class="page">'
        '<div class="header"><h1>BASEL CONVENTION NOTIFICATION</h1>'
        f'<div class="notification-id">{_notification_id(record)}</div>'
        f'<div class="page-title">{html.escape(caption)}</div></div>'
        f'<div class="two-column">{body}</div>'
        f'<div class="page-number">Page {page_number} of {TOTAL_PAGES} - {html.escape(caption)}</div>'
        "</div>"
    )


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

@lru_cache(maxsize=1)
def _load_shell() -> str:
    return (TEMPLATE_DIR / "notification_report.html").read_text(encoding="utf-8")


def render_report_html(record: Mapping[str, Any]) -> str:
    pages = [render_summary_page(record)]
    pages.extend(render_detail_page(record, number) for number in sorted(DETAIL_PAGES))
    return Template(_load_shell()).safe_substitute(
        notification_id=_notification_id(record),
        pages="\n".join(pages),
    )


class HtmlReportRenderer:
    """Build the report HTML and hand it to a converter."""

    def __init__(self, converter: HtmlToPdfConverter) -> None:
        self.converter = converter

    def render(self, record: Mapping[str, Any]) -> bytes:
        html_document = render_report_html(record)
        pdf_bytes = self.converter.convert(html_document)
        logger.info(
            "Rendered custom report for notification %s (%d bytes)",
            record.get("id"),
            len(pdf_bytes),
        )
        return pdf_bytes
