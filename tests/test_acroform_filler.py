"""Tests for the AcroForm filler, run against templates built with pypdf."""
from __future__ import annotations

import io
from pathlib import Path

import pytest
from pypdf import PdfReader

from basel_compliance.pdf.acroform import AcroForm, FormFieldKind
from basel_compliance.pdf.acroform_filler import AcroFormFiller
from basel_compliance.pdf.errors import TemplateLoadError
from basel_compliance.pdf.field_mapping import FieldMapping
from basel_compliance.pdf.template_builder import TemplateField, build_template, dev_template_fields


def _read_fields(pdf_bytes: bytes) -> dict:
    return PdfReader(io.BytesIO(pdf_bytes)).get_fields()


def _value(fields: dict, name: str):
    return fields[name].get("/V")


# ---------------------------------------------------------------------------
# Template view
# ---------------------------------------------------------------------------


def test_dev_template_exposes_every_mapped_field(dev_template: Path):
    form = AcroForm.open(dev_template)
    expected = dev_template_fields()

    assert form.field_names == frozenset(expected)
    assert form.kind("1_exporter_notifier_name") is FormFieldKind.TEXT
    assert form.kind("8_intended_carrier_means_road") is FormFieldKind.CHECKBOX
    assert "6_intended_period_first_departure_date" in form
    assert "6_intended_period_first_departure_month" not in form


def test_missing_template_raises(tmp_path: Path):
    with pytest.raises(TemplateLoadError):
        AcroFormFiller(tmp_path / "missing.pdf").fill({})


def test_corrupt_template_raises(tmp_path: Path):
    path = tmp_path / "corrupt.pdf"
    path.write_bytes(b"this is not a pdf")

    with pytest.raises(TemplateLoadError):
        AcroFormFiller(path).fill({})


# ---------------------------------------------------------------------------
# Filling
# ---------------------------------------------------------------------------


def test_text_and_checkbox_values_are_written(dev_template: Path):
    record = {
        "id": "metadata-is-ignored",
        "status": "draft",
        "1_exporter_notifier_name": "Northern Battery Recycling Inc.",
        "5_total_intended_quantity_tonnes": 480.0,
        "8_intended_carrier_means_road": 1,
        "8_intended_carrier_means_sea": 0,
        "8_intended_carrier_means_air": "true",
    }

    result = AcroFormFiller(dev_template).fill(record)
    fields = _read_fields(result.pdf_bytes)

    assert result.filled_count == 5
    assert result.skipped == []
    assert _value(fields, "1_exporter_notifier_name") == "Northern Battery Recycling Inc."
    assert _value(fields, "5_total_intended_quantity_tonnes") == "480"
    assert _value(fields, "8_intended_carrier_means_road") == "/Yes"
    assert _value(fields, "8_intended_carrier_means_sea") == "/Off"
    assert _value(fields, "8_intended_carrier_means_air") == "/Yes"


def test_empty_values_are_not_written(dev_template: Path):
    record = {
        "1_exporter_notifier_name": "",
        "1_exporter_notifier_tel": None,
        "2_importer_consignee_name": "Buckeye Secondary Lead LLC",
    }

    result = AcroFormFiller(dev_template).fill(record)
    fields = _read_fields(result.pdf_bytes)

    assert result.filled_count == 1
    assert _value(fields, "1_exporter_notifier_name") in (None, "")


def test_composed_dates_are_synthesized(dev_template: Path):
    record = {
        "6_intended_period_first_departure_month": "03",
        "6_intended_period_first_departure_day": "01",
        "6_intended_period_first_departure_year": "2025",
        "17_exporter_declaration_day": "5",
        "17_exporter_declaration_year": "2024",
    }

    result = AcroFormFiller(dev_template).fill(record)
    fields = _read_fields(result.pdf_bytes)

    assert _value(fields, "6_intended_period_first_departure_date") == "03/01/2025"
    assert _value(fields, "17_exporter_declaration_date") == "5/2024"
    assert _value(fields, "6_intended_period_last_departure_date") in (None, "")
    assert result.filled_count == 2
    # The parts themselves have no widget on the template.
    assert "6_intended_period_first_departure_month" in result.skipped


def test_unknown_and_unmapped_keys_are_skipped(dev_template: Path):
    mapping = FieldMapping({"1_exporter_notifier_fax": None})
    record = {
        "legacy_field": "x",
        "1_exporter_notifier_fax": "+1 905 555 0143",
        "1_exporter_notifier_name": "Acme",
    }

    result = AcroFormFiller(dev_template, mapping).fill(record)

    assert result.filled_count == 1
    assert sorted(result.skipped) == ["1_exporter_notifier_fax", "legacy_field"]


def test_output_keeps_form_editable_and_requests_appearances(dev_template: Path):
    result = AcroFormFiller(dev_template).fill({"1_exporter_notifier_name": "Acme"})
    reader = PdfReader(io.BytesIO(result.pdf_bytes))
    acroform = reader.trailer["/Root"]["/AcroForm"]

    assert acroform["/NeedAppearances"].value is True
    assert len(reader.get_fields()) == len(dev_template_fields())


def test_renamed_template_fields_through_overrides(tmp_path: Path):
    template = build_template(
        tmp_path / "renamed.pdf",
        {
            "ExporterName": TemplateField(FormFieldKind.TEXT),
            "RoadTransport": TemplateField(FormFieldKind.CHECKBOX),
        },
    )
    mapping = FieldMapping({
        "1_exporter_notifier_name": "ExporterName",
        "8_intended_carrier_means_road": "RoadTransport",
    })

    result = AcroFormFiller(template, mapping).fill({
        "1_exporter_notifier_name": "Acme",
        "8_intended_carrier_means_road": 1,
        "2_importer_consignee_name": "Not on this template",
    })
    fields = _read_fields(result.pdf_bytes)

    assert _value(fields, "ExporterName") == "Acme"
    assert _value(fields, "RoadTransport") == "/Yes"
    assert result.skipped == ["2_importer_consignee_name"]


def test_checkbox_widget_for_text_value_is_unchecked(tmp_path: Path):
    template = build_template(
        tmp_path / "mismatch.pdf",
        {"1_exporter_notifier_name": TemplateField(FormFieldKind.CHECKBOX)},
    )

    result = AcroFormFiller(template).fill({"1_exporter_notifier_name": "Acme"})
    fields = _read_fields(result.pdf_bytes)

    assert _value(fields, "1_exporter_notifier_name") == "/Off"


def test_multiline_values_survive(dev_template: Path):
    address = "1450 Industrial Parkway\nMississauga, ON L5T 2H9\nCanada"

    result = AcroFormFiller(dev_template).fill({"1_exporter_notifier_address": address})

    assert _value(_read_fields(result.pdf_bytes), "1_exporter_notifier_address") == address
