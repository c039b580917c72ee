#!/usr/bin/env python3
"""Fill the template with the sample scenario and write both exports.

Usage:
    python scripts/generate_sample_pdf.py                # official form only
    python scripts/generate_sample_pdf.py --custom       # also the custom report
"""
from __future__ import annotations

import sys
from pathlib import Path

# Ensure project root is on sys.path
sys.path.insert(0, ".")

from basel_compliance.core.logging import setup_logging
from basel_compliance.core.settings import get_settings
from basel_compliance.forms.fields import FIELD_IDS
from basel_compliance.forms.sample_data import load_sample_scenario
from basel_compliance.pdf.acroform_filler import get_acroform_filler
from basel_compliance.reports.converters import get_converter
from basel_compliance.reports.html_report import HtmlReportRenderer

OUTPUT_DIR = Path("output")


def main() -> None:
    setup_logging()
    settings = get_settings()
    scenario = load_sample_scenario(settings.test_data_path)
    record = {field_id: scenario.data.get(field_id) for field_id in FIELD_IDS}
    record["id"] = "SAMPLE"
    record["status"] = "draft"

    OUTPUT_DIR.mkdir(exist_ok=True)

    result = get_acroform_filler().fill(record)
    official = OUTPUT_DIR / "sample-basel-notification.pdf"
    official.write_bytes(result.pdf_bytes)
    print(f"Wrote {official} ({result.filled_count} fields filled, {len(result.skipped)} skipped)")

    if "--custom" in sys.argv[1:]:
        converter = get_converter(settings.pdf_renderer_backend, settings.renderer_launch_timeout_seconds)
        custom = OUTPUT_DIR / "sample-basel-notification-custom.pdf"
        custom.write_bytes(HtmlReportRenderer(converter).render(record))
        print(f"Wrote {custom}")


if __name__ == "__main__":
    main()
