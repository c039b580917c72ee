#!/usr/bin/env python3
"""Write the development AcroForm template.

One widget per mapped field, named after the field mapping, so the
official-form export can be exercised without the government PDF.

Usage:
    python scripts/build_dev_template.py                 # writes PDF_TEMPLATE_PATH
    python scripts/build_dev_template.py out/form.pdf
"""
from __future__ import annotations

import sys

# Ensure project root is on sys.path
sys.path.insert(0, ".")

from basel_compliance.core.logging import setup_logging
from basel_compliance.core.settings import get_settings
from basel_compliance.pdf.field_mapping import get_field_mapping
from basel_compliance.pdf.template_builder import build_dev_template


def main() -> None:
    setup_logging()
    target = sys.argv[1] if len(sys.argv) > 1 else get_settings().pdf_template_path
    path = build_dev_template(target, get_field_mapping())
    print(f"Wrote development template to {path}")


if __name__ == "__main__":
    main()
