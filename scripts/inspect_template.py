#!/usr/bin/env python3
"""List the interactive fields of a PDF template and check them against
the field mapping.

Usage:
    python scripts/inspect_template.py                   # inspects PDF_TEMPLATE_PATH
    python scripts/inspect_template.py path/to/form.pdf
"""
from __future__ import annotations

import sys

# Ensure project root is on sys.path
sys.path.insert(0, ".")

from basel_compliance.core.settings import get_settings
from basel_compliance.forms.fields import FIELD_IDS
from basel_compliance.forms.values import COMPOSED_DATES
from basel_compliance.pdf.acroform import AcroForm
from basel_compliance.pdf.errors import TemplateLoadError
from basel_compliance.pdf.field_mapping import get_field_mapping


def main() -> int:
    path = sys.argv[1] if len(sys.argv) > 1 else get_settings().pdf_template_path
    try:
        form = AcroForm.open(path)
    except TemplateLoadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"{path}: {len(form)} fields")
    for name in sorted(form.field_names):
        print(f"  {form.kind(name).value:<9} {name}")

    mapping = get_field_mapping()
    keys = sorted(FIELD_IDS) + [composed.name for composed in COMPOSED_DATES]
    missing = [key for key in keys if (name := mapping.lookup(key)) is not None and name not in form]
    if missing:
        print(f"\n{len(missing)} mapped fields have no widget in the template:")
        for key in missing:
            print(f"  {key} -> {mapping.lookup(key)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
