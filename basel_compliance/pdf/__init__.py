"""AcroForm export: field mapping, template access and filling."""
