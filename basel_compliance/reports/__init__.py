"""Custom HTML notification report and its PDF conversion."""
