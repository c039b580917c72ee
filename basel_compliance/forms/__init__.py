"""Basel notification form model.

The field registry (``fields``), value rules (``values``) and the sample
scenario loader (``sample_data``).  Nothing in this package touches the
database or HTTP layer.
"""
