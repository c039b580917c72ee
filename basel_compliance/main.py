from basel_compliance.api.main import app

__all__ = ["app"]
