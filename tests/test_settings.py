import pytest
from pydantic import ValidationError

from basel_compliance.core.settings import Settings


def test_renderer_backend_defaults_to_chromium(monkeypatch):
    monkeypatch.delenv("PDF_RENDERER_BACKEND", raising=False)

    assert Settings().pdf_renderer_backend == "chromium"


def test_renderer_backend_accepts_weasyprint(monkeypatch):
    monkeypatch.setenv("PDF_RENDERER_BACKEND", "weasyprint")

    assert Settings().pdf_renderer_backend == "weasyprint"


def test_unknown_renderer_backend_fails_when_settings_load(monkeypatch):
    monkeypatch.setenv("PDF_RENDERER_BACKEND", "wkhtmltopdf")

    with pytest.raises(ValidationError):
        Settings()
