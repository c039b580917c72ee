"""Tests for the HTML-to-PDF backends.

Playwright and WeasyPrint are mocked; no browser or native library is
needed.
"""
from __future__ import annotations

import types
from unittest.mock import MagicMock, patch

import pytest

from basel_compliance.pdf.errors import RenderError
from basel_compliance.reports.converters import (
    ChromiumPdfConverter,
    WeasyPrintPdfConverter,
    get_converter,
)


class FakePlaywrightError(Exception):
    pass


def _playwright_modules(sync_playwright: MagicMock) -> dict:
    sync_api = types.ModuleType("playwright.sync_api")
    sync_api.Error = FakePlaywrightError
    sync_api.sync_playwright = sync_playwright
    return {"playwright": types.ModuleType("playwright"), "playwright.sync_api": sync_api}


def _browser(sync_playwright: MagicMock) -> MagicMock:
    p = sync_playwright.return_value.__enter__.return_value
    return p.chromium.launch.return_value


# ---------------------------------------------------------------------------
# Chromium
# ---------------------------------------------------------------------------


def test_chromium_prints_letter_with_backgrounds():
    sync_playwright = MagicMock()
    browser = _browser(sync_playwright)
    page = browser.new_page.return_value
    page.pdf.return_value = b"%PDF-chromium"

    with patch.dict("sys.modules", _playwright_modules(sync_playwright)):
        result = ChromiumPdfConverter(launch_timeout_seconds=5).convert("<html></html>")

    assert result == b"%PDF-chromium"
    p = sync_playwright.return_value.__enter__.return_value
    launch_kwargs = p.chromium.launch.call_args.kwargs
    assert launch_kwargs["headless"] is True
    assert launch_kwargs["timeout"] == 5000
    page.set_content.assert_called_once()
    pdf_kwargs = page.pdf.call_args.kwargs
    assert pdf_kwargs["format"] == "Letter"
    assert pdf_kwargs["print_background"] is True
    browser.close.assert_called_once()


def test_chromium_launch_failure_becomes_render_error():
    sync_playwright = MagicMock()
    p = sync_playwright.return_value.__enter__.return_value
    p.chromium.launch.side_effect = FakePlaywrightError("Timeout 5000ms exceeded")

    with patch.dict("sys.modules", _playwright_modules(sync_playwright)):
        with pytest.raises(RenderError, match="Timeout 5000ms exceeded"):
            ChromiumPdfConverter(launch_timeout_seconds=5).convert("<html></html>")


def test_chromium_closes_browser_when_printing_fails():
    sync_playwright = MagicMock()
    browser = _browser(sync_playwright)
    browser.new_page.return_value.pdf.side_effect = FakePlaywrightError("Target closed")

    with patch.dict("sys.modules", _playwright_modules(sync_playwright)):
        with pytest.raises(RenderError):
            ChromiumPdfConverter().convert("<html></html>")

    browser.close.assert_called_once()


def test_chromium_unexpected_failure_becomes_render_error():
    sync_playwright = MagicMock()
    p = sync_playwright.return_value.__enter__.return_value
    p.chromium.launch.side_effect = OSError("Executable doesn't exist at /ms-playwright/chromium")

    with patch.dict("sys.modules", _playwright_modules(sync_playwright)):
        with pytest.raises(RenderError, match="OSError: Executable doesn't exist"):
            ChromiumPdfConverter().convert("<html></html>")


def test_chromium_without_playwright_installed():
    with patch.dict("sys.modules", {"playwright": None, "playwright.sync_api": None}):
        with pytest.raises(RenderError, match="playwright"):
            ChromiumPdfConverter().convert("<html></html>")


# ---------------------------------------------------------------------------
# WeasyPrint
# ---------------------------------------------------------------------------


def test_weasyprint_renders_html_string():
    mock_wp = MagicMock()
    mock_wp.HTML.return_value.write_pdf.return_value = b"%PDF-weasy"

    with patch.dict("sys.modules", {"weasyprint": mock_wp}):
        result = WeasyPrintPdfConverter().convert("<p>hi</p>")

    assert result == b"%PDF-weasy"
    mock_wp.HTML.assert_called_once_with(string="<p>hi</p>")
    mock_wp.CSS.assert_called_once()


def test_weasyprint_failure_becomes_render_error():
    mock_wp = MagicMock()
    mock_wp.HTML.return_value.write_pdf.side_effect = RuntimeError("cairo exploded")

    with patch.dict("sys.modules", {"weasyprint": mock_wp}):
        with pytest.raises(RenderError, match="cairo exploded"):
            WeasyPrintPdfConverter().convert("<p>hi</p>")


def test_weasyprint_not_installed():
    with patch.dict("sys.modules", {"weasyprint": None}):
        with pytest.raises(RenderError):
            WeasyPrintPdfConverter().convert("<p>hi</p>")


# ---------------------------------------------------------------------------
# Backend selection
# ---------------------------------------------------------------------------


def test_get_converter_by_name():
    chromium = get_converter("chromium", launch_timeout_seconds=12)

    assert isinstance(chromium, ChromiumPdfConverter)
    assert chromium.launch_timeout_seconds == 12
    assert isinstance(get_converter(" WeasyPrint "), WeasyPrintPdfConverter)


def test_get_converter_unknown_backend():
    with pytest.raises(ValueError, match="wkhtmltopdf"):
        get_converter("wkhtmltopdf")
