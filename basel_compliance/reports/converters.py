"""HTML-to-PDF conversion backends.

The report renderer only depends on :class:`HtmlToPdfConverter`; the
concrete engine is picked from ``PDF_RENDERER_BACKEND``:

- ``chromium`` (default): headless Chromium through Playwright.  Faithful
  CSS grid and gradient support, but each call launches a browser.
- ``weasyprint``: in-process, no browser; weaker on modern CSS.

Both engines are imported lazily so the API starts without them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from basel_compliance.pdf.errors import RenderError

logger = logging.getLogger(__name__)

PAGE_FORMAT = "Letter"

_CHROMIUM_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")


class HtmlToPdfConverter(Protocol):
    def convert(self, html: str) -> bytes:
        ...


@dataclass
class ChromiumPdfConverter:
    """Launch, print and close a headless browser inside one call."""

    launch_timeout_seconds: float = 30.0
    page_format: str = PAGE_FORMAT
    launch_args: tuple[str, ...] = field(default=_CHROMIUM_ARGS)

    def convert(self, html: str) -> bytes:
        try:
            from playwright.sync_api import Error as PlaywrightError
            from playwright.sync_api import sync_playwright
        except ImportError as exc:
            raise RenderError("Chromium backend requires the 'playwright' package") from exc

        timeout_ms = self.launch_timeout_seconds * 1000
        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(
                    headless=True,
                    args=list(self.launch_args),
                    timeout=timeout_ms,
                )
                try:
                    page = browser.new_page()
                    page.set_content(html, wait_until="networkidle", timeout=timeout_ms)
                    pdf_bytes = page.pdf(
                        format=self.page_format,
                        print_background=True,
                        margin={"top": "0", "right": "0", "bottom": "0", "left": "0"},
                    )
                finally:
                    browser.close()
        except PlaywrightError as exc:
            raise RenderError(f"Chromium PDF rendering failed: {exc}") from exc
        except Exception as exc:
            raise RenderError(f"Chromium PDF rendering failed: {type(exc).__name__}: {exc}") from exc

        logger.debug("Chromium rendered %d bytes", len(pdf_bytes))
        return pdf_bytes


@dataclass
class WeasyPrintPdfConverter:
    page_format: str = PAGE_FORMAT

    def convert(self, html: str) -> bytes:
        try:
            import weasyprint  # lazy import, optional native dependencies
        except (ImportError, OSError) as exc:
            raise RenderError(f"WeasyPrint backend unavailable: {exc}") from exc

        stylesheet = weasyprint.CSS(string=f"@page {{ size: {self.page_format}; margin: 0; }}")
        try:
            pdf_bytes = weasyprint.HTML(string=html).write_pdf(stylesheets=[stylesheet])
        except Exception as exc:
            raise RenderError(f"WeasyPrint PDF rendering failed: {exc}") from exc

        logger.debug("WeasyPrint rendered %d bytes", len(pdf_bytes))
        return pdf_bytes


CONVERTER_BACKENDS = frozenset({"chromium", "weasyprint"})


def get_converter(backend: str, launch_timeout_seconds: float = 30.0) -> HtmlToPdfConverter:
    backend = backend.strip().lower()
    if backend == "chromium":
        return ChromiumPdfConverter(launch_timeout_seconds=launch_timeout_seconds)
    if backend == "weasyprint":
        return WeasyPrintPdfConverter()
    raise ValueError(f"Unknown PDF renderer backend {backend!r}; expected one of {sorted(CONVERTER_BACKENDS)}")
