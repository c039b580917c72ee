class PdfError(Exception):
    """Base class for PDF export failures."""


class TemplateLoadError(PdfError):
    """The AcroForm template is missing, unreadable or corrupt."""


class PdfGenerationError(PdfError):
    """A filled document could not be serialized."""


class RenderError(PdfError):
    """HTML-to-PDF conversion failed (browser launch, timeout, engine error)."""
