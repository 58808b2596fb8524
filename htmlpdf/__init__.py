"""Render HTML pages, files or markup to PDF with headless Chrome."""

from htmlpdf.errors import (
    EngineLaunchError,
    ExportError,
    NavigationError,
    NavigationTimeoutError,
    PdfGenerationError,
    SelectorTimeoutError,
)
from htmlpdf.export import export_multiple, export_to_pdf
from htmlpdf.models import (
    DEFAULT_OPTIONS,
    ExportJob,
    ExportOptions,
    JobResult,
    NavigationOptions,
    PdfMargin,
    PdfOptions,
)

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_OPTIONS",
    "EngineLaunchError",
    "ExportError",
    "ExportJob",
    "ExportOptions",
    "JobResult",
    "NavigationError",
    "NavigationOptions",
    "NavigationTimeoutError",
    "PdfGenerationError",
    "PdfMargin",
    "PdfOptions",
    "SelectorTimeoutError",
    "export_multiple",
    "export_to_pdf",
]
