"""Data models for htmlpdf."""

from htmlpdf.models.job import ExportJob, JobResult
from htmlpdf.models.options import (
    DEFAULT_OPTIONS,
    DEFAULT_OUTPUT,
    ExportOptions,
    NavigationOptions,
    PdfMargin,
    PdfOptions,
)

__all__ = [
    "DEFAULT_OPTIONS",
    "DEFAULT_OUTPUT",
    "ExportJob",
    "ExportOptions",
    "JobResult",
    "NavigationOptions",
    "PdfMargin",
    "PdfOptions",
]
