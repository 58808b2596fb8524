"""Export pipeline: source detection, option merging, printing and batching."""

from htmlpdf.export.source import ClassifiedSource, SourceKind, classify_source
from htmlpdf.export.options import merge_options
from htmlpdf.export.paper import build_print_params
from htmlpdf.export.emitter import emit_pdf
from htmlpdf.export.pipeline import export_multiple, export_to_pdf

__all__ = [
    "ClassifiedSource",
    "SourceKind",
    "build_print_params",
    "classify_source",
    "emit_pdf",
    "export_multiple",
    "export_to_pdf",
    "merge_options",
]
