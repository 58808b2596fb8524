"""Conversion of print options into Chrome's ``Page.printToPDF`` parameters."""

import re
from typing import Any

from htmlpdf.models import PdfMargin, PdfOptions
from htmlpdf.models.options import Length

# Paper sizes in inches (width, height)
PAPER_FORMATS: dict[str, tuple[float, float]] = {
    "letter": (8.5, 11),
    "legal": (8.5, 14),
    "tabloid": (11, 17),
    "ledger": (17, 11),
    "a0": (33.1102, 46.811),
    "a1": (23.3858, 33.1102),
    "a2": (16.5354, 23.3858),
    "a3": (11.6929, 16.5354),
    "a4": (8.2677, 11.6929),
    "a5": (5.8268, 8.2677),
    "a6": (4.1339, 5.8268),
}

# CSS pixels per unit
UNIT_TO_PIXELS = {
    "px": 1,
    "in": 96,
    "cm": 37.8,
    "mm": 3.78,
}

PIXELS_PER_INCH = 96

_LENGTH_RE = re.compile(r"^\s*(-?\d*\.?\d+(?:e[+-]?\d+)?)\s*([a-z]*)\s*$", re.IGNORECASE)


def length_to_inches(value: Length) -> float:
    """
    Convert a CSS length to inches.

    Numbers are pixels. Strings may carry a px, in, cm or mm suffix; a bare
    numeric string is pixels.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid length: {value!r}")
    if isinstance(value, int | float):
        return value / PIXELS_PER_INCH

    match = _LENGTH_RE.match(value)
    if not match:
        raise ValueError(f"Invalid length: {value!r}")

    number, unit = match.groups()
    unit = unit.lower() or "px"
    if unit not in UNIT_TO_PIXELS:
        raise ValueError(f"Unknown length unit in {value!r}")

    return float(number) * UNIT_TO_PIXELS[unit] / PIXELS_PER_INCH


def paper_size(options: PdfOptions) -> tuple[float, float]:
    """Return (width, height) in inches from ``format`` or ``width``/``height``."""
    if options.format:
        try:
            return PAPER_FORMATS[options.format.lower()]
        except KeyError:
            raise ValueError(f"Unknown paper format: {options.format}") from None

    width = length_to_inches(options.width) if options.width is not None else 8.5
    height = length_to_inches(options.height) if options.height is not None else 11
    return width, height


def build_print_params(options: PdfOptions) -> dict[str, Any]:
    """Translate ``options`` into ``Page.printToPDF`` parameters."""
    width, height = paper_size(options)
    margin = options.margin or PdfMargin()

    params: dict[str, Any] = {
        "paperWidth": width,
        "paperHeight": height,
        "marginTop": length_to_inches(margin.top),
        "marginBottom": length_to_inches(margin.bottom),
        "marginLeft": length_to_inches(margin.left),
        "marginRight": length_to_inches(margin.right),
        "landscape": bool(options.landscape),
        "printBackground": bool(options.print_background),
        "preferCSSPageSize": bool(options.prefer_css_page_size),
        "displayHeaderFooter": bool(options.display_header_footer),
        "scale": options.scale if options.scale is not None else 1,
    }

    if options.header_template is not None:
        params["headerTemplate"] = options.header_template
    if options.footer_template is not None:
        params["footerTemplate"] = options.footer_template
    if options.page_ranges:
        params["pageRanges"] = options.page_ranges

    return params
