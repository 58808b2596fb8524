"""Export option models and the default option set."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# A CSS length ("12mm", "1in") or a number of pixels
Length = str | int | float

WaitUntil = Literal["load", "domcontentloaded", "networkidle0", "networkidle2"]


class PdfMargin(BaseModel):
    """Page margins. Sides that are not given are zero."""

    model_config = ConfigDict(frozen=True)

    top: Length = 0
    bottom: Length = 0
    left: Length = 0
    right: Length = 0


class PdfOptions(BaseModel):
    """Print options handed to the browser. ``None`` means not supplied."""

    model_config = ConfigDict(frozen=True)

    format: str | None = Field(default=None, description="Named paper size, e.g. A4 or Letter")
    print_background: bool | None = None
    prefer_css_page_size: bool | None = None
    margin: PdfMargin | None = None
    landscape: bool | None = None
    scale: float | None = None
    display_header_footer: bool | None = None
    header_template: str | None = None
    footer_template: str | None = None
    page_ranges: str | None = None
    width: Length | None = None
    height: Length | None = None


class NavigationOptions(BaseModel):
    """How long and for what to wait when loading content."""

    model_config = ConfigDict(frozen=True)

    wait_until: WaitUntil | None = None
    timeout_ms: int | None = Field(default=None, ge=0)


class ExportOptions(BaseModel):
    """Caller-facing options for one export."""

    model_config = ConfigDict(frozen=True)

    delay_ms: int | None = Field(default=None, ge=0, description="Fixed wait before printing")
    wait_for_selector: str | None = Field(
        default=None, description="CSS selector that must appear before printing"
    )
    selector_timeout_ms: int | None = Field(default=None, ge=0)
    pdf: PdfOptions = Field(default_factory=PdfOptions)
    navigation: NavigationOptions = Field(default_factory=NavigationOptions)


DEFAULT_OUTPUT = "output.pdf"

DEFAULT_OPTIONS = ExportOptions(
    delay_ms=0,
    selector_timeout_ms=10000,
    pdf=PdfOptions(
        format="A4",
        print_background=True,
        prefer_css_page_size=True,
        margin=PdfMargin(top="12mm", bottom="12mm", left="12mm", right="12mm"),
    ),
    navigation=NavigationOptions(wait_until="networkidle0", timeout_ms=30000),
)
