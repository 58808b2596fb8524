"""Command line front-end: ``htmlpdf <source> [output.pdf] [options]``."""

import asyncio
import re
import sys
from dataclasses import dataclass

from htmlpdf import __version__
from htmlpdf.export import export_to_pdf
from htmlpdf.models import DEFAULT_OUTPUT, ExportOptions, PdfMargin, PdfOptions
from htmlpdf.utils.logging import setup_logging

# Leading integer, as in "500" or "500ms"
_LEADING_INT_RE = re.compile(r"^\s*[+-]?\d+")

USAGE = f"""\
HTML to PDF Exporter v{__version__}
Pixel-perfect rendering with headless Chrome

Usage:
  htmlpdf <source> [output.pdf] [options]

Examples:
  htmlpdf http://localhost:3000/resume resume.pdf
  htmlpdf ./index.html output.pdf
  htmlpdf https://example.com page.pdf

Options:
  --delay=<ms>       Wait for animations (default: 0)
  --wait=<selector>  Wait for CSS selector before export
  --format=<size>    Page format: A4, Letter, Legal, etc.
  --landscape        Use landscape orientation
  --no-margin        Remove all margins

For programmatic usage:
  from htmlpdf import export_to_pdf
  await export_to_pdf("http://localhost:3000", "output.pdf")
"""


class UsageError(ValueError):
    """Invalid command line flag value."""


@dataclass
class CliArgs:
    source: str
    output: str
    options: ExportOptions


def parse_args(argv: list[str]) -> CliArgs:
    """
    Parse ``<source> [output.pdf] [flags...]``.

    The first argument is always the source. Any later argument ending in ``.pdf``
    is the output path. Unknown flags are ignored.
    """
    source, *rest = argv
    output = DEFAULT_OUTPUT
    delay_ms: int | None = None
    wait_for_selector: str | None = None
    pdf: dict[str, object] = {}

    for arg in rest:
        if arg.startswith("--delay="):
            value = arg.partition("=")[2]
            match = _LEADING_INT_RE.match(value)
            if match is None:
                raise UsageError(f"--delay expects an integer number of ms, got {value!r}")
            delay_ms = int(match.group(0))
            if delay_ms < 0:
                raise UsageError(f"--delay must not be negative, got {delay_ms}")
        elif arg.startswith("--wait="):
            wait_for_selector = arg.partition("=")[2]
        elif arg.startswith("--format="):
            pdf["format"] = arg.partition("=")[2]
        elif arg == "--landscape":
            pdf["landscape"] = True
        elif arg == "--no-margin":
            pdf["margin"] = PdfMargin(top=0, bottom=0, left=0, right=0)
        elif arg.endswith(".pdf"):
            output = arg

    return CliArgs(
        source=source,
        output=output,
        options=ExportOptions(
            delay_ms=delay_ms,
            wait_for_selector=wait_for_selector,
            pdf=PdfOptions(**pdf),
        ),
    )


def main(argv: list[str] | None = None) -> int:
    """Run the exporter and return the process exit code."""
    args = sys.argv[1:] if argv is None else argv

    if not args:
        print(USAGE)
        return 0

    setup_logging()

    try:
        parsed = parse_args(args)
        path = asyncio.run(export_to_pdf(parsed.source, parsed.output, parsed.options))
    except Exception as e:
        print(f"Error exporting PDF: {e}", file=sys.stderr)
        return 1

    print(f"PDF exported successfully: {path}")
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
