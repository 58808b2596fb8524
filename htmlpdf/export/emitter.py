"""Printing the loaded page to a PDF file."""

from pathlib import Path

from htmlpdf.browser.session import RenderSession
from htmlpdf.errors import PdfGenerationError
from htmlpdf.export.paper import build_print_params
from htmlpdf.models import PdfOptions
from htmlpdf.utils.logging import get_logger

logger = get_logger(__name__)


async def emit_pdf(session: RenderSession, destination: str | Path, options: PdfOptions) -> Path:
    """
    Print the session's page with ``options`` and write the PDF to ``destination``.

    An existing file is overwritten.

    Returns:
        Absolute path of the written file
    """
    path = Path(destination).resolve()
    logger.info("Generating PDF", output=str(path), format=options.format)

    try:
        params = build_print_params(options)
        data = await session.print_pdf(params)
        path.write_bytes(data)
    except Exception as e:
        raise PdfGenerationError(f"Failed to generate PDF at {path}: {e}") from e

    logger.info("PDF exported", path=str(path), size_bytes=len(data))
    return path
