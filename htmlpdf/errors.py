"""Error taxonomy for the export pipeline."""


class ExportError(Exception):
    """Base class for failures of a single export."""


class EngineLaunchError(ExportError):
    """The browser could not be started or a page could not be opened."""


class NavigationError(ExportError):
    """Content failed to load."""


class NavigationTimeoutError(NavigationError):
    """Content did not settle within the navigation timeout."""


class SelectorTimeoutError(ExportError):
    """The readiness selector never appeared in the DOM."""


class PdfGenerationError(ExportError):
    """The browser rejected the print options or the PDF could not be written."""
