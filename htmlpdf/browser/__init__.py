"""Browser management module."""

from htmlpdf.browser.cdp import CDPClient, CDPError
from htmlpdf.browser.chrome import ChromeBrowser, ChromeEngine, ChromeLauncher, ChromeProcess
from htmlpdf.browser.page import ChromePage
from htmlpdf.browser.session import RenderSession

__all__ = [
    "CDPClient",
    "CDPError",
    "ChromeBrowser",
    "ChromeEngine",
    "ChromeLauncher",
    "ChromePage",
    "ChromeProcess",
    "RenderSession",
]
