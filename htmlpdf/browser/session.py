"""Render session: one browser and one page for a single export."""

import asyncio
from types import TracebackType
from typing import Any

from htmlpdf.browser.chrome import ChromeEngine
from htmlpdf.browser.engine import Browser, Engine, Page
from htmlpdf.config import Settings, settings
from htmlpdf.errors import EngineLaunchError, NavigationError, SelectorTimeoutError
from htmlpdf.export.source import ClassifiedSource, SourceKind
from htmlpdf.models import NavigationOptions
from htmlpdf.utils.logging import get_logger

logger = get_logger(__name__)

# Flags for restricted environments (containers, CI) and stable glyph rendering
CHROME_FLAGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--font-render-hinting=none",
]

DEFAULT_SELECTOR_TIMEOUT_MS = 10000


class RenderSession:
    """
    Owns one browser instance and one page for the lifetime of a single export.

    Use as an async context manager so the browser is always released:

        async with RenderSession(engine) as session:
            await session.load(source, navigation)
    """

    def __init__(self, engine: Engine | None = None, config: Settings | None = None) -> None:
        self.engine = engine if engine is not None else ChromeEngine(config)
        self.config = config or settings
        self.browser: Browser | None = None
        self.page: Page | None = None

    async def __aenter__(self) -> "RenderSession":
        await self.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.release()

    async def acquire(self) -> None:
        """Launch the browser, open a page and fix the viewport."""
        try:
            self.browser = await self.engine.launch(list(CHROME_FLAGS))
            self.page = await self.browser.new_page()
            await self.page.set_viewport(
                self.config.viewport_width,
                self.config.viewport_height,
                self.config.device_scale_factor,
            )

        except Exception as e:
            await self.release()
            raise EngineLaunchError(f"Failed to start browser session: {e}") from e
        except BaseException:
            # Cancellation still has to close what was launched
            await self.release()
            raise

        logger.info(
            "Render session started",
            viewport=f"{self.config.viewport_width}x{self.config.viewport_height}",
            scale=self.config.device_scale_factor,
        )

    async def release(self) -> None:
        """Close the page and the browser. Safe to call more than once."""
        if self.page is None and self.browser is None:
            return

        if self.page is not None:
            try:
                await self.page.close()
            except Exception as e:
                logger.error("Error closing page", error=str(e))
            self.page = None

        if self.browser is not None:
            try:
                await self.browser.close()
            except Exception as e:
                logger.error("Error closing browser", error=str(e))
            self.browser = None

        logger.info("Render session released")

    def _require_page(self) -> Page:
        if self.page is None:
            raise RuntimeError("Render session has not been acquired")
        return self.page

    async def load(self, source: ClassifiedSource, navigation: NavigationOptions) -> None:
        """
        Load the classified source into the page.

        URLs and local files are navigated to; inline HTML is set as the document.
        """
        page = self._require_page()
        wait_until = navigation.wait_until or "networkidle0"
        timeout_ms = navigation.timeout_ms if navigation.timeout_ms is not None else 30000

        try:
            if source.kind is SourceKind.INLINE_HTML:
                logger.info("Loading HTML content", length=len(source.value))
                await page.set_content(source.value, wait_until=wait_until, timeout_ms=timeout_ms)
            else:
                logger.info("Loading URL", kind=source.kind.value, url=source.url)
                await page.goto(source.url, wait_until=wait_until, timeout_ms=timeout_ms)

        except NavigationError:
            raise
        except Exception as e:
            raise NavigationError(f"Failed to load content: {e}") from e

    async def await_fonts_ready(self) -> None:
        """Block until the document's fonts have loaded."""
        await self._require_page().evaluate(
            "document.fonts.ready.then(() => true)", await_promise=True
        )

    async def await_selector(
        self,
        selector: str,
        timeout_ms: int = DEFAULT_SELECTOR_TIMEOUT_MS,
    ) -> None:
        """Block until ``selector`` matches an element or the timeout elapses."""
        logger.info("Waiting for selector", selector=selector, timeout_ms=timeout_ms)
        try:
            await self._require_page().wait_for_selector(selector, timeout_ms=timeout_ms)
        except TimeoutError as e:
            raise SelectorTimeoutError(
                f"Waiting for selector {selector!r} failed: {timeout_ms} ms exceeded"
            ) from e

    async def await_delay(self, ms: int) -> None:
        """Sleep for a fixed time so client-side animations can settle."""
        logger.info("Waiting for animations", delay_ms=ms)
        await asyncio.sleep(ms / 1000)

    async def print_pdf(self, params: dict[str, Any]) -> bytes:
        """Print the loaded page and return the PDF bytes."""
        return await self._require_page().print_to_pdf(params)
