"""Page operations implemented over a CDP connection."""

import asyncio
import base64
import json
from typing import Any

from htmlpdf.browser.cdp import CDPClient, CDPError
from htmlpdf.errors import NavigationError, NavigationTimeoutError, SelectorTimeoutError
from htmlpdf.utils.logging import get_logger

logger = get_logger(__name__)

# wait_until name -> Chrome lifecycle event that signals it
LIFECYCLE_EVENTS = {
    "load": "load",
    "domcontentloaded": "DOMContentLoaded",
    "networkidle0": "networkIdle",
    "networkidle2": "networkAlmostIdle",
}

# wait_until name -> in-flight requests tolerated while idle
IDLE_CONNECTIONS = {
    "networkidle0": 0,
    "networkidle2": 2,
}

NETWORK_IDLE_SECONDS = 0.5
POLL_INTERVAL_SECONDS = 0.1


def _lifecycle_event(wait_until: str) -> str:
    try:
        return LIFECYCLE_EVENTS[wait_until]
    except KeyError:
        raise ValueError(f"Unknown wait_until value: {wait_until}") from None


def _timeout_seconds(timeout_ms: int) -> float | None:
    # 0 disables the timeout
    return timeout_ms / 1000 if timeout_ms else None


class ChromePage:
    """A Chrome tab driven through DevTools."""

    def __init__(self, client: CDPClient) -> None:
        self.client = client
        self._frame_id: str | None = None
        self._inflight: set[str] = set()

    async def enable(self) -> None:
        """Enable the domains the page relies on and record the main frame."""
        self.client.on("Network.requestWillBeSent", self._on_request_started)
        self.client.on("Network.loadingFinished", self._on_request_done)
        self.client.on("Network.loadingFailed", self._on_request_done)

        await self.client.send("Page.enable")
        await self.client.send("Page.setLifecycleEventsEnabled", {"enabled": True})
        await self.client.send("Network.enable")

        tree = await self.client.send("Page.getFrameTree")
        self._frame_id = tree["frameTree"]["frame"]["id"]

    def _on_request_started(self, params: dict[str, Any]) -> None:
        self._inflight.add(params["requestId"])

    def _on_request_done(self, params: dict[str, Any]) -> None:
        self._inflight.discard(params["requestId"])

    async def set_viewport(self, width: int, height: int, device_scale_factor: float) -> None:
        await self.client.send(
            "Emulation.setDeviceMetricsOverride",
            {
                "width": width,
                "height": height,
                "deviceScaleFactor": device_scale_factor,
                "mobile": False,
            },
        )

    async def goto(self, url: str, *, wait_until: str, timeout_ms: int) -> None:
        """
        Navigate the main frame and wait for the matching lifecycle event.

        Args:
            url: http(s) or file URL
            wait_until: load, domcontentloaded, networkidle0 or networkidle2
            timeout_ms: Overall bound for navigation and settling
        """
        event_name = _lifecycle_event(wait_until)
        events: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        listener = events.put_nowait
        self.client.on("Page.lifecycleEvent", listener)

        logger.info("Navigating to URL", url=url, wait_until=wait_until)

        try:
            async with asyncio.timeout(_timeout_seconds(timeout_ms)):
                result = await self.client.send("Page.navigate", {"url": url}, bounded=False)
                if error_text := result.get("errorText"):
                    raise NavigationError(f"Navigation to {url} failed: {error_text}")

                loader_id = result.get("loaderId")
                if loader_id is None:
                    # Same-document navigation, nothing new to load
                    return

                while True:
                    params = await events.get()
                    if (
                        params.get("frameId") == self._frame_id
                        and params.get("loaderId") == loader_id
                        and params.get("name") == event_name
                    ):
                        break
        except TimeoutError as e:
            raise NavigationTimeoutError(
                f"Navigation timeout of {timeout_ms} ms exceeded: {url}"
            ) from e
        finally:
            self.client.off("Page.lifecycleEvent", listener)

        logger.debug("Page loaded", url=url)

    async def set_content(self, html: str, *, wait_until: str, timeout_ms: int) -> None:
        """Replace the main frame's document with ``html`` and wait for it to settle."""
        _lifecycle_event(wait_until)

        try:
            async with asyncio.timeout(_timeout_seconds(timeout_ms)):
                await self.client.send(
                    "Page.setDocumentContent",
                    {"frameId": self._frame_id, "html": html},
                    bounded=False,
                )
                await self._wait_for_ready_state(
                    ("interactive", "complete") if wait_until == "domcontentloaded" else ("complete",)
                )
                if wait_until in IDLE_CONNECTIONS:
                    await self._wait_for_network_idle(IDLE_CONNECTIONS[wait_until])
        except TimeoutError as e:
            raise NavigationTimeoutError(
                f"Timeout of {timeout_ms} ms exceeded while setting page content"
            ) from e

        logger.debug("Content set", length=len(html))

    async def _wait_for_ready_state(self, states: tuple[str, ...]) -> None:
        while await self.evaluate("document.readyState") not in states:
            await asyncio.sleep(POLL_INTERVAL_SECONDS)

    async def _wait_for_network_idle(self, max_inflight: int) -> None:
        loop = asyncio.get_running_loop()
        idle_since: float | None = None

        while True:
            now = loop.time()
            if len(self._inflight) <= max_inflight:
                if idle_since is None:
                    idle_since = now
                if now - idle_since >= NETWORK_IDLE_SECONDS:
                    return
            else:
                idle_since = None
            await asyncio.sleep(POLL_INTERVAL_SECONDS / 2)

    async def evaluate(self, expression: str, *, await_promise: bool = False) -> Any:
        """Evaluate a JavaScript expression and return its value."""
        result = await self.client.send(
            "Runtime.evaluate",
            {
                "expression": expression,
                "awaitPromise": await_promise,
                "returnByValue": True,
            },
        )
        if details := result.get("exceptionDetails"):
            exception = details.get("exception", {})
            raise CDPError(exception.get("description") or details.get("text", "Evaluation failed"))
        return result.get("result", {}).get("value")

    async def wait_for_selector(self, selector: str, *, timeout_ms: int) -> None:
        """Poll until an element matching ``selector`` is in the DOM."""
        expression = f"document.querySelector({json.dumps(selector)}) !== null"

        try:
            async with asyncio.timeout(_timeout_seconds(timeout_ms)):
                while not await self.evaluate(expression):
                    await asyncio.sleep(POLL_INTERVAL_SECONDS)
        except TimeoutError as e:
            raise SelectorTimeoutError(
                f"Waiting for selector {selector!r} failed: {timeout_ms} ms exceeded"
            ) from e

    async def print_to_pdf(self, params: dict[str, Any]) -> bytes:
        """Print the page and return the PDF bytes."""
        result = await self.client.send("Page.printToPDF", params)
        return base64.b64decode(result.get("data", ""))

    async def close(self) -> None:
        # The tab goes away with the browser process
        await self.client.disconnect()
