"""Interfaces the render session expects from a browser engine."""

from typing import Any, Protocol


class Page(Protocol):
    """A single tab that can load content and print it."""

    async def set_viewport(self, width: int, height: int, device_scale_factor: float) -> None: ...

    async def goto(self, url: str, *, wait_until: str, timeout_ms: int) -> None: ...

    async def set_content(self, html: str, *, wait_until: str, timeout_ms: int) -> None: ...

    async def evaluate(self, expression: str, *, await_promise: bool = False) -> Any: ...

    async def wait_for_selector(self, selector: str, *, timeout_ms: int) -> None: ...

    async def print_to_pdf(self, params: dict[str, Any]) -> bytes: ...

    async def close(self) -> None: ...


class Browser(Protocol):
    """A running browser instance."""

    async def new_page(self) -> Page: ...

    async def close(self) -> None: ...


class Engine(Protocol):
    """Something that can start browser instances."""

    async def launch(self, args: list[str]) -> Browser: ...
