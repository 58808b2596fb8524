"""Shared fixtures: a recording stand-in for the browser engine."""

import asyncio
from typing import Any

import pytest

from htmlpdf.errors import NavigationTimeoutError


class FakePage:
    """Page double that records every call made by the render session."""

    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine
        self.calls: list[tuple[str, Any]] = []
        self.closed = False

    async def set_viewport(self, width: int, height: int, device_scale_factor: float) -> None:
        self.calls.append(("set_viewport", (width, height, device_scale_factor)))
        if self.engine.cancel_viewport:
            raise asyncio.CancelledError()

    async def goto(self, url: str, *, wait_until: str, timeout_ms: int) -> None:
        self.calls.append(("goto", {"url": url, "wait_until": wait_until, "timeout_ms": timeout_ms}))
        if self.engine.fail_load:
            raise NavigationTimeoutError(f"Navigation timeout of {timeout_ms} ms exceeded: {url}")

    async def set_content(self, html: str, *, wait_until: str, timeout_ms: int) -> None:
        self.calls.append(
            ("set_content", {"html": html, "wait_until": wait_until, "timeout_ms": timeout_ms})
        )
        if self.engine.fail_load:
            raise NavigationTimeoutError("Timeout while setting page content")

    async def evaluate(self, expression: str, *, await_promise: bool = False) -> Any:
        self.calls.append(("evaluate", expression))
        return True

    async def wait_for_selector(self, selector: str, *, timeout_ms: int) -> None:
        self.calls.append(("wait_for_selector", {"selector": selector, "timeout_ms": timeout_ms}))
        if self.engine.missing_selector:
            raise TimeoutError()

    async def print_to_pdf(self, params: dict[str, Any]) -> bytes:
        self.calls.append(("print_to_pdf", params))
        if self.engine.fail_print:
            raise RuntimeError("Printing failed")
        return b"%PDF-1.4 fake"

    async def close(self) -> None:
        self.closed = True

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def calls_named(self, name: str) -> list[Any]:
        return [args for call, args in self.calls if call == name]


class FakeBrowser:
    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine

    async def new_page(self) -> FakePage:
        if self.engine.fail_new_page:
            raise RuntimeError("Target crashed")
        page = FakePage(self.engine)
        self.engine.pages.append(page)
        return page

    async def close(self) -> None:
        self.engine.release_count += 1


class FakeEngine:
    """Engine double counting launches and closes."""

    def __init__(self) -> None:
        self.launch_args: list[list[str]] = []
        self.pages: list[FakePage] = []
        self.acquire_count = 0
        self.release_count = 0
        self.fail_launch = False
        self.fail_new_page = False
        self.fail_load = False
        self.fail_print = False
        self.missing_selector = False
        self.cancel_viewport = False

    async def launch(self, args: list[str]) -> FakeBrowser:
        self.launch_args.append(args)
        if self.fail_launch:
            raise RuntimeError("Chrome exited with code 127")
        self.acquire_count += 1
        return FakeBrowser(self)

    @property
    def page(self) -> FakePage:
        return self.pages[-1]


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()
