"""Tests for the render session lifecycle."""

import asyncio

import pytest

from htmlpdf.browser.session import CHROME_FLAGS, RenderSession
from htmlpdf.config import Settings
from htmlpdf.errors import (
    EngineLaunchError,
    NavigationError,
    NavigationTimeoutError,
    SelectorTimeoutError,
)
from htmlpdf.export.source import classify_source
from htmlpdf.models import NavigationOptions


async def test_acquire_launches_with_flags_and_viewport(engine) -> None:
    """Test browser flags and the fixed viewport."""
    async with RenderSession(engine, Settings()) as session:
        assert session.page is engine.page

    assert engine.launch_args == [CHROME_FLAGS]
    assert "--no-sandbox" in CHROME_FLAGS
    assert "--font-render-hinting=none" in CHROME_FLAGS
    assert engine.page.calls_named("set_viewport") == [(1920, 1080, 2)]


async def test_release_on_exit(engine) -> None:
    """Test that leaving the context closes page and browser once."""
    async with RenderSession(engine) as session:
        pass

    assert engine.acquire_count == 1
    assert engine.release_count == 1
    assert engine.page.closed
    assert session.page is None
    assert session.browser is None


async def test_release_is_idempotent(engine) -> None:
    """Test that calling release twice closes the browser once."""
    session = RenderSession(engine)
    await session.acquire()

    await session.release()
    await session.release()

    assert engine.release_count == 1


async def test_launch_failure(engine) -> None:
    """Test that a failed launch raises EngineLaunchError."""
    engine.fail_launch = True

    with pytest.raises(EngineLaunchError, match="exited with code 127"):
        async with RenderSession(engine):
            pass

    assert engine.release_count == 0


async def test_partial_acquire_releases_browser(engine) -> None:
    """Test that a page failure after launch still closes the browser."""
    engine.fail_new_page = True

    with pytest.raises(EngineLaunchError):
        await RenderSession(engine).acquire()

    assert engine.acquire_count == 1
    assert engine.release_count == 1


async def test_cancel_during_acquire_releases_browser(engine) -> None:
    """Test that cancellation while acquiring still closes the browser."""
    engine.cancel_viewport = True

    with pytest.raises(asyncio.CancelledError):
        await RenderSession(engine).acquire()

    assert engine.acquire_count == engine.release_count == 1
    assert engine.page.closed


async def test_load_url_navigates(engine) -> None:
    """Test that URLs are navigated to with the navigation settings."""
    async with RenderSession(engine) as session:
        await session.load(
            classify_source("https://example.com"),
            NavigationOptions(wait_until="networkidle0", timeout_ms=30000),
        )

    assert engine.page.calls_named("goto") == [
        {"url": "https://example.com", "wait_until": "networkidle0", "timeout_ms": 30000}
    ]
    assert engine.page.calls_named("set_content") == []


async def test_load_inline_sets_content(engine) -> None:
    """Test that inline HTML is set as the document."""
    async with RenderSession(engine) as session:
        await session.load(
            classify_source("<p>hi</p>"),
            NavigationOptions(wait_until="load", timeout_ms=1000),
        )

    assert engine.page.calls_named("set_content") == [
        {"html": "<p>hi</p>", "wait_until": "load", "timeout_ms": 1000}
    ]
    assert engine.page.calls_named("goto") == []


async def test_load_timeout_propagates(engine) -> None:
    """Test that navigation timeouts keep their type."""
    engine.fail_load = True

    with pytest.raises(NavigationTimeoutError):
        async with RenderSession(engine) as session:
            await session.load(classify_source("https://example.com"), NavigationOptions())

    assert engine.release_count == engine.acquire_count == 1


async def test_load_other_failure_is_navigation_error(engine) -> None:
    """Test that unexpected load failures become NavigationError."""

    async def broken_goto(url: str, *, wait_until: str, timeout_ms: int) -> None:
        raise RuntimeError("net::ERR_NAME_NOT_RESOLVED")

    async with RenderSession(engine) as session:
        engine.page.goto = broken_goto
        with pytest.raises(NavigationError, match="ERR_NAME_NOT_RESOLVED"):
            await session.load(classify_source("https://nope.invalid"), NavigationOptions())


async def test_selector_timeout(engine) -> None:
    """Test that a missing selector raises SelectorTimeoutError."""
    engine.missing_selector = True

    async with RenderSession(engine) as session:
        with pytest.raises(SelectorTimeoutError, match="#never"):
            await session.await_selector("#never")

    assert engine.page.calls_named("wait_for_selector") == [
        {"selector": "#never", "timeout_ms": 10000}
    ]


async def test_fonts_ready_evaluates_font_promise(engine) -> None:
    """Test the font readiness wait."""
    async with RenderSession(engine) as session:
        await session.await_fonts_ready()

    assert engine.page.calls_named("evaluate") == ["document.fonts.ready.then(() => true)"]


async def test_using_page_before_acquire_fails(engine) -> None:
    """Test that page operations require an acquired session."""
    session = RenderSession(engine)

    with pytest.raises(RuntimeError, match="not been acquired"):
        await session.await_fonts_ready()
