"""
Tests for the browser session: launch options, popup wiring, and
teardown exactly once on every exit path.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from dhlotto.browser.session import open_browser_session
from dhlotto.config import Settings


@pytest.fixture
def playwright_stack():
    """Patch async_playwright with a browser -> context -> page chain."""
    page = MagicMock()
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.route = AsyncMock()
    context.close = AsyncMock()

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)

    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=playwright)
    manager.__aexit__ = AsyncMock(return_value=False)

    with patch("dhlotto.browser.session.async_playwright", return_value=manager):
        yield playwright, browser, context, page


class TestOpenBrowserSession:
    @pytest.mark.asyncio
    async def test_yields_session(self, playwright_stack, test_settings: Settings) -> None:
        playwright, browser, context, page = playwright_stack

        async with open_browser_session(test_settings) as session:
            assert session.browser is browser
            assert session.context is context
            assert session.page is page

        playwright.chromium.launch.assert_awaited_once_with(
            headless=False,
            args=test_settings.BROWSER_ARGS,
        )
        browser.new_context.assert_awaited_once_with(bypass_csp=True, java_script_enabled=True)
        context.route.assert_awaited_once()
        assert context.route.call_args.args[0] == "**.jpg"

    @pytest.mark.asyncio
    async def test_headless_in_ci(self, playwright_stack, ci_settings: Settings) -> None:
        playwright, _, _, _ = playwright_stack

        async with open_browser_session(ci_settings):
            pass

        assert playwright.chromium.launch.call_args.kwargs["headless"] is True

    @pytest.mark.asyncio
    async def test_popup_suppressor_attached(self, playwright_stack, test_settings: Settings) -> None:
        _, _, context, _ = playwright_stack

        async with open_browser_session(test_settings):
            pass

        context.on.assert_called_once()
        assert context.on.call_args.args[0] == "page"

    @pytest.mark.asyncio
    async def test_closed_once_on_success(self, playwright_stack, test_settings: Settings) -> None:
        _, browser, context, _ = playwright_stack

        async with open_browser_session(test_settings):
            pass

        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_closed_once_on_failure(self, playwright_stack, test_settings: Settings) -> None:
        _, browser, context, _ = playwright_stack

        with pytest.raises(RuntimeError, match="stage failed"):
            async with open_browser_session(test_settings):
                raise RuntimeError("stage failed")

        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_error_does_not_mask_failure(self, playwright_stack, test_settings: Settings) -> None:
        _, browser, context, _ = playwright_stack
        context.close = AsyncMock(side_effect=RuntimeError("already closed"))

        with pytest.raises(ValueError, match="original"):
            async with open_browser_session(test_settings):
                raise ValueError("original")

        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_browser_closed_when_context_creation_fails(
        self, playwright_stack, test_settings: Settings
    ) -> None:
        _, browser, context, _ = playwright_stack
        browser.new_context = AsyncMock(side_effect=RuntimeError("no context"))

        with pytest.raises(RuntimeError, match="no context"):
            async with open_browser_session(test_settings):
                pass

        context.close.assert_not_awaited()
        browser.close.assert_awaited_once()
