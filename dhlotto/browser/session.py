"""
DH Lotto — Browser Session

Launches Chromium with the fixed launch flags, creates the single browsing
context, arms the popup suppressor, and guarantees the context and browser
are closed on every exit path.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator

import structlog
from playwright.async_api import async_playwright

from dhlotto.browser.popups import PopupSuppressor
from dhlotto.config import Settings, settings

logger = structlog.get_logger(__name__)


@dataclass
class BrowserSession:
    """One browser owning one context and its first page."""
    browser: Any
    context: Any
    page: Any


async def _abort_route(route: Any) -> None:
    await route.abort()


async def _close_quietly(target: Any, name: str) -> None:
    """Close a context or browser, logging instead of raising."""
    try:
        await target.close()
        logger.info("browser_closed", target=name, source="session")
    except Exception as e:
        logger.error("browser_close_failed", target=name, error=str(e), source="session")


@asynccontextmanager
async def open_browser_session(config: Settings | None = None) -> AsyncIterator[BrowserSession]:
    """
    Open a browser session for the purchase sequence.

    Usage:
        async with open_browser_session() as session:
            await session.page.goto(...)

    Headless mode follows CI detection. The context and browser are closed
    exactly once whether the block returns, exits early, or raises.
    """
    config = config or settings

    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=config.is_ci,
            args=list(config.BROWSER_ARGS),
        )
        logger.info("browser_launched", headless=config.is_ci, source="session")

        context = None
        try:
            context = await browser.new_context(
                bypass_csp=True,
                java_script_enabled=True,
            )
            PopupSuppressor(
                patterns=config.AD_URL_PATTERNS,
                open_delay_ms=config.POPUP_OPEN_DELAY_MS,
                close_delay_ms=config.POPUP_CLOSE_DELAY_MS,
            ).attach(context)

            page = await context.new_page()

            # images are not needed to drive the purchase flow
            await context.route(config.BLOCKED_RESOURCE_PATTERN, _abort_route)

            yield BrowserSession(browser=browser, context=context, page=page)
        finally:
            if context is not None:
                await _close_quietly(context, "context")
            await _close_quietly(browser, "browser")
