"""
DH Lotto — Page Discovery & Optional Probes

Helpers shared by the purchase stages:
- probe_optional: bounded visibility check where a timeout means "absent"
- find_target_page: scan open pages for one matching a URL pattern
- wait_for_target_page: race the "page" event against a timeout, then scan
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Sequence

import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from dhlotto.errors import PurchasePageNotFoundError

logger = structlog.get_logger(__name__)


def _matches(url: str, patterns: Sequence[str]) -> bool:
    return any(pattern in url for pattern in patterns)


async def probe_optional(locator: Any, timeout_ms: int, name: str) -> bool:
    """
    Check whether an optional overlay is visible within timeout_ms.

    Args:
        locator: Playwright Locator for the overlay.
        timeout_ms: Bound on the wait. A timeout means the overlay is absent.
        name: Label used in log events.

    Returns:
        True if the element became visible, False otherwise. Never raises
        for Playwright failures.
    """
    try:
        await locator.wait_for(state="visible", timeout=timeout_ms)
    except PlaywrightTimeoutError:
        logger.info("optional_element_absent", element=name, timeout_ms=timeout_ms, source="pages")
        return False
    except PlaywrightError as e:
        logger.warning("optional_element_probe_failed", element=name, error=str(e), source="pages")
        return False

    logger.info("optional_element_present", element=name, source="pages")
    return True


async def find_target_page(pages: Sequence[Any], patterns: Sequence[str]) -> Any | None:
    """
    Return the first open page whose URL contains any of the patterns.

    The matching page is brought to the foreground before it is returned.

    Args:
        pages: Currently open Playwright pages (e.g. context.pages).
        patterns: URL substrings identifying the target page.

    Returns:
        The matching Page, or None if no page matches.
    """
    for page in pages:
        url = page.url
        if _matches(url, patterns):
            logger.info("target_page_found", url=url, source="pages")
            await page.bring_to_front()
            return page
    return None


async def wait_for_target_page(
    context: Any,
    trigger: Callable[[], Awaitable[Any]],
    patterns: Sequence[str],
    timeout_ms: int,
) -> Any:
    """
    Run trigger and return the page it opens.

    The "page" event waiter is armed before the trigger runs. If it times
    out, the open pages are scanned instead, covering a tab that opened
    before the waiter was armed or whose URL resolved after the event.

    Raises:
        PurchasePageNotFoundError: neither the event nor the scan found a page.
    """
    waiter = asyncio.ensure_future(
        context.wait_for_event(
            "page",
            predicate=lambda page: _matches(page.url, patterns),
            timeout=timeout_ms,
        )
    )

    try:
        await trigger()
    except BaseException:
        waiter.cancel()
        raise

    try:
        new_page = await waiter
        logger.info("target_page_opened", url=new_page.url, source="pages")
        return new_page
    except PlaywrightTimeoutError:
        logger.info("target_page_event_timeout", timeout_ms=timeout_ms, source="pages")

    page = await find_target_page(context.pages, patterns)
    if page is None:
        raise PurchasePageNotFoundError(list(patterns))
    return page
