"""
DH Lotto — Popup Suppressor

Closes advertising tabs that the site opens on its own. Runs from the
context's "page" event, concurrently with the purchase sequence, so it must
never raise and must only touch pages whose URL matches an ad pattern.
"""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import structlog
from playwright.async_api import Error as PlaywrightError

from dhlotto.config import settings

logger = structlog.get_logger(__name__)


def is_ad_url(url: str, patterns: Sequence[str]) -> bool:
    """Case-insensitive substring match of url against the ad patterns."""
    lowered = url.lower()
    return any(pattern.lower() in lowered for pattern in patterns)


class PopupSuppressor:
    """
    Auto-closes ad popups opened in a browser context.

    Usage:
        suppressor = PopupSuppressor()
        suppressor.attach(context)
    """

    def __init__(
        self,
        patterns: Sequence[str] | None = None,
        open_delay_ms: int | None = None,
        close_delay_ms: int | None = None,
    ) -> None:
        self.patterns = list(patterns if patterns is not None else settings.AD_URL_PATTERNS)
        self._open_delay = (open_delay_ms if open_delay_ms is not None else settings.POPUP_OPEN_DELAY_MS) / 1000
        self._close_delay = (close_delay_ms if close_delay_ms is not None else settings.POPUP_CLOSE_DELAY_MS) / 1000

    def attach(self, context: Any) -> None:
        """Register the handler for every new page in the context."""
        context.on("page", self.handle)

    async def handle(self, page: Any) -> None:
        """Close the page if its URL resolves to an ad. Never raises."""
        try:
            # the URL is still about:blank right after the event fires
            await asyncio.sleep(self._open_delay)
            url = page.url
            logger.info("popup_detected", url=url, source="popups")

            if not is_ad_url(url, self.patterns):
                return

            logger.info("popup_ad_closing", url=url, source="popups")
            await asyncio.sleep(self._close_delay)
            try:
                await page.close()
            except PlaywrightError as e:
                logger.warning("popup_close_failed", url=url, error=str(e), source="popups")

        except Exception as e:
            logger.warning(
                "popup_handler_error",
                error=str(e),
                error_type=type(e).__name__,
                source="popups",
            )
