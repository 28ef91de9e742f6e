"""
DH Lotto — Shared pytest Fixtures & Configuration

Provides Playwright doubles for all test modules:
- make_locator: Locator with async actions and a configurable visibility
- make_target: Page / FrameLocator whose locator() calls are recorded per selector
- test_settings: Settings isolated from the host environment (CI flags, .env)
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from dhlotto.config import Settings

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

pytest_plugins = ("pytest_asyncio",)


# ---------------------------------------------------------------------------
# Playwright doubles
# ---------------------------------------------------------------------------


def make_locator(
    text: str | None = "",
    visible: bool = True,
    texts: list[str] | None = None,
    missing: bool = False,
) -> MagicMock:
    """
    Locator double.

    Args:
        text: Value returned by text_content().
        visible: When False, wait_for() raises a Playwright timeout.
        texts: Value returned by all_text_contents().
        missing: When True, text_content() raises a Playwright timeout, as it
            does for an element that is not in the DOM.
    """
    locator = MagicMock()
    locator.click = AsyncMock()
    locator.fill = AsyncMock()
    locator.hover = AsyncMock()
    locator.select_option = AsyncMock()
    if missing:
        locator.text_content = AsyncMock(side_effect=PlaywrightTimeoutError("Timeout 1000ms exceeded."))
    else:
        locator.text_content = AsyncMock(return_value=text)
    locator.all = AsyncMock(return_value=[])
    locator.all_text_contents = AsyncMock(return_value=texts or [])
    if visible:
        locator.wait_for = AsyncMock()
    else:
        locator.wait_for = AsyncMock(side_effect=PlaywrightTimeoutError("Timeout 2000ms exceeded."))
    locator.first = locator
    locator.locator = MagicMock(side_effect=lambda *args, **kwargs: make_locator())
    locator.get_by_role = MagicMock(side_effect=lambda *args, **kwargs: make_locator())
    return locator


def make_target(url: str = "about:blank", locators: dict[str, Any] | None = None) -> MagicMock:
    """
    Page or FrameLocator double.

    locator(selector) returns the locator registered for that selector,
    creating a default visible one on first use. The registry is exposed
    as `.locators` for assertions.
    """
    target = MagicMock()
    target.url = url
    registry: dict[str, Any] = dict(locators or {})

    def _locator(selector: str) -> Any:
        if selector not in registry:
            registry[selector] = make_locator()
        return registry[selector]

    target.locators = registry
    target.locator = MagicMock(side_effect=_locator)
    target.get_by_role = MagicMock(side_effect=lambda *args, **kwargs: make_locator())
    target.get_by_text = MagicMock(side_effect=lambda *args, **kwargs: make_locator())
    for name in (
        "goto",
        "wait_for_timeout",
        "wait_for_selector",
        "wait_for_load_state",
        "bring_to_front",
        "close",
        "screenshot",
    ):
        setattr(target, name, AsyncMock())
    return target


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings with credentials set, CI off, and no real waits."""
    return Settings(
        DHLOTTERY_ID="lotto-user",
        DHLOTTERY_PASSWORD="s3cret!",
        CI="",
        GITHUB_ACTIONS="",
        SCREENSHOT_DIR=str(tmp_path),
        POPUP_OPEN_DELAY_MS=0,
        POPUP_CLOSE_DELAY_MS=0,
    )


@pytest.fixture
def ci_settings(test_settings: Settings) -> Settings:
    """Same as test_settings but running under CI."""
    return test_settings.model_copy(update={"CI": "true"})
