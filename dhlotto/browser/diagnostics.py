"""
DH Lotto — Failure Diagnostics

Captures what the browser looked like when the purchase sequence failed:
one full-page screenshot per open page (CI only), the list of open URLs,
and the error detail. Diagnostics never raise over the original failure.
"""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


def screenshot_path(directory: str | Path, index: int) -> Path:
    """Path of the failure screenshot for the page at index."""
    return Path(directory) / f"error-screenshot-{index}.png"


async def capture_screenshots(pages: list[Any], directory: str | Path) -> list[Path]:
    """
    Save a full-page screenshot of every page, tagged by index.

    A failed screenshot is logged and skipped; the rest are still taken.

    Returns:
        Paths of the screenshots that were written.
    """
    saved: list[Path] = []
    for index, page in enumerate(pages):
        path = screenshot_path(directory, index)
        try:
            await page.screenshot(path=str(path), full_page=True)
            saved.append(path)
            logger.info("diagnostics_screenshot_saved", index=index, path=str(path), source="diagnostics")
        except Exception as e:
            logger.warning(
                "diagnostics_screenshot_failed",
                index=index,
                error=str(e),
                source="diagnostics",
            )
    return saved


async def capture_failure_diagnostics(
    context: Any,
    error: BaseException,
    *,
    ci: bool,
    screenshot_dir: str | Path = ".",
) -> None:
    """
    Log everything useful about a failed purchase sequence.

    Args:
        context: Playwright BrowserContext that owns the open pages.
        error: The failure being diagnosed. It is not re-raised here.
        ci: Capture screenshots only when running under CI.
        screenshot_dir: Directory for the screenshot files.
    """
    logger.error(
        "purchase_failed",
        error=str(error),
        error_type=type(error).__name__,
        source="diagnostics",
    )

    try:
        pages = list(context.pages)
    except Exception as e:
        logger.warning("diagnostics_pages_unavailable", error=str(e), source="diagnostics")
        pages = []

    if ci:
        await capture_screenshots(pages, screenshot_dir)

    logger.info(
        "diagnostics_open_pages",
        count=len(pages),
        urls=[page.url for page in pages],
        source="diagnostics",
    )

    if isinstance(error, Exception):
        logger.error(
            "diagnostics_error_detail",
            message=str(error),
            stack="".join(traceback.format_exception(type(error), error, error.__traceback__)),
            source="diagnostics",
        )
