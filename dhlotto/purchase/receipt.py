"""
DH Lotto — Receipt Reader

Reads the receipt overlay inside the purchase iframe once it is visible.
A field the overlay lacks reads as an empty string; the purchase has
already gone through by this point, so nothing here is fatal.
"""

from __future__ import annotations

from typing import Any

import structlog
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from dhlotto.purchase import PurchaseReceipt, ReceiptGame
from dhlotto.purchase import selectors

logger = structlog.get_logger(__name__)

DEFAULT_FIELD_TIMEOUT_MS = 1000


async def _text(locator: Any, timeout_ms: int, field: str) -> str:
    try:
        return (await locator.text_content(timeout=timeout_ms)) or ""
    except PlaywrightTimeoutError:
        logger.warning("receipt_field_missing", field=field, timeout_ms=timeout_ms, source="receipt")
        return ""


async def read_receipt(frame: Any, field_timeout_ms: int = DEFAULT_FIELD_TIMEOUT_MS) -> PurchaseReceipt:
    """
    Scrape round, issue date, amount and every purchased line.

    Args:
        frame: Playwright FrameLocator rooted at the purchase iframe.
        field_timeout_ms: Bound on each text read. A timeout means the
            field is absent.

    Returns:
        PurchaseReceipt with empty strings for any field the overlay lacks.
    """
    receipt = PurchaseReceipt(
        round=(await _text(frame.locator(selectors.RECEIPT_ROUND), field_timeout_ms, "round")).strip(),
        issue_date=(await _text(frame.locator(selectors.RECEIPT_ISSUE_DATE), field_timeout_ms, "issue_date")).strip(),
        amount=(await _text(frame.locator(selectors.RECEIPT_AMOUNT), field_timeout_ms, "amount")).strip(),
    )

    for row in await frame.locator(selectors.RECEIPT_ROWS).all():
        label = await _text(row.locator(selectors.RECEIPT_ROW_LABEL).first, field_timeout_ms, "label")
        numbers = await row.locator(selectors.RECEIPT_ROW_NUMBERS).all_text_contents()
        receipt.games.append(ReceiptGame(label=label, numbers=[n.strip() for n in numbers]))

    logger.info(
        "receipt_read",
        round=receipt.round,
        issue_date=receipt.issue_date,
        amount=receipt.amount,
        game_count=len(receipt.games),
        source="receipt",
    )
    for game in receipt.games:
        logger.info("receipt_game", label=game.label, numbers=", ".join(game.numbers), source="receipt")

    return receipt
