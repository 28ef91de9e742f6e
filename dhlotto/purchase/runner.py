"""
DH Lotto — Purchase Runner

Drives the purchase sequence, one method per stage:

 1. main page load            7. sale-window check (early exit)
 2. login                     8. auto-pick selection
 3. password-change notice    9. buy + confirm
 4. balance check            10. weekly-limit check (early exit)
 5. open the purchase tab    11. receipt read
 6. locate the purchase iframe

Stages never retry. Any failure is diagnosed and re-raised; completed
stages are not undone.
"""

from __future__ import annotations

from typing import Any

import structlog
from playwright.async_api import Error as PlaywrightError

from dhlotto.browser.diagnostics import capture_failure_diagnostics
from dhlotto.browser.pages import probe_optional, wait_for_target_page
from dhlotto.browser.session import BrowserSession
from dhlotto.config import Credentials, Settings, settings
from dhlotto.purchase import PurchaseOutcome, PurchaseReceipt, PurchaseResult
from dhlotto.purchase import selectors
from dhlotto.purchase.balance import check_balance, parse_balance
from dhlotto.purchase.receipt import read_receipt

logger = structlog.get_logger(__name__)


class PurchaseRunner:
    """
    Runs one purchase sequence inside an open browser session.

    Usage:
        async with open_browser_session() as session:
            result = await PurchaseRunner(session, credentials).run()
    """

    def __init__(
        self,
        session: BrowserSession,
        credentials: Credentials,
        config: Settings | None = None,
    ) -> None:
        self.config = config or settings
        self.context = session.context
        self.page = session.page
        self._credentials: Credentials | None = credentials

    async def run(self) -> PurchaseResult:
        """
        Execute every stage in order.

        Returns:
            PurchaseResult whose outcome is COMPLETED, SALE_CLOSED or
            LIMIT_REACHED_UNVERIFIED.

        Raises:
            Whatever a stage raised, after failure diagnostics are captured.
        """
        try:
            return await self._run_stages()
        except Exception as e:
            await capture_failure_diagnostics(
                self.context,
                e,
                ci=self.config.is_ci,
                screenshot_dir=self.config.SCREENSHOT_DIR,
            )
            raise

    async def _run_stages(self) -> PurchaseResult:
        await self.open_main_page()
        await self.login()
        await self.skip_password_notice()
        balance = await self.verify_balance()

        purchase_page = await self.open_purchase_page()
        frame = await self.locate_purchase_frame(purchase_page)

        if await self.sale_window_closed(frame, purchase_page):
            return PurchaseResult(outcome=PurchaseOutcome.SALE_CLOSED, balance=balance)

        await self.select_auto_numbers(frame)
        await self.confirm_purchase(frame)

        if await self.purchase_limit_reached(frame, purchase_page):
            return PurchaseResult(outcome=PurchaseOutcome.LIMIT_REACHED_UNVERIFIED, balance=balance)

        receipt = await self.collect_receipt(frame, purchase_page)
        return PurchaseResult(outcome=PurchaseOutcome.COMPLETED, balance=balance, receipt=receipt)

    # -----------------------------------------------------------------------
    # Stages
    # -----------------------------------------------------------------------

    async def open_main_page(self) -> None:
        """Stage 1: load the main page and let the site's own popups settle."""
        logger.info("purchase_stage", stage=1, name="main_page", source="purchase_runner")
        await self.page.goto(
            self.config.MAIN_URL,
            wait_until="networkidle",
            timeout=self.config.GOTO_TIMEOUT_MS,
        )
        await self.page.wait_for_timeout(self.config.MAIN_PAGE_SETTLE_MS)

    async def login(self) -> None:
        """Stage 2: wait for the login link to render, then submit the form."""
        logger.info("purchase_stage", stage=2, name="login", source="purchase_runner")
        credentials = self._credentials
        if credentials is None:
            raise RuntimeError("login already performed for this run")

        page = self.page
        await page.wait_for_selector(selectors.LOGIN_LINK, timeout=self.config.LOGIN_LINK_TIMEOUT_MS)
        await page.get_by_role("link", name=selectors.LOGIN_LINK_NAME).click()
        await page.wait_for_load_state("domcontentloaded")

        await page.locator(selectors.USER_ID_INPUT).fill(credentials.user_id)
        await page.locator(selectors.PASSWORD_INPUT).fill(credentials.password)
        await page.get_by_role("group").get_by_role("link", name=selectors.LOGIN_LINK_NAME).click()
        self._credentials = None

        await page.wait_for_load_state("networkidle", timeout=self.config.LOGIN_IDLE_TIMEOUT_MS)

    async def skip_password_notice(self) -> bool:
        """Stage 3: click "change later" on the password-change notice if it shows."""
        logger.info("purchase_stage", stage=3, name="password_notice", source="purchase_runner")
        notice = self.page.locator(selectors.PASSWORD_NOTICE_TITLE)
        if not await probe_optional(notice, self.config.PASSWORD_NOTICE_PROBE_MS, "password_notice"):
            return False

        logger.info("password_notice_skipping", source="purchase_runner")
        try:
            await self.page.locator(selectors.PASSWORD_NOTICE_LATER).click()
            await self.page.wait_for_load_state(
                "networkidle",
                timeout=self.config.PASSWORD_NOTICE_IDLE_TIMEOUT_MS,
            )
        except PlaywrightError as e:
            logger.warning("password_notice_skip_failed", error=str(e), source="purchase_runner")
            return False
        return True

    async def verify_balance(self) -> int:
        """Stage 4: read the deposit balance and enforce the minimum."""
        logger.info("purchase_stage", stage=4, name="balance", source="purchase_runner")
        await self.page.wait_for_selector(selectors.BALANCE, timeout=self.config.BALANCE_TIMEOUT_MS)
        text = await self.page.locator(selectors.BALANCE).text_content()
        amount = parse_balance(text)

        logger.info(
            "balance_checked",
            displayed=text,
            amount=amount,
            minimum=self.config.MINIMUM_BALANCE,
            source="purchase_runner",
        )
        check_balance(amount, self.config.MINIMUM_BALANCE)
        return amount

    async def open_purchase_page(self) -> Any:
        """Stage 5: reveal the menu, click the Lotto 6/45 link, find the new tab."""
        logger.info("purchase_stage", stage=5, name="open_purchase_page", source="purchase_runner")
        # the link is rendered lazily on hover
        await self.page.get_by_text(selectors.PURCHASE_MENU_TEXT).hover()

        async def click_link() -> None:
            await self.page.locator(selectors.LOTTO645_LINK).click()

        return await wait_for_target_page(
            self.context,
            click_link,
            self.config.TARGET_PAGE_PATTERNS,
            self.config.NEW_PAGE_TIMEOUT_MS,
        )

    async def locate_purchase_frame(self, purchase_page: Any) -> Any:
        """Stage 6: focus the purchase tab and scope to its iframe."""
        logger.info("purchase_stage", stage=6, name="purchase_frame", source="purchase_runner")
        await purchase_page.bring_to_front()
        await purchase_page.wait_for_load_state("networkidle")
        await purchase_page.wait_for_selector(
            selectors.PURCHASE_IFRAME,
            timeout=self.config.IFRAME_TIMEOUT_MS,
        )
        frame = purchase_page.frame_locator(selectors.PURCHASE_IFRAME)

        # the iframe keeps rendering after it attaches
        await purchase_page.wait_for_timeout(self.config.IFRAME_SETTLE_MS)
        return frame

    async def sale_window_closed(self, frame: Any, purchase_page: Any) -> bool:
        """Stage 7: True (and the tab closed) when the site says sales are closed."""
        logger.info("purchase_stage", stage=7, name="sale_window", source="purchase_runner")
        alert = frame.locator(selectors.SALE_ALERT_MESSAGE)
        if not await probe_optional(alert, self.config.SALE_WINDOW_PROBE_MS, "sale_window_alert"):
            return False

        message = (await alert.text_content()) or ""
        if self.config.SALE_CLOSED_MESSAGE not in message:
            logger.info("sale_window_alert_ignored", message=message, source="purchase_runner")
            return False

        logger.info("sale_window_closed", message=message, source="purchase_runner")
        await frame.locator(selectors.SALE_ALERT_CONFIRM).click()
        await purchase_page.close()
        return True

    async def select_auto_numbers(self, frame: Any) -> None:
        """Stage 8: auto-pick AUTO_GAME_COUNT games."""
        logger.info(
            "purchase_stage",
            stage=8,
            name="auto_pick",
            games=self.config.AUTO_GAME_COUNT,
            source="purchase_runner",
        )
        await frame.locator(selectors.AUTO_PICK_TAB).click()
        await frame.locator(selectors.AUTO_PICK_QUANTITY).select_option(str(self.config.AUTO_GAME_COUNT))
        await frame.locator(selectors.AUTO_PICK_APPLY).click()

    async def confirm_purchase(self, frame: Any) -> None:
        """Stage 9: buy and accept the confirmation overlay."""
        logger.info("purchase_stage", stage=9, name="confirm", source="purchase_runner")
        await frame.locator(selectors.BUY_BUTTON).click()
        await frame.locator(selectors.BUY_CONFIRM).click()

    async def purchase_limit_reached(self, frame: Any, purchase_page: Any) -> bool:
        """
        Stage 10: True (and the tab closed) when the weekly-limit popup shows.

        The buy was already confirmed at this point and the site does not say
        whether it went through, so the caller reports an unverified outcome.
        """
        logger.info("purchase_stage", stage=10, name="purchase_limit", source="purchase_runner")
        popup = frame.locator(selectors.LIMIT_POPUP)
        if not await probe_optional(popup, self.config.PURCHASE_LIMIT_PROBE_MS, "purchase_limit_popup"):
            return False

        logger.warning(
            "purchase_limit_reached",
            purchase_verified=False,
            note="buy was confirmed before the limit popup; spend is unknown",
            source="purchase_runner",
        )
        await frame.locator(selectors.LIMIT_POPUP_CLOSE).click()
        await purchase_page.close()
        return True

    async def collect_receipt(self, frame: Any, purchase_page: Any) -> PurchaseReceipt:
        """Stage 11: wait for the receipt (required), read it, dismiss it."""
        logger.info("purchase_stage", stage=11, name="receipt", source="purchase_runner")
        await frame.locator(selectors.RECEIPT).wait_for(
            state="visible",
            timeout=self.config.RECEIPT_TIMEOUT_MS,
        )
        receipt = await read_receipt(frame, self.config.RECEIPT_FIELD_TIMEOUT_MS)

        await frame.locator(selectors.RECEIPT_CLOSE).click()
        await purchase_page.close()
        logger.info("purchase_completed", round=receipt.round, amount=receipt.amount, source="purchase_runner")
        return receipt
