"""
DH Lotto — Configuration & Constants

Every URL, timeout, threshold and browser flag lives here. No hardcoded
values in the purchase flow.

Usage:
    from dhlotto.config import settings
"""

from __future__ import annotations

import sys
from typing import NamedTuple

import structlog
from pydantic_settings import BaseSettings

logger = structlog.get_logger(__name__)


class Credentials(NamedTuple):
    """Account identifier and secret, held only for the login step."""
    user_id: str
    password: str


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Central configuration for the auto-buyer.

    Loads from environment variables, falling back to a local .env file.
    """

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # -----------------------------------------------------------------------
    # Credentials (required at run time, see load_credentials)
    # -----------------------------------------------------------------------
    DHLOTTERY_ID: str = ""
    DHLOTTERY_PASSWORD: str = ""

    # -----------------------------------------------------------------------
    # CI detection: either flag equal to "true" means CI
    # -----------------------------------------------------------------------
    CI: str = ""
    GITHUB_ACTIONS: str = ""

    # -----------------------------------------------------------------------
    # Target site
    # -----------------------------------------------------------------------
    MAIN_URL: str = "https://dhlottery.co.kr/common.do?method=main"
    TARGET_PAGE_PATTERNS: list[str] = ["game645.do?method=buyLotto"]
    AD_URL_PATTERNS: list[str] = [
        "ad.dhlottery.co.kr",
        "popup",
        "banner",
        "event",
        "notice",
        "popupOne",
    ]
    SALE_CLOSED_MESSAGE: str = "현재 시간은 판매시간이 아닙니다"

    # -----------------------------------------------------------------------
    # Purchase policy
    # -----------------------------------------------------------------------
    MINIMUM_BALANCE: int = 5000     # KRW, inclusive
    AUTO_GAME_COUNT: int = 5

    # -----------------------------------------------------------------------
    # Browser
    # -----------------------------------------------------------------------
    BROWSER_ARGS: list[str] = [
        "--disable-popup-blocking",
        "--disable-blink-features=AutomationControlled",
        "--no-sandbox",                 # required on CI runners
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
    ]
    BLOCKED_RESOURCE_PATTERN: str = "**.jpg"

    # -----------------------------------------------------------------------
    # Timeouts (milliseconds)
    # -----------------------------------------------------------------------
    GOTO_TIMEOUT_MS: int = 30000
    MAIN_PAGE_SETTLE_MS: int = 2000         # site popups open and close
    LOGIN_LINK_TIMEOUT_MS: int = 10000
    LOGIN_IDLE_TIMEOUT_MS: int = 15000
    PASSWORD_NOTICE_PROBE_MS: int = 3000
    PASSWORD_NOTICE_IDLE_TIMEOUT_MS: int = 10000
    BALANCE_TIMEOUT_MS: int = 10000
    NEW_PAGE_TIMEOUT_MS: int = 10000
    IFRAME_TIMEOUT_MS: int = 10000
    IFRAME_SETTLE_MS: int = 3000
    SALE_WINDOW_PROBE_MS: int = 2000
    PURCHASE_LIMIT_PROBE_MS: int = 2000
    RECEIPT_TIMEOUT_MS: int = 10000
    RECEIPT_FIELD_TIMEOUT_MS: int = 1000    # per field; a missing field reads as ""

    # Popup suppressor delays
    POPUP_OPEN_DELAY_MS: int = 100
    POPUP_CLOSE_DELAY_MS: int = 500

    # -----------------------------------------------------------------------
    # Diagnostics & logging
    # -----------------------------------------------------------------------
    SCREENSHOT_DIR: str = "."
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @property
    def is_ci(self) -> bool:
        """True when running under CI: headless browser, screenshots on failure."""
        return self.CI == "true" or self.GITHUB_ACTIONS == "true"


# ---------------------------------------------------------------------------
# Configuration Loader
# ---------------------------------------------------------------------------

def load_credentials(config: Settings | None = None) -> Credentials:
    """
    Read the account credentials, exiting the process if either is absent.

    Only the presence of each value is logged, never the value itself.

    Args:
        config: Settings to read from. Defaults to the module singleton.

    Returns:
        Credentials with both strings exactly as configured.

    Raises:
        SystemExit: code 1 when DHLOTTERY_ID or DHLOTTERY_PASSWORD is missing.
    """
    config = config or settings
    user_id = config.DHLOTTERY_ID
    password = config.DHLOTTERY_PASSWORD

    logger.info(
        "config_credentials_checked",
        dhlottery_id_set=bool(user_id),
        dhlottery_password_set=bool(password),
        source="config",
    )

    if not user_id or not password:
        logger.error(
            "config_credentials_missing",
            required=["DHLOTTERY_ID", "DHLOTTERY_PASSWORD"],
            source="config",
        )
        print(
            "DHLOTTERY_ID and DHLOTTERY_PASSWORD must both be set "
            "(check the repository secrets on CI).",
            file=sys.stderr,
        )
        sys.exit(1)

    return Credentials(user_id=user_id, password=password)


# Singleton instance
settings = Settings()
