"""DH Lotto — Browser layer: session, popup suppression, page discovery, diagnostics."""

from dhlotto.browser.diagnostics import capture_failure_diagnostics
from dhlotto.browser.pages import find_target_page, probe_optional, wait_for_target_page
from dhlotto.browser.popups import PopupSuppressor, is_ad_url
from dhlotto.browser.session import BrowserSession, open_browser_session

__all__ = [
    "BrowserSession",
    "PopupSuppressor",
    "capture_failure_diagnostics",
    "find_target_page",
    "is_ad_url",
    "open_browser_session",
    "probe_optional",
    "wait_for_target_page",
]
