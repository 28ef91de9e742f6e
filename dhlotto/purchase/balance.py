"""
DH Lotto — Deposit Balance

Parses the balance shown in the header after login and enforces the
minimum needed to buy.
"""

from __future__ import annotations

import re

from dhlotto.errors import InsufficientBalanceError

_NON_DIGIT = re.compile(r"\D")


def parse_balance(text: str | None) -> int:
    """
    Parse a displayed amount like '15,000원' into an integer.

    All non-digit characters are stripped. Empty or digit-less text
    yields 0 rather than an error.
    """
    if not text:
        return 0
    digits = _NON_DIGIT.sub("", text)
    if not digits:
        return 0
    return int(digits, 10)


def check_balance(amount: int, minimum: int) -> None:
    """Raise InsufficientBalanceError when amount < minimum (the minimum itself passes)."""
    if amount < minimum:
        raise InsufficientBalanceError(amount=amount, minimum=minimum)
