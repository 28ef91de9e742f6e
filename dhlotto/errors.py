"""
DH Lotto — Purchase Failures

Fatal domain failures raised by the purchase sequence. Browser timeouts on
required elements surface as Playwright's own TimeoutError instead.
"""

from __future__ import annotations


class PurchaseError(Exception):
    """Base class for failures that abort the purchase sequence."""


class InsufficientBalanceError(PurchaseError):
    """Deposit balance is below the configured minimum."""

    def __init__(self, amount: int, minimum: int) -> None:
        self.amount = amount
        self.minimum = minimum
        super().__init__(f"Insufficient deposit balance ({amount} KRW, minimum {minimum} KRW)")


class PurchasePageNotFoundError(PurchaseError):
    """The purchase tab never opened and no open page matches it."""

    def __init__(self, patterns: list[str]) -> None:
        self.patterns = list(patterns)
        super().__init__(f"Purchase page not found (patterns: {', '.join(self.patterns)})")
