"""DH Lotto — Purchase Sequence"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class PurchaseOutcome(str, Enum):
    """Terminal states of a purchase run that exit with status 0."""
    COMPLETED = "completed"
    SALE_CLOSED = "sale_closed"                      # nothing bought
    LIMIT_REACHED_UNVERIFIED = "limit_reached_unverified"  # buy confirmed, spend unknown


class ReceiptGame(BaseModel):
    """One purchased line: its label (A-E) and the picked numbers."""
    label: str = ""
    numbers: list[str] = Field(default_factory=list)


class PurchaseReceipt(BaseModel):
    """Text scraped from the receipt overlay. Missing fields are empty strings."""
    round: str = ""
    issue_date: str = ""
    amount: str = ""
    games: list[ReceiptGame] = Field(default_factory=list)


class PurchaseResult(BaseModel):
    """Outcome of one run, with the receipt when the purchase completed."""
    outcome: PurchaseOutcome
    balance: int | None = None
    receipt: PurchaseReceipt | None = None
