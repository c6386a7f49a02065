"""
Dispute Evidence Engine - Cover Letter Models
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CoverLetterData:
    """
    Interpolation values for one letter.

    Every value is already resolved; missing data carries its
    bracketed placeholder instead of an empty string.
    """
    merchant_name: str
    merchant_address: str
    merchant_email: str
    merchant_phone: str
    today: str
    acquiring_bank: str
    case_number: str
    transaction_id: str
    transaction_date: str
    customer_name: str
    product: str
    order_date: str
    delivery_date: str
    amount: str


@dataclass
class CoverLetterDraft:
    """The letter currently displayed for a dispute."""
    text: str
    is_manually_edited: bool = False
    # Candidate the engine produced on the last recompute.
    last_generated: Optional[str] = None


@dataclass(frozen=True)
class RegenerationResult:
    """Output of the manual-edit reducer."""
    new_text: str
    new_manually_edited: bool
