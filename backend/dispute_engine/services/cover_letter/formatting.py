"""
Value formatting for cover letters.

Every formatter returns a display string and never raises; missing or
malformed input yields the matching bracketed placeholder.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional, Union

from dateutil import parser as date_parser

from ...models.dispute import AccountInfo, DisputeCase
from ..i18n import _

logger = logging.getLogger(__name__)


# =============================================================================
# PLACEHOLDERS
# =============================================================================

def placeholder(name: str) -> str:
    """Bracketed placeholder shown in place of missing data."""
    return _(f"<{name}>")


BANK_NAME = "Bank Name"
CASE_NUMBER = "Case Number"
TRANSACTION_ID = "Transaction ID"
TRANSACTION_DATE = "Transaction Date"
CUSTOMER_NAME = "Customer Name"
PRODUCT = "Product"
ORDER_DATE = "Order Date"
DELIVERY_DATE = "Delivery/Service Date"
AMOUNT = "Amount"
BUSINESS_EMAIL = "business@email.com"
BUSINESS_PHONE = "Business Phone Number"


# =============================================================================
# DATES
# =============================================================================

def format_date(value: Union[date, datetime]) -> str:
    """e.g. March 5, 2024"""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_datetime(value: datetime) -> str:
    """e.g. March 5, 2024, 2:07 PM"""
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{format_date(value)}, {hour}:{value.minute:02d} {meridiem}"


def format_timestamp(timestamp: Optional[int], fallback: str) -> str:
    """Format a unix timestamp in UTC, or return the fallback placeholder."""
    if timestamp is None or isinstance(timestamp, bool):
        return placeholder(fallback)
    try:
        moment = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.warning(f"Ignoring malformed timestamp: {timestamp!r}")
        return placeholder(fallback)
    return format_datetime(moment)


# Two defaults that differ in every date part; a string missing any part
# parses differently against each and is treated as incomplete.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def format_delivery_date(value: Optional[str]) -> str:
    """Date-only rendering of a shipping date string."""
    if not value:
        return placeholder(DELIVERY_DATE)
    try:
        parsed = date_parser.parse(value, default=_DEFAULT_A)
        check = date_parser.parse(value, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        logger.warning(f"Ignoring malformed shipping date: {value!r}")
        return placeholder(DELIVERY_DATE)
    if parsed.date() != check.date():
        logger.warning(f"Ignoring incomplete shipping date: {value!r}")
        return placeholder(DELIVERY_DATE)
    return format_date(parsed)


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


# =============================================================================
# MONEY / ADDRESS / PRODUCT
# =============================================================================

def format_amount(amount: Optional[int], currency: Optional[str]) -> str:
    """Minor units to "12.34 USD"."""
    if amount is None or isinstance(amount, bool):
        return placeholder(AMOUNT)
    try:
        minor_units = int(amount)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed amount: {amount!r}")
        return placeholder(AMOUNT)
    return f"{minor_units / 100:.2f} {(currency or '').upper()}".rstrip()


def format_merchant_address(account: AccountInfo) -> str:
    # Empty parts are kept so the letter shows where data is missing.
    return (
        f"{account.support_address_line1}, {account.support_address_line2}, "
        f"{account.support_address_city}, {account.support_address_state} "
        f"{account.support_address_postal_code} {account.support_address_country}"
    )


def describe_product(case: DisputeCase) -> str:
    """Explicit product description, else line items, else placeholder."""
    explicit = case.evidence_text("product_description")
    if explicit:
        return explicit
    descriptions = [
        item.product_description
        for item in case.charge.line_items
        if item.product_description
    ]
    if descriptions:
        return ", ".join(descriptions)
    return placeholder(PRODUCT)
