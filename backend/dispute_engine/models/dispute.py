"""
Dispute Evidence Engine - Dispute Models

Snapshot of a dispute as mirrored from the dispute store.
Every recompute reads one DisputeCase; nothing downstream mutates it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# =============================================================================
# ENUMS
# =============================================================================

class DisputeReason(str, Enum):
    """Card network reason code for the chargeback."""
    GENERAL = "general"
    PRODUCT_NOT_RECEIVED = "product_not_received"
    PRODUCT_UNACCEPTABLE = "product_unacceptable"
    CREDIT_NOT_PROCESSED = "credit_not_processed"
    DUPLICATE = "duplicate"
    SUBSCRIPTION_CANCELED = "subscription_canceled"
    FRAUDULENT = "fraudulent"
    UNRECOGNIZED = "unrecognized"
    NONCOMPLIANT = "noncompliant"

    @classmethod
    def parse(cls, value: Any) -> "DisputeReason":
        """Unknown or empty reasons land on GENERAL."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.GENERAL


class ProductType(str, Enum):
    """Merchant-declared category of what was sold."""
    PHYSICAL_PRODUCT = "physical_product"
    DIGITAL_PRODUCT_OR_SERVICE = "digital_product_or_service"
    OFFLINE_SERVICE = "offline_service"
    BOOKING_RESERVATION = "booking_reservation"
    MULTIPLE = "multiple"
    OTHER = "other"


class RefundStatus(str, Enum):
    """Only meaningful for credit_not_processed."""
    REFUND_HAS_BEEN_ISSUED = "refund_has_been_issued"
    REFUND_WAS_NOT_OWED = "refund_was_not_owed"


class DuplicateStatus(str, Enum):
    """Only meaningful for duplicate."""
    IS_DUPLICATE = "is_duplicate"
    IS_NOT_DUPLICATE = "is_not_duplicate"


def parse_optional(enum_cls, value):
    # Malformed values are treated as unset rather than rejected.
    if value is None or value == "":
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


# =============================================================================
# CHARGE / ORDER
# =============================================================================

@dataclass
class BillingDetails:
    """Billing details attached to the disputed charge."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass
class LineItem:
    """Level 3 line item on the charge."""
    product_description: Optional[str] = None
    product_name: Optional[str] = None
    quantity: Optional[int] = None
    unit_cost: Optional[int] = None


@dataclass
class Charge:
    """The disputed charge."""
    id: Optional[str] = None
    created: Optional[int] = None  # unix timestamp
    billing_details: BillingDetails = field(default_factory=BillingDetails)
    payment_method_type: Optional[str] = None
    line_items: List[LineItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Charge":
        data = data or {}
        billing = data.get("billing_details") or {}
        level3 = data.get("level3") or {}
        items = level3.get("line_items") or data.get("line_items") or []
        pm_details = data.get("payment_method_details") or {}
        return cls(
            id=data.get("id"),
            created=data.get("created"),
            billing_details=BillingDetails(
                name=billing.get("name"),
                email=billing.get("email"),
                phone=billing.get("phone"),
            ),
            payment_method_type=pm_details.get("type"),
            line_items=[
                LineItem(
                    product_description=item.get("product_description"),
                    product_name=item.get("product_name"),
                    quantity=item.get("quantity"),
                    unit_cost=item.get("unit_cost"),
                )
                for item in items
                if isinstance(item, dict)
            ],
        )


@dataclass
class OrderInfo:
    """Store order linked to the charge."""
    id: Optional[str] = None
    number: Optional[str] = None
    ip_address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["OrderInfo"]:
        if not data:
            return None
        order_id = data.get("id")
        return cls(
            id=str(order_id) if order_id is not None else None,
            number=data.get("number"),
            ip_address=data.get("ip_address"),
        )


# =============================================================================
# DISPUTE CASE
# =============================================================================

@dataclass
class DisputeCase:
    """
    Immutable-per-recompute snapshot driving every engine decision.

    evidence maps vocabulary keys to file references or free text.
    Values that are not plain strings count as absent.
    """
    id: Optional[str] = None
    reason: DisputeReason = DisputeReason.GENERAL
    product_type: Optional[ProductType] = None
    refund_status: Optional[RefundStatus] = None
    duplicate_status: Optional[DuplicateStatus] = None
    amount: Optional[int] = None  # minor units
    currency: Optional[str] = None
    created: Optional[int] = None  # unix timestamp
    order: Optional[OrderInfo] = None
    charge: Charge = field(default_factory=Charge)
    evidence: Dict[str, Any] = field(default_factory=dict)
    bank_name: Optional[str] = None

    @property
    def sub_status(self) -> Optional[str]:
        """The sub-status that is meaningful for this reason, if any."""
        if self.reason == DisputeReason.DUPLICATE and self.duplicate_status:
            return self.duplicate_status.value
        if self.reason == DisputeReason.CREDIT_NOT_PROCESSED and self.refund_status:
            return self.refund_status.value
        return None

    @property
    def is_compliance_dispute(self) -> bool:
        return self.reason == DisputeReason.NONCOMPLIANT

    def evidence_text(self, key: str) -> Optional[str]:
        """Return the evidence value for key if it is a non-empty string."""
        value = self.evidence.get(key)
        if isinstance(value, str) and value:
            return value
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DisputeCase":
        """Build a case from the dispute store's wire shape."""
        evidence = data.get("evidence") or {}
        return cls(
            id=data.get("id"),
            reason=DisputeReason.parse(data.get("reason")),
            product_type=parse_optional(ProductType, data.get("product_type")),
            refund_status=parse_optional(RefundStatus, data.get("refund_status")),
            duplicate_status=parse_optional(DuplicateStatus, data.get("duplicate_status")),
            amount=data.get("amount"),
            currency=data.get("currency"),
            created=data.get("created"),
            order=OrderInfo.from_dict(data.get("order")),
            charge=Charge.from_dict(data.get("charge")),
            evidence=dict(evidence) if isinstance(evidence, dict) else {},
            bank_name=data.get("bank_name"),
        )


# =============================================================================
# ACCOUNT
# =============================================================================

@dataclass
class AccountInfo:
    """Merchant business details used in the letter header."""
    name: str = ""
    support_address_line1: str = ""
    support_address_line2: str = ""
    support_address_city: str = ""
    support_address_state: str = ""
    support_address_postal_code: str = ""
    support_address_country: str = ""
    support_email: Optional[str] = None
    support_phone: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AccountInfo":
        data = data or {}

        def text(key: str) -> str:
            value = data.get(key)
            return value if isinstance(value, str) else ""

        return cls(
            name=text("name"),
            support_address_line1=text("support_address_line1"),
            support_address_line2=text("support_address_line2"),
            support_address_city=text("support_address_city"),
            support_address_state=text("support_address_state"),
            support_address_postal_code=text("support_address_postal_code"),
            support_address_country=text("support_address_country"),
            support_email=data.get("support_email") or None,
            support_phone=data.get("support_phone") or None,
        )
