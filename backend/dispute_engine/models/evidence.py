"""
Dispute Evidence Engine - Evidence Models

EvidenceKey is the closed vocabulary of the processor's dispute-evidence
schema. Every key the engine emits must be a member.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional

from .dispute import DisputeReason


# =============================================================================
# FIELD VOCABULARY
# =============================================================================

class EvidenceKey(str, Enum):
    """Wire identifiers for dispute evidence. The label is not fixed here."""
    # File evidence
    RECEIPT = "receipt"
    CUSTOMER_COMMUNICATION = "customer_communication"
    CUSTOMER_SIGNATURE = "customer_signature"
    REFUND_POLICY = "refund_policy"
    DUPLICATE_CHARGE_DOCUMENTATION = "duplicate_charge_documentation"
    CANCELLATION_POLICY = "cancellation_policy"
    ACCESS_ACTIVITY_LOG = "access_activity_log"
    SERVICE_DOCUMENTATION = "service_documentation"
    SHIPPING_DOCUMENTATION = "shipping_documentation"
    UNCATEGORIZED_FILE = "uncategorized_file"

    # Text evidence
    PRODUCT_DESCRIPTION = "product_description"
    CUSTOMER_NAME = "customer_name"
    CUSTOMER_EMAIL_ADDRESS = "customer_email_address"
    BILLING_ADDRESS = "billing_address"
    CUSTOMER_PURCHASE_IP = "customer_purchase_ip"
    REFUND_POLICY_DISCLOSURE = "refund_policy_disclosure"
    REFUND_REFUSAL_EXPLANATION = "refund_refusal_explanation"
    DUPLICATE_CHARGE_ID = "duplicate_charge_id"
    DUPLICATE_CHARGE_EXPLANATION = "duplicate_charge_explanation"
    SHIPPING_CARRIER = "shipping_carrier"
    SHIPPING_TRACKING_NUMBER = "shipping_tracking_number"
    SHIPPING_DATE = "shipping_date"
    SHIPPING_ADDRESS = "shipping_address"
    CANCELLATION_POLICY_DISCLOSURE = "cancellation_policy_disclosure"
    CANCELLATION_REBUTTAL = "cancellation_rebuttal"
    SERVICE_DATE = "service_date"
    UNCATEGORIZED_TEXT = "uncategorized_text"


VOCABULARY: FrozenSet[str] = frozenset(k.value for k in EvidenceKey)


def is_vocabulary_key(value: Any) -> bool:
    """True if value is a member of the evidence vocabulary."""
    return isinstance(value, str) and value in VOCABULARY


# =============================================================================
# RECOMMENDED FIELDS
# =============================================================================

@dataclass(frozen=True)
class EvidenceField:
    """
    One candidate upload slot with its sort priority.

    Lower priority sorts earlier; ties keep declaration order.
    """
    key: EvidenceKey
    label: str
    description: str
    priority: int

    def to_document(self) -> "RecommendedDocument":
        return RecommendedDocument(key=self.key, label=self.label, description=self.description)


@dataclass(frozen=True)
class RecommendedDocument:
    """An EvidenceField with its priority stripped."""
    key: EvidenceKey
    label: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "key": self.key.value,
            "label": self.label,
            "description": self.description,
        }


# =============================================================================
# ATTACHMENT CATALOGUE ENTRIES
# =============================================================================

ExclusionPredicate = Callable[[DisputeReason, Optional[str]], bool]


@dataclass(frozen=True)
class AttachmentCandidate:
    """
    One possible line in the cover letter's attachment list.

    Label resolution order: status label, then reason label, then default.
    """
    key: EvidenceKey
    default_label: str
    only_for_reasons: Optional[FrozenSet[DisputeReason]] = None
    exclude_when: Optional[ExclusionPredicate] = None
    label_for_reasons: Mapping[DisputeReason, str] = field(default_factory=dict)
    label_for_status: Mapping[str, str] = field(default_factory=dict)

    def applies_to(self, reason: DisputeReason, sub_status: Optional[str]) -> bool:
        if self.only_for_reasons is not None and reason not in self.only_for_reasons:
            return False
        if self.exclude_when is not None and self.exclude_when(reason, sub_status):
            return False
        return True

    def resolve_label(self, reason: DisputeReason, sub_status: Optional[str]) -> str:
        if sub_status and sub_status in self.label_for_status:
            return self.label_for_status[sub_status]
        if reason in self.label_for_reasons:
            return self.label_for_reasons[reason]
        return self.default_label
