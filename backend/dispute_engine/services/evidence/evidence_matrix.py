"""
Evidence Matrix

Data-driven lookup of recommended fields by (reason, product type) and,
for reasons with a second axis, (reason, product type, sub-status).

Keys are tuples:
    (product_type,)              - most reasons
    (product_type, sub_status)   - duplicate

A miss returns None; the caller falls back to the rule table.
Priorities share the rule table's numbering so merged output sorts
consistently.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from ...models.dispute import DisputeReason
from ...models.evidence import EvidenceKey, EvidenceField
from ..i18n import _
from .rule_table import receipt_field, other_documents_field

logger = logging.getLogger(__name__)

# Product-type placeholder used when a duplicate dispute has none selected.
# No cell is keyed on it, so such disputes fall back to the rule table.
DEFAULT_PRODUCT_TYPE = "default"

# Reasons whose matrix rows are keyed by (product_type, sub_status).
SUB_STATUS_REASONS = frozenset({DisputeReason.DUPLICATE})

MatrixKey = Tuple[str, ...]


@dataclass(frozen=True)
class MatrixEntry:
    """
    Fields for one matrix cell.

    merge_base: whether the customer-communication base field is injected
    when the entry leaves it out.
    """
    fields: Tuple[EvidenceField, ...]
    merge_base: bool = True


# =============================================================================
# SHARED FIELDS
# =============================================================================

def _refund_policy(priority: int, label: Optional[str] = None) -> EvidenceField:
    return EvidenceField(
        key=EvidenceKey.REFUND_POLICY,
        label=label or _("Refund policy"),
        description=_("A screenshot of your store's refund policy."),
        priority=priority,
    )


def _terms_of_service(priority: int) -> EvidenceField:
    return EvidenceField(
        key=EvidenceKey.CANCELLATION_POLICY,
        label=_("Terms of service"),
        description=_("A screenshot of your store's terms of service."),
        priority=priority,
    )


# =============================================================================
# DUPLICATE
# =============================================================================

def _duplicate_refunded() -> MatrixEntry:
    # The refund receipt and the catch-all share a key; the earlier one wins.
    return MatrixEntry(
        fields=(
            receipt_field(10),
            EvidenceField(
                key=EvidenceKey.UNCATEGORIZED_FILE,
                label=_("Refund receipt"),
                description=_("A confirmation that a refund was issued."),
                priority=15,
            ),
            _refund_policy(25),
            other_documents_field(100),
        ),
        merge_base=False,
    )


def _duplicate_separate_charges() -> MatrixEntry:
    return MatrixEntry(
        fields=(
            receipt_field(10),
            EvidenceField(
                key=EvidenceKey.DUPLICATE_CHARGE_DOCUMENTATION,
                label=_("Any additional receipts"),
                description=_("Receipt(s) for any other order(s) from this customer."),
                priority=12,
            ),
            _refund_policy(25),
            other_documents_field(100),
        ),
    )


def _duplicate_matrix() -> Dict[MatrixKey, MatrixEntry]:
    return {
        ("booking_reservation", "is_duplicate"): _duplicate_refunded(),
        ("booking_reservation", "is_not_duplicate"): _duplicate_separate_charges(),
    }


# =============================================================================
# SUBSCRIPTION CANCELED
# =============================================================================

def _subscription_canceled_matrix() -> Dict[MatrixKey, MatrixEntry]:
    return {
        ("booking_reservation",): MatrixEntry(
            fields=(
                receipt_field(10),
                EvidenceField(
                    key=EvidenceKey.CANCELLATION_REBUTTAL,
                    label=_("Cancellation logs"),
                    description=_(
                        "Records showing no cancellation attempt or request was made "
                        "before the charge, such as account activity, subscription "
                        "status, or communication history."
                    ),
                    priority=25,
                ),
                _terms_of_service(30),
                other_documents_field(100),
            ),
        ),
        ("other",): MatrixEntry(
            fields=(
                receipt_field(10),
                _terms_of_service(25),
                other_documents_field(100),
            ),
        ),
        # Multiple products may be in different subscription states, so no logs.
        ("multiple",): MatrixEntry(
            fields=(
                receipt_field(10),
                _refund_policy(40, _("Store refund policy")),
                _terms_of_service(50),
                other_documents_field(100),
            ),
        ),
    }


# =============================================================================
# FRAUDULENT
# =============================================================================

def _fraudulent_matrix() -> Dict[MatrixKey, MatrixEntry]:
    return {
        ("booking_reservation",): MatrixEntry(
            fields=(
                EvidenceField(
                    key=EvidenceKey.ACCESS_ACTIVITY_LOG,
                    label=_("Prior undisputed transaction history"),
                    description=_(
                        "Proof of past undisputed transactions from the same customer, "
                        "with matching billing and device details."
                    ),
                    priority=10,
                ),
                other_documents_field(100),
            ),
        ),
    }


def build_matrix() -> Dict[DisputeReason, Dict[MatrixKey, MatrixEntry]]:
    """The complete matrix, reason -> key -> entry."""
    return {
        DisputeReason.FRAUDULENT: _fraudulent_matrix(),
        DisputeReason.SUBSCRIPTION_CANCELED: _subscription_canceled_matrix(),
        DisputeReason.DUPLICATE: _duplicate_matrix(),
    }


def _as_str(value) -> Optional[str]:
    if value is None:
        return None
    return value.value if hasattr(value, "value") else str(value)


class EvidenceMatrix:
    """
    Look up recommended fields for a (reason, product type[, sub-status]) cell.

    The public contract is lookup(reason, product_type, sub_status=None);
    composite keys are tuples so separator characters can never collide.
    """

    def matrix_key(
        self,
        reason: DisputeReason,
        product_type: Optional[str],
        sub_status: Optional[str] = None,
    ) -> Optional[MatrixKey]:
        """Key for a cell, or None when the inputs cannot address one."""
        if not product_type:
            return None
        if reason in SUB_STATUS_REASONS:
            if not sub_status:
                return None
            return (product_type, sub_status)
        return (product_type,)

    def lookup(
        self,
        reason: Union[DisputeReason, str, None],
        product_type: Union[str, None],
        sub_status: Union[str, None] = None,
    ) -> Optional[MatrixEntry]:
        """
        Find the matrix entry for a cell.

        Args:
            reason: Dispute reason
            product_type: Product type value (or "default" for duplicates)
            sub_status: Duplicate status for reasons with a second axis

        Returns:
            MatrixEntry, or None when the cell does not exist
        """
        reason = DisputeReason.parse(reason)
        key = self.matrix_key(reason, _as_str(product_type), _as_str(sub_status))
        if key is None:
            return None

        entry = build_matrix().get(reason, {}).get(key)
        logger.debug(f"Matrix lookup reason={reason.value} key={key} hit={entry is not None}")
        return entry

    def lookup_fields(
        self,
        reason: Union[DisputeReason, str, None],
        product_type: Union[str, None],
        sub_status: Union[str, None] = None,
    ) -> Optional[List[EvidenceField]]:
        """Same as lookup() but returns only the field list."""
        entry = self.lookup(reason, product_type, sub_status)
        return list(entry.fields) if entry is not None else None


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

_matrix: Optional[EvidenceMatrix] = None


def get_matrix() -> EvidenceMatrix:
    """Get or create the default evidence matrix singleton."""
    global _matrix
    if _matrix is None:
        _matrix = EvidenceMatrix()
    return _matrix
