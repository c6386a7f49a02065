"""
Rule Table Resolver

Reason-keyed fallback table of recommended evidence fields.

Every result is built from three always-present base fields plus the
reason's extra fields:

    receipt (10) + customer_communication (20) + [extras 30-60]
        + uncategorized_file (100)

Unknown or empty reasons resolve to the "general" extras.
The resolver never raises.
"""

import logging
from typing import List, Optional, Union

from ...models.dispute import DisputeReason, RefundStatus, DuplicateStatus, parse_optional
from ...models.evidence import EvidenceKey, EvidenceField, RecommendedDocument
from ..i18n import _

logger = logging.getLogger(__name__)


# =============================================================================
# PRIORITIES
# =============================================================================

RECEIPT_PRIORITY = 10
CUSTOMER_COMMUNICATION_PRIORITY = 20
OTHER_DOCUMENTS_PRIORITY = 100


# =============================================================================
# FIELD DEFINITIONS
# =============================================================================
#
# Built on each call so labels go through the installed translator.
#

def receipt_field(priority: int = RECEIPT_PRIORITY) -> EvidenceField:
    return EvidenceField(
        key=EvidenceKey.RECEIPT,
        label=_("Order receipt"),
        description=_(
            "A copy of the customer's receipt, which can be found in the "
            "receipt history for this transaction."
        ),
        priority=priority,
    )


def customer_communication_field(priority: int = CUSTOMER_COMMUNICATION_PRIORITY) -> EvidenceField:
    return EvidenceField(
        key=EvidenceKey.CUSTOMER_COMMUNICATION,
        label=_("Customer communication"),
        description=_("Any correspondence with the customer regarding this purchase."),
        priority=priority,
    )


def other_documents_field(priority: int = OTHER_DOCUMENTS_PRIORITY) -> EvidenceField:
    return EvidenceField(
        key=EvidenceKey.UNCATEGORIZED_FILE,
        label=_("Other documents"),
        description=_("Any other relevant documents that will support your case."),
        priority=priority,
    )


def base_fields() -> List[EvidenceField]:
    """The three fields every rule-table result starts from."""
    return [receipt_field(), customer_communication_field(), other_documents_field()]


def _signature(priority: int, description: Optional[str] = None) -> EvidenceField:
    return EvidenceField(
        key=EvidenceKey.CUSTOMER_SIGNATURE,
        label=_("Customer signature"),
        description=description or _(
            "Proof of the customer's signature confirming receipt of the product or service."
        ),
        priority=priority,
    )


def _store_refund_policy(priority: int) -> EvidenceField:
    return EvidenceField(
        key=EvidenceKey.REFUND_POLICY,
        label=_("Store refund policy"),
        description=_("A screenshot of your store's refund policy."),
        priority=priority,
    )


def _active_subscription(priority: int) -> EvidenceField:
    return EvidenceField(
        key=EvidenceKey.ACCESS_ACTIVITY_LOG,
        label=_("Proof of active subscription"),
        description=_("Such as billing history, subscription status, or cancellation logs."),
        priority=priority,
    )


def _terms_of_service(key: EvidenceKey, priority: int) -> EvidenceField:
    return EvidenceField(
        key=key,
        label=_("Terms of service"),
        description=_("A screenshot of your store's terms of service."),
        priority=priority,
    )


# =============================================================================
# REASON -> EXTRA FIELDS
# =============================================================================

def _general_fields() -> List[EvidenceField]:
    return [
        _active_subscription(30),
        _store_refund_policy(40),
        _terms_of_service(EvidenceKey.SERVICE_DOCUMENTATION, 50),
    ]


def _product_unacceptable_fields() -> List[EvidenceField]:
    return [
        _signature(30),
        EvidenceField(
            key=EvidenceKey.SERVICE_DOCUMENTATION,
            label=_("Item condition"),
            description=_(
                "Photos or documentation showing the product matched its description "
                "and was in good condition when delivered."
            ),
            priority=40,
        ),
        _store_refund_policy(50),
    ]


def _product_not_received_fields() -> List[EvidenceField]:
    return [
        _signature(30, _("Proof of delivery signed by the customer, if available.")),
        _store_refund_policy(40),
    ]


def _subscription_canceled_fields() -> List[EvidenceField]:
    return [
        _active_subscription(30),
        _store_refund_policy(40),
        EvidenceField(
            key=EvidenceKey.CANCELLATION_POLICY,
            label=_("Cancellation policy"),
            description=_("Your subscription cancellation policy, as shown to the customer."),
            priority=50,
        ),
    ]


def _credit_not_processed_fields(refund_status: Optional[RefundStatus]) -> List[EvidenceField]:
    if refund_status == RefundStatus.REFUND_WAS_NOT_OWED:
        return [_store_refund_policy(30)]
    return [
        _signature(30, _("Proof that the customer accepted the refund or returned item terms.")),
        _store_refund_policy(40),
        EvidenceField(
            key=EvidenceKey.SERVICE_DOCUMENTATION,
            label=_("Item condition"),
            description=_("Documentation of the condition of any returned item."),
            priority=50,
        ),
    ]


def _duplicate_fields(duplicate_status: Optional[DuplicateStatus]) -> List[EvidenceField]:
    if duplicate_status == DuplicateStatus.IS_DUPLICATE:
        return [
            _active_subscription(30),
            _store_refund_policy(40),
            _terms_of_service(EvidenceKey.CANCELLATION_POLICY, 50),
        ]
    return [_store_refund_policy(30)]


def _fraudulent_fields() -> List[EvidenceField]:
    return [_signature(30), _store_refund_policy(40)]


def sort_and_strip(fields: List[EvidenceField]) -> List[RecommendedDocument]:
    """Stable sort by priority, drop repeated keys, strip priorities."""
    seen = set()
    documents: List[RecommendedDocument] = []
    # sorted() is stable: equal priorities keep declaration order.
    for f in sorted(fields, key=lambda f: f.priority):
        if f.key in seen:
            continue
        seen.add(f.key)
        documents.append(f.to_document())
    return documents


class RuleTableResolver:
    """
    Resolve recommended fields from the reason-keyed rule table.

    Input: reason plus the optional refund / duplicate sub-status
    Output: ordered, key-unique list ending with the catch-all field
    """

    def extra_fields(
        self,
        reason: DisputeReason,
        refund_status: Optional[RefundStatus] = None,
        duplicate_status: Optional[DuplicateStatus] = None,
    ) -> List[EvidenceField]:
        """Reason-specific fields, before the base fields are merged in."""
        if reason == DisputeReason.PRODUCT_UNACCEPTABLE:
            return _product_unacceptable_fields()
        elif reason == DisputeReason.PRODUCT_NOT_RECEIVED:
            return _product_not_received_fields()
        elif reason == DisputeReason.SUBSCRIPTION_CANCELED:
            return _subscription_canceled_fields()
        elif reason == DisputeReason.CREDIT_NOT_PROCESSED:
            return _credit_not_processed_fields(refund_status)
        elif reason == DisputeReason.DUPLICATE:
            return _duplicate_fields(duplicate_status)
        elif reason in (DisputeReason.FRAUDULENT, DisputeReason.UNRECOGNIZED):
            return _fraudulent_fields()
        else:
            return _general_fields()

    def resolve(
        self,
        reason: Union[DisputeReason, str, None],
        refund_status: Union[RefundStatus, str, None] = None,
        duplicate_status: Union[DuplicateStatus, str, None] = None,
    ) -> List[RecommendedDocument]:
        """
        Resolve the recommended fields for a reason.

        Args:
            reason: Dispute reason; unknown or empty values use "general"
            refund_status: Used only for credit_not_processed
            duplicate_status: Used only for duplicate

        Returns:
            Ordered list of RecommendedDocument
        """
        reason = DisputeReason.parse(reason)
        refund_status = parse_optional(RefundStatus, refund_status)
        duplicate_status = parse_optional(DuplicateStatus, duplicate_status)

        fields = base_fields() + self.extra_fields(reason, refund_status, duplicate_status)
        documents = sort_and_strip(fields)

        logger.debug(f"Rule table resolved {len(documents)} fields for reason={reason.value}")
        return documents


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

_rule_table: Optional[RuleTableResolver] = None


def get_rule_table() -> RuleTableResolver:
    """Get or create the default rule table resolver singleton."""
    global _rule_table
    if _rule_table is None:
        _rule_table = RuleTableResolver()
    return _rule_table


def resolve_rule_table(
    reason: Union[DisputeReason, str, None],
    refund_status: Union[RefundStatus, str, None] = None,
    duplicate_status: Union[DuplicateStatus, str, None] = None,
) -> List[RecommendedDocument]:
    """Convenience function for RuleTableResolver.resolve."""
    return get_rule_table().resolve(reason, refund_status, duplicate_status)
