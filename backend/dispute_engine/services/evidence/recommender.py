"""
Evidence Recommendation Resolver

Single entry point for the evidence-upload checklist.

Strategy:
1. Matrix disabled -> rule table
2. noncompliant -> fixed two-field set
3. Matrix lookup on (reason, effective product type[, sub-status])
4. Matrix miss -> rule table
5. Matrix hit -> inject customer communication if missing, sort, de-duplicate
"""

import logging
from typing import List, Optional, Union

from ...models.dispute import (
    DisputeCase, DisputeReason, ProductType, RefundStatus, DuplicateStatus, parse_optional,
)
from ...models.evidence import EvidenceKey, EvidenceField, RecommendedDocument
from ..i18n import _
from .evidence_matrix import EvidenceMatrix, DEFAULT_PRODUCT_TYPE, get_matrix
from .rule_table import (
    RuleTableResolver, get_rule_table, customer_communication_field, sort_and_strip,
)

logger = logging.getLogger(__name__)


def compliance_fields() -> List[EvidenceField]:
    """Fixed set for network compliance disputes."""
    return [
        EvidenceField(
            key=EvidenceKey.CUSTOMER_COMMUNICATION,
            label=_("Upload evidence"),
            description=_("Any documents that support your response to this compliance dispute."),
            priority=10,
        ),
        EvidenceField(
            key=EvidenceKey.UNCATEGORIZED_FILE,
            label=_("Other documents"),
            description=_("Any other relevant documents that will support your case."),
            priority=100,
        ),
    ]


class EvidenceRecommender:
    """
    Orchestrates the matrix and the rule table behind one call.

    The matrix toggle is always passed in; this class never reads config.
    """

    def __init__(
        self,
        matrix: Optional[EvidenceMatrix] = None,
        rule_table: Optional[RuleTableResolver] = None,
    ):
        self.matrix = matrix or get_matrix()
        self.rule_table = rule_table or get_rule_table()

    def effective_product_type(
        self,
        reason: DisputeReason,
        product_type: Optional[ProductType],
    ) -> Optional[str]:
        if product_type is not None:
            return product_type.value
        if reason == DisputeReason.DUPLICATE:
            return DEFAULT_PRODUCT_TYPE
        return None

    def recommend_for(
        self,
        reason: Union[DisputeReason, str, None],
        product_type: Union[ProductType, str, None] = None,
        refund_status: Union[RefundStatus, str, None] = None,
        duplicate_status: Union[DuplicateStatus, str, None] = None,
        matrix_enabled: bool = False,
    ) -> List[RecommendedDocument]:
        """
        Recommend evidence fields from raw dispute attributes.

        Args:
            reason: Dispute reason
            product_type: Merchant-declared product type
            refund_status: credit_not_processed sub-status
            duplicate_status: duplicate sub-status
            matrix_enabled: Use the evidence matrix before the rule table

        Returns:
            Non-empty, key-unique, ordered list of RecommendedDocument
        """
        reason = DisputeReason.parse(reason)
        product_type = parse_optional(ProductType, product_type)
        refund_status = parse_optional(RefundStatus, refund_status)
        duplicate_status = parse_optional(DuplicateStatus, duplicate_status)

        if not matrix_enabled:
            logger.debug(f"Matrix disabled, using rule table for reason={reason.value}")
            return self.rule_table.resolve(reason, refund_status, duplicate_status)

        if reason == DisputeReason.NONCOMPLIANT:
            logger.debug("Compliance dispute, using fixed field set")
            return sort_and_strip(compliance_fields())

        sub_status = duplicate_status.value if duplicate_status else None
        entry = self.matrix.lookup(
            reason,
            self.effective_product_type(reason, product_type),
            sub_status,
        )
        if entry is None:
            logger.debug(f"No matrix entry for reason={reason.value}, falling back to rule table")
            return self.rule_table.resolve(reason, refund_status, duplicate_status)

        fields = list(entry.fields)
        if entry.merge_base and not any(
            f.key == EvidenceKey.CUSTOMER_COMMUNICATION for f in fields
        ):
            fields.append(customer_communication_field())

        logger.debug(f"Matrix entry used for reason={reason.value} ({len(fields)} fields)")
        return sort_and_strip(fields)

    def recommend(self, case: DisputeCase, matrix_enabled: bool) -> List[RecommendedDocument]:
        """Recommend evidence fields for a dispute case."""
        return self.recommend_for(
            case.reason,
            case.product_type,
            case.refund_status,
            case.duplicate_status,
            matrix_enabled=matrix_enabled,
        )


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

_recommender: Optional[EvidenceRecommender] = None


def get_recommender() -> EvidenceRecommender:
    """Get or create the default recommender singleton."""
    global _recommender
    if _recommender is None:
        _recommender = EvidenceRecommender()
    return _recommender


def recommend_documents(case: DisputeCase, matrix_enabled: bool) -> List[RecommendedDocument]:
    """Convenience function for EvidenceRecommender.recommend."""
    return get_recommender().recommend(case, matrix_enabled)
