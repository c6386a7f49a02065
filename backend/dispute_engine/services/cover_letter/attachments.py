"""
Attachment Compiler

Produces the lettered attachment list inlined in a cover letter body.

Letters follow catalogue order, not label order and not vocabulary order:
the first evidence-bearing candidate is A, the next B, and so on.
"""

import logging
from typing import List, Optional, Tuple

from ...models.dispute import DisputeCase, DisputeReason, DuplicateStatus, RefundStatus
from ...models.evidence import AttachmentCandidate, EvidenceKey
from ..i18n import _

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 26


def _is_duplicate(reason: DisputeReason, sub_status: Optional[str]) -> bool:
    return reason == DisputeReason.DUPLICATE and sub_status == DuplicateStatus.IS_DUPLICATE.value


def build_catalogue() -> List[AttachmentCandidate]:
    """The fixed, ordered attachment catalogue."""
    refund_receipt = _("Refund receipt")
    return [
        AttachmentCandidate(
            key=EvidenceKey.RECEIPT,
            default_label=_("Order receipt"),
            label_for_reasons={
                DisputeReason.PRODUCT_NOT_RECEIVED: _("Proof of Purchase: Receipt and payment confirmation"),
            },
        ),
        AttachmentCandidate(
            key=EvidenceKey.DUPLICATE_CHARGE_DOCUMENTATION,
            default_label=_("Any additional receipts"),
            only_for_reasons=frozenset({DisputeReason.DUPLICATE}),
            exclude_when=_is_duplicate,
        ),
        AttachmentCandidate(
            key=EvidenceKey.CUSTOMER_COMMUNICATION,
            default_label=_("Customer communication"),
        ),
        AttachmentCandidate(
            key=EvidenceKey.CUSTOMER_SIGNATURE,
            default_label=_("Customer signature"),
        ),
        AttachmentCandidate(
            key=EvidenceKey.REFUND_POLICY,
            default_label=_("Store refund policy"),
            label_for_status={DuplicateStatus.IS_DUPLICATE.value: _("Refund policy")},
        ),
        AttachmentCandidate(
            key=EvidenceKey.SHIPPING_DOCUMENTATION,
            default_label=_("Proof of shipping"),
            label_for_reasons={
                DisputeReason.PRODUCT_NOT_RECEIVED: _("Proof of Shipping: Tracking details"),
            },
        ),
        AttachmentCandidate(
            key=EvidenceKey.SERVICE_DOCUMENTATION,
            default_label=_("Service documentation"),
            label_for_reasons={
                DisputeReason.CREDIT_NOT_PROCESSED: _("Item condition documentation"),
            },
        ),
        AttachmentCandidate(
            key=EvidenceKey.CANCELLATION_POLICY,
            default_label=_("Cancellation policy"),
            label_for_reasons={DisputeReason.DUPLICATE: _("Terms of service")},
        ),
        AttachmentCandidate(
            key=EvidenceKey.ACCESS_ACTIVITY_LOG,
            default_label=_("Access activity log"),
            label_for_reasons={
                DisputeReason.SUBSCRIPTION_CANCELED: _("Proof of active subscription"),
            },
        ),
        AttachmentCandidate(
            key=EvidenceKey.CANCELLATION_REBUTTAL,
            default_label=_("Cancellation logs"),
            only_for_reasons=frozenset({DisputeReason.SUBSCRIPTION_CANCELED}),
        ),
        AttachmentCandidate(
            key=EvidenceKey.UNCATEGORIZED_FILE,
            default_label=_("Additional documentation"),
            label_for_reasons={
                DisputeReason.PRODUCT_NOT_RECEIVED: _("Proof of Delivery: Delivery confirmation receipt"),
            },
            label_for_status={
                DuplicateStatus.IS_DUPLICATE.value: refund_receipt,
                RefundStatus.REFUND_HAS_BEEN_ISSUED.value: refund_receipt,
            },
        ),
    ]


def attachment_letter(position: int) -> str:
    """1 -> A, 2 -> B, ..."""
    if position > ALPHABET_SIZE:
        logger.warning(f"Attachment counter {position} is past Z, continuing with the next characters")
    return chr(ord("A") + position - 1)


def format_line(label: str, letter: str) -> str:
    return f"• {label} ({_('Attachment')} {letter})"


class AttachmentCompiler:
    """
    Compile the attachment list for a dispute.

    Input: DisputeCase (reason, sub-status, evidence)
    Output: newline-joined bullet lines
    """

    def compile_entries(self, case: DisputeCase) -> List[Tuple[str, EvidenceKey, str]]:
        """(letter, key, label) for every evidence-bearing candidate, in catalogue order."""
        reason = case.reason
        sub_status = case.sub_status
        entries = []
        for candidate in build_catalogue():
            if not candidate.applies_to(reason, sub_status):
                continue
            if case.evidence_text(candidate.key.value) is None:
                continue
            letter = attachment_letter(len(entries) + 1)
            entries.append((letter, candidate.key, candidate.resolve_label(reason, sub_status)))
        return entries

    def placeholder_lines(self) -> List[str]:
        label = _("<Supporting document>")
        return [format_line(label, "A"), format_line(label, "B")]

    def compile(self, case: DisputeCase) -> str:
        entries = self.compile_entries(case)
        if not entries:
            return "\n".join(self.placeholder_lines())
        return "\n".join(format_line(label, letter) for letter, _key, label in entries)


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

_compiler: Optional[AttachmentCompiler] = None


def get_attachment_compiler() -> AttachmentCompiler:
    """Get or create the default attachment compiler singleton."""
    global _compiler
    if _compiler is None:
        _compiler = AttachmentCompiler()
    return _compiler


def compile_attachments(case: DisputeCase) -> str:
    """Convenience function for AttachmentCompiler.compile."""
    return get_attachment_compiler().compile(case)
