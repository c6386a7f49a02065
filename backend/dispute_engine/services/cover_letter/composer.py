"""
Cover-Letter Composer

Assembles a chargeback cover letter from a dispute case and the merchant's
account details.

Sections, joined by blank lines:
    header     merchant name, address, email, phone, date
    recipient  bank and subject line
    greeting
    body       reason-specific narrative with the attachment list
    closing

compose() is a pure function of its arguments: identical inputs give
byte-identical output. The date is a parameter for the same reason.
"""

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Union

from ...models.cover_letter import CoverLetterData
from ...models.dispute import (
    AccountInfo, DisputeCase, DuplicateStatus, RefundStatus, parse_optional,
)
from ..i18n import _
from . import formatting as fmt
from .attachments import AttachmentCompiler, get_attachment_compiler
from .bodies import generate_body

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


def _format_today(today: Optional[DateLike]) -> str:
    if today is None:
        today = fmt.today_utc()
    if isinstance(today, datetime):
        return fmt.format_datetime(today)
    return fmt.format_date(today)


def build_cover_letter_data(
    case: DisputeCase,
    account: AccountInfo,
    bank_name: Optional[str] = None,
    today: Optional[DateLike] = None,
) -> CoverLetterData:
    """Resolve every interpolation value, substituting placeholders for gaps."""
    return CoverLetterData(
        merchant_name=account.name,
        merchant_address=fmt.format_merchant_address(account),
        merchant_email=account.support_email or fmt.placeholder(fmt.BUSINESS_EMAIL),
        merchant_phone=account.support_phone or fmt.placeholder(fmt.BUSINESS_PHONE),
        today=_format_today(today),
        acquiring_bank=bank_name or case.bank_name or fmt.placeholder(fmt.BANK_NAME),
        case_number=case.id or fmt.placeholder(fmt.CASE_NUMBER),
        transaction_id=case.charge.id or fmt.placeholder(fmt.TRANSACTION_ID),
        transaction_date=fmt.format_timestamp(case.created, fmt.TRANSACTION_DATE),
        customer_name=case.charge.billing_details.name or fmt.placeholder(fmt.CUSTOMER_NAME),
        product=fmt.describe_product(case),
        order_date=fmt.format_timestamp(case.charge.created, fmt.ORDER_DATE),
        delivery_date=fmt.format_delivery_date(case.evidence_text("shipping_date")),
        amount=fmt.format_amount(case.amount, case.currency),
    )


class CoverLetterComposer:
    """
    Compose cover letters.

    Input: DisputeCase + AccountInfo (+ bank name and sub-status overrides)
    Output: plain-text letter
    """

    def __init__(self, attachments: Optional[AttachmentCompiler] = None):
        self.attachments = attachments or get_attachment_compiler()

    def resolve_case(
        self,
        case: DisputeCase,
        refund_status: Union[RefundStatus, str, None] = None,
        duplicate_status: Union[DuplicateStatus, str, None] = None,
    ) -> DisputeCase:
        """Copy of case with the given sub-statuses applied over its own."""
        return replace(
            case,
            refund_status=parse_optional(RefundStatus, refund_status) or case.refund_status,
            duplicate_status=parse_optional(DuplicateStatus, duplicate_status) or case.duplicate_status,
        )

    def render_header(self, data: CoverLetterData) -> str:
        return "\n".join([
            data.merchant_name,
            data.merchant_address,
            data.merchant_email,
            data.merchant_phone,
            data.today,
        ])

    def render_recipient(self, data: CoverLetterData) -> str:
        return (
            f"{_('To:')} {data.acquiring_bank}\n"
            f"{_('Subject:')} {_('Chargeback Dispute')} – {_('Case')} #{data.case_number}"
        )

    def render_greeting(self) -> str:
        return _("Dear Dispute Resolution Team,")

    def render_closing(self, data: CoverLetterData) -> str:
        return f"{_('Thank you,')}\n{data.merchant_name}"

    def compose(
        self,
        case: DisputeCase,
        account: AccountInfo,
        bank_name: Optional[str] = None,
        refund_status: Union[RefundStatus, str, None] = None,
        duplicate_status: Union[DuplicateStatus, str, None] = None,
        today: Optional[DateLike] = None,
    ) -> str:
        """
        Compose the full cover letter.

        Args:
            case: Dispute snapshot
            account: Merchant business details
            bank_name: Overrides case.bank_name when given
            refund_status: Overrides case.refund_status when given
            duplicate_status: Overrides case.duplicate_status when given
            today: Letter date; defaults to the current UTC date

        Returns:
            The letter text
        """
        case = self.resolve_case(case, refund_status, duplicate_status)
        data = build_cover_letter_data(case, account, bank_name, today)
        attachments = self.attachments.compile(case)

        sections = [
            self.render_header(data),
            self.render_recipient(data),
            self.render_greeting(),
            generate_body(
                data,
                case.reason,
                attachments,
                refund_status=case.refund_status,
                duplicate_status=case.duplicate_status,
            ),
            self.render_closing(data),
        ]

        logger.debug(f"Composed cover letter for case={data.case_number} reason={case.reason.value}")
        return "\n\n".join(sections)


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

_composer: Optional[CoverLetterComposer] = None


def get_composer() -> CoverLetterComposer:
    """Get or create the default composer singleton."""
    global _composer
    if _composer is None:
        _composer = CoverLetterComposer()
    return _composer


def compose_cover_letter(
    case: DisputeCase,
    account: AccountInfo,
    bank_name: Optional[str] = None,
    refund_status: Union[RefundStatus, str, None] = None,
    duplicate_status: Union[DuplicateStatus, str, None] = None,
    today: Optional[DateLike] = None,
) -> str:
    """Convenience function for CoverLetterComposer.compose."""
    return get_composer().compose(case, account, bank_name, refund_status, duplicate_status, today)
