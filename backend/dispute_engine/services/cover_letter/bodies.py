"""
Cover letter body narratives, one per dispute reason.

Every body opens with the same evidence-submission sentence, tells the
reason's story with the interpolated case values, then lists the
attachments and closes with the reversal request.
"""

from typing import Optional

from ...models.cover_letter import CoverLetterData
from ...models.dispute import DisputeReason, DuplicateStatus, RefundStatus
from ..i18n import _


def _opening(data: CoverLetterData) -> str:
    return (
        f"{_('We are submitting evidence in response to chargeback')} #{data.case_number} "
        f"{_('for transaction')} #{data.transaction_id} {_('on')} {data.transaction_date}."
    )


def _documentation(attachments: str) -> str:
    return f"{_('To support our case, we are providing the following documentation:')}\n{attachments}"


def _request() -> str:
    return _(
        "Based on this information, we respectfully request that the chargeback be reversed. "
        "Please let us know if any further details are required."
    )


def _assemble(data: CoverLetterData, narrative: str, attachments: str) -> str:
    return "\n\n".join([_opening(data), narrative, _documentation(attachments), _request()])


# =============================================================================
# NARRATIVES
# =============================================================================

def product_not_received(data: CoverLetterData) -> str:
    return (
        f"{_('Our records indicate that the customer,')} {data.customer_name}, "
        f"{_('ordered')} {data.product} {_('on')} {data.order_date} "
        f"{_('and received it on')} {data.delivery_date}. "
        f"{_('The order was fulfilled as described and delivered to the address provided at checkout.')}"
    )


def credit_refund_issued(data: CoverLetterData) -> str:
    return (
        f"{_('The customer,')} {data.customer_name}, {_('ordered')} {data.product} "
        f"{_('on')} {data.order_date}. "
        f"{_('A refund of')} {data.amount} {_('has already been issued to the customer for this purchase, and the refund confirmation is attached.')} "
        f"{_('The item was delivered on')} {data.delivery_date}."
    )


def credit_refund_not_owed(data: CoverLetterData) -> str:
    return (
        f"{_('The customer,')} {data.customer_name}, {_('ordered')} {data.product} "
        f"{_('on')} {data.order_date}, {_('which was delivered on')} {data.delivery_date}. "
        f"{_('Under the refund policy the customer accepted at checkout, this purchase was not eligible for a refund of')} {data.amount}."
    )


def product_unacceptable(data: CoverLetterData) -> str:
    return (
        f"{_('The customer,')} {data.customer_name}, {_('ordered')} {data.product} "
        f"{_('on')} {data.order_date}, {_('which was delivered on')} {data.delivery_date}. "
        f"{_('The product matched its description at the time of purchase and was in good condition when it was delivered.')}"
    )


def subscription_canceled(data: CoverLetterData) -> str:
    return (
        f"{_('The customer,')} {data.customer_name}, {_('subscribed to')} {data.product} "
        f"{_('on')} {data.order_date}. "
        f"{_('The subscription was active at the time of the charge, and no cancellation request was received before the billing date of')} "
        f"{data.transaction_date}. {_('Service continued to be available through')} {data.delivery_date}."
    )


def duplicate_refunded(data: CoverLetterData) -> str:
    return (
        f"{_('The customer,')} {data.customer_name}, {_('ordered')} {data.product} "
        f"{_('on')} {data.order_date}, {_('which was delivered on')} {data.delivery_date}. "
        f"{_('We identified the duplicate payment and issued a refund of')} {data.amount}, "
        f"{_('so the customer has only been charged once for this order.')}"
    )


def duplicate_separate(data: CoverLetterData) -> str:
    return (
        f"{_('The customer,')} {data.customer_name}, {_('ordered')} {data.product} "
        f"{_('on')} {data.order_date}. "
        f"{_('This charge is not a duplicate: it corresponds to a separate order, and the receipts for each order are attached.')} "
        f"{_('The order was delivered on')} {data.delivery_date}."
    )


def unrecognized_charge(data: CoverLetterData) -> str:
    return (
        f"{_('Our records indicate that the customer and legitimate cardholder,')} {data.customer_name}, "
        f"{_('ordered')} {data.product} {_('on')} {data.order_date}, "
        f"{_('which was delivered on')} {data.delivery_date}. "
        f"{_('The purchase details match the information on file for this cardholder.')}"
    )


def general(data: CoverLetterData) -> str:
    return (
        f"{_('Our records indicate that the customer,')} {data.customer_name}, "
        f"{_('ordered')} {data.product} {_('on')} {data.order_date}, "
        f"{_('which was delivered on')} {data.delivery_date}."
    )


def generate_body(
    data: CoverLetterData,
    reason: DisputeReason,
    attachments: str,
    refund_status: Optional[RefundStatus] = None,
    duplicate_status: Optional[DuplicateStatus] = None,
) -> str:
    """
    Select and render the body for a reason.

    credit_not_processed with no refund status uses the refund-issued
    narrative; duplicate with no status uses the separate-charge one.
    """
    if reason == DisputeReason.PRODUCT_NOT_RECEIVED:
        narrative = product_not_received(data)
    elif reason == DisputeReason.CREDIT_NOT_PROCESSED:
        if refund_status == RefundStatus.REFUND_WAS_NOT_OWED:
            narrative = credit_refund_not_owed(data)
        else:
            narrative = credit_refund_issued(data)
    elif reason == DisputeReason.PRODUCT_UNACCEPTABLE:
        narrative = product_unacceptable(data)
    elif reason == DisputeReason.SUBSCRIPTION_CANCELED:
        narrative = subscription_canceled(data)
    elif reason == DisputeReason.DUPLICATE:
        if duplicate_status == DuplicateStatus.IS_DUPLICATE:
            narrative = duplicate_refunded(data)
        else:
            narrative = duplicate_separate(data)
    elif reason in (DisputeReason.FRAUDULENT, DisputeReason.UNRECOGNIZED):
        narrative = unrecognized_charge(data)
    else:
        narrative = general(data)

    return _assemble(data, narrative, attachments)
