"""
Evidence form sections.

Catalogue of the full evidence form, grouped into sections. A section may be
limited to some reasons and one product type; a field may be limited to one
product type. Entries marked denormalized repeat a field shown elsewhere and
are dropped when every section is shown at once (product type "multiple").
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

from ...models.dispute import DisputeReason, ProductType
from ...models.evidence import EvidenceKey
from ..i18n import _

# Free-text fields in the processor's schema are capped at this length.
MAX_TEXT_LENGTH = 20000


@dataclass(frozen=True)
class EvidenceSectionField:
    key: EvidenceKey
    type: str  # text | textarea | file | date
    label: Optional[str] = None
    description: Optional[str] = None
    max_length: Optional[int] = None
    product_type: Optional[ProductType] = None
    denormalized: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key.value,
            "type": self.type,
            "label": self.label,
            "description": self.description,
            "max_length": self.max_length,
        }


@dataclass(frozen=True)
class EvidenceSection:
    key: str
    title: str
    fields: Tuple[EvidenceSectionField, ...]
    description: Optional[str] = None
    reasons: Optional[FrozenSet[DisputeReason]] = None
    product_type: Optional[ProductType] = None
    denormalized: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "title": self.title,
            "description": self.description,
            "fields": [f.to_dict() for f in self.fields],
        }


def _textarea(key: EvidenceKey, label: str, description: Optional[str] = None) -> EvidenceSectionField:
    return EvidenceSectionField(
        key=key, type="textarea", label=label, description=description,
        max_length=MAX_TEXT_LENGTH,
    )


# =============================================================================
# SECTION CATALOGUE
# =============================================================================

def _general_section() -> EvidenceSection:
    return EvidenceSection(
        key="general",
        title=_("General evidence"),
        description=_("Provide general evidence about the customer and the order."),
        fields=(
            _textarea(
                EvidenceKey.PRODUCT_DESCRIPTION,
                _("Product description"),
                _(
                    "A description of the product or service and any relevant details on how "
                    "this was presented to the customer at the time of purchase."
                ),
            ),
            EvidenceSectionField(EvidenceKey.CUSTOMER_NAME, "text", _("Customer name")),
            EvidenceSectionField(EvidenceKey.CUSTOMER_EMAIL_ADDRESS, "text", _("Customer email")),
            EvidenceSectionField(
                EvidenceKey.CUSTOMER_SIGNATURE, "file", _("Customer signature"),
                _("A relevant document or contract showing the customer's signature (if available)."),
            ),
            EvidenceSectionField(
                EvidenceKey.BILLING_ADDRESS, "textarea", _("Customer billing address"),
            ),
            EvidenceSectionField(EvidenceKey.CUSTOMER_PURCHASE_IP, "text", _("Customer IP address")),
            EvidenceSectionField(
                EvidenceKey.RECEIPT, "file", _("Receipt"),
                _(
                    "Any receipt or message sent to the customer notifying them of the charge. "
                    "This field will be automatically filled with a processor generated email "
                    "receipt if any such receipt was sent."
                ),
            ),
            EvidenceSectionField(
                EvidenceKey.CUSTOMER_COMMUNICATION, "file", _("Customer communication"),
                _(
                    "Any communication with the customer that you feel is relevant to your case "
                    "(e.g. emails proving that they received the product or service, or "
                    "demonstrating their use of or satisfaction with the product or service)."
                ),
            ),
        ),
    )


def _refund_policy_section() -> EvidenceSection:
    return EvidenceSection(
        key="refund_policy_info",
        title=_("Refund policy info"),
        reasons=frozenset({DisputeReason.CREDIT_NOT_PROCESSED}),
        fields=(
            EvidenceSectionField(
                EvidenceKey.REFUND_POLICY, "file", _("Refund policy"),
                _("Your refund policy, as shown or provided to the customer."),
            ),
            _textarea(
                EvidenceKey.REFUND_POLICY_DISCLOSURE,
                _("Refund policy disclosure"),
                _(
                    "An explanation of how and when the customer was shown or provided your "
                    "refund policy prior to purchase."
                ),
            ),
            _textarea(
                EvidenceKey.REFUND_REFUSAL_EXPLANATION,
                _("Refund refusal explanation"),
                _("Your explanation for why the customer is not entitled to a refund."),
            ),
        ),
    )


def _duplicate_charge_section() -> EvidenceSection:
    return EvidenceSection(
        key="duplicate_charge_info",
        title=_("Duplicate charge info"),
        reasons=frozenset({DisputeReason.DUPLICATE}),
        fields=(
            EvidenceSectionField(
                EvidenceKey.DUPLICATE_CHARGE_ID, "text", _("Duplicate charge ID"),
                _(
                    "The charge ID for the previous payment that appears to be a duplicate "
                    "of the one that is disputed."
                ),
            ),
            _textarea(
                EvidenceKey.DUPLICATE_CHARGE_EXPLANATION,
                _("Explanation of duplicate charge"),
                _(
                    "An explanation of the difference between the disputed payment and the "
                    "prior one that appears to be a duplicate."
                ),
            ),
            EvidenceSectionField(
                EvidenceKey.DUPLICATE_CHARGE_DOCUMENTATION, "file", _("Duplicate charge documentation"),
                _(
                    "Upload documentation for the prior payment that can uniquely identify it, "
                    "such as a separate receipt. This document should be paired with a similar "
                    "document from the disputed payment that proves the two are separate."
                ),
            ),
            EvidenceSectionField(
                EvidenceKey.SHIPPING_DOCUMENTATION, "file", _("Shipping documentation"),
                _("A shipping label or receipt for the disputed payment."),
                product_type=ProductType.PHYSICAL_PRODUCT,
                denormalized=True,
            ),
            EvidenceSectionField(
                EvidenceKey.SERVICE_DOCUMENTATION, "file", _("Service documentation"),
                _("A copy of a service agreement or documentation for the disputed payment."),
                product_type=ProductType.OFFLINE_SERVICE,
                denormalized=True,
            ),
        ),
    )


def _shipping_section() -> EvidenceSection:
    return EvidenceSection(
        key="shipping_information",
        title=_("Shipping information"),
        reasons=frozenset({
            DisputeReason.FRAUDULENT,
            DisputeReason.PRODUCT_NOT_RECEIVED,
            DisputeReason.PRODUCT_UNACCEPTABLE,
            DisputeReason.UNRECOGNIZED,
        }),
        product_type=ProductType.PHYSICAL_PRODUCT,
        fields=(
            EvidenceSectionField(
                EvidenceKey.SHIPPING_CARRIER, "text", _("Shipping carrier"),
                _(
                    "The delivery service that shipped a physical product, such as Fedex, UPS, "
                    "USPS, etc. If multiple carriers were used for this purchase, please "
                    "separate them with commas."
                ),
            ),
            EvidenceSectionField(
                EvidenceKey.SHIPPING_TRACKING_NUMBER, "text", _("Tracking number"),
                _(
                    "The tracking number (if available) for a physical product, obtained from "
                    "the delivery service. Separate multiple tracking numbers with commas."
                ),
            ),
            EvidenceSectionField(
                EvidenceKey.SHIPPING_DOCUMENTATION, "file", _("Proof of shipping"),
                _(
                    "Provide documentation as proof that a product was shipped to the "
                    "cardholder at the same address the cardholder provided to you."
                ),
            ),
            EvidenceSectionField(
                EvidenceKey.SHIPPING_DATE, "date", _("Date of shipment"),
                _(
                    "The date on which a physical product began its route to the shipping "
                    "address. This date should be prior to the date of the dispute."
                ),
            ),
            EvidenceSectionField(
                EvidenceKey.SHIPPING_ADDRESS, "textarea", _("Shipping address"),
                _(
                    "The address to which a physical product was shipped. The shipping address "
                    "must match a billing address verified with AVS."
                ),
            ),
        ),
    )


def _cancellation_section() -> EvidenceSection:
    return EvidenceSection(
        key="cancellation_policy_info",
        title=_("Cancellation policy info"),
        reasons=frozenset({DisputeReason.SUBSCRIPTION_CANCELED}),
        fields=(
            EvidenceSectionField(
                EvidenceKey.CANCELLATION_POLICY, "file", _("Cancellation policy"),
                _("Your subscription cancellation policy, as shown to the customer."),
            ),
            _textarea(
                EvidenceKey.CANCELLATION_POLICY_DISCLOSURE,
                _("Cancellation policy disclosure"),
                _(
                    "An explanation of how and when the customer was shown your cancellation "
                    "policy prior to purchase."
                ),
            ),
            _textarea(
                EvidenceKey.CANCELLATION_REBUTTAL,
                _("Cancellation rebuttal"),
                _("A justification for why the customer's subscription was not canceled."),
            ),
        ),
    )


def _activity_log_sections() -> List[EvidenceSection]:
    detailed = "\n".join([
        _("Provide at least two of the following pieces of information:"),
        _("• Customer's IP address and their device's geographical location at the time of purchase"),
        _("• Device ID and name of the device"),
        _("• Customer name and email address linked to their customer profile"),
        _("• Evidence that the customer logged into their account for your business before the transaction date"),
        _("• Evidence that your website or app was accessed by the cardholder for purchase or services on or after the transaction date"),
        _("• Evidence that the same device and card used in the disputed payment was used in a previous payment that was not disputed"),
    ])
    return [
        EvidenceSection(
            key="download_and_activity_logs",
            title=_("Download and activity logs"),
            reasons=frozenset({DisputeReason.FRAUDULENT, DisputeReason.PRODUCT_NOT_RECEIVED}),
            product_type=ProductType.DIGITAL_PRODUCT_OR_SERVICE,
            fields=(EvidenceSectionField(EvidenceKey.ACCESS_ACTIVITY_LOG, "file", description=detailed),),
        ),
        EvidenceSection(
            key="download_and_activity_logs",
            title=_("Download and activity logs"),
            reasons=frozenset({
                DisputeReason.PRODUCT_UNACCEPTABLE,
                DisputeReason.SUBSCRIPTION_CANCELED,
                DisputeReason.UNRECOGNIZED,
            }),
            product_type=ProductType.DIGITAL_PRODUCT_OR_SERVICE,
            denormalized=True,
            fields=(
                EvidenceSectionField(
                    EvidenceKey.ACCESS_ACTIVITY_LOG, "file",
                    description=_(
                        "Any server or activity logs showing proof that the cardholder accessed "
                        "or downloaded the purchased digital product. This information should "
                        "include IP addresses, corresponding timestamps, and any detailed "
                        "recorded activity."
                    ),
                ),
            ),
        ),
    ]


def _service_section() -> EvidenceSection:
    return EvidenceSection(
        key="service_details",
        title=_("Service details"),
        reasons=frozenset({
            DisputeReason.FRAUDULENT,
            DisputeReason.PRODUCT_NOT_RECEIVED,
            DisputeReason.PRODUCT_UNACCEPTABLE,
            DisputeReason.SUBSCRIPTION_CANCELED,
            DisputeReason.UNRECOGNIZED,
        }),
        product_type=ProductType.OFFLINE_SERVICE,
        fields=(
            EvidenceSectionField(
                EvidenceKey.SERVICE_DATE, "date", _("Service date"),
                _("The date on which the cardholder received or began receiving the purchased service."),
            ),
            EvidenceSectionField(
                EvidenceKey.SERVICE_DOCUMENTATION, "file", _("Proof of service"),
                _(
                    "Documentation showing proof that a service was provided to the cardholder. "
                    "This could include a copy of a signed contract, work order, or other form "
                    "of written agreement."
                ),
            ),
        ),
    )


def _uncategorized_section() -> EvidenceSection:
    return EvidenceSection(
        key="uncategorized",
        title=_("Additional details"),
        description=_(
            "Provide any extra evidence or statements you'd like the bank to see, either as "
            "text or by uploading a document."
        ),
        fields=(
            _textarea(EvidenceKey.UNCATEGORIZED_TEXT, _("Additional details")),
            EvidenceSectionField(EvidenceKey.UNCATEGORIZED_FILE, "file", _("Additional document")),
        ),
    )


def build_sections() -> List[EvidenceSection]:
    return [
        _general_section(),
        _refund_policy_section(),
        _duplicate_charge_section(),
        _shipping_section(),
        _cancellation_section(),
        *_activity_log_sections(),
        _service_section(),
        _uncategorized_section(),
    ]


def get_evidence_sections(
    reason: Union[DisputeReason, str, None],
    product_type: Union[ProductType, str, None],
) -> List[EvidenceSection]:
    """
    Return the evidence form sections that pertain to a reason and product type.

    Empty when either input is missing. For "multiple", every section and
    field that is not denormalized is returned.
    Raises ValueError for a product type outside ProductType.
    """
    if not reason or not product_type:
        return []

    reason = DisputeReason.parse(reason)
    product_type = ProductType(product_type)
    sections = build_sections()

    if product_type == ProductType.MULTIPLE:
        return [
            replace(section, fields=tuple(f for f in section.fields if not f.denormalized))
            for section in sections
            if not section.denormalized
        ]

    result = []
    for section in sections:
        if section.reasons is not None and reason not in section.reasons:
            continue
        if section.product_type is not None and section.product_type != product_type:
            continue
        fields = tuple(
            f for f in section.fields
            if f.product_type is None or f.product_type == product_type
        )
        result.append(replace(section, fields=fields))
    return result
