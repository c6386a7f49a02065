"""
Submission confirmation copy.

Compliance disputes are reviewed by the card network, not the issuer, so
the confirmation shown after submitting evidence differs.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from ...models.dispute import DisputeCase
from ..i18n import _


@dataclass(frozen=True)
class ConfirmationMessage:
    title: str
    subtitle: str
    next_steps: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "next_steps": list(self.next_steps),
        }


def confirmation_message(case: DisputeCase) -> ConfirmationMessage:
    """Build the post-submission message for a dispute."""
    updates = _(
        "You'll be informed of any updates via email, or you can check the status "
        "of your case at any time in your Disputes area."
    )

    if case.is_compliance_dispute:
        return ConfirmationMessage(
            title=_("Thanks for sharing your response!"),
            subtitle=_("Your response has been submitted under Visa's compliance process."),
            next_steps=[
                _(
                    "Visa will review your submission under its network rules and "
                    "determine the outcome of the dispute."
                ),
                _("This review typically takes several weeks, but in some cases may take up to 3 months."),
                updates,
            ],
        )

    return ConfirmationMessage(
        title=_("Thanks for sharing your response!"),
        subtitle=_("Your evidence has been sent to the cardholder's bank for review."),
        next_steps=[
            _(
                "The cardholder's bank will review your response. Please be patient, this "
                "usually takes a few weeks, but in some cases it can take up to 3 months."
            ),
            updates,
        ],
    )
