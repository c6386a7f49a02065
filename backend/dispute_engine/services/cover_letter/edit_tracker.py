"""
Manual-Edit Tracker

Decides whether a freshly composed letter may replace the displayed one.

Transitions:
    load    stored text kept; edited iff it differs from the candidate
    update  replace only if not edited, or the display still shows the
            previous candidate
    edit    empty text resets to the candidate; otherwise edited iff the
            text differs from the candidate
"""

import logging
from typing import Callable, Optional

from ...models.cover_letter import CoverLetterDraft, RegenerationResult

logger = logging.getLogger(__name__)


def initial_draft(stored_text: Optional[str], candidate_text: str) -> CoverLetterDraft:
    """First load of a dispute."""
    if not stored_text:
        return CoverLetterDraft(text=candidate_text, is_manually_edited=False, last_generated=candidate_text)
    return CoverLetterDraft(
        text=stored_text,
        is_manually_edited=stored_text != candidate_text,
        last_generated=candidate_text,
    )


def should_auto_regenerate(
    stored_text: Optional[str],
    current_displayed_text: str,
    candidate_text: str,
    was_manually_edited: bool,
) -> RegenerationResult:
    """
    Input change after load.

    Args:
        stored_text: Candidate computed on the previous recompute
        current_displayed_text: Letter currently shown
        candidate_text: Candidate computed now
        was_manually_edited: Current edited flag
    """
    if not was_manually_edited or current_displayed_text == stored_text:
        return RegenerationResult(new_text=candidate_text, new_manually_edited=False)
    return RegenerationResult(new_text=current_displayed_text, new_manually_edited=True)


def apply_user_edit(new_text: str, candidate_text: str) -> RegenerationResult:
    """Direct user edit of the letter text."""
    if new_text == "":
        return RegenerationResult(new_text=candidate_text, new_manually_edited=False)
    return RegenerationResult(new_text=new_text, new_manually_edited=new_text != candidate_text)


class CoverLetterSession:
    """
    Holds the displayed letter for one dispute across recomputes.

    compose: zero-argument callable returning the current candidate.
    """

    def __init__(self, compose: Callable[[], str]):
        self.compose = compose
        self.draft: Optional[CoverLetterDraft] = None

    @property
    def text(self) -> str:
        return self.draft.text if self.draft else ""

    @property
    def is_manually_edited(self) -> bool:
        return bool(self.draft and self.draft.is_manually_edited)

    def load(self, stored_text: Optional[str] = None) -> CoverLetterDraft:
        self.draft = initial_draft(stored_text, self.compose())
        logger.debug(f"Loaded cover letter (manually_edited={self.draft.is_manually_edited})")
        return self.draft

    def update(self) -> CoverLetterDraft:
        """Recompute after an input change."""
        if self.draft is None:
            return self.load()
        candidate = self.compose()
        result = should_auto_regenerate(
            self.draft.last_generated,
            self.draft.text,
            candidate,
            self.draft.is_manually_edited,
        )
        self.draft = CoverLetterDraft(
            text=result.new_text,
            is_manually_edited=result.new_manually_edited,
            last_generated=candidate,
        )
        return self.draft

    def edit(self, new_text: str) -> CoverLetterDraft:
        candidate = self.compose()
        result = apply_user_edit(new_text, candidate)
        self.draft = CoverLetterDraft(
            text=result.new_text,
            is_manually_edited=result.new_manually_edited,
            last_generated=candidate,
        )
        return self.draft
