"""
Manual-Edit Tracker Tests

Verifies:
1. First load keeps stored text and flags divergence
2. Input changes only replace untouched letters
3. Clearing the letter resets it to the generated one
4. Manual edits survive unrelated input changes
"""

import os
import sys
from datetime import date

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dispute_engine.models import AccountInfo, DisputeCase
from dispute_engine.services.cover_letter import (
    CoverLetterSession, apply_user_edit, compose_cover_letter, initial_draft, should_auto_regenerate,
)


class TestInitialDraft:

    def test_no_stored_text_uses_candidate(self):
        draft = initial_draft(None, "generated")
        assert draft.text == "generated"
        assert draft.is_manually_edited is False

    def test_matching_stored_text(self):
        draft = initial_draft("generated", "generated")
        assert draft.text == "generated"
        assert draft.is_manually_edited is False

    def test_diverged_stored_text_is_kept(self):
        draft = initial_draft("my letter", "generated")
        assert draft.text == "my letter"
        assert draft.is_manually_edited is True
        assert draft.last_generated == "generated"


class TestShouldAutoRegenerate:

    def test_not_edited_replaces(self):
        result = should_auto_regenerate("old", "old", "new", False)
        assert (result.new_text, result.new_manually_edited) == ("new", False)

    def test_edited_but_display_is_previous_candidate_replaces(self):
        result = should_auto_regenerate("old", "old", "new", True)
        assert (result.new_text, result.new_manually_edited) == ("new", False)

    def test_edited_and_diverged_is_kept(self):
        result = should_auto_regenerate("old", "mine", "new", True)
        assert (result.new_text, result.new_manually_edited) == ("mine", True)


class TestApplyUserEdit:

    def test_empty_resets(self):
        result = apply_user_edit("", "generated")
        assert (result.new_text, result.new_manually_edited) == ("generated", False)

    def test_edit_diverging(self):
        result = apply_user_edit("mine", "generated")
        assert (result.new_text, result.new_manually_edited) == ("mine", True)

    def test_edit_matching_candidate(self):
        result = apply_user_edit("generated", "generated")
        assert result.new_manually_edited is False


# =============================================================================
# SESSION
# =============================================================================

@pytest.fixture
def inputs():
    return {
        "case": DisputeCase.from_dict({"id": "dp_1", "reason": "fraudulent"}),
        "account": AccountInfo(name="Shop"),
        "bank": "First Bank",
    }


@pytest.fixture
def session(inputs):
    return CoverLetterSession(
        lambda: compose_cover_letter(
            inputs["case"], inputs["account"], inputs["bank"], today=date(2024, 1, 1),
        )
    )


class TestCoverLetterSession:

    def test_untouched_letter_follows_inputs(self, session, inputs):
        session.load()
        assert "First Bank" in session.text
        inputs["bank"] = "Second Bank"
        session.update()
        assert "Second Bank" in session.text
        assert session.is_manually_edited is False

    def test_stored_divergent_letter_survives_bank_change(self, session, inputs):
        session.load("A letter I wrote myself.")
        assert session.is_manually_edited is True
        inputs["bank"] = "Second Bank"
        session.update()
        assert session.text == "A letter I wrote myself."
        assert session.is_manually_edited is True

    def test_user_edit_survives_evidence_change(self, session, inputs):
        session.load()
        session.edit(session.text + "\nP.S. extra detail")
        edited = session.text
        inputs["case"] = DisputeCase.from_dict({
            "id": "dp_1", "reason": "fraudulent", "evidence": {"receipt": "file_1"},
        })
        session.update()
        assert session.text == edited

    def test_clearing_resets_to_generated(self, session, inputs):
        session.load("custom")
        inputs["bank"] = "Other Bank"
        session.edit("")
        assert "Other Bank" in session.text
        assert session.is_manually_edited is False
        inputs["bank"] = "Third Bank"
        session.update()
        assert "Third Bank" in session.text

    def test_update_before_load_loads(self, session):
        draft = session.update()
        assert draft.is_manually_edited is False
        assert "First Bank" in draft.text
