"""
Evidence Form Section Tests
"""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dispute_engine.models import DisputeCase, VOCABULARY
from dispute_engine.services.evidence import confirmation_message, get_evidence_sections
from dispute_engine.services.evidence.sections import build_sections


def section_keys(sections):
    return [s.key for s in sections]


class TestGetEvidenceSections:

    @pytest.mark.parametrize("reason,product_type", [
        (None, "physical_product"),
        ("fraudulent", None),
        ("", ""),
    ])
    def test_missing_inputs_give_nothing(self, reason, product_type):
        assert get_evidence_sections(reason, product_type) == []

    def test_physical_product_not_received(self):
        assert section_keys(get_evidence_sections("product_not_received", "physical_product")) == [
            "general", "shipping_information", "uncategorized",
        ]

    def test_credit_not_processed_gets_refund_section(self):
        keys = section_keys(get_evidence_sections("credit_not_processed", "other"))
        assert keys == ["general", "refund_policy_info", "uncategorized"]

    def test_duplicate_filters_fields_by_product_type(self):
        sections = get_evidence_sections("duplicate", "physical_product")
        duplicate = next(s for s in sections if s.key == "duplicate_charge_info")
        field_keys = [f.key.value for f in duplicate.fields]
        assert "shipping_documentation" in field_keys
        assert "service_documentation" not in field_keys

    def test_digital_fraud_gets_detailed_activity_log(self):
        sections = get_evidence_sections("fraudulent", "digital_product_or_service")
        logs = [s for s in sections if s.key == "download_and_activity_logs"]
        assert len(logs) == 1
        assert "at least two" in logs[0].fields[0].description

    def test_multiple_drops_denormalized(self):
        sections = get_evidence_sections("fraudulent", "multiple")
        assert len(section_keys(sections)) == len(build_sections()) - 1
        for section in sections:
            assert not section.denormalized
            assert not any(f.denormalized for f in section.fields)

    def test_unknown_product_type_raises(self):
        with pytest.raises(ValueError):
            get_evidence_sections("fraudulent", "spaceship")

    def test_all_field_keys_in_vocabulary(self):
        for section in build_sections():
            assert {f.key.value for f in section.fields} <= VOCABULARY


class TestConfirmationMessage:

    def test_compliance_dispute(self):
        message = confirmation_message(DisputeCase.from_dict({"reason": "noncompliant"}))
        assert "compliance process" in message.subtitle
        assert len(message.next_steps) == 3

    def test_issuer_review(self):
        message = confirmation_message(DisputeCase.from_dict({"reason": "fraudulent"}))
        assert "cardholder's bank" in message.subtitle
        assert len(message.next_steps) == 2
