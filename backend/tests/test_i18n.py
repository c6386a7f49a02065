"""
Display-String Lookup Tests

An installed translator must reach labels and placeholders at call time.
"""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dispute_engine.models import DisputeCase, DisputeReason
from dispute_engine.services.cover_letter import compile_attachments
from dispute_engine.services.cover_letter import formatting as fmt
from dispute_engine.services.evidence import resolve_rule_table
from dispute_engine.services.i18n import TEXT_DOMAIN, install_translator, translate


@pytest.fixture
def upper_case_translator():
    seen_domains = []

    def lookup(text, domain):
        seen_domains.append(domain)
        return text.upper()

    install_translator(lookup)
    yield seen_domains
    install_translator(None)


class TestTranslate:

    def test_identity_by_default(self):
        assert translate("Order receipt") == "Order receipt"

    def test_installed_lookup_changes_labels(self, upper_case_translator):
        documents = resolve_rule_table("general")
        assert documents[0].label == "ORDER RECEIPT"
        assert set(upper_case_translator) == {TEXT_DOMAIN}

    def test_installed_lookup_reaches_placeholders(self, upper_case_translator):
        assert fmt.format_amount(None, "usd") == "<AMOUNT>"

    def test_installed_lookup_reaches_attachments(self, upper_case_translator):
        case = DisputeCase(reason=DisputeReason.FRAUDULENT, evidence={"receipt": "file_1"})
        assert compile_attachments(case) == "• ORDER RECEIPT (ATTACHMENT A)"

    def test_uninstall_restores_identity(self, upper_case_translator):
        install_translator(None)
        assert resolve_rule_table("general")[0].label == "Order receipt"
