"""
Cover-Letter Composer Tests

Verifies:
1. Five sections joined by blank lines
2. Placeholders for every missing value
3. Body selection per reason and sub-status
4. Amount and date formatting
5. Idempotence
"""

import datetime as datetime_module
import os
import sys
import types
from datetime import date, datetime, timezone

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dispute_engine.models import AccountInfo, DisputeCase, DisputeReason
from dispute_engine.services.cover_letter import (
    CoverLetterComposer, build_cover_letter_data, compose_cover_letter,
)
from dispute_engine.services.cover_letter import formatting as fmt

TODAY = date(2024, 3, 5)
# 2024-01-15 14:30:00 UTC
CREATED = int(datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc).timestamp())


def freeze_parser_clock(monkeypatch, moment):
    """Pin the clock dateutil consults when a date string omits parts."""

    class FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            return cls(moment.year, moment.month, moment.day, tzinfo=tz)

    clock = types.SimpleNamespace(**vars(datetime_module))
    clock.datetime = FrozenDatetime
    monkeypatch.setattr("dateutil.parser._parser.datetime", clock)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def composer():
    return CoverLetterComposer()


@pytest.fixture
def account():
    return AccountInfo(
        name="Test Store",
        support_address_line1="123 Main St",
        support_address_line2="Suite 4",
        support_address_city="Springfield",
        support_address_state="IL",
        support_address_postal_code="62701",
        support_address_country="US",
        support_email="test@example.com",
        support_phone="123-456-7890",
    )


@pytest.fixture
def dispute_data():
    return {
        "id": "dp_123",
        "reason": "product_not_received",
        "amount": 2599,
        "currency": "usd",
        "created": CREATED,
        "charge": {
            "id": "ch_123",
            "created": CREATED,
            "billing_details": {"name": "John Doe"},
            "level3": {"line_items": [{"product_description": "Test Product"}]},
        },
        "evidence": {"shipping_date": "2024-01-20"},
    }


@pytest.fixture
def case(dispute_data):
    return DisputeCase.from_dict(dispute_data)


# =============================================================================
# STRUCTURE
# =============================================================================

class TestStructure:

    def test_five_sections(self, composer, case, account):
        letter = composer.compose(case, account, "Test Bank", today=TODAY)
        sections = letter.split("\n\n")
        assert sections[0] == "\n".join([
            "Test Store",
            "123 Main St, Suite 4, Springfield, IL 62701 US",
            "test@example.com",
            "123-456-7890",
            "March 5, 2024",
        ])
        assert sections[1] == "To: Test Bank\nSubject: Chargeback Dispute – Case #dp_123"
        assert sections[2] == "Dear Dispute Resolution Team,"
        assert letter.endswith("Thank you,\nTest Store")

    def test_body_has_documentation_and_request(self, composer, case, account):
        letter = composer.compose(case, account, "Test Bank", today=TODAY)
        assert "To support our case, we are providing the following documentation:\n•" in letter
        assert "we respectfully request that the chargeback be reversed" in letter

    def test_empty_account_still_renders_address_slots(self, composer, case):
        letter = composer.compose(case, AccountInfo(), today=TODAY)
        assert ", , ,  " in letter.split("\n")[1]
        assert "<business@email.com>" in letter
        assert "<Business Phone Number>" in letter

    def test_datetime_today_includes_time(self, composer, case, account):
        letter = composer.compose(case, account, today=datetime(2024, 3, 5, 9, 5))
        assert "March 5, 2024, 9:05 AM" in letter


# =============================================================================
# PLACEHOLDERS
# =============================================================================

class TestPlaceholders:

    def test_empty_case_uses_placeholders(self, composer, account):
        letter = composer.compose(DisputeCase(), account, today=TODAY)
        for token in (
            "<Bank Name>", "<Case Number>", "<Transaction ID>", "<Transaction Date>",
            "<Customer Name>", "<Product>", "<Order Date>", "<Delivery/Service Date>",
        ):
            assert token in letter

    def test_amount_placeholder(self, account):
        data = build_cover_letter_data(DisputeCase(), account, today=TODAY)
        assert data.amount == "<Amount>"

    def test_bank_name_falls_back_to_case(self, composer, dispute_data, account):
        dispute_data["bank_name"] = "Case Bank"
        letter = composer.compose(DisputeCase.from_dict(dispute_data), account, today=TODAY)
        assert "To: Case Bank" in letter

    def test_malformed_shipping_date(self, dispute_data, account):
        dispute_data["evidence"]["shipping_date"] = "not a date"
        data = build_cover_letter_data(DisputeCase.from_dict(dispute_data), account, today=TODAY)
        assert data.delivery_date == "<Delivery/Service Date>"


# =============================================================================
# INTERPOLATED VALUES
# =============================================================================

class TestValues:

    def test_interpolated_values(self, case, account):
        data = build_cover_letter_data(case, account, "Test Bank", today=TODAY)
        assert data.case_number == "dp_123"
        assert data.transaction_id == "ch_123"
        assert data.transaction_date == "January 15, 2024, 2:30 PM"
        assert data.order_date == "January 15, 2024, 2:30 PM"
        assert data.customer_name == "John Doe"
        assert data.product == "Test Product"
        assert data.delivery_date == "January 20, 2024"
        assert data.amount == "25.99 USD"

    def test_explicit_product_description_wins(self, dispute_data, account):
        dispute_data["evidence"]["product_description"] = "Blue widget"
        data = build_cover_letter_data(DisputeCase.from_dict(dispute_data), account, today=TODAY)
        assert data.product == "Blue widget"

    def test_line_items_joined(self, dispute_data, account):
        dispute_data["charge"]["level3"]["line_items"].append({"product_description": "Red widget"})
        data = build_cover_letter_data(DisputeCase.from_dict(dispute_data), account, today=TODAY)
        assert data.product == "Test Product, Red widget"

    @pytest.mark.parametrize("amount,currency,expected", [
        (2599, "usd", "25.99 USD"),
        (100, "eur", "1.00 EUR"),
        (0, "gbp", "0.00 GBP"),
        (None, "usd", "<Amount>"),
    ])
    def test_format_amount(self, amount, currency, expected):
        assert fmt.format_amount(amount, currency) == expected

    def test_format_timestamp_midnight(self):
        midnight = int(datetime(2024, 7, 4, 0, 0, tzinfo=timezone.utc).timestamp())
        assert fmt.format_timestamp(midnight, fmt.ORDER_DATE) == "July 4, 2024, 12:00 AM"

    @pytest.mark.parametrize("amount", ["1000", 1000.0])
    def test_format_amount_coerces_numbers(self, amount):
        assert fmt.format_amount(amount, "usd") == "10.00 USD"

    @pytest.mark.parametrize("amount", ["ten dollars", [1000], {}])
    def test_format_amount_malformed(self, amount):
        assert fmt.format_amount(amount, "usd") == "<Amount>"

    def test_string_amount_from_dict(self, dispute_data, account):
        dispute_data["amount"] = "1000"
        data = build_cover_letter_data(DisputeCase.from_dict(dispute_data), account, today=TODAY)
        assert data.amount == "10.00 USD"

    @pytest.mark.parametrize("value", ["5", "March 5", "2024-03", "March 2024"])
    def test_incomplete_shipping_date(self, value):
        assert fmt.format_delivery_date(value) == "<Delivery/Service Date>"

    @pytest.mark.parametrize("value", ["2024-01-20", "January 20, 2024", "20 Jan 2024 10:15"])
    def test_complete_shipping_date(self, value):
        assert fmt.format_delivery_date(value) == "January 20, 2024"

    def test_incomplete_shipping_date_ignores_clock(self, monkeypatch, dispute_data, account):
        dispute_data["evidence"]["shipping_date"] = "March 5"
        case = DisputeCase.from_dict(dispute_data)

        freeze_parser_clock(monkeypatch, datetime(2026, 10, 19))
        first = compose_cover_letter(case, account, today=TODAY)
        freeze_parser_clock(monkeypatch, datetime(2031, 2, 11))
        second = compose_cover_letter(case, account, today=TODAY)

        assert first == second
        assert "<Delivery/Service Date>" in first


# =============================================================================
# BODIES
# =============================================================================

class TestBodies:

    def test_product_not_received(self, composer, case, account):
        letter = composer.compose(case, account, today=TODAY)
        assert "and received it on January 20, 2024" in letter

    def test_fraudulent_cardholder_narrative(self, composer, account):
        case = DisputeCase.from_dict({
            "reason": "fraudulent",
            "charge": {"billing_details": {"name": "John Doe"}},
            "evidence": {"receipt": "file_1"},
        })
        letter = composer.compose(case, account, today=TODAY)
        assert "legitimate cardholder" in letter
        assert "John Doe" in letter
        attachment_lines = [line for line in letter.split("\n") if line.startswith("• ")]
        assert attachment_lines == ["• Order receipt (Attachment A)"]

    def test_unrecognized_shares_fraudulent_body(self, composer, dispute_data, account):
        dispute_data["reason"] = "fraudulent"
        fraudulent = composer.compose(DisputeCase.from_dict(dispute_data), account, today=TODAY)
        dispute_data["reason"] = "unrecognized"
        unrecognized = composer.compose(DisputeCase.from_dict(dispute_data), account, today=TODAY)
        assert fraudulent == unrecognized

    def test_credit_not_processed_branches(self, composer, dispute_data, account):
        dispute_data["reason"] = "credit_not_processed"
        case = DisputeCase.from_dict(dispute_data)
        issued = composer.compose(case, account, refund_status="refund_has_been_issued", today=TODAY)
        not_owed = composer.compose(case, account, refund_status="refund_was_not_owed", today=TODAY)
        assert "has already been issued" in issued
        assert "not eligible for a refund of 25.99 USD" in not_owed

    def test_duplicate_branches(self, composer, dispute_data, account):
        dispute_data["reason"] = "duplicate"
        case = DisputeCase.from_dict(dispute_data)
        refunded = composer.compose(case, account, duplicate_status="is_duplicate", today=TODAY)
        separate = composer.compose(case, account, duplicate_status="is_not_duplicate", today=TODAY)
        assert "issued a refund of 25.99 USD" in refunded
        assert "This charge is not a duplicate" in separate

    def test_status_override_relabels_attachments(self, composer, dispute_data, account):
        dispute_data["reason"] = "duplicate"
        dispute_data["evidence"]["uncategorized_file"] = "file_1"
        letter = composer.compose(
            DisputeCase.from_dict(dispute_data), account, duplicate_status="is_duplicate", today=TODAY,
        )
        assert "• Refund receipt (Attachment A)" in letter

    @pytest.mark.parametrize("reason", [r.value for r in DisputeReason] + ["", "bogus"])
    def test_every_body_interpolates_case_values(self, composer, dispute_data, account, reason):
        dispute_data["reason"] = reason
        letter = composer.compose(DisputeCase.from_dict(dispute_data), account, today=TODAY)
        for value in ("dp_123", "ch_123", "January 15, 2024, 2:30 PM", "John Doe", "Test Product", "January 20, 2024"):
            assert value in letter

    def test_general_and_unknown_share_default_body(self, composer, dispute_data, account):
        dispute_data["reason"] = "general"
        general = composer.compose(DisputeCase.from_dict(dispute_data), account, today=TODAY)
        dispute_data["reason"] = "bogus"
        unknown = composer.compose(DisputeCase.from_dict(dispute_data), account, today=TODAY)
        assert general == unknown


# =============================================================================
# DETERMINISM
# =============================================================================

class TestDeterminism:

    def test_compose_twice_identical(self, composer, case, account):
        assert composer.compose(case, account, "Bank", today=TODAY) == composer.compose(
            case, account, "Bank", today=TODAY
        )

    def test_convenience_function_matches_class(self, composer, case, account):
        assert compose_cover_letter(case, account, "Bank", today=TODAY) == composer.compose(
            case, account, "Bank", today=TODAY
        )

    def test_compose_does_not_mutate_case(self, composer, case, account):
        composer.compose(case, account, duplicate_status="is_duplicate", today=TODAY)
        assert case.duplicate_status is None
        assert case.reason == DisputeReason.PRODUCT_NOT_RECEIVED
