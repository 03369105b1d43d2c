"""Tests for email repair."""

import pytest

from salesprep.normalization.email import is_valid_email, repair_email

SHAPE_EXAMPLES = [
    None, "", "NULL", "john@gmail", "jane@yahoo", "bob@hotmail", "amy@outlook",
    "sam@", "lee@company", "Mixed.Case@Example.COM", "nodomain", "@gmail.com",
    "a@b@c.com", "  spaced@example.org  ",
]


class TestRepairEmail:
    @pytest.mark.parametrize("raw", [None, "", "   ", "NULL"])
    def test_missing_email_is_inferred(self, raw):
        result = repair_email(raw, "CUST_042")
        assert result.email == "customer_CUST_042@inferred.com"
        assert result.was_inferred is True
        assert result.was_repaired is False

    @pytest.mark.parametrize("provider", ["gmail", "yahoo", "hotmail", "outlook"])
    def test_bare_provider_gets_dot_com(self, provider):
        result = repair_email(f"john@{provider}", "C1")
        assert result.email == f"john@{provider}.com"
        assert result.was_repaired is True
        assert result.was_inferred is False

    def test_trailing_at_gets_placeholder_domain(self):
        assert repair_email("sam@", "C1").email == "sam@domain.com"

    def test_domain_without_dot_gets_dot_com(self):
        assert repair_email("lee@company", "C1").email == "lee@company.com"

    def test_valid_email_lower_cased(self):
        result = repair_email("Mixed.Case@Example.COM", "C1")
        assert result.email == "mixed.case@example.com"
        assert result.was_repaired is False
        assert result.was_inferred is False

    def test_provider_match_ignores_case(self):
        assert repair_email("John@Gmail", "C1").email == "john@gmail.com"

    @pytest.mark.parametrize("raw", ["nodomain", "@gmail.com", "a@b@c.com"])
    def test_unrepairable_falls_back_to_inferred(self, raw):
        result = repair_email(raw, "C9")
        assert result.email == "customer_C9@inferred.com"
        assert result.was_inferred is True
        assert result.was_repaired is True

    @pytest.mark.parametrize("raw", SHAPE_EXAMPLES)
    def test_output_always_well_shaped(self, raw):
        assert is_valid_email(repair_email(raw, "C1").email)

    @pytest.mark.parametrize(
        "customer_id,expected",
        [
            ("jane@corp", "customer_jane_corp@inferred.com"),
            ("a@b.com", "customer_a_b.com@inferred.com"),
            ("CUST 7", "customer_CUST_7@inferred.com"),
            ("x@@ y", "customer_x_y@inferred.com"),
        ],
    )
    def test_inferred_address_escapes_unsafe_customer_ids(self, customer_id, expected):
        missing = repair_email(None, customer_id)
        fallback = repair_email("nodomain", customer_id)
        assert missing.email == fallback.email == expected
        assert is_valid_email(missing.email)


class TestIsValidEmail:
    def test_valid(self):
        assert is_valid_email("a@b.co")

    @pytest.mark.parametrize("value", [None, "a@b", "a@.c", "@b.com", "a@b.com@", "a.b"])
    def test_invalid(self, value):
        assert not is_valid_email(value)

    def test_too_short(self):
        assert not is_valid_email("a@.b")
