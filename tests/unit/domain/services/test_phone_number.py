"""Unit tests for Nigerian phone number normalization and validation."""

import pytest

from captiveportal.domain.services.phone_number import (
    is_valid_phone_number,
    normalize_phone_number,
)


class TestNormalizePhoneNumber:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("08012345678", "08012345678"),
            ("080-1234-5678", "08012345678"),
            ("0801 234 5678", "08012345678"),
            ("(0801) 234.5678", "08012345678"),
        ],
    )
    def test_strips_separators(self, raw, expected):
        assert normalize_phone_number(raw) == expected

    def test_keeps_other_characters(self):
        assert normalize_phone_number("+2348012345678") == "+2348012345678"


class TestIsValidPhoneNumber:
    @pytest.mark.parametrize("prefix", ["070", "080", "081", "090", "091"])
    def test_accepts_known_prefixes(self, prefix):
        assert is_valid_phone_number(f"{prefix}12345678") is True

    def test_accepts_number_with_separators(self):
        assert is_valid_phone_number("080-1234-5678") is True

    @pytest.mark.parametrize(
        "value",
        [
            "07112345678",  # unknown prefix
            "0801234567",  # too short
            "080123456789",  # too long
            "+2348012345678",  # international form
            "0801234567a",
            "",
        ],
    )
    def test_rejects_invalid_numbers(self, value):
        assert is_valid_phone_number(value) is False
