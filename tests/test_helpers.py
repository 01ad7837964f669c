"""
Tests for password strength and input helpers.
"""

import pytest

from modules.feedback.helpers import format_phone_number, password_strength, sanitize_input
from shared.utils.helpers import strip_non_digits


class TestPasswordStrength:

    def test_strong_password(self):
        strength = password_strength("Abcdefg1!")
        assert strength.score == 100
        assert strength.feedback == []
        assert strength.is_valid is True

    def test_missing_special_character(self):
        strength = password_strength("Abcdefg1")
        assert strength.score == pytest.approx(80.0)
        assert strength.feedback == ["Contains special character"]
        assert strength.is_valid is False

    def test_empty_password(self):
        strength = password_strength("")
        assert strength.score == 0
        assert strength.feedback == [
            "At least 8 characters",
            "Contains uppercase letter",
            "Contains lowercase letter",
            "Contains number",
            "Contains special character",
        ]


class TestInputHelpers:

    @pytest.mark.parametrize("value,expected", [
        ("5551234567", "(555) 123-4567"),
        ("555.123.4567", "(555) 123-4567"),
        ("555-1234", "555-1234"),
        ("15551234567", "15551234567"),
    ])
    def test_format_phone_number(self, value, expected):
        assert format_phone_number(value) == expected

    def test_sanitize_input(self):
        assert sanitize_input("  hello <world>  ") == "hello world"

    def test_strip_non_digits(self):
        assert strip_non_digits("+1 (555) 123-4567") == "15551234567"
        assert strip_non_digits("no digits") == ""
