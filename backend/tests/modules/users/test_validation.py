import pytest

from modules.users.exceptions import (
    InvalidFieldError,
    MissingFieldsError,
    PasswordTooShortError,
)
from modules.users.validation import (
    require_fields,
    sanitize_input,
    validate_email,
    validate_password,
    validate_phone,
    validate_username,
)


class TestSanitizeInput:
    def test_strips_whitespace(self):
        assert sanitize_input("  rose  ") == "rose"

    def test_removes_markup_brackets(self):
        assert sanitize_input("<script>alert(1)</script>") == "scriptalert(1)/script"

    def test_plain_value_unchanged(self):
        assert sanitize_input("Lily Pad") == "Lily Pad"


class TestRequireFields:
    def test_all_present(self):
        require_fields({"a": "x", "b": "y"}, ["a", "b"])

    def test_reports_every_missing_field_in_order(self):
        with pytest.raises(MissingFieldsError) as exc_info:
            require_fields({"email": "", "username": None}, ["username", "email", "password"])

        assert exc_info.value.message == "Missing required fields: username, email, password"
        assert exc_info.value.details["missing_fields"] == ["username", "email", "password"]

    def test_whitespace_counts_as_missing(self):
        with pytest.raises(MissingFieldsError):
            require_fields({"email": "   "}, ["email"])


class TestValidateEmail:
    def test_lowercases(self):
        assert validate_email("A@B.com") == "a@b.com"

    @pytest.mark.parametrize("value", ["not-an-email", "a@", "@b.com", "a b@c.com"])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidFieldError) as exc_info:
            validate_email(value)
        assert exc_info.value.details["field"] == "email"


class TestValidateUsername:
    def test_accepts_two_characters(self):
        assert validate_username("al") == "al"

    @pytest.mark.parametrize("value", ["a", "x" * 51])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(InvalidFieldError):
            validate_username(value)


class TestValidatePhone:
    @pytest.mark.parametrize("value", ["0412 345 678", "+61 (2) 9876-5432", "5551234"])
    def test_accepts_plausible_numbers(self, value):
        assert validate_phone(value) == value

    def test_empty_is_none(self):
        assert validate_phone("") is None
        assert validate_phone(None) is None

    @pytest.mark.parametrize("value", ["call me", "123", "1" * 16, "12345678a"])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidFieldError):
            validate_phone(value)


class TestValidatePassword:
    def test_accepts_minimum_length(self):
        assert validate_password("x" * 8, min_length=8) == "x" * 8

    def test_rejects_short(self):
        with pytest.raises(PasswordTooShortError) as exc_info:
            validate_password("short", min_length=8, field="newPassword")
        assert exc_info.value.details == {"field": "newPassword", "min_length": 8}
        assert "at least 8" in exc_info.value.message

    def test_rejects_over_bcrypt_limit(self):
        with pytest.raises(InvalidFieldError):
            validate_password("é" * 40, min_length=8)
