"""Tests for input validation."""

import pytest

from accounts_service.exceptions import ValidationError
from accounts_service.models import AccountDto, CustomerDto
from accounts_service.validation import (
    validate_account,
    validate_account_number,
    validate_customer,
    validate_mobile_number,
)


class TestValidateMobileNumber:
    """Tests for validate_mobile_number."""

    def test_valid(self) -> None:
        """Test a 10-digit number passes."""
        assert validate_mobile_number("9876543210") == "9876543210"

    @pytest.mark.parametrize("value", [None, "", "987654321", "98765432101", "98765abcde", "+919876543"])
    def test_invalid(self, value: str | None) -> None:
        """Test malformed numbers are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate_mobile_number(value)
        assert exc_info.value.field == "mobileNumber"


class TestValidateAccountNumber:
    """Tests for validate_account_number."""

    def test_valid(self) -> None:
        """Test a 10-digit integer passes."""
        assert validate_account_number(1234567890) == 1234567890

    @pytest.mark.parametrize("value", [None, 123, 12345678901])
    def test_invalid(self, value: int | None) -> None:
        """Test missing or wrong-length numbers are rejected."""
        with pytest.raises(ValidationError):
            validate_account_number(value)


class TestValidateCustomer:
    """Tests for validate_customer."""

    def test_valid(self) -> None:
        """Test a well-formed customer passes."""
        dto = CustomerDto(name="Alice", email="a@x.com", mobile_number="9876543210")
        assert validate_customer(dto) is dto

    @pytest.mark.parametrize(
        "name,email,field",
        [
            ("Al", "a@x.com", "name"),
            ("A" * 31, "a@x.com", "name"),
            ("     ", "a@x.com", "name"),
            ("Alice", "", "email"),
            ("Alice", "a@x", "email"),
            ("Alice", "a x@y.com", "email"),
            ("Alice", "a@x..com", "email"),
            ("Alice", "a@@x.com", "email"),
        ],
    )
    def test_invalid(self, name: str, email: str, field: str) -> None:
        """Test name and email constraints."""
        with pytest.raises(ValidationError) as exc_info:
            validate_customer(CustomerDto(name=name, email=email, mobile_number="9876543210"))
        assert exc_info.value.field == field


class TestValidateAccount:
    """Tests for validate_account."""

    def test_valid_partial(self) -> None:
        """Test only the number is required."""
        dto = AccountDto(account_number=1234567890)
        assert validate_account(dto) is dto

    def test_invalid_type(self) -> None:
        """Test unknown account types are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate_account(AccountDto(account_number=1234567890, account_type="Gold"))
        assert exc_info.value.field == "accountType"

    def test_blank_branch(self) -> None:
        """Test a blank branch address is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate_account(AccountDto(account_number=1234567890, branch_address="  "))
        assert exc_info.value.field == "branchAddress"


class TestValidationMessages:
    """Tests for the caller-facing messages of schema failures."""

    def test_name_message(self) -> None:
        """Test the name length message names the bounds."""
        with pytest.raises(ValidationError) as exc_info:
            validate_customer(CustomerDto(name="Al", email="a@x.com", mobile_number="9876543210"))
        assert str(exc_info.value) == "name: The length of the customer name should be between 5 and 30"

    def test_first_failing_field_reported(self) -> None:
        """Test the first invalid field in declaration order is reported."""
        with pytest.raises(ValidationError) as exc_info:
            validate_customer(CustomerDto(name="Alice", email="bad", mobile_number="123"))
        assert exc_info.value.field == "email"
        assert exc_info.value.message == "Email address should be a valid value"

    def test_surrounding_whitespace_ignored(self) -> None:
        """Test names are measured after stripping whitespace."""
        dto = CustomerDto(name="  Alice  ", email="a@x.com", mobile_number="9876543210")
        assert validate_customer(dto) is dto

    def test_unicode_digits_rejected(self) -> None:
        """Test only ASCII digits count as a mobile number."""
        with pytest.raises(ValidationError):
            validate_mobile_number("٩٨٧٦٥٤٣٢١٠")
