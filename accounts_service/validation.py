"""Input validation for inbound transfer objects.

Constraints are declared as pydantic schemas; a failed validation is
reported as ``ValidationError`` naming the first offending field.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from accounts_service.exceptions import ValidationError
from accounts_service.models import AccountDto, AccountType, CustomerDto

NAME_MIN_LENGTH = 5
NAME_MAX_LENGTH = 30
ACCOUNT_NUMBER_MIN = 1_000_000_000
ACCOUNT_NUMBER_MAX = 9_999_999_999

MobileNumber = Annotated[str, Field(pattern=r"^[0-9]{10}$")]
AccountNumber = Annotated[int, Field(ge=ACCOUNT_NUMBER_MIN, le=ACCOUNT_NUMBER_MAX)]

# Wire names and messages reported to callers
FIELD_NAMES = {
    "name": "name",
    "email": "email",
    "mobile_number": "mobileNumber",
    "account_number": "accountNumber",
    "account_type": "accountType",
    "branch_address": "branchAddress",
}
FIELD_MESSAGES = {
    "name": (
        f"The length of the customer name should be between "
        f"{NAME_MIN_LENGTH} and {NAME_MAX_LENGTH}"
    ),
    "email": "Email address should be a valid value",
    "mobileNumber": "Mobile number must be 10 digits",
    "accountNumber": "Account number must be 10 digits",
    "accountType": f"Account type must be one of {sorted(t.value for t in AccountType)}",
    "branchAddress": "Branch address can not be empty",
}


class CustomerSchema(BaseModel):
    """Customer fields accepted on create and update."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    email: EmailStr
    mobile_number: MobileNumber


class AccountSchema(BaseModel):
    """Account payload accepted on update."""

    model_config = ConfigDict(str_strip_whitespace=True)

    account_number: AccountNumber
    account_type: AccountType | None = None
    branch_address: str | None = Field(default=None, min_length=1)


_mobile_number_adapter = TypeAdapter(MobileNumber)
_account_number_adapter = TypeAdapter(AccountNumber)


def _to_validation_error(exc: PydanticValidationError, field: str | None = None) -> ValidationError:
    error = exc.errors()[0]
    if field is None:
        loc = error["loc"]
        field = FIELD_NAMES.get(str(loc[0]), str(loc[0])) if loc else "value"
    return ValidationError(field, FIELD_MESSAGES.get(field, error["msg"]))


def validate_mobile_number(mobile_number: str | None) -> str:
    """Check that a mobile number is exactly 10 digits.

    Returns
    -------
    str
        The validated mobile number.

    Raises
    ------
    ValidationError
        If the number is missing or malformed.
    """
    try:
        return _mobile_number_adapter.validate_python(mobile_number)
    except PydanticValidationError as e:
        raise _to_validation_error(e, "mobileNumber") from e


def validate_account_number(account_number: int | None) -> int:
    """Check that an account number is a 10-digit integer."""
    try:
        return _account_number_adapter.validate_python(account_number)
    except PydanticValidationError as e:
        raise _to_validation_error(e, "accountNumber") from e


def validate_customer(dto: CustomerDto) -> CustomerDto:
    """Validate the customer fields of a DTO (not the embedded account)."""
    try:
        CustomerSchema.model_validate(
            {"name": dto.name, "email": dto.email, "mobile_number": dto.mobile_number}
        )
    except PydanticValidationError as e:
        raise _to_validation_error(e) from e
    return dto


def validate_account(dto: AccountDto) -> AccountDto:
    """Validate an account payload used for updates."""
    try:
        AccountSchema.model_validate(
            {
                "account_number": dto.account_number,
                "account_type": dto.account_type,
                "branch_address": dto.branch_address,
            }
        )
    except PydanticValidationError as e:
        raise _to_validation_error(e) from e
    return dto
