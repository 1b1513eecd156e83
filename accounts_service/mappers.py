"""Mapping between stored entities and transfer objects."""

from accounts_service.models import (
    Account,
    AccountDto,
    AccountType,
    CardDetails,
    Customer,
    CustomerDetails,
    CustomerDto,
    LoanDetails,
)


def to_customer(dto: CustomerDto, customer: Customer | None = None) -> Customer:
    """Overwrite customer fields from a DTO.

    Parameters
    ----------
    dto : CustomerDto
        Source fields.
    customer : Customer | None
        Existing entity to update in place. A new one is built when None.

    Returns
    -------
    Customer
        The updated (or new) entity. Identity and audit fields are untouched.
    """
    if customer is None:
        return Customer(name=dto.name, email=dto.email, mobile_number=dto.mobile_number)
    customer.name = dto.name
    customer.email = dto.email
    customer.mobile_number = dto.mobile_number
    return customer


def to_customer_dto(customer: Customer, account: Account | None = None) -> CustomerDto:
    """Build the merged Customer+Account view."""
    return CustomerDto(
        name=customer.name,
        email=customer.email,
        mobile_number=customer.mobile_number,
        account=to_account_dto(account) if account is not None else None,
    )


def to_account_dto(account: Account) -> AccountDto:
    """Convert an account entity to its transfer object."""
    return AccountDto(
        account_number=account.account_number,
        account_type=account.account_type.value,
        branch_address=account.branch_address,
    )


def apply_account_dto(dto: AccountDto, account: Account) -> Account:
    """Overwrite the mutable account fields present in ``dto``.

    The account number is the lookup key and is never rewritten.
    """
    if dto.account_type is not None:
        account.account_type = AccountType(dto.account_type)
    if dto.branch_address is not None:
        account.branch_address = dto.branch_address
    return account


def to_customer_details(
    customer: Customer,
    account: Account,
    loan: LoanDetails | None,
    card: CardDetails | None,
) -> CustomerDetails:
    """Merge a customer, its account and downstream summaries into a profile."""
    return CustomerDetails(
        name=customer.name,
        email=customer.email,
        mobile_number=customer.mobile_number,
        account=to_account_dto(account),
        loan=loan,
        card=card,
    )
