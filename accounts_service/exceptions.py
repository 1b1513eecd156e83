"""Custom exception hierarchy for accounts-service."""


class AccountsServiceError(Exception):
    """Base exception for all accounts-service errors."""


class CustomerAlreadyExistsError(AccountsServiceError):
    """Raised when a customer is already registered with a mobile number."""

    def __init__(self, mobile_number: str) -> None:
        super().__init__(f"Customer already registered with given mobileNumber {mobile_number}")
        self.mobile_number = mobile_number


class ResourceNotFoundError(AccountsServiceError):
    """Raised when a required entity does not exist.

    Parameters
    ----------
    resource : str
        Entity kind, e.g. ``"Customer"`` or ``"Account"``.
    field : str
        Name of the key used for the lookup.
    value : object
        Value of the key used for the lookup.
    """

    def __init__(self, resource: str, field: str, value: object) -> None:
        super().__init__(f"{resource} not found with the given input data {field} : '{value}'")
        self.resource = resource
        self.field = field
        self.value = value


class ReferentialIntegrityError(ResourceNotFoundError):
    """Raised when a foreign key reference is violated."""


class ValidationError(AccountsServiceError):
    """Raised when an operation receives malformed input."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class DownstreamUnavailableError(AccountsServiceError):
    """Raised when a downstream service call fails.

    Never surfaced to callers of the orchestration layer; the resilient
    client turns it into a fallback value.
    """


class PublishError(AccountsServiceError):
    """Raised when an event cannot be handed to the broker."""


class ConfigurationError(AccountsServiceError):
    """Raised when configuration is invalid or missing."""
