"""Error envelope rendered at the inbound boundary."""

from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus

from accounts_service.exceptions import (
    CustomerAlreadyExistsError,
    ResourceNotFoundError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[Exception], HTTPStatus] = {
    CustomerAlreadyExistsError: HTTPStatus.BAD_REQUEST,
    ResourceNotFoundError: HTTPStatus.NOT_FOUND,
    ValidationError: HTTPStatus.BAD_REQUEST,
}


@dataclass
class ErrorResponse:
    """Caller-visible failure."""

    api_path: str
    error_code: HTTPStatus
    error_message: str
    error_time: datetime = field(default_factory=datetime.now)


def status_for(exc: Exception) -> HTTPStatus:
    """Map an exception to the HTTP status the boundary should return."""
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return HTTPStatus.INTERNAL_SERVER_ERROR


def to_error_response(exc: Exception, api_path: str) -> ErrorResponse:
    """Build the error envelope for an exception raised by a service call.

    Parameters
    ----------
    exc : Exception
        The raised exception.
    api_path : str
        Path of the inbound request, e.g. ``"uri=/api/fetch"``.
    """
    return ErrorResponse(api_path=api_path, error_code=status_for(exc), error_message=str(exc))
