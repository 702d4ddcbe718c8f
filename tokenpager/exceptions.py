from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from botocore.exceptions import ClientError


class TokenPagerError(Exception):
    """Base exception for all tokenpager errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ConfigurationError(TokenPagerError):
    """
    Raised when a pagination description cannot be resolved.

    Always raised at setup time (building a Paginator or parsing a trait),
    never while pages are being fetched.
    """

    def __init__(
        self,
        message: str,
        member: str | None = None,
        shape: Any | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.member = member
        self.shape = shape


class FetchError(TokenPagerError):
    """Raised when a page fetch issued through the boto3 binding fails."""

    def __init__(
        self,
        message: str,
        operation_name: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.operation_name = operation_name


class ResourceNotFoundError(FetchError):
    """Raised when the paged resource (table, bucket, ...) does not exist."""


class ThrottlingError(FetchError):
    """Raised when the service throttles page requests."""


class ValidationError(FetchError):
    """Raised when the service rejects the request parameters."""


class AccessDeniedError(FetchError):
    """Raised when the caller is not authorized to list the resource."""


class RequestTimeoutError(FetchError):
    """Raised when a page request times out."""


_ERROR_CODES: dict[str, type[FetchError]] = {
    "ResourceNotFoundException": ResourceNotFoundError,
    "NoSuchBucket": ResourceNotFoundError,
    "NotFound": ResourceNotFoundError,
    "ThrottlingException": ThrottlingError,
    "Throttling": ThrottlingError,
    "ProvisionedThroughputExceededException": ThrottlingError,
    "RequestLimitExceeded": ThrottlingError,
    "SlowDown": ThrottlingError,
    "ValidationException": ValidationError,
    "InvalidParameterValue": ValidationError,
    "InvalidArgument": ValidationError,
    "SerializationException": ValidationError,
    "AccessDenied": AccessDeniedError,
    "AccessDeniedException": AccessDeniedError,
    "UnauthorizedOperation": AccessDeniedError,
    "RequestTimeout": RequestTimeoutError,
    "RequestTimeoutException": RequestTimeoutError,
}


@contextmanager
def handle_client_errors(operation_name: str | None = None) -> Generator[None, None, None]:
    """
    Context manager that catches botocore.exceptions.ClientError
    and raises the appropriate FetchError subclass.

    Args:
        operation_name: Optional operation name for better error messages

    Usage:
        with handle_client_errors(operation_name="ListObjectsV2"):
            client.list_objects_v2(...)
    """
    try:
        yield
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        error_message = e.response.get("Error", {}).get("Message", str(e))

        error_cls = _ERROR_CODES.get(error_code)
        if error_cls is not None:
            raise error_cls(
                message=error_message, operation_name=operation_name, original_error=e
            ) from e

        # Unknown error: wrap in generic FetchError
        raise FetchError(
            message=f"Service error ({error_code}): {error_message}",
            operation_name=operation_name,
            original_error=e,
        ) from e
