"""EAN API client exceptions and error classification."""

import re
from enum import Enum
from typing import Any, cast

from .types import EanWsError, Location, LocationInfo, LocationInfos


class ErrorType(str, Enum):
    """Closed set of error kinds reported by the EAN API."""

    FORBIDDEN = "forbidden"
    NOT_AUTHORIZED = "not_authorized"
    DEVELOPER_INACTIVE = "developer_inactive"
    QUERY_LIMIT = "query_limit"
    RATE_LIMIT = "rate_limit"
    OVER_CAPACITY = "over_capacity"
    AUTHENTICATION_FAILURE = "authentication_failure"
    UNKNOWN = "unknown"
    MULTIPLE_LOCATIONS = "multiple_locations"
    INVALID_DATA = "invalid_data"


class EANClientError(Exception):
    """Base exception for EAN client errors."""

    error_type: ErrorType | None = None


class EANAPIError(EANClientError):
    """API returned an error response."""


# =============================================================================
# HTTP 403 errors
# =============================================================================


class EANAccessError(EANAPIError):
    """API refused the request with HTTP 403.

    Subclasses carry a fixed message; the matching body substring lives in
    ``FORBIDDEN_PATTERNS``.
    """

    message = ""

    def __init__(self, message: str | None = None) -> None:
        """Initialize with the fixed message of this error type."""
        super().__init__(message or self.message)


class EANForbiddenError(EANAccessError):
    """Access to the requested method or object is forbidden."""

    error_type = ErrorType.FORBIDDEN
    message = (
        "You have not been granted permission to access the requested "
        "method or object."
    )


class EANNotAuthorizedError(EANAccessError):
    """API key or signature not recognized."""

    error_type = ErrorType.NOT_AUTHORIZED
    message = (
        "The API key associated with your request was not recognized, "
        "or the digital signature was incorrect."
    )


class EANDeveloperInactiveError(EANAccessError):
    """API key not approved, incorrect or disabled."""

    error_type = ErrorType.DEVELOPER_INACTIVE
    message = (
        "The API key you are using to access the API has not been approved, "
        "is not correct, or has been disabled. If using SIG Authentication, "
        "your digital signature is incorrect and does not match the one "
        "generated when receiving your request."
    )


class EANQueryLimitError(EANAccessError):
    """Too many queries in one second."""

    error_type = ErrorType.QUERY_LIMIT
    message = (
        "The API key you are using has attempted to access the API too many "
        "times in one second."
    )


class EANRateLimitError(EANAccessError):
    """Too many queries in the rate limiting period."""

    error_type = ErrorType.RATE_LIMIT
    message = (
        "The API key you are using has attempted to access the API too many "
        "times in the rate limiting period."
    )


class EANOverCapacityError(EANAccessError):
    """Service is over capacity."""

    error_type = ErrorType.OVER_CAPACITY
    message = "The service you have requested is over capacity."


class EANAuthenticationFailureError(EANAccessError):
    """Combined authentication checks failed."""

    error_type = ErrorType.AUTHENTICATION_FAILURE
    message = "The combination of authentication checks failed."


class EANUnknownAccessError(EANAccessError):
    """HTTP 403 with a body matching no known pattern."""

    error_type = ErrorType.UNKNOWN

    def __init__(self, body: str) -> None:
        """Initialize with the raw response body."""
        super().__init__(f"An unknown error occured: {body}.")
        self.body = body


# First match wins.
FORBIDDEN_PATTERNS: tuple[tuple[str, type[EANAccessError]], ...] = (
    ("Forbidden", EANForbiddenError),
    ("Not Authorized", EANNotAuthorizedError),
    ("Developer Inactive", EANDeveloperInactiveError),
    ("Queries Per Second Limit", EANQueryLimitError),
    ("Account Over Rate Limit", EANRateLimitError),
    ("Rate Limit Exceeded", EANOverCapacityError),
    ("Authentication Failure", EANAuthenticationFailureError),
)


def classify_forbidden(body: str) -> EANAccessError:
    """Build the typed error for an HTTP 403 response body.

    Args:
        body: Raw response text.

    Returns:
        Error instance for the first matching pattern, or an unknown-access
        error carrying the body.
    """
    for needle, error_cls in FORBIDDEN_PATTERNS:
        if needle in body:
            return error_cls()
    return EANUnknownAccessError(body)


# =============================================================================
# Response body errors
# =============================================================================


class EANResponseError(EANAPIError):
    """API returned an ``EanWsError`` in the response body."""

    def __init__(self, message: str, error_info: EanWsError | None = None) -> None:
        """Initialize with the presentation message and raw error info."""
        super().__init__(message)
        self.error_info = error_info
        self.recovery: dict[str, Any] = {}


class EANMultipleLocationsError(EANResponseError):
    """Destination is ambiguous; alternates are attached for resubmission."""

    error_type = ErrorType.MULTIPLE_LOCATIONS

    def __init__(
        self,
        message: str,
        alternate_locations: list[Location],
        error_info: EanWsError | None = None,
    ) -> None:
        """Initialize with the message and candidate locations."""
        super().__init__(message, error_info)
        self.alternate_locations = alternate_locations
        self.recovery = {"alternate_locations": alternate_locations}


class EANInvalidDataError(EANResponseError):
    """Request data could not be validated by the API."""

    error_type = ErrorType.INVALID_DATA


class EANInvalidJsonError(EANAPIError):
    """API returned invalid JSON response."""

    def __init__(self, error: Exception) -> None:
        """Initialize with the JSON parsing error."""
        super().__init__(f"Invalid JSON response: {error}")
        self.original_error = error


class EANUnexpectedResponseError(EANAPIError):
    """API returned JSON that is not an object."""

    def __init__(self, data: object) -> None:
        """Initialize with the decoded JSON value."""
        super().__init__(
            f"Unexpected response: expected a JSON object, got {type(data).__name__}"
        )
        self.data = data


MULTIPLE_LOCATIONS_PATTERN = re.compile(r"Multiple locations")
INVALID_DATA_PATTERN = re.compile(r"Data in this request could not be validated")


def _parse_locations(location_infos: LocationInfos) -> list[Location]:
    entries = location_infos.get("LocationInfo") or []
    # A single candidate comes back as an object rather than a list.
    if isinstance(entries, dict):
        entries = [entries]
    return [
        Location.from_info(cast("LocationInfo", info))
        for info in entries
        if isinstance(info, dict)
    ]


def raise_for_response_error(data: dict[str, Any]) -> None:
    """Raise the error carried in a parsed response body, if any.

    Only the first top-level key is inspected, as every EAN response wraps
    its payload in a single method-specific object.

    Args:
        data: Parsed JSON response.

    Raises:
        EANMultipleLocationsError: If the destination is ambiguous.
        EANInvalidDataError: If the request data failed validation.
        EANResponseError: For any other ``EanWsError``.
    """
    if not isinstance(data, dict) or not data:
        return
    body = data[next(iter(data))]
    if not isinstance(body, dict) or not body.get("EanWsError"):
        return

    error_info: EanWsError = body["EanWsError"]
    message = str(error_info.get("presentationMessage") or "")

    location_infos = body.get("LocationInfos")
    if MULTIPLE_LOCATIONS_PATTERN.search(message) and isinstance(location_infos, dict):
        raise EANMultipleLocationsError(
            message, _parse_locations(cast("LocationInfos", location_infos)), error_info
        )
    if INVALID_DATA_PATTERN.search(message):
        raise EANInvalidDataError(message, error_info)
    raise EANResponseError(message, error_info)


# =============================================================================
# Network errors
# =============================================================================


class EANNetworkError(EANClientError):
    """Network-related error occurred."""


class EANTimeoutError(EANNetworkError):
    """Request timed out."""

    def __init__(self) -> None:
        """Initialize with default message."""
        super().__init__("Request timed out")


class EANConnectionError(EANNetworkError):
    """Connection error occurred."""

    def __init__(self, error: Exception) -> None:
        """Initialize with the connection error."""
        super().__init__(f"Connection error: {error}")
        self.original_error = error


class EANRequestError(EANNetworkError):
    """Request failed."""

    def __init__(self, error: Exception) -> None:
        """Initialize with the request error."""
        super().__init__(f"Request failed: {error}")
        self.original_error = error
