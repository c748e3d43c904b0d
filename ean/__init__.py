"""EAN (Expedia Affiliate Network) Hotel API v3 client package."""

from .amenity import BITS, Amenity, encode_mask, parse_mask
from .client import AsyncEANClient, EANClient
from .config import Configuration
from .exceptions import (
    EANAccessError,
    EANAPIError,
    EANClientError,
    EANInvalidDataError,
    EANMultipleLocationsError,
    EANNetworkError,
    EANResponseError,
    ErrorType,
    classify_forbidden,
    raise_for_response_error,
)
from .session import Session, update_session
from .types import ListParams, Location, RoomGroup
from .urls import BuiltRequest, RequestOptions, build_url, generate_signature

__all__ = [
    "BITS",
    "Amenity",
    "AsyncEANClient",
    "BuiltRequest",
    "Configuration",
    "EANAPIError",
    "EANAccessError",
    "EANClient",
    "EANClientError",
    "EANInvalidDataError",
    "EANMultipleLocationsError",
    "EANNetworkError",
    "EANResponseError",
    "ErrorType",
    "ListParams",
    "Location",
    "RequestOptions",
    "RoomGroup",
    "Session",
    "build_url",
    "classify_forbidden",
    "encode_mask",
    "generate_signature",
    "parse_mask",
    "raise_for_response_error",
    "update_session",
]
