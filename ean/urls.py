"""EAN request URL construction.

Merges caller parameters with authentication and session parameters and
produces either a query-encoded URL or a bare endpoint plus form body.
"""

import hashlib
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from .config import DEFAULT_CID, Configuration
from .session import Session
from .types import RoomGroup

API_HOST = "api.ean.com"
BOOKING_HOST_PREFIX = "book."
API_PATH = "/ean-services/rs/hotel/v3/"


@dataclass
class RequestOptions:
    """Description of a single API call.

    Args:
        method: API method appended to the base URL (``list``, ``info``...).
        params: Method-specific parameters.
        include_key: Add ``apiKey``.
        include_cid: Add ``cid``.
        secure: Send over HTTPS to the booking host.
        as_form: Return parameters as a form body instead of a query string.
        session: Session whose data is appended; a fresh one when omitted.
    """

    method: str
    params: dict[str, Any] = field(default_factory=dict)
    include_key: bool = True
    include_cid: bool = True
    secure: bool = False
    as_form: bool = False
    session: Session | None = None


@dataclass
class BuiltRequest:
    """Result of ``build_url``: target URL and optional form body."""

    url: str
    form: dict[str, Any] | None = None

    @property
    def is_form(self) -> bool:
        """Whether parameters travel in a form body."""
        return self.form is not None


def base_url(booking: bool) -> str:
    """Get the root URL for the hotel API.

    Args:
        booking: Whether the call is a booking request (HTTPS booking host).

    Returns:
        Root URL ending with a slash.
    """
    if booking:
        return f"https://{BOOKING_HOST_PREFIX}{API_HOST}{API_PATH}"
    return f"http://{API_HOST}{API_PATH}"


def endpoint_url(method: str, secure: bool = False) -> str:
    """Get the URL of an API method without parameters."""
    return base_url(secure) + method


def generate_signature(config: Configuration, timestamp: int | None = None) -> str:
    """Generate the MD5 digital signature for signature authentication.

    Args:
        config: Configuration holding API key and shared secret.
        timestamp: Unix time in seconds; current time when omitted.

    Returns:
        Lowercase hex digest of key + secret + timestamp.
    """
    if timestamp is None:
        timestamp = int(time.time())
    raw = f"{config.api_key}{config.shared_secret or ''}{timestamp}"
    return hashlib.md5(raw.encode()).hexdigest()


def session_params(session: Session) -> dict[str, str]:
    """Build request parameters from the set fields of a session."""
    params: dict[str, str] = {}
    if session.id:
        params["customerSessionId"] = session.id
    if session.ip_address:
        params["customerIpAddress"] = session.ip_address
    if session.locale:
        params["locale"] = session.locale
    if session.currency_code:
        params["currencyCode"] = session.currency_code
    if session.user_agent:
        params["customerUserAgent"] = session.user_agent
    return params


def room_params(rooms: list[RoomGroup]) -> dict[str, str]:
    """Encode room occupancy as ``roomN=adults,childAge,...`` parameters.

    Args:
        rooms: Room configurations in request order.

    Returns:
        Mapping of ``room1``, ``room2``... to encoded occupancy.
    """
    params: dict[str, str] = {}
    for index, room in enumerate(rooms, start=1):
        parts = [str(room["adults"])]
        parts.extend(str(age) for age in room.get("children", []))
        params[f"room{index}"] = ",".join(parts)
    return params


def build_url(config: Configuration, options: RequestOptions) -> BuiltRequest:
    """Build the URL (and form body) for an API call.

    Args:
        config: Credentials and signing options.
        options: Method, parameters and builder flags.

    Returns:
        Built request. In form mode ``url`` is the bare endpoint and every
        parameter is in ``form``; otherwise all parameters are in the query.
    """
    params: dict[str, Any] = dict(options.params)
    if options.include_key:
        params["apiKey"] = config.api_key
    if options.include_cid:
        params["cid"] = config.cid if config.cid is not None else DEFAULT_CID
    if config.signature_auth_enabled():
        params["sig"] = generate_signature(config)

    params.update(session_params(options.session or Session()))

    url = endpoint_url(options.method, options.secure)
    if options.as_form:
        return BuiltRequest(url=url, form=params)
    return BuiltRequest(url=str(httpx.URL(url, params=params)))
