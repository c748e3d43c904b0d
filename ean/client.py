"""EAN (Expedia Affiliate Network) Hotel API v3 Client.

Provides sync and async interfaces to interact with the EAN hotel API.
Uses httpx for HTTP requests; authentication travels in the query string
(``apiKey``/``cid``, plus ``sig`` when signature auth is enabled).
"""

import logging
import time
from dataclasses import replace
from typing import Any, Self

import httpx

from .config import DEFAULT_REQUEST_TIMEOUT, Configuration, request_timeout_from_env
from .exceptions import (
    EANConnectionError,
    EANInvalidJsonError,
    EANRequestError,
    EANTimeoutError,
    EANUnexpectedResponseError,
    classify_forbidden,
    raise_for_response_error,
)
from .session import Session, update_session
from .types import ListParams, RoomGroup
from .urls import BuiltRequest, RequestOptions, build_url, room_params

logger = logging.getLogger(__name__)

HTTP_FORBIDDEN = 403


def _parse_response(method: str, response: httpx.Response) -> dict[str, Any]:
    """Turn an HTTP response into parsed JSON or a typed error.

    Args:
        method: API method, for logging.
        response: Response received from the API.

    Returns:
        Parsed JSON response data.

    Raises:
        EANAccessError: If the API answered HTTP 403.
        EANInvalidJsonError: If response is not valid JSON.
        EANUnexpectedResponseError: If the JSON is not an object.
    """
    if response.status_code == HTTP_FORBIDDEN:
        error = classify_forbidden(response.text)
        logger.warning("[EAN] %s - FORBIDDEN (%s)", method, error.error_type.value)
        raise error

    try:
        data = response.json()
    except ValueError as e:
        raise EANInvalidJsonError(e) from e
    if not isinstance(data, dict):
        raise EANUnexpectedResponseError(data)
    return data


def _handle_data(data: dict[str, Any], session: Session) -> dict[str, Any]:
    raise_for_response_error(data)
    update_session(data, session)
    return data


def _reservation_options(
    params: dict[str, Any], session: Session | None
) -> RequestOptions:
    return RequestOptions(
        method="res", params=params, secure=True, as_form=True, session=session
    )


class EANClient:
    """EAN Hotel API v3 Client (Sync).

    Args:
        config: Credentials and signing options.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (mainly for tests).
        session: Default session for calls made without one; a fresh one
            when omitted.
    """

    def __init__(
        self,
        config: Configuration,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
        session: Session | None = None,
    ) -> None:
        """Initialize the EAN client with a configuration."""
        self._config = config
        self._session = session if session is not None else Session()
        self._timeout = httpx.Timeout(timeout)
        self._client = httpx.Client(
            timeout=self._timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> Self:
        """Build a client from ``EAN_*`` environment variables.

        Credentials come from ``Configuration.from_env`` and the timeout from
        ``EAN_REQUEST_TIMEOUT`` unless passed explicitly.

        Args:
            **kwargs: Constructor keyword arguments (``timeout``, ``transport``...).

        Returns:
            Client instance.
        """
        kwargs.setdefault("timeout", request_timeout_from_env())
        return cls(Configuration.from_env(), **kwargs)

    @property
    def config(self) -> Configuration:
        """Configuration used to build every request."""
        return self._config

    @property
    def session(self) -> Session:
        """Session used and updated by calls that do not pass their own."""
        return self._session

    def close(self) -> None:
        """Close the HTTP client connection."""
        self._client.close()

    def __enter__(self) -> Self:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager and close connection."""
        self.close()

    def _send(self, method: str, built: BuiltRequest) -> dict[str, Any]:
        """Perform a single HTTP call for a built request.

        GET with the query-encoded URL, or POST with a form body when the
        request was built as a form.

        Args:
            method: API method, for logging.
            built: Output of ``build_url``.

        Returns:
            Parsed JSON response data.

        Raises:
            EANTimeoutError: If the request times out.
            EANConnectionError: If connection fails.
            EANRequestError: If the request fails.
            EANAccessError: If the API answered HTTP 403.
            EANInvalidJsonError: If response is not valid JSON.
            EANUnexpectedResponseError: If the JSON is not an object.
        """
        start_time = time.perf_counter()
        try:
            if built.is_form:
                response = self._client.post(built.url, data=built.form)
            else:
                response = self._client.get(built.url)
        except httpx.TimeoutException as e:
            elapsed = time.perf_counter() - start_time
            logger.warning("[EAN] %s - TIMEOUT after %.2fs", method, elapsed)
            raise EANTimeoutError from e
        except httpx.ConnectError as e:
            elapsed = time.perf_counter() - start_time
            logger.warning("[EAN] %s - CONNECTION ERROR after %.2fs", method, elapsed)
            raise EANConnectionError(e) from e
        except httpx.RequestError as e:
            elapsed = time.perf_counter() - start_time
            logger.warning("[EAN] %s - REQUEST ERROR after %.2fs", method, elapsed)
            raise EANRequestError(e) from e

        elapsed = time.perf_counter() - start_time
        logger.debug("[EAN] %s - %d in %.2fs", method, response.status_code, elapsed)
        return _parse_response(method, response)

    def execute(self, options: RequestOptions) -> dict[str, Any]:
        """Build, send and interpret one API call.

        Calls without a session use, and update, the client's session.

        Args:
            options: Method, parameters and builder flags.

        Returns:
            Parsed JSON response data.

        Raises:
            EANClientError: Any typed error from transport, HTTP 403 or
                an ``EanWsError`` in the body.
        """
        session = options.session if options.session is not None else self._session
        built = build_url(self._config, replace(options, session=session))
        data = self._send(options.method, built)
        return _handle_data(data, session)

    def request(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        *,
        include_key: bool = True,
        include_cid: bool = True,
        secure: bool = False,
        as_form: bool = False,
        session: Session | None = None,
    ) -> dict[str, Any]:
        """Call an arbitrary API method.

        Args:
            method: API method name (``list``, ``info``, ``avail``...).
            params: Method-specific parameters.
            include_key: Add ``apiKey``.
            include_cid: Add ``cid``.
            secure: Use the HTTPS booking host.
            as_form: Send parameters as a form body.
            session: Session to send and update; the client's by default.

        Returns:
            Parsed JSON response data.
        """
        return self.execute(
            RequestOptions(
                method=method,
                params=dict(params or {}),
                include_key=include_key,
                include_cid=include_cid,
                secure=secure,
                as_form=as_form,
                session=session,
            )
        )

    def list_hotels(
        self, params: ListParams, session: Session | None = None
    ) -> dict[str, Any]:
        """Search hotels by destination and dates.

        Args:
            params: Search parameters (destination, dates, rooms...).
            session: Session to send and update.

        Returns:
            Parsed ``HotelListResponse`` document.
        """
        return self.request("list", dict(params), session=session)

    def get_hotel_info(
        self, hotel_id: int, session: Session | None = None
    ) -> dict[str, Any]:
        """Get details for a hotel.

        Args:
            hotel_id: EAN hotel ID.
            session: Session to send and update.

        Returns:
            Parsed ``HotelInformationResponse`` document.
        """
        return self.request("info", {"hotelId": hotel_id}, session=session)

    def get_room_availability(
        self,
        hotel_id: int,
        arrival_date: str,
        departure_date: str,
        rooms: list[RoomGroup],
        session: Session | None = None,
    ) -> dict[str, Any]:
        """Get available rooms and rates for a hotel.

        Args:
            hotel_id: EAN hotel ID.
            arrival_date: Check-in date (MM/DD/YYYY).
            departure_date: Check-out date (MM/DD/YYYY).
            rooms: Occupancy per room.
            session: Session to send and update.

        Returns:
            Parsed ``HotelRoomAvailabilityResponse`` document.
        """
        params: dict[str, Any] = {
            "hotelId": hotel_id,
            "arrivalDate": arrival_date,
            "departureDate": departure_date,
            **room_params(rooms),
        }
        return self.request("avail", params, session=session)

    def book_reservation(
        self, params: dict[str, Any], session: Session | None = None
    ) -> dict[str, Any]:
        """Book a room over HTTPS with a form-encoded body.

        Args:
            params: Reservation fields (rate key, guest, payment...).
            session: Session to send and update.

        Returns:
            Parsed ``HotelRoomReservationResponse`` document.
        """
        return self.execute(_reservation_options(dict(params), session))


class AsyncEANClient:
    """EAN Hotel API v3 Client (Async).

    Async version using httpx.AsyncClient.

    Args:
        config: Credentials and signing options.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (mainly for tests).
        session: Default session for calls made without one; a fresh one
            when omitted.
    """

    def __init__(
        self,
        config: Configuration,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        session: Session | None = None,
    ) -> None:
        """Initialize the async EAN client with a configuration."""
        self._config = config
        self._session = session if session is not None else Session()
        self._timeout = httpx.Timeout(timeout)
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> Self:
        """Build an async client from ``EAN_*`` environment variables."""
        kwargs.setdefault("timeout", request_timeout_from_env())
        return cls(Configuration.from_env(), **kwargs)

    @property
    def config(self) -> Configuration:
        """Configuration used to build every request."""
        return self._config

    @property
    def session(self) -> Session:
        """Session used and updated by calls that do not pass their own."""
        return self._session

    async def close(self) -> None:
        """Close the async HTTP client connection."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager and close connection."""
        await self.close()

    async def _send(self, method: str, built: BuiltRequest) -> dict[str, Any]:
        """Perform a single async HTTP call for a built request.

        Args:
            method: API method, for logging.
            built: Output of ``build_url``.

        Returns:
            Parsed JSON response data.

        Raises:
            EANTimeoutError: If the request times out.
            EANConnectionError: If connection fails.
            EANRequestError: If the request fails.
            EANAccessError: If the API answered HTTP 403.
            EANInvalidJsonError: If response is not valid JSON.
            EANUnexpectedResponseError: If the JSON is not an object.
        """
        start_time = time.perf_counter()
        try:
            if built.is_form:
                response = await self._client.post(built.url, data=built.form)
            else:
                response = await self._client.get(built.url)
        except httpx.TimeoutException as e:
            elapsed = time.perf_counter() - start_time
            logger.warning("[EAN] %s - TIMEOUT after %.2fs", method, elapsed)
            raise EANTimeoutError from e
        except httpx.ConnectError as e:
            elapsed = time.perf_counter() - start_time
            logger.warning("[EAN] %s - CONNECTION ERROR after %.2fs", method, elapsed)
            raise EANConnectionError(e) from e
        except httpx.RequestError as e:
            elapsed = time.perf_counter() - start_time
            logger.warning("[EAN] %s - REQUEST ERROR after %.2fs", method, elapsed)
            raise EANRequestError(e) from e

        elapsed = time.perf_counter() - start_time
        logger.debug("[EAN] %s - %d in %.2fs", method, response.status_code, elapsed)
        return _parse_response(method, response)

    async def execute(self, options: RequestOptions) -> dict[str, Any]:
        """Build, send and interpret one API call."""
        session = options.session if options.session is not None else self._session
        built = build_url(self._config, replace(options, session=session))
        data = await self._send(options.method, built)
        return _handle_data(data, session)

    async def request(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        *,
        include_key: bool = True,
        include_cid: bool = True,
        secure: bool = False,
        as_form: bool = False,
        session: Session | None = None,
    ) -> dict[str, Any]:
        """Call an arbitrary API method.

        Args:
            method: API method name (``list``, ``info``, ``avail``...).
            params: Method-specific parameters.
            include_key: Add ``apiKey``.
            include_cid: Add ``cid``.
            secure: Use the HTTPS booking host.
            as_form: Send parameters as a form body.
            session: Session to send and update; the client's by default.

        Returns:
            Parsed JSON response data.
        """
        return await self.execute(
            RequestOptions(
                method=method,
                params=dict(params or {}),
                include_key=include_key,
                include_cid=include_cid,
                secure=secure,
                as_form=as_form,
                session=session,
            )
        )

    async def list_hotels(
        self, params: ListParams, session: Session | None = None
    ) -> dict[str, Any]:
        """Search hotels by destination and dates."""
        return await self.request("list", dict(params), session=session)

    async def get_hotel_info(
        self, hotel_id: int, session: Session | None = None
    ) -> dict[str, Any]:
        """Get details for a hotel."""
        return await self.request("info", {"hotelId": hotel_id}, session=session)

    async def get_room_availability(
        self,
        hotel_id: int,
        arrival_date: str,
        departure_date: str,
        rooms: list[RoomGroup],
        session: Session | None = None,
    ) -> dict[str, Any]:
        """Get available rooms and rates for a hotel."""
        params: dict[str, Any] = {
            "hotelId": hotel_id,
            "arrivalDate": arrival_date,
            "departureDate": departure_date,
            **room_params(rooms),
        }
        return await self.request("avail", params, session=session)

    async def book_reservation(
        self, params: dict[str, Any], session: Session | None = None
    ) -> dict[str, Any]:
        """Book a room over HTTPS with a form-encoded body."""
        return await self.execute(_reservation_options(dict(params), session))
