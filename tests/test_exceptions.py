"""Tests for error classification and response error handling."""

import pytest

from ean import (
    EANInvalidDataError,
    EANMultipleLocationsError,
    EANResponseError,
    ErrorType,
    Location,
    classify_forbidden,
    raise_for_response_error,
)
from ean.exceptions import (
    EANDeveloperInactiveError,
    EANForbiddenError,
    EANUnknownAccessError,
)


class TestClassifyForbidden:
    """Test HTTP 403 body classification."""

    @pytest.mark.parametrize(
        ("body", "error_type"),
        [
            ("<h1>Forbidden</h1>", ErrorType.FORBIDDEN),
            ("<h1>Not Authorized</h1>", ErrorType.NOT_AUTHORIZED),
            ("<h1>Developer Inactive</h1>", ErrorType.DEVELOPER_INACTIVE),
            ("<h1>Queries Per Second Limit</h1>", ErrorType.QUERY_LIMIT),
            ("<h1>Account Over Rate Limit</h1>", ErrorType.RATE_LIMIT),
            ("<h1>Rate Limit Exceeded</h1>", ErrorType.OVER_CAPACITY),
            ("<h1>Authentication Failure</h1>", ErrorType.AUTHENTICATION_FAILURE),
            ("<h1>Teapot</h1>", ErrorType.UNKNOWN),
        ],
    )
    def test_vendor_substrings(self, body, error_type):
        assert classify_forbidden(body).error_type is error_type

    def test_developer_inactive_message(self):
        error = classify_forbidden("<h1>403 Developer Inactive</h1>")

        assert isinstance(error, EANDeveloperInactiveError)
        assert str(error).startswith(
            "The API key you are using to access the API has not been approved"
        )

    def test_first_pattern_wins(self):
        error = classify_forbidden("Forbidden: Developer Inactive")

        assert isinstance(error, EANForbiddenError)

    def test_unknown_passes_body_through(self):
        error = classify_forbidden("something odd")

        assert isinstance(error, EANUnknownAccessError)
        assert str(error) == "An unknown error occured: something odd."
        assert error.body == "something odd"


class TestRaiseForResponseError:
    """Test EanWsError handling in parsed bodies."""

    def test_no_error_returns_none(self):
        assert raise_for_response_error({"HotelListResponse": {"size": 1}}) is None

    def test_empty_and_non_mapping_bodies(self):
        assert raise_for_response_error({}) is None
        assert raise_for_response_error({"HotelListResponse": None}) is None

    def test_generic_error(self):
        data = {
            "HotelInformationResponse": {
                "EanWsError": {
                    "category": "EXCEPTION",
                    "presentationMessage": "Hotel not found",
                }
            }
        }

        with pytest.raises(EANResponseError) as exc_info:
            raise_for_response_error(data)

        assert type(exc_info.value) is EANResponseError
        assert str(exc_info.value) == "Hotel not found"
        assert exc_info.value.error_type is None
        assert exc_info.value.error_info["category"] == "EXCEPTION"

    def test_invalid_data(self):
        data = {
            "HotelListResponse": {
                "EanWsError": {
                    "presentationMessage": "Data in this request could not be validated: arrivalDate",
                }
            }
        }

        with pytest.raises(EANInvalidDataError) as exc_info:
            raise_for_response_error(data)

        assert exc_info.value.error_type is ErrorType.INVALID_DATA

    def test_multiple_locations(self):
        data = {
            "HotelListResponse": {
                "EanWsError": {
                    "presentationMessage": "Multiple locations found. Please refine.",
                },
                "LocationInfos": {
                    "@size": "2",
                    "LocationInfo": [
                        {
                            "destinationId": "A1",
                            "type": 1,
                            "city": "Portland",
                            "stateProvinceCode": "OR",
                        },
                        {
                            "destinationId": "B2",
                            "type": 1,
                            "city": "Portland",
                            "stateProvinceCode": "ME",
                        },
                    ],
                },
            }
        }

        with pytest.raises(EANMultipleLocationsError) as exc_info:
            raise_for_response_error(data)

        error = exc_info.value
        assert error.error_type is ErrorType.MULTIPLE_LOCATIONS
        locations = error.recovery["alternate_locations"]
        assert len(locations) == 2
        assert [loc.destination_id for loc in locations] == ["A1", "B2"]
        assert locations[1] == Location(
            destination_id="B2", type=1, city="Portland", province="ME"
        )
        assert error.alternate_locations is locations

    def test_multiple_locations_single_object(self):
        data = {
            "HotelListResponse": {
                "EanWsError": {"presentationMessage": "Multiple locations found."},
                "LocationInfos": {"LocationInfo": {"destinationId": "A1"}},
            }
        }

        with pytest.raises(EANMultipleLocationsError) as exc_info:
            raise_for_response_error(data)

        assert [loc.destination_id for loc in exc_info.value.alternate_locations] == ["A1"]

    def test_multiple_locations_without_candidates_is_generic(self):
        data = {
            "HotelListResponse": {
                "EanWsError": {"presentationMessage": "Multiple locations found."},
            }
        }

        with pytest.raises(EANResponseError) as exc_info:
            raise_for_response_error(data)

        assert type(exc_info.value) is EANResponseError

    @pytest.mark.parametrize("data", ["ok", ["x"], True, 42])
    def test_non_object_body_is_ignored(self, data):
        assert raise_for_response_error(data) is None

    def test_multiple_locations_with_numeric_fields(self):
        data = {
            "HotelListResponse": {
                "EanWsError": {"presentationMessage": "Multiple locations found."},
                "LocationInfos": {
                    "LocationInfo": [
                        {"destinationId": 123, "type": 1, "city": "Portland"},
                        "not a location",
                    ]
                },
            }
        }

        with pytest.raises(EANMultipleLocationsError) as exc_info:
            raise_for_response_error(data)

        locations = exc_info.value.alternate_locations
        assert [loc.destination_id for loc in locations] == ["123"]
        assert locations[0].type == 1
