"""EAN API type definitions (request and response types)."""

from typing import Any, NotRequired, Self, TypedDict

from pydantic import BaseModel, Field

# =============================================================================
# Request Types
# =============================================================================


class RoomGroup(TypedDict):
    """Room occupancy for availability requests."""

    adults: int
    children: NotRequired[list[int]]  # Ages of children (0-17)


class ListParams(TypedDict, total=False):
    """Common hotel list search parameters.

    All fields are optional and will be passed to the API if provided.
    """

    city: str
    stateProvinceCode: str
    countryCode: str
    destinationString: str
    destinationId: str
    arrivalDate: str  # MM/DD/YYYY
    departureDate: str  # MM/DD/YYYY
    room1: str
    numberOfResults: int


# =============================================================================
# Response Types
# =============================================================================


class EanWsError(TypedDict):
    """Error object nested under a response's top-level key."""

    itineraryId: NotRequired[int]
    handling: NotRequired[str]  # "RECOVERABLE", "UNRECOVERABLE", etc.
    category: NotRequired[str]  # "DATA_VALIDATION", "EXCEPTION", etc.
    exceptionConditionId: NotRequired[int]
    presentationMessage: str
    verboseMessage: NotRequired[str]


class LocationInfo(TypedDict):
    """Candidate destination from a "Multiple locations" error."""

    destinationId: str
    type: NotRequired[int]
    city: NotRequired[str]
    stateProvinceCode: NotRequired[str]
    countryCode: NotRequired[str]
    countryName: NotRequired[str]
    code: NotRequired[int]
    active: NotRequired[bool]


class LocationInfos(TypedDict):
    """Container for candidate destinations."""

    LocationInfo: list[LocationInfo] | LocationInfo


# =============================================================================
# Domain Types
# =============================================================================


def _text(value: Any) -> str | None:
    return None if value is None else str(value)


class Location(BaseModel):
    """Alternate destination the caller may resubmit a search against."""

    destination_id: str | None = Field(default=None, description="EAN destination ID")
    type: Any = Field(default=None, description="Location type code")
    city: str | None = Field(default=None, description="City name")
    province: str | None = Field(default=None, description="State or province code")

    @classmethod
    def from_info(cls, info: LocationInfo) -> Self:
        """Build a location from a raw ``LocationInfo`` entry."""
        return cls(
            destination_id=_text(info.get("destinationId")),
            type=info.get("type"),
            city=_text(info.get("city")),
            province=_text(info.get("stateProvinceCode")),
        )
