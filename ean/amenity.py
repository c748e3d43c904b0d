"""Hotel amenity bitmask decoding."""

from typing import Any, Self

from pydantic import BaseModel

# Bit 512 is not assigned by the vendor.
BITS: dict[str, int] = {
    "business services": 1,
    "fitness center": 2,
    "hot tub": 4,
    "internet access": 8,
    "kids activities": 16,
    "kitchen": 32,
    "pets allowed": 64,
    "swimming pool": 128,
    "restaurant": 256,
    "whirlpool bath": 1024,
    "breakfast": 2048,
    "babysitting": 4096,
    "jacuzzi": 8192,
    "parking": 16384,
    "room service": 32768,
    "accessible path": 65536,
    "accessible bathroom": 131072,
    "roll in shower": 262144,
    "handicapped parking": 524288,
    "in room accessibility": 1048576,
    "deaf accessiblity": 2097152,
    "braille or signage": 4194304,
    "free airport shuttle": 8388608,
    "indoor pool": 16777216,
    "outdoor pool": 33554432,
    "extended parking": 67108864,
    "free parking": 134217728,
}


class Amenity(BaseModel):
    """Hotel amenity."""

    id: int | None = None
    description: str | None = None

    @classmethod
    def from_info(cls, info: dict[str, Any]) -> Self:
        """Build an amenity from an ``id``/``description`` mapping."""
        return cls(id=info.get("id"), description=info.get("description"))


def parse_mask(bitmask: int | None) -> list[str] | None:
    """Get the names of the amenities set in a bitmask.

    Args:
        bitmask: ``amenityMask`` value from a hotel summary.

    Returns:
        Amenity names in table order, or None when there is no mask.
    """
    if bitmask is None:
        return None
    return [name for name, bit in BITS.items() if bitmask & bit]


def encode_mask(names: list[str]) -> int:
    """Sum the bits of the given amenity names.

    Raises:
        KeyError: If a name is not in ``BITS``.
    """
    mask = 0
    for name in names:
        mask |= BITS[name]
    return mask
