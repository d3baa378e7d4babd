"""
zkaudit Core Types

Curve points, membership paths and field-element conversions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Union

from zkaudit.constants import FIELD_MODULUS, FIELD_ELEMENT_HEX_CHARS

IntLike = Union[int, str, bytes]


def parse_int(value: IntLike) -> int:
    """
    Interpret an integer given as int, 0x-hex string, decimal string or
    big-endian bytes.
    """
    if isinstance(value, bool):
        raise TypeError("bool is not an integer value")
    if isinstance(value, int):
        return value
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big")
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        return int(text, 10)
    raise TypeError(f"Cannot interpret {type(value).__name__} as an integer")


def to_field_element(value: IntLike) -> int:
    """Reduce a value into [0, FIELD_MODULUS)."""
    return parse_int(value) % FIELD_MODULUS


def to_hex32(value: int) -> str:
    """Encode a non-negative integer as a 0x-prefixed 32-byte hex string."""
    if value < 0:
        raise ValueError("Cannot hex-encode a negative value")
    return "0x" + format(value, "x").zfill(FIELD_ELEMENT_HEX_CHARS)


def field_element_hex(value: IntLike) -> str:
    """Canonical fixed-width encoding of a field element."""
    return to_hex32(to_field_element(value))


@dataclass(frozen=True, slots=True)
class Point:
    """
    Affine point on the Baby Jubjub curve.

    Coordinates are kept reduced modulo FIELD_MODULUS. Curve membership is
    not checked here; see zkaudit.crypto.curve.is_on_curve.
    """
    x: int
    y: int

    def __post_init__(self):
        object.__setattr__(self, "x", self.x % FIELD_MODULUS)
        object.__setattr__(self, "y", self.y % FIELD_MODULUS)

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Point(x={hex(self.x)[:18]}..., y={hex(self.y)[:18]}...)"

    def is_identity(self) -> bool:
        return self.x == 0 and self.y == 1

    def to_list(self) -> List[int]:
        return [self.x, self.y]

    @classmethod
    def from_sequence(cls, coords: Sequence[IntLike]) -> Point:
        if len(coords) != 2:
            raise ValueError(f"A point needs 2 coordinates, got {len(coords)}")
        return cls(parse_int(coords[0]), parse_int(coords[1]))


@dataclass(frozen=True)
class MembershipPath:
    """
    Whitelist membership data for one key.

    sibling_path[0] is the tree root; sibling_path[1..H] run from the level
    just below the root down to the queried leaf's own sibling.
    """
    leaf_index: int
    sibling_path: List[int] = field(default_factory=list)

    @property
    def root(self) -> int:
        return self.sibling_path[0]

    @property
    def siblings(self) -> List[int]:
        """Sibling values without the root."""
        return self.sibling_path[1:]

    def to_dict(self) -> dict:
        return {
            "leafIndex": self.leaf_index,
            "siblingPath": [to_hex32(v) for v in self.sibling_path],
        }
