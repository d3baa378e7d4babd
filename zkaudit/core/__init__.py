"""
zkaudit Core Data Structures
"""

from zkaudit.core.types import (
    Point,
    MembershipPath,
    parse_int,
    to_field_element,
    to_hex32,
    field_element_hex,
)

__all__ = [
    "Point",
    "MembershipPath",
    "parse_int",
    "to_field_element",
    "to_hex32",
    "field_element_hex",
]
