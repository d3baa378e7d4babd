"""
zkaudit Edwards Point Compression

A curve point is packed into one 256-bit value: y in bits 0..254 and the
parity of x in bit 255. Decompression solves the curve equation for x^2,
takes a modular square root and picks the root whose parity matches the
stored bit.

The identity (0, 1) packs to 1 and needs no reserved encoding.
"""

from __future__ import annotations
import logging

from zkaudit.constants import (
    FIELD_MODULUS,
    JUBJUB_A,
    JUBJUB_D,
    COMPRESSION_SIGN_BIT,
    COMPRESSION_Y_MASK,
    COMPRESSED_POINT_BITS,
)
from zkaudit.core.types import IntLike, Point, parse_int, to_hex32
from zkaudit.crypto.curve import is_on_curve
from zkaudit.crypto.number_theory import mod_inverse, sqrt_mod_prime
from zkaudit.errors import InvalidPointError, InvalidEncodingError, NonResidueError

logger = logging.getLogger(__name__)

P = FIELD_MODULUS


def edwards_compress(point: Point) -> int:
    """
    Compress a curve point to a single 256-bit value.

    Raises:
        InvalidPointError: If the point is not on the curve
    """
    if not is_on_curve(point):
        raise InvalidPointError(point)
    sign = point.x & 1
    return (sign << COMPRESSION_SIGN_BIT) | point.y


def edwards_compress_hex(point: Point) -> str:
    """Compressed point as a 0x-prefixed 32-byte hex string."""
    return to_hex32(edwards_compress(point))


def edwards_decompress(value: IntLike) -> Point:
    """
    Recover a curve point from its compressed form.

    Args:
        value: Compressed point as int or hex string

    Returns:
        The point whose compression equals value

    Raises:
        InvalidEncodingError: If value does not encode a curve point
    """
    try:
        packed = parse_int(value)
    except (TypeError, ValueError) as e:
        raise InvalidEncodingError(value, "not an integer") from e
    if packed < 0 or packed >> COMPRESSED_POINT_BITS:
        raise InvalidEncodingError(packed, "value does not fit in 256 bits")

    sign = packed >> COMPRESSION_SIGN_BIT
    y = packed & COMPRESSION_Y_MASK
    if y >= P:
        raise InvalidEncodingError(packed, "y coordinate is not a field element")

    # a*x^2 + y^2 = 1 + d*x^2*y^2  =>  x^2 = (y^2 - 1) / (d*y^2 - a)
    y2 = y * y % P
    x2 = (y2 - 1) * mod_inverse(JUBJUB_D * y2 - JUBJUB_A, P) % P

    try:
        x = sqrt_mod_prime(x2, P)
    except NonResidueError as e:
        raise InvalidEncodingError(packed, "no x coordinate exists for y") from e

    if x == 0 and sign:
        raise InvalidEncodingError(packed, "sign bit set for x = 0")
    if x & 1 != sign:
        x = P - x

    point = Point(x, y)
    logger.debug(f"Decompressed {hex(packed)} -> {point}")
    return point
