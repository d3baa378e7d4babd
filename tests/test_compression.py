"""
zkaudit Point Compression Tests
"""

import pytest

from zkaudit.constants import FIELD_MODULUS, JUBJUB_A, JUBJUB_D
from zkaudit.core.types import Point
from zkaudit.crypto.compression import (
    edwards_compress,
    edwards_compress_hex,
    edwards_decompress,
)
from zkaudit.crypto.curve import GENERATOR, IDENTITY, is_on_curve, negate, scalar_mult
from zkaudit.crypto.number_theory import is_quadratic_residue, mod_inverse
from zkaudit.errors import (
    ErrorCode,
    InvalidEncodingError,
    InvalidPointError,
    NonResidueError,
)

P = FIELD_MODULUS

COMPRESSED_GENERATOR = 0xAE07297F8D3C3D7818DBDDFD24C35583F9A9D4ED0CB0C1D1348DD8F7F99152D7


def _y_without_point() -> int:
    """Smallest y for which the curve has no x."""
    y = 2
    while True:
        y2 = y * y % P
        x2 = (y2 - 1) * mod_inverse(JUBJUB_D * y2 - JUBJUB_A, P) % P
        if not is_quadratic_residue(x2, P):
            return y
        y += 1


class TestCompress:
    """Tests for point compression."""

    def test_generator(self):
        """Test compression of the generator against a known value."""
        assert edwards_compress(GENERATOR) == COMPRESSED_GENERATOR
        assert edwards_compress_hex(GENERATOR) == hex(COMPRESSED_GENERATOR)

    def test_layout(self):
        """Test that y sits in the low bits and x parity in bit 255."""
        point = scalar_mult(12345)
        packed = edwards_compress(point)
        assert packed & ((1 << 255) - 1) == point.y
        assert packed >> 255 == point.x & 1

    def test_identity(self):
        """Test that the identity compresses to 1."""
        assert edwards_compress(IDENTITY) == 1
        assert edwards_decompress(1) == IDENTITY

    def test_negation_flips_sign_only(self):
        """Test that P and -P differ only in the sign bit."""
        point = scalar_mult(99)
        a = edwards_compress(point)
        b = edwards_compress(negate(point))
        assert a ^ b == 1 << 255

    def test_off_curve_rejected(self):
        """Test that a point off the curve cannot be compressed."""
        with pytest.raises(InvalidPointError) as exc_info:
            edwards_compress(Point(5, 7))
        assert exc_info.value.code == ErrorCode.INVALID_POINT


class TestDecompress:
    """Tests for point decompression."""

    def test_round_trip(self, rng):
        """Test decompress(compress(P)) == P for random points."""
        points = [GENERATOR, IDENTITY, negate(GENERATOR)]
        points += [scalar_mult(rng.randrange(1, P)) for _ in range(20)]
        for point in points:
            assert edwards_decompress(edwards_compress(point)) == point

    def test_hex_input(self):
        """Test that event-log hex strings are accepted."""
        assert edwards_decompress(hex(COMPRESSED_GENERATOR)) == GENERATOR
        assert edwards_decompress("0x" + "00" * 31 + "01") == IDENTITY

    def test_order_two_point(self):
        """Test the point (0, -1), which has x = 0 and no sign."""
        point = Point(0, P - 1)
        assert is_on_curve(point)
        assert edwards_decompress(edwards_compress(point)) == point

    def test_y_not_in_field(self):
        """Test that y >= p is rejected."""
        with pytest.raises(InvalidEncodingError):
            edwards_decompress(P)

    def test_too_wide(self):
        """Test that values beyond 256 bits are rejected."""
        with pytest.raises(InvalidEncodingError):
            edwards_decompress(1 << 256)
        with pytest.raises(InvalidEncodingError):
            edwards_decompress(-1)

    def test_no_x_for_y(self):
        """Test that y without a matching x is rejected."""
        y = _y_without_point()
        with pytest.raises(InvalidEncodingError) as exc_info:
            edwards_decompress(y)
        assert isinstance(exc_info.value.__cause__, NonResidueError)

    def test_sign_bit_with_zero_x(self):
        """Test that a negative zero x is rejected."""
        with pytest.raises(InvalidEncodingError) as exc_info:
            edwards_decompress((1 << 255) | 1)
        assert exc_info.value.code == ErrorCode.INVALID_ENCODING

    def test_malformed_hex(self):
        """Test that a non-hex string is an encoding error."""
        with pytest.raises(InvalidEncodingError) as exc_info:
            edwards_decompress("0xzz")
        assert exc_info.value.details["value"] == "'0xzz'"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_non_integer_type(self):
        """Test that a float is an encoding error."""
        with pytest.raises(InvalidEncodingError):
            edwards_decompress(1.5)
