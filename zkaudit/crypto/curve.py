"""
zkaudit Baby Jubjub Group Law

Affine twisted Edwards arithmetic on  a*x^2 + y^2 = 1 + d*x^2*y^2.

The addition law is complete for Baby Jubjub (a is a square, d is not),
so no special cases are needed for doubling or the identity.
"""

from __future__ import annotations
from typing import Iterable

from zkaudit.constants import (
    FIELD_MODULUS,
    JUBJUB_A,
    JUBJUB_D,
    JUBJUB_CURVE_ORDER,
    JUBJUB_GENERATOR,
    JUBJUB_IDENTITY,
)
from zkaudit.core.types import Point
from zkaudit.crypto.number_theory import mod_inverse

P = FIELD_MODULUS

IDENTITY = Point(*JUBJUB_IDENTITY)
GENERATOR = Point(*JUBJUB_GENERATOR)


def is_on_curve(point: Point) -> bool:
    """Check that the point satisfies the curve equation."""
    x2 = point.x * point.x % P
    y2 = point.y * point.y % P
    lhs = (JUBJUB_A * x2 + y2) % P
    rhs = (1 + JUBJUB_D * x2 % P * y2) % P
    return lhs == rhs


def add(p1: Point, p2: Point) -> Point:
    """
    Add two curve points.

    x3 = (x1*y2 + y1*x2) / (1 + d*x1*x2*y1*y2)
    y3 = (y1*y2 - a*x1*x2) / (1 - d*x1*x2*y1*y2)
    """
    x1, y1 = p1
    x2, y2 = p2
    x1x2 = x1 * x2 % P
    y1y2 = y1 * y2 % P
    t = JUBJUB_D * x1x2 % P * y1y2 % P

    x3 = (x1 * y2 + y1 * x2) * mod_inverse(1 + t, P) % P
    y3 = (y1y2 - JUBJUB_A * x1x2) * mod_inverse(1 - t, P) % P
    return Point(x3, y3)


def negate(point: Point) -> Point:
    """Additive inverse: (x, y) -> (-x, y)."""
    return Point(-point.x, point.y)


def subtract(p1: Point, p2: Point) -> Point:
    """p1 - p2."""
    return add(p1, negate(p2))


def scalar_mult(scalar: int, point: Point = GENERATOR) -> Point:
    """
    Double-and-add scalar multiplication.

    The scalar is reduced modulo the curve order first, which leaves the
    result unchanged for every curve point.

    Args:
        scalar: Non-negative integer multiplier
        point: Base point (defaults to the generator)

    Returns:
        scalar * point
    """
    if scalar < 0:
        raise ValueError("Scalar must be non-negative")
    k = scalar % JUBJUB_CURVE_ORDER

    result = IDENTITY
    addend = point
    while k:
        if k & 1:
            result = add(result, addend)
        addend = add(addend, addend)
        k >>= 1
    return result


def sum_points(points: Iterable[Point]) -> Point:
    """Sum of a collection of points (identity when empty)."""
    total = IDENTITY
    for point in points:
        total = add(total, point)
    return total
