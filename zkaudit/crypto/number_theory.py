"""
zkaudit Number Theory

Modular square roots over arbitrary odd primes (Tonelli-Shanks).
"""

from __future__ import annotations
from Crypto.Util.number import inverse

from zkaudit.errors import NonResidueError


def mod_inverse(value: int, p: int) -> int:
    """Multiplicative inverse of value modulo p."""
    if value % p == 0:
        raise ZeroDivisionError("0 has no inverse modulo p")
    return inverse(value % p, p)


def legendre_symbol(n: int, p: int) -> int:
    """
    Legendre symbol (n/p) for an odd prime p.

    Returns:
        1 if n is a non-zero quadratic residue, p - 1 if it is a
        non-residue and 0 if p divides n.
    """
    return pow(n % p, (p - 1) // 2, p)


def is_quadratic_residue(n: int, p: int) -> bool:
    """True when n has a square root modulo p (0 counts as a residue)."""
    n %= p
    if n == 0 or p == 2:
        return True
    return legendre_symbol(n, p) == 1


def sqrt_mod_prime(n: int, p: int) -> int:
    """
    Square root of n modulo the prime p.

    Works for every residue class of p (Tonelli-Shanks, with the
    p = 3 mod 4 exponentiation shortcut). Of the two roots {r, p - r}
    the smaller one is returned; callers needing the other use p - r.

    Args:
        n: Value to take the root of
        p: Prime modulus

    Returns:
        r with r * r = n (mod p)

    Raises:
        NonResidueError: If n is not a quadratic residue modulo p
    """
    n %= p
    if n == 0 or p == 2:
        return n

    if not is_quadratic_residue(n, p):
        raise NonResidueError(n, p)

    if p % 4 == 3:
        root = pow(n, (p + 1) // 4, p)
        return min(root, p - root)

    # Write p - 1 = q * 2^s with q odd
    q = p - 1
    s = 0
    while q % 2 == 0:
        q //= 2
        s += 1

    # Any non-residue serves as the 2^s-th root of unity generator
    z = 2
    while legendre_symbol(z, p) != p - 1:
        z += 1

    m = s
    c = pow(z, q, p)
    t = pow(n, q, p)
    root = pow(n, (q + 1) // 2, p)

    while t != 1:
        # Least i with t^(2^i) = 1
        i = 0
        t2i = t
        while t2i != 1:
            t2i = t2i * t2i % p
            i += 1
            if i == m:
                raise NonResidueError(n, p)

        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = b * b % p
        t = t * c % p
        root = root * b % p

    return min(root, p - root)
