"""
zkaudit Multi-Authority ElGamal

Hidden transaction values are encrypted to the sum of every compliance
authority's public key:

    R  = r * G
    Ci = mi * G + r * (A1 + A2 + ... + An)

Decryption subtracts (a1 + a2 + ... + an) * R from each Ci, which needs
the private share of every authority. Any missing share leaves the mask in
place, so the result never equals mi * G.

Decryption yields mi * G, not mi; see zkaudit.crypto.discrete_log for the
step back to the integer.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from Crypto.Random import get_random_bytes
from Crypto.Util.number import bytes_to_long

from zkaudit.constants import RANDOM_SECRET_BYTES
from zkaudit.core.types import IntLike, Point, parse_int
from zkaudit.crypto.compression import edwards_compress, edwards_decompress
from zkaudit.crypto.curve import GENERATOR, add, is_on_curve, scalar_mult, subtract, sum_points
from zkaudit.errors import (
    AuthorityKeysNotSetError,
    InvalidCiphertextError,
    InvalidParameterError,
    InvalidPointError,
)

logger = logging.getLogger(__name__)


def random_secret(num_bytes: int = RANDOM_SECRET_BYTES) -> int:
    """
    Draw a uniformly random ephemeral scalar.

    31 bytes stays below both the field modulus and the curve order, so no
    reduction (and no modulo bias) is involved.
    """
    if num_bytes < 1:
        raise InvalidParameterError("num_bytes", "must be at least 1")
    return bytes_to_long(get_random_bytes(num_bytes))


class AuthorityKeys:
    """
    Key context for one set of compliance authorities.

    Public keys are fixed at construction. Private keys are supplied per
    decryption session with set_private_keys and held as an immutable
    tuple, so a concurrent reader sees either the old or the new set.
    Callers running concurrent sessions must still serialize key updates
    against in-flight decryptions themselves.
    """

    def __init__(self, public_keys: Sequence[Point]):
        keys = tuple(public_keys)
        if not keys:
            raise InvalidParameterError("public_keys", "at least one authority key is required")
        for key in keys:
            if not is_on_curve(key):
                raise InvalidPointError(key)

        self._public_keys: Tuple[Point, ...] = keys
        self._combined_public_key = sum_points(keys)
        self._private_keys: Tuple[int, ...] = ()

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_private_keys(cls, private_keys: Sequence[int]) -> AuthorityKeys:
        """Derive the public keys and keep the private keys set."""
        authority = cls([scalar_mult(k, GENERATOR) for k in private_keys])
        authority.set_private_keys(private_keys)
        return authority

    @classmethod
    def from_compressed(cls, compressed_keys: Sequence[IntLike]) -> AuthorityKeys:
        """Load published compressed public keys."""
        return cls([edwards_decompress(k) for k in compressed_keys])

    # ------------------------------------------------------------------
    # Key state
    # ------------------------------------------------------------------

    @property
    def public_keys(self) -> Tuple[Point, ...]:
        return self._public_keys

    @property
    def combined_public_key(self) -> Point:
        return self._combined_public_key

    @property
    def has_private_keys(self) -> bool:
        return bool(self._private_keys)

    def compressed_public_keys(self) -> List[int]:
        return [edwards_compress(k) for k in self._public_keys]

    def set_private_keys(self, private_keys: Sequence[IntLike]) -> None:
        """Provide the authorities' private keys for decryption."""
        keys = tuple(parse_int(k) for k in private_keys)
        if any(k < 0 for k in keys):
            raise InvalidParameterError("private_keys", "keys must be non-negative")
        if len(keys) != len(self._public_keys):
            logger.warning(
                f"{len(keys)} private keys set for {len(self._public_keys)} authorities; "
                "decryption will not recover the plaintext"
            )
        self._private_keys = keys
        logger.debug(f"Authority private keys set ({len(keys)} keys)")

    def clear_private_keys(self) -> None:
        self._private_keys = ()

    # ------------------------------------------------------------------
    # Cipher
    # ------------------------------------------------------------------

    def encrypt(self, randomness: Optional[int], messages: Sequence[IntLike]) -> List[Point]:
        """
        Encrypt messages under the combined authority key.

        Args:
            randomness: Ephemeral scalar r; a fresh one is drawn when None
            messages: Plaintext integers (ints or hex strings)

        Returns:
            [r*G, m1*G + r*K, m2*G + r*K, ...] with K the combined key
        """
        r = random_secret() if randomness is None else parse_int(randomness)
        if r < 0:
            raise InvalidParameterError("randomness", "must be non-negative")

        plaintexts = [parse_int(m) for m in messages]
        if any(m < 0 for m in plaintexts):
            raise InvalidParameterError("messages", "plaintexts must be non-negative")

        mask = scalar_mult(r, self._combined_public_key)
        ciphertext = [scalar_mult(r, GENERATOR)]
        for m in plaintexts:
            ciphertext.append(add(scalar_mult(m, GENERATOR), mask))
        return ciphertext

    def decrypt(self, ciphertext: Sequence[Point]) -> List[Point]:
        """
        Strip the authority mask from every message point.

        Args:
            ciphertext: [R, C1, C2, ...] as produced by encrypt

        Returns:
            [m1*G, m2*G, ...]

        Raises:
            AuthorityKeysNotSetError: If no private keys have been set
            InvalidCiphertextError: If the ciphertext has no ephemeral point
        """
        private_keys = self._private_keys
        if not private_keys:
            raise AuthorityKeysNotSetError()
        if len(ciphertext) < 1:
            raise InvalidCiphertextError("missing ephemeral point")

        ephemeral = ciphertext[0]
        for point in ciphertext:
            if not is_on_curve(point):
                raise InvalidPointError(point)

        shared = scalar_mult(sum(private_keys), ephemeral)
        return [subtract(point, shared) for point in ciphertext[1:]]


def generate_authority_keys(count: int) -> Tuple[AuthorityKeys, List[int]]:
    """
    Create a fresh authority set for development and testing.

    Returns:
        (context without private keys set, list of private keys)
    """
    if count < 1:
        raise InvalidParameterError("count", "must be at least 1")
    private_keys = [random_secret() for _ in range(count)]
    authority = AuthorityKeys([scalar_mult(k, GENERATOR) for k in private_keys])
    return authority, private_keys


def encrypt(randomness: Optional[int], messages: Sequence[IntLike], authority: AuthorityKeys) -> List[Point]:
    return authority.encrypt(randomness, messages)


def decrypt(ciphertext: Sequence[Point], authority: AuthorityKeys) -> List[Point]:
    return authority.decrypt(ciphertext)
