"""
zkaudit Commitment Hashing

Concatenate-then-hash over field elements, with two interchangeable
back-ends selected by configuration:

- "sha":  SHA-256 over the 32-byte big-endian concatenation
- "mimc": MiMC-p/p with exponent 7 over the BN254 field, Miyaguchi-Preneel
          compression, round constants chained from keccak256("mimc")
"""

from __future__ import annotations
import hashlib
from functools import lru_cache
from typing import Callable, Dict, List, Tuple

from Crypto.Hash import keccak

from zkaudit.constants import (
    FIELD_MODULUS,
    FIELD_ELEMENT_BYTES,
    DEFAULT_HASH_TYPE,
    HASH_TYPE_SHA,
    HASH_TYPE_MIMC,
    NODE_HASHLENGTH,
    MIMC_SEED,
    MIMC_ROUNDS,
    MIMC_EXPONENT,
)
from zkaudit.core.types import IntLike, parse_int
from zkaudit.errors import InvalidParameterError, UnknownHashTypeError


def keccak256(data: bytes) -> bytes:
    """Ethereum keccak256 (pre-standard SHA-3 padding)."""
    return keccak.new(digest_bits=256, data=data).digest()


# ==============================================================================
# SHA-256
# ==============================================================================

def _to_word(value: int) -> bytes:
    if value < 0 or value.bit_length() > FIELD_ELEMENT_BYTES * 8:
        raise InvalidParameterError("item", f"{value} does not fit in {FIELD_ELEMENT_BYTES} bytes")
    return value.to_bytes(FIELD_ELEMENT_BYTES, "big")


def sha_hash(*items: IntLike) -> int:
    """SHA-256 of the concatenated 32-byte words."""
    data = b"".join(_to_word(parse_int(item)) for item in items)
    return int.from_bytes(hashlib.sha256(data).digest(), "big")


# ==============================================================================
# MiMC
# ==============================================================================

@lru_cache(maxsize=1)
def mimc_round_constants() -> Tuple[int, ...]:
    """Round constants c_i = keccak256(c_{i-1}), c_0 = keccak256(seed)."""
    constants: List[int] = []
    c = keccak256(MIMC_SEED)
    for _ in range(MIMC_ROUNDS):
        c = keccak256(c)
        constants.append(int.from_bytes(c, "big"))
    return tuple(constants)


def mimc_encrypt(x: int, k: int) -> int:
    """MiMC block cipher E_k(x) with exponent 7."""
    p = FIELD_MODULUS
    for c in mimc_round_constants():
        x = pow((x + c + k) % p, MIMC_EXPONENT, p)
    return (x + k) % p


def mimc_hash(*items: IntLike) -> int:
    """
    Miyaguchi-Preneel chaining of the MiMC cipher over field elements.

    Each item is reduced modulo the field before absorption.
    """
    p = FIELD_MODULUS
    r = 0
    for item in items:
        x = parse_int(item) % p
        r = (r + x + mimc_encrypt(x, r)) % p
    return r


# ==============================================================================
# Selection
# ==============================================================================

HASH_FUNCTIONS: Dict[str, Callable[..., int]] = {
    HASH_TYPE_SHA: sha_hash,
    HASH_TYPE_MIMC: mimc_hash,
}


def get_hash_function(hash_type: str = DEFAULT_HASH_TYPE) -> Callable[..., int]:
    try:
        return HASH_FUNCTIONS[hash_type]
    except KeyError:
        raise UnknownHashTypeError(hash_type) from None


def concatenate_then_hash(*items: IntLike, hash_type: str = DEFAULT_HASH_TYPE) -> int:
    """
    Hash a sequence of field elements with the configured back-end.

    Args:
        *items: Values as ints or 0x-hex strings
        hash_type: "sha" or "mimc"

    Returns:
        The digest as an integer
    """
    return get_hash_function(hash_type)(*items)


def truncate(value: int, num_bytes: int) -> int:
    """Keep the right-most num_bytes of a 256-bit value."""
    return value & ((1 << (num_bytes * 8)) - 1)


def node_hash(left: int, right: int, hash_type: str = DEFAULT_HASH_TYPE) -> int:
    """
    Parent value of two tree nodes.

    SHA output is cut to NODE_HASHLENGTH bytes so nodes stay inside the
    field; MiMC output already is a field element.
    """
    digest = concatenate_then_hash(left, right, hash_type=hash_type)
    if hash_type == HASH_TYPE_SHA:
        return truncate(digest, NODE_HASHLENGTH)
    return digest
