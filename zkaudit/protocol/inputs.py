"""
zkaudit Proof Input Preparation

Builds the flat inputs handed to the external proving toolchain:

- the compressed public-input array whose hash becomes the proof's single
  public input, with the ciphertext block at the offsets listed in
  DECRYPTION_TYPES so observers can find it in the event log;
- the witness encoding of individual values (bits, bytes, field limbs or
  plain scalars).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from zkaudit.constants import (
    DECRYPTION_TYPES,
    DEFAULT_HASH_TYPE,
    FIELD_ELEMENT_BYTES,
    FIELD_PACKING_BITS,
    TX_TYPE_BURN,
    TX_TYPE_TRANSFER,
)
from zkaudit.core.types import IntLike, Point, parse_int
from zkaudit.crypto.compression import edwards_compress
from zkaudit.crypto.elgamal import AuthorityKeys, random_secret
from zkaudit.crypto.hash import concatenate_then_hash
from zkaudit.errors import InvalidCiphertextError, InvalidParameterError

logger = logging.getLogger(__name__)

ENCODINGS = ("bits", "bytes", "field", "scalar")


# ==============================================================================
# Witness encoding
# ==============================================================================

def _bit_width(value: IntLike) -> int:
    """Width implied by a hex string's length, else a full 256-bit word."""
    if isinstance(value, str) and value.lower().startswith("0x"):
        return max(len(value) - 2, 1) * 4
    return FIELD_ELEMENT_BYTES * 8


@dataclass
class Element:
    """
    A value destined for the proof witness together with its encoding.

    For 'field' encoding the value is split into `packets` limbs of
    `packing_size` bits each, most significant first; bits above
    packing_size * packets are dropped.
    """
    value: IntLike
    encoding: str = "field"
    packing_size: int = FIELD_PACKING_BITS
    packets: Optional[int] = None

    def __post_init__(self):
        if self.encoding not in ENCODINGS:
            raise InvalidParameterError("encoding", f"'{self.encoding}' not recognised")
        if self.packing_size < 1:
            raise InvalidParameterError("packing_size", "must be positive")
        if self.encoding == "scalar" and not isinstance(self.value, int):
            raise InvalidParameterError("value", f"scalar {self.value!r} is not an int")
        if self.packets is None:
            width = _bit_width(self.value)
            self.packets = -(-width // self.packing_size)

    def encode(self) -> List[str]:
        number = parse_int(self.value)
        if self.encoding == "scalar":
            return [str(number)]
        if self.encoding == "bits":
            width = _bit_width(self.value)
            return list(format(number, "b").zfill(width)[-width:])
        if self.encoding == "bytes":
            width = _bit_width(self.value) // 8 or 1
            number &= (1 << (width * 8)) - 1
            return [str(b) for b in number.to_bytes(width, "big")]
        mask = (1 << self.packing_size) - 1
        limbs = []
        for i in reversed(range(self.packets)):
            limbs.append(str((number >> (i * self.packing_size)) & mask))
        return limbs


def format_inputs_for_zksnark(elements: Sequence[Element]) -> List[str]:
    """Concatenate the encodings of all elements, in order."""
    out: List[str] = []
    for element in elements:
        out.extend(element.encode())
    return out


def flatten_deep(items: Any) -> List[Any]:
    """Flatten arbitrarily nested lists and tuples (e.g. verification keys)."""
    if not isinstance(items, (list, tuple)):
        return [items]
    flat: List[Any] = []
    for item in items:
        flat.extend(flatten_deep(item))
    return flat


# ==============================================================================
# Compliance encryption
# ==============================================================================

def encrypt_transfer(
    authority: AuthorityKeys,
    value: IntLike,
    sender_public_key: IntLike,
    receiver_public_key: IntLike,
    randomness: Optional[int] = None,
) -> Tuple[int, List[Point]]:
    """
    Encrypt a transfer's hidden values for the authorities.

    Returns:
        (ephemeral secret, [R, value*G + M, sender*G + M, receiver*G + M])
    """
    r = random_secret() if randomness is None else randomness
    return r, authority.encrypt(r, [value, sender_public_key, receiver_public_key])


def encrypt_burn(
    authority: AuthorityKeys,
    sender_public_key: IntLike,
    randomness: Optional[int] = None,
) -> Tuple[int, List[Point]]:
    """Encrypt the burning key's identity: (secret, [R, sender*G + M])."""
    r = random_secret() if randomness is None else randomness
    return r, authority.encrypt(r, [sender_public_key])


# ==============================================================================
# Public input arrays
# ==============================================================================

def _compressed_ciphertext(ciphertext: Sequence[Point], tx_type: str) -> List[int]:
    expected = DECRYPTION_TYPES[tx_type].point_count
    if len(ciphertext) != expected:
        raise InvalidCiphertextError(
            f"{tx_type} needs {expected} ciphertext points, got {len(ciphertext)}"
        )
    return [edwards_compress(pt) for pt in ciphertext]


def transfer_public_inputs(
    root: IntLike,
    nullifiers: Sequence[IntLike],
    commitments: Sequence[IntLike],
    public_key_root: IntLike,
    ciphertext: Sequence[Point],
    authority: AuthorityKeys,
) -> List[int]:
    """
    Compressed public inputs of a transfer:
    [root, nullifier x2, commitment x2, key root, ciphertext x4, authority keys].
    """
    if len(nullifiers) != 2 or len(commitments) != 2:
        raise InvalidParameterError("nullifiers/commitments", "a transfer spends two and creates two")

    inputs = [parse_int(root)]
    inputs += [parse_int(n) for n in nullifiers]
    inputs += [parse_int(c) for c in commitments]
    inputs.append(parse_int(public_key_root))
    inputs += _compressed_ciphertext(ciphertext, TX_TYPE_TRANSFER)
    inputs += authority.compressed_public_keys()
    return inputs


def burn_public_inputs(
    token_address: IntLike,
    root: IntLike,
    nullifier: IntLike,
    amount: IntLike,
    pay_to: IntLike,
    public_key_root: IntLike,
    ciphertext: Sequence[Point],
    authority: AuthorityKeys,
) -> List[int]:
    """
    Compressed public inputs of a burn:
    [token, root, nullifier, amount, payTo, key root, ciphertext x2, authority keys].
    """
    inputs = [parse_int(v) for v in (token_address, root, nullifier, amount, pay_to, public_key_root)]
    inputs += _compressed_ciphertext(ciphertext, TX_TYPE_BURN)
    inputs += authority.compressed_public_keys()
    return inputs


def public_input_hash(inputs: Sequence[IntLike], hash_type: str = DEFAULT_HASH_TYPE) -> int:
    """Hash of the compressed public-input array."""
    digest = concatenate_then_hash(*inputs, hash_type=hash_type)
    logger.debug(f"publicInputHash over {len(inputs)} inputs: {hex(digest)}")
    return digest
