"""
zkaudit Constants

All protocol constants defined here for single source of truth.
"""

from typing import Final, Dict, Tuple
from dataclasses import dataclass

# ==============================================================================
# FIELD
# ==============================================================================

# BN254 scalar field: the native field of the proving circuits
FIELD_MODULUS: Final[int] = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)
FIELD_ELEMENT_BYTES: Final[int] = 32
FIELD_ELEMENT_HEX_CHARS: Final[int] = FIELD_ELEMENT_BYTES * 2

# ==============================================================================
# BABY JUBJUB CURVE:  a*x^2 + y^2 = 1 + d*x^2*y^2  over FIELD_MODULUS
# ==============================================================================

JUBJUB_A: Final[int] = 168700
JUBJUB_D: Final[int] = 168696
JUBJUB_COFACTOR: Final[int] = 8

# Order of the full curve group (cofactor * subgroup order)
JUBJUB_CURVE_ORDER: Final[int] = (
    21888242871839275222246405745257275088614511777268538073601725287587578984328
)

# Order of the prime subgroup generated by JUBJUB_GENERATOR
JUBJUB_SUBGROUP_ORDER: Final[int] = JUBJUB_CURVE_ORDER // JUBJUB_COFACTOR

JUBJUB_IDENTITY: Final[Tuple[int, int]] = (0, 1)

JUBJUB_GENERATOR: Final[Tuple[int, int]] = (
    16540640123574156134436876038791482806971768689494387082833631921987005038935,
    20819045374670962167435360035096875258406992893633759881276124905556507972311,
)

# ==============================================================================
# POINT COMPRESSION
# ==============================================================================

# Bit 255 of the 256-bit word carries the parity of x, bits 0..254 carry y
COMPRESSION_SIGN_BIT: Final[int] = 255
COMPRESSION_Y_MASK: Final[int] = (1 << COMPRESSION_SIGN_BIT) - 1
COMPRESSED_POINT_BITS: Final[int] = 256

# ==============================================================================
# ELGAMAL
# ==============================================================================

# 31 bytes keeps the ephemeral secret below the field modulus
RANDOM_SECRET_BYTES: Final[int] = 31

# ==============================================================================
# DISCRETE LOG RECOVERY
# ==============================================================================

BRUTE_FORCE_LOG_INTERVAL: Final[int] = 100_000

# ==============================================================================
# HASHING
# ==============================================================================

HASH_TYPE_SHA: Final[str] = "sha"
HASH_TYPE_MIMC: Final[str] = "mimc"
HASH_TYPES: Final[Tuple[str, ...]] = (HASH_TYPE_SHA, HASH_TYPE_MIMC)
DEFAULT_HASH_TYPE: Final[str] = HASH_TYPE_SHA

NODE_HASHLENGTH: Final[int] = 27                # bytes, keeps nodes inside the field

MIMC_SEED: Final[bytes] = b"mimc"
MIMC_ROUNDS: Final[int] = 91
MIMC_EXPONENT: Final[int] = 7

# ==============================================================================
# WHITELIST (PUBLIC KEY) TREE
# ==============================================================================

PUBLIC_KEY_TREE_HEIGHT: Final[int] = 32
ROOT_INDEX: Final[int] = 0


def first_leaf_index(height: int) -> int:
    """Heap index of the left-most leaf in a tree of the given height."""
    return 2 ** height - 1


# Contract getters read by the JSON-RPC accessor
WHITELIST_L_SIGNATURE: Final[str] = "L(bytes32)"
WHITELIST_M_SIGNATURE: Final[str] = "M(uint256)"
RPC_TIMEOUT_SEC: Final[float] = 10.0

# ==============================================================================
# PROOF PUBLIC INPUTS
# ==============================================================================

TX_TYPE_TRANSFER: Final[str] = "Transfer"
TX_TYPE_BURN: Final[str] = "Burn"


@dataclass(frozen=True)
class DecryptionType:
    """Location of the ciphertext block inside a public-input array."""
    name: str
    start: int      # inclusive
    end: int        # exclusive

    @property
    def point_count(self) -> int:
        return self.end - self.start

    @property
    def message_count(self) -> int:
        # First point is the ephemeral key
        return self.point_count - 1


# Transfer: [root, nullifier x2, commitment x2, key root, R, value, sender, receiver, ...]
# Burn:     [token, root, nullifier, amount, payTo, key root, R, sender, ...]
DECRYPTION_TYPES: Final[Dict[str, DecryptionType]] = {
    TX_TYPE_TRANSFER: DecryptionType(TX_TYPE_TRANSFER, start=6, end=10),
    TX_TYPE_BURN: DecryptionType(TX_TYPE_BURN, start=6, end=8),
}

# Default packing for 'field' encoded proof inputs
FIELD_PACKING_BITS: Final[int] = 248
