"""
zkaudit Cryptographic Primitives
"""

from zkaudit.crypto.number_theory import sqrt_mod_prime, legendre_symbol, mod_inverse
from zkaudit.crypto.curve import (
    GENERATOR,
    IDENTITY,
    add,
    negate,
    subtract,
    scalar_mult,
    is_on_curve,
)
from zkaudit.crypto.compression import edwards_compress, edwards_decompress
from zkaudit.crypto.elgamal import AuthorityKeys, generate_authority_keys, random_secret
from zkaudit.crypto.discrete_log import SearchBudget, brute_force, range_generator
from zkaudit.crypto.hash import concatenate_then_hash, node_hash

__all__ = [
    # Number theory
    "sqrt_mod_prime",
    "legendre_symbol",
    "mod_inverse",
    # Curve group
    "GENERATOR",
    "IDENTITY",
    "add",
    "negate",
    "subtract",
    "scalar_mult",
    "is_on_curve",
    # Point codec
    "edwards_compress",
    "edwards_decompress",
    # ElGamal
    "AuthorityKeys",
    "generate_authority_keys",
    "random_secret",
    # Discrete log
    "SearchBudget",
    "brute_force",
    "range_generator",
    # Hashing
    "concatenate_then_hash",
    "node_hash",
]
