"""
zkaudit Test Fixtures
"""

import random

import pytest

from zkaudit.crypto.elgamal import AuthorityKeys
from zkaudit.ledger.whitelist import WhitelistTree


# Deterministic authority secrets; small enough to read in failures
AUTHORITY_SECRETS = [
    0x1F3A9C5E7B2D4F6081A3C5E7092B4D6F,
    0x2E4C6A8F0B1D3F5173950B2D4F617385,
    0x3D5F71930A2C4E6082A4C6E8001A3C5E,
]


@pytest.fixture
def rng() -> random.Random:
    """Seeded RNG so failures are reproducible."""
    return random.Random(0x5EED)


@pytest.fixture
def authority_secrets():
    return list(AUTHORITY_SECRETS)


@pytest.fixture
def authority(authority_secrets) -> AuthorityKeys:
    """Three-authority context with every private key set."""
    return AuthorityKeys.from_private_keys(authority_secrets)


@pytest.fixture
def public_authority(authority) -> AuthorityKeys:
    """The same authorities as seen by a transactor: public keys only."""
    return AuthorityKeys(authority.public_keys)


@pytest.fixture
def whitelist_keys():
    return [
        0x0A1B2C3D4E5F60718293A4B5C6D7E8F90A1B2C3D4E5F60718293A4B5C6D7E8,
        0x1122334455667788991122334455667788991122334455667788991122,
        0x0BADC0FFEE0DDF00D0BADC0FFEE0DDF00D,
    ]


@pytest.fixture
def small_tree(whitelist_keys) -> WhitelistTree:
    """Height-3 whitelist holding three keys."""
    tree = WhitelistTree(height=3)
    for key in whitelist_keys:
        tree.add_key(key)
    return tree
