"""
zkaudit Whitelist Membership Paths

The whitelist of approved public keys is a complete binary tree of fixed
height H stored on the ledger as a flat heap-indexed array: node 0 is the
root, the children of node i are 2i + 1 and 2i + 2, and the leaves occupy
indices [2^H - 1, 2^(H+1) - 2].

The contract exposes two getters:

    L(key)   -> heap index of the key's leaf (0 when the key is absent)
    M(index) -> value stored at that heap index

A membership path lists the root at position 0 and then one sibling per
level, from the level just below the root (position 1) down to the
queried leaf's own sibling (position H).
"""

from __future__ import annotations
import asyncio
import logging
from typing import Dict, List, Protocol, Sequence, Tuple

from zkaudit.constants import (
    PUBLIC_KEY_TREE_HEIGHT,
    ROOT_INDEX,
    DEFAULT_HASH_TYPE,
    first_leaf_index,
)
from zkaudit.core.types import IntLike, MembershipPath, field_element_hex, parse_int, to_field_element
from zkaudit.crypto.hash import node_hash
from zkaudit.errors import (
    InvalidParameterError,
    KeyNotWhitelistedError,
    LedgerReadError,
    RootMismatchError,
)

logger = logging.getLogger(__name__)


class WhitelistAccessor(Protocol):
    """Read-only view of the ledger-resident whitelist tree."""

    async def L(self, key: str) -> int:
        ...

    async def M(self, index: int) -> int:
        ...


# ==============================================================================
# Heap index arithmetic
# ==============================================================================

def sibling_and_parent(index: int) -> Tuple[int, int]:
    """
    Sibling and parent heap indices of a non-root node.

    Left children sit at odd indices and right children at even ones.
    """
    if index <= ROOT_INDEX:
        raise InvalidParameterError("index", "the root has no sibling")
    if index % 2 == 0:
        return index - 1, (index - 1) // 2
    return index + 1, index // 2


def path_indices(node_index: int, height: int) -> List[int]:
    """
    Heap indices whose values make up a membership path.

    Element 0 is the root index; element r (1..height) is the sibling
    read at depth r.
    """
    indices = [ROOT_INDEX] * (height + 1)
    p = node_index
    for r in range(height, 0, -1):
        sibling, parent = sibling_and_parent(p)
        indices[r] = sibling
        p = parent
    return indices


# ==============================================================================
# Path retrieval
# ==============================================================================

async def get_membership_path(
    accessor: WhitelistAccessor,
    key: IntLike,
    height: int = PUBLIC_KEY_TREE_HEIGHT,
) -> MembershipPath:
    """
    Fetch the sibling path for a whitelisted key.

    The key is reduced into the field and re-encoded as a fixed-width value
    before lookup. The per-level reads are issued concurrently; they only
    form a valid path if no insertion lands between them, so callers that
    need a point-in-time root should check it with verify_membership_path.

    Args:
        accessor: Ledger reader exposing L and M
        key: Public key (may be wider than the field)
        height: Tree height H

    Returns:
        MembershipPath with the leaf index and the root-first sibling path

    Raises:
        KeyNotWhitelistedError: If the key has no leaf in the tree
    """
    canonical = field_element_hex(key)
    node_index = parse_int(await accessor.L(canonical))
    first_leaf = first_leaf_index(height)
    leaf_index = node_index - first_leaf

    if leaf_index < 0:
        raise KeyNotWhitelistedError(to_field_element(key))
    if node_index > 2 * first_leaf:
        raise LedgerReadError("L", f"index {node_index} lies outside a tree of height {height}")

    indices = path_indices(node_index, height)
    logger.debug(f"Reading whitelist path for leaf {leaf_index}: {indices}")
    values = await asyncio.gather(*(accessor.M(i) for i in indices))

    return MembershipPath(
        leaf_index=leaf_index,
        sibling_path=[parse_int(v) for v in values],
    )


async def get_membership_paths(
    accessor: WhitelistAccessor,
    keys: Sequence[IntLike],
    height: int = PUBLIC_KEY_TREE_HEIGHT,
) -> List[MembershipPath]:
    """
    Fetch paths for several keys (typically sender and receiver) and
    require that they share one root.

    Raises:
        KeyNotWhitelistedError: If any key is absent
        RootMismatchError: If the tree changed between reads
    """
    paths = await asyncio.gather(*(get_membership_path(accessor, k, height) for k in keys))
    roots = [path.root for path in paths]
    if len(set(roots)) > 1:
        logger.warning(f"Whitelist root changed while reading {len(keys)} paths")
        raise RootMismatchError(roots)
    return list(paths)


# ==============================================================================
# Path verification
# ==============================================================================

def compute_root(
    leaf_value: int,
    leaf_index: int,
    sibling_path: Sequence[int],
    height: int = PUBLIC_KEY_TREE_HEIGHT,
    hash_type: str = DEFAULT_HASH_TYPE,
) -> int:
    """Recompute the root from a leaf and its root-first sibling path."""
    if len(sibling_path) != height + 1:
        raise InvalidParameterError(
            "sibling_path", f"expected {height + 1} entries, got {len(sibling_path)}"
        )
    if not 0 <= leaf_index < 2 ** height:
        raise InvalidParameterError(
            "leaf_index", f"{leaf_index} is outside a tree of height {height}"
        )

    node_index = leaf_index + first_leaf_index(height)
    value = leaf_value
    for r in range(height, 0, -1):
        sibling = sibling_path[r]
        if node_index % 2 == 1:
            value = node_hash(value, sibling, hash_type)
        else:
            value = node_hash(sibling, value, hash_type)
        _, node_index = sibling_and_parent(node_index)
    return value


def verify_membership_path(
    key: IntLike,
    path: MembershipPath,
    height: int = PUBLIC_KEY_TREE_HEIGHT,
    hash_type: str = DEFAULT_HASH_TYPE,
) -> bool:
    """True when the path leads from the key's leaf to the path's root."""
    leaf_value = to_field_element(key)
    return compute_root(leaf_value, path.leaf_index, path.sibling_path, height, hash_type) == path.root


# ==============================================================================
# In-memory tree
# ==============================================================================

class WhitelistTree:
    """
    Heap-indexed whitelist tree held in memory.

    Mirrors the contract's storage layout and answers L and M the way the
    contract does, so it can stand in for the ledger accessor.
    """

    def __init__(self, height: int = PUBLIC_KEY_TREE_HEIGHT, hash_type: str = DEFAULT_HASH_TYPE):
        if height < 1:
            raise InvalidParameterError("height", "must be at least 1")
        self.height = height
        self.hash_type = hash_type
        self._nodes: Dict[int, int] = {}
        self._indices: Dict[int, int] = {}
        self._next_leaf = 0

    @property
    def first_leaf(self) -> int:
        return first_leaf_index(self.height)

    @property
    def capacity(self) -> int:
        return 2 ** self.height

    @property
    def size(self) -> int:
        return self._next_leaf

    @property
    def root(self) -> int:
        return self._nodes.get(ROOT_INDEX, 0)

    def add_key(self, key: IntLike) -> int:
        """
        Insert a key at the next free leaf and rehash its ancestors.

        Returns:
            The key's heap index (unchanged if it was already present)
        """
        value = to_field_element(key)
        if value in self._indices:
            return self._indices[value]
        if self._next_leaf >= self.capacity:
            raise InvalidParameterError("key", "whitelist tree is full")

        node_index = self.first_leaf + self._next_leaf
        self._next_leaf += 1
        self._indices[value] = node_index
        self._nodes[node_index] = value

        p = node_index
        while p > ROOT_INDEX:
            _, parent = sibling_and_parent(p)
            left = self._nodes.get(2 * parent + 1, 0)
            right = self._nodes.get(2 * parent + 2, 0)
            self._nodes[parent] = node_hash(left, right, self.hash_type)
            p = parent

        logger.debug(f"Whitelisted key at leaf {node_index - self.first_leaf}")
        return node_index

    def node(self, index: int) -> int:
        return self._nodes.get(index, 0)

    async def L(self, key: str) -> int:
        return self._indices.get(to_field_element(key), 0)

    async def M(self, index: int) -> int:
        return self.node(index)
