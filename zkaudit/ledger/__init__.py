"""
zkaudit Ledger Access
"""

from zkaudit.ledger.whitelist import (
    WhitelistAccessor,
    WhitelistTree,
    sibling_and_parent,
    get_membership_path,
    get_membership_paths,
    compute_root,
    verify_membership_path,
)
from zkaudit.ledger.rpc import JsonRpcWhitelistAccessor

__all__ = [
    "WhitelistAccessor",
    "WhitelistTree",
    "sibling_and_parent",
    "get_membership_path",
    "get_membership_paths",
    "compute_root",
    "verify_membership_path",
    "JsonRpcWhitelistAccessor",
]
