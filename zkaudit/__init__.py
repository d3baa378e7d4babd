"""
zkaudit Core
Auditable confidential-token cryptography

Edwards point compression, multi-authority ElGamal, bounded discrete-log
recovery and whitelist membership paths for a confidential token whose
hidden values remain recoverable by a designated set of compliance
authorities.
"""

__version__ = "0.3.0"
__author__ = "zkaudit"

from zkaudit.constants import FIELD_MODULUS, JUBJUB_CURVE_ORDER, PUBLIC_KEY_TREE_HEIGHT

__all__ = [
    "FIELD_MODULUS",
    "JUBJUB_CURVE_ORDER",
    "PUBLIC_KEY_TREE_HEIGHT",
    "__version__",
]
