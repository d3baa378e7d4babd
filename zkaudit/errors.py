"""
zkaudit Error Handling

All error codes and exception classes.
"""

from enum import IntEnum
from typing import Optional, Any


class ErrorCode(IntEnum):
    """Library error codes."""

    # 1xxx - General errors
    UNKNOWN_ERROR = 1000
    INVALID_PARAMETER = 1001

    # 2xxx - Curve data errors
    INVALID_POINT = 2001
    INVALID_ENCODING = 2002
    NON_RESIDUE = 2003

    # 3xxx - Cipher errors
    AUTHORITY_KEYS_NOT_SET = 3001
    INVALID_CIPHERTEXT = 3002

    # 4xxx - Discrete log recovery errors
    NO_MATCH_FOUND = 4001
    SEARCH_ABORTED = 4002

    # 5xxx - Whitelist / ledger errors
    KEY_NOT_WHITELISTED = 5001
    ROOT_MISMATCH = 5002
    LEDGER_READ_FAILED = 5003

    # 6xxx - Protocol errors
    UNKNOWN_HASH_TYPE = 6001
    UNKNOWN_TRANSACTION_TYPE = 6002


class ZkAuditError(Exception):
    """Base exception for all zkaudit errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# General Errors (1xxx)
# ==============================================================================

class InvalidParameterError(ZkAuditError):
    def __init__(self, param: str, message: str = ""):
        msg = f"Invalid parameter: {param}"
        if message:
            msg += f" - {message}"
        super().__init__(ErrorCode.INVALID_PARAMETER, msg, {"parameter": param})


# ==============================================================================
# Curve Data Errors (2xxx)
# ==============================================================================

class InvalidPointError(ZkAuditError):
    def __init__(self, point: Any):
        super().__init__(
            ErrorCode.INVALID_POINT,
            "Point does not satisfy the curve equation",
            {"point": [str(c) for c in point]}
        )


class InvalidEncodingError(ZkAuditError):
    def __init__(self, value: Any, reason: str):
        shown = hex(value) if isinstance(value, int) else repr(value)
        super().__init__(
            ErrorCode.INVALID_ENCODING,
            f"Invalid compressed point: {reason}",
            {"value": shown, "reason": reason}
        )


class NonResidueError(ZkAuditError):
    def __init__(self, n: int, p: int):
        super().__init__(
            ErrorCode.NON_RESIDUE,
            "Value is not a quadratic residue modulo p",
            {"n": str(n), "p": str(p)}
        )


# ==============================================================================
# Cipher Errors (3xxx)
# ==============================================================================

class AuthorityKeysNotSetError(ZkAuditError):
    def __init__(self):
        super().__init__(
            ErrorCode.AUTHORITY_KEYS_NOT_SET,
            "Authority private keys must be set before decrypting"
        )


class InvalidCiphertextError(ZkAuditError):
    def __init__(self, message: str):
        super().__init__(ErrorCode.INVALID_CIPHERTEXT, f"Invalid ciphertext: {message}")


# ==============================================================================
# Discrete Log Errors (4xxx)
# ==============================================================================

class NoMatchFoundError(ZkAuditError):
    def __init__(self, guesses_tried: int):
        super().__init__(
            ErrorCode.NO_MATCH_FOUND,
            f"No guess matched the point after {guesses_tried} guesses; "
            "the search domain or the decryption keys are wrong",
            {"guesses_tried": guesses_tried}
        )


class SearchAbortedError(ZkAuditError):
    def __init__(self, guesses_tried: int, reason: str):
        super().__init__(
            ErrorCode.SEARCH_ABORTED,
            f"Search aborted after {guesses_tried} guesses: {reason}",
            {"guesses_tried": guesses_tried, "reason": reason}
        )


# ==============================================================================
# Whitelist / Ledger Errors (5xxx)
# ==============================================================================

class KeyNotWhitelistedError(ZkAuditError):
    def __init__(self, key: int):
        super().__init__(
            ErrorCode.KEY_NOT_WHITELISTED,
            "The public key is not added to the whitelist yet, "
            "please create a mint commitment to add the key",
            {"key": hex(key)}
        )


class RootMismatchError(ZkAuditError):
    def __init__(self, roots: list):
        super().__init__(
            ErrorCode.ROOT_MISMATCH,
            "Membership paths do not share a common root",
            {"roots": [hex(r) for r in roots]}
        )


class LedgerReadError(ZkAuditError):
    def __init__(self, method: str, error: str):
        super().__init__(
            ErrorCode.LEDGER_READ_FAILED,
            f"Ledger read {method} failed: {error}",
            {"method": method, "error": error}
        )


# ==============================================================================
# Protocol Errors (6xxx)
# ==============================================================================

class UnknownHashTypeError(ZkAuditError):
    def __init__(self, hash_type: str):
        super().__init__(
            ErrorCode.UNKNOWN_HASH_TYPE,
            f"Unknown hash type: {hash_type}",
            {"hash_type": hash_type}
        )


class UnknownTransactionTypeError(ZkAuditError):
    def __init__(self, tx_type: str):
        super().__init__(
            ErrorCode.UNKNOWN_TRANSACTION_TYPE,
            f"Unknown transaction type for decryption: {tx_type}",
            {"tx_type": tx_type}
        )
