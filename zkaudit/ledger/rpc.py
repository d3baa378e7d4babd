"""
zkaudit JSON-RPC Whitelist Reader

Reads the whitelist contract's L and M getters from an Ethereum-style node
with eth_call. Reads can be pinned to one block so that every level of a
membership path comes from the same tree snapshot.
"""

from __future__ import annotations
import itertools
import logging
from typing import Any, Optional, Union

import httpx

from zkaudit.constants import (
    RPC_TIMEOUT_SEC,
    WHITELIST_L_SIGNATURE,
    WHITELIST_M_SIGNATURE,
)
from zkaudit.core.types import parse_int, to_hex32
from zkaudit.crypto.hash import keccak256
from zkaudit.errors import LedgerReadError

logger = logging.getLogger(__name__)

BlockTag = Union[int, str]


def function_selector(signature: str) -> str:
    """First four bytes of keccak256(signature), hex encoded."""
    return keccak256(signature.encode("ascii"))[:4].hex()


def encode_word(value: int) -> str:
    """ABI encoding of one static 32-byte argument, without 0x."""
    return to_hex32(value)[2:]


class JsonRpcWhitelistAccessor:
    """
    Whitelist accessor backed by a JSON-RPC endpoint.

    Usable as an async context manager; a client passed in by the caller
    is left open on exit.
    """

    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = RPC_TIMEOUT_SEC,
        block: BlockTag = "latest",
        l_signature: str = WHITELIST_L_SIGNATURE,
        m_signature: str = WHITELIST_M_SIGNATURE,
    ):
        self.rpc_url = rpc_url
        self.contract_address = contract_address
        self.timeout = timeout
        self.block = block
        self._l_selector = function_selector(l_signature)
        self._m_selector = function_selector(m_signature)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)
        self._ids = itertools.count(1)

    async def __aenter__(self) -> JsonRpcWhitelistAccessor:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # JSON-RPC plumbing
    # ------------------------------------------------------------------

    async def _request(self, method: str, params: list) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        try:
            resp = await self._client.post(self.rpc_url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as e:
            raise LedgerReadError(method, str(e)) from e
        except ValueError as e:
            raise LedgerReadError(method, f"malformed response: {e}") from e

        if "error" in body:
            error = body["error"]
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise LedgerReadError(method, message)
        if "result" not in body:
            raise LedgerReadError(method, "response has no result")
        return body["result"]

    def _block_param(self) -> str:
        if isinstance(self.block, int):
            return hex(self.block)
        return self.block

    async def _call(self, selector: str, argument: int, label: str) -> int:
        call = {
            "to": self.contract_address,
            "data": "0x" + selector + encode_word(argument),
        }
        result = await self._request("eth_call", [call, self._block_param()])
        if result in ("0x", "", None):
            raise LedgerReadError(label, "empty return data")
        value = parse_int(result)
        logger.debug(f"{label} -> {hex(value)}")
        return value

    # ------------------------------------------------------------------
    # Accessor interface
    # ------------------------------------------------------------------

    async def pin_block(self) -> int:
        """Pin subsequent reads to the current head block."""
        head = parse_int(await self._request("eth_blockNumber", []))
        self.block = head
        logger.debug(f"Whitelist reads pinned to block {head}")
        return head

    async def L(self, key: str) -> int:
        return await self._call(self._l_selector, parse_int(key), f"L({key})")

    async def M(self, index: int) -> int:
        return await self._call(self._m_selector, index, f"M({index})")
