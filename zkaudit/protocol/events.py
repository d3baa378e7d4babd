"""
zkaudit Event-Log Decryption

Recovers the hidden values of a mined transaction from the public inputs
recorded in its event log. The authority private keys must already be set
on the AuthorityKeys context.

Each decrypted point is m * G, so one guesser per message is needed to
invert the discrete log: e.g. range_generator(N) for an amount bounded by
N, or the list of whitelisted keys for a sender or receiver identity.
"""

from __future__ import annotations
import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from zkaudit.constants import DECRYPTION_TYPES
from zkaudit.core.types import IntLike
from zkaudit.crypto.compression import edwards_decompress
from zkaudit.crypto.discrete_log import SearchBudget, brute_force
from zkaudit.crypto.elgamal import AuthorityKeys
from zkaudit.errors import InvalidParameterError, UnknownTransactionTypeError

logger = logging.getLogger(__name__)


def public_inputs_from_event(event: Mapping[str, Any]) -> List[Any]:
    """Extract the public-input array from a decoded receipt event."""
    try:
        return list(event["returnValues"]["publicInputs"])
    except (KeyError, TypeError) as e:
        raise InvalidParameterError("event", "no returnValues.publicInputs") from e


def decrypt_event_log(
    public_inputs: Sequence[IntLike],
    tx_type: str,
    guessers: Sequence[Iterable[IntLike]],
    authority: AuthorityKeys,
    budget: Optional[SearchBudget] = None,
) -> List[int]:
    """
    Decrypt the ciphertext block of a transaction's public inputs.

    Args:
        public_inputs: Public-input array from the event log
        tx_type: Transaction kind, a key of DECRYPTION_TYPES
        guessers: One iterable of candidate plaintexts per message
        authority: Authority context with private keys set
        budget: Optional limits applied to each brute-force search

    Returns:
        The recovered plaintexts, in encryption order

    Raises:
        UnknownTransactionTypeError: If tx_type has no known layout
        InvalidParameterError: If the inputs are too short or the guesser
            count does not match the message count
    """
    layout = DECRYPTION_TYPES.get(tx_type)
    if layout is None:
        raise UnknownTransactionTypeError(tx_type)
    if len(public_inputs) < layout.end:
        raise InvalidParameterError(
            "public_inputs", f"{tx_type} needs at least {layout.end} entries, got {len(public_inputs)}"
        )
    if len(guessers) != layout.message_count:
        raise InvalidParameterError(
            "guessers", f"{tx_type} carries {layout.message_count} messages, got {len(guessers)} guessers"
        )

    ciphertext = []
    for i in range(layout.start, layout.end):
        logger.debug(f"recovered public input {i}: {public_inputs[i]}")
        ciphertext.append(edwards_decompress(public_inputs[i]))

    points = authority.decrypt(ciphertext)
    budget = budget or SearchBudget()
    return [
        brute_force(point, guesser, budget.max_guesses, budget.timeout_sec)
        for point, guesser in zip(points, guessers)
    ]
