"""
zkaudit Bounded Discrete-Log Recovery

Decryption returns m * G. Recovering m means inverting a discrete log,
which is only feasible because each message comes from a small, known
domain: token amounts, or the handful of whitelisted key identifiers.

A guesser is any iterable of candidate plaintexts, tried in order. A list
works; so does a generator when the domain is a long known sequence such
as all integers below a million.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from zkaudit.constants import BRUTE_FORCE_LOG_INTERVAL
from zkaudit.core.types import IntLike, Point, parse_int
from zkaudit.crypto.curve import GENERATOR, scalar_mult
from zkaudit.errors import InvalidParameterError, NoMatchFoundError, SearchAbortedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchBudget:
    """Caller-imposed limits on one brute-force search."""
    max_guesses: Optional[int] = None
    timeout_sec: Optional[float] = None


def range_generator(n: int) -> Iterator[int]:
    """Yield 0, 1, ..., n - 1. Each call returns an independent sequence."""
    if n < 0:
        raise InvalidParameterError("n", "must be non-negative")
    for i in range(n):
        yield i


def brute_force(
    point: Point,
    guesses: Iterable[IntLike],
    max_guesses: Optional[int] = None,
    timeout_sec: Optional[float] = None,
) -> int:
    """
    Find the first guess c with c * G == point.

    Args:
        point: Decrypted message point m * G
        guesses: Candidate plaintexts, in search priority order
        max_guesses: Abort after this many guesses
        timeout_sec: Abort once this much wall time has elapsed

    Returns:
        The matching plaintext

    Raises:
        NoMatchFoundError: The guesses ran out without a match
        SearchAbortedError: The budget ran out first
    """
    if max_guesses is not None and max_guesses < 0:
        raise InvalidParameterError("max_guesses", "must be non-negative")

    deadline = None if timeout_sec is None else time.monotonic() + timeout_sec
    tried = 0

    for guess in guesses:
        if max_guesses is not None and tried >= max_guesses:
            raise SearchAbortedError(tried, f"guess limit {max_guesses} reached")
        if deadline is not None and time.monotonic() >= deadline:
            raise SearchAbortedError(tried, f"timeout of {timeout_sec}s exceeded")

        candidate = parse_int(guess)
        tried += 1
        if scalar_mult(candidate, GENERATOR) == point:
            logger.debug(f"Discrete log recovered after {tried} guesses")
            return candidate

        if tried % BRUTE_FORCE_LOG_INTERVAL == 0:
            logger.debug(f"Brute force: {tried} guesses tried")

    raise NoMatchFoundError(tried)


def brute_force_with_budget(point: Point, guesses: Iterable[IntLike], budget: SearchBudget) -> int:
    return brute_force(point, guesses, budget.max_guesses, budget.timeout_sec)
