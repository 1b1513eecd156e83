"""Account number generators for the reserved 10-digit range."""

from __future__ import annotations

import itertools
import random
import threading
from typing import Protocol

from accounts_service.config import AccountNumberConfig
from accounts_service.exceptions import ConfigurationError


class AccountNumberGenerator(Protocol):
    """Produces candidate account numbers inside a configured range."""

    def next_number(self) -> int: ...


class RandomAccountNumberGenerator:
    """Draw account numbers as ``offset + randrange(span)``.

    This is a range policy, not a security property; collisions are
    possible and the caller checks the store before using a number.

    Parameters
    ----------
    config : AccountNumberConfig | None
        Range to draw from (default ``[1000000000, 1900000000)``).
    seed : int | None
        Random seed for reproducibility.
    """

    def __init__(self, config: AccountNumberConfig | None = None, seed: int | None = None) -> None:
        self.config = config or AccountNumberConfig()
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    def next_number(self) -> int:
        with self._lock:
            return self.config.offset + self._random.randrange(self.config.span)


class SequentialAccountNumberGenerator:
    """Hand out account numbers in order starting at ``config.offset + start``.

    Deterministic, so tests can assert exact values.
    """

    def __init__(self, config: AccountNumberConfig | None = None, start: int = 0) -> None:
        self.config = config or AccountNumberConfig()
        if not 0 <= start < self.config.span:
            raise ConfigurationError(f"start {start} is outside the account number range")
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_number(self) -> int:
        with self._lock:
            delta = next(self._counter)
        if delta >= self.config.span:
            raise ConfigurationError("Account number range exhausted")
        return self.config.offset + delta
