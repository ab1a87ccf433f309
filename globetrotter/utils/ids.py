"""Identifier generation for trips, city stops and activities."""

import itertools
import secrets
import string
from typing import Protocol

ID_ALPHABET = string.ascii_lowercase + string.digits


class IdGenerator(Protocol):
    """Source of fresh entity identifiers."""

    def new_id(self) -> str:
        """Return an identifier not previously returned by this generator."""
        ...


class RandomIdGenerator:
    """Random base-36 tokens.

    Nine characters give ~46 bits of entropy, so collisions within a single
    trip's city list or a city's activity list are negligible.
    """

    def __init__(self, length: int = 9) -> None:
        if length < 6:
            raise ValueError("id length must be at least 6 characters")
        self._length = length

    def new_id(self) -> str:
        return "".join(secrets.choice(ID_ALPHABET) for _ in range(self._length))


class SequentialIdGenerator:
    """Deterministic ids (``prefix-1``, ``prefix-2``, ...) for tests."""

    def __init__(self, prefix: str = "id") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def new_id(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"
