"""
Seeded RNG - reproducible pseudo-random numbers for demo content.

A linear congruential generator keyed by a string seed. Two generators built
from the same seed produce the same sequence for the same calls. Not suitable
for security or statistics.
"""

from typing import List, Sequence, TypeVar

T = TypeVar("T")

# LCG constants
MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280

_TOKEN_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def hash_seed(seed: str) -> int:
    """Stable 32-bit string hash (h * 31 + c, wrapped to int32, absolute value)."""
    h = 0
    for ch in seed:
        h = (h << 5) - h + ord(ch)
        h = (h + 2**31) % 2**32 - 2**31
    return abs(h)


class SeededRNG:
    """Deterministic generator; see module docstring."""

    def __init__(self, seed: str):
        self.seed_text = seed
        self._state = hash_seed(seed)

    def next(self) -> float:
        """Return a float in [0, 1)."""
        self._state = (self._state * MULTIPLIER + INCREMENT) % MODULUS
        return self._state / MODULUS

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return an integer between min_value and max_value, both inclusive."""
        return int(self.next() * (max_value - min_value + 1)) + min_value

    def pick(self, items: Sequence[T]) -> T:
        """Return one element of a non-empty sequence."""
        if not items:
            raise ValueError("Cannot pick from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a shuffled copy; the input is left untouched."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            result[i], result[j] = result[j], result[i]
        return result

    def token(self, length: int = 7) -> str:
        """Upper-case alphanumeric token, e.g. for demo certificate ids."""
        return "".join(self.pick(_TOKEN_ALPHABET) for _ in range(length))


def seeded(seed: str) -> SeededRNG:
    """Build a generator whose whole output is a function of seed."""
    return SeededRNG(seed)
