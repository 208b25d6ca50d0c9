"""
Alea pseudo-random generator.

Based on Johannes Baagøe's Alea algorithm. Every random draw made while
building a graph (vertex placement, candidate edge ordering, face colors)
goes through an instance of this class, so a graph is reproducible from
its seed string alone.
"""

from typing import Any, MutableSequence, TypeVar

T = TypeVar("T")

_TWO_POW_32 = 0x100000000
_TWO_POW_MINUS_32 = 2.3283064365386963e-10


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class _Mash:
    """Alea's string hash, carried across calls through its running state."""

    def __init__(self):
        self.n = 0xEFC8249D

    def __call__(self, data: Any) -> float:
        n = self.n
        for char in str(data):
            n += ord(char)
            h = 0.02519603282416938 * n
            n = _uint32(h)
            h -= n
            h *= n
            n = _uint32(h)
            h -= n
            n += h * _TWO_POW_32
        self.n = n
        return _uint32(n) * _TWO_POW_MINUS_32


class AleaPRNG:
    """
    Seedable random source with the subset of the ``random.Random`` API
    the engine relies on.

    Any object exposing ``random()`` and ``shuffle()`` may be injected in
    its place.
    """

    def __init__(self, seed):
        """Initialize with a seed string, number, or iterable of those."""
        self.seed = seed

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            parts = list(seed)
        else:
            parts = [seed]

        mash = _Mash()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for part in parts:
            self.s0 = self._wrap(self.s0 - mash(part))
            self.s1 = self._wrap(self.s1 - mash(part))
            self.s2 = self._wrap(self.s2 - mash(part))

    @staticmethod
    def _wrap(value: float) -> float:
        return value + 1 if value < 0 else value

    def random(self) -> float:
        """Next float in [0, 1)."""
        t = 2091639 * self.s0 + self.c * _TWO_POW_MINUS_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def randrange(self, stop: int) -> int:
        """Integer in [0, stop)."""
        if stop <= 0:
            raise ValueError("randrange() stop must be positive")
        return int(self.random() * stop)

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place; also returns the sequence."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randrange(i + 1)
            items[i], items[j] = items[j], items[i]
        return items
