"""
Seedable Alea PRNG used for every random decision in maze generation.

Based on Johannes Baagøe's Alea algorithm. A generator instance is created
per generation call and threaded explicitly through growth and collapse,
so the same seed always produces the same chunk.
"""

from typing import List, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

_MASH_SEED = 0xEFC8249D
_TWO_POW_32 = 0x100000000
_TWO_POW_NEG_32 = 2.3283064365386963e-10


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class _Mash:
    """String hash used to derive the initial Alea state from a seed."""

    def __init__(self):
        self.n = _MASH_SEED

    def __call__(self, data) -> float:
        for char in str(data):
            self.n += ord(char)
            h = 0.02519603282416938 * self.n
            self.n = _uint32(h)
            h -= self.n
            h *= self.n
            self.n = _uint32(h)
            h -= self.n
            self.n += h * _TWO_POW_32
        return _uint32(self.n) * _TWO_POW_NEG_32


class AleaPRNG:
    """
    Alea pseudo-random generator with a small convenience API.

    The whole state is the three fractions s0..s2 plus the carry c, so two
    instances built from the same seed draw identical sequences.
    """

    def __init__(self, seed):
        """Initialize with a seed string, number, or sequence of either."""
        self.seed = seed
        self.call_count = 0

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
            self.s0 -= mash(part)
            if self.s0 < 0:
                self.s0 += 1
            self.s1 -= mash(part)
            if self.s1 < 0:
                self.s1 += 1
            self.s2 -= mash(part)
            if self.s2 < 0:
                self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * _TWO_POW_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def randrange(self, stop: int) -> int:
        """Return an integer in [0, stop)."""
        if stop <= 0:
            raise ValueError(f"randrange() stop must be positive, got {stop}")
        return int(self.random() * stop)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.randrange(len(seq))]

    def shuffled(self, seq: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of ``seq``."""
        items = list(seq)
        self.shuffle(items)
        return items

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle ``items`` in place, walking from the back."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randrange(i + 1)
            items[i], items[j] = items[j], items[i]
