"""
Seeded pseudo-random stream used for dot jitter and animated frames.

Not suitable for anything security related.
"""

MASK_32 = 0xFFFFFFFF
TWO_32 = 4294967296


def _rotl(value: int, bits: int) -> int:
    value &= MASK_32
    return ((value << bits) | (value >> (32 - bits))) & MASK_32


class Rng:
    """Xorshift-style generator over four 32-bit words.

    Every call advances the state by one step and returns a float in [0, 1).
    Two instances built from the same seed yield the same sequence.
    """

    def __init__(self, seed: int):
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise TypeError(f"seed must be an integer, got {type(seed).__name__}")
        self.seed = seed
        self._a = (seed * 100001) & MASK_32
        self._b = (seed * 100002) & MASK_32
        self._c = (seed * 100003) & MASK_32
        self._d = (seed * 100004) & MASK_32

    @property
    def state(self) -> tuple[int, int, int, int]:
        return self._a, self._b, self._c, self._d

    def __call__(self) -> float:
        a, b, c, d = self._a, self._b, self._c, self._d
        t = (b << 9) & MASK_32
        r = (_rotl(b * 5, 7) * 9) & MASK_32
        c ^= a
        d ^= b
        b ^= c
        a ^= d
        c ^= t
        d = _rotl(d, 11)
        self._a, self._b, self._c, self._d = a, b, c, d
        return r / TWO_32

    random = __call__

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self()

    def jitter(self, scale: float) -> float:
        """Symmetric offset in [-scale, scale)."""
        return self.uniform(-scale, scale)


def create_rng(seed: int) -> Rng:
    return Rng(seed)
