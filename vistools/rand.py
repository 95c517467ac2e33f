"""Uniform pseudo-random numbers drawn from a 32-bit Mersenne Twister."""

from __future__ import annotations

import math
import secrets
import struct
from typing import MutableSequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_STATE_SIZE = 624
_SHIFT_SIZE = 397
_MATRIX_A = 0x9908B0DF
_UPPER_MASK = 0x80000000
_LOWER_MASK = 0x7FFFFFFF
_INIT_MULTIPLIER = 1812433253
DEFAULT_SEED = 5489

_TWO_POW_32 = 4294967296.0
_ONE_BELOW = 1.0 - 2.0**-24


def _f32(value: float) -> float:
    """Round a Python float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


_TWO_PI = _f32(2.0 * _f32(math.pi))


class Mt19937:
    """The standard 32-bit Mersenne Twister engine."""

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        state = [seed & _MASK32]
        for i in range(1, _STATE_SIZE):
            prev = state[-1]
            state.append((_INIT_MULTIPLIER * (prev ^ (prev >> 30)) + i) & _MASK32)
        self._state = state
        self._index = _STATE_SIZE

    def _twist(self) -> None:
        state = self._state
        for i in range(_STATE_SIZE):
            y = (state[i] & _UPPER_MASK) | (state[(i + 1) % _STATE_SIZE] & _LOWER_MASK)
            value = state[(i + _SHIFT_SIZE) % _STATE_SIZE] ^ (y >> 1)
            if y & 1:
                value ^= _MATRIX_A
            state[i] = value
        self._index = 0

    def next_u32(self) -> int:
        """Return the next 32-bit output of the engine."""
        if self._index >= _STATE_SIZE:
            self._twist()
        y = self._state[self._index]
        self._index += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & _MASK32


class Random:
    """Single-precision uniform distributions over a Mersenne Twister."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = secrets.randbits(32)
        self._engine = Mt19937(seed)

    def _canonical(self) -> float:
        value = _f32(float(self._engine.next_u32())) / _TWO_POW_32
        return _ONE_BELOW if value >= 1.0 else value

    def _uniform(self, low: float, high: float) -> float:
        low32 = _f32(low)
        span = _f32(_f32(high) - low32)
        return _f32(_f32(self._canonical() * span) + low32)

    def rand01(self) -> float:
        """Uniform value in [0, 1)."""
        return self._uniform(0.0, 1.0)

    def rand005(self) -> float:
        """Uniform value in [0, 0.5)."""
        return self._uniform(0.0, 0.5)

    def rand051(self) -> float:
        """Uniform value in [0.5, 1)."""
        return self._uniform(0.5, 1.0)

    def rand11(self) -> float:
        """Uniform value in [-1, 1)."""
        return self._uniform(-1.0, 1.0)

    def rand0_pi(self) -> float:
        """Uniform value in [0, 2*pi)."""
        return self._uniform(0.0, _TWO_PI)

    def rand(self, a, b):
        """Value in [a, b); integral when both bounds are integers."""
        offset = self.rand01() * (b - a)
        if isinstance(a, int) and isinstance(b, int):
            return a + int(offset)
        return a + offset

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle a mutable sequence in place."""
        for i in range(len(items)):
            r = min(self.rand(0, i + 1), i)
            items[i], items[r] = items[r], items[i]