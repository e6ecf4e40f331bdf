"""counter.py

Provides MonotonicCounter, the per-generator sequence number mixed into
every token hash.
"""

from __future__ import annotations

from threading import Lock
from typing import Optional

from .entropy import secure_random_range

# Seed range for a fresh counter.
SEED_MIN = 0
SEED_MAX = 2057

_MASK_64 = (1 << 64) - 1


class MonotonicCounter:
    """Thread-safe 64-bit counter seeded with a secure random value.

    Each call to ``next()`` returns the current value and advances it by one,
    so concurrent callers never observe the same value. The value wraps to
    zero after 2**64 - 1.

    Parameters:
        initial: Starting value. If omitted, a secure random value in
            [SEED_MIN, SEED_MAX] is used.
    """

    def __init__(self, initial: Optional[int] = None) -> None:
        if initial is None:
            initial = secure_random_range(SEED_MIN, SEED_MAX)
        if not isinstance(initial, int) or isinstance(initial, bool) or initial < 0:
            raise ValueError(f"initial counter value must be a non-negative int: {initial!r}")

        self._value = initial & _MASK_64
        # Held only for the read-and-advance below.
        self._lock = Lock()

    def next(self) -> int:
        """Return the current value and advance the counter."""
        with self._lock:
            current = self._value
            self._value = (current + 1) & _MASK_64
        return current

    @property
    def value(self) -> int:
        """The value the next call to ``next()`` will return."""
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"MonotonicCounter(value={self.value})"


__all__ = ['MonotonicCounter', 'SEED_MIN', 'SEED_MAX']
