"""entropy.py

Secure randomness helpers backed by the ``secrets`` module.

Calls may block briefly if the operating system's entropy pool is not yet
initialized; no timeout is applied.
"""

from __future__ import annotations

import secrets
import string

LETTERS = string.ascii_lowercase


def secure_random_bytes(n: int) -> bytes:
    """Return ``n`` cryptographically secure random bytes."""
    if n < 0:
        raise ValueError(f"byte count must be non-negative: {n!r}")
    return secrets.token_bytes(n)


def secure_random_range(minimum: int, maximum: int) -> int:
    """Return a secure random integer in ``[minimum, maximum]`` inclusive."""
    if maximum < minimum:
        raise ValueError(f"empty range: [{minimum}, {maximum}]")
    return minimum + secrets.randbelow(maximum - minimum + 1)


def random_letter() -> str:
    """Return one lowercase ASCII letter chosen uniformly at random."""
    return LETTERS[secure_random_range(0, len(LETTERS) - 1)]


__all__ = ['LETTERS', 'secure_random_bytes', 'secure_random_range', 'random_letter']
