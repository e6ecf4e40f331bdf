"""hashing.py

Hash engine for token generation: mixes fresh entropy, the current time,
a counter value and a fingerprint through a secure hash, then renders the
digest in base 36.
"""

from __future__ import annotations

import hashlib
import logging
import time
from enum import Enum
from typing import List

from .entropy import secure_random_bytes
from .errors import AlgorithmUnavailableError, UnsupportedAlgorithmError

logger = logging.getLogger(__name__)

BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

# Leading base-36 digits of a padded digest only take a narrow set of values.
BIAS_PREFIX = 2

# Random bytes per hash; twice the longest supported token.
ENTROPY_BYTES = 64


class Algorithm(str, Enum):
    SHA3_256 = "sha3-256"
    SHA256 = "sha-256"

    @property
    def hashlib_name(self) -> str:
        return _HASHLIB_NAMES[self]

    @classmethod
    def parse(cls, value) -> "Algorithm":
        """Return the member matching ``value`` case-insensitively."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise UnsupportedAlgorithmError(f"unsupported hash algorithm: {value!r}")


_HASHLIB_NAMES = {
    Algorithm.SHA3_256: "sha3_256",
    Algorithm.SHA256: "sha256",
}


def to_base36(value: int, width: int = 0) -> str:
    """Render a non-negative integer in lowercase base 36, zero-padded to width."""
    if value < 0:
        raise ValueError(f"cannot encode negative value: {value!r}")
    if value == 0:
        return "0".rjust(width, "0")
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(BASE36_ALPHABET[rem])
    return "".join(reversed(out)).rjust(width, "0")


def from_base36(text: str) -> int:
    """Parse a base-36 string (case-insensitive) into an integer."""
    if not text:
        raise ValueError("cannot decode an empty string")
    return int(text, 36)


def available_algorithms() -> List[Algorithm]:
    """Return the supported algorithms this runtime can construct, preferred first."""
    found = []
    for algorithm in Algorithm:
        try:
            hashlib.new(algorithm.hashlib_name)
        except ValueError:
            continue
        found.append(algorithm)
    return found


class HashEngine:
    """Digest and encode token material with one hash algorithm.

    Parameters:
        algorithm: An ``Algorithm`` member or its identifier string.
        entropy_bytes: Number of fresh random bytes mixed into each block.

    Raises AlgorithmUnavailableError if the runtime's hashlib cannot build
    the requested algorithm.
    """

    def __init__(self, algorithm="sha3-256", entropy_bytes: int = ENTROPY_BYTES) -> None:
        self.algorithm = Algorithm.parse(algorithm)
        try:
            probe = hashlib.new(self.algorithm.hashlib_name)
        except ValueError as exc:
            logger.warning("Hash algorithm %s is not available in this runtime", self.algorithm.value)
            raise AlgorithmUnavailableError(
                f"hash algorithm {self.algorithm.value!r} is not available"
            ) from exc

        self.entropy_bytes = entropy_bytes
        self.digest_size = probe.digest_size
        self._width = len(to_base36((1 << (8 * self.digest_size)) - 1))

    @property
    def block_length(self) -> int:
        """Length of every string returned by ``encode``."""
        return self._width - BIAS_PREFIX

    def digest(self, data: bytes) -> bytes:
        return hashlib.new(self.algorithm.hashlib_name, data).digest()

    def encode(self, digest: bytes) -> str:
        """Base-36 encode a digest and drop the biased leading digits."""
        number = int.from_bytes(digest, "big")
        return to_base36(number, self._width)[BIAS_PREFIX:]

    def hash_block(self, counter_value: int, fingerprint: str) -> str:
        """Hash fresh entropy with the time, counter value and fingerprint."""
        data = b"".join((
            secure_random_bytes(self.entropy_bytes),
            str(time.time_ns()).encode("utf-8"),
            str(counter_value).encode("utf-8"),
            fingerprint.encode("utf-8"),
        ))
        return self.encode(self.digest(data))


__all__ = [
    'Algorithm',
    'HashEngine',
    'available_algorithms',
    'to_base36',
    'from_base36',
    'BASE36_ALPHABET',
    'ENTROPY_BYTES',
]
