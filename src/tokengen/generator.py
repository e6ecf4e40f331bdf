"""generator.py

Provides TokenGenerator for producing short, collision-resistant tokens
without central coordination.

Each token is one random lowercase letter followed by base-36 digits taken
from a secure hash of fresh random bytes, the current time, a per-generator
counter value and a process fingerprint.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .counter import MonotonicCounter
from .entropy import random_letter
from .errors import ConfigurationError
from .hashing import HashEngine
from .schema import (
    DEFAULT_ALGORITHM,
    DEFAULT_LENGTH,
    MAX_LENGTH,
    MIN_LENGTH,
    GeneratorConfig,
    load_config,
)

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z][0-9a-z]*")

# Random bytes hashed into each token, twice the longest token.
ENTROPY_BYTES = 2 * MAX_LENGTH


class TokenGenerator:
    """Generate fixed-length unique tokens.

    A generator is configured once and can then be shared by any number of
    threads. Its only mutable state is an internal counter that advances
    once per token.

    Usage:
        gen = TokenGenerator()
        token = gen.generate()   # e.g. 'k3v0c9...' (24 chars)

    Parameters:
        length: Token length, an integer from 24 to 32 (default: 24).
        fingerprint: Non-empty string identifying this process or host. If
            omitted, one is derived from the runtime identity.
        algorithm: 'sha3-256' (default) or 'sha-256', case-insensitive.

    Raises InvalidLengthError, InvalidFingerprintError,
    UnsupportedAlgorithmError or AlgorithmUnavailableError if the
    configuration cannot be honored.
    """

    def __init__(
        self,
        length: int = DEFAULT_LENGTH,
        fingerprint: Optional[str] = None,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> None:
        config = load_config(length=length, fingerprint=fingerprint, algorithm=algorithm)
        self._setup(config)

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "TokenGenerator":
        """Create a generator from a GeneratorConfig.

        The config is validated again, so instances built with
        ``model_construct`` cannot bypass the length and algorithm checks.
        """
        if not isinstance(config, GeneratorConfig):
            raise ConfigurationError(f"expected a GeneratorConfig, got {type(config).__name__}")
        config = GeneratorConfig.model_validate(config.model_dump())
        gen = cls.__new__(cls)
        gen._setup(config)
        return gen

    def _setup(self, config: GeneratorConfig) -> None:
        self._config = config
        self._engine = HashEngine(config.algorithm, entropy_bytes=ENTROPY_BYTES)
        self._counter = MonotonicCounter()
        logger.debug(
            "TokenGenerator ready: length=%d algorithm=%s",
            config.length,
            config.algorithm,
        )

    @property
    def length(self) -> int:
        return self._config.length

    @property
    def fingerprint(self) -> str:
        return self._config.fingerprint

    @property
    def algorithm(self) -> str:
        return self._config.algorithm

    def generate(self) -> str:
        """Return a new token of exactly ``self.length`` characters."""
        prefix = random_letter()
        block = self._engine.hash_block(self._counter.next(), self._config.fingerprint)
        return (prefix + block)[:self._config.length]

    def __repr__(self) -> str:
        return f"TokenGenerator(length={self.length}, algorithm={self.algorithm!r})"


def is_token(value, length: Optional[int] = None) -> bool:
    """Return True if value has the shape of a generated token.

    With ``length`` the token must be exactly that long; otherwise any
    supported length (24 to 32) is accepted. Only the shape is checked.
    """
    if not isinstance(value, str):
        return False
    if length is None:
        if not MIN_LENGTH <= len(value) <= MAX_LENGTH:
            return False
    elif len(value) != length:
        return False
    return _TOKEN_RE.fullmatch(value) is not None


__all__ = ["TokenGenerator", "is_token"]
