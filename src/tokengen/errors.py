"""errors.py

Exception hierarchy for token generator construction.

Every error here is raised while a generator is being built; a generator
that constructed successfully never raises these from ``generate()``.
"""


class TokenGeneratorError(Exception):
    """Base class for token generator errors."""


class ConfigurationError(TokenGeneratorError, ValueError):
    """Raised when a generator configuration value is rejected."""


class InvalidLengthError(ConfigurationError):
    """Raised when length is not an integer in the supported range."""


class InvalidFingerprintError(ConfigurationError):
    """Raised when the fingerprint is empty, not a string, or cannot be derived."""


class UnsupportedAlgorithmError(ConfigurationError):
    """Raised when the hash algorithm is not one of the recognized identifiers."""


class AlgorithmUnavailableError(TokenGeneratorError, RuntimeError):
    """Raised when a recognized hash algorithm is missing from this runtime."""


__all__ = [
    'TokenGeneratorError',
    'ConfigurationError',
    'InvalidLengthError',
    'InvalidFingerprintError',
    'UnsupportedAlgorithmError',
    'AlgorithmUnavailableError',
]
