"""tokengen: short, collision-resistant unique tokens."""

from .errors import (
    AlgorithmUnavailableError,
    ConfigurationError,
    InvalidFingerprintError,
    InvalidLengthError,
    TokenGeneratorError,
    UnsupportedAlgorithmError,
)
from .generator import TokenGenerator, is_token
from .hashing import Algorithm, available_algorithms
from .schema import GeneratorConfig, load_config

__version__ = "0.1.0"

__all__ = [
    'TokenGenerator',
    'is_token',
    'GeneratorConfig',
    'load_config',
    'Algorithm',
    'available_algorithms',
    'TokenGeneratorError',
    'ConfigurationError',
    'InvalidLengthError',
    'InvalidFingerprintError',
    'UnsupportedAlgorithmError',
    'AlgorithmUnavailableError',
]
