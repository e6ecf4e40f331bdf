import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, constr, field_validator

from .errors import (
    ConfigurationError,
    InvalidFingerprintError,
    InvalidLengthError,
    UnsupportedAlgorithmError,
)
from .fingerprint import process_fingerprint
from .hashing import Algorithm

MIN_LENGTH = 24
MAX_LENGTH = 32
DEFAULT_LENGTH = 24
DEFAULT_ALGORITHM = Algorithm.SHA3_256.value

ENV_PREFIX = "TOKENGEN_"

_FIELD_ERRORS = {
    'length': InvalidLengthError,
    'fingerprint': InvalidFingerprintError,
    'algorithm': UnsupportedAlgorithmError,
}


class GeneratorConfig(BaseModel):
    """Validated, immutable token generator settings.

    A missing fingerprint is replaced by one derived from the process
    identity. Invalid values raise the tokengen ConfigurationError
    subclasses, never pydantic's ValidationError.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise _translate(exc) from exc

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> "GeneratorConfig":
        try:
            return super().model_validate(obj, **kwargs)
        except ValidationError as exc:
            raise _translate(exc) from exc

    length: StrictInt = Field(default=DEFAULT_LENGTH, ge=MIN_LENGTH, le=MAX_LENGTH)
    fingerprint: Optional[constr(strict=True, min_length=1)] = Field(default=None, validate_default=True)
    algorithm: str = DEFAULT_ALGORITHM

    @field_validator('length', mode='before')
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("length must be an integer, not a bool")
        return value

    @field_validator('fingerprint')
    @classmethod
    def _default_fingerprint(cls, value: Optional[str]) -> str:
        if value is None:
            return process_fingerprint()
        return value

    @field_validator('algorithm', mode='before')
    @classmethod
    def _normalize_algorithm(cls, value: Any) -> str:
        return Algorithm.parse(value).value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GeneratorConfig":
        """Validate settings from a plain mapping (e.g. a parsed settings file)."""
        bad_keys = [key for key in data if not isinstance(key, str)]
        if bad_keys:
            raise ConfigurationError(f"setting names must be strings: {bad_keys!r}")
        return load_config(**dict(data))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 prefix: str = ENV_PREFIX) -> "GeneratorConfig":
        """Read settings from ``<prefix>LENGTH``, ``<prefix>FINGERPRINT``, ``<prefix>ALGORITHM``.

        Unset variables fall back to the defaults.
        """
        if environ is None:
            environ = os.environ
        data = {}
        for name in ('length', 'fingerprint', 'algorithm'):
            raw = environ.get(prefix + name.upper())
            if raw is None:
                continue
            if name == 'length':
                try:
                    raw = int(raw.strip())
                except ValueError:
                    raise InvalidLengthError(f"length: not an integer: {raw!r}") from None
            data[name] = raw
        return cls.from_mapping(data)


def _translate(exc: ValidationError) -> ConfigurationError:
    first = exc.errors()[0]
    field = first['loc'][0] if first['loc'] else None
    error_cls = _FIELD_ERRORS.get(field, ConfigurationError)
    return error_cls(f"{field}: {first['msg']}")


def load_config(**values: Any) -> GeneratorConfig:
    """Build a GeneratorConfig, raising tokengen errors on invalid values."""
    return GeneratorConfig(**values)
