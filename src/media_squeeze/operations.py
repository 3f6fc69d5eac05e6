"""Closed vocabulary of chain operations.

Every operation is a frozen dataclass whose parameters are validated when the
instance is created, so a chain can only ever hold well-formed operations.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Union

from . import config_constants
from .exceptions import ValidationError


class OperationKind(str, enum.Enum):
    """Names of all operations a chain can queue."""

    SPEEDUP = "speedup"
    NORMALIZE = "normalize"
    REMOVE_SILENCE = "removeSilence"
    VOLUME = "volume"
    TRIM = "trim"
    MINIFY = "minify"
    COMPRESS = "compress"


def _require_finite(value: float, parameter: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"{parameter} must be a number, got {value!r}", parameter=parameter
        ) from exc
    if not math.isfinite(number):
        raise ValidationError(f"{parameter} must be finite, got {value!r}", parameter=parameter)
    return number


@dataclass(frozen=True)
class Speedup:
    """Change playback tempo by ``rate`` (2.0 halves the duration)."""

    rate: float
    kind = OperationKind.SPEEDUP

    def __post_init__(self) -> None:
        rate = _require_finite(self.rate, "rate")
        if rate <= 0 or rate > config_constants.MAX_SPEEDUP_RATE:
            raise ValidationError(
                f"Speed rate must be greater than 0 and at most "
                f"{config_constants.MAX_SPEEDUP_RATE}, got {self.rate}",
                parameter="rate",
            )
        object.__setattr__(self, "rate", rate)


@dataclass(frozen=True)
class Normalize:
    """Scale samples so the peak amplitude becomes 1.0."""

    kind = OperationKind.NORMALIZE


@dataclass(frozen=True)
class RemoveSilence:
    """Cut runs of samples quieter than ``threshold_db`` lasting ``min_duration_ms``."""

    threshold_db: float = config_constants.DEFAULT_SILENCE_THRESHOLD_DB
    min_duration_ms: float = config_constants.DEFAULT_SILENCE_MIN_DURATION_MS
    kind = OperationKind.REMOVE_SILENCE

    def __post_init__(self) -> None:
        threshold_db = _require_finite(self.threshold_db, "threshold_db")
        min_duration_ms = _require_finite(self.min_duration_ms, "min_duration_ms")
        if min_duration_ms < 0:
            raise ValidationError(
                f"Minimum silence duration must not be negative, got {self.min_duration_ms}",
                parameter="min_duration_ms",
            )
        object.__setattr__(self, "threshold_db", threshold_db)
        object.__setattr__(self, "min_duration_ms", min_duration_ms)


@dataclass(frozen=True)
class Volume:
    """Multiply every sample by ``level``."""

    level: float
    kind = OperationKind.VOLUME

    def __post_init__(self) -> None:
        level = _require_finite(self.level, "level")
        if level < config_constants.MIN_VOLUME_LEVEL or level > config_constants.MAX_VOLUME_LEVEL:
            raise ValidationError(
                f"Volume level must be between {config_constants.MIN_VOLUME_LEVEL} and "
                f"{config_constants.MAX_VOLUME_LEVEL}, got {self.level}",
                parameter="level",
            )
        object.__setattr__(self, "level", level)


@dataclass(frozen=True)
class Trim:
    """Collapse whitespace runs to single spaces and strip the ends."""

    kind = OperationKind.TRIM


@dataclass(frozen=True)
class Minify:
    """Strip every line and drop blank lines."""

    kind = OperationKind.MINIFY


@dataclass(frozen=True)
class Compress:
    """Text-level compression; the output stays readable."""

    algo: str = config_constants.DEFAULT_COMPRESS_ALGORITHM
    kind = OperationKind.COMPRESS

    def __post_init__(self) -> None:
        if self.algo not in config_constants.VALID_COMPRESS_ALGORITHMS:
            raise ValidationError(
                f"algo must be one of {config_constants.VALID_COMPRESS_ALGORITHMS}, "
                f"got {self.algo!r}",
                parameter="algo",
            )


AudioOperation = Union[Speedup, Normalize, RemoveSilence, Volume]
TextOperation = Union[Trim, Minify, Compress]
Operation = Union[AudioOperation, TextOperation]
