"""Size metrics and per-content details reported by chain runs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar, Union

TData = TypeVar("TData")
TDetails = TypeVar("TDetails")


@dataclass(frozen=True)
class Metrics:
    """Before/after size comparison for one chain run.

    Sizes are bytes for binary payloads and characters for text.

    Attributes:
        original_size: Size of the source payload
        final_size: Size of the processed payload
        saved_size: ``original_size - final_size`` (negative if the payload grew)
        ratio: ``original_size / final_size`` rounded to 2 decimals, 0 when
            ``final_size`` is 0. 2.0 means the payload halved.
        percentage: Share of the original that was saved, in percent, rounded to
            2 decimals, 0 when ``original_size`` is 0.
    """

    original_size: int
    final_size: int
    saved_size: int
    ratio: float
    percentage: float


@dataclass(frozen=True)
class AudioDetails:
    """Audio-specific details, always derived from the buffers themselves."""

    duration: float  # seconds
    sample_rate: int
    original_duration: float  # seconds
    silence_removed: float  # seconds excised by remove_silence


@dataclass(frozen=True)
class TextDetails:
    """Text-specific details."""

    char_count: int
    original_char_count: int


@dataclass(frozen=True)
class ChainResult(Generic[TData, TDetails]):
    """Result of ``run()`` on any chain.

    Attributes:
        data: Processed payload
        metrics: Size metrics comparing source and processed payload
        details: Content-specific details
        operations: Names of the operations applied, in order
    """

    data: TData
    metrics: Metrics
    details: TDetails
    operations: List[str] = field(default_factory=list)


def _round_half_up(value: float) -> float:
    """Round to 2 decimals with exact halves going up (2.125 -> 2.13)."""
    return math.floor(value * 100 + 0.5) / 100


def calculate_metrics(original_size: Union[int, float], final_size: Union[int, float]) -> Metrics:
    """Calculate compression metrics for a payload.

    Never raises: degenerate sizes produce a ratio or percentage of 0 instead of
    an infinite or undefined value.

    Args:
        original_size: Size before processing
        final_size: Size after processing

    Returns:
        Metrics with ratio and percentage rounded half up to 2 decimal places

    Example:
        >>> calculate_metrics(100, 50)
        Metrics(original_size=100, final_size=50, saved_size=50, ratio=2.0, percentage=50.0)
    """
    saved_size = original_size - final_size
    ratio = original_size / final_size if final_size > 0 else 0.0
    percentage = saved_size / original_size * 100 if original_size > 0 else 0.0

    return Metrics(
        original_size=original_size,
        final_size=final_size,
        saved_size=saved_size,
        ratio=_round_half_up(ratio),
        percentage=_round_half_up(percentage),
    )
