"""Signal-processing operations over raw PCM buffers.

All functions are pure: they never modify their input and return a newly
allocated buffer, except for two identity fast paths that return the input
object itself (``normalize`` of an all-silent buffer and ``remove_silence`` when
no silence qualifies). Callers must not mutate returned buffers in place.
"""

from __future__ import annotations

import logging
import math
from typing import List, NamedTuple

import numpy as np

from .. import config_constants
from .pcm import PCMData, from_samples, to_samples

logger = logging.getLogger(__name__)


class SilenceRange(NamedTuple):
    """Half-open span ``[start, end)`` of silent sample indices."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


def db_to_amplitude(db: float) -> float:
    """Convert a dBFS threshold to linear amplitude, clamping to [-60, 0] dB."""
    clamped = max(config_constants.SILENCE_FLOOR_DB, min(config_constants.SILENCE_CEILING_DB, db))
    return math.pow(10, clamped / 20)


def peak(data: PCMData) -> float:
    """Maximum absolute sample value (0.0 for an empty buffer)."""
    samples = to_samples(data)
    if samples.size == 0:
        return 0.0
    return float(np.max(np.abs(samples)))


def resample(data: PCMData, rate: float) -> bytes:
    """Change speed by linear-interpolation resampling.

    The output has ``floor(n / rate)`` samples. Output sample ``i`` reads the
    fractional source position ``i * rate`` and interpolates between its two
    neighbours. Pitch shifts along with tempo.

    Args:
        data: Source PCM buffer
        rate: Speed factor, must be > 0 (2.0 halves the duration)

    Returns:
        New PCM buffer
    """
    if rate <= 0:
        raise ValueError(f"rate must be positive, got {rate}")

    samples = to_samples(data).astype(np.float64)
    original_length = samples.size
    new_length = math.floor(original_length / rate)
    if new_length <= 0:
        return b""

    positions = np.arange(new_length, dtype=np.float64) * rate
    index1 = np.floor(positions).astype(np.int64)
    index2 = np.minimum(index1 + 1, original_length - 1)
    fraction = positions - index1

    sample1 = samples[index1]
    sample2 = samples[index2]
    return from_samples(sample1 + (sample2 - sample1) * fraction)


def normalize(data: PCMData) -> PCMData:
    """Scale samples so the peak absolute amplitude becomes 1.0.

    A buffer whose peak is exactly 0 is returned unchanged (same object).
    """
    samples = to_samples(data)
    peak_value = float(np.max(np.abs(samples))) if samples.size else 0.0
    if peak_value == 0:
        return data

    scale = 1.0 / peak_value
    return from_samples(samples.astype(np.float64) * scale)


def find_silence_ranges(
    samples: np.ndarray,
    threshold_db: float,
    min_duration_ms: float,
    sample_rate: int = config_constants.SAMPLE_RATE,
) -> List[SilenceRange]:
    """Detect silent runs in a sample array.

    A sample is silent when its absolute value is strictly below the linear
    threshold; a sample exactly at the threshold is not. Each maximal run of
    silent samples at least ``min_duration_ms`` long is one range. Runs are
    never merged across non-silent samples, and a run touching the end of the
    buffer counts like any other.

    Args:
        samples: Float sample array
        threshold_db: Threshold in dBFS, clamped to [-60, 0]
        min_duration_ms: Minimum run duration in milliseconds
        sample_rate: Samples per second

    Returns:
        Ranges in ascending order
    """
    if samples.size == 0:
        return []

    threshold = db_to_amplitude(threshold_db)
    min_samples = math.floor((min_duration_ms / 1000) * sample_rate)

    quiet = np.abs(samples) < threshold
    edges = np.diff(np.concatenate(([0], quiet.astype(np.int8), [0])))
    starts = np.flatnonzero(edges == 1)
    ends = np.flatnonzero(edges == -1)

    return [
        SilenceRange(int(start), int(end))
        for start, end in zip(starts, ends)
        if end - start >= min_samples
    ]


def remove_silence(data: PCMData, threshold_db: float, min_duration_ms: float) -> PCMData:
    """Cut every qualifying silence range and join the remaining spans.

    Returns the input object unchanged when no range qualifies.
    """
    samples = to_samples(data)
    ranges = find_silence_ranges(samples, threshold_db, min_duration_ms)
    if not ranges:
        return data

    keep = np.ones(samples.size, dtype=bool)
    for silence in ranges:
        keep[silence.start : silence.end] = False

    removed = samples.size - int(np.count_nonzero(keep))
    logger.debug(
        "Removed %d silence range(s), %d of %d samples", len(ranges), removed, samples.size
    )
    return from_samples(samples[keep])


def volume(data: PCMData, level: float) -> bytes:
    """Multiply every sample by ``level`` without clamping.

    Output may leave the nominal [-1, 1] range; a later ``normalize`` can fix that.
    """
    samples = to_samples(data)
    return from_samples(samples.astype(np.float64) * level)
