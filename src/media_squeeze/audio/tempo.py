"""Tempo filter-chain synthesis.

ffmpeg's ``atempo`` filter only accepts a factor within [0.5, 2.0] per stage.
Larger or smaller factors are realised by chaining several in-range stages
whose product equals the requested factor.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

from .. import config_constants
from ..exceptions import ValidationError
from . import dsp
from .pcm import PCMData

logger = logging.getLogger(__name__)

PASSTHROUGH_FILTER = "anull"


def build_tempo_stages(factor: float) -> List[float]:
    """Decompose a tempo factor into ``atempo``-compatible stages.

    Args:
        factor: Target tempo factor, must be positive and finite

    Returns:
        Stage factors, each within [0.5, 2.0], whose product equals ``factor``.
        Empty for a factor of exactly 1.0.

    Raises:
        ValidationError: If ``factor`` is not positive and finite

    Example:
        >>> build_tempo_stages(3.0)
        [2.0, 1.5]
        >>> build_tempo_stages(0.2)
        [0.5, 0.5, 0.8]
    """
    if not math.isfinite(factor) or factor <= 0:
        raise ValidationError(
            f"Tempo factor must be positive and finite, got {factor}", parameter="factor"
        )

    remaining = float(factor)
    stages: List[float] = []

    while remaining > config_constants.ATEMPO_MAX_FACTOR:
        stages.append(config_constants.ATEMPO_MAX_FACTOR)
        remaining /= config_constants.ATEMPO_MAX_FACTOR
    while remaining < config_constants.ATEMPO_MIN_FACTOR:
        stages.append(config_constants.ATEMPO_MIN_FACTOR)
        remaining /= config_constants.ATEMPO_MIN_FACTOR
    if remaining != 1.0:
        stages.append(remaining)

    return stages


def build_atempo_filter(stages: Sequence[float]) -> str:
    """Join stages into an ffmpeg audio filter argument.

    An empty stage list maps to the ``anull`` passthrough filter.
    """
    if not stages:
        return PASSTHROUGH_FILTER
    return ",".join(f"atempo={stage}" for stage in stages)


class ResampleTempoStretcher:
    """Tempo stretcher backed by the local linear-interpolation resampler.

    Runs in-process with no external dependency, but shifts pitch along with tempo.
    """

    def stretch(self, data: PCMData, factor: float) -> bytes:
        logger.debug("Resampling locally with factor %s", factor)
        return dsp.resample(data, factor)
