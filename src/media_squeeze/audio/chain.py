"""Audio operation chain."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .. import config_constants
from ..chain import Chain, Handler, StepRecord
from ..config import Config
from ..metrics import AudioDetails, ChainResult, calculate_metrics
from ..operations import (
    AudioOperation,
    Normalize,
    OperationKind,
    RemoveSilence,
    Speedup,
    Volume,
)
from . import dsp
from .factory import create_tempo_stretcher
from .pcm import PCMData, byte_length, duration_seconds, validate_pcm_input

logger = logging.getLogger(__name__)

AudioResult = ChainResult[PCMData, AudioDetails]


class AudioChain(Chain[PCMData, AudioOperation, AudioResult]):
    """Immutable chain of audio operations over a raw PCM buffer.

    The buffer is checked for container signatures when the chain is created,
    before any operation can be queued.

    Example:
        >>> result = (
        ...     AudioChain(pcm)
        ...     .remove_silence(threshold_db=-40, min_duration_ms=100)
        ...     .speedup(1.5)
        ...     .normalize()
        ...     .run()
        ... )
        >>> result.operations
        ['removeSilence', 'speedup', 'normalize']
    """

    content_type = "audio"

    def __init__(
        self,
        data: PCMData,
        operations: Iterable[AudioOperation] = (),
        config: Optional[Config] = None,
    ) -> None:
        validate_pcm_input(data)
        super().__init__(data, operations, config)

    def _successor(self, operations: Tuple[AudioOperation, ...]) -> "AudioChain":
        return AudioChain(self._data, operations, self._config)

    def speedup(self, rate: float) -> "AudioChain":
        """Queue a tempo change by ``rate`` (0 < rate <= 4)."""
        return self._with_operation(Speedup(rate))

    def normalize(self) -> "AudioChain":
        """Queue peak normalization to 1.0."""
        return self._with_operation(Normalize())

    def remove_silence(
        self,
        threshold_db: Optional[float] = None,
        min_duration_ms: Optional[float] = None,
    ) -> "AudioChain":
        """Queue silence removal; omitted arguments come from the chain's Config."""
        if threshold_db is None:
            threshold_db = self._config.silence_threshold_db
        if min_duration_ms is None:
            min_duration_ms = self._config.silence_min_duration_ms
        return self._with_operation(RemoveSilence(threshold_db, min_duration_ms))

    def volume(self, level: float) -> "AudioChain":
        """Queue a linear gain of ``level`` (0 <= level <= 2)."""
        return self._with_operation(Volume(level))

    def _handlers(self) -> Dict[OperationKind, Handler]:
        handlers: Dict[OperationKind, Handler] = {
            OperationKind.NORMALIZE: lambda data, op: dsp.normalize(data),
            OperationKind.REMOVE_SILENCE: lambda data, op: dsp.remove_silence(
                data, op.threshold_db, op.min_duration_ms
            ),
            OperationKind.VOLUME: lambda data, op: dsp.volume(data, op.level),
        }
        if any(op.kind is OperationKind.SPEEDUP for op in self._operations):
            stretcher = create_tempo_stretcher(self._config)
            handlers[OperationKind.SPEEDUP] = lambda data, op: stretcher.stretch(data, op.rate)
        return handlers

    def _size(self, data: PCMData) -> int:
        return byte_length(data)

    def _build_result(
        self, final: PCMData, steps: List[StepRecord], elapsed: float
    ) -> AudioResult:
        sample_rate = config_constants.SAMPLE_RATE
        bytes_removed = sum(
            step.size_before - step.size_after
            for step in steps
            if step.kind is OperationKind.REMOVE_SILENCE
        )
        details = AudioDetails(
            duration=duration_seconds(final, sample_rate),
            sample_rate=sample_rate,
            original_duration=duration_seconds(self._data, sample_rate),
            silence_removed=bytes_removed // config_constants.BYTES_PER_SAMPLE / sample_rate,
        )
        metrics = calculate_metrics(byte_length(self._data), byte_length(final))
        operations = [step.kind.value for step in steps]

        logger.info(
            "Audio chain %s finished in %.2fs: %.2fs -> %.2fs, saved %s bytes (%.2f%%)",
            operations,
            elapsed,
            details.original_duration,
            details.duration,
            metrics.saved_size,
            metrics.percentage,
        )
        return ChainResult(data=final, metrics=metrics, details=details, operations=operations)


def audio_chain(data: PCMData, config: Optional[Config] = None) -> AudioChain:
    """Create an empty audio chain for a raw PCM buffer.

    Raises:
        FormatError: If ``data`` is an encoded container rather than raw PCM
    """
    return AudioChain(data, config=config)
