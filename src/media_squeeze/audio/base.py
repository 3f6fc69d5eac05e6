"""Base protocol for tempo-change backends."""

from typing import Protocol

from .pcm import PCMData


class TempoStretcher(Protocol):
    """Protocol for tempo-change backends."""

    def stretch(self, data: PCMData, factor: float) -> bytes:
        """Change the tempo of a PCM buffer.

        Args:
            data: Mono 44.1 kHz float32 PCM buffer
            factor: Tempo factor (2.0 plays twice as fast)

        Returns:
            New PCM buffer in the same format
        """
        ...
