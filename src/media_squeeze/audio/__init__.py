"""Audio chain, DSP operations and the ffmpeg tempo backend.

All audio handled here is raw mono 44.1 kHz float32 PCM; decoding and
re-encoding containers happens outside this package.
"""

from .chain import audio_chain, AudioChain
from .factory import create_tempo_stretcher

__all__ = ["AudioChain", "audio_chain", "create_tempo_stretcher"]
