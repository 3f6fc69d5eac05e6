"""Raw PCM buffer helpers and container signature sniffing.

Buffers are mono, 44.1 kHz, little-endian 32-bit float samples. A trailing
remainder shorter than one sample is ignored rather than rejected.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from .. import config_constants
from ..exceptions import FormatError

PCMData = Union[bytes, bytearray, memoryview]

SAMPLE_DTYPE = np.dtype("<f4")

_DECODE_SUGGESTION = "Decode the file to raw mono 44.1 kHz float32 PCM before building a chain"


def byte_length(data: PCMData) -> int:
    return memoryview(data).nbytes


def sample_count(data: PCMData) -> int:
    return byte_length(data) // config_constants.BYTES_PER_SAMPLE


def to_samples(data: PCMData) -> np.ndarray:
    """View a PCM buffer as a read-only float32 array (no copy)."""
    count = sample_count(data)
    if count == 0:
        return np.zeros(0, dtype=SAMPLE_DTYPE)
    return np.frombuffer(data, dtype=SAMPLE_DTYPE, count=count)


def from_samples(samples: np.ndarray) -> bytes:
    """Serialize samples back to a new float32 little-endian buffer."""
    return np.asarray(samples, dtype=SAMPLE_DTYPE).tobytes()


def duration_seconds(data: PCMData, sample_rate: int = config_constants.SAMPLE_RATE) -> float:
    return sample_count(data) / sample_rate


def detect_container(data: PCMData) -> Optional[str]:
    """Return the container kind if ``data`` starts with a known file signature.

    Buffers shorter than 12 bytes are never classified.

    Returns:
        "wav", "mp4", "mp3" or None
    """
    header = bytes(memoryview(data)[:12])
    if len(header) < 12:
        return None
    if header[0:4] == b"RIFF" and header[8:12] == b"WAVE":
        return "wav"
    if header[4:8] == b"ftyp":
        return "mp4"
    if header[0:3] == b"ID3":
        return "mp3"
    return None


def validate_pcm_input(data: object) -> None:
    """Reject anything that is not raw PCM.

    Raises:
        FormatError: If ``data`` is not bytes-like or carries a WAV, MP4/M4A or
            MP3 signature
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise FormatError(
            f"Audio chains expect a bytes-like PCM buffer, got {type(data).__name__}",
            suggestion=_DECODE_SUGGESTION,
        )

    container = detect_container(data)
    if container == "wav":
        raise FormatError(
            "You passed a raw WAV file (with header). Audio chains expect decoded "
            "float32 PCM samples without a container header.",
            container="wav",
            suggestion=_DECODE_SUGGESTION,
        )
    if container == "mp4":
        raise FormatError(
            "You passed an MP4/AAC file. Compressed audio is not decoded here.",
            container="mp4",
            suggestion=_DECODE_SUGGESTION,
        )
    if container == "mp3":
        raise FormatError(
            "You passed an MP3 file. Compressed audio is not decoded here.",
            container="mp3",
            suggestion=_DECODE_SUGGESTION,
        )
