# This project is intended for personal, non-commercial use only.
# See README.md for details.

"""media_squeeze - Shrink audio and text payloads before they are forwarded.

Chains are immutable: every builder call returns a new chain, and nothing runs
until ``run()``. Each run reports the processed payload, before/after size
metrics, content details and the operations applied.

Programmatic API Example:
    >>> import media_squeeze
    >>>
    >>> result = (
    ...     media_squeeze.audio_chain(pcm_bytes)
    ...     .remove_silence(threshold_db=-40, min_duration_ms=100)
    ...     .speedup(1.5)
    ...     .normalize()
    ...     .run()
    ... )
    >>> print(f"Saved {result.metrics.percentage}%")

Configuration Example:
    >>> cfg = media_squeeze.Config(tempo_backend="resample", log_level="DEBUG")
    >>> media_squeeze.apply_log_level(cfg.log_level, cfg.log_file)
    >>> chain = media_squeeze.audio_chain(pcm_bytes, config=cfg)

Text Example:
    >>> media_squeeze.text_chain("  Hello    world .  ").trim().run().data
    'Hello world .'
"""

from __future__ import annotations

from .audio import audio_chain, AudioChain
from .config import Config, load_config_file
from .exceptions import (
    ExternalProcessError,
    FormatError,
    MediaSqueezeError,
    UnknownOperationError,
    ValidationError,
)
from .logging_config import apply_log_level
from .metrics import AudioDetails, calculate_metrics, ChainResult, Metrics, TextDetails
from .text import text_chain, TextChain

__all__ = [
    "AudioChain",
    "AudioDetails",
    "ChainResult",
    "Config",
    "ExternalProcessError",
    "FormatError",
    "MediaSqueezeError",
    "Metrics",
    "TextChain",
    "TextDetails",
    "UnknownOperationError",
    "ValidationError",
    "apply_log_level",
    "audio_chain",
    "calculate_metrics",
    "load_config_file",
    "text_chain",
    "__version__",
]

__version__ = "1.0.0"
