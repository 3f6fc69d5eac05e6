"""Configuration model for media_squeeze chains.

A ``Config`` value is passed explicitly into chain creation; nothing in the
package reads process-wide mutable state at run time.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import config_constants


def _is_test_environment() -> bool:
    """Check if we're running in a test environment."""
    import sys

    if "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ:
        return True
    if os.environ.get("TESTING", "").lower() in ("1", "true", "yes"):
        return True
    return False


# Tests build Config objects explicitly and never rely on .env files
if not _is_test_environment():
    try:
        load_dotenv(override=False)
    except (PermissionError, OSError):
        pass

DEFAULT_LOG_LEVEL = config_constants.DEFAULT_LOG_LEVEL
VALID_LOG_LEVELS = config_constants.VALID_LOG_LEVELS
DEFAULT_TEMPO_BACKEND = config_constants.DEFAULT_TEMPO_BACKEND
DEFAULT_FFMPEG_BINARY = config_constants.DEFAULT_FFMPEG_BINARY
DEFAULT_SILENCE_THRESHOLD_DB = config_constants.DEFAULT_SILENCE_THRESHOLD_DB
DEFAULT_SILENCE_MIN_DURATION_MS = config_constants.DEFAULT_SILENCE_MIN_DURATION_MS
SAMPLE_RATE = config_constants.SAMPLE_RATE


class Config(BaseModel):
    """Configuration for audio and text chains.

    The model is frozen so a single instance can be shared by any number of
    chains running concurrently.

    Attributes:
        tempo_backend: How ``speedup`` is realised. ``"ffmpeg"`` runs a chain of
            pitch-preserving ``atempo`` filters; ``"resample"`` uses the local
            linear-interpolation resampler, which shifts pitch.
        ffmpeg_binary: Executable used for the ffmpeg backend. Falls back to the
            ``MEDIA_SQUEEZE_FFMPEG`` environment variable, then ``"ffmpeg"``.
        ffmpeg_timeout: Optional bound in seconds for one ffmpeg invocation.
            ``None`` waits indefinitely.
        silence_threshold_db: Default threshold for ``remove_silence``.
        silence_min_duration_ms: Default minimum silence length for ``remove_silence``.
        log_level: Level applied by ``apply_log_level``.
        log_file: Optional log file path for ``apply_log_level``.

    Example:
        >>> cfg = Config(tempo_backend="resample")
        >>> result = media_squeeze.audio_chain(pcm, config=cfg).speedup(1.5).run()
    """

    tempo_backend: Literal["ffmpeg", "resample"] = Field(
        default=DEFAULT_TEMPO_BACKEND,
        description="Backend for tempo changes: 'ffmpeg' (pitch preserving) or 'resample'.",
    )
    ffmpeg_binary: str = Field(
        default=None,
        validate_default=True,
        description="ffmpeg executable name or path.",
    )
    ffmpeg_timeout: Optional[float] = Field(
        default=None,
        description="Seconds before a single ffmpeg invocation is killed (None disables).",
    )
    silence_threshold_db: float = Field(
        default=DEFAULT_SILENCE_THRESHOLD_DB,
        description="Default remove_silence threshold in dBFS (clamped to [-60, 0]).",
    )
    silence_min_duration_ms: float = Field(
        default=DEFAULT_SILENCE_MIN_DURATION_MS,
        ge=0,
        description="Default minimum silence duration in milliseconds.",
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Logging level.")
    log_file: Optional[str] = Field(default=None, description="Optional log file path.")

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("ffmpeg_binary", mode="before")
    @classmethod
    def _load_ffmpeg_binary_from_env(cls, value: Any) -> str:
        """Load ffmpeg binary from environment variable if not provided."""
        if value is not None and str(value).strip():
            return str(value).strip()
        env_value = os.getenv(config_constants.FFMPEG_BINARY_ENV_VAR, "").strip()
        return env_value or DEFAULT_FFMPEG_BINARY

    @field_validator("ffmpeg_timeout", mode="before")
    @classmethod
    def _ensure_timeout(cls, value: Any) -> Optional[float]:
        if value is None or value == "":
            return None
        try:
            timeout = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError("ffmpeg_timeout must be a number") from exc
        if timeout <= 0:
            raise ValueError("ffmpeg_timeout must be positive")
        return timeout

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        """Normalize log level value."""
        if value is None:
            return DEFAULT_LOG_LEVEL
        return str(value).strip().upper() or DEFAULT_LOG_LEVEL

    @field_validator("log_level", mode="after")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        """Validate log level is one of the valid levels."""
        if value not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}, got: {value}")
        return value

    @field_validator("log_file", mode="before")
    @classmethod
    def _strip_log_file(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None


def load_config_file(path: str) -> Dict[str, Any]:
    """Load configuration from a JSON or YAML file.

    The file format is auto-detected from the extension (``.json``, ``.yaml`` or
    ``.yml``). The returned dictionary can be unpacked into ``Config``.

    Args:
        path: Path to configuration file. Supports tilde expansion.

    Returns:
        Dictionary of configuration values.

    Raises:
        ValueError: If the path is empty, missing, unreadable, of an unsupported
            type, fails to parse, or does not contain a mapping.

    Example:
        >>> cfg = Config(**load_config_file("squeeze.yaml"))
    """
    if not path:
        raise ValueError("Config path cannot be empty")

    cfg_path = Path(path).expanduser()
    try:
        resolved = cfg_path.resolve()
    except (OSError, RuntimeError) as exc:
        raise ValueError(f"Invalid config path: {path} ({exc})") from exc

    if not resolved.exists():
        raise ValueError(f"Config file not found: {resolved}")

    suffix = resolved.suffix.lower()
    try:
        text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Failed to read config file {resolved}: {exc}") from exc

    if suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON config file {resolved}: {exc}") from exc
    elif suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML config file {resolved}: {exc}") from exc
    else:
        raise ValueError(f"Unsupported config file type: {resolved.suffix}")

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping/object at the top level")

    return data
