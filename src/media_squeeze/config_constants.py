"""Configuration constants for media_squeeze.

All constants are re-exported from config.py for convenience.
"""

# General defaults
DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# PCM model (mono float32 little-endian, fixed rate)
SAMPLE_RATE = 44100
CHANNELS = 1
BYTES_PER_SAMPLE = 4
PCM_FORMAT = "f32le"
PCM_CODEC = "pcm_f32le"

# Tempo backends
TEMPO_BACKEND_FFMPEG = "ffmpeg"
TEMPO_BACKEND_RESAMPLE = "resample"
DEFAULT_TEMPO_BACKEND = TEMPO_BACKEND_FFMPEG
DEFAULT_FFMPEG_BINARY = "ffmpeg"
FFMPEG_BINARY_ENV_VAR = "MEDIA_SQUEEZE_FFMPEG"

# atempo accepts a single-stage factor only within this range
ATEMPO_MIN_FACTOR = 0.5
ATEMPO_MAX_FACTOR = 2.0

# Operation parameter bounds
MAX_SPEEDUP_RATE = 4.0
MIN_VOLUME_LEVEL = 0.0
MAX_VOLUME_LEVEL = 2.0

# Silence detection
DEFAULT_SILENCE_THRESHOLD_DB = -40.0
DEFAULT_SILENCE_MIN_DURATION_MS = 100.0
SILENCE_FLOOR_DB = -60.0
SILENCE_CEILING_DB = 0.0

# Text compression algorithms (text-level, output stays readable)
VALID_COMPRESS_ALGORITHMS = ("gzip", "brotli")
DEFAULT_COMPRESS_ALGORITHM = "gzip"
