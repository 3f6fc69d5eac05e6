"""Factory function for creating tempo stretchers."""

import logging

from .. import config_constants
from .base import TempoStretcher
from .ffmpeg_processor import FFmpegTempoStretcher, check_ffmpeg_available
from .tempo import ResampleTempoStretcher

logger = logging.getLogger(__name__)


def create_tempo_stretcher(
    cfg,  # config.Config
) -> TempoStretcher:
    """Create the tempo stretcher selected by configuration.

    The ffmpeg backend is returned even when ffmpeg is missing; the run then
    fails with ``ExternalProcessError`` instead of silently switching to the
    pitch-shifting resampler.

    Args:
        cfg: Configuration object with tempo settings

    Returns:
        TempoStretcher instance
    """
    if cfg.tempo_backend == config_constants.TEMPO_BACKEND_RESAMPLE:
        return ResampleTempoStretcher()

    if not check_ffmpeg_available(cfg.ffmpeg_binary):
        logger.warning(
            "FFmpeg not found (%s). Tempo changes will fail. "
            "Install ffmpeg or set tempo_backend='resample'.",
            cfg.ffmpeg_binary,
        )

    return FFmpegTempoStretcher(
        ffmpeg_binary=cfg.ffmpeg_binary,
        timeout=cfg.ffmpeg_timeout,
    )
