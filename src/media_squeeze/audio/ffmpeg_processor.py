"""FFmpeg-based tempo change for raw PCM buffers."""

import logging
import shutil
import subprocess
import time
from typing import List, Optional

from .. import config_constants
from ..exceptions import ExternalProcessError
from .pcm import PCMData, byte_length
from .tempo import build_atempo_filter, build_tempo_stages

logger = logging.getLogger(__name__)

_INSTALL_SUGGESTION = (
    "Install ffmpeg or point Config.ffmpeg_binary (or MEDIA_SQUEEZE_FFMPEG) at it"
)


def check_ffmpeg_available(ffmpeg_binary: str = config_constants.DEFAULT_FFMPEG_BINARY) -> bool:
    """Check if ffmpeg is available on the system.

    Returns:
        True if ffmpeg is available, False otherwise
    """
    return shutil.which(ffmpeg_binary) is not None


def build_ffmpeg_command(
    audio_filter: str,
    ffmpeg_binary: str = config_constants.DEFAULT_FFMPEG_BINARY,
) -> List[str]:
    """Build an ffmpeg command that filters raw PCM from stdin to stdout.

    Input and output are both described explicitly because raw PCM carries no
    header: mono, 44.1 kHz, float32 little-endian.
    """
    sample_rate = str(config_constants.SAMPLE_RATE)
    channels = str(config_constants.CHANNELS)
    return [
        ffmpeg_binary,
        "-hide_banner",
        "-loglevel",
        "error",
        "-f",
        config_constants.PCM_FORMAT,
        "-ar",
        sample_rate,
        "-ac",
        channels,
        "-i",
        "pipe:0",
        "-filter:a",
        audio_filter,
        "-f",
        config_constants.PCM_FORMAT,
        "-acodec",
        config_constants.PCM_CODEC,
        "-ar",
        sample_rate,
        "-ac",
        channels,
        "pipe:1",
    ]


def run_ffmpeg_filter(
    data: PCMData,
    audio_filter: str,
    ffmpeg_binary: str = config_constants.DEFAULT_FFMPEG_BINARY,
    timeout: Optional[float] = None,
) -> bytes:
    """Pipe a PCM buffer through one ffmpeg process and collect its output.

    One attempt per call; the process is never reused. If the caller (or a
    timeout) interrupts the wait, the process is killed before the exception
    propagates.

    Args:
        data: PCM buffer written to ffmpeg's stdin
        audio_filter: Value for ``-filter:a``
        ffmpeg_binary: ffmpeg executable
        timeout: Optional seconds to wait before killing the process

    Returns:
        Everything ffmpeg wrote to stdout

    Raises:
        ExternalProcessError: If ffmpeg cannot be started, times out or exits
            with a non-zero code
    """
    cmd = build_ffmpeg_command(audio_filter, ffmpeg_binary)
    logger.debug("Running ffmpeg filter %s on %d bytes", audio_filter, byte_length(data))
    start_time = time.time()

    try:
        process = subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        logger.error("FFmpeg spawn error: %s", exc)
        raise ExternalProcessError(
            f"FFmpeg spawn error: {exc}",
            command=ffmpeg_binary,
            suggestion=_INSTALL_SUGGESTION,
        ) from exc

    try:
        try:
            stdout, stderr = process.communicate(input=data, timeout=timeout)
        except BrokenPipeError:
            # Popen.communicate() already ignores EPIPE on stdin, so this only runs
            # with a substituted process object. The exit code decides success.
            logger.debug("FFmpeg closed its input early, collecting remaining output")
            stdout, stderr = process.communicate(timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        process.kill()
        _, stderr = process.communicate()
        stderr_text = stderr.decode("utf-8", errors="replace").strip() if stderr else ""
        logger.error("FFmpeg timed out after %ss", timeout)
        raise ExternalProcessError(
            f"FFmpeg timed out after {timeout}s",
            command=ffmpeg_binary,
            returncode=process.returncode,
            stderr=stderr_text,
        ) from exc
    except BaseException:
        process.kill()
        process.wait()
        raise

    stderr_text = stderr.decode("utf-8", errors="replace").strip() if stderr else ""
    if process.returncode != 0:
        logger.error("FFmpeg failed with code %s: %s", process.returncode, stderr_text)
        raise ExternalProcessError(
            f"FFmpeg failed with code {process.returncode}",
            command=ffmpeg_binary,
            returncode=process.returncode,
            stderr=stderr_text,
        )

    elapsed = time.time() - start_time
    logger.debug("FFmpeg filter completed in %.2fs (%d bytes out)", elapsed, len(stdout))
    return stdout


class FFmpegTempoStretcher:
    """Pitch-preserving tempo change using a chain of ffmpeg ``atempo`` filters."""

    def __init__(
        self,
        ffmpeg_binary: str = config_constants.DEFAULT_FFMPEG_BINARY,
        timeout: Optional[float] = None,
    ):
        """Initialize stretcher with configuration.

        Args:
            ffmpeg_binary: ffmpeg executable name or path
            timeout: Optional per-invocation timeout in seconds (None waits forever)
        """
        self.ffmpeg_binary = ffmpeg_binary
        self.timeout = timeout

    def stretch(self, data: PCMData, factor: float) -> bytes:
        """Change tempo through ffmpeg.

        Args:
            data: PCM buffer
            factor: Tempo factor (2.0 plays twice as fast)

        Returns:
            New PCM buffer

        Raises:
            ValidationError: If ``factor`` is not positive and finite
            ExternalProcessError: If ffmpeg fails
        """
        stages = build_tempo_stages(factor)
        audio_filter = build_atempo_filter(stages)
        logger.debug("Tempo factor %s -> %s", factor, audio_filter)
        return run_ffmpeg_filter(data, audio_filter, self.ffmpeg_binary, self.timeout)
