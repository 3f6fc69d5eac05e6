"""Shared fixtures and test utilities for media_squeeze tests.

This module contains:
- Test constants
- Helpers that synthesize raw float32 PCM buffers
- Helpers that inspect processed buffers

All test files can import from this module using pytest's conftest.py mechanism.
"""

import math
import shutil

import numpy as np
import pytest

from media_squeeze import config

# Test constants
SAMPLE_RATE = 44100
TONE_FREQUENCY = 440.0
WAV_HEADER = b"RIFF\x24\x08\x00\x00WAVEfmt "
MP4_HEADER = b"\x00\x00\x00\x18ftypM4A \x00\x00\x02\x00"
MP3_HEADER = b"ID3\x04\x00\x00\x00\x00\x00\x00\x00\x00"


def make_tone(duration_sec, amplitude=0.5, frequency=TONE_FREQUENCY, sample_rate=SAMPLE_RATE):
    """Create a sine tone as raw float32 PCM bytes."""
    num_samples = int(math.floor(duration_sec * sample_rate))
    t = np.arange(num_samples, dtype=np.float64) / sample_rate
    samples = amplitude * np.sin(2 * np.pi * frequency * t)
    return samples.astype("<f4").tobytes()


def make_silence(duration_sec, sample_rate=SAMPLE_RATE):
    """Create digital silence as raw float32 PCM bytes."""
    num_samples = int(math.floor(duration_sec * sample_rate))
    return np.zeros(num_samples, dtype="<f4").tobytes()


def pcm_from(values):
    """Create raw float32 PCM bytes from a list of sample values."""
    return np.asarray(values, dtype="<f4").tobytes()


def samples_of(data):
    """Decode raw float32 PCM bytes into a numpy array."""
    return np.frombuffer(data, dtype="<f4", count=len(data) // 4)


def peak_of(data):
    samples = samples_of(data)
    return float(np.max(np.abs(samples))) if samples.size else 0.0


def duration_of(data, sample_rate=SAMPLE_RATE):
    return (len(data) // 4) / sample_rate


def ffmpeg_available():
    return shutil.which("ffmpeg") is not None


def create_test_config(**overrides):
    """Create a Config with test defaults (local resampler, no ffmpeg needed)."""
    values = {"tempo_backend": "resample"}
    values.update(overrides)
    return config.Config(**values)


@pytest.fixture
def resample_config():
    return create_test_config()


@pytest.fixture
def two_second_tone():
    return make_tone(2.0)


@pytest.fixture
def tone_silence_tone():
    """0.5 s tone + 1.0 s silence + 0.5 s tone (2.0 s total)."""
    return make_tone(0.5) + make_silence(1.0) + make_tone(0.5)
