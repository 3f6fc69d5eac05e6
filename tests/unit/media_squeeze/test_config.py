#!/usr/bin/env python3
"""Tests for Config validation and config file loading."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from media_squeeze import Config, load_config_file
from media_squeeze.config import _is_test_environment

pytestmark = [pytest.mark.unit]


class TestConfigDefaults(unittest.TestCase):
    """Test default values."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        cfg = Config()
        self.assertEqual(cfg.tempo_backend, "ffmpeg")
        self.assertEqual(cfg.ffmpeg_binary, "ffmpeg")
        self.assertIsNone(cfg.ffmpeg_timeout)
        self.assertEqual(cfg.silence_threshold_db, -40.0)
        self.assertEqual(cfg.silence_min_duration_ms, 100.0)
        self.assertEqual(cfg.log_level, "INFO")
        self.assertIsNone(cfg.log_file)

    def test_config_is_frozen(self):
        cfg = Config()
        with self.assertRaises(ValidationError):
            cfg.tempo_backend = "resample"  # type: ignore[misc]

    def test_extra_fields_forbidden(self):
        with self.assertRaises(ValidationError):
            Config(sample_rate=48000)


class TestConfigValidators(unittest.TestCase):
    """Test field validators."""

    def test_tempo_backend_literal(self):
        self.assertEqual(Config(tempo_backend="resample").tempo_backend, "resample")
        with self.assertRaises(ValidationError):
            Config(tempo_backend="sox")

    @patch.dict(os.environ, {"MEDIA_SQUEEZE_FFMPEG": "/opt/ffmpeg/bin/ffmpeg"})
    def test_ffmpeg_binary_from_env(self):
        self.assertEqual(Config().ffmpeg_binary, "/opt/ffmpeg/bin/ffmpeg")

    @patch.dict(os.environ, {"MEDIA_SQUEEZE_FFMPEG": "/opt/ffmpeg/bin/ffmpeg"})
    def test_explicit_ffmpeg_binary_wins_over_env(self):
        self.assertEqual(Config(ffmpeg_binary="  ffmpeg6 ").ffmpeg_binary, "ffmpeg6")

    @patch.dict(os.environ, {}, clear=True)
    def test_blank_ffmpeg_binary_uses_default(self):
        self.assertEqual(Config(ffmpeg_binary="  ").ffmpeg_binary, "ffmpeg")

    def test_ffmpeg_timeout_parsing(self):
        self.assertEqual(Config(ffmpeg_timeout="12.5").ffmpeg_timeout, 12.5)
        self.assertIsNone(Config(ffmpeg_timeout="").ffmpeg_timeout)

    def test_ffmpeg_timeout_must_be_positive(self):
        for value in (0, -3, "soon"):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    Config(ffmpeg_timeout=value)

    def test_negative_min_duration_rejected(self):
        with self.assertRaises(ValidationError):
            Config(silence_min_duration_ms=-1)

    def test_log_level_case_insensitive(self):
        self.assertEqual(Config(log_level=" debug ").log_level, "DEBUG")

    def test_log_level_invalid(self):
        with self.assertRaises(ValidationError) as context:
            Config(log_level="LOUD")
        self.assertIn("log_level must be one of", str(context.exception))

    def test_log_file_blank_becomes_none(self):
        self.assertIsNone(Config(log_file="   ").log_file)


class TestLoadConfigFile(unittest.TestCase):
    """Test loading JSON and YAML configuration files."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        import shutil

        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write(self, name, content):
        path = Path(self.temp_dir) / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    def test_load_json(self):
        path = self._write(
            "squeeze.json", json.dumps({"tempo_backend": "resample", "log_level": "debug"})
        )
        data = load_config_file(path)
        self.assertEqual(data, {"tempo_backend": "resample", "log_level": "debug"})
        self.assertEqual(Config(**data).log_level, "DEBUG")

    def test_load_yaml(self):
        path = self._write(
            "squeeze.yaml", "tempo_backend: ffmpeg\nffmpeg_timeout: 30\nsilence_threshold_db: -35\n"
        )
        cfg = Config(**load_config_file(path))
        self.assertEqual(cfg.ffmpeg_timeout, 30.0)
        self.assertEqual(cfg.silence_threshold_db, -35.0)

    def test_yml_extension(self):
        path = self._write("squeeze.yml", "tempo_backend: resample\n")
        self.assertEqual(load_config_file(path), {"tempo_backend": "resample"})

    def test_empty_path(self):
        with self.assertRaises(ValueError):
            load_config_file("")

    def test_missing_file(self):
        with self.assertRaises(ValueError) as context:
            load_config_file(os.path.join(self.temp_dir, "missing.yaml"))
        self.assertIn("not found", str(context.exception))

    def test_unsupported_extension(self):
        path = self._write("squeeze.toml", "tempo_backend = 'ffmpeg'\n")
        with self.assertRaises(ValueError) as context:
            load_config_file(path)
        self.assertIn("Unsupported config file type", str(context.exception))

    def test_invalid_json(self):
        path = self._write("bad.json", "{not json")
        with self.assertRaises(ValueError) as context:
            load_config_file(path)
        self.assertIn("Invalid JSON", str(context.exception))

    def test_invalid_yaml(self):
        path = self._write("bad.yaml", "key: [unclosed\n")
        with self.assertRaises(ValueError) as context:
            load_config_file(path)
        self.assertIn("Invalid YAML", str(context.exception))

    def test_top_level_must_be_mapping(self):
        path = self._write("list.json", "[1, 2, 3]")
        with self.assertRaises(ValueError) as context:
            load_config_file(path)
        self.assertIn("mapping", str(context.exception))


class TestEnvironmentDetection(unittest.TestCase):
    def test_detects_pytest(self):
        self.assertTrue(_is_test_environment())
