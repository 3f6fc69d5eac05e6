#!/usr/bin/env python3
"""Tests for size metrics and chain result types."""

import dataclasses
import unittest

import pytest

from media_squeeze.metrics import (
    AudioDetails,
    calculate_metrics,
    ChainResult,
    Metrics,
    TextDetails,
)

pytestmark = [pytest.mark.unit]


class TestCalculateMetrics(unittest.TestCase):
    """Test metric arithmetic."""

    def test_halved_payload(self):
        m = calculate_metrics(100, 50)
        self.assertEqual(
            m,
            Metrics(original_size=100, final_size=50, saved_size=50, ratio=2.0, percentage=50.0),
        )

    def test_unchanged_payload(self):
        m = calculate_metrics(1000, 1000)
        self.assertEqual(m.saved_size, 0)
        self.assertEqual(m.ratio, 1.0)
        self.assertEqual(m.percentage, 0.0)

    def test_rounding_to_two_decimals(self):
        m = calculate_metrics(300, 100)
        self.assertEqual(m.ratio, 3.0)
        self.assertEqual(m.percentage, 66.67)

        m = calculate_metrics(7, 3)
        self.assertEqual(m.ratio, 2.33)
        self.assertEqual(m.percentage, 57.14)

    def test_exact_half_rounds_up(self):
        m = calculate_metrics(68, 32)
        self.assertEqual(m.ratio, 2.13)

        m = calculate_metrics(8, 5)
        self.assertEqual(m.percentage, 37.5)

        m = calculate_metrics(1000, 984)
        self.assertEqual(m.ratio, 1.02)
        self.assertEqual(m.percentage, 1.6)

    def test_grown_payload_has_negative_savings(self):
        m = calculate_metrics(100, 150)
        self.assertEqual(m.saved_size, -50)
        self.assertEqual(m.ratio, 0.67)
        self.assertEqual(m.percentage, -50.0)

    def test_zero_final_size(self):
        m = calculate_metrics(100, 0)
        self.assertEqual(m.ratio, 0.0)
        self.assertEqual(m.percentage, 100.0)

    def test_zero_original_size(self):
        m = calculate_metrics(0, 0)
        self.assertEqual(m.ratio, 0.0)
        self.assertEqual(m.percentage, 0.0)
        self.assertEqual(m.saved_size, 0)

    def test_zero_original_nonzero_final(self):
        m = calculate_metrics(0, 10)
        self.assertEqual(m.ratio, 0.0)
        self.assertEqual(m.percentage, 0.0)
        self.assertEqual(m.saved_size, -10)


class TestResultTypes(unittest.TestCase):
    """Test result containers."""

    def test_metrics_are_frozen(self):
        m = calculate_metrics(10, 5)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            m.ratio = 5.0  # type: ignore[misc]

    def test_chain_result_defaults(self):
        result = ChainResult(
            data="x", metrics=calculate_metrics(1, 1), details=TextDetails(1, 1)
        )
        self.assertEqual(result.operations, [])

    def test_audio_details_fields(self):
        details = AudioDetails(
            duration=1.5, sample_rate=44100, original_duration=3.0, silence_removed=0.5
        )
        self.assertEqual(details.sample_rate, 44100)
        self.assertEqual(details.silence_removed, 0.5)
