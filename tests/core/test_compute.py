"""
Tests for timing utilities and sampling configuration.
"""

import pytest

from pytrendline.core.compute import DEFAULT_SAMPLING, SamplingConfig, Timer, timed
from pytrendline.core.compute.tolerances import DEFAULT_SAMPLE_STEPS, JUMP_THRESHOLD
from pytrendline.core.exceptions import ValidationError


class TestTimer:

    def test_sections_reported(self):
        timer = Timer()
        timer.start()
        with timer.section('solve'):
            pass
        with timer.section('solve'):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {'total_seconds', 'solve'}
        assert result['total_seconds'] >= result['solve'] >= 0.0

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_timed_context(self):
        with timed() as timer:
            sum(range(100))
        assert timer.result()['total_seconds'] >= 0.0


class TestSamplingConfig:

    def test_defaults(self):
        assert DEFAULT_SAMPLING.steps == DEFAULT_SAMPLE_STEPS == 1400
        assert DEFAULT_SAMPLING.jump_threshold == JUMP_THRESHOLD == 0.1

    def test_invalid_steps(self):
        with pytest.raises(ValidationError, match="steps"):
            SamplingConfig(steps=0)

    def test_invalid_threshold(self):
        with pytest.raises(ValidationError, match="jump_threshold"):
            SamplingConfig(jump_threshold=0.0)
