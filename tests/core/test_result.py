"""
Tests for the Result[P] envelope.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - Default warnings and has_warning()
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pytrendline.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _result(**overrides):
    fields = dict(
        params=FakeParams(value=42.0),
        info={"method": "test"},
        timing={"total_seconds": 0.01},
        backend_name="cpu",
    )
    fields.update(overrides)
    return Result(**fields)


class TestResultConstruction:

    def test_basic_creation(self):
        result = _result()
        assert result.params.value == 42.0
        assert result.info["method"] == "test"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu"

    def test_timing_none(self):
        assert _result(timing=None).timing is None

    def test_warnings_default_empty(self):
        assert _result().warnings == ()


class TestResultImmutability:

    def test_cannot_reassign_params(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.params = FakeParams(value=0.0)

    def test_cannot_reassign_warnings(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.warnings = ("new",)


class TestHasWarning:

    def test_substring_match(self):
        result = _result(warnings=("r_squared and sigma2 describe the fit of ln(y), not y",))
        assert result.has_warning("ln(y)")
        assert not result.has_warning("singular")

    def test_no_warnings(self):
        assert not _result().has_warning("anything")
