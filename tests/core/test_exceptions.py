"""
Tests for PyTrendline exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyTrendlineError)
    - Diagnostic attributes on ModelDomainError, InsufficientDataError,
      SingularSystemError, DegenerateVarianceError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pytrendline.core.exceptions import (
    DegenerateVarianceError,
    DimensionError,
    InsufficientDataError,
    ModelDomainError,
    NumericalError,
    PyTrendlineError,
    SingularSystemError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyTrendlineError."""

    @pytest.mark.parametrize("exc_type", [
        ValidationError,
        DimensionError,
        ModelDomainError,
        NumericalError,
        InsufficientDataError,
        SingularSystemError,
        DegenerateVarianceError,
    ])
    def test_catchable_as_base(self, exc_type):
        with pytest.raises(PyTrendlineError):
            raise exc_type("failure")

    def test_dimension_error_is_validation_error(self):
        assert issubclass(DimensionError, ValidationError)

    def test_model_domain_error_is_validation_error(self):
        assert issubclass(ModelDomainError, ValidationError)

    @pytest.mark.parametrize("exc_type", [
        InsufficientDataError,
        SingularSystemError,
        DegenerateVarianceError,
    ])
    def test_numerical_errors(self, exc_type):
        assert issubclass(exc_type, NumericalError)
        assert not issubclass(exc_type, ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestModelDomainError:

    def test_all_attributes(self):
        err = ModelDomainError(
            "logarithmic trend line requires x > 0",
            model='logarithmic',
            index=2,
            value=-1.0,
            variable='x',
        )
        assert "x > 0" in str(err)
        assert err.model == 'logarithmic'
        assert err.index == 2
        assert err.value == -1.0
        assert err.variable == 'x'

    def test_defaults_none(self):
        err = ModelDomainError("out of domain")
        assert err.model is None
        assert err.index is None
        assert err.value is None
        assert err.variable is None


class TestInsufficientDataError:

    def test_all_attributes(self):
        err = InsufficientDataError("too few", n_samples=2, n_parameters=3)
        assert err.n_samples == 2
        assert err.n_parameters == 3

    def test_defaults_none(self):
        err = InsufficientDataError("too few")
        assert err.n_samples is None
        assert err.n_parameters is None


class TestSingularSystemError:

    def test_all_attributes(self):
        err = SingularSystemError(
            "X'X is singular",
            matrix_name="X'X",
            pivot_index=1,
            pivot=1e-17,
            tolerance=1e-10,
        )
        assert str(err) == "X'X is singular"
        assert err.matrix_name == "X'X"
        assert err.pivot_index == 1
        assert err.pivot == 1e-17
        assert err.tolerance == 1e-10

    def test_defaults_none(self):
        err = SingularSystemError("singular")
        assert err.matrix_name is None
        assert err.pivot_index is None
        assert err.pivot is None
        assert err.tolerance is None


class TestDegenerateVarianceError:

    def test_all_attributes(self):
        err = DegenerateVarianceError("r² undefined", rss=4.0, tss=0.0)
        assert err.rss == 4.0
        assert err.tss == 0.0
