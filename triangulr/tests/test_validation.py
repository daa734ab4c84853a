"""Tests for argument validation and parameter broadcasting."""

import numpy as np
import pytest

from triangulr import (
    dtri, ptri, qtri, rtri, mgtri, estri,
    TriangulrError, TriErrorKind, InvalidParameterError, RecycleError, FlagError, CountError,
)
from triangulr.core.validation import (
    as_numeric, broadcast, broadcast_count, check_count, check_params,
    check_scalar_flag, is_scalar, try_recycle,
)


class TestNumericCoercion:
    """Test coercion of inputs to numeric vectors."""

    def test_scalar_becomes_vector(self):
        """Test scalars become length-one float arrays."""
        out = as_numeric('x', 3)
        assert out.dtype == np.float64
        assert out.shape == (1,)

    def test_integer_sequence(self):
        """Test integer sequences are accepted."""
        np.testing.assert_array_equal(as_numeric('x', [1, 2, 3]), [1.0, 2.0, 3.0])

    @pytest.mark.parametrize("value", ["a", ["a", "b"], [True, False], None, {'a': 1}])
    def test_non_numeric_rejected(self, value):
        """Test strings, booleans and objects are rejected."""
        with pytest.raises(InvalidParameterError) as exc_info:
            as_numeric('x', value)
        assert exc_info.value.argument == 'x'
        assert exc_info.value.rule == "numeric"

    def test_empty_rejected(self):
        """Test empty vectors are rejected."""
        with pytest.raises(InvalidParameterError, match="length of at least one"):
            as_numeric('q', [])

    def test_non_numeric_min_aborts_call(self):
        """Test a non-numeric parameter aborts the whole call."""
        with pytest.raises(InvalidParameterError) as exc_info:
            dtri([0.1, 0.2], min="0")
        assert exc_info.value.argument == 'min'


class TestParameterChecks:
    """Test min/max/mode ordering and finiteness."""

    @pytest.mark.parametrize("min_, max_, mode", [
        (1.0, 1.0, 1.0),
        (2.0, 1.0, 1.5),
        (0.0, 1.0, 1.5),
        (0.0, 1.0, -0.5),
    ])
    def test_order_violations(self, min_, max_, mode):
        """Test ordering violations raise InvalidParameterError."""
        with pytest.raises(InvalidParameterError) as exc_info:
            ptri(0.5, min=min_, max=max_, mode=mode)
        assert exc_info.value.kind is TriErrorKind.INVALID_PARAMETER

    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_non_finite_parameters(self, bad):
        """Test non-finite parameters raise InvalidParameterError."""
        with pytest.raises(InvalidParameterError, match="finite"):
            qtri(0.5, min=bad)

    def test_vector_violation_reports_index(self):
        """Test the first offending element is reported."""
        with pytest.raises(InvalidParameterError) as exc_info:
            dtri([0.1, 0.2, 0.3], min=0, max=1, mode=[0.5, 1.5, 2.0])
        assert exc_info.value.context['index'] == 1
        assert exc_info.value.rule == "mode <= max"

    def test_mode_at_bounds_accepted(self):
        """Test mode equal to min or max is valid."""
        check_params(np.array([0.0, 0.0]), np.array([1.0, 1.0]), np.array([0.0, 1.0]))

    def test_non_finite_input_is_not_an_error(self):
        """Test non-finite primary input propagates per element."""
        out = dtri([np.inf, -np.inf, np.nan])
        assert out[0] == 0.0 and out[1] == 0.0
        assert np.isnan(out[2])


class TestRecycling:
    """Test the one-or-L recycling rule."""

    def test_common_length(self):
        """Test the common length is the longest vector."""
        assert try_recycle(x=np.ones(3), min=np.ones(1), max=np.ones(3)) == 3

    def test_mismatch_raises(self):
        """Test x of length 3 with min of length 2 raises RecycleError."""
        with pytest.raises(RecycleError) as exc_info:
            dtri([0.1, 0.2, 0.3], min=[0, 0], max=1, mode=0.5)
        error = exc_info.value
        assert error.argument == 'min'
        assert error.value == 2
        assert error.context['common_size'] == 3
        assert error.kind is TriErrorKind.RECYCLE

    @pytest.mark.parametrize("func", [dtri, ptri, qtri, mgtri, estri])
    def test_all_functions_check_lengths(self, func):
        """Test every function enforces the recycling rule."""
        with pytest.raises(RecycleError):
            func([0.1, 0.2, 0.3], mode=[0.5, 0.5])

    def test_scalar_mode_skips_recycling(self):
        """Test scalar parameters accept any input length."""
        bset = broadcast('x', np.arange(7), 0, 10, 5)
        assert bset.scalar_params
        assert bset.length == 7
        assert isinstance(bset.min, float)

    def test_vector_mode_aligns_everything(self):
        """Test vector mode expands all vectors to the common length."""
        bset = broadcast('x', 0.5, [0, 0, 0], 1, 0.5)
        assert not bset.scalar_params
        assert bset.length == 3
        for v in (bset.values, bset.min, bset.max, bset.mode):
            assert v.shape == (3,)

    def test_is_scalar(self):
        """Test parameter mode classification."""
        one = np.ones(1)
        assert is_scalar(one, one, one)
        assert not is_scalar(one, np.ones(2), one)


class TestFlags:
    """Test logical option validation."""

    @pytest.mark.parametrize("value", [True, False, np.bool_(True), np.array([False])])
    def test_valid_flags(self, value):
        """Test accepted boolean forms."""
        assert check_scalar_flag(log=value)['log'] == bool(np.asarray(value).item())

    @pytest.mark.parametrize("value", ["yes", 1, 0.0, None, [True, False], np.array([True, True])])
    def test_invalid_flags(self, value):
        """Test non-boolean or non-scalar flags raise FlagError."""
        with pytest.raises(FlagError) as exc_info:
            dtri(0.5, log=value)
        assert exc_info.value.argument == 'log'
        assert exc_info.value.kind is TriErrorKind.FLAG

    def test_each_flag_named(self):
        """Test the offending flag is named."""
        with pytest.raises(FlagError) as exc_info:
            ptri(0.5, lower_tail=True, log_p="no")
        assert exc_info.value.argument == 'log_p'


class TestCount:
    """Test sampler count validation."""

    @pytest.mark.parametrize("n, expected", [(1, 1), (3, 3), (3.7, 3), (np.int64(5), 5), ([4], 4)])
    def test_valid_counts(self, n, expected):
        """Test counts are floored to integers."""
        assert check_count(n) == expected

    @pytest.mark.parametrize("n", [0, 0.5, -2, np.inf, np.nan, [1, 2], "3", True, None])
    def test_invalid_counts(self, n):
        """Test invalid counts raise CountError."""
        with pytest.raises(CountError) as exc_info:
            rtri(n)
        assert exc_info.value.kind is TriErrorKind.COUNT

    def test_parameters_recycled_to_count(self):
        """Test parameter vectors must have length one or n."""
        bset = broadcast_count(3, [0, 1, 2], 5, 3)
        assert bset.length == 3
        assert bset.min.shape == (3,)
        with pytest.raises(RecycleError):
            rtri(3, min=[0, 0])


class TestErrorStructure:
    """Test structured error information."""

    def test_all_errors_share_base(self):
        """Test every error is a TriangulrError."""
        for cls in (InvalidParameterError, RecycleError, FlagError, CountError):
            assert issubclass(cls, TriangulrError)

    def test_to_dict(self):
        """Test errors serialise for structured logging."""
        with pytest.raises(FlagError) as exc_info:
            qtri(0.5, log_p=[True])
        info = exc_info.value.to_dict()
        assert info['error_code'] == "TRI_FLAGERROR"
        assert info['kind'] == "flag"
        assert info['context']['argument'] == 'log_p'
        assert info['recovery_suggestions']


if __name__ == "__main__":
    pytest.main([__file__])
