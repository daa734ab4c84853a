"""Tests for random variate generation."""

import numpy as np
import pytest
from scipy import stats

from triangulr import rtri, qtri, TriangularSampler
from triangulr.core.sampler import resolve_random_state


class TestRandomVariates:
    """Test inverse-transform sampling."""

    def test_seed_reproducible(self):
        """Test the same seed reproduces the same sequence."""
        first = rtri(3, min=0, max=1, mode=0.5, random_state=1)
        second = rtri(3, min=0, max=1, mode=0.5, random_state=1)
        np.testing.assert_array_equal(first, second)

    def test_different_seeds_differ(self):
        """Test different seeds give different sequences."""
        assert not np.array_equal(rtri(5, random_state=1), rtri(5, random_state=2))

    def test_scalar_and_vector_parameters_agree(self):
        """Test recycled parameters reproduce the scalar sequence."""
        r = rtri(3, min=[0, 0, 0], max=[1, 1, 1], mode=[0.5, 0.5, 0.5], random_state=1)
        rec_r = rtri(3, min=0, max=1, mode=[0.5, 0.5, 0.5], random_state=1)
        np.testing.assert_array_equal(r, rec_r)
        np.testing.assert_array_equal(r, rtri(3, random_state=1))

    def test_quantile_of_uniform_draws(self):
        """Test each variate is the quantile of one uniform draw, in order."""
        u = np.random.default_rng(3).random(10)
        np.testing.assert_allclose(rtri(10, 1, 4, 2, random_state=3), qtri(u, 1, 4, 2), rtol=1e-15)

    def test_one_draw_per_element(self):
        """Test exactly n uniforms are consumed from a shared generator."""
        rng = np.random.default_rng(7)
        reference = np.random.default_rng(7)

        rtri(5, random_state=rng)
        reference.random(5)

        assert rng.random() == reference.random()

    def test_legacy_random_state(self):
        """Test numpy RandomState is accepted."""
        out = rtri(4, random_state=np.random.RandomState(42))
        expected = qtri(np.random.RandomState(42).random_sample(4))
        np.testing.assert_allclose(out, expected, rtol=1e-15)

    def test_within_support(self):
        """Test variates lie within [min, max]."""
        out = rtri(10000, min=2, max=5, mode=4, random_state=0)
        assert out.shape == (10000,)
        assert np.all(out >= 2) and np.all(out <= 5)

    def test_distribution(self):
        """Test sample agrees with the triangular distribution."""
        out = rtri(20000, min=1, max=4, mode=2, random_state=12345)
        assert abs(out.mean() - 7 / 3) < 0.03
        result = stats.kstest(out, stats.triang(1 / 3, loc=1, scale=3).cdf)
        assert result.pvalue > 1e-3

    def test_per_draw_parameters(self):
        """Test draw i uses parameter triple i."""
        out = rtri(4, min=[0, 10, 20, 30], max=[1, 11, 21, 31], mode=[0.5, 10.5, 20.5, 30.5],
                   random_state=0)
        for i, value in enumerate(out):
            assert 10 * i <= value <= 10 * i + 1

    def test_count_floored(self):
        """Test fractional counts are floored."""
        assert rtri(3.9, random_state=0).shape == (3,)


class TestTriangularSampler:
    """Test the stateful sampler."""

    def test_stream_continues_across_calls(self):
        """Test successive calls continue one uniform stream."""
        sampler = TriangularSampler(5)
        combined = np.concatenate([sampler.sample(3, 1, 4, 2), sampler.sample(3, 1, 4, 2)])
        np.testing.assert_array_equal(combined, rtri(6, 1, 4, 2, random_state=5))

    def test_uniforms(self):
        """Test raw uniform draws lie in [0, 1)."""
        u = TriangularSampler(0).uniforms(1000)
        assert np.all(u >= 0) and np.all(u < 1)


class TestResolveRandomState:
    """Test random source resolution."""

    def test_none_gives_generator(self):
        """Test None creates a fresh generator."""
        assert isinstance(resolve_random_state(None), np.random.Generator)

    def test_generator_passed_through(self):
        """Test generators are used as-is."""
        rng = np.random.default_rng(0)
        assert resolve_random_state(rng) is rng

    def test_int_seed(self):
        """Test integer seeds create seeded generators."""
        assert resolve_random_state(9).random() == np.random.default_rng(9).random()

    @pytest.mark.parametrize("value", ["seed", 1.5, True])
    def test_invalid(self, value):
        """Test unsupported random_state values raise TypeError."""
        with pytest.raises(TypeError):
            resolve_random_state(value)


if __name__ == "__main__":
    pytest.main([__file__])
