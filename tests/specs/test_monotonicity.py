"""
Sample size properties.

The required size must be positive, symmetric in the sign of the effect,
shrink with larger effects and grow with higher power.
"""

import itertools
import math

import pytest

from propower import InvalidInput, compute_required_sample_size

REFERENCES = [0.05, 0.2, 0.5, 0.7, 0.95]
POWERS = [0.2, 0.5, 0.8, 0.9, 0.99]
DELTAS = [0.001, 0.005, 0.01, 0.02, 0.04]


class TestRequiredSampleSizeProperties:
    """Properties that hold for every valid input."""

    @pytest.mark.parametrize("reference, power", list(itertools.product(REFERENCES, POWERS)))
    def test_positive_finite(self, reference, power):
        for delta in DELTAS:
            for alternative in (reference + delta, reference - delta):
                n = compute_required_sample_size(reference, alternative, power)
                assert n > 0
                assert math.isfinite(n)

    @pytest.mark.parametrize("reference", REFERENCES)
    def test_symmetry_in_sign(self, reference):
        """f(p, q, w) == f(p, 2p - q, w) while both stay inside (0, 1)."""
        for delta, power in itertools.product(DELTAS, POWERS):
            above = compute_required_sample_size(reference, reference + delta, power)
            mirrored = compute_required_sample_size(reference, 2 * reference - (reference + delta), power)
            assert above == pytest.approx(mirrored)

    @pytest.mark.parametrize("reference, power", list(itertools.product(REFERENCES, POWERS)))
    def test_decreases_with_effect_size(self, reference, power):
        for sign in (1, -1):
            sizes = [compute_required_sample_size(reference, reference + sign * d, power) for d in DELTAS]
            assert all(a > b for a, b in zip(sizes, sizes[1:])), f"Not decreasing in |delta|: {sizes}"

    @pytest.mark.parametrize("reference", REFERENCES)
    def test_increases_with_power(self, reference):
        for delta in DELTAS:
            sizes = [compute_required_sample_size(reference, reference + delta, w) for w in POWERS]
            assert all(a < b for a, b in zip(sizes, sizes[1:])), f"Not increasing in power: {sizes}"

    def test_scales_with_inverse_square_of_delta(self):
        """Halving the effect quadruples the size."""
        wide = compute_required_sample_size(0.5, 0.6, 0.8)
        narrow = compute_required_sample_size(0.5, 0.55, 0.8)
        assert narrow == pytest.approx(4 * wide)

    def test_power_approaching_one_diverges(self):
        sizes = [compute_required_sample_size(0.5, 0.6, w) for w in (0.99, 0.9999, 0.999999)]
        assert sizes[-1] > 2 * sizes[0]

    @pytest.mark.parametrize("p", [0.001, 0.04, 0.5, 0.999])
    def test_identical_proportions_fail(self, p):
        with pytest.raises(InvalidInput):
            compute_required_sample_size(reference_proportion=p, alternative_proportion=p, power_level=0.8)
