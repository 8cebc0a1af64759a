"""
Tests for Type S / Type M design analysis.
"""

import math

import numpy as np
import pytest

from propower import InvalidInput
from propower.stats.design_analysis import design_analysis, proportion_design_analysis
from tests.config import SEED


def _simulated_design(true_effect, standard_error, z_crit, n_draws=400_000):
    """Brute-force retrodesign by drawing estimates."""
    rng = np.random.default_rng(SEED)
    estimates = true_effect + standard_error * rng.standard_normal(n_draws)
    significant = np.abs(estimates) > z_crit * standard_error
    power = significant.mean()
    type_s = np.mean(np.sign(estimates[significant]) != np.sign(true_effect))
    type_m = np.mean(np.abs(estimates[significant])) / abs(true_effect)
    return power, type_s, type_m


class TestDesignAnalysis:
    """Test design_analysis."""

    def test_result_keys(self):
        result = design_analysis(0.5, 0.2)
        assert set(result) == {"power", "type_s", "type_m", "z_crit"}

    def test_low_power_beauty_example(self):
        """True effect 0.1 with standard error 3.28 gives ~5% power and huge exaggeration."""
        result = design_analysis(0.1, 3.28)
        assert result["power"] == pytest.approx(0.05, abs=0.001)
        assert result["type_s"] == pytest.approx(0.46, abs=0.02)
        assert 70 < result["type_m"] < 85

    def test_high_power_no_errors(self):
        result = design_analysis(1.0, 0.1)
        assert result["power"] == pytest.approx(1.0)
        assert result["type_s"] == pytest.approx(0.0, abs=1e-12)
        assert result["type_m"] == pytest.approx(1.0, abs=1e-6)

    @pytest.mark.parametrize("effect, se", [(0.5, 1.0), (0.2, 0.1), (2.0, 1.0)])
    def test_matches_simulation(self, effect, se):
        result = design_analysis(effect, se)
        power, type_s, type_m = _simulated_design(effect, se, result["z_crit"])
        assert result["power"] == pytest.approx(power, abs=0.005)
        assert result["type_s"] == pytest.approx(type_s, abs=0.01)
        assert result["type_m"] == pytest.approx(type_m, rel=0.02)

    def test_sign_symmetry(self):
        positive = design_analysis(0.3, 0.2)
        negative = design_analysis(-0.3, 0.2)
        for key in positive:
            assert positive[key] == pytest.approx(negative[key])

    def test_type_m_at_least_one(self):
        for effect in [0.05, 0.2, 0.5, 1.0, 3.0]:
            assert design_analysis(effect, 0.5)["type_m"] >= 1.0

    def test_type_s_decreases_with_power(self):
        values = [design_analysis(effect, 1.0)["type_s"] for effect in [0.1, 0.5, 1.0, 2.0]]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_alpha_sets_critical_value(self):
        result = design_analysis(0.5, 0.2, alpha=0.01)
        assert result["z_crit"] == pytest.approx(2.5758, abs=1e-4)

    def test_z_crit_overrides_alpha(self):
        result = design_analysis(0.5, 0.2, alpha=0.01, z_crit=1.96)
        assert result["z_crit"] == 1.96

    @pytest.mark.parametrize("effect", [0, 0.0])
    def test_zero_effect_rejected(self, effect):
        with pytest.raises(InvalidInput, match="non-zero"):
            design_analysis(effect, 1.0)

    @pytest.mark.parametrize("se", [0, -1.0, float("nan")])
    def test_bad_standard_error(self, se):
        with pytest.raises(InvalidInput, match="standard_error"):
            design_analysis(0.5, se)

    def test_non_numeric_effect(self):
        with pytest.raises(InvalidInput):
            design_analysis("0.5", 1.0)

    def test_numpy_scalars_accepted(self):
        result = design_analysis(np.float32(0.1), np.float64(0.05))
        expected = design_analysis(0.1, 0.05)
        assert result["power"] == pytest.approx(expected["power"], rel=1e-6)
        assert result["type_m"] == pytest.approx(expected["type_m"], rel=1e-6)


class TestProportionDesignAnalysis:
    """Test proportion_design_analysis."""

    def test_uses_conservative_standard_error(self):
        result = proportion_design_analysis(0.5, 0.6, 100)
        assert result["standard_error"] == pytest.approx(0.05)
        assert result["true_effect"] == pytest.approx(0.1)

    def test_matches_generic(self):
        result = proportion_design_analysis(0.5, 0.6, 196, z_crit=1.96)
        generic = design_analysis(0.1, 0.5 / math.sqrt(196), z_crit=1.96)
        assert result["power"] == pytest.approx(generic["power"])
        assert result["type_m"] == pytest.approx(generic["type_m"])

    def test_required_size_has_modest_exaggeration(self):
        result = proportion_design_analysis(0.5, 0.6, 197)
        assert result["power"] > 0.8
        assert result["type_s"] < 1e-4
        assert result["type_m"] < 1.2

    def test_small_survey_exaggerates(self):
        result = proportion_design_analysis(0.5, 0.6, 20)
        assert result["type_m"] > 2

    def test_alpha_sets_critical_value(self):
        result = proportion_design_analysis(0.5, 0.6, 100, alpha=0.01)
        assert result["z_crit"] == pytest.approx(2.5758, abs=1e-4)

    def test_default_critical_value_from_alpha(self):
        result = proportion_design_analysis(0.5, 0.6, 100)
        assert result["z_crit"] == pytest.approx(1.95996, abs=1e-5)

    def test_z_crit_overrides_alpha(self):
        result = proportion_design_analysis(0.5, 0.6, 100, alpha=0.01, z_crit=1.96)
        assert result["z_crit"] == 1.96

    def test_invalid_inputs(self):
        with pytest.raises(InvalidInput):
            proportion_design_analysis(0.5, 0.5, 100)
        with pytest.raises(InvalidInput):
            proportion_design_analysis(0.5, 0.6, 0)
