"""
Tests for results processing.
"""

import pytest

from propower.core.results import (
    ResultsProcessor,
    build_design_result,
    build_power_curve_result,
    build_power_result,
    build_sample_size_result,
)


class TestResultsProcessor:
    """Test ResultsProcessor.process_power_curve."""

    def test_first_achieved(self):
        rp = ResultsProcessor(target_power=0.8)
        results = [
            (100, {"analytical_power": 0.5}),
            (150, {"analytical_power": 0.7}),
            (200, {"analytical_power": 0.81}),
            (250, {"analytical_power": 0.9}),
        ]
        curve = rp.process_power_curve(results)
        assert curve["sample_sizes_tested"] == [100, 150, 200, 250]
        assert curve["analytical_powers"] == [0.5, 0.7, 0.81, 0.9]
        assert curve["first_achieved"] == 200
        assert curve["simulated_powers"] is None
        assert curve["first_achieved_simulated"] is None

    def test_not_achieved(self):
        rp = ResultsProcessor(target_power=0.95)
        curve = rp.process_power_curve([(100, {"analytical_power": 0.5})])
        assert curve["first_achieved"] == -1

    def test_target_exactly_met(self):
        rp = ResultsProcessor(target_power=0.8)
        curve = rp.process_power_curve([(50, {"analytical_power": 0.8})])
        assert curve["first_achieved"] == 50

    def test_with_simulation(self):
        rp = ResultsProcessor(target_power=0.8)
        results = [
            (100, {"analytical_power": 0.79, "simulated_power": 0.82}),
            (150, {"analytical_power": 0.85, "simulated_power": 0.86}),
        ]
        curve = rp.process_power_curve(results)
        assert curve["simulated_powers"] == [0.82, 0.86]
        assert curve["first_achieved"] == 150
        assert curve["first_achieved_simulated"] == 100


class TestBuildResults:
    """Test result dictionary builders."""

    def test_sample_size_result(self):
        result = build_sample_size_result(0.5, 0.6, 0.8, 1.96, 0.05, 196.2, 0.84)
        assert result["model"]["delta"] == pytest.approx(0.1)
        assert result["model"]["n_simulations"] is None
        assert result["results"]["rounded_sample_size"] == 197
        assert result["results"]["simulation"] is None

    def test_power_result(self):
        simulation = {"simulated_power": 0.83, "n_rejections": 83, "n_simulations_used": 100, "mean_estimate": 0.6}
        result = build_power_result(0.5, 0.6, 0.8, 1.96, 0.05, 200, 0.81, simulation=simulation, n_simulations=100)
        assert result["model"]["sample_size"] == 200
        assert result["results"]["simulated_power"] == 0.83
        assert result["results"]["target_achieved"] is True

    def test_power_result_without_simulation(self):
        result = build_power_result(0.5, 0.6, 0.8, 1.96, 0.05, 100, 0.5)
        assert result["results"]["simulated_power"] is None
        assert result["results"]["target_achieved"] is False

    def test_power_curve_result_range(self):
        curve = {"first_achieved": -1}
        result = build_power_curve_result(0.5, 0.6, 0.8, 1.96, 0.05, [30, 40, 50], curve)
        assert result["model"]["sample_size_range"] == {"from_size": 30, "to_size": 50, "by": 10}
        assert result["results"] is curve

    def test_design_result_copies(self):
        design = {"power": 0.8, "type_s": 0.0, "type_m": 1.1}
        result = build_design_result(0.5, 0.6, 0.8, 1.96, 0.05, 197, design)
        assert result["results"] == design
        assert result["results"] is not design
