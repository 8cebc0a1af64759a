"""
Results processing for ProPower.

This module assembles power-curve summaries and the result dictionaries
returned by the model layer.
"""

import math
from typing import Any, Dict, List, Optional, Tuple


class ResultsProcessor:
    """Aggregates per-sample-size power into a power curve.

    Finds the first sample size whose power reaches the target, both for
    the closed-form power and, when present, the simulated power.
    """

    def __init__(self, target_power: float = 0.8):
        """Initialise the results processor.

        Args:
            target_power: Target power as a fraction (0–1).
        """
        self.target_power = target_power

    def process_power_curve(
        self,
        results: List[Tuple[int, Dict[str, Any]]],
    ) -> Dict[str, Any]:
        """
        Process power results from a sample size sweep.

        Args:
            results: List of (sample_size, power_result) tuples, where each
                power_result holds ``"analytical_power"`` and optionally
                ``"simulated_power"``.

        Returns:
            Dictionary with the sizes tested, the powers at each size and
            the first size reaching the target (``-1`` if none does).
        """
        analytical_powers: List[float] = []
        simulated_powers: List[float] = []
        first_achieved = -1
        first_achieved_simulated = -1
        has_simulation = bool(results) and all(r[1].get("simulated_power") is not None for r in results)

        for sample_size, power_result in results:
            power = power_result["analytical_power"]
            analytical_powers.append(power)
            if power >= self.target_power and first_achieved == -1:
                first_achieved = sample_size

            if has_simulation:
                simulated = power_result["simulated_power"]
                simulated_powers.append(simulated)
                if simulated >= self.target_power and first_achieved_simulated == -1:
                    first_achieved_simulated = sample_size

        return {
            "sample_sizes_tested": [r[0] for r in results],
            "analytical_powers": analytical_powers,
            "simulated_powers": simulated_powers if has_simulation else None,
            "first_achieved": first_achieved,
            "first_achieved_simulated": first_achieved_simulated if has_simulation else None,
        }


def _model_block(
    reference_proportion: float,
    alternative_proportion: float,
    target_power: float,
    z_alpha: float,
    alpha: float,
) -> Dict[str, Any]:
    """Metadata shared by every result dictionary."""
    return {
        "reference_proportion": reference_proportion,
        "alternative_proportion": alternative_proportion,
        "delta": alternative_proportion - reference_proportion,
        "target_power": target_power,
        "alpha": alpha,
        "z_alpha": z_alpha,
    }


def build_sample_size_result(
    reference_proportion: float,
    alternative_proportion: float,
    target_power: float,
    z_alpha: float,
    alpha: float,
    required_sample_size: float,
    z_beta: float,
    simulation: Optional[Dict[str, Any]] = None,
    n_simulations: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Build complete sample size result dictionary.

    Args:
        reference_proportion: Null-hypothesis proportion
        alternative_proportion: Suspected proportion
        target_power: Desired power
        z_alpha: Critical value of the reference band
        alpha: Significance level the critical value refers to
        required_sample_size: Unrounded closed-form size
        z_beta: Standard-normal quantile of the target power
        simulation: Optional simulation output at the rounded size
        n_simulations: Simulated surveys (when simulated)

    Returns:
        Complete result dictionary
    """
    model = _model_block(reference_proportion, alternative_proportion, target_power, z_alpha, alpha)
    model["n_simulations"] = n_simulations
    return {
        "model": model,
        "results": {
            "required_sample_size": required_sample_size,
            "rounded_sample_size": math.ceil(required_sample_size),
            "z_beta": z_beta,
            "simulation": simulation,
        },
    }


def build_power_result(
    reference_proportion: float,
    alternative_proportion: float,
    target_power: float,
    z_alpha: float,
    alpha: float,
    sample_size: float,
    analytical_power: float,
    simulation: Optional[Dict[str, Any]] = None,
    n_simulations: Optional[int] = None,
) -> Dict[str, Any]:
    """Build complete power result dictionary for one sample size."""
    model = _model_block(reference_proportion, alternative_proportion, target_power, z_alpha, alpha)
    model["sample_size"] = sample_size
    model["n_simulations"] = n_simulations
    return {
        "model": model,
        "results": {
            "analytical_power": analytical_power,
            "simulated_power": simulation["simulated_power"] if simulation else None,
            "target_achieved": analytical_power >= target_power,
            "simulation": simulation,
        },
    }


def build_power_curve_result(
    reference_proportion: float,
    alternative_proportion: float,
    target_power: float,
    z_alpha: float,
    alpha: float,
    sample_sizes: List[int],
    curve_results: Dict[str, Any],
    n_simulations: Optional[int] = None,
) -> Dict[str, Any]:
    """Build complete power curve result dictionary."""
    model = _model_block(reference_proportion, alternative_proportion, target_power, z_alpha, alpha)
    model["n_simulations"] = n_simulations
    model["sample_size_range"] = {
        "from_size": sample_sizes[0],
        "to_size": sample_sizes[-1],
        "by": sample_sizes[1] - sample_sizes[0] if len(sample_sizes) > 1 else 1,
    }
    return {"model": model, "results": curve_results}


def build_design_result(
    reference_proportion: float,
    alternative_proportion: float,
    target_power: float,
    z_alpha: float,
    alpha: float,
    sample_size: float,
    design: Dict[str, float],
) -> Dict[str, Any]:
    """Build complete Type S / Type M design analysis result dictionary."""
    model = _model_block(reference_proportion, alternative_proportion, target_power, z_alpha, alpha)
    model["sample_size"] = sample_size
    return {"model": model, "results": dict(design)}
