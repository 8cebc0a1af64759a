"""Core components for the ProPower framework.

Re-exports the foundational building blocks:

- ``compute_required_sample_size``, ``compute_achieved_power``,
  ``rejection_threshold``, ``z_alpha_for`` — closed-form size and power.
- ``SurveySimulationRunner`` — Monte Carlo survey simulation.
- ``ResultsProcessor`` and the ``build_*_result`` helpers — power curves
  and result formatting.
"""

from .results import (
    ResultsProcessor,
    build_design_result,
    build_power_curve_result,
    build_power_result,
    build_sample_size_result,
)
from .sample_size import (
    CONSERVATIVE_SD,
    Z_ALPHA_95,
    compute_achieved_power,
    compute_required_sample_size,
    rejection_threshold,
    z_alpha_for,
)
from .simulation import SurveySimulationRunner

__all__ = [
    # Closed form
    "Z_ALPHA_95",
    "CONSERVATIVE_SD",
    "compute_required_sample_size",
    "compute_achieved_power",
    "rejection_threshold",
    "z_alpha_for",
    # Simulation
    "SurveySimulationRunner",
    # Results
    "ResultsProcessor",
    "build_sample_size_result",
    "build_power_result",
    "build_power_curve_result",
    "build_design_result",
]
