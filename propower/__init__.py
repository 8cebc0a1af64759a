"""ProPower - power analysis for a survey proportion.

Closed-form sample sizes for telling a suspected proportion apart from a
reference proportion, Monte Carlo survey checks of the resulting power,
and Type S / Type M design analysis.

Example:
    >>> from propower import ProportionPower, compute_required_sample_size
    >>>
    >>> round(compute_required_sample_size(0.5, 0.6, 0.8))
    196
    >>> model = ProportionPower(reference_proportion=0.04, alternative_proportion=0.03)
    >>> model.find_sample_size(simulate=True)
"""

from importlib.metadata import version as _get_version

from .core.sample_size import compute_achieved_power, compute_required_sample_size
from .model import ProportionPower
from .progress import PrintReporter, ProgressReporter, SimulationCancelled, TqdmReporter
from .stats.design_analysis import design_analysis, proportion_design_analysis
from .stats.grid import sample_size_grid
from .utils.validators import InvalidInput

__version__ = _get_version("ProPower")

__all__ = [
    "ProportionPower",
    "compute_required_sample_size",
    "compute_achieved_power",
    "design_analysis",
    "proportion_design_analysis",
    "sample_size_grid",
    "InvalidInput",
    "SimulationCancelled",
    "ProgressReporter",
    "PrintReporter",
    "TqdmReporter",
]
