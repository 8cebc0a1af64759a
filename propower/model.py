"""
ProPower - power analysis for a survey proportion.

This module provides the main ProportionPower class: closed-form sample
sizes, Monte Carlo survey checks and Type S / Type M design analysis for
testing a reference proportion against a suspected alternative.
"""

import math
import warnings
from typing import Any, Dict, Optional, Sequence

import pandas as pd
from scipy.stats import norm

from .core import (
    Z_ALPHA_95,
    ResultsProcessor,
    SurveySimulationRunner,
    build_design_result,
    build_power_curve_result,
    build_power_result,
    build_sample_size_result,
    compute_achieved_power,
    compute_required_sample_size,
    z_alpha_for,
)
from .stats.design_analysis import proportion_design_analysis
from .stats.grid import sample_size_grid
from .utils.formatters import _format_results
from .utils.validators import (
    _validate_power,
    _validate_proportion_pair,
    _validate_sample_size,
    _validate_sample_size_range,
    _validate_seed,
    _validate_simulations,
    _validate_survey_size,
)

_MIN_EXPECTED_COUNT = 10


class ProportionPower:
    """Power analysis for a single survey proportion.

    Compares a reference (null) proportion with a suspected alternative
    using a normal approximation and the conservative standard deviation
    0.5. Configuration methods (``set_*``) validate immediately and return
    ``self`` for method chaining.

    Attributes:
        reference_proportion: Null-hypothesis proportion.
        alternative_proportion: Suspected true proportion.
        seed: Random seed for survey simulations (default: 2137).
        power: Target power as a fraction (default: 0.8).
        alpha: Significance level (default: 0.05).
        z_alpha: Critical value of the reference band (default: 1.96).
        n_simulations: Simulated surveys per sample size (default: 1600).

    Example:
        >>> model = ProportionPower(reference_proportion=0.5, alternative_proportion=0.6)
        >>> model.find_sample_size()
        >>>
        >>> model.set_power(0.95).find_sample_size(simulate=True)
    """

    def __init__(self, reference_proportion: float, alternative_proportion: float):
        """Initialise the analysis.

        Args:
            reference_proportion: Null-hypothesis proportion, in (0, 1).
            alternative_proportion: Suspected true proportion, in (0, 1)
                and different from *reference_proportion*.

        Raises:
            InvalidInput: If the proportions are invalid.
        """
        _validate_proportion_pair(reference_proportion, alternative_proportion).raise_if_invalid()

        self.reference_proportion = float(reference_proportion)
        self.alternative_proportion = float(alternative_proportion)

        # Core configuration
        self.seed: Optional[int] = 2137
        self.power = 0.8
        self.alpha = 0.05
        self.z_alpha = Z_ALPHA_95
        self.n_simulations = 1600

        direction = "above" if self.delta > 0 else "below"
        print(
            f"Testing p = {self.reference_proportion:g} against suspected p = "
            f"{self.alternative_proportion:g} ({direction} the reference, |delta| = {abs(self.delta):.4g})"
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def delta(self) -> float:
        """Difference ``alternative - reference``."""
        return self.alternative_proportion - self.reference_proportion

    # =========================================================================
    # Configuration methods
    # =========================================================================

    def set_seed(self, seed: Optional[int] = None):
        """Set random seed for survey simulations.

        Args:
            seed: Non-negative integer, or ``None`` for fresh entropy.

        Returns:
            self: For method chaining.

        Raises:
            InvalidInput: If *seed* is not a non-negative integer or ``None``.
        """
        _validate_seed(seed).raise_if_invalid()
        self.seed = None if seed is None else int(seed)
        if seed is not None:
            print(f"Seed set to: {seed}")
        else:
            print("Random seeding enabled")
        return self

    def set_power(self, power: float):
        """Set the target power level.

        Args:
            power: Target power as a fraction in (0, 1). Default is 0.8.

        Returns:
            self: For method chaining.

        Raises:
            InvalidInput: If *power* is outside (0, 1).
        """
        _validate_power(power).raise_if_invalid()
        self.power = float(power)
        return self

    def set_alpha(self, alpha: float):
        """Set the significance level of the reference band.

        Replaces the default critical value 1.96 by ``norm.ppf(1 - alpha / 2)``.

        Args:
            alpha: Two-sided type-I error rate in (0, 0.25].

        Returns:
            self: For method chaining.

        Raises:
            InvalidInput: If *alpha* is outside the valid range.
        """
        self.z_alpha = z_alpha_for(alpha)
        self.alpha = float(alpha)
        return self

    def set_simulations(self, n_simulations: int):
        """Set the number of simulated surveys per sample size.

        Args:
            n_simulations: Positive number of simulations (floats are rounded).

        Returns:
            self: For method chaining.

        Raises:
            InvalidInput: If *n_simulations* is not positive.
        """
        n_sims, result = _validate_simulations(n_simulations)
        for warning in result.warnings:
            print(f"Warning: {warning}")
        result.raise_if_invalid()
        self.n_simulations = n_sims
        return self

    # =========================================================================
    # Analysis methods
    # =========================================================================

    def find_sample_size(
        self,
        print_results: bool = True,
        simulate: bool = False,
        summary: str = "short",
        return_results: bool = False,
        progress_callback=None,
        cancel_check=None,
    ):
        """
        Find the minimum survey size that reaches the target power.

        Args:
            print_results: Whether to print results
            simulate: Also estimate the power at the rounded size by
                simulating surveys
            summary: Output detail level ("short" or "long")
            return_results: Return results dict
            progress_callback: Progress reporting control (simulation only):
                - ``None`` (default): auto-use ``PrintReporter`` when
                  *print_results* is ``True``.
                - ``False``: explicitly disable progress.
                - callable ``(current, total)``: custom callback.
            cancel_check: Optional callable returning ``True`` to abort.

        Returns:
            dict or None: If *return_results* is ``True``, returns a
            results dictionary with keys ``"model"`` (settings) and
            ``"results"`` (required and rounded size, optional simulation).
            Returns ``None`` otherwise.
        """
        required = compute_required_sample_size(
            self.reference_proportion,
            self.alternative_proportion,
            self.power,
            z_alpha=self.z_alpha,
        )
        rounded = math.ceil(required)
        self._warn_normal_approximation(rounded)

        simulation = None
        if simulate:
            reporter = self._make_reporter(progress_callback, print_results, self.n_simulations)
            simulation = self._simulate(rounded, self.seed, reporter, cancel_check)
            if reporter is not None:
                reporter.finish()

        result = build_sample_size_result(
            self.reference_proportion,
            self.alternative_proportion,
            self.power,
            self.z_alpha,
            self.alpha,
            required,
            float(norm.ppf(self.power)),
            simulation=simulation,
            n_simulations=self.n_simulations if simulate else None,
        )

        if print_results:
            self._print_report("SAMPLE SIZE ANALYSIS RESULTS", "sample_size", result, summary)

        return result if return_results else None

    def find_power(
        self,
        sample_size: int,
        print_results: bool = True,
        simulate: bool = True,
        summary: str = "short",
        return_results: bool = False,
        progress_callback=None,
        cancel_check=None,
    ):
        """
        Calculate power for a given survey size.

        Args:
            sample_size: Number of respondents (integer when simulating)
            print_results: Whether to print results
            simulate: Also estimate power by simulating surveys
            summary: Output detail level ("short" or "long")
            return_results: Return results dict
            progress_callback: Progress reporting control, as in
                ``find_sample_size``.
            cancel_check: Optional callable returning ``True`` to abort.

        Returns:
            dict or None: Results dictionary when *return_results* is ``True``.
        """
        self._check_sample_size(sample_size, simulate)

        analytical = compute_achieved_power(
            self.reference_proportion,
            self.alternative_proportion,
            sample_size,
            z_alpha=self.z_alpha,
        )
        self._warn_normal_approximation(sample_size)

        simulation = None
        if simulate:
            reporter = self._make_reporter(progress_callback, print_results, self.n_simulations)
            simulation = self._simulate(int(sample_size), self.seed, reporter, cancel_check)
            if reporter is not None:
                reporter.finish()

        result = build_power_result(
            self.reference_proportion,
            self.alternative_proportion,
            self.power,
            self.z_alpha,
            self.alpha,
            sample_size,
            analytical,
            simulation=simulation,
            n_simulations=self.n_simulations if simulate else None,
        )

        if print_results:
            self._print_report("POWER ANALYSIS RESULTS", "power", result, summary)

        return result if return_results else None

    def find_power_curve(
        self,
        from_size: int = 30,
        to_size: int = 1000,
        by: int = 10,
        print_results: bool = True,
        simulate: bool = False,
        summary: str = "short",
        return_results: bool = False,
        progress_callback=None,
        cancel_check=None,
    ):
        """
        Power at every size of a range, and the first size reaching the target.

        Args:
            from_size: Minimum sample size to evaluate
            to_size: Maximum sample size to evaluate
            by: Step size between sample sizes
            print_results: Whether to print results
            simulate: Also simulate surveys at every size
            summary: Output detail level ("short" or "long" for the full table)
            return_results: Return results dict
            progress_callback: Progress reporting control, as in
                ``find_sample_size``.
            cancel_check: Optional callable returning ``True`` to abort.

        Returns:
            dict or None: Results dictionary when *return_results* is ``True``.
        """
        validation_result = _validate_sample_size_range(from_size, to_size, by)
        for warning in validation_result.warnings:
            print(f"Warning: {warning}")
        validation_result.raise_if_invalid()

        sample_sizes = list(range(from_size, to_size + 1, by))

        from .progress import compute_total_simulations

        reporter = None
        if simulate:
            total = compute_total_simulations(self.n_simulations, len(sample_sizes))
            reporter = self._make_reporter(progress_callback, print_results, total)

        per_size = []
        for i, n in enumerate(sample_sizes):
            power_result: Dict[str, Any] = {
                "analytical_power": compute_achieved_power(
                    self.reference_proportion,
                    self.alternative_proportion,
                    n,
                    z_alpha=self.z_alpha,
                )
            }
            if simulate:
                seed = self.seed + 4 * i if self.seed is not None else None
                simulation = self._simulate(n, seed, reporter, cancel_check)
                power_result["simulated_power"] = simulation["simulated_power"]
            per_size.append((n, power_result))

        if reporter is not None:
            reporter.finish()

        curve = ResultsProcessor(self.power).process_power_curve(per_size)
        result = build_power_curve_result(
            self.reference_proportion,
            self.alternative_proportion,
            self.power,
            self.z_alpha,
            self.alpha,
            sample_sizes,
            curve,
            n_simulations=self.n_simulations if simulate else None,
        )

        if print_results:
            self._print_report("POWER CURVE RESULTS", "power_curve", result, summary)

        return result if return_results else None

    def find_design_errors(
        self,
        sample_size: float,
        print_results: bool = True,
        summary: str = "short",
        return_results: bool = False,
    ):
        """
        Type S and Type M errors of a survey of *sample_size* respondents.

        Assumes the suspected proportion is the truth and uses the
        conservative standard error ``0.5 / sqrt(n)``.

        Args:
            sample_size: Number of respondents
            print_results: Whether to print results
            summary: Output detail level ("short" or "long")
            return_results: Return results dict

        Returns:
            dict or None: Results dictionary with ``"power"``, ``"type_s"``
            and ``"type_m"`` when *return_results* is ``True``.
        """
        self._check_sample_size(sample_size, simulate=False)

        design = proportion_design_analysis(
            self.reference_proportion,
            self.alternative_proportion,
            sample_size,
            alpha=self.alpha,
            z_crit=self.z_alpha,
        )
        if design["type_m"] > 2:
            warnings.warn(
                f"Significant estimates at N={sample_size} exaggerate the effect "
                f"{design['type_m']:.1f}-fold on average. Consider a larger survey.",
                UserWarning,
                stacklevel=2,
            )

        result = build_design_result(
            self.reference_proportion,
            self.alternative_proportion,
            self.power,
            self.z_alpha,
            self.alpha,
            sample_size,
            design,
        )

        if print_results:
            self._print_report("DESIGN ANALYSIS (TYPE S / TYPE M)", "design", result, summary)

        return result if return_results else None

    def sample_size_grid(
        self,
        alternatives: Optional[Sequence[float]] = None,
        power_levels: Optional[Sequence[float]] = None,
    ) -> pd.DataFrame:
        """Tabulate required sizes for several alternatives and power levels.

        Args:
            alternatives: Suspected proportions (default: the model's own).
            power_levels: Power levels (default: the model's target power).

        Returns:
            DataFrame as produced by ``propower.stats.grid.sample_size_grid``.
        """
        if alternatives is None:
            alternatives = [self.alternative_proportion]
        if power_levels is None:
            power_levels = [self.power]
        return sample_size_grid(
            self.reference_proportion,
            alternatives,
            power_levels,
            z_alpha=self.z_alpha,
        )

    # =========================================================================
    # Internal methods
    # =========================================================================

    def _check_sample_size(self, sample_size: Any, simulate: bool):
        """Validate *sample_size*; simulations additionally need a whole number."""
        validate = _validate_survey_size if simulate else _validate_sample_size
        validate(sample_size).raise_if_invalid()

    def _warn_normal_approximation(self, sample_size: float):
        """Warn when expected counts are too small for the normal approximation."""
        smallest = min(
            self.reference_proportion,
            1 - self.reference_proportion,
            self.alternative_proportion,
            1 - self.alternative_proportion,
        )
        expected = sample_size * smallest
        if expected < _MIN_EXPECTED_COUNT:
            warnings.warn(
                f"Expected count n*min(p, 1-p) = {expected:.1f} is below {_MIN_EXPECTED_COUNT} at N={sample_size}; "
                "the normal approximation to the binomial is unreliable.",
                UserWarning,
                stacklevel=3,
            )

    def _make_reporter(self, progress_callback, print_results: bool, total: int):
        """Resolve the progress callback into a started ``ProgressReporter`` (or ``None``)."""
        from .progress import PrintReporter, ProgressReporter

        if progress_callback is None:
            effective_cb = PrintReporter() if print_results else None
        elif progress_callback is False:
            effective_cb = None
        else:
            effective_cb = progress_callback

        if effective_cb is None:
            return None
        reporter = ProgressReporter(total, effective_cb)
        reporter.start()
        return reporter

    def _simulate(self, sample_size: int, seed: Optional[int], progress, cancel_check) -> Dict[str, Any]:
        runner = SurveySimulationRunner(self.n_simulations, seed=seed, z_alpha=self.z_alpha)
        return runner.run_power_simulations(
            self.reference_proportion,
            self.alternative_proportion,
            sample_size,
            progress=progress,
            cancel_check=cancel_check,
        )

    def _print_report(self, title: str, kind: str, result: Dict[str, Any], summary: str):
        print(f"\n{'=' * 80}")
        print(title)
        print(f"{'=' * 80}")
        print(_format_results(kind, result, summary))
