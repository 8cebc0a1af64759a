"""
Survey simulation for ProPower.

Checks the closed-form power by drawing synthetic surveys from the
suspected proportion and counting how often the directional test rejects
the reference proportion.
"""

from typing import Any, Callable, Dict, Optional

import numpy as np

from ..utils.validators import _validate_simulations, _validate_survey_size
from .sample_size import Z_ALPHA_95, rejection_threshold


class SurveySimulationRunner:
    """Executes Monte Carlo survey simulations for power estimation.

    Each iteration draws ``sample_size`` Bernoulli responses with the
    alternative proportion, estimates the proportion, and rejects when the
    estimate falls beyond the reference band on the alternative's side.
    Iterations run in vectorised batches; cancellation and progress are
    checked once per batch.
    """

    def __init__(
        self,
        n_simulations: int,
        seed: Optional[int] = None,
        z_alpha: float = Z_ALPHA_95,
        batch_size: int = 100,
    ):
        """Initialise the simulation runner.

        Args:
            n_simulations: Number of simulated surveys (at least 1).
            seed: Seed for ``numpy.random.default_rng``; ``None`` for
                fresh entropy on every run.
            z_alpha: Critical value of the reference band.
            batch_size: Surveys drawn per vectorised batch.
        """
        n_sims, result = _validate_simulations(n_simulations)
        result.raise_if_invalid()
        self.n_simulations = n_sims
        self.seed = seed
        self.z_alpha = z_alpha
        self.batch_size = max(1, batch_size)

    def run_power_simulations(
        self,
        reference_proportion: float,
        alternative_proportion: float,
        sample_size: int,
        progress=None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ) -> Dict[str, Any]:
        """Run the full simulation loop.

        Args:
            reference_proportion: Null-hypothesis proportion.
            alternative_proportion: Proportion the surveys are drawn from.
            sample_size: Respondents per simulated survey.
            progress: Optional ``ProgressReporter`` (advanced by the batch
                length after each batch).
            cancel_check: Optional callable returning ``True`` to abort.

        Returns:
            Dict with keys ``"n_simulations_used"``, ``"n_rejections"``,
            ``"simulated_power"`` and ``"mean_estimate"``.

        Raises:
            InvalidInput: If the proportions are invalid or *sample_size* is
                not a positive whole number.
            SimulationCancelled: If *cancel_check* returns ``True``.
        """
        _validate_survey_size(sample_size).raise_if_invalid()
        sample_size = int(sample_size)
        threshold = rejection_threshold(
            reference_proportion, alternative_proportion, sample_size, z_alpha=self.z_alpha
        )
        upper_tail = alternative_proportion > reference_proportion
        rng = np.random.default_rng(self.seed)

        n_rejections = 0
        estimate_sum = 0.0
        n_done = 0

        while n_done < self.n_simulations:
            if cancel_check is not None and cancel_check():
                from ..progress import SimulationCancelled

                raise SimulationCancelled("Simulation cancelled by user")

            n_batch = min(self.batch_size, self.n_simulations - n_done)
            successes = rng.binomial(sample_size, alternative_proportion, size=n_batch)
            estimates = successes / sample_size

            if upper_tail:
                rejected = estimates > threshold
            else:
                rejected = estimates < threshold

            n_rejections += int(np.count_nonzero(rejected))
            estimate_sum += float(np.sum(estimates))
            n_done += n_batch

            if progress is not None:
                progress.advance(n_batch)

        return {
            "n_simulations_used": n_done,
            "n_rejections": n_rejections,
            "simulated_power": n_rejections / n_done,
            "mean_estimate": estimate_sum / n_done,
        }
