"""
Design analysis: Type S and Type M errors of a planned test.

Closed-form version of Gelman & Carlin's *retrodesign*. For an estimate
``est ~ N(D, s)`` tested two-sided at critical value ``z``:

- power: probability that ``|est| > z * s``;
- Type S: probability that a significant estimate has the wrong sign;
- Type M (exaggeration ratio): ``E[|est| | significant] / |D|``.
"""

import math
from typing import Dict, Optional

from scipy.stats import norm

from ..core.sample_size import CONSERVATIVE_SD
from ..utils.validators import (
    _validate_alpha,
    _validate_effect,
    _validate_positive,
    _validate_proportion_pair,
    _validate_sample_size,
    _validate_z_alpha,
)


def design_analysis(
    true_effect: float,
    standard_error: float,
    *,
    alpha: float = 0.05,
    z_crit: Optional[float] = None,
) -> Dict[str, float]:
    """Power, Type S error and exaggeration ratio for a hypothesised effect.

    Args:
        true_effect: Hypothesised true effect ``D`` (non-zero).
        standard_error: Standard error ``s`` of the estimate (positive).
        alpha: Two-sided significance level, used when *z_crit* is ``None``.
        z_crit: Critical value; overrides *alpha* when given.

    Returns:
        Dict with ``"power"``, ``"type_s"``, ``"type_m"`` and ``"z_crit"``.

    Raises:
        InvalidInput: If the effect is zero or not finite, or the standard
            error is not positive.
    """
    _validate_effect(true_effect).merge(_validate_positive(standard_error, "standard_error")).raise_if_invalid()

    if z_crit is None:
        _validate_alpha(alpha).raise_if_invalid()
        z_crit = float(norm.ppf(1 - alpha / 2))
    else:
        _validate_z_alpha(z_crit).raise_if_invalid()

    effect = abs(true_effect)
    lam = effect / standard_error

    # Tails of N(lam, 1) beyond +z and -z (standardised estimate)
    upper = z_crit - lam
    lower = -z_crit - lam
    p_hi = norm.sf(upper)
    p_lo = norm.cdf(lower)
    power = p_hi + p_lo

    # E[|est|; est > z*s] + E[|est|; est < -z*s] from truncated-normal moments
    upper_moment = effect * p_hi + standard_error * norm.pdf(upper)
    lower_moment = -effect * p_lo + standard_error * norm.pdf(lower)

    return {
        "power": float(power),
        "type_s": float(p_lo / power),
        "type_m": float((upper_moment + lower_moment) / (power * effect)),
        "z_crit": float(z_crit),
    }


def proportion_design_analysis(
    reference_proportion: float,
    alternative_proportion: float,
    sample_size: float,
    *,
    alpha: float = 0.05,
    z_crit: Optional[float] = None,
) -> Dict[str, float]:
    """Design analysis for a survey proportion under the conservative standard error.

    Uses ``D = alternative - reference`` and ``s = 0.5 / sqrt(n)``.

    Returns:
        The :func:`design_analysis` dict plus ``"true_effect"`` and
        ``"standard_error"``.
    """
    _validate_proportion_pair(reference_proportion, alternative_proportion).merge(
        _validate_sample_size(sample_size)
    ).raise_if_invalid()

    true_effect = float(alternative_proportion - reference_proportion)
    standard_error = CONSERVATIVE_SD / math.sqrt(sample_size)

    result = design_analysis(true_effect, standard_error, alpha=alpha, z_crit=z_crit)
    result["true_effect"] = true_effect
    result["standard_error"] = standard_error
    return result
