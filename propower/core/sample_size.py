"""
Closed-form sample size and power for a single survey proportion.

The test compares an observed proportion against a reference (null)
proportion in the direction of a suspected alternative. Both uncertainty
bands use the conservative standard deviation ``0.5`` (the largest
possible for a proportion), so the sizes computed here are upper bounds
that hold whatever the true proportion is.
"""

import math

from scipy.stats import norm

from ..utils.validators import (
    _validate_alpha,
    _validate_power,
    _validate_proportion_pair,
    _validate_sample_size,
    _validate_z_alpha,
)

Z_ALPHA_95 = 1.96
"""Critical value of the 95% two-sided reference band."""

CONSERVATIVE_SD = 0.5
"""Largest standard deviation of a Bernoulli variable (reached at p=0.5)."""


def z_alpha_for(alpha: float) -> float:
    """Return the two-sided critical value ``norm.ppf(1 - alpha / 2)``.

    Args:
        alpha: Significance level in (0, 0.25].

    Raises:
        InvalidInput: If *alpha* is outside the valid range.
    """
    _validate_alpha(alpha).raise_if_invalid()
    return float(norm.ppf(1 - alpha / 2))


def compute_required_sample_size(
    reference_proportion: float,
    alternative_proportion: float,
    power_level: float,
    *,
    z_alpha: float = Z_ALPHA_95,
) -> float:
    """Minimum sample size to tell *alternative_proportion* from *reference_proportion*.

    Solves for the ``n`` at which the ``z_alpha`` band around the reference
    proportion first touches the ``power_level`` quantile band around the
    alternative proportion::

        n = ((z_alpha + z_beta) * 0.5 / |alternative - reference|) ** 2

    with ``z_beta = norm.ppf(power_level)``.

    Args:
        reference_proportion: Null-hypothesis proportion, in (0, 1).
        alternative_proportion: Suspected true proportion, in (0, 1) and
            different from *reference_proportion*.
        power_level: Desired power, in (0, 1).
        z_alpha: Critical value of the reference band. Defaults to 1.96.

    Returns:
        The (unrounded) required sample size. Round up with ``math.ceil``
        for a usable survey size.

    Raises:
        InvalidInput: If any precondition is violated.

    Example:
        >>> round(compute_required_sample_size(0.5, 0.6, 0.8))
        196
    """
    _validate_proportion_pair(reference_proportion, alternative_proportion).merge(
        _validate_power(power_level)
    ).merge(_validate_z_alpha(z_alpha)).raise_if_invalid()

    z_beta = norm.ppf(power_level)
    delta = abs(alternative_proportion - reference_proportion)
    return float(((z_alpha + z_beta) * CONSERVATIVE_SD / delta) ** 2)


def compute_achieved_power(
    reference_proportion: float,
    alternative_proportion: float,
    sample_size: float,
    *,
    z_alpha: float = Z_ALPHA_95,
) -> float:
    """Power reached with *sample_size* respondents (inverse of the size formula).

    ``power = Φ(2 * |alternative - reference| * sqrt(n) - z_alpha)``

    Raises:
        InvalidInput: If the proportions are invalid or *sample_size* is
            not positive.
    """
    _validate_proportion_pair(reference_proportion, alternative_proportion).merge(
        _validate_sample_size(sample_size)
    ).merge(_validate_z_alpha(z_alpha)).raise_if_invalid()

    delta = abs(alternative_proportion - reference_proportion)
    z_beta = delta * math.sqrt(sample_size) / CONSERVATIVE_SD - z_alpha
    return float(norm.cdf(z_beta))


def rejection_threshold(
    reference_proportion: float,
    alternative_proportion: float,
    sample_size: float,
    *,
    z_alpha: float = Z_ALPHA_95,
) -> float:
    """Estimated proportion beyond which the directional test rejects.

    The threshold sits ``z_alpha`` standard errors from the reference
    proportion, on the side of the alternative.
    """
    _validate_proportion_pair(reference_proportion, alternative_proportion).merge(
        _validate_sample_size(sample_size)
    ).merge(_validate_z_alpha(z_alpha)).raise_if_invalid()

    margin = z_alpha * CONSERVATIVE_SD / math.sqrt(sample_size)
    if alternative_proportion > reference_proportion:
        return reference_proportion + margin
    return reference_proportion - margin
