"""Tabulation of required sample sizes over alternatives and power levels."""

import math
from typing import Sequence

import pandas as pd

from ..core.sample_size import Z_ALPHA_95, compute_required_sample_size
from ..utils.validators import (
    _validate_open_unit_interval,
    _validate_proportion,
    _validate_sequence,
    _validate_z_alpha,
)

GRID_COLUMNS = [
    "reference_proportion",
    "alternative_proportion",
    "delta",
    "power_level",
    "required_sample_size",
    "rounded_sample_size",
]


def sample_size_grid(
    reference_proportion: float,
    alternatives: Sequence[float],
    power_levels: Sequence[float],
    *,
    z_alpha: float = Z_ALPHA_95,
) -> pd.DataFrame:
    """Required sample size for every (alternative, power) combination.

    Every input is validated before any size is computed, so a single bad
    value fails the whole grid.

    Args:
        reference_proportion: Null-hypothesis proportion.
        alternatives: Suspected proportions, each different from the reference.
        power_levels: Desired power levels.
        z_alpha: Critical value of the reference band.

    Returns:
        DataFrame with one row per combination (alternatives outer, power
        levels inner, both in input order) and columns ``GRID_COLUMNS``.

    Raises:
        InvalidInput: If any input is invalid.
    """
    result = _validate_proportion(reference_proportion, "reference_proportion")
    result = result.merge(_validate_sequence(alternatives, "alternatives", _validate_proportion))
    result = result.merge(_validate_sequence(power_levels, "power_levels", _validate_open_unit_interval))
    result = result.merge(_validate_z_alpha(z_alpha))
    if result.is_valid:
        for i, alternative in enumerate(alternatives):
            if alternative == reference_proportion:
                result.errors.append(f"alternatives[{i}] equals reference_proportion ({reference_proportion})")
                result.is_valid = False
    result.raise_if_invalid()

    rows = []
    for alternative in alternatives:
        for power_level in power_levels:
            required = compute_required_sample_size(
                reference_proportion, alternative, power_level, z_alpha=z_alpha
            )
            rows.append(
                {
                    "reference_proportion": float(reference_proportion),
                    "alternative_proportion": float(alternative),
                    "delta": float(alternative - reference_proportion),
                    "power_level": float(power_level),
                    "required_sample_size": required,
                    "rounded_sample_size": math.ceil(required),
                }
            )

    return pd.DataFrame(rows, columns=GRID_COLUMNS)
