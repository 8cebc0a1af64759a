"""
Validation utilities for proportion power analysis.

This module provides validation functions for proportions, power levels,
significance levels and simulation parameters.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

import numpy as np

__all__ = ["InvalidInput"]

_REAL_TYPES = (int, float, np.integer, np.floating)


class InvalidInput(ValueError):
    """Raised when an argument violates a precondition of a power calculation."""

    pass


@dataclass
class _ValidationResult:
    """Outcome of a validation check, carrying errors and warnings.

    Attributes:
        is_valid: ``True`` if no errors were found.
        errors: List of error messages (empty when valid).
        warnings: List of non-fatal warning messages.
    """

    is_valid: bool
    errors: List[str]
    warnings: List[str]

    def raise_if_invalid(self):
        """Raise ``InvalidInput`` if the validation failed."""
        if not self.is_valid:
            error_msg = "Validation failed:\n" + "\n".join(f"• {err}" for err in self.errors)
            raise InvalidInput(error_msg)

    def merge(self, other: "_ValidationResult") -> "_ValidationResult":
        """Combine two results into one (errors and warnings concatenated)."""
        return _ValidationResult(
            self.is_valid and other.is_valid,
            self.errors + other.errors,
            self.warnings + other.warnings,
        )


class _Validator:
    """Static helpers for type and range checks used by all validators."""

    @staticmethod
    def _check_type(value: Any, expected_types: tuple, name: str) -> Optional[str]:
        """Check if value has expected type (``bool`` is never numeric)."""
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, expected_types):
            actual_type = type(value).__name__
            expected = expected_types[0].__name__ if len(expected_types) == 1 else "a real number"
            return f"{name} must be {expected}, got {actual_type}"
        return None

    @staticmethod
    def _check_finite(value: Union[int, float], name: str) -> Optional[str]:
        """Check that value is neither NaN nor infinite."""
        if not math.isfinite(value):
            return f"{name} must be a finite number, got {value}"
        return None

    @staticmethod
    def _check_open_range(value: Union[int, float], min_val: float, max_val: float, name: str) -> Optional[str]:
        """Check if value lies strictly between the bounds."""
        if not min_val < value < max_val:
            return f"{name} must be strictly between {min_val} and {max_val}, got {value}"
        return None


_validator = _Validator()


def _validate_open_unit_interval(value: Any, name: str) -> _ValidationResult:
    """Generic validation for a finite real strictly inside (0, 1)."""
    errors: List[str] = []

    type_error = _validator._check_type(value, _REAL_TYPES, name)
    if type_error:
        return _ValidationResult(False, [type_error], [])

    finite_error = _validator._check_finite(value, name)
    if finite_error:
        return _ValidationResult(False, [finite_error], [])

    range_error = _validator._check_open_range(value, 0, 1, name)
    if range_error:
        errors.append(range_error)

    return _ValidationResult(len(errors) == 0, errors, [])


def _validate_proportion(proportion: Any, name: str = "proportion") -> _ValidationResult:
    """Validate a population proportion (0-1 exclusive)."""
    return _validate_open_unit_interval(proportion, name)


def _validate_proportion_pair(reference_proportion: Any, alternative_proportion: Any) -> _ValidationResult:
    """Validate the reference/alternative pair: both proportions and distinct."""
    result = _validate_proportion(reference_proportion, "reference_proportion").merge(
        _validate_proportion(alternative_proportion, "alternative_proportion")
    )
    if result.is_valid and reference_proportion == alternative_proportion:
        result.errors.append(
            f"alternative_proportion must differ from reference_proportion "
            f"(both are {reference_proportion}); identical proportions cannot be distinguished"
        )
        result.is_valid = False
    return result


def _validate_power(power: Any) -> _ValidationResult:
    """Validate power parameter (0-1 exclusive)."""
    return _validate_open_unit_interval(power, "power_level")


def _validate_alpha(alpha: Any) -> _ValidationResult:
    """Validate alpha level parameter (0-0.25]."""
    result = _validate_open_unit_interval(alpha, "alpha")
    if result.is_valid and alpha > 0.25:
        result.errors.append(f"alpha must be <= 0.25, got {alpha}")
        result.is_valid = False
    return result


def _validate_real(value: Any, name: str) -> _ValidationResult:
    """Validate a finite real number (numpy scalars included, ``bool`` excluded)."""
    type_error = _validator._check_type(value, _REAL_TYPES, name)
    if type_error:
        return _ValidationResult(False, [type_error], [])
    finite_error = _validator._check_finite(value, name)
    if finite_error:
        return _ValidationResult(False, [finite_error], [])
    return _ValidationResult(True, [], [])


def _validate_positive(value: Any, name: str) -> _ValidationResult:
    """Validate a finite real strictly greater than zero."""
    result = _validate_real(value, name)
    if result.is_valid and value <= 0:
        return _ValidationResult(False, [f"{name} must be positive, got {value}"], [])
    return result


def _validate_z_alpha(z_alpha: Any) -> _ValidationResult:
    """Validate a critical value for the reference band (positive, finite)."""
    return _validate_positive(z_alpha, "z_alpha")


def _validate_sample_size(sample_size: Any) -> _ValidationResult:
    """Validate a survey sample size.

    Accepts any positive finite real, since required sizes are fractional
    before rounding.
    """
    return _validate_positive(sample_size, "sample_size")


def _validate_survey_size(sample_size: Any) -> _ValidationResult:
    """Validate the size of a simulated survey: a positive whole number."""
    result = _validate_sample_size(sample_size)
    if result.is_valid and int(sample_size) != sample_size:
        return _ValidationResult(
            False, [f"sample_size must be a whole number to simulate surveys, got {sample_size}"], []
        )
    return result


def _validate_effect(true_effect: Any) -> _ValidationResult:
    """Validate a hypothesised effect for design analysis (finite, non-zero)."""
    result = _validate_real(true_effect, "true_effect")
    if result.is_valid and true_effect == 0:
        return _ValidationResult(
            False, ["true_effect must be non-zero; Type S and Type M errors are undefined for a null effect"], []
        )
    return result


def _validate_simulations(n_simulations: Any) -> Tuple[int, _ValidationResult]:
    """Validate and process number of simulations."""
    type_error = _validator._check_type(n_simulations, _REAL_TYPES, "Number of simulations")
    if type_error:
        return 0, _ValidationResult(False, [type_error], [])

    warnings: List[str] = []
    if not math.isfinite(n_simulations) or n_simulations < 1:
        return 0, _ValidationResult(False, [f"Number of simulations must be >= 1, got {n_simulations}"], [])

    rounded = int(round(n_simulations))
    if isinstance(n_simulations, (float, np.floating)) and n_simulations != rounded:
        warnings.append(f"Number of simulations rounded from {n_simulations} to {rounded}")
    if rounded < 1000:
        warnings.append(f"Low simulation count ({rounded}). Consider using at least 1000 for reliable results.")

    return rounded, _ValidationResult(True, [], warnings)


def _validate_seed(seed: Any) -> _ValidationResult:
    """Validate random seed (non-negative integer or ``None``)."""
    if seed is None:
        return _ValidationResult(True, [], [])
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        return _ValidationResult(False, [f"seed must be an integer or None, got {type(seed).__name__}"], [])
    if seed < 0:
        return _ValidationResult(False, ["seed must be non-negative"], [])
    return _ValidationResult(True, [], [])


def _validate_sample_size_range(from_size: Any, to_size: Any, by: Any) -> _ValidationResult:
    """Validate sample size range parameters."""
    errors: List[str] = []
    warnings: List[str] = []

    for param, name in [(from_size, "from_size"), (to_size, "to_size"), (by, "by")]:
        if isinstance(param, bool) or not isinstance(param, (int, np.integer)) or param <= 0:
            errors.append(f"{name} must be a positive integer, got {param}")

    if errors:
        return _ValidationResult(False, errors, warnings)

    if from_size >= to_size:
        errors.append(f"from_size ({from_size}) must be less than to_size ({to_size})")

    if by > (to_size - from_size):
        errors.append(f"Step size 'by' ({by}) is larger than range ({to_size - from_size}). This will only test one sample size.")

    n_tests = len(range(from_size, to_size + 1, by))
    if n_tests > 10000:
        warnings.append(f"Large number of sample sizes to test ({n_tests}). Output will be long.")

    return _ValidationResult(len(errors) == 0, errors, warnings)


def _validate_sequence(values: Any, name: str, item_validator) -> _ValidationResult:
    """Validate every element of a non-empty sequence with *item_validator*."""
    if isinstance(values, (str, bytes)) or not isinstance(values, (Sequence, np.ndarray)):
        return _ValidationResult(False, [f"{name} must be a sequence, got {type(values).__name__}"], [])
    if len(values) == 0:
        return _ValidationResult(False, [f"{name} cannot be empty"], [])

    result = _ValidationResult(True, [], [])
    for i, value in enumerate(values):
        result = result.merge(item_validator(value, f"{name}[{i}]"))
    return result
