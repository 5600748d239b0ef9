"""
Custom validation utilities for locus fields and simulation parameters.
"""

import math
import numbers
from typing import Any

from transposim.config import settings


def is_real(value: Any) -> bool:
    """Check that a value is a real number (booleans excluded)."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_finite_real(value: Any) -> bool:
    """Check that a value is a real number other than nan or infinity."""
    return is_real(value) and math.isfinite(value)


def is_positive_int(value: Any) -> bool:
    """Check that a value is a strictly positive integer (booleans excluded)."""
    return (
        isinstance(value, numbers.Integral)
        and not isinstance(value, bool)
        and value > 0
    )


def validate_population_size(value: int) -> int:
    """
    Validate population size is within acceptable limits.

    Args:
        value: Population size to validate

    Returns:
        Validated population size

    Raises:
        ValueError: If population size is invalid
    """
    if not is_positive_int(value):
        raise ValueError("Population size must be a positive integer")
    if value > settings.max_population_size:
        raise ValueError(f"Population size cannot exceed {settings.max_population_size}")
    return value


def validate_number_of_generations(value: int) -> int:
    """
    Validate the number of Wright-Fisher steps to run.

    Zero generations is allowed and leaves the initial population untouched.

    Raises:
        ValueError: If the number of generations is invalid
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
        raise ValueError("Number of generations must be a non-negative integer")
    if value > settings.max_generations:
        raise ValueError(f"Number of generations cannot exceed {settings.max_generations}")
    return value


def validate_genotype_length(value: int) -> int:
    """Validate the number of loci in a generated genotype."""
    if not is_positive_int(value):
        raise ValueError("Genotype length must be a positive integer")
    return value


def validate_transposon_count(value: int) -> int:
    """Validate the number of transposons seeded into a generated genotype."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
        raise ValueError("Transposon count must be a non-negative integer")
    return value


def validate_transposition_rate(value: float) -> float:
    """
    Validate a per-generation transposition probability.

    Rates of 1.0 or above make the transposon jump every generation.

    Raises:
        ValueError: If the rate is not a number or is negative
    """
    if not is_real(value):
        raise ValueError("Transposition rate must be a real number")
    if not is_finite_real(value):
        raise ValueError("Transposition rate must be finite")
    if value < 0.0:
        raise ValueError("Transposition rate cannot be negative")
    if value > 1.0:
        import warnings
        warnings.warn(
            f"Transposition rate {value} exceeds 1.0 and is treated as certain transposition",
            UserWarning
        )
    return value


def validate_recombination_rate(value: float) -> float:
    """Validate the stored recombination rate scalar."""
    if not is_real(value):
        raise ValueError("Recombination rate must be a real number")
    if not is_finite_real(value):
        raise ValueError("Recombination rate must be finite")
    if value < 0.0:
        raise ValueError("Recombination rate cannot be negative")
    return value
