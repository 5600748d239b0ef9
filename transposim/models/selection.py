"""
Fitness-weighted ancestor selection for the Wright-Fisher model.
"""

import logging
import warnings
from typing import List, Sequence

import numpy as np

from .errors import DegenerateWeightsWarning, ValidationError

logger = logging.getLogger(__name__)


def selection_probabilities(weights: Sequence[float]) -> np.ndarray:
    """
    Turn fitness values into ancestor selection probabilities.

    Negative fitness is treated as zero: such bacteria leave no offspring.
    When no bacterium has positive fitness, every bacterium is equally likely
    to be drawn and a DegenerateWeightsWarning is emitted.

    Args:
        weights: Fitness of each bacterium in population order

    Returns:
        Probability vector summing to 1
    """
    weights = np.asarray(weights, dtype=float)
    if weights.ndim != 1 or weights.size == 0:
        raise ValidationError("Ancestor weights must be a non-empty one-dimensional sequence")
    if not np.all(np.isfinite(weights)):
        raise ValidationError("Ancestor weights must be finite")

    clipped = np.clip(weights, 0.0, None)
    total = clipped.sum()
    if total <= 0:
        message = (f"All {weights.size} bacteria have non-positive fitness; "
                   "sampling ancestors uniformly")
        logger.warning(message)
        warnings.warn(message, DegenerateWeightsWarning, stacklevel=3)
        return np.full(weights.size, 1.0 / weights.size)
    return clipped / total


def sample_ancestors(
    weights: Sequence[float],
    size: int,
    rng: np.random.Generator
) -> List[int]:
    """
    Draw ancestor indices with replacement, proportional to fitness.

    Args:
        weights: Fitness of each bacterium in population order
        size: Number of offspring to draw ancestors for
        rng: Random generator

    Returns:
        Ancestor indices in draw order
    """
    probabilities = selection_probabilities(weights)
    draws = rng.choice(probabilities.size, size=size, replace=True, p=probabilities)
    return [int(index) for index in draws]
