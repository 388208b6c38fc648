"""Monte Carlo fitness evaluation of keyboard layouts."""

from gesture_fitness.fitness.monte_carlo import (
    evaluate_fitness,
    monte_carlo_efficiency,
    parallel_fitness,
)
from gesture_fitness.fitness.result import FitnessResult

__all__ = ["FitnessResult", "evaluate_fitness", "monte_carlo_efficiency", "parallel_fitness"]
