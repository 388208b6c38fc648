"""Training utilities for the distance network."""

from gesture_fitness.training.trainer import DistanceTrainer

__all__ = ["DistanceTrainer"]
