"""Synthetic training data for the distance network."""

from gesture_fitness.data.pairs import SwipePairDataset

__all__ = ["SwipePairDataset"]
