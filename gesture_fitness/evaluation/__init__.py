"""Visualization of interpolated swipe paths."""

from gesture_fitness.evaluation.visualization import visualize_interpolation

__all__ = ["visualize_interpolation"]
