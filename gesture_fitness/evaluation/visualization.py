"""Visualization utilities for interpolated swipe paths."""

from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from gesture_fitness.interpolation import get_interpolator
from gesture_fitness.keyboard import Keyboard
from gesture_fitness.trajectory import InputVector


def visualize_interpolation(
    waypoints: InputVector,
    methods: Sequence[str] = ("spatial", "hermite", "mod_cubic_spline", "bezier"),
    n_steps: int = 50,
    keyboard: Optional[Keyboard] = None,
    save_path: Optional[str] = None,
) -> None:
    """
    Plot the paths several interpolation families draw through the same waypoints.

    Args:
        waypoints: Key-centre waypoints.
        methods: Names from ``gesture_fitness.interpolation.INTERPOLATORS``.
        n_steps: Samples per interpolated path.
        keyboard: If provided, key outlines are drawn underneath.
        save_path: If provided, saves the figure to this path.
    """
    fig, ax = plt.subplots(figsize=(10, 4))

    if keyboard is not None:
        for key in keyboard.keys:
            ax.add_patch(
                plt.Rectangle(
                    (key.x, key.y), key.width, key.height, fill=False, color="0.8", linewidth=0.8
                )
            )
            cx, cy = key.center
            ax.text(cx, cy, key.char, ha="center", va="center", color="0.6", fontsize=8)

    colors = plt.cm.viridis(np.linspace(0, 1, len(methods)))
    for color, name in zip(colors, methods):
        path = get_interpolator(name)(waypoints, n_steps).to_array()
        ax.plot(path[:, 0], path[:, 1], "-", color=color, linewidth=1.5, alpha=0.8, label=name)

    points = waypoints.to_array()
    ax.scatter(points[:, 0], points[:, 1], c="red", s=40, marker="o", label="Waypoints", zorder=5)

    ax.legend()
    ax.set_title("Interpolated Swipe Paths")
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_aspect("equal")
    ax.invert_yaxis()

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches="tight")
    else:
        plt.show()

    plt.close(fig)
