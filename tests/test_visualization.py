"""Tests for interpolation plots."""

import os
import tempfile

import matplotlib

matplotlib.use("Agg")

from gesture_fitness.evaluation import visualize_interpolation  # noqa: E402
from gesture_fitness.keyboard import Keyboard  # noqa: E402
from gesture_fitness.models import SimpleInterpolationModel  # noqa: E402


def test_saves_figure():
    keyboard = Keyboard.qwerty()
    waypoints = SimpleInterpolationModel().waypoints("gesture", keyboard)

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "paths.png")
        visualize_interpolation(
            waypoints,
            methods=["spatial", "hermite", "bezier_sloppy"],
            n_steps=30,
            keyboard=keyboard,
            save_path=path,
        )
        assert os.path.getsize(path) > 0
