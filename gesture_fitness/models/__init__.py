"""Input models: synthetic swipe traces and trace-to-word distances."""

from typing import Optional

import numpy as np

from gesture_fitness.config import Config
from gesture_fitness.errors import InvalidInputError
from gesture_fitness.models.base import InputModel
from gesture_fitness.models.features import FeatureEncoder
from gesture_fitness.models.interpolation_model import SimpleInterpolationModel
from gesture_fitness.models.network import DistanceNetwork, load_network, save_network
from gesture_fitness.models.neural_network_model import NeuralNetworkModel


def build_model(
    config: Config,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> InputModel:
    """Construct the input model variant named by ``config.model_type``."""
    if config.model_type == "interpolation":
        return SimpleInterpolationModel(config, rng=rng, seed=seed)
    if config.model_type == "neural_network":
        return NeuralNetworkModel.from_config(config, rng=rng, seed=seed)
    raise InvalidInputError(f"Unknown model type '{config.model_type}'")


__all__ = [
    "InputModel",
    "SimpleInterpolationModel",
    "NeuralNetworkModel",
    "FeatureEncoder",
    "DistanceNetwork",
    "build_model",
    "load_network",
    "save_network",
]
