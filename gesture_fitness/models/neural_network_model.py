"""Input model whose distance comes from a pre-trained neural network."""

import dataclasses
from typing import Optional

import numpy as np
import torch

from gesture_fitness.config import Config
from gesture_fitness.errors import InvalidInputError
from gesture_fitness.models.features import FeatureEncoder
from gesture_fitness.models.interpolation_model import SimpleInterpolationModel
from gesture_fitness.models.network import load_network
from gesture_fitness.trajectory import InputVector


class NeuralNetworkModel(SimpleInterpolationModel):
    """
    Interpolation model that scores trace pairs with a trained network.

    Traces are synthesized exactly as in SimpleInterpolationModel. The
    distance between the ideal path of a candidate word and an observed
    trace is the output of a DistanceNetwork fed with the pair's
    FeatureEncoder encoding.

    The network is loaded once at construction and only used for inference
    afterwards, so one instance may be shared by threads. Worker processes
    load their own copy.

    Example::

        model = NeuralNetworkModel("distance.pt", vector_length=50, loop=True)
        score = model.marginal_probability(trace, "hello", keyboard)
    """

    def __init__(
        self,
        filename: str,
        vector_length: int = 50,
        xscale: float = 0.5,
        yscale: float = 0.5,
        correlation: float = 0.0,
        maxdistance: float = 0.0,
        maxsigmas: float = 0.0,
        loop: bool = False,
        config: Optional[Config] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        device: Optional[str] = None,
    ):
        config = dataclasses.replace(
            config if config is not None else Config(),
            model_type="neural_network",
            network_path=filename,
            vector_length=vector_length,
            xscale=xscale,
            yscale=yscale,
            correlation=correlation,
            maxdistance=maxdistance,
            maxsigmas=maxsigmas,
            loop=loop,
        )
        super().__init__(config=config, rng=rng, seed=seed)

        self.encoder = FeatureEncoder.from_config(config)
        self.network, _ = load_network(filename, device=device or config.device)
        self.device = next(self.network.parameters()).device

        if self.network.input_dim != self.encoder.input_dim:
            raise InvalidInputError(
                f"Network in {filename} expects {self.network.input_dim} inputs, "
                f"features have {self.encoder.input_dim} "
                f"(vector_length={vector_length}, loop={loop})"
            )

    @classmethod
    def from_config(
        cls,
        config: Config,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ) -> "NeuralNetworkModel":
        if not config.network_path:
            raise InvalidInputError("config.network_path is required for a NeuralNetworkModel")
        return cls(
            config.network_path,
            vector_length=config.vector_length,
            xscale=config.xscale,
            yscale=config.yscale,
            correlation=config.correlation,
            maxdistance=config.maxdistance,
            maxsigmas=config.maxsigmas,
            loop=config.loop,
            config=config,
            rng=rng,
            seed=seed,
        )

    def create_inputs(self, vector1: InputVector, vector2: InputVector) -> np.ndarray:
        return self.encoder.encode(vector1, vector2)

    def vector_distance(self, vector1: InputVector, vector2: InputVector) -> float:
        inputs = torch.from_numpy(self.create_inputs(vector1, vector2)).to(self.device)
        with torch.no_grad():
            distance = self.network(inputs.unsqueeze(0))
        return float(distance.item())
