"""Fixed-length feature encoding of a (candidate path, observed trace) pair."""

import math
from dataclasses import dataclass

import numpy as np

from gesture_fitness.interpolation import spatial_interpolation
from gesture_fitness.trajectory import InputVector


@dataclass
class FeatureEncoder:
    """
    Encode two traces as the offsets between their resampled samples.

    Both traces are resampled to ``vector_length`` points at equal arc-length
    steps and the per-sample offsets ``v2 - v1`` are post-processed:

    * ``correlation``: if non-zero, the offsets are decorrelated along the
      path, ``e[i] = d[i] - correlation * d[i - 1]``.
    * ``maxdistance``: if positive, offset magnitudes are capped at it.
    * ``maxsigmas``: if positive, each axis is clipped to
      ``mean +/- maxsigmas * std`` of its offsets.
    * ``xscale`` / ``yscale``: multiply the x and y offsets.

    The result is laid out as ``(x0, y0, x1, y1, ...)``. With ``loop`` the
    wrapped differences of the turning angles (divided by pi) follow, one
    per sample, which lets a network see loops that the offsets miss.
    """

    vector_length: int = 50
    xscale: float = 0.5
    yscale: float = 0.5
    correlation: float = 0.0
    maxdistance: float = 0.0
    maxsigmas: float = 0.0
    loop: bool = False

    @classmethod
    def from_config(cls, config) -> "FeatureEncoder":
        return cls(
            vector_length=config.vector_length,
            xscale=config.xscale,
            yscale=config.yscale,
            correlation=config.correlation,
            maxdistance=config.maxdistance,
            maxsigmas=config.maxsigmas,
            loop=config.loop,
        )

    @property
    def input_dim(self) -> int:
        return self.vector_length * (3 if self.loop else 2)

    def encode(self, vector1: InputVector, vector2: InputVector) -> np.ndarray:
        """
        Args:
            vector1: Candidate (ideal) path.
            vector2: Observed trace.

        Returns:
            (input_dim,) float32 feature vector.
        """
        path1 = spatial_interpolation(vector1, self.vector_length)
        path2 = spatial_interpolation(vector2, self.vector_length)
        offsets = path2.to_array()[:, :2] - path1.to_array()[:, :2]

        if self.correlation != 0.0:
            offsets[1:] = offsets[1:] - self.correlation * offsets[:-1].copy()

        if self.maxdistance > 0.0:
            norms = np.sqrt((offsets**2).sum(axis=1, keepdims=True))
            factor = np.minimum(1.0, self.maxdistance / np.maximum(norms, 1e-12))
            offsets = offsets * factor

        if self.maxsigmas > 0.0:
            mean = offsets.mean(axis=0)
            spread = self.maxsigmas * offsets.std(axis=0)
            offsets = np.clip(offsets, mean - spread, mean + spread)

        offsets[:, 0] *= self.xscale
        offsets[:, 1] *= self.yscale
        features = offsets.reshape(-1)

        if self.loop:
            turns = np.array(
                [path2.delta_phi(i) - path1.delta_phi(i) for i in range(self.vector_length)]
            )
            # Wrap into [-pi, pi)
            turns = (turns + math.pi) % (2.0 * math.pi) - math.pi
            features = np.concatenate([features, turns / math.pi])

        return features.astype(np.float32)
