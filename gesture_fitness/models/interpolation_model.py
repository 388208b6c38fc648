"""Input model built purely from interpolated key-centre paths."""

import logging
from typing import Optional

import numpy as np

from gesture_fitness.config import Config
from gesture_fitness.errors import InvalidInputError
from gesture_fitness.interpolation import get_interpolator, spatial_interpolation
from gesture_fitness.keyboard import Keyboard
from gesture_fitness.models.base import InputModel
from gesture_fitness.trajectory import InputVector

logger = logging.getLogger(__name__)


class SimpleInterpolationModel(InputModel):
    """
    Swipes modelled as a noisy version of the ideal key-to-key path.

    The ideal path visits the centre of every key of the word, one key every
    ``config.key_interval`` seconds, and is interpolated with the family
    named by ``config.interpolation``. Synthetic traces perturb the key
    centres with Gaussian offsets (``key_offset_std``) before interpolating
    and then jitter every sample (``point_jitter_std``).

    The distance between two traces is the mean squared offset between
    corresponding samples after resampling both to ``vector_length``
    points, divided by ``2 * sigma**2``, so ``marginal_probability`` is a
    Gaussian likelihood.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        super().__init__(rng=rng, seed=seed)
        self.config = config if config is not None else Config()
        self.interpolate = get_interpolator(self.config.interpolation)
        self.fixed_length = self.config.fixed_length
        logger.debug(
            "%s: %s paths of %d samples",
            type(self).__name__,
            self.config.interpolation,
            self.config.vector_length,
        )

    @property
    def vector_length(self) -> int:
        return self.config.vector_length

    def waypoints(self, word: str, keyboard: Keyboard) -> InputVector:
        """Key centres of ``word``, one per character."""
        if not word:
            raise InvalidInputError("Cannot build a path for an empty word")

        iv = InputVector()
        for i, char in enumerate(word):
            if not keyboard.has_key(char):
                raise InvalidInputError(f"Character {char!r} of {word!r} is not on the keyboard")
            x, y = keyboard.key_center(char)
            iv.add_point(x, y, i * self.config.key_interval)
        return iv

    def ideal_vector(self, word: str, keyboard: Keyboard) -> InputVector:
        return self.interpolate(self.waypoints(word, keyboard), self.vector_length)

    def random_vector(self, word: str, keyboard: Keyboard) -> InputVector:
        waypoints = self.waypoints(word, keyboard)

        noisy = InputVector()
        offsets = self.rng.normal(0.0, self.config.key_offset_std, size=(len(waypoints), 2))
        for i in range(len(waypoints)):
            noisy.add_point(
                waypoints.x(i) + offsets[i, 0],
                waypoints.y(i) + offsets[i, 1],
                waypoints.t(i),
            )

        path = self.interpolate(noisy, self.vector_length)
        jitter = self.rng.normal(0.0, self.config.point_jitter_std, size=(len(path), 2))
        vector = InputVector()
        for i in range(len(path)):
            vector.add_point(path.x(i) + jitter[i, 0], path.y(i) + jitter[i, 1], path.t(i))

        if self.fixed_length and len(vector) != self.vector_length:
            vector = spatial_interpolation(vector, self.vector_length)
        return vector

    def vector_distance(self, vector1: InputVector, vector2: InputVector) -> float:
        a = spatial_interpolation(vector1, self.vector_length).to_array()
        b = spatial_interpolation(vector2, self.vector_length).to_array()
        squared = np.sum((a[:, :2] - b[:, :2]) ** 2, axis=1)
        return float(squared.mean() / (2.0 * self.config.sigma**2))

    def distance(self, vector: InputVector, word: str, keyboard: Keyboard) -> float:
        return self.vector_distance(self.ideal_vector(word, keyboard), vector)
