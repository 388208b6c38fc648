"""Common interface of the swipe input models."""

import math
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from gesture_fitness.keyboard import Keyboard
from gesture_fitness.trajectory import InputVector


class InputModel(ABC):
    """
    A model of how people swipe words.

    A model synthesizes noisy traces for a word (``random_vector``) and
    scores how far an observed trace is from a candidate word
    (``distance``). Every instance owns its random generator; pass ``rng``
    (or ``seed``) to control the stream, e.g. one
    ``numpy.random.SeedSequence.spawn`` child per worker.
    """

    #: True when every trace from ``random_vector`` has the same length
    fixed_length: bool = False

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @abstractmethod
    def random_vector(self, word: str, keyboard: Keyboard) -> InputVector:
        """Synthesize a noisy trace for ``word``."""

    @abstractmethod
    def distance(self, vector: InputVector, word: str, keyboard: Keyboard) -> float:
        """Non-negative dissimilarity between ``vector`` and the path of ``word``."""

    def marginal_probability(self, vector: InputVector, word: str, keyboard: Keyboard) -> float:
        """Matching score of ``word``, decreasing with its distance to ``vector``."""
        return math.exp(-self.distance(vector, word, keyboard))

    def log_marginal_probability(
        self, vector: InputVector, word: str, keyboard: Keyboard
    ) -> float:
        """Natural log of ``marginal_probability``; ordered the same but never underflows."""
        return -self.distance(vector, word, keyboard)
