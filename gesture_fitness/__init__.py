"""
Gesture Fitness - Monte Carlo scoring of keyboard layouts for swipe typing.

Synthesizes noisy swipe traces for words on a virtual keyboard and measures
how often an input model recovers the intended word.
"""

from gesture_fitness.config import Config
from gesture_fitness.fitness import FitnessResult, monte_carlo_efficiency, parallel_fitness
from gesture_fitness.keyboard import Keyboard, WordList
from gesture_fitness.models import NeuralNetworkModel, SimpleInterpolationModel, build_model
from gesture_fitness.trajectory import InputVector

__version__ = "0.1.0"
__all__ = [
    "Config",
    "InputVector",
    "Keyboard",
    "WordList",
    "SimpleInterpolationModel",
    "NeuralNetworkModel",
    "build_model",
    "FitnessResult",
    "monte_carlo_efficiency",
    "parallel_fitness",
]
