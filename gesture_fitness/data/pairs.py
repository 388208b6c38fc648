"""Dataset of encoded (candidate path, synthetic trace) pairs."""

import logging
from typing import Dict, List

import torch
from torch.utils.data import Dataset

from gesture_fitness.errors import InvalidInputError
from gesture_fitness.keyboard import Keyboard, WordList
from gesture_fitness.models.features import FeatureEncoder
from gesture_fitness.models.interpolation_model import SimpleInterpolationModel
from gesture_fitness.trajectory import InputVector

logger = logging.getLogger(__name__)


class SwipePairDataset(Dataset):
    """
    Encoded trace pairs labelled with their target distance.

    Each sample pairs a synthetic trace of a randomly drawn word with the
    ideal path of either the same word (target 0, with probability
    ``match_fraction``) or a different word (target 1). Samples are drawn
    once at construction from ``model``'s random stream.
    """

    def __init__(
        self,
        model: SimpleInterpolationModel,
        keyboard: Keyboard,
        vocabulary: WordList,
        encoder: FeatureEncoder,
        size: int,
        match_fraction: float = 0.5,
    ):
        if len(set(vocabulary)) < 2:
            raise InvalidInputError("Need at least two distinct words to build mismatched pairs")
        if size < 1:
            raise InvalidInputError(f"size must be >= 1, got {size}")

        self.encoder = encoder
        self.samples: List[Dict[str, torch.Tensor]] = []

        rng = model.rng
        ideal_cache: Dict[str, InputVector] = {}
        matches = 0
        for _ in range(size):
            word = vocabulary.random_word(rng)
            trace = model.random_vector(word, keyboard)

            if rng.random() < match_fraction:
                candidate, target = word, 0.0
                matches += 1
            else:
                candidate = word
                while candidate == word:
                    candidate = vocabulary.random_word(rng)
                target = 1.0

            if candidate not in ideal_cache:
                ideal_cache[candidate] = model.ideal_vector(candidate, keyboard)
            features = encoder.encode(ideal_cache[candidate], trace)

            self.samples.append(
                {
                    "features": torch.from_numpy(features),
                    "target": torch.tensor(target, dtype=torch.float32),
                }
            )

        logger.info(
            "Built %d swipe pairs (%d matching, %d features each)",
            size,
            matches,
            encoder.input_dim,
        )

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, idx: int) -> Dict[str, torch.Tensor]:
        return self.samples[idx]
