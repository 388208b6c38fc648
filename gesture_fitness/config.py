"""Hyperparameters and configuration for gesture typing fitness evaluation."""

from dataclasses import dataclass
from typing import Optional, Tuple

from gesture_fitness.errors import InvalidInputError

MODEL_TYPES = ("interpolation", "neural_network")


@dataclass
class Config:
    """Hyperparameters and configuration."""

    # Keyboard geometry (key-width units)
    rows: Tuple[str, ...] = ("qwertyuiop", "asdfghjkl", "zxcvbnm")
    row_offsets: Tuple[float, ...] = (0.0, 0.25, 0.75)
    key_width: float = 1.0
    key_height: float = 1.0

    # Ideal path
    interpolation: str = "spatial"
    key_interval: float = 0.1  # seconds between consecutive key centres
    vector_length: int = 50
    fixed_length: bool = False

    # Noise
    key_offset_std: float = 0.25
    point_jitter_std: float = 0.05
    sigma: float = 0.5

    # Model selection
    model_type: str = "interpolation"
    network_path: Optional[str] = None

    # Network features
    xscale: float = 0.5
    yscale: float = 0.5
    correlation: float = 0.0
    maxdistance: float = 0.0
    maxsigmas: float = 0.0
    loop: bool = False

    # Network architecture
    hidden_dims: Tuple[int, ...] = (64, 32)

    # Training
    batch_size: int = 64
    learning_rate: float = 1e-3
    epochs: int = 50
    steps_per_epoch: int = 20
    match_fraction: float = 0.5
    patience: int = 10
    lr_patience: int = 5
    lr_factor: float = 0.5
    min_lr: float = 1e-6

    # Evaluation
    iterations: int = 1000
    num_workers: int = 1
    seed: Optional[int] = None
    device: Optional[str] = None

    def validate(self) -> None:
        """Raise InvalidInputError if any setting cannot be used."""
        from gesture_fitness.interpolation import INTERPOLATORS

        if self.interpolation not in INTERPOLATORS:
            raise InvalidInputError(
                f"Unknown interpolation '{self.interpolation}', "
                f"expected one of {sorted(INTERPOLATORS)}"
            )
        if self.model_type not in MODEL_TYPES:
            raise InvalidInputError(
                f"Unknown model type '{self.model_type}', expected one of {MODEL_TYPES}"
            )
        if self.model_type == "neural_network" and not self.network_path:
            raise InvalidInputError("model_type 'neural_network' requires network_path")
        if self.vector_length < 2:
            raise InvalidInputError(f"vector_length must be >= 2, got {self.vector_length}")
        if len(self.rows) != len(self.row_offsets):
            raise InvalidInputError("rows and row_offsets must have the same length")
        if self.key_width <= 0 or self.key_height <= 0:
            raise InvalidInputError("key dimensions must be positive")
        if self.key_offset_std < 0 or self.point_jitter_std < 0:
            raise InvalidInputError("noise standard deviations must be non-negative")
        if self.sigma <= 0:
            raise InvalidInputError(f"sigma must be positive, got {self.sigma}")
        if self.iterations < 1 or self.num_workers < 1:
            raise InvalidInputError("iterations and num_workers must be >= 1")
