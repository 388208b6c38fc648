"""Tests for Config dataclass."""

import pytest

from gesture_fitness.config import Config
from gesture_fitness.errors import InvalidInputError


def test_config_defaults():
    config = Config()
    assert config.rows == ("qwertyuiop", "asdfghjkl", "zxcvbnm")
    assert config.row_offsets == (0.0, 0.25, 0.75)
    assert config.interpolation == "spatial"
    assert config.vector_length == 50
    assert config.fixed_length is False
    assert config.model_type == "interpolation"
    assert config.network_path is None
    assert config.hidden_dims == (64, 32)
    assert config.batch_size == 64
    assert config.learning_rate == 1e-3
    assert config.iterations == 1000
    assert config.num_workers == 1


def test_config_override():
    config = Config()
    config.interpolation = "bezier"
    config.vector_length = 30
    assert config.interpolation == "bezier"
    assert config.vector_length == 30
    config.validate()


def test_defaults_validate():
    Config().validate()


@pytest.mark.parametrize(
    "field, value",
    [
        ("interpolation", "quintic"),
        ("model_type", "hmm"),
        ("vector_length", 1),
        ("key_width", 0.0),
        ("key_offset_std", -0.1),
        ("sigma", 0.0),
        ("iterations", 0),
        ("num_workers", 0),
        ("row_offsets", (0.0, 0.25)),
    ],
)
def test_validate_rejects(field, value):
    config = Config()
    setattr(config, field, value)
    with pytest.raises(InvalidInputError):
        config.validate()


def test_neural_network_requires_path():
    config = Config()
    config.model_type = "neural_network"
    with pytest.raises(InvalidInputError, match="network_path"):
        config.validate()

    config.network_path = "distance.pt"
    config.validate()


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        Config(sigma=-1.0).validate()
