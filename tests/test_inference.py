"""Tests for loading distance networks and scoring traces with them."""

import os
import tempfile

import pytest
import torch

from gesture_fitness.config import Config
from gesture_fitness.errors import InvalidInputError
from gesture_fitness.keyboard import Keyboard
from gesture_fitness.models import NeuralNetworkModel, build_model, load_network, save_network
from gesture_fitness.models.network import DistanceNetwork


def _create_dummy_network(path: str, vector_length: int = 10, loop: bool = False) -> Config:
    """Create a minimal network artifact for testing."""
    config = Config()
    config.vector_length = vector_length
    config.loop = loop
    config.hidden_dims = (8,)

    network = DistanceNetwork(vector_length * (3 if loop else 2), config.hidden_dims)
    save_network(path, network, config, epoch=0)
    return config


@pytest.fixture
def network_path():
    with tempfile.NamedTemporaryFile(suffix=".pt", delete=False) as f:
        path = f.name
    try:
        yield path
    finally:
        os.unlink(path)


def test_load_network(network_path):
    _create_dummy_network(network_path)
    network, config = load_network(network_path, device="cpu")

    assert not network.training
    assert network.input_dim == 20
    assert network.hidden_dims == (8,)
    assert config.vector_length == 10


def test_load_network_without_config(network_path):
    save_network(network_path, DistanceNetwork(4, (2,)))
    network, config = load_network(network_path, device="cpu")
    assert config is None
    assert network.input_dim == 4


def test_missing_artifact():
    with pytest.raises(FileNotFoundError):
        NeuralNetworkModel("/nonexistent/distance.pt", device="cpu")


def test_malformed_artifact(network_path):
    with open(network_path, "wb") as f:
        f.write(b"definitely not a torch checkpoint")
    with pytest.raises(InvalidInputError, match="Malformed"):
        NeuralNetworkModel(network_path, vector_length=10, device="cpu")


def test_artifact_missing_weights(network_path):
    torch.save({"epoch": 0}, network_path)
    with pytest.raises(InvalidInputError):
        load_network(network_path, device="cpu")


def test_input_dim_mismatch(network_path):
    _create_dummy_network(network_path, vector_length=10, loop=False)
    with pytest.raises(InvalidInputError, match="expects 20 inputs"):
        NeuralNetworkModel(network_path, vector_length=10, loop=True, device="cpu")


def test_distance(network_path):
    _create_dummy_network(network_path)
    model = NeuralNetworkModel(network_path, vector_length=10, seed=0, device="cpu")
    keyboard = Keyboard.qwerty()

    assert model.device == torch.device("cpu")
    trace = model.random_vector("hello", keyboard)
    assert len(trace) == 10

    distance = model.distance(trace, "hello", keyboard)
    assert isinstance(distance, float)
    assert distance >= 0.0
    assert 0.0 < model.marginal_probability(trace, "hello", keyboard) <= 1.0


def test_create_inputs(network_path):
    _create_dummy_network(network_path, loop=True)
    model = NeuralNetworkModel(network_path, vector_length=10, loop=True, seed=0, device="cpu")
    keyboard = Keyboard.qwerty()

    ideal = model.ideal_vector("hi", keyboard)
    inputs = model.create_inputs(ideal, model.random_vector("hi", keyboard))
    assert inputs.shape == (30,)


def test_build_from_config(network_path):
    config = _create_dummy_network(network_path)
    config.model_type = "neural_network"
    config.network_path = network_path
    config.device = "cpu"

    model = build_model(config, seed=0)
    assert isinstance(model, NeuralNetworkModel)
    assert model.encoder.vector_length == 10
