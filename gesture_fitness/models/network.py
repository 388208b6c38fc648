"""Feed-forward distance network and its checkpoint format."""

import logging
import os
from typing import Optional, Sequence, Tuple

import torch
import torch.nn as nn

from gesture_fitness.config import Config
from gesture_fitness.errors import InvalidInputError

logger = logging.getLogger(__name__)


class DistanceNetwork(nn.Module):
    """
    MLP mapping an encoded trace pair to a non-negative distance.

    The softplus head keeps the output non-negative, so the network can be
    used directly as an input model distance.
    """

    def __init__(self, input_dim: int, hidden_dims: Sequence[int] = (64, 32)):
        super().__init__()
        self.input_dim = input_dim
        self.hidden_dims = tuple(hidden_dims)

        layers = []
        previous = input_dim
        for width in self.hidden_dims:
            layers.append(nn.Linear(previous, width))
            layers.append(nn.LeakyReLU(0.2))
            previous = width
        layers.append(nn.Linear(previous, 1))
        layers.append(nn.Softplus())
        self.layers = nn.Sequential(*layers)

    def forward(self, features: torch.Tensor) -> torch.Tensor:
        """
        Args:
            features: (batch, input_dim) encoded trace pairs.

        Returns:
            distances: (batch,) non-negative distances.
        """
        return self.layers(features).squeeze(-1)


def resolve_device(device: Optional[str] = None) -> torch.device:
    """Pick ``device`` or auto-detect cuda, then mps, then cpu."""
    if device is None:
        if torch.cuda.is_available():
            device = "cuda"
        elif hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
            device = "mps"
        else:
            device = "cpu"
    return torch.device(device)


def save_network(
    path: str,
    network: DistanceNetwork,
    config: Optional[Config] = None,
    epoch: int = -1,
) -> None:
    """Write ``network`` in the checkpoint format read by ``load_network``."""
    checkpoint = {
        "epoch": epoch,
        "input_dim": network.input_dim,
        "hidden_dims": network.hidden_dims,
        "network_state_dict": network.state_dict(),
        "config": config,
    }
    torch.save(checkpoint, path)


def load_network(
    path: str,
    device: Optional[str] = None,
) -> Tuple[DistanceNetwork, Optional[Config]]:
    """
    Load a DistanceNetwork checkpoint for inference.

    Args:
        path: Path to a .pt checkpoint written by ``save_network``.
        device: Device string ('cuda', 'cpu', 'mps'). Auto-detected if None.

    Returns:
        The network in eval mode and the config stored with it (if any).

    Raises:
        FileNotFoundError: ``path`` does not exist.
        InvalidInputError: the file is not a readable distance network.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Network artifact does not exist: {path}")

    torch_device = resolve_device(device)
    try:
        checkpoint = torch.load(path, map_location=torch_device, weights_only=False)
        network = DistanceNetwork(checkpoint["input_dim"], checkpoint["hidden_dims"])
        network.load_state_dict(checkpoint["network_state_dict"])
    except Exception as exc:
        # torch.load reports unpickling failures with assorted exception types
        raise InvalidInputError(f"Malformed network artifact {path}: {exc}") from exc

    config = checkpoint.get("config")
    if config is None:
        logger.warning("No config in network artifact %s", path)

    network.to(torch_device)
    network.eval()
    logger.info(
        "Loaded distance network from %s (epoch %d, input_dim=%d, device=%s)",
        path,
        checkpoint.get("epoch", -1),
        network.input_dim,
        torch_device,
    )
    return network, config
