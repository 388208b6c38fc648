"""Training manager for the distance network with logging, checkpointing, and early stopping."""

import logging
import os
from datetime import datetime
from typing import Dict

import numpy as np
import torch
import torch.nn.functional as F
from torch.optim.lr_scheduler import ReduceLROnPlateau
from torch.utils.data import DataLoader
from torch.utils.tensorboard import SummaryWriter

from gesture_fitness.config import Config
from gesture_fitness.models.network import DistanceNetwork, save_network

logger = logging.getLogger(__name__)


class DistanceTrainer:
    """Fits a DistanceNetwork to labelled swipe pairs (target 0 = same word)."""

    def __init__(
        self,
        network: DistanceNetwork,
        config: Config,
        device: torch.device,
        log_dir: str = "runs",
    ):
        self.network = network.to(device)
        self.config = config
        self.device = device

        self.optimizer = torch.optim.Adam(network.parameters(), lr=config.learning_rate)
        self.scheduler = ReduceLROnPlateau(
            self.optimizer,
            mode="min",
            factor=config.lr_factor,
            patience=config.lr_patience,
            min_lr=config.min_lr,
        )

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.writer = SummaryWriter(os.path.join(log_dir, f"distance_network_{timestamp}"))

        self.best_loss = float("inf")
        self.patience_counter = 0
        self.epoch = 0

    def train_step(self, batch: Dict[str, torch.Tensor]) -> Dict[str, float]:
        """Single optimisation step."""
        self.optimizer.zero_grad()

        features = batch["features"].to(self.device)
        targets = batch["target"].to(self.device)

        distances = self.network(features)
        loss = F.mse_loss(distances, targets)
        loss.backward()
        self.optimizer.step()

        # A pair is classified correctly when its distance falls on the
        # target's side of 0.5
        correct = ((distances > 0.5).float() == targets).float().mean()

        return {"loss": loss.item(), "accuracy": correct.item()}

    def train_epoch(self, dataloader: DataLoader) -> Dict[str, float]:
        """Train for one epoch."""
        self.network.train()

        epoch_metrics: Dict[str, list] = {"loss": [], "accuracy": []}
        for batch in dataloader:
            for k, v in self.train_step(batch).items():
                epoch_metrics[k].append(v)

        return {k: float(np.mean(v)) for k, v in epoch_metrics.items() if v}

    def log_metrics(self, metrics: Dict[str, float], step: int) -> None:
        """Log metrics to TensorBoard."""
        for name, value in metrics.items():
            self.writer.add_scalar(f"train/{name}", value, step)
        self.writer.add_scalar("train/lr", self.optimizer.param_groups[0]["lr"], step)

    def save_checkpoint(self, path: str, is_best: bool = False) -> None:
        """Save the network in the artifact format NeuralNetworkModel loads."""
        save_network(path, self.network, self.config, epoch=self.epoch)

        if is_best:
            best_path = path.replace(".pt", "_best.pt")
            save_network(best_path, self.network, self.config, epoch=self.epoch)

    def train(
        self,
        dataloader: DataLoader,
        num_epochs: int,
        checkpoint_dir: str = "checkpoints",
    ) -> str:
        """
        Full training loop with early stopping.

        Returns:
            Path of the best network artifact.
        """
        os.makedirs(checkpoint_dir, exist_ok=True)
        checkpoint_path = os.path.join(checkpoint_dir, "distance_network.pt")

        logger.info("Starting training for %d epochs on %s", num_epochs, self.device)
        logger.info(
            "Batch size: %d, Dataset size: %d",
            self.config.batch_size,
            len(dataloader.dataset),
        )

        for epoch in range(self.epoch, num_epochs):
            self.epoch = epoch

            metrics = self.train_epoch(dataloader)
            self.log_metrics(metrics, epoch)
            self.scheduler.step(metrics["loss"])

            if metrics["loss"] < self.best_loss:
                self.best_loss = metrics["loss"]
                self.patience_counter = 0
                self.save_checkpoint(checkpoint_path, is_best=True)
            else:
                self.patience_counter += 1

            logger.info(
                "Epoch %d/%d | Loss: %.4f | Accuracy: %.3f",
                epoch,
                num_epochs,
                metrics["loss"],
                metrics["accuracy"],
            )

            if self.patience_counter >= self.config.patience:
                logger.info("Early stopping at epoch %d", epoch)
                break

        self.writer.close()
        logger.info("Training complete, best loss %.4f", self.best_loss)
        return checkpoint_path.replace(".pt", "_best.pt")
