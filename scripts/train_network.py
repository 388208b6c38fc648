"""Training entry point for the swipe distance network."""

import argparse
import logging

from torch.utils.data import DataLoader

from gesture_fitness.config import Config
from gesture_fitness.data import SwipePairDataset
from gesture_fitness.keyboard import Keyboard, WordList
from gesture_fitness.models import FeatureEncoder, SimpleInterpolationModel
from gesture_fitness.models.network import DistanceNetwork, resolve_device
from gesture_fitness.training import DistanceTrainer


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Train the distance network used by the neural network input model."
    )
    parser.add_argument(
        "--vocabulary", type=str, required=True,
        help="Path to a text file with one word per line.",
    )
    parser.add_argument("--epochs", type=int, default=50)
    parser.add_argument("--batch-size", type=int, default=64)
    parser.add_argument("--lr", type=float, default=1e-3)
    parser.add_argument("--steps-per-epoch", type=int, default=20)
    parser.add_argument("--interpolation", type=str, default="spatial")
    parser.add_argument("--vector-length", type=int, default=50)
    parser.add_argument("--loop", action="store_true")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--checkpoint-dir", type=str, default="checkpoints",
    )
    parser.add_argument("--log-dir", type=str, default="runs")
    parser.add_argument(
        "--device", type=str, default=None,
        help="Device (cuda/cpu/mps). Auto-detected if omitted.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = Config()
    config.batch_size = args.batch_size
    config.learning_rate = args.lr
    config.epochs = args.epochs
    config.steps_per_epoch = args.steps_per_epoch
    config.interpolation = args.interpolation
    config.vector_length = args.vector_length
    config.loop = args.loop
    config.seed = args.seed
    config.validate()

    device = resolve_device(args.device)

    with open(args.vocabulary, encoding="utf-8") as f:
        vocabulary = WordList([line.strip() for line in f if line.strip()])
    keyboard = Keyboard.from_config(config)
    model = SimpleInterpolationModel(config, seed=config.seed)
    encoder = FeatureEncoder.from_config(config)

    dataset = SwipePairDataset(
        model,
        keyboard,
        vocabulary,
        encoder,
        size=config.batch_size * config.steps_per_epoch,
        match_fraction=config.match_fraction,
    )
    dataloader = DataLoader(dataset, batch_size=config.batch_size, shuffle=True)

    network = DistanceNetwork(encoder.input_dim, config.hidden_dims)
    trainer = DistanceTrainer(network, config, device, args.log_dir)
    best_path = trainer.train(dataloader, config.epochs, args.checkpoint_dir)

    logging.info("Best network written to %s", best_path)


if __name__ == "__main__":
    main()
