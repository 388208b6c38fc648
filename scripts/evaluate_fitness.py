#!/usr/bin/env python3
"""CLI script for estimating the swipe-typing fitness of the QWERTY layout."""

import argparse
import logging
import sys

from gesture_fitness.config import Config
from gesture_fitness.errors import GestureFitnessError
from gesture_fitness.fitness import parallel_fitness
from gesture_fitness.interpolation import INTERPOLATORS
from gesture_fitness.keyboard import Keyboard, WordList


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Monte Carlo fitness of a keyboard layout for swipe typing"
    )

    vocab = parser.add_mutually_exclusive_group(required=True)
    vocab.add_argument(
        "--words",
        type=str,
        help='Comma-separated vocabulary, e.g. "the,and,hello"',
    )
    vocab.add_argument(
        "--vocabulary",
        type=str,
        help="Path to a text file with one word per line",
    )

    parser.add_argument("--iterations", type=int, default=1000)
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--interpolation",
        type=str,
        default="spatial",
        choices=sorted(INTERPOLATORS),
    )
    parser.add_argument("--vector-length", type=int, default=50)
    parser.add_argument("--fixed-length", action="store_true")
    parser.add_argument(
        "--network",
        type=str,
        default=None,
        help="Distance network artifact; selects the neural network model",
    )
    parser.add_argument("--loop", action="store_true", help="Network uses turning-angle features")
    parser.add_argument(
        "--device",
        type=str,
        default=None,
        help="Device (cuda/cpu/mps). Auto-detected if omitted.",
    )

    return parser.parse_args()


def read_vocabulary(path: str) -> list:
    with open(path, encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    args = parse_args()

    config = Config()
    config.interpolation = args.interpolation
    config.vector_length = args.vector_length
    config.fixed_length = args.fixed_length
    config.iterations = args.iterations
    config.num_workers = args.workers
    config.seed = args.seed
    config.device = args.device
    if args.network:
        config.model_type = "neural_network"
        config.network_path = args.network
        config.loop = args.loop

    try:
        config.validate()
        words = args.words.split(",") if args.words else read_vocabulary(args.vocabulary)
        vocabulary = WordList([w.strip() for w in words if w.strip()])
        keyboard = Keyboard.from_config(config)
        result = parallel_fitness(keyboard, vocabulary, config)
    except (GestureFitnessError, OSError) as exc:
        logging.error("%s", exc)
        sys.exit(1)

    logging.info(
        "%s model, %s paths: fitness %.4f +/- %.4f (%d trials, %d words)",
        config.model_type,
        config.interpolation,
        result.fitness,
        result.error,
        result.iterations,
        vocabulary.words(),
    )
    print(f"{result.fitness:.4f} +/- {result.error:.4f}")


if __name__ == "__main__":
    main()
