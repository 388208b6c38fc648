"""Monte Carlo estimate of how often a model recognises the swiped word."""

import logging
import math
import multiprocessing
from concurrent.futures import ProcessPoolExecutor
from typing import List, Optional

import numpy as np

from gesture_fitness.config import Config
from gesture_fitness.errors import InvalidInputError, NumericDegenerateError
from gesture_fitness.fitness.result import FitnessResult
from gesture_fitness.keyboard import Keyboard, WordList
from gesture_fitness.models import InputModel, build_model

logger = logging.getLogger(__name__)


def _best_word(model: InputModel, trace, vocabulary: WordList, keyboard: Keyboard) -> str:
    """Arg-max of the marginal probability; the first word wins ties."""
    # Log space: exp(-distance) underflows to 0.0 for distant candidates
    best_word = None
    best_score = -math.inf
    for i in range(vocabulary.words()):
        candidate = vocabulary.word(i)
        score = model.log_marginal_probability(trace, candidate, keyboard)
        if score > best_score:
            best_word = candidate
            best_score = score

    if best_word is None:
        raise NumericDegenerateError("No candidate word received a comparable score")
    return best_word


def _count_matches(
    keyboard: Keyboard,
    model: InputModel,
    vocabulary: WordList,
    iterations: int,
    rng: Optional[np.random.Generator],
) -> int:
    if vocabulary.words() == 0:
        raise InvalidInputError("Cannot evaluate fitness over an empty vocabulary")
    if iterations < 1:
        raise InvalidInputError(f"iterations must be >= 1, got {iterations}")

    rng = rng if rng is not None else model.rng
    matched = 0
    for _ in range(iterations):
        word = vocabulary.random_word(rng)
        trace = model.random_vector(word, keyboard)
        if _best_word(model, trace, vocabulary, keyboard) == word:
            matched += 1
    return matched


def monte_carlo_efficiency(
    keyboard: Keyboard,
    model: InputModel,
    vocabulary: WordList,
    iterations: int,
    rng: Optional[np.random.Generator] = None,
) -> float:
    """
    Fraction of simulated swipes the model decodes to the intended word.

    Each trial draws a word uniformly from ``vocabulary``, synthesizes a
    trace for it with ``model`` and picks the vocabulary word with the
    highest marginal probability. Errors raised by any trial abort the
    whole evaluation.

    Args:
        keyboard: Layout the words are swiped on.
        model: Input model that synthesizes and scores traces.
        vocabulary: Candidate words.
        iterations: Number of trials.
        rng: Generator for drawing words. Defaults to the model's own.

    Returns:
        matched / iterations, in [0, 1].
    """
    matched = _count_matches(keyboard, model, vocabulary, iterations, rng)
    return matched / iterations


def evaluate_fitness(
    keyboard: Keyboard,
    model: InputModel,
    vocabulary: WordList,
    iterations: int,
    rng: Optional[np.random.Generator] = None,
) -> FitnessResult:
    """``monte_carlo_efficiency`` with its binomial standard error."""
    fitness = monte_carlo_efficiency(keyboard, model, vocabulary, iterations, rng)
    error = math.sqrt(fitness * (1.0 - fitness) / iterations)
    return FitnessResult(iterations=iterations, fitness=fitness, error=error)


def _evaluate_batch(
    keyboard: Keyboard,
    vocabulary: WordList,
    config: Config,
    iterations: int,
    seed_sequence: np.random.SeedSequence,
) -> FitnessResult:
    model = build_model(config, rng=np.random.default_rng(seed_sequence))
    return evaluate_fitness(keyboard, model, vocabulary, iterations)


def _split(iterations: int, parts: int) -> List[int]:
    base, remainder = divmod(iterations, parts)
    return [base + (1 if i < remainder else 0) for i in range(parts)]


def parallel_fitness(
    keyboard: Keyboard,
    vocabulary: WordList,
    config: Config,
    iterations: Optional[int] = None,
    num_workers: Optional[int] = None,
    seed: Optional[int] = None,
) -> FitnessResult:
    """
    Run the Monte Carlo evaluation in independent worker processes.

    Every worker builds its own model from ``config`` (loading its own copy
    of any network artifact) with a random stream spawned from ``seed``,
    so a run is reproducible for a fixed seed and worker count. Worker
    results are merged with ``FitnessResult.__add__``.
    """
    iterations = iterations if iterations is not None else config.iterations
    num_workers = num_workers if num_workers is not None else config.num_workers
    seed = seed if seed is not None else config.seed

    if vocabulary.words() == 0:
        raise InvalidInputError("Cannot evaluate fitness over an empty vocabulary")
    if iterations < 1 or num_workers < 1:
        raise InvalidInputError("iterations and num_workers must be >= 1")

    num_workers = min(num_workers, iterations)
    batches = _split(iterations, num_workers)
    seeds = np.random.SeedSequence(seed).spawn(num_workers)

    logger.info(
        "Evaluating %d trials over %d words with %d worker(s)",
        iterations,
        vocabulary.words(),
        num_workers,
    )

    if num_workers == 1:
        result = _evaluate_batch(keyboard, vocabulary, config, batches[0], seeds[0])
    else:
        context = multiprocessing.get_context("spawn")
        with ProcessPoolExecutor(max_workers=num_workers, mp_context=context) as pool:
            futures = [
                pool.submit(_evaluate_batch, keyboard, vocabulary, config, n, s)
                for n, s in zip(batches, seeds)
            ]
            results = [future.result() for future in futures]
        result = sum(results, FitnessResult())

    logger.info(
        "Fitness %.4f (mean batch error %.4f) over %d trials",
        result.fitness,
        result.error,
        result.iterations,
    )
    return result
