"""Tests for Monte Carlo fitness evaluation and FitnessResult merging."""

import math

import numpy as np
import pytest

from gesture_fitness.config import Config
from gesture_fitness.errors import InvalidInputError
from gesture_fitness.fitness import (
    FitnessResult,
    evaluate_fitness,
    monte_carlo_efficiency,
    parallel_fitness,
)
from gesture_fitness.fitness.monte_carlo import _best_word
from gesture_fitness.keyboard import Keyboard, WordList
from gesture_fitness.models import SimpleInterpolationModel


def _make_config() -> Config:
    config = Config()
    config.vector_length = 15
    return config


class TestFitnessResult:
    def test_weighted_merge(self):
        merged = FitnessResult(10, 0.8, 0.05) + FitnessResult(10, 0.6, 0.05)
        assert merged.iterations == 20
        assert merged.fitness == pytest.approx(0.7)
        assert merged.error == pytest.approx(0.05)

    def test_unequal_weights(self):
        merged = FitnessResult(30, 1.0, 0.0) + FitnessResult(10, 0.0, 0.2)
        assert merged.iterations == 40
        assert merged.fitness == pytest.approx(0.75)
        assert merged.error == pytest.approx(0.05)

    def test_merge_is_commutative_and_associative(self):
        a, b, c = FitnessResult(5, 0.2, 0.1), FitnessResult(7, 0.9, 0.03), FitnessResult(2, 0.5, 0.3)
        left = (a + b) + c
        right = a + (b + c)
        assert left.iterations == right.iterations == 14
        assert left.fitness == pytest.approx(right.fitness)
        assert (a + b).fitness == pytest.approx((b + a).fitness)

    def test_sum(self):
        results = [FitnessResult(10, 0.8, 0.05), FitnessResult(10, 0.6, 0.05)]
        assert sum(results).fitness == pytest.approx(0.7)
        assert sum(results, FitnessResult()).iterations == 20

    def test_empty_merge(self):
        assert FitnessResult() + FitnessResult() == FitnessResult()
        assert FitnessResult() + FitnessResult(4, 0.5, 0.1) == FitnessResult(4, 0.5, 0.1)

    def test_error_is_mean_batch_error(self):
        batch = FitnessResult(10, 0.5, 0.1)
        assert sum([batch, batch, batch, batch]).error == pytest.approx(0.1)

    def test_dict_round_trip(self):
        result = FitnessResult(12, 0.25, 0.125)
        assert FitnessResult.from_dict(result.to_dict()) == result


class TestMonteCarloEfficiency:
    def test_in_unit_interval(self):
        model = SimpleInterpolationModel(_make_config(), seed=0)
        vocabulary = WordList(["the", "and", "hello", "world", "this", "that"])
        fitness = monte_carlo_efficiency(Keyboard.qwerty(), model, vocabulary, 30)
        assert 0.0 <= fitness <= 1.0

    def test_single_word_always_matches(self):
        model = SimpleInterpolationModel(_make_config(), seed=0)
        fitness = monte_carlo_efficiency(Keyboard.qwerty(), model, WordList(["hello"]), 10)
        assert fitness == 1.0

    def test_noise_free_distinct_words(self):
        config = _make_config()
        config.key_offset_std = 0.0
        config.point_jitter_std = 0.0
        model = SimpleInterpolationModel(config, seed=0)
        vocabulary = WordList(["qp", "az", "mv", "lk"])
        assert monte_carlo_efficiency(Keyboard.qwerty(), model, vocabulary, 20) == 1.0

    def test_reproducible_with_seed(self):
        vocabulary = WordList(["the", "then", "them", "they", "thee"])
        runs = [
            monte_carlo_efficiency(
                Keyboard.qwerty(),
                SimpleInterpolationModel(_make_config(), seed=11),
                vocabulary,
                25,
            )
            for _ in range(2)
        ]
        assert runs[0] == runs[1]

    def test_explicit_rng(self):
        model = SimpleInterpolationModel(_make_config(), seed=0)
        fitness = monte_carlo_efficiency(
            Keyboard.qwerty(), model, WordList(["up", "down"]), 10, rng=np.random.default_rng(1)
        )
        assert 0.0 <= fitness <= 1.0

    def test_empty_vocabulary(self):
        model = SimpleInterpolationModel(_make_config(), seed=0)
        with pytest.raises(InvalidInputError):
            monte_carlo_efficiency(Keyboard.qwerty(), model, WordList([]), 10)

    def test_zero_iterations(self):
        model = SimpleInterpolationModel(_make_config(), seed=0)
        with pytest.raises(InvalidInputError):
            monte_carlo_efficiency(Keyboard.qwerty(), model, WordList(["hello"]), 0)

    def test_trial_errors_abort(self):
        model = SimpleInterpolationModel(_make_config(), seed=0)
        with pytest.raises(InvalidInputError):
            monte_carlo_efficiency(Keyboard.qwerty(), model, WordList(["h3llo"]), 5)


class TestEvaluateFitness:
    def test_binomial_error(self):
        model = SimpleInterpolationModel(_make_config(), seed=0)
        vocabulary = WordList(["the", "then", "them", "they"])
        result = evaluate_fitness(Keyboard.qwerty(), model, vocabulary, 40)

        assert result.iterations == 40
        p = result.fitness
        assert result.error == pytest.approx(math.sqrt(p * (1 - p) / 40))


class TestParallelFitness:
    def test_single_worker_reproducible(self):
        config = _make_config()
        vocabulary = WordList(["the", "then", "them", "they"])
        a = parallel_fitness(Keyboard.qwerty(), vocabulary, config, iterations=20, seed=4)
        b = parallel_fitness(Keyboard.qwerty(), vocabulary, config, iterations=20, seed=4)
        assert a == b
        assert a.iterations == 20

    def test_defaults_from_config(self):
        config = _make_config()
        config.iterations = 8
        config.seed = 1
        result = parallel_fitness(Keyboard.qwerty(), WordList(["hello"]), config)
        assert result.iterations == 8
        assert result.fitness == 1.0

    def test_workers_merge(self):
        config = _make_config()
        vocabulary = WordList(["the", "then", "them", "they"])
        result = parallel_fitness(
            Keyboard.qwerty(), vocabulary, config, iterations=12, num_workers=2, seed=0
        )
        assert result.iterations == 12
        assert 0.0 <= result.fitness <= 1.0

    def test_rejects_bad_arguments(self):
        config = _make_config()
        with pytest.raises(InvalidInputError):
            parallel_fitness(Keyboard.qwerty(), WordList([]), config, iterations=5)
        with pytest.raises(InvalidInputError):
            parallel_fitness(Keyboard.qwerty(), WordList(["a"]), config, num_workers=0)


class TestBestWord:
    def test_distant_candidates_are_still_ranked(self):
        config = _make_config()
        config.sigma = 0.01
        model = SimpleInterpolationModel(config, seed=0)
        keyboard = Keyboard.qwerty()
        trace = model.ideal_vector("ws", keyboard)

        # Both scores underflow to 0.0, yet "qa" is much closer than "pk"
        assert model.marginal_probability(trace, "pk", keyboard) == 0.0
        assert model.marginal_probability(trace, "qa", keyboard) == 0.0
        assert _best_word(model, trace, WordList(["pk", "qa"]), keyboard) == "qa"

    def test_picks_closest_word(self):
        model = SimpleInterpolationModel(_make_config(), seed=0)
        keyboard = Keyboard.qwerty()
        trace = model.ideal_vector("hello", keyboard)
        assert _best_word(model, trace, WordList(["world", "hello", "help"]), keyboard) == "hello"
