"""Tests for the keyboard layout and vocabulary collaborators."""

import numpy as np
import pytest

from gesture_fitness.errors import InvalidInputError
from gesture_fitness.keyboard import Key, Keyboard, WordList


class TestKeyboard:
    def test_qwerty_layout(self):
        keyboard = Keyboard.qwerty()
        assert keyboard.n_keys() == 26
        assert keyboard.char_n(0) == "q"
        assert keyboard.char_n(10) == "a"
        assert keyboard.key_center("q") == (0.5, 0.5)
        assert keyboard.key_center("a") == (0.75, 1.5)
        assert keyboard.key_center("z") == (1.25, 2.5)

    def test_lookup_is_case_insensitive(self):
        keyboard = Keyboard.qwerty()
        assert keyboard.has_key("H")
        assert keyboard.get_key("H") is keyboard.get_key("h")

    def test_unknown_key(self):
        keyboard = Keyboard.qwerty()
        assert not keyboard.has_key("3")
        with pytest.raises(KeyError):
            keyboard.get_key("3")

    def test_duplicate_keys_rejected(self):
        with pytest.raises(InvalidInputError):
            Keyboard.from_rows(["abc", "cde"], [0.0, 0.5])

    def test_rows_and_offsets_must_match(self):
        with pytest.raises(InvalidInputError):
            Keyboard.from_rows(["abc", "def"], [0.0])

    def test_scaled_keys(self):
        keyboard = Keyboard.from_rows(["ab"], [0.5], key_width=2.0, key_height=3.0)
        key = keyboard.get_key("b")
        assert (key.x, key.y, key.width, key.height) == (3.0, 0.0, 2.0, 3.0)
        assert key.center == (4.0, 1.5)


class TestKey:
    def test_is_inside_half_open(self):
        key = Key("a", 1.0, 2.0)
        assert key.is_inside(1.0, 2.0)
        assert key.is_inside(1.5, 2.5)
        assert not key.is_inside(2.0, 2.5)
        assert not key.is_inside(1.5, 3.0)
        assert not key.is_inside(0.99, 2.5)

    def test_neighbours_never_share_a_point(self):
        keyboard = Keyboard.qwerty()
        hits = [keyboard.get_key(c).is_inside(1.0, 0.5) for c in "qw"]
        assert hits == [False, True]


class TestWordList:
    def test_counts_and_access(self):
        words = WordList(["The", "and", "hello"])
        assert words.words() == 3
        assert len(words) == 3
        assert words.word(0) == "the"
        assert list(words) == ["the", "and", "hello"]

    def test_random_word_is_reproducible(self):
        words = WordList(["the", "and", "hello", "world"])
        first = [words.random_word(np.random.default_rng(7)) for _ in range(5)]
        second = [words.random_word(np.random.default_rng(7)) for _ in range(5)]
        assert first == second
        assert all(w in ("the", "and", "hello", "world") for w in first)

    def test_random_word_covers_vocabulary(self):
        words = WordList(["a", "b", "c"], rng=np.random.default_rng(0))
        drawn = {words.random_word() for _ in range(200)}
        assert drawn == {"a", "b", "c"}

    def test_empty_vocabulary(self):
        with pytest.raises(InvalidInputError):
            WordList([]).random_word()
