"""
Keyboard layout and vocabulary collaborators.

Coordinates are in key-width units with x growing to the right and y growing
downwards; the top-left corner of the first row is the origin.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Sequence, Tuple

import numpy as np

from gesture_fitness.config import Config
from gesture_fitness.errors import InvalidInputError


@dataclass(frozen=True)
class Key:
    """A rectangular key region."""

    char: str
    x: float
    y: float
    width: float = 1.0
    height: float = 1.0

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2.0, self.y + self.height / 2.0

    def is_inside(self, x: float, y: float) -> bool:
        """Half-open hit test, so neighbouring keys never share a point."""
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclass
class Keyboard:
    """A set of keys addressed either by character or by position."""

    keys: Tuple[Key, ...]
    _by_char: Dict[str, Key] = field(init=False, repr=False)

    def __post_init__(self):
        self.keys = tuple(self.keys)
        self._by_char = {}
        for key in self.keys:
            if key.char in self._by_char:
                raise InvalidInputError(f"Duplicate key '{key.char}' on keyboard")
            self._by_char[key.char] = key

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        row_offsets: Sequence[float],
        key_width: float = 1.0,
        key_height: float = 1.0,
    ) -> "Keyboard":
        """Lay out rows of characters, each row shifted right by its offset."""
        if len(rows) != len(row_offsets):
            raise InvalidInputError("rows and row_offsets must have the same length")

        keys = []
        for row_idx, (row, offset) in enumerate(zip(rows, row_offsets)):
            y = row_idx * key_height
            for key_idx, char in enumerate(row):
                x = (offset + key_idx) * key_width
                keys.append(Key(char.lower(), x, y, key_width, key_height))
        return cls(tuple(keys))

    @classmethod
    def from_config(cls, config: Config) -> "Keyboard":
        return cls.from_rows(config.rows, config.row_offsets, config.key_width, config.key_height)

    @classmethod
    def qwerty(cls) -> "Keyboard":
        return cls.from_config(Config())

    def n_keys(self) -> int:
        return len(self.keys)

    def char_n(self, i: int) -> str:
        return self.keys[i].char

    def has_key(self, char: str) -> bool:
        return char.lower() in self._by_char

    def get_key(self, char: str) -> Key:
        try:
            return self._by_char[char.lower()]
        except KeyError:
            raise KeyError(f"No key for character {char!r}") from None

    def key_center(self, char: str) -> Tuple[float, float]:
        return self.get_key(char).center


class WordList:
    """A fixed vocabulary supporting uniform random draws."""

    def __init__(self, words: Sequence[str], rng: Optional[np.random.Generator] = None):
        self._words = tuple(w.lower() for w in words)
        self.rng = rng if rng is not None else np.random.default_rng()

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __repr__(self) -> str:
        return f"WordList(words={len(self._words)})"

    def words(self) -> int:
        return len(self._words)

    def word(self, i: int) -> str:
        return self._words[i]

    def random_word(self, rng: Optional[np.random.Generator] = None) -> str:
        """Draw a word uniformly, from ``rng`` if given, else the list's own generator."""
        if not self._words:
            raise InvalidInputError("Cannot draw a word from an empty vocabulary")
        rng = rng if rng is not None else self.rng
        return self._words[int(rng.integers(len(self._words)))]
