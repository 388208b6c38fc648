"""Time-ordered (x, y, t) sample sequences describing a swipe path."""

import bisect
import math
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from gesture_fitness.errors import InvalidInputError

# Index naming the last sample of an InputVector.
LAST = -1

Point = Tuple[float, float, float]


class InputVector:
    """
    An ordered sequence of (x, y, t) samples.

    Samples are kept sorted by t: ``add_point`` inserts a new sample after
    every existing sample whose time is less than or equal to its own, so
    points added with equal times keep their insertion order.

    Example::

        iv = InputVector()
        iv.add_point(0.0, 0.0, 0.0)
        iv.add_point(1.0, 1.0, 2.0)
        iv.add_point(1.0, 0.0, 1.0)  # lands in the middle
        iv.y(1)  # 0.0
    """

    def __init__(self):
        self._x: List[float] = []
        self._y: List[float] = []
        self._t: List[float] = []

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "InputVector":
        """Build a vector from (x, y) or (x, y, t) tuples."""
        iv = cls()
        for point in points:
            iv.add_point(*point)
        return iv

    @classmethod
    def from_dict(cls, payload: Dict[str, Sequence[float]]) -> "InputVector":
        """Decode the representation produced by ``to_dict``."""
        xs, ys, ts = payload["x"], payload["y"], payload["t"]
        if not len(xs) == len(ys) == len(ts):
            raise InvalidInputError("x, y and t sequences must have equal length")
        return cls.from_points(zip(xs, ys, ts))

    def to_dict(self) -> Dict[str, List[float]]:
        return {"x": list(self._x), "y": list(self._y), "t": list(self._t)}

    def to_array(self) -> np.ndarray:
        """Return the samples as an (N, 3) float64 array of (x, y, t) rows."""
        return np.array([self._x, self._y, self._t], dtype=np.float64).T.reshape(-1, 3)

    def __len__(self) -> int:
        return len(self._t)

    def __repr__(self) -> str:
        return f"InputVector(length={len(self)})"

    def length(self) -> int:
        return len(self._t)

    def add_point(self, x: float, y: float, t: float = 0.0) -> int:
        """Insert a sample in time order and return the new length."""
        i = bisect.bisect_right(self._t, t)
        self._x.insert(i, float(x))
        self._y.insert(i, float(y))
        self._t.insert(i, float(t))
        return len(self._t)

    def _index(self, i: int) -> int:
        n = len(self._t)
        if i == LAST and n > 0:
            return n - 1
        if 0 <= i < n:
            return i
        raise IndexError(f"sample index {i} out of range for InputVector of length {n}")

    def x(self, i: int) -> float:
        return self._x[self._index(i)]

    def y(self, i: int) -> float:
        return self._y[self._index(i)]

    def t(self, i: int) -> float:
        return self._t[self._index(i)]

    def point(self, i: int) -> Point:
        i = self._index(i)
        return self._x[i], self._y[i], self._t[i]

    def last(self) -> Point:
        return self.point(LAST)

    def spatial_length(self) -> float:
        """Total Euclidean length of the path."""
        length = 0.0
        for i in range(1, len(self._x)):
            length += math.hypot(self._x[i] - self._x[i - 1], self._y[i] - self._y[i - 1])
        return length

    def temporal_length(self) -> float:
        """Time elapsed between the first and the last sample."""
        return self.t(LAST) - self.t(0)

    def delta_phi(self, i: int) -> float:
        """
        Signed change of heading at sample ``i``.

        The turning angle is undefined at the ends of the path, where 0 is
        returned.
        """
        i = self._index(i)
        if i == 0 or i >= len(self._x) - 1:
            return 0.0
        old_phi = math.atan2(self._y[i] - self._y[i - 1], self._x[i] - self._x[i - 1])
        new_phi = math.atan2(self._y[i + 1] - self._y[i], self._x[i + 1] - self._x[i])
        return new_phi - old_phi

    def string_form(self, keyboard) -> str:
        """
        Characters of the keys the path passes over.

        Consecutive samples that stay inside the key emitted last are
        skipped, so dwelling on a key produces a single character.
        """
        chars = []
        last_j = None
        for i in range(len(self._x)):
            x, y = self._x[i], self._y[i]
            if last_j is not None and keyboard.get_key(keyboard.char_n(last_j)).is_inside(x, y):
                continue
            for j in range(keyboard.n_keys()):
                char = keyboard.char_n(j)
                if keyboard.get_key(char).is_inside(x, y):
                    chars.append(char)
                    last_j = j
                    break
        return "".join(chars)
