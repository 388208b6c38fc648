"""Mergeable record of a fitness evaluation."""

from dataclasses import dataclass
from typing import Dict, Union


@dataclass
class FitnessResult:
    """
    Fitness estimated over ``iterations`` Monte Carlo trials.

    Results of independent batches merge with ``+``: iteration counts add
    and fitness and error become the iteration-weighted means of the
    operands, so merging is associative and commutative and ``sum()`` over
    per-worker results gives the result of the whole run.

    ``error`` of a merged result is the mean per-batch standard error, not
    the pooled standard error of all trials, so it does not shrink as
    batches are added.
    """

    iterations: int = 0
    fitness: float = 0.0
    error: float = 0.0

    def __add__(self, other: "FitnessResult") -> "FitnessResult":
        if not isinstance(other, FitnessResult):
            return NotImplemented
        total = self.iterations + other.iterations
        if total == 0:
            return FitnessResult()
        return FitnessResult(
            iterations=total,
            fitness=(self.fitness * self.iterations + other.fitness * other.iterations) / total,
            error=(self.error * self.iterations + other.error * other.iterations) / total,
        )

    def __radd__(self, other: Union[int, "FitnessResult"]) -> "FitnessResult":
        # sum() starts from 0
        if isinstance(other, int) and other == 0:
            return FitnessResult(self.iterations, self.fitness, self.error)
        return self.__add__(other)

    def to_dict(self) -> Dict[str, Union[int, float]]:
        return {"iterations": self.iterations, "fitness": self.fitness, "error": self.error}

    @classmethod
    def from_dict(cls, payload: Dict[str, Union[int, float]]) -> "FitnessResult":
        return cls(
            iterations=int(payload["iterations"]),
            fitness=float(payload["fitness"]),
            error=float(payload["error"]),
        )
