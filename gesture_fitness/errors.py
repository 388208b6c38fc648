"""Exception types raised by the gesture fitness package."""


class GestureFitnessError(Exception):
    pass


class InvalidInputError(GestureFitnessError, ValueError):
    """A request that has no meaningful answer (empty vocabulary, bad artifact, ...)."""


class NumericDegenerateError(GestureFitnessError, ArithmeticError):
    """A computation that would otherwise produce NaN or infinity."""
