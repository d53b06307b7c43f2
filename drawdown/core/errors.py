"""Domain errors raised by the projection core."""

from typing import List


class InvalidInput(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class DegenerateComputation(ArithmeticError):
    """A formula hit a zero or negative denominator."""
