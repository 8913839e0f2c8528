"""Exception hierarchy for transport property evaluation."""
from __future__ import annotations


class ChapmanError(RuntimeError):
    """Base class for domain specific exceptions."""


class UnopenedFileException(ChapmanError):
    pass


class DataNotFoundException(ChapmanError):
    pass


class ModelParameterException(ChapmanError):
    pass


class IncorrectValueException(ChapmanError):
    pass


class SingularMatrixError(ChapmanError):
    """A direct factorisation or inversion met an exactly zero pivot."""


class ConvergenceError(ChapmanError):
    """The iterative L-matrix solver ran out of iterations."""

    def __init__(self, message: str, iterations: int = 0, residual: float = float("nan")) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual


class UnsupportedModelError(ChapmanError):
    """The requested transport closure is not implemented."""
