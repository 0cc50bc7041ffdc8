"""
Abstract evaluation interface.

An evaluation is the result of scoring a subset with an objective. Besides
its value it may carry the bookkeeping an objective needs to score a move
without starting over.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractEvaluation(ABC):
    """Abstract base class for objective evaluations."""

    @abstractmethod
    def value(self) -> float:
        """Scalar value of the evaluation."""
        pass

    def __float__(self) -> float:
        return float(self.value())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(value={self.value():.6g})"


class SimpleEvaluation(AbstractEvaluation):
    """Evaluation that only stores a value."""

    def __init__(self, value: float):
        self._value = float(value)

    def value(self) -> float:
        return self._value
