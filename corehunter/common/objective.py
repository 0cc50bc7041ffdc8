"""
Abstract objective interface.

Objectives score a subset solution and re-score it after a move, given
the evaluation of the solution before the move.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Type

from .evaluation import AbstractEvaluation
from .solution import SubsetMove, SubsetSolution

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData


class AbstractObjective(ABC):
    """
    Abstract base class for objectives.

    Every objective supports a full evaluation of a solution and a delta
    evaluation that derives the evaluation of the solution obtained by
    applying a move. Both must agree within floating point tolerance.
    Objectives never modify the solution, the evaluation or the dataset
    they are given.
    """

    name: str = "objective"

    @abstractmethod
    def evaluate(self, solution: SubsetSolution, data: CoreHunterData) -> AbstractEvaluation:
        """
        Evaluate a solution from scratch.

        Args:
            solution: Solution to evaluate
            data: Dataset the solution selects from

        Returns:
            Evaluation of the solution
        """
        pass

    @abstractmethod
    def evaluate_delta(
        self,
        move: SubsetMove,
        solution: SubsetSolution,
        evaluation: AbstractEvaluation,
        data: CoreHunterData,
    ) -> AbstractEvaluation:
        """
        Evaluate the solution obtained by applying a move.

        Args:
            move: Move to apply (not applied to ``solution``)
            solution: Solution before the move
            evaluation: Evaluation of ``solution``
            data: Dataset the solution selects from

        Returns:
            Evaluation of the solution after the move

        Raises:
            IncompatibleMoveError: If the move cannot be interpreted
        """
        pass

    @abstractmethod
    def is_minimizing(self) -> bool:
        """Whether lower values are better."""
        pass

    @staticmethod
    def _check_evaluation(evaluation: AbstractEvaluation, expected: Type[AbstractEvaluation]):
        if not isinstance(evaluation, expected):
            raise TypeError(
                f"evaluation must be {expected.__name__}, got {type(evaluation).__name__}"
            )
        return evaluation

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def __str__(self) -> str:
        return self.name
