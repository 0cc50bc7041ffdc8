"""
Weighted index combining several objectives into one maximized value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import numpy as np

from corehunter.common.evaluation import AbstractEvaluation
from corehunter.common.objective import AbstractObjective
from corehunter.common.solution import SubsetMove, SubsetSolution

from .evaluations import WeightedIndexEvaluation

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData

logger = logging.getLogger(__name__)

Bounds = Tuple[float, float]


class WeightedIndex(AbstractObjective):
    """
    Weighted sum of objective values.

    value = sum_i w_i * s_i * n_i(v_i) where s_i is -1 for minimizing
    objectives and 1 otherwise, and n_i rescales v_i to
    (v_i - lower_i) / (upper_i - lower_i) when bounds are given for
    objective i. The index is always maximized.

    Attributes:
        objectives: Combined objectives
        weights: Non-negative weight per objective
        bounds: Optional (lower, upper) normalization bounds per objective
    """

    name = "Weighted index"

    def __init__(
        self,
        objectives: Sequence[AbstractObjective],
        weights: Optional[Sequence[float]] = None,
        bounds: Optional[Sequence[Optional[Bounds]]] = None,
    ):
        """
        Initialize WeightedIndex.

        Args:
            objectives: Objectives to combine (at least one)
            weights: Weight per objective, 1 each by default
            bounds: Normalization bounds per objective, None entries for
                objectives that are used as is

        Raises:
            ValueError: If lengths differ, a weight is negative or not
                finite, or bounds are empty
        """
        objectives = list(objectives)
        if not objectives:
            raise ValueError("Weighted index needs at least one objective")
        for objective in objectives:
            if not isinstance(objective, AbstractObjective):
                raise TypeError(f"objective must be AbstractObjective, got {type(objective)}")

        weights = [1.0] * len(objectives) if weights is None else [float(w) for w in weights]
        if len(weights) != len(objectives):
            raise ValueError(f"Got {len(weights)} weights for {len(objectives)} objectives")
        for w in weights:
            if not np.isfinite(w) or w < 0.0:
                raise ValueError(f"Weights must be finite and non-negative, got {w}")

        bounds = [None] * len(objectives) if bounds is None else list(bounds)
        if len(bounds) != len(objectives):
            raise ValueError(f"Got {len(bounds)} bounds for {len(objectives)} objectives")
        checked: List[Optional[Bounds]] = []
        for b in bounds:
            if b is not None:
                lower, upper = float(b[0]), float(b[1])
                if not upper > lower:
                    raise ValueError(f"Upper bound must exceed lower bound, got ({lower}, {upper})")
                b = (lower, upper)
            checked.append(b)

        self.objectives: List[AbstractObjective] = objectives
        self.weights: List[float] = weights
        self.bounds: List[Optional[Bounds]] = checked

    def _combine(self, components: Sequence[AbstractEvaluation]) -> float:
        total = 0.0
        for objective, weight, bounds, evaluation in zip(
            self.objectives, self.weights, self.bounds, components
        ):
            if weight == 0.0:
                # an unbounded value times 0 would give nan
                continue
            value = evaluation.value()
            if bounds is not None:
                lower, upper = bounds
                value = (value - lower) / (upper - lower)
            sign = -1.0 if objective.is_minimizing() else 1.0
            total += weight * sign * value
        return total

    def evaluate(self, solution: SubsetSolution, data: CoreHunterData) -> WeightedIndexEvaluation:
        components = [objective.evaluate(solution, data) for objective in self.objectives]
        evaluation = WeightedIndexEvaluation(components, self._combine(components))
        logger.debug(f"{self.name}: {evaluation!r}")
        return evaluation

    def evaluate_delta(
        self,
        move: SubsetMove,
        solution: SubsetSolution,
        evaluation: AbstractEvaluation,
        data: CoreHunterData,
    ) -> WeightedIndexEvaluation:
        evaluation = self._check_evaluation(evaluation, WeightedIndexEvaluation)
        if len(evaluation.components) != len(self.objectives):
            raise ValueError(
                f"Evaluation has {len(evaluation.components)} components, "
                f"index has {len(self.objectives)} objectives"
            )
        components = [
            objective.evaluate_delta(move, solution, component, data)
            for objective, component in zip(self.objectives, evaluation.components)
        ]
        return WeightedIndexEvaluation(components, self._combine(components))

    def is_minimizing(self) -> bool:
        return False

    def __repr__(self) -> str:
        parts = ", ".join(f"{w:g} * {o.name}" for w, o in zip(self.weights, self.objectives))
        return f"WeightedIndex({parts})"
