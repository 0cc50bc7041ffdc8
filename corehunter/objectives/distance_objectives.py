"""
Objectives based on pairwise distances between items.

Each objective sets its measure's missing values policy to the worst case
for its optimization direction: FLOOR for the maximized entry-to-entry
and entry-to-nearest-entry objectives, CEIL for the minimized
accession-to-nearest-entry objective. A measure instance shared between
objectives of opposite directions therefore ends up with the policy of
the objective created last.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

import numpy as np

from corehunter.common.evaluation import AbstractEvaluation
from corehunter.common.measure import AbstractDistanceMeasure, MissingValuesPolicy
from corehunter.common.objective import AbstractObjective
from corehunter.common.solution import SubsetMove, SubsetSolution

from .evaluations import NearestEntry, NearestEntryEvaluation, PairwiseDistanceEvaluation

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData

logger = logging.getLogger(__name__)


def _sorted_ids(ids: Iterable[int]) -> np.ndarray:
    return np.array(sorted(ids), dtype=int)


class DistanceObjective(AbstractObjective):
    """
    Base class for objectives computed from a distance measure.

    Attributes:
        measure: Distance measure between items
    """

    missing_values_policy = MissingValuesPolicy.FLOOR

    def __init__(self, measure: AbstractDistanceMeasure):
        """
        Initialize DistanceObjective.

        Args:
            measure: Distance measure; its missing values policy is set to
                the worst case for this objective
        """
        if not isinstance(measure, AbstractDistanceMeasure):
            raise TypeError(f"measure must be AbstractDistanceMeasure, got {type(measure)}")
        if measure.missing_values_policy is not self.missing_values_policy:
            logger.debug(
                f"{self.name}: setting missing values policy of {measure!r} "
                f"to {self.missing_values_policy.name}"
            )
            measure.set_missing_values_policy(self.missing_values_policy)
        self.measure = measure

    def find_closest(
        self, item_id: int, group: np.ndarray, data: CoreHunterData, include_self: bool = False
    ) -> Optional[NearestEntry]:
        """
        Find the item of a group closest to a given item.

        Args:
            item_id: Reference item
            group: Candidate ids
            data: Dataset
            include_self: Whether the reference item itself is a candidate

        Returns:
            Closest candidate and its distance (first one on ties), None if
            there are no candidates
        """
        if not include_self:
            group = group[group != item_id]
        if len(group) == 0:
            return None
        distances = self.measure.distances(item_id, group, data)
        k = int(np.argmin(distances))
        return NearestEntry(int(group[k]), float(distances[k]))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(measure={self.measure!r})"


class AverageEntryToEntryDistance(DistanceObjective):
    """
    Average distance between all pairs of selected items.

    Evaluates to 0 when fewer than two items are selected. Maximized.
    """

    name = "Average entry-to-entry distance"

    def evaluate(self, solution: SubsetSolution, data: CoreHunterData) -> PairwiseDistanceEvaluation:
        selected = _sorted_ids(solution.selected_ids)
        n = len(selected)
        distance_sum = 0.0
        for i in range(n - 1):
            distance_sum += float(self.measure.distances(selected[i], selected[i + 1 :], data).sum())
        evaluation = PairwiseDistanceEvaluation(distance_sum, n * (n - 1) // 2)
        logger.debug(f"{self.name}: {n} selected, value {evaluation.value():.6g}")
        return evaluation

    def evaluate_delta(
        self,
        move: SubsetMove,
        solution: SubsetSolution,
        evaluation: AbstractEvaluation,
        data: CoreHunterData,
    ) -> PairwiseDistanceEvaluation:
        move = solution.validate_move(move)
        evaluation = self._check_evaluation(evaluation, PairwiseDistanceEvaluation)

        added = _sorted_ids(move.added)
        removed = _sorted_ids(move.removed)
        retained = _sorted_ids(solution.selected_ids - move.removed)

        distance_sum = evaluation.distance_sum
        num_pairs = evaluation.num_pairs

        # pairs between removed and retained items
        for rem in removed:
            distance_sum -= float(self.measure.distances(rem, retained, data).sum())
            num_pairs -= len(retained)
        # pairs of removed items
        for i, rem in enumerate(removed):
            distance_sum -= float(self.measure.distances(rem, removed[i + 1 :], data).sum())
            num_pairs -= len(removed) - i - 1
        # pairs between added and retained items
        for add in added:
            distance_sum += float(self.measure.distances(add, retained, data).sum())
            num_pairs += len(retained)
        # pairs of added items
        for i, add in enumerate(added):
            distance_sum += float(self.measure.distances(add, added[i + 1 :], data).sum())
            num_pairs += len(added) - i - 1

        return PairwiseDistanceEvaluation(distance_sum, num_pairs)

    def is_minimizing(self) -> bool:
        return False


class AverageEntryToNearestEntryDistance(DistanceObjective):
    """
    Average distance from each selected item to the closest other selected item.

    Evaluates to 0 when fewer than two items are selected. Maximized.
    """

    name = "Average entry-to-nearest-entry distance"

    def evaluate(self, solution: SubsetSolution, data: CoreHunterData) -> NearestEntryEvaluation:
        evaluation = NearestEntryEvaluation(empty_value=0.0)
        selected = _sorted_ids(solution.selected_ids)
        for item in selected:
            closest = self.find_closest(item, selected, data)
            if closest is not None:
                evaluation.add(int(item), closest)
        logger.debug(f"{self.name}: {len(selected)} selected, value {evaluation.value():.6g}")
        return evaluation

    def evaluate_delta(
        self,
        move: SubsetMove,
        solution: SubsetSolution,
        evaluation: AbstractEvaluation,
        data: CoreHunterData,
    ) -> NearestEntryEvaluation:
        move = solution.validate_move(move)
        evaluation = self._check_evaluation(evaluation, NearestEntryEvaluation)

        new_evaluation = evaluation.copy()
        added = _sorted_ids(move.added)
        new_selection = _sorted_ids((solution.selected_ids | move.added) - move.removed)

        for item in move.removed:
            new_evaluation.remove(item)

        rescans = 0
        for item in new_selection:
            item = int(item)
            current = new_evaluation.closest(item)
            if current is None:
                # newly selected, or no other item was selected before
                closest = self.find_closest(item, new_selection, data)
                if closest is not None:
                    new_evaluation.add(item, closest)
                rescans += 1
            elif current.id in move.removed:
                # closest entry removed: rescan the entire new selection
                closest = self.find_closest(item, new_selection, data)
                if closest is not None:
                    new_evaluation.update(item, closest)
                else:
                    new_evaluation.remove(item)
                rescans += 1
            else:
                # closest entry retained: only an added item can be closer
                closest = self.find_closest(item, added, data)
                if closest is not None and closest.distance < current.distance:
                    new_evaluation.update(item, closest)

        logger.debug(f"{self.name}: delta {move!r} rescanned {rescans} of {len(new_selection)} items")
        return new_evaluation

    def is_minimizing(self) -> bool:
        return False


class AverageAccessionToNearestEntryDistance(DistanceObjective):
    """
    Average distance from each item in the dataset to the closest selected item.

    Every item is tracked, selected or not; a selected item is its own
    closest entry. Evaluates to infinity when nothing is selected.
    Minimized.
    """

    name = "Average accession-to-nearest-entry distance"
    missing_values_policy = MissingValuesPolicy.CEIL

    def evaluate(self, solution: SubsetSolution, data: CoreHunterData) -> NearestEntryEvaluation:
        evaluation = NearestEntryEvaluation(empty_value=float("inf"))
        selected = _sorted_ids(solution.selected_ids)
        if len(selected) > 0:
            for item in sorted(solution.all_ids):
                closest = self.find_closest(item, selected, data, include_self=True)
                evaluation.add(item, closest)
        logger.debug(f"{self.name}: {len(selected)} selected, value {evaluation.value():.6g}")
        return evaluation

    def evaluate_delta(
        self,
        move: SubsetMove,
        solution: SubsetSolution,
        evaluation: AbstractEvaluation,
        data: CoreHunterData,
    ) -> NearestEntryEvaluation:
        move = solution.validate_move(move)
        evaluation = self._check_evaluation(evaluation, NearestEntryEvaluation)

        new_selection = _sorted_ids((solution.selected_ids | move.added) - move.removed)
        if len(new_selection) == 0:
            return NearestEntryEvaluation(empty_value=evaluation.empty_value)

        new_evaluation = evaluation.copy()
        added = _sorted_ids(move.added)

        rescans = 0
        for item in sorted(solution.all_ids):
            current = new_evaluation.closest(item)
            if current is None:
                # nothing was selected before
                new_evaluation.add(item, self.find_closest(item, new_selection, data, include_self=True))
                rescans += 1
            elif current.id in move.removed:
                new_evaluation.update(
                    item, self.find_closest(item, new_selection, data, include_self=True)
                )
                rescans += 1
            else:
                closest = self.find_closest(item, added, data, include_self=True)
                if closest is not None and closest.distance < current.distance:
                    new_evaluation.update(item, closest)

        logger.debug(f"{self.name}: delta {move!r} rescanned {rescans} of {len(solution.all_ids)} items")
        return new_evaluation

    def is_minimizing(self) -> bool:
        return True
