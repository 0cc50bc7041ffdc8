"""
Evaluation types returned by the objectives.

Each evaluation carries what its objective needs to score a move without
recomputing from the subset alone: pair distance sums, nearest entry maps
or the average genotype of the selection.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence

import numpy as np
from scipy.special import entr

from corehunter.common.evaluation import AbstractEvaluation
from corehunter.diversity import AverageGenotype

# average frequencies up to this value count as absent alleles
COVERAGE_TOLERANCE = 1e-10


class PairwiseDistanceEvaluation(AbstractEvaluation):
    """
    Sum and number of pairwise distances within a selection.

    Attributes:
        distance_sum: Sum of distances over all pairs of selected items
        num_pairs: Number of pairs
    """

    def __init__(self, distance_sum: float = 0.0, num_pairs: int = 0):
        if num_pairs < 0:
            raise ValueError(f"Number of pairs cannot be negative, got {num_pairs}")
        self.distance_sum = float(distance_sum) if num_pairs > 0 else 0.0
        self.num_pairs = num_pairs

    def value(self) -> float:
        """Average pairwise distance, 0 without pairs."""
        return self.distance_sum / self.num_pairs if self.num_pairs > 0 else 0.0


@dataclass(frozen=True)
class NearestEntry:
    """Id of and distance to the closest selected item."""

    id: int
    distance: float


class NearestEntryEvaluation(AbstractEvaluation):
    """
    Closest selected item of each tracked item.

    Keeps the sum of distances from tracked items to their closest entry,
    updated by exactly the changed contributions.
    """

    def __init__(self, empty_value: float = 0.0):
        """
        Initialize NearestEntryEvaluation.

        Args:
            empty_value: Value when no item is tracked
        """
        self.empty_value = empty_value
        self._nearest: Dict[int, NearestEntry] = {}
        self._distance_sum = 0.0

    def copy(self) -> NearestEntryEvaluation:
        """Independent copy, used as the starting point of a delta evaluation."""
        other = NearestEntryEvaluation(self.empty_value)
        other._nearest = dict(self._nearest)
        other._distance_sum = self._distance_sum
        return other

    def add(self, item_id: int, nearest: NearestEntry) -> None:
        """Register the closest entry of an untracked item."""
        if item_id in self._nearest:
            raise KeyError(f"Item {item_id} is already tracked")
        self._distance_sum += nearest.distance
        self._nearest[item_id] = nearest

    def remove(self, item_id: int) -> bool:
        """
        Stop tracking an item.

        Returns:
            True if the item was tracked
        """
        nearest = self._nearest.pop(item_id, None)
        if nearest is None:
            return False
        self._distance_sum -= nearest.distance
        if not self._nearest:
            self._distance_sum = 0.0
        return True

    def update(self, item_id: int, nearest: NearestEntry) -> bool:
        """
        Replace the closest entry of a tracked item.

        Returns:
            True if the item was tracked and is now updated
        """
        current = self._nearest.get(item_id)
        if current is None:
            return False
        self._distance_sum += nearest.distance - current.distance
        self._nearest[item_id] = nearest
        return True

    def closest(self, item_id: int) -> Optional[NearestEntry]:
        """Closest entry of an item, None when not tracked."""
        return self._nearest.get(item_id)

    def tracked_ids(self) -> Iterator[int]:
        return iter(self._nearest)

    @property
    def distance_sum(self) -> float:
        return self._distance_sum

    def __len__(self) -> int:
        return len(self._nearest)

    def value(self) -> float:
        n = len(self._nearest)
        return self._distance_sum / n if n > 0 else self.empty_value


class AllelicDiversityEvaluation(AbstractEvaluation):
    """
    Evaluation computed from the average genotype of a selection.

    The formula is applied to the whole average genotype; its cost only
    depends on the number of alleles.
    """

    def __init__(self, average_genotype: AverageGenotype):
        self.average_genotype = average_genotype
        self._value = self.compute(average_genotype)

    @staticmethod
    @abstractmethod
    def compute(average_genotype: AverageGenotype) -> float:
        pass

    @property
    def num_selected(self) -> int:
        return self.average_genotype.num_selected

    def value(self) -> float:
        return self._value


class CoverageEvaluation(AllelicDiversityEvaluation):
    """Proportion of alleles present in the selection."""

    @staticmethod
    def compute(average_genotype: AverageGenotype) -> float:
        values = average_genotype.values
        if len(values) == 0:
            return 0.0
        return float(np.count_nonzero(values > COVERAGE_TOLERANCE)) / len(values)


class ShannonEvaluation(AllelicDiversityEvaluation):
    """
    Shannon's diversity index.

    -sum_m sum_a (f/M) ln(f/M) over the non-zero average frequencies f.
    """

    @staticmethod
    def compute(average_genotype: AverageGenotype) -> float:
        values = average_genotype.values
        num_markers = average_genotype.num_markers
        scaled = np.where(values > 0.0, values / num_markers, 0.0)
        return float(entr(scaled).sum())


class HeterozygousLociEvaluation(AllelicDiversityEvaluation):
    """
    Expected proportion of heterozygous loci.

    mean_m (1 - sum_a f^2), 0 for an empty selection.
    """

    @staticmethod
    def compute(average_genotype: AverageGenotype) -> float:
        if average_genotype.num_selected == 0:
            return 0.0
        values = average_genotype.values
        homozygosity = average_genotype.per_marker_sum(values * values)
        return float(np.mean(1.0 - homozygosity))


class WeightedIndexEvaluation(AbstractEvaluation):
    """
    Weighted combination of component evaluations.

    Attributes:
        components: Evaluations of the combined objectives, in order
    """

    def __init__(self, components: Sequence[AbstractEvaluation], value: float):
        self.components: List[AbstractEvaluation] = list(components)
        self._value = value

    def value(self) -> float:
        return self._value

    def __repr__(self) -> str:
        parts = ", ".join(f"{c.value():.4g}" for c in self.components)
        return f"WeightedIndexEvaluation(value={self._value:.6g}, components=[{parts}])"
