"""
Abstract distance measure interface.

A distance measure maps a pair of item ids to a non-negative float using
the data held by a CoreHunterData instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Iterable

import numpy as np

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData


class MissingValuesPolicy(Enum):
    """
    Contribution of a missing value to a distance term.

    FLOOR counts the term as 0, CEIL as the largest contribution the term
    can make. Objectives pick the policy that is the worst case for their
    optimization direction.
    """

    FLOOR = "floor"
    CEIL = "ceil"

    def contribution(self, ceil_value: float) -> float:
        """Value contributed by a missing term whose maximum is ``ceil_value``."""
        return 0.0 if self is MissingValuesPolicy.FLOOR else ceil_value


class AbstractDistanceMeasure(ABC):
    """
    Abstract base class for pairwise distance measures.

    Implementations must be symmetric and return 0 for an item and itself.
    The missing values policy is a property of the measure instance and is
    consulted by every distance computation.
    """

    def __init__(self, policy: MissingValuesPolicy = MissingValuesPolicy.FLOOR):
        self._policy = policy

    @property
    def missing_values_policy(self) -> MissingValuesPolicy:
        return self._policy

    def set_missing_values_policy(self, policy: MissingValuesPolicy) -> None:
        if not isinstance(policy, MissingValuesPolicy):
            raise TypeError(f"policy must be MissingValuesPolicy, got {type(policy)}")
        self._policy = policy

    def distance(self, id_x: int, id_y: int, data: CoreHunterData) -> float:
        """
        Compute the distance between two items.

        Args:
            id_x: Id of the first item
            id_y: Id of the second item
            data: Dataset holding the items

        Returns:
            Non-negative distance, 0 when both ids are equal
        """
        if id_x == id_y:
            return 0.0
        return self.compute_distance(id_x, id_y, data)

    @abstractmethod
    def compute_distance(self, id_x: int, id_y: int, data: CoreHunterData) -> float:
        """Compute the distance between two distinct items."""
        pass

    def distances(self, id_x: int, others: Iterable[int], data: CoreHunterData) -> np.ndarray:
        """
        Compute distances from one item to a group of items.

        Args:
            id_x: Id of the reference item
            others: Ids of the other items (may include id_x)
            data: Dataset holding the items

        Returns:
            Array of distances, aligned with ``others``
        """
        return np.array([self.distance(id_x, other, data) for other in others], dtype=float)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(policy={self._policy.name})"
