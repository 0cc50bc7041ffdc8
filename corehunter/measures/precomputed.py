"""
Distances read from a precomputed matrix.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import numpy as np

from corehunter.common.measure import AbstractDistanceMeasure

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData


class PrecomputedDistance(AbstractDistanceMeasure):
    """
    Looks distances up in the dataset's distance matrix.

    The matrix has no missing values, so the missing values policy has no effect.
    """

    name = "Precomputed distance"

    def compute_distance(self, id_x: int, id_y: int, data: CoreHunterData) -> float:
        return data.require_distances().distance(id_x, id_y)

    def distances(self, id_x: int, others: Iterable[int], data: CoreHunterData) -> np.ndarray:
        return data.require_distances().distances(id_x, others)
