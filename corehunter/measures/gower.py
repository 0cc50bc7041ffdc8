"""
Gower's distance for mixed-scale phenotypic data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import numpy as np

from corehunter.common.measure import AbstractDistanceMeasure, MissingValuesPolicy
from corehunter.data.phenotype import FeatureKind

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData
    from corehunter.data.phenotype import PhenotypeData

# largest possible distance contribution of a single feature
MAX_FEATURE_DISTANCE = 1.0


class GowerDistance(AbstractDistanceMeasure):
    """
    Gower's distance.

    Per feature:
    - binary (asymmetric): distance 0 if both values are true, else 1;
      weight 0 if both values are false, else 1
    - nominal: distance 0 if both values are equal, else 1
    - ordinal: difference of value indices divided by (#values - 1)
    - interval/ratio: |x - y| divided by the scale range

    A feature with a missing value on either side contributes the missing
    values policy applied to 1 with weight 1, both with and without
    caching. The distance is the weighted average of the feature
    distances, or 0 when all weights are zero.
    """

    name = "Gower"

    def __init__(self, policy: MissingValuesPolicy = MissingValuesPolicy.FLOOR):
        super().__init__(policy)

    def compute_distance(self, id_x: int, id_y: int, data: CoreHunterData) -> float:
        phenotypes = data.require_phenotypes()
        return float(self._distances_from(phenotypes, id_x, np.array([id_y]))[0])

    def distances(self, id_x: int, others: Iterable[int], data: CoreHunterData) -> np.ndarray:
        phenotypes = data.require_phenotypes()
        others = np.fromiter(others, dtype=int)
        result = self._distances_from(phenotypes, id_x, others)
        result[others == id_x] = 0.0
        return result

    def _distances_from(self, phenotypes: PhenotypeData, id_x: int, others: np.ndarray) -> np.ndarray:
        if len(others) == 0:
            return np.zeros(0)
        phenotypes.validate_id(id_x)
        phenotypes.validate_ids(others)
        values = phenotypes.encoded_values
        kinds = phenotypes.feature_kinds
        ranges = phenotypes.ranges

        x = values[id_x]
        y = values[others]
        missing = np.isnan(x) | np.isnan(y)

        # binary
        both_true = (x == 1.0) & (y == 1.0)
        either_true = (x == 1.0) | (y == 1.0)
        binary_dist = np.where(both_true, 0.0, 1.0)
        binary_weight = np.where(either_true, 1.0, 0.0)

        # nominal
        nominal_dist = np.where(x == y, 0.0, 1.0)

        # ordinal and interval/ratio
        abs_diff = np.abs(x - y)
        ranged_dist = np.divide(
            abs_diff, ranges, out=np.zeros_like(abs_diff), where=(ranges > 0.0) & ~missing
        )

        is_binary = kinds == FeatureKind.BINARY
        is_nominal = kinds == FeatureKind.NOMINAL
        dist = np.where(is_binary, binary_dist, np.where(is_nominal, nominal_dist, ranged_dist))
        weight = np.where(is_binary, binary_weight, 1.0)

        dist = np.where(missing, self.missing_values_policy.contribution(MAX_FEATURE_DISTANCE), dist)
        weight = np.where(missing, 1.0, weight)

        weighted_sum = (dist * weight).sum(axis=1)
        weight_sum = weight.sum(axis=1)
        return np.divide(
            weighted_sum, weight_sum, out=np.zeros_like(weighted_sum), where=weight_sum > 0.0
        )
