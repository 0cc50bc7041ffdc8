"""
Genetic distance measures computed from allele frequencies.

Both measures sum a per-marker term over all markers and normalize by
twice the number of markers. A marker with missing values on either side
contributes the missing values policy applied to the largest possible
marker term (2.0).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable

import numpy as np

from corehunter.common.measure import AbstractDistanceMeasure, MissingValuesPolicy

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData
    from corehunter.data.genotype import GenotypeData

# largest possible sum of allele terms within a single marker
MAX_MARKER_TERM = 2.0


class GenotypeDistanceMeasure(AbstractDistanceMeasure):
    """
    Base class for distances of the form sqrt(sum_m term_m / (2 * M)).

    Subclasses define the per-allele term.
    """

    @abstractmethod
    def allele_terms(self, freqs_x: np.ndarray, freqs_y: np.ndarray) -> np.ndarray:
        """
        Compute per-allele terms between one item and a group of items.

        Args:
            freqs_x: (total_alleles,) frequencies of the reference item
            freqs_y: (k, total_alleles) frequencies of the other items

        Returns:
            (k, total_alleles) array of terms
        """
        pass

    def compute_distance(self, id_x: int, id_y: int, data: CoreHunterData) -> float:
        genotypes = data.require_genotypes()
        return float(self._distances_from(genotypes, id_x, np.array([id_y]))[0])

    def distances(self, id_x: int, others: Iterable[int], data: CoreHunterData) -> np.ndarray:
        genotypes = data.require_genotypes()
        others = np.fromiter(others, dtype=int)
        result = self._distances_from(genotypes, id_x, others)
        result[others == id_x] = 0.0
        return result

    def _distances_from(self, genotypes: GenotypeData, id_x: int, others: np.ndarray) -> np.ndarray:
        if len(others) == 0:
            return np.zeros(0)
        genotypes.validate_id(id_x)
        genotypes.validate_ids(others)
        filled = genotypes.filled_frequencies
        terms = self.allele_terms(filled[id_x], filled[others])
        marker_terms = np.add.reduceat(terms, genotypes.marker_offsets[:-1], axis=1)
        missing = genotypes.missing[id_x] | genotypes.missing[others]
        marker_terms = np.where(
            missing, self.missing_values_policy.contribution(MAX_MARKER_TERM), marker_terms
        )
        return np.sqrt(marker_terms.sum(axis=1) / (2 * genotypes.num_markers))


class ModifiedRogersDistance(GenotypeDistanceMeasure):
    """
    Modified Rogers distance.

    sqrt( sum_m sum_a (p_x - p_y)^2 / (2M) )
    """

    name = "Modified Rogers"

    def __init__(self, policy: MissingValuesPolicy = MissingValuesPolicy.FLOOR):
        super().__init__(policy)

    def allele_terms(self, freqs_x: np.ndarray, freqs_y: np.ndarray) -> np.ndarray:
        diff = freqs_x - freqs_y
        return diff * diff


class CavalliSforzaEdwardsDistance(GenotypeDistanceMeasure):
    """
    Cavalli-Sforza and Edwards chord distance.

    sqrt( sum_m sum_a (sqrt(p_x) - sqrt(p_y))^2 / (2M) )
    """

    name = "Cavalli-Sforza and Edwards"

    def __init__(self, policy: MissingValuesPolicy = MissingValuesPolicy.FLOOR):
        super().__init__(policy)

    def allele_terms(self, freqs_x: np.ndarray, freqs_y: np.ndarray) -> np.ndarray:
        diff = np.sqrt(freqs_x) - np.sqrt(freqs_y)
        return diff * diff
