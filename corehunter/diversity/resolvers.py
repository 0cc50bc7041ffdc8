"""
Missing value resolution for average genotypes.

Averaging treats missing frequencies as zero, so the allele frequencies
of a marker with missing values sum to less than one. A resolver decides
where the missing mass goes. Which rule to use is a policy choice.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

# frequencies this close to the maximum count as tied with it
TIE_TOLERANCE = 1e-12


class AbstractMissingValueResolver(ABC):
    """Abstract base class for missing value resolution rules."""

    @abstractmethod
    def resolve(
        self, raw_average: np.ndarray, missing_counts: np.ndarray, offsets: np.ndarray
    ) -> np.ndarray:
        """
        Resolve missing mass in an average genotype.

        Args:
            raw_average: (total_alleles,) average frequencies, missing as zero
            missing_counts: (num_markers,) number of selected items with
                missing values per marker
            offsets: (num_markers + 1,) column offsets of the markers

        Returns:
            New (total_alleles,) array of resolved frequencies
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class MostFrequentAlleleResolver(AbstractMissingValueResolver):
    """
    Worst case (minimal diversity) resolution.

    For every marker where at least one selected item has missing values,
    the most frequent allele absorbs the missing mass so that the marker's
    frequencies sum to one. Ties go to the first allele with the highest
    frequency, up to rounding noise left by incremental updates.
    """

    def resolve(self, raw_average, missing_counts, offsets):
        resolved = raw_average.copy()
        for m in np.flatnonzero(missing_counts > 0):
            segment = resolved[offsets[m] : offsets[m + 1]]
            most_common = int(np.flatnonzero(segment >= segment.max() - TIE_TOLERANCE)[0])
            segment[most_common] += 1.0 - segment.sum()
        return resolved


class NoOpResolver(AbstractMissingValueResolver):
    """Leaves missing mass unassigned."""

    def resolve(self, raw_average, missing_counts, offsets):
        return raw_average.copy()
