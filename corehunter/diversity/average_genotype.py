"""
Average genotype of a selection.

The average genotype holds, for each marker, the allele frequencies
averaged over the selected items. It can be computed from scratch or
updated after adding and removing items; both must give the same result
within floating point tolerance. Allelic diversity objectives (coverage,
Shannon, heterozygous loci) are computed from it.
"""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from corehunter.data.genotype import GenotypeData

from .resolvers import AbstractMissingValueResolver, MostFrequentAlleleResolver


def _id_array(ids: Iterable[int]) -> np.ndarray:
    return np.array(sorted(ids), dtype=int)


class AverageGenotype:
    """
    Average allele frequencies over a set of selected items.

    Attributes:
        num_selected: Number of selected items
        resolver: Missing value resolution rule
    """

    def __init__(
        self,
        raw_average: np.ndarray,
        num_selected: int,
        missing_counts: np.ndarray,
        offsets: np.ndarray,
        resolver: Optional[AbstractMissingValueResolver] = None,
    ):
        """
        Initialize AverageGenotype from precomputed state.

        Use ``from_selection`` and ``update`` instead of calling this directly.

        Args:
            raw_average: (total_alleles,) averages with missing values as zero
            num_selected: Number of selected items
            missing_counts: (num_markers,) selected items with missing values per marker
            offsets: Marker column offsets
            resolver: Missing value resolution rule (most frequent allele by default)
        """
        if num_selected < 0:
            raise ValueError(f"Number of selected items cannot be negative, got {num_selected}")
        self.num_selected = num_selected
        self.resolver = resolver if resolver is not None else MostFrequentAlleleResolver()
        self._raw = raw_average
        self._missing_counts = missing_counts
        self._offsets = offsets
        if num_selected > 0:
            self._values = self.resolver.resolve(raw_average, missing_counts, offsets)
        else:
            self._values = np.zeros_like(raw_average)
        for array in (self._raw, self._missing_counts, self._values):
            array.setflags(write=False)

    @classmethod
    def from_selection(
        cls,
        ids: Iterable[int],
        genotypes: GenotypeData,
        resolver: Optional[AbstractMissingValueResolver] = None,
    ) -> AverageGenotype:
        """
        Compute the average genotype of a selection from scratch.

        Args:
            ids: Ids of the selected items
            genotypes: Genotype data
            resolver: Missing value resolution rule

        Returns:
            Average genotype, all zeros for an empty selection
        """
        ids = _id_array(ids)
        num_selected = len(ids)
        if num_selected > 0:
            raw = genotypes.filled_frequencies[ids].sum(axis=0) / num_selected
        else:
            raw = np.zeros(genotypes.total_num_alleles)
        missing_counts = genotypes.missing[ids].sum(axis=0).astype(int)
        return cls(raw, num_selected, missing_counts, genotypes.marker_offsets, resolver)

    def update(
        self, added: Iterable[int], removed: Iterable[int], genotypes: GenotypeData
    ) -> AverageGenotype:
        """
        Derive the average genotype after adding and removing items.

        The current average is turned back into a sum, the raw frequencies
        of added items are added and those of removed items subtracted, the
        result is divided by the new count and only then resolved again.

        Args:
            added: Ids of added items (not currently selected)
            removed: Ids of removed items (currently selected)
            genotypes: Genotype data the average was computed from

        Returns:
            New AverageGenotype; this one is left unchanged
        """
        if genotypes.total_num_alleles != len(self._raw):
            raise ValueError(
                f"Average genotype has {len(self._raw)} alleles but genotype data has "
                f"{genotypes.total_num_alleles}"
            )
        added = _id_array(added)
        removed = _id_array(removed)
        new_count = self.num_selected + len(added) - len(removed)
        if new_count < 0:
            raise ValueError(
                f"Cannot remove {len(removed)} items from a selection of {self.num_selected}"
            )

        filled = genotypes.filled_frequencies
        if new_count == 0:
            raw = np.zeros_like(self._raw)
        else:
            # undo average, unless the current selection is empty
            raw = self._raw * self.num_selected if self.num_selected > 0 else self._raw.copy()
            raw += filled[added].sum(axis=0)
            raw -= filled[removed].sum(axis=0)
            raw /= new_count

        missing = genotypes.missing
        missing_counts = (
            self._missing_counts + missing[added].sum(axis=0) - missing[removed].sum(axis=0)
        ).astype(int)

        return AverageGenotype(raw, new_count, missing_counts, self._offsets, self.resolver)

    @property
    def values(self) -> np.ndarray:
        """(total_alleles,) resolved average frequencies."""
        return self._values

    @property
    def raw_values(self) -> np.ndarray:
        """(total_alleles,) average frequencies with missing values as zero."""
        return self._raw

    @property
    def missing_counts(self) -> np.ndarray:
        return self._missing_counts

    @property
    def marker_offsets(self) -> np.ndarray:
        return self._offsets

    @property
    def num_markers(self) -> int:
        return len(self._offsets) - 1

    def marker_values(self, marker: int) -> np.ndarray:
        """Resolved average frequencies of one marker."""
        return self._values[self._offsets[marker] : self._offsets[marker + 1]]

    def per_marker_sum(self, terms: np.ndarray) -> np.ndarray:
        """Sum per-allele terms within each marker."""
        return np.add.reduceat(terms, self._offsets[:-1])

    def __repr__(self) -> str:
        return (
            f"AverageGenotype(selected={self.num_selected}, markers={self.num_markers}, "
            f"markers_with_missing={int(np.count_nonzero(self._missing_counts))})"
        )
