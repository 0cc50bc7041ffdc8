"""
Genotype data.

Stores, for every item, marker and allele, the relative frequency of that
allele for that item. Missing values are kept as NaN. Frequencies of all
markers are laid out side by side in a single (n, total_alleles) matrix;
``marker_offsets`` gives the column range of each marker.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from corehunter.common.data import NamedData
from corehunter.common.errors import ConstructionError
from corehunter.common.header import Header

logger = logging.getLogger(__name__)

# frequencies of a marker without missing values may deviate this much from one
SUM_TO_ONE_PRECISION = 0.01 + 1e-8


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class GenotypeData(NamedData):
    """
    Multi-allelic genotype data given as allele frequencies.

    For every (item, marker) without missing values the allele frequencies
    sum to one. A marker is missing
    for an item as soon as one of its allele frequencies is missing.
    """

    def __init__(
        self,
        frequencies: Sequence[Sequence[Sequence[Optional[float]]]],
        headers: Optional[Sequence[Optional[Header]]] = None,
        marker_names: Optional[Sequence[Optional[str]]] = None,
        allele_names: Optional[Sequence[Optional[Sequence[Optional[str]]]]] = None,
        name: str = "Multiallelic marker data",
    ):
        """
        Initialize GenotypeData.

        Args:
            frequencies: Nested per item, per marker, per allele frequencies;
                None or NaN marks a missing value
            headers: Optional item headers
            marker_names: Optional marker names
            allele_names: Optional allele names per marker
            name: Dataset name

        Raises:
            ConstructionError: If the frequencies are inconsistent or invalid
        """
        n = len(frequencies)
        if n == 0:
            raise ConstructionError("No genotype data (zero items).")
        super().__init__(name, n, headers)

        num_alleles = self._infer_num_alleles(frequencies)
        num_markers = len(num_alleles)

        offsets = np.zeros(num_markers + 1, dtype=int)
        offsets[1:] = np.cumsum(num_alleles)
        matrix = np.full((n, offsets[-1]), np.nan)

        for i, item_freqs in enumerate(frequencies):
            if item_freqs is None or len(item_freqs) != num_markers:
                raise ConstructionError(
                    f"Incorrect number of markers for item {i}. Expected: {num_markers}."
                )
            for m, marker_freqs in enumerate(item_freqs):
                matrix[i, offsets[m] : offsets[m + 1]] = self._check_marker(
                    marker_freqs, num_alleles[m], i, m
                )

        self._num_alleles = tuple(num_alleles)
        self._offsets = _read_only(offsets)
        self._frequencies = _read_only(matrix)
        self._filled = _read_only(np.nan_to_num(matrix, nan=0.0))
        self._missing = _read_only(
            np.logical_or.reduceat(np.isnan(matrix), offsets[:-1], axis=1)
        )
        self._marker_names = self._check_marker_names(marker_names, num_markers)
        self._allele_names = self._check_allele_names(allele_names, num_alleles)

        logger.debug(
            f"Genotype data '{name}': {n} items, {num_markers} markers, "
            f"{offsets[-1]} alleles, {int(self._missing.sum())} missing item-marker values"
        )

    @staticmethod
    def _infer_num_alleles(frequencies) -> List[int]:
        first = frequencies[0]
        if first is None or len(first) == 0:
            raise ConstructionError("No markers (zero columns) for item 0.")
        num_alleles = []
        for m, marker_freqs in enumerate(first):
            if marker_freqs is None or len(marker_freqs) == 0:
                raise ConstructionError(f"No alleles defined for item 0 at marker {m}.")
            num_alleles.append(len(marker_freqs))
        return num_alleles

    @staticmethod
    def _check_marker(marker_freqs, num_alleles: int, i: int, m: int) -> np.ndarray:
        if marker_freqs is None:
            raise ConstructionError(f"Allele frequencies not defined for item {i} at marker {m}.")
        if len(marker_freqs) != num_alleles:
            raise ConstructionError(
                f"Number of alleles per marker should be consistent across all items "
                f"(item {i}, marker {m}: expected {num_alleles}, got {len(marker_freqs)})."
            )
        values = np.array([np.nan if f is None else f for f in marker_freqs], dtype=float)
        observed = values[~np.isnan(values)]
        if np.any(observed < 0.0):
            raise ConstructionError(f"Negative allele frequency for item {i} at marker {m}.")
        total = observed.sum()
        if total > 1.0 + 1e-8:
            raise ConstructionError(
                f"Allele frequency sum should not exceed one (item {i}, marker {m}, sum {total:.4f})."
            )
        if len(observed) == num_alleles:
            if 1.0 - total > SUM_TO_ONE_PRECISION:
                raise ConstructionError(
                    f"Allele frequencies should sum to one (item {i}, marker {m}, sum {total:.4f})."
                )
            # normalize to remove small imprecisions
            values = values / total
        return values

    @staticmethod
    def _check_marker_names(marker_names, num_markers: int):
        if marker_names is None:
            return (None,) * num_markers
        if len(marker_names) != num_markers:
            raise ConstructionError(
                f"Incorrect number of marker names. Expected: {num_markers}, actual: {len(marker_names)}."
            )
        return tuple(marker_names)

    @staticmethod
    def _check_allele_names(allele_names, num_alleles):
        if allele_names is None:
            return tuple((None,) * a for a in num_alleles)
        if len(allele_names) != len(num_alleles):
            raise ConstructionError(
                f"Incorrect number of marker-allele names. Expected: {len(num_alleles)}, "
                f"actual: {len(allele_names)}."
            )
        checked = []
        for m, (names, a) in enumerate(zip(allele_names, num_alleles)):
            if names is None:
                checked.append((None,) * a)
            elif len(names) != a:
                raise ConstructionError(
                    f"Incorrect number of allele names for marker {m}. Expected: {a}, actual: {len(names)}."
                )
            else:
                checked.append(tuple(names))
        return tuple(checked)

    # Alternative input formats

    @classmethod
    def from_allele_scores(
        cls,
        scores: Sequence[Sequence[Optional[int]]],
        headers: Optional[Sequence[Optional[Header]]] = None,
        marker_names: Optional[Sequence[Optional[str]]] = None,
        name: str = "Biallelic marker data",
    ) -> GenotypeData:
        """
        Create genotype data from bi-allelic 0/1/2 scores.

        A score s gives frequencies (1 - s/2, s/2) for alleles "0" and "1".

        Args:
            scores: Per item, per marker score in {0, 1, 2} or None if missing
            headers: Optional item headers
            marker_names: Optional marker names
            name: Dataset name

        Raises:
            ConstructionError: If a score is outside {0, 1, 2}
        """
        if len(scores) == 0:
            raise ConstructionError("No genotype data (zero items).")
        frequencies = []
        for i, row in enumerate(scores):
            item_freqs = []
            for m, s in enumerate(row):
                if s is None:
                    item_freqs.append((None, None))
                elif s not in (0, 1, 2):
                    raise ConstructionError(
                        f"Unexpected allele score for item {i} at marker {m}. Got: {s} (allowed: 0, 1, 2)."
                    )
                else:
                    item_freqs.append((1.0 - s / 2.0, s / 2.0))
            frequencies.append(item_freqs)
        allele_names = [("0", "1")] * len(scores[0])
        return cls(frequencies, headers, marker_names, allele_names, name)

    @classmethod
    def from_observed_alleles(
        cls,
        observed: Sequence[Sequence[Sequence[Optional[str]]]],
        headers: Optional[Sequence[Optional[Header]]] = None,
        marker_names: Optional[Sequence[Optional[str]]] = None,
        name: str = "Default marker data",
    ) -> GenotypeData:
        """
        Create genotype data from observed allele names.

        Each (item, marker) lists the observed alleles, e.g. two for a
        diploid. Allele names of a marker are inferred and sorted; the
        frequency of an allele is its share of the observations. A single
        missing observation makes the whole marker missing for that item.

        Args:
            observed: Per item, per marker tuple of allele names (None if missing)
            headers: Optional item headers
            marker_names: Optional marker names
            name: Dataset name

        Raises:
            ConstructionError: If the number of observations per marker varies
                between items or a marker has no observed allele at all
        """
        n = len(observed)
        if n == 0:
            raise ConstructionError("No genotype data (zero items).")
        num_markers = len(observed[0])
        if num_markers == 0:
            raise ConstructionError("No markers (zero columns) for item 0.")

        alleles_per_marker = []
        for m in range(num_markers):
            ploidy = None
            names = set()
            for i in range(n):
                if len(observed[i]) != num_markers:
                    raise ConstructionError(
                        f"Incorrect number of markers for item {i}. Expected: {num_markers}, "
                        f"actual: {len(observed[i])}."
                    )
                obs = observed[i][m]
                if ploidy is None:
                    ploidy = len(obs)
                    if ploidy == 0:
                        raise ConstructionError(f"No allele observations for item {i} at marker {m}.")
                elif len(obs) != ploidy:
                    raise ConstructionError(
                        f"Incorrect number of observations for item {i} at marker {m}. "
                        f"Expected: {ploidy}, actual: {len(obs)}."
                    )
                names.update(a for a in obs if a is not None)
            if not names:
                raise ConstructionError(f"No data for marker {m}.")
            alleles_per_marker.append(sorted(names))

        frequencies = []
        for i in range(n):
            item_freqs = []
            for m, names in enumerate(alleles_per_marker):
                obs = observed[i][m]
                if any(a is None for a in obs):
                    item_freqs.append([None] * len(names))
                else:
                    counts = [obs.count(a) for a in names]
                    item_freqs.append([c / len(obs) for c in counts])
            frequencies.append(item_freqs)
        return cls(frequencies, headers, marker_names, alleles_per_marker, name)

    # Queries

    @property
    def num_markers(self) -> int:
        return len(self._num_alleles)

    def num_alleles(self, marker: int) -> int:
        return self._num_alleles[marker]

    @property
    def total_num_alleles(self) -> int:
        return int(self._offsets[-1])

    @property
    def marker_offsets(self) -> np.ndarray:
        """Column offsets of the markers, length num_markers + 1."""
        return self._offsets

    def marker_slice(self, marker: int) -> slice:
        return slice(int(self._offsets[marker]), int(self._offsets[marker + 1]))

    @property
    def frequencies(self) -> np.ndarray:
        """(n, total_alleles) frequencies, NaN where missing."""
        return self._frequencies

    @property
    def filled_frequencies(self) -> np.ndarray:
        """(n, total_alleles) frequencies with missing values as zero."""
        return self._filled

    @property
    def missing(self) -> np.ndarray:
        """(n, num_markers) flags of markers with missing values."""
        return self._missing

    def allele_frequency(self, item_id: int, marker: int, allele: int) -> Optional[float]:
        """Frequency of an allele for an item, None when missing."""
        self.validate_id(item_id)
        if not 0 <= allele < self._num_alleles[marker]:
            raise IndexError(f"Marker {marker} has no allele {allele}.")
        value = self._frequencies[item_id, self._offsets[marker] + allele]
        return None if np.isnan(value) else float(value)

    def marker_frequencies(self, item_id: int, marker: int) -> np.ndarray:
        self.validate_id(item_id)
        return self._frequencies[item_id, self.marker_slice(marker)].copy()

    def has_missing_values(self, item_id: int, marker: int) -> bool:
        self.validate_id(item_id)
        return bool(self._missing[item_id, marker])

    def marker_name(self, marker: int) -> Optional[str]:
        return self._marker_names[marker]

    def allele_name(self, marker: int, allele: int) -> Optional[str]:
        return self._allele_names[marker][allele]

    def __repr__(self) -> str:
        return (
            f"GenotypeData(name='{self.name}', size={self.size}, "
            f"markers={self.num_markers}, alleles={self.total_num_alleles})"
        )
