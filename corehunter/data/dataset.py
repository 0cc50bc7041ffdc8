"""
Unified dataset.

CoreHunterData combines genotype, phenotype and precomputed distance data
describing the same ordered set of items. It is the only data object that
measures and objectives receive.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from corehunter.common.data import NamedData
from corehunter.common.errors import ConstructionError, MissingDataError
from corehunter.common.header import Header

from .distances import DistanceMatrixData
from .genotype import GenotypeData
from .phenotype import PhenotypeData

logger = logging.getLogger(__name__)


def _merge_header(i: int, h1: Optional[Header], h2: Optional[Header]) -> Optional[Header]:
    if h1 is None:
        return h2
    if h2 is None:
        return h1
    if h1 != h2:
        if h1.unique_identifier is not None or h2.unique_identifier is not None:
            raise ConstructionError(
                f"Headers do not match for item {i}. Got different ids "
                f"{h1.unique_identifier} and {h2.unique_identifier}."
            )
        raise ConstructionError(
            f"Headers do not match for item {i}. Got different names {h1.name} and {h2.name}."
        )
    # equal means same id (or same name when neither has an id): check names
    if h1.name is not None and h2.name is not None and h1.name != h2.name:
        raise ConstructionError(
            f"Headers do not match for item {i}. Got same id {h1.unique_identifier} "
            f"but different names {h1.name} and {h2.name}."
        )
    # keep the one carrying a name
    return h1 if h1.name is not None else h2


def merge_headers(datasets: Sequence[NamedData]) -> List[Optional[Header]]:
    """
    Merge the headers of datasets of equal size.

    Raises:
        ConstructionError: If two datasets carry conflicting headers for an item
    """
    merged = list(datasets[0].headers)
    for data in datasets[1:]:
        merged = [_merge_header(i, h1, h2) for i, (h1, h2) in enumerate(zip(merged, data.headers))]
    return merged


class CoreHunterData(NamedData):
    """
    Genotypes, phenotypes and/or precomputed distances for the same items.

    At least one kind of data must be given; all given datasets must have
    the same size and agree on item headers. Instances are immutable.
    """

    def __init__(
        self,
        genotypes: Optional[GenotypeData] = None,
        phenotypes: Optional[PhenotypeData] = None,
        distances: Optional[DistanceMatrixData] = None,
        name: str = "Core Hunter data",
    ):
        """
        Initialize CoreHunterData.

        Args:
            genotypes: Optional genotype data
            phenotypes: Optional phenotype data
            distances: Optional precomputed distance matrix
            name: Dataset name

        Raises:
            ConstructionError: If no data is given, sizes differ or headers conflict
        """
        datasets = [d for d in (genotypes, phenotypes, distances) if d is not None]
        if not datasets:
            raise ConstructionError(
                "At least one type of data (genotypes, phenotypes, distances) should be defined."
            )

        sizes = sorted({d.size for d in datasets})
        if len(sizes) > 1:
            raise ConstructionError(
                "Provided datasets have different sizes: "
                + ", ".join(f"{type(d).__name__}={d.size}" for d in datasets)
            )

        super().__init__(name, sizes[0], merge_headers(datasets))

        self._genotypes = genotypes
        self._phenotypes = phenotypes
        self._distances = distances

        logger.info(
            f"Created dataset '{name}' with {self.size} items "
            f"(genotypes: {genotypes is not None}, phenotypes: {phenotypes is not None}, "
            f"distances: {distances is not None})"
        )

    @property
    def genotypes(self) -> Optional[GenotypeData]:
        return self._genotypes

    @property
    def phenotypes(self) -> Optional[PhenotypeData]:
        return self._phenotypes

    @property
    def distances(self) -> Optional[DistanceMatrixData]:
        return self._distances

    def require_genotypes(self) -> GenotypeData:
        if self._genotypes is None:
            raise MissingDataError("genotypes")
        return self._genotypes

    def require_phenotypes(self) -> PhenotypeData:
        if self._phenotypes is None:
            raise MissingDataError("phenotypes")
        return self._phenotypes

    def require_distances(self) -> DistanceMatrixData:
        if self._distances is None:
            raise MissingDataError("distances", "No precomputed distance matrix has been defined.")
        return self._distances

    def __repr__(self) -> str:
        parts = [
            kind
            for kind, d in (
                ("genotypes", self._genotypes),
                ("phenotypes", self._phenotypes),
                ("distances", self._distances),
            )
            if d is not None
        ]
        return f"CoreHunterData(size={self.size}, data=[{', '.join(parts)}])"
