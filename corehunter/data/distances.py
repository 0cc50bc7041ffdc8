"""
Precomputed distance matrix data.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

import numpy as np

from corehunter.common.data import NamedData
from corehunter.common.errors import ConstructionError
from corehunter.common.header import Header

logger = logging.getLogger(__name__)

SYMMETRY_TOLERANCE = 1e-8


class DistanceMatrixData(NamedData):
    """
    Symmetric matrix of precomputed pairwise distances with zero diagonal.
    """

    def __init__(
        self,
        distances: Sequence[Sequence[float]],
        headers: Optional[Sequence[Optional[Header]]] = None,
        name: str = "Precomputed distances",
    ):
        """
        Initialize DistanceMatrixData.

        Args:
            distances: Square n x n matrix of distances
            headers: Optional item headers
            name: Dataset name

        Raises:
            ConstructionError: If the matrix is not square, not symmetric,
                has a non-zero diagonal or contains negative or non-finite values
        """
        matrix = np.array(distances, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ConstructionError(f"Distance matrix must be square, got shape {matrix.shape}.")
        n = matrix.shape[0]
        if n == 0:
            raise ConstructionError("No distance data (zero items).")
        super().__init__(name, n, headers)

        if not np.all(np.isfinite(matrix)):
            raise ConstructionError("Distance matrix contains missing or non-finite values.")
        if np.any(matrix < 0.0):
            raise ConstructionError("Distance matrix contains negative distances.")
        if np.any(np.diag(matrix) != 0.0):
            raise ConstructionError("Distance matrix must have a zero diagonal.")
        if not np.allclose(matrix, matrix.T, rtol=0.0, atol=SYMMETRY_TOLERANCE):
            raise ConstructionError("Distance matrix must be symmetric.")

        # remove asymmetric rounding noise
        matrix = (matrix + matrix.T) / 2.0
        matrix.setflags(write=False)
        self._matrix = matrix

        logger.debug(f"Distance matrix '{name}': {n} items")

    @property
    def matrix(self) -> np.ndarray:
        """Read-only n x n distance matrix."""
        return self._matrix

    def distance(self, id_x: int, id_y: int) -> float:
        self.validate_id(id_x)
        self.validate_id(id_y)
        return float(self._matrix[id_x, id_y])

    def distances(self, id_x: int, others: Iterable[int]) -> np.ndarray:
        """Distances from one item to a group of items, aligned with ``others``."""
        self.validate_id(id_x)
        others = np.fromiter(others, dtype=int)
        self.validate_ids(others)
        return self._matrix[id_x, others]
