"""
Base class for item-indexed datasets.

Every dataset addresses its items by dense integer ids 0..n-1 and may
attach an optional header to each item.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import ConstructionError
from .header import Header


class NamedData:
    """
    Dataset of n items with optional per-item headers.

    Attributes:
        name: Dataset name (e.g. the file it was read from)
    """

    def __init__(
        self,
        name: str,
        size: int,
        headers: Optional[Sequence[Optional[Header]]] = None,
    ):
        """
        Initialize NamedData.

        Args:
            name: Dataset name
            size: Number of items
            headers: Optional headers, one per item (None entries allowed)

        Raises:
            ConstructionError: If the number of headers does not match the size
                or unique identifiers are duplicated
        """
        if size < 0:
            raise ConstructionError(f"Dataset size must be non-negative, got {size}")

        if headers is None:
            headers = (None,) * size
        elif len(headers) != size:
            raise ConstructionError(
                f"Incorrect number of headers. Expected: {size}, actual: {len(headers)}."
            )

        seen = set()
        for header in headers:
            if header is not None and header.unique_identifier is not None:
                if header.unique_identifier in seen:
                    raise ConstructionError(
                        f"Identifiers are not unique. Duplicate identifier: {header.unique_identifier}."
                    )
                seen.add(header.unique_identifier)

        self.name = name
        self._size = size
        self._headers: Tuple[Optional[Header], ...] = tuple(headers)

    @property
    def size(self) -> int:
        """Number of items."""
        return self._size

    @property
    def ids(self) -> range:
        """Item ids 0..n-1."""
        return range(self._size)

    @property
    def headers(self) -> Tuple[Optional[Header], ...]:
        return self._headers

    def get_header(self, item_id: int) -> Optional[Header]:
        """Get the header of an item (None if it has none)."""
        self.validate_id(item_id)
        return self._headers[item_id]

    def validate_id(self, item_id: int) -> None:
        if not 0 <= item_id < self._size:
            raise IndexError(f"There is no item with id {item_id}.")

    def validate_ids(self, item_ids: np.ndarray) -> None:
        """Check that every id in an array belongs to an item."""
        invalid = item_ids[(item_ids < 0) | (item_ids >= self._size)]
        if len(invalid) > 0:
            raise IndexError(f"There is no item with id {int(invalid[0])}.")

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', size={self._size})"
