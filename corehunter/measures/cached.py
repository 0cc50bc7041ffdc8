"""
Caching of pairwise distances.

A DistanceCache is an explicit object owned by the caller and bound to a
single dataset. CachedDistanceMeasure wraps any measure and fills the
cache lazily on first access of each pair.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

import numpy as np

from corehunter.common.measure import AbstractDistanceMeasure, MissingValuesPolicy

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, MissingValuesPolicy]


class DistanceCache:
    """
    Dense symmetric stores of computed distances for one dataset.

    Distances are kept in one n x n table per (measure, missing values
    policy) key, so measures with different keys share the cache without
    invalidating each other. Entries not yet computed hold NaN; the
    diagonal is fixed at 0. Build it with ``thread_safe=True`` to share it
    between concurrent optimization runs.
    """

    def __init__(self, data: CoreHunterData, thread_safe: bool = False):
        """
        Initialize DistanceCache.

        Args:
            data: Dataset the cached distances belong to
            thread_safe: Guard table creation and writes with a lock
        """
        self._data = data
        self._tables: Dict[CacheKey, np.ndarray] = {}
        self._lock = threading.Lock() if thread_safe else None

    @property
    def data(self) -> CoreHunterData:
        return self._data

    @property
    def thread_safe(self) -> bool:
        return self._lock is not None

    def keys(self) -> List[CacheKey]:
        return list(self._tables)

    def check_dataset(self, data: CoreHunterData) -> None:
        if data is not self._data:
            raise ValueError(
                f"Distance cache is bound to {self._data!r} and cannot be used with {data!r}"
            )

    def _table(self, key: CacheKey) -> np.ndarray:
        table = self._tables.get(key)
        if table is None:
            table = np.full((self._data.size, self._data.size), np.nan)
            np.fill_diagonal(table, 0.0)
            self._tables[key] = table
            logger.debug(f"New distance table for {key[0]} ({key[1].name})")
        return table

    def get(self, key: CacheKey, id_x: int, id_y: int) -> Optional[float]:
        table = self._tables.get(key)
        if table is None:
            return 0.0 if id_x == id_y else None
        value = table[id_x, id_y]
        return None if np.isnan(value) else float(value)

    def row(self, key: CacheKey, id_x: int, others: np.ndarray) -> np.ndarray:
        table = self._tables.get(key)
        if table is None:
            return np.where(others == id_x, 0.0, np.nan)
        return table[id_x, others]

    def put(self, key: CacheKey, id_x: int, others, values) -> None:
        """Store distances from ``id_x`` to ``others`` on both sides of the diagonal."""
        if self._lock is None:
            self._store(key, id_x, others, values)
        else:
            with self._lock:
                self._store(key, id_x, others, values)

    def _store(self, key: CacheKey, id_x, others, values) -> None:
        table = self._table(key)
        table[id_x, others] = values
        table[others, id_x] = values

    def clear(self) -> None:
        """Drop all tables."""
        if self._lock is None:
            self._tables = {}
        else:
            with self._lock:
                self._tables = {}

    def num_cached(self, key: CacheKey) -> int:
        """Number of cached off-diagonal pairs under one key."""
        table = self._tables.get(key)
        if table is None:
            return 0
        return (int(np.count_nonzero(~np.isnan(table))) - self._data.size) // 2

    def __len__(self) -> int:
        """Number of cached off-diagonal pairs over all keys."""
        return sum(self.num_cached(key) for key in list(self._tables))

    def __repr__(self) -> str:
        return f"DistanceCache(size={self._data.size}, tables={len(self._tables)}, cached_pairs={len(self)})"


class CachedDistanceMeasure(AbstractDistanceMeasure):
    """
    Measure decorator that memoizes distances in a DistanceCache.

    The wrapped measure's missing values policy is used. Each call reads
    and fills the table of the measure and policy in effect when the call
    starts. Distances of an item to itself are 0 and never delegated.
    """

    def __init__(self, measure: AbstractDistanceMeasure, cache: DistanceCache):
        """
        Initialize CachedDistanceMeasure.

        Args:
            measure: Measure computing distances that are not cached yet
            cache: Cache to fill, owned by the caller
        """
        if not isinstance(measure, AbstractDistanceMeasure):
            raise TypeError(f"measure must be AbstractDistanceMeasure, got {type(measure)}")
        super().__init__(measure.missing_values_policy)
        self._measure = measure
        self._cache = cache
        self.name = getattr(measure, "name", type(measure).__name__)

    @property
    def measure(self) -> AbstractDistanceMeasure:
        return self._measure

    @property
    def cache(self) -> DistanceCache:
        return self._cache

    @property
    def cache_key(self) -> CacheKey:
        return (type(self._measure).__name__, self._measure.missing_values_policy)

    @property
    def missing_values_policy(self) -> MissingValuesPolicy:
        return self._measure.missing_values_policy

    def set_missing_values_policy(self, policy: MissingValuesPolicy) -> None:
        self._measure.set_missing_values_policy(policy)

    def distance(self, id_x: int, id_y: int, data: CoreHunterData) -> float:
        self._cache.check_dataset(data)
        data.validate_id(id_x)
        data.validate_id(id_y)
        if id_x == id_y:
            return 0.0
        key = self.cache_key
        cached = self._cache.get(key, id_x, id_y)
        if cached is not None:
            return cached
        value = self._measure.distance(id_x, id_y, data)
        self._cache.put(key, id_x, id_y, value)
        return value

    def compute_distance(self, id_x: int, id_y: int, data: CoreHunterData) -> float:
        return self.distance(id_x, id_y, data)

    def distances(self, id_x: int, others: Iterable[int], data: CoreHunterData) -> np.ndarray:
        self._cache.check_dataset(data)
        data.validate_id(id_x)
        others = np.fromiter(others, dtype=int)
        data.validate_ids(others)
        key = self.cache_key
        values = self._cache.row(key, id_x, others)
        todo = np.isnan(values)
        if np.any(todo):
            # unique ids: a group may list the same item twice
            pending = np.unique(others[todo])
            computed = self._measure.distances(id_x, pending, data)
            self._cache.put(key, id_x, pending, computed)
            logger.debug(f"Cached {len(pending)} distances from item {id_x}")
            values[todo] = computed[np.searchsorted(pending, others[todo])]
        return values

    def __repr__(self) -> str:
        return f"CachedDistanceMeasure({self._measure!r})"
