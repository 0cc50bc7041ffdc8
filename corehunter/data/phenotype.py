"""
Phenotype data.

Stores, for every item and feature, an observed value or None when
missing. Each feature declares a measurement scale; values are also kept
in an encoded numeric form (NaN for missing) that distance measures work
on directly.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Hashable, List, Optional, Sequence, Tuple

import numpy as np

from corehunter.common.data import NamedData
from corehunter.common.errors import ConstructionError
from corehunter.common.header import Header

logger = logging.getLogger(__name__)


class ScaleType(Enum):
    """Measurement scale of a feature."""

    BINARY = "binary"
    NOMINAL = "nominal"
    ORDINAL = "ordinal"
    INTERVAL = "interval"
    RATIO = "ratio"


class FeatureKind(IntEnum):
    """How a feature contributes to Gower's distance."""

    BINARY = 0
    NOMINAL = 1
    ORDINAL = 2
    RANGED = 3


@dataclass(frozen=True)
class Scale:
    """
    Scale of a feature.

    Attributes:
        scale_type: Type of scale
        values: Ordered possible values (required for ordinal scales,
            optional list of categories for nominal scales)
        minimum: Lower bound of interval/ratio scales (inferred if None)
        maximum: Upper bound of interval/ratio scales (inferred if None)
    """

    scale_type: ScaleType
    values: Optional[Tuple[Hashable, ...]] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    @property
    def kind(self) -> FeatureKind:
        if self.scale_type is ScaleType.BINARY:
            return FeatureKind.BINARY
        if self.scale_type is ScaleType.NOMINAL:
            return FeatureKind.NOMINAL
        if self.scale_type is ScaleType.ORDINAL:
            return FeatureKind.ORDINAL
        return FeatureKind.RANGED


@dataclass(frozen=True)
class Feature:
    """A phenotypic trait with its scale."""

    name: str
    scale: Scale


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


class PhenotypeData(NamedData):
    """
    Phenotypic trait values for a set of items.

    Binary features take booleans, nominal features any hashable value,
    ordinal features one of the scale's values and interval/ratio features
    numbers inside the scale bounds.
    """

    def __init__(
        self,
        features: Sequence[Feature],
        values: Sequence[Sequence[Any]],
        headers: Optional[Sequence[Optional[Header]]] = None,
        name: str = "Phenotypic data",
    ):
        """
        Initialize PhenotypeData.

        Args:
            features: Features (columns)
            values: Per item, per feature value; None marks a missing value
            headers: Optional item headers
            name: Dataset name

        Raises:
            ConstructionError: If values do not fit their feature's scale
        """
        n = len(values)
        if n == 0:
            raise ConstructionError("No phenotype data (zero items).")
        if len(features) == 0:
            raise ConstructionError("No features defined.")
        super().__init__(name, n, headers)

        k = len(features)
        for i, row in enumerate(values):
            if len(row) != k:
                raise ConstructionError(
                    f"Incorrect number of values for item {i}. Expected: {k}, actual: {len(row)}."
                )

        encoded = np.full((n, k), np.nan)
        kinds = np.zeros(k, dtype=int)
        ranges = np.zeros(k)
        resolved = []
        for j, feature in enumerate(features):
            column = [row[j] for row in values]
            encoded[:, j], ranges[j], scale = self._encode_column(feature, column)
            kinds[j] = feature.scale.kind
            resolved.append(Feature(feature.name, scale))

        for array in (encoded, kinds, ranges):
            array.setflags(write=False)

        self._features: Tuple[Feature, ...] = tuple(resolved)
        self._values = tuple(tuple(row) for row in values)
        self._encoded = encoded
        self._kinds = kinds
        self._ranges = ranges

        logger.debug(f"Phenotype data '{name}': {n} items, {k} features")

    @staticmethod
    def _encode_column(feature: Feature, column: List[Any]):
        scale = feature.scale
        scale_type = scale.scale_type
        codes = np.full(len(column), np.nan)
        present = [(i, v) for i, v in enumerate(column) if v is not None]

        if scale_type is ScaleType.BINARY:
            for i, v in present:
                if not isinstance(v, (bool, np.bool_)):
                    raise ConstructionError(
                        f"Binary feature '{feature.name}' expects booleans, got {v!r} for item {i}."
                    )
                codes[i] = 1.0 if v else 0.0
            return codes, 0.0, scale

        if scale_type in (ScaleType.NOMINAL, ScaleType.ORDINAL):
            if scale.values is None:
                if scale_type is ScaleType.ORDINAL:
                    raise ConstructionError(
                        f"Ordered list of possible values required for ordinal feature '{feature.name}'."
                    )
                categories = list(dict.fromkeys(v for _, v in present))
                scale = Scale(scale_type, values=tuple(categories))
            if scale_type is ScaleType.ORDINAL and len(scale.values) == 0:
                raise ConstructionError(
                    f"Ordered list of possible values required for ordinal feature '{feature.name}'."
                )
            index = {v: c for c, v in enumerate(scale.values)}
            for i, v in present:
                if v not in index:
                    raise ConstructionError(
                        f"Value {v!r} of item {i} is not a possible value of feature '{feature.name}'."
                    )
                codes[i] = index[v]
            value_range = float(len(scale.values) - 1) if scale_type is ScaleType.ORDINAL else 0.0
            return codes, value_range, scale

        # interval / ratio
        for i, v in present:
            if not _is_number(v):
                raise ConstructionError(
                    f"Numeric feature '{feature.name}' expects numbers, got {v!r} for item {i}."
                )
            codes[i] = float(v)
        observed = codes[~np.isnan(codes)]
        minimum = scale.minimum
        maximum = scale.maximum
        if minimum is None:
            minimum = float(observed.min()) if len(observed) else 0.0
        if maximum is None:
            maximum = float(observed.max()) if len(observed) else 0.0
        if minimum > maximum:
            raise ConstructionError(
                f"Minimum {minimum} exceeds maximum {maximum} for feature '{feature.name}'."
            )
        if len(observed) and (observed.min() < minimum or observed.max() > maximum):
            raise ConstructionError(
                f"Values of feature '{feature.name}' fall outside the scale bounds [{minimum}, {maximum}]."
            )
        scale = Scale(scale_type, scale.values, minimum, maximum)
        return codes, maximum - minimum, scale

    @property
    def features(self) -> Tuple[Feature, ...]:
        """Features, with inferred categories and bounds filled in."""
        return self._features

    @property
    def num_features(self) -> int:
        return len(self._features)

    @property
    def encoded_values(self) -> np.ndarray:
        """(n, k) numeric codes of the values, NaN where missing."""
        return self._encoded

    @property
    def feature_kinds(self) -> np.ndarray:
        """(k,) FeatureKind codes."""
        return self._kinds

    @property
    def ranges(self) -> np.ndarray:
        """(k,) value ranges of ordinal and interval/ratio features (0 otherwise)."""
        return self._ranges

    def value(self, item_id: int, feature: int) -> Any:
        """Original value of a feature for an item, None when missing."""
        self.validate_id(item_id)
        return self._values[item_id][feature]

    def is_missing(self, item_id: int, feature: int) -> bool:
        return self.value(item_id, feature) is None

    def __repr__(self) -> str:
        return f"PhenotypeData(name='{self.name}', size={self.size}, features={self.num_features})"
