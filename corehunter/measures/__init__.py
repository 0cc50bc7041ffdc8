"""Distance measures between items."""

from .cached import CachedDistanceMeasure, DistanceCache
from .genotype_measures import (
    CavalliSforzaEdwardsDistance,
    GenotypeDistanceMeasure,
    ModifiedRogersDistance,
)
from .gower import GowerDistance
from .precomputed import PrecomputedDistance

__all__ = [
    "CachedDistanceMeasure",
    "DistanceCache",
    "GenotypeDistanceMeasure",
    "ModifiedRogersDistance",
    "CavalliSforzaEdwardsDistance",
    "GowerDistance",
    "PrecomputedDistance",
]
