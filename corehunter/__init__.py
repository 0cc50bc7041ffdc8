"""
Core Hunter: objective evaluation for core subset selection

Distance measures, diversity accumulators and objectives used to score
subsets of genebank accessions from genotypes, phenotypes or precomputed
distances.
"""

__version__ = "0.1.0"

# Core abstractions
from .common import (
    Header,
    NamedData,
    AbstractDistanceMeasure,
    MissingValuesPolicy,
    AbstractEvaluation,
    SimpleEvaluation,
    AbstractObjective,
    SubsetMove,
    SubsetSolution,
    CoreHunterError,
    ConstructionError,
    MissingDataError,
    IncompatibleMoveError,
)

# Data
from .data import (
    GenotypeData,
    PhenotypeData,
    DistanceMatrixData,
    CoreHunterData,
    Feature,
    Scale,
    ScaleType,
)

# Measures
from .measures import (
    ModifiedRogersDistance,
    CavalliSforzaEdwardsDistance,
    GowerDistance,
    PrecomputedDistance,
    DistanceCache,
    CachedDistanceMeasure,
)

# Diversity accumulator
from .diversity import (
    AverageGenotype,
    AbstractMissingValueResolver,
    MostFrequentAlleleResolver,
    NoOpResolver,
)

# Objectives
from .objectives import (
    AverageEntryToEntryDistance,
    AverageEntryToNearestEntryDistance,
    AverageAccessionToNearestEntryDistance,
    Coverage,
    Shannon,
    HeterozygousLoci,
    WeightedIndex,
    create_measure,
    create_objective,
    create_index,
)

# Configuration
from .config import (
    ObjectiveType,
    MeasureType,
    ObjectiveConfig,
    CoreHunterArguments,
)

__all__ = [
    # Common
    "Header",
    "NamedData",
    "AbstractDistanceMeasure",
    "MissingValuesPolicy",
    "AbstractEvaluation",
    "SimpleEvaluation",
    "AbstractObjective",
    "SubsetMove",
    "SubsetSolution",
    "CoreHunterError",
    "ConstructionError",
    "MissingDataError",
    "IncompatibleMoveError",
    # Data
    "GenotypeData",
    "PhenotypeData",
    "DistanceMatrixData",
    "CoreHunterData",
    "Feature",
    "Scale",
    "ScaleType",
    # Measures
    "ModifiedRogersDistance",
    "CavalliSforzaEdwardsDistance",
    "GowerDistance",
    "PrecomputedDistance",
    "DistanceCache",
    "CachedDistanceMeasure",
    # Diversity
    "AverageGenotype",
    "AbstractMissingValueResolver",
    "MostFrequentAlleleResolver",
    "NoOpResolver",
    # Objectives
    "AverageEntryToEntryDistance",
    "AverageEntryToNearestEntryDistance",
    "AverageAccessionToNearestEntryDistance",
    "Coverage",
    "Shannon",
    "HeterozygousLoci",
    "WeightedIndex",
    "create_measure",
    "create_objective",
    "create_index",
    # Configuration
    "ObjectiveType",
    "MeasureType",
    "ObjectiveConfig",
    "CoreHunterArguments",
]
