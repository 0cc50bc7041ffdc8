"""Objectives and their evaluations."""

from .allelic_objectives import AllelicDiversityObjective, Coverage, HeterozygousLoci, Shannon
from .distance_objectives import (
    AverageAccessionToNearestEntryDistance,
    AverageEntryToEntryDistance,
    AverageEntryToNearestEntryDistance,
    DistanceObjective,
)
from .evaluations import (
    AllelicDiversityEvaluation,
    CoverageEvaluation,
    HeterozygousLociEvaluation,
    NearestEntry,
    NearestEntryEvaluation,
    PairwiseDistanceEvaluation,
    ShannonEvaluation,
    WeightedIndexEvaluation,
)
from .factory import create_index, create_measure, create_objective
from .weighted import WeightedIndex

__all__ = [
    "AllelicDiversityObjective",
    "Coverage",
    "HeterozygousLoci",
    "Shannon",
    "DistanceObjective",
    "AverageEntryToEntryDistance",
    "AverageEntryToNearestEntryDistance",
    "AverageAccessionToNearestEntryDistance",
    "AllelicDiversityEvaluation",
    "CoverageEvaluation",
    "HeterozygousLociEvaluation",
    "NearestEntry",
    "NearestEntryEvaluation",
    "PairwiseDistanceEvaluation",
    "ShannonEvaluation",
    "WeightedIndexEvaluation",
    "WeightedIndex",
    "create_index",
    "create_measure",
    "create_objective",
]
