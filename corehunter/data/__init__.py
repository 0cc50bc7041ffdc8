"""Genotype, phenotype and distance data and the unified dataset."""

from .dataset import CoreHunterData, merge_headers
from .distances import DistanceMatrixData
from .genotype import GenotypeData
from .phenotype import Feature, FeatureKind, PhenotypeData, Scale, ScaleType

__all__ = [
    "CoreHunterData",
    "merge_headers",
    "DistanceMatrixData",
    "GenotypeData",
    "PhenotypeData",
    "Feature",
    "FeatureKind",
    "Scale",
    "ScaleType",
]
