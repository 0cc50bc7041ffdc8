"""Average genotype accumulator for allelic diversity objectives."""

from .average_genotype import AverageGenotype
from .resolvers import AbstractMissingValueResolver, MostFrequentAlleleResolver, NoOpResolver

__all__ = [
    "AverageGenotype",
    "AbstractMissingValueResolver",
    "MostFrequentAlleleResolver",
    "NoOpResolver",
]
