"""
Allelic diversity objectives computed from the average genotype of a selection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Type

from corehunter.common.evaluation import AbstractEvaluation
from corehunter.common.objective import AbstractObjective
from corehunter.common.solution import SubsetMove, SubsetSolution
from corehunter.diversity import AbstractMissingValueResolver, AverageGenotype

from .evaluations import (
    AllelicDiversityEvaluation,
    CoverageEvaluation,
    HeterozygousLociEvaluation,
    ShannonEvaluation,
)

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData

logger = logging.getLogger(__name__)


class AllelicDiversityObjective(AbstractObjective):
    """
    Base class for objectives scored from the average genotype.

    A delta evaluation updates the average genotype of the previous
    evaluation with the added and removed items and scores the result.
    All allelic diversity objectives are maximized.

    Attributes:
        resolver: Missing value resolution rule for the average genotype
            (most frequent allele when None)
    """

    evaluation_class: Type[AllelicDiversityEvaluation] = AllelicDiversityEvaluation

    def __init__(self, resolver: Optional[AbstractMissingValueResolver] = None):
        if resolver is not None and not isinstance(resolver, AbstractMissingValueResolver):
            raise TypeError(
                f"resolver must be AbstractMissingValueResolver, got {type(resolver)}"
            )
        self.resolver = resolver

    def evaluate(self, solution: SubsetSolution, data: CoreHunterData) -> AllelicDiversityEvaluation:
        genotypes = data.require_genotypes()
        average = AverageGenotype.from_selection(solution.selected_ids, genotypes, self.resolver)
        evaluation = self.evaluation_class(average)
        logger.debug(f"{self.name}: {average.num_selected} selected, value {evaluation.value():.6g}")
        return evaluation

    def evaluate_delta(
        self,
        move: SubsetMove,
        solution: SubsetSolution,
        evaluation: AbstractEvaluation,
        data: CoreHunterData,
    ) -> AllelicDiversityEvaluation:
        move = solution.validate_move(move)
        evaluation = self._check_evaluation(evaluation, self.evaluation_class)
        genotypes = data.require_genotypes()
        average = evaluation.average_genotype.update(move.added, move.removed, genotypes)
        return self.evaluation_class(average)

    def is_minimizing(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(resolver={self.resolver!r})"


class Coverage(AllelicDiversityObjective):
    """Proportion of all alleles in the dataset that occur in the selection."""

    name = "Coverage"
    evaluation_class = CoverageEvaluation


class Shannon(AllelicDiversityObjective):
    """Shannon's diversity index of the average genotype."""

    name = "Shannon diversity"
    evaluation_class = ShannonEvaluation


class HeterozygousLoci(AllelicDiversityObjective):
    """Expected proportion of heterozygous loci."""

    name = "Heterozygous loci"
    evaluation_class = HeterozygousLociEvaluation
