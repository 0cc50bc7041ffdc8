from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, FrozenSet, List, Optional, Tuple

from corehunter.common.errors import ConstructionError
from corehunter.common.schema_utils import SchemaClass

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData


class ObjectiveType(Enum):
    AV_EE = "average entry-to-entry distance"
    AV_EN = "average entry-to-nearest-entry distance"
    AV_AN = "average accession-to-nearest-entry distance"
    SH = "Shannon diversity"
    HE = "expected proportion of heterozygous loci"
    CV = "allele coverage"

    @property
    def requires_measure(self) -> bool:
        return self in (ObjectiveType.AV_EE, ObjectiveType.AV_EN, ObjectiveType.AV_AN)


class MeasureType(Enum):
    MODIFIED_ROGERS = "Modified Rogers"
    CAVALLI_SFORZA_EDWARDS = "Cavalli-Sforza and Edwards"
    GOWERS = "Gower"
    PRECOMPUTED_DISTANCE = "precomputed distance"


@dataclass
class ObjectiveConfig(SchemaClass):
    objective: ObjectiveType
    measure: Optional[MeasureType] = None

    # Only used when combined with other objectives
    weight: float = 1.0

    # Normalization bounds, used by a normalized weighted index
    lower_bound: Optional[float] = None
    upper_bound: Optional[float] = None

    def __post_init__(self):
        super().__post_init__()
        if not isinstance(self.objective, ObjectiveType):
            raise ConstructionError(f"objective must be ObjectiveType, got {type(self.objective)}")
        if self.measure is not None and not isinstance(self.measure, MeasureType):
            raise ConstructionError(f"measure must be MeasureType, got {type(self.measure)}")
        if not self.weight >= 0.0:
            raise ConstructionError(f"Objective weight must be non-negative, got {self.weight}")
        if (self.lower_bound is None) != (self.upper_bound is None):
            raise ConstructionError("Give both normalization bounds or none")
        if self.bounds is not None and not self.upper_bound > self.lower_bound:
            raise ConstructionError(
                f"Upper bound must exceed lower bound, got ({self.lower_bound}, {self.upper_bound})"
            )

    @property
    def bounds(self) -> Optional[Tuple[float, float]]:
        if self.lower_bound is None:
            return None
        return (self.lower_bound, self.upper_bound)


@dataclass
class CoreHunterArguments(SchemaClass):
    subset_size: int
    objectives: List[ObjectiveConfig] = field(default_factory=list)
    always_selected: FrozenSet[int] = frozenset()
    never_selected: FrozenSet[int] = frozenset()

    # Normalize objectives with their bounds; ignored for a single objective
    normalize: bool = False

    def __post_init__(self):
        super().__post_init__()
        self.always_selected = frozenset(self.always_selected)
        self.never_selected = frozenset(self.never_selected)
        if self.subset_size < 2:
            raise ConstructionError("Requested subset size must at least be 2 or more.")
        if not self.objectives:
            raise ConstructionError("Objectives not defined.")
        if self.always_selected & self.never_selected:
            raise ConstructionError("Sets of always and never selected IDs should be disjoint.")
        if len(self.always_selected) > self.subset_size:
            raise ConstructionError("Set of always selected IDs can not be larger than subset size.")

    @property
    def is_normalized(self) -> bool:
        return self.normalize and len(self.objectives) > 1

    def validate(self, data: CoreHunterData) -> None:
        """
        Check the arguments against the dataset of a run.

        Raises:
            ConstructionError: If the subset size does not fit the dataset,
                ids are out of range or too many ids are never selected
        """
        n = data.size
        if self.subset_size >= n:
            raise ConstructionError(
                f"Requested subset size must be less than total data size {n}."
            )
        out_of_range = sorted(i for i in self.always_selected | self.never_selected if not 0 <= i < n)
        if out_of_range:
            raise ConstructionError(f"Ids {out_of_range} are not valid for a dataset of size {n}.")
        if n - len(self.never_selected) < self.subset_size:
            raise ConstructionError(
                "Too many never selected IDs: can not obtain requested subset size."
            )
