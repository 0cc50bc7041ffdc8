"""
Build measures and objectives from configuration schemas.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from corehunter.common.errors import ConstructionError
from corehunter.common.measure import AbstractDistanceMeasure
from corehunter.common.objective import AbstractObjective
from corehunter.config.schemas import CoreHunterArguments, MeasureType, ObjectiveConfig, ObjectiveType
from corehunter.measures import (
    CachedDistanceMeasure,
    CavalliSforzaEdwardsDistance,
    DistanceCache,
    GowerDistance,
    ModifiedRogersDistance,
    PrecomputedDistance,
)

from .allelic_objectives import Coverage, HeterozygousLoci, Shannon
from .distance_objectives import (
    AverageAccessionToNearestEntryDistance,
    AverageEntryToEntryDistance,
    AverageEntryToNearestEntryDistance,
)
from .weighted import WeightedIndex

if TYPE_CHECKING:
    from corehunter.data.dataset import CoreHunterData

logger = logging.getLogger(__name__)

MEASURES = {
    MeasureType.MODIFIED_ROGERS: ModifiedRogersDistance,
    MeasureType.CAVALLI_SFORZA_EDWARDS: CavalliSforzaEdwardsDistance,
    MeasureType.GOWERS: GowerDistance,
    MeasureType.PRECOMPUTED_DISTANCE: PrecomputedDistance,
}

DISTANCE_OBJECTIVES = {
    ObjectiveType.AV_EE: AverageEntryToEntryDistance,
    ObjectiveType.AV_EN: AverageEntryToNearestEntryDistance,
    ObjectiveType.AV_AN: AverageAccessionToNearestEntryDistance,
}

ALLELIC_OBJECTIVES = {
    ObjectiveType.SH: Shannon,
    ObjectiveType.HE: HeterozygousLoci,
    ObjectiveType.CV: Coverage,
}


def _check_data(config: ObjectiveConfig, data: CoreHunterData) -> None:
    # fail at construction instead of at the first evaluation
    if config.objective in ALLELIC_OBJECTIVES:
        data.require_genotypes()
    elif config.measure in (MeasureType.MODIFIED_ROGERS, MeasureType.CAVALLI_SFORZA_EDWARDS):
        data.require_genotypes()
    elif config.measure is MeasureType.GOWERS:
        data.require_phenotypes()
    elif config.measure is MeasureType.PRECOMPUTED_DISTANCE:
        data.require_distances()


def create_measure(
    measure_type: MeasureType, cache: Optional[DistanceCache] = None
) -> AbstractDistanceMeasure:
    """
    Create a distance measure.

    Args:
        measure_type: Kind of measure
        cache: Optional cache; the measure is wrapped in a
            CachedDistanceMeasure filling it

    Returns:
        New measure instance
    """
    if measure_type not in MEASURES:
        raise ValueError(f"Unknown measure type: {measure_type}")
    measure = MEASURES[measure_type]()
    if cache is not None:
        measure = CachedDistanceMeasure(measure, cache)
    return measure


def create_objective(
    config: ObjectiveConfig,
    data: Optional[CoreHunterData] = None,
    cache: Optional[DistanceCache] = None,
) -> AbstractObjective:
    """
    Create an objective from its configuration.

    Args:
        config: Objective configuration
        data: Optional dataset to check the required data against
        cache: Optional distance cache for distance-based objectives

    Returns:
        New objective with its own measure instance

    Raises:
        ConstructionError: If a distance-based objective has no measure
        MissingDataError: If ``data`` lacks what the objective needs
    """
    if data is not None:
        _check_data(config, data)

    if config.objective.requires_measure:
        if config.measure is None:
            raise ConstructionError(
                f"A distance measure is required for objective {config.objective.name}."
            )
        measure = create_measure(config.measure, cache)
        objective = DISTANCE_OBJECTIVES[config.objective](measure)
    elif config.objective in ALLELIC_OBJECTIVES:
        if config.measure is not None:
            logger.warning(
                f"Objective {config.objective.name} does not use a distance measure, "
                f"ignoring {config.measure.name}"
            )
        objective = ALLELIC_OBJECTIVES[config.objective]()
    else:
        raise ValueError(f"Unknown objective type: {config.objective}")

    logger.debug(f"Created objective {objective!r}")
    return objective


def create_index(
    arguments: CoreHunterArguments,
    data: Optional[CoreHunterData] = None,
    cache: Optional[DistanceCache] = None,
) -> WeightedIndex:
    """
    Create the weighted index of all configured objectives.

    Normalization bounds are applied when the arguments ask for
    normalization and list more than one objective; each objective then
    needs both bounds.

    Args:
        arguments: Run arguments
        data: Optional dataset; when given the arguments are validated against it
        cache: Optional distance cache shared by the distance-based objectives;
            each measure and policy fills its own table in it

    Raises:
        ConstructionError: If normalization is requested and an objective has no bounds
    """
    if data is not None:
        arguments.validate(data)

    objectives = [create_objective(config, data, cache) for config in arguments.objectives]
    weights = [config.weight for config in arguments.objectives]

    bounds = None
    if arguments.is_normalized:
        unbounded = [c.objective.name for c in arguments.objectives if c.bounds is None]
        if unbounded:
            raise ConstructionError(f"Normalization bounds missing for objectives {unbounded}")
        bounds = [config.bounds for config in arguments.objectives]

    return WeightedIndex(objectives, weights, bounds)
