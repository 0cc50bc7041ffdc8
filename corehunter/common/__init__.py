"""Common abstractions shared by data, measures and objectives."""

from .data import NamedData
from .errors import (
    ConstructionError,
    CoreHunterError,
    IncompatibleMoveError,
    MissingDataError,
)
from .evaluation import AbstractEvaluation, SimpleEvaluation
from .header import Header
from .measure import AbstractDistanceMeasure, MissingValuesPolicy
from .objective import AbstractObjective
from .solution import SubsetMove, SubsetSolution

__all__ = [
    "NamedData",
    "CoreHunterError",
    "ConstructionError",
    "MissingDataError",
    "IncompatibleMoveError",
    "AbstractEvaluation",
    "SimpleEvaluation",
    "Header",
    "AbstractDistanceMeasure",
    "MissingValuesPolicy",
    "AbstractObjective",
    "SubsetMove",
    "SubsetSolution",
]
