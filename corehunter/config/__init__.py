"""Run configuration schemas."""

from .schemas import CoreHunterArguments, MeasureType, ObjectiveConfig, ObjectiveType

__all__ = [
    "CoreHunterArguments",
    "MeasureType",
    "ObjectiveConfig",
    "ObjectiveType",
]
