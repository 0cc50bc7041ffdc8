"""
Exception hierarchy for the evaluation engine.

Every failure aborts the single call that raised it; nothing is retried
or recovered inside the engine.
"""

from __future__ import annotations


class CoreHunterError(Exception):
    """Base class for all engine errors."""


class ConstructionError(CoreHunterError, ValueError):
    """
    Raised when a dataset or run configuration cannot be built.

    Covers inconsistent sizes or headers across sub-datasets, a missing
    required argument and malformed sub-dataset contents.
    """


class MissingDataError(CoreHunterError):
    """
    Raised when a measure or objective needs data the dataset lacks.

    Attributes:
        kind: Name of the absent data ("genotypes", "phenotypes" or "distances")
    """

    def __init__(self, kind: str, message: str = ""):
        self.kind = kind
        super().__init__(message or f"{kind.capitalize()} are required but not present in the dataset.")


class IncompatibleMoveError(CoreHunterError, ValueError):
    """Raised when delta evaluation receives a move it cannot interpret."""
