"""
Item headers.

Headers are only used to merge and validate datasets; objectives and
distance measures address items by integer id.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, eq=False)
class Header:
    """
    Optional (name, unique identifier) pair attached to an item.

    Two headers are equal by unique identifier when at least one of them
    has one, else by name.

    Attributes:
        name: Display name of the item
        unique_identifier: Identifier that is unique within a dataset
    """

    name: Optional[str] = None
    unique_identifier: Optional[str] = None

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Header):
            return NotImplemented
        if self.unique_identifier is not None or other.unique_identifier is not None:
            return self.unique_identifier == other.unique_identifier
        return self.name == other.name

    def __hash__(self) -> int:
        if self.unique_identifier is not None:
            return hash(("id", self.unique_identifier))
        return hash(("name", self.name))

    def __repr__(self) -> str:
        return f"Header(name={self.name!r}, unique_identifier={self.unique_identifier!r})"
