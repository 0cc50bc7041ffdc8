"""
Subset solutions and moves.

A solution partitions the item ids of a dataset into selected and
unselected items. A move is a plain value listing the ids it adds to and
removes from the selection. Both are owned by the optimizer; objectives
only read them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable

from .errors import IncompatibleMoveError


@dataclass(frozen=True)
class SubsetMove:
    """
    Move that adds and removes items.

    Attributes:
        added: Ids of items added to the selection
        removed: Ids of items removed from the selection
    """

    added: FrozenSet[int] = frozenset()
    removed: FrozenSet[int] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "added", frozenset(self.added))
        object.__setattr__(self, "removed", frozenset(self.removed))

    @classmethod
    def swap(cls, add: int, remove: int) -> SubsetMove:
        """Create a move that swaps a single selected item for an unselected one."""
        return cls(added=frozenset((add,)), removed=frozenset((remove,)))

    @property
    def size_change(self) -> int:
        return len(self.added) - len(self.removed)

    def __repr__(self) -> str:
        return f"SubsetMove(added={sorted(self.added)}, removed={sorted(self.removed)})"


class SubsetSolution:
    """
    Selected/unselected partition of a fixed set of item ids.

    Solutions are immutable: applying a move returns a new solution.
    Subset size bounds are the optimizer's concern and are not checked.
    """

    def __init__(self, all_ids: Iterable[int], selected: Iterable[int] = ()):
        """
        Initialize SubsetSolution.

        Args:
            all_ids: Ids of all items (e.g. ``data.ids``)
            selected: Ids of the initially selected items

        Raises:
            ValueError: If a selected id is not among all ids
        """
        self._all_ids = frozenset(all_ids)
        self._selected = frozenset(selected)

        unknown = self._selected - self._all_ids
        if unknown:
            raise ValueError(f"Selected ids {sorted(unknown)} are not part of the solution's item ids")

    @property
    def all_ids(self) -> FrozenSet[int]:
        return self._all_ids

    @property
    def selected_ids(self) -> FrozenSet[int]:
        return self._selected

    @property
    def unselected_ids(self) -> FrozenSet[int]:
        return self._all_ids - self._selected

    @property
    def num_selected(self) -> int:
        return len(self._selected)

    def validate_move(self, move: object) -> SubsetMove:
        """
        Check that a move can be applied to this solution.

        Returns:
            The move, typed as SubsetMove

        Raises:
            IncompatibleMoveError: If the move is not a SubsetMove, adds and
                removes the same item, adds a selected item or removes an
                unselected one
        """
        if not isinstance(move, SubsetMove):
            raise IncompatibleMoveError(
                f"Objectives only evaluate moves of type SubsetMove, got {type(move).__name__}"
            )
        overlap = move.added & move.removed
        if overlap:
            raise IncompatibleMoveError(f"Move both adds and removes items {sorted(overlap)}")
        if not move.added <= self._all_ids or not move.removed <= self._all_ids:
            raise IncompatibleMoveError("Move refers to item ids outside of the solution")
        already = move.added & self._selected
        if already:
            raise IncompatibleMoveError(f"Move adds items {sorted(already)} that are already selected")
        absent = move.removed - self._selected
        if absent:
            raise IncompatibleMoveError(f"Move removes items {sorted(absent)} that are not selected")
        return move

    def apply(self, move: SubsetMove) -> SubsetSolution:
        """Return the solution obtained by applying a move."""
        move = self.validate_move(move)
        return SubsetSolution(self._all_ids, (self._selected - move.removed) | move.added)

    def __contains__(self, item_id: int) -> bool:
        return item_id in self._selected

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubsetSolution):
            return NotImplemented
        return self._all_ids == other._all_ids and self._selected == other._selected

    def __hash__(self) -> int:
        return hash((self._all_ids, self._selected))

    def __repr__(self) -> str:
        return f"SubsetSolution(selected={sorted(self._selected)}, n={len(self._all_ids)})"
