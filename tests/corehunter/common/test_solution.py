"""
Tests for subset solutions and moves.

Tests for corehunter/common/solution.py
"""

from __future__ import annotations

import pytest

from corehunter.common import IncompatibleMoveError, SubsetMove, SubsetSolution


class TestSubsetMove:
    """Test SubsetMove value semantics."""

    def test_fields_become_frozensets(self):
        move = SubsetMove(added=[1, 2], removed=(3,))
        assert move.added == frozenset({1, 2})
        assert move.removed == frozenset({3})
        assert move.size_change == 1

    def test_swap(self):
        move = SubsetMove.swap(add=4, remove=1)
        assert move == SubsetMove({4}, {1})
        assert move.size_change == 0

    def test_hashable(self):
        assert len({SubsetMove({1}), SubsetMove([1])}) == 1


class TestSubsetSolution:
    """Test SubsetSolution and move validation."""

    def test_partition(self):
        solution = SubsetSolution(range(5), {1, 3})
        assert solution.selected_ids == frozenset({1, 3})
        assert solution.unselected_ids == frozenset({0, 2, 4})
        assert solution.num_selected == 2
        assert 1 in solution and 2 not in solution

    def test_unknown_selected_id(self):
        with pytest.raises(ValueError):
            SubsetSolution(range(3), {5})

    def test_apply_returns_new_solution(self):
        solution = SubsetSolution(range(5), {1, 2})
        moved = solution.apply(SubsetMove.swap(add=3, remove=2))
        assert moved.selected_ids == frozenset({1, 3})
        assert solution.selected_ids == frozenset({1, 2})
        assert moved == SubsetSolution(range(5), {3, 1})

    def test_rejects_non_move(self):
        solution = SubsetSolution(range(5), {1, 2})
        with pytest.raises(IncompatibleMoveError):
            solution.validate_move(({3}, {2}))

    def test_rejects_overlap(self):
        solution = SubsetSolution(range(5), {1, 2})
        with pytest.raises(IncompatibleMoveError, match="both adds and removes"):
            solution.validate_move(SubsetMove({2}, {2}))

    def test_rejects_adding_selected(self):
        solution = SubsetSolution(range(5), {1, 2})
        with pytest.raises(IncompatibleMoveError, match="already selected"):
            solution.validate_move(SubsetMove(added={1}))

    def test_rejects_removing_unselected(self):
        solution = SubsetSolution(range(5), {1, 2})
        with pytest.raises(IncompatibleMoveError, match="not selected"):
            solution.apply(SubsetMove(removed={4}))

    def test_rejects_unknown_ids(self):
        solution = SubsetSolution(range(5), {1, 2})
        with pytest.raises(IncompatibleMoveError, match="outside"):
            solution.validate_move(SubsetMove(added={7}))

    def test_incompatible_move_is_value_error(self):
        solution = SubsetSolution(range(5), {1, 2})
        with pytest.raises(ValueError):
            solution.validate_move(SubsetMove({1}))
