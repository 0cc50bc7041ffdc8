"""
Tests for run configuration schemas.

Tests for corehunter/config/schemas.py
"""

from __future__ import annotations

import copy
import json

import pytest

from corehunter.common import ConstructionError
from corehunter.config import CoreHunterArguments, MeasureType, ObjectiveConfig, ObjectiveType


def make_arguments(**kwargs) -> CoreHunterArguments:
    defaults = dict(
        subset_size=2,
        objectives=[ObjectiveConfig(ObjectiveType.AV_EE, MeasureType.MODIFIED_ROGERS)],
    )
    defaults.update(kwargs)
    return CoreHunterArguments(**defaults)


class TestObjectiveConfig:
    """Test ObjectiveConfig validation and value semantics."""

    def test_defaults(self):
        config = ObjectiveConfig(ObjectiveType.SH)
        assert config.measure is None
        assert config.weight == 1.0
        assert config.bounds is None

    def test_requires_measure(self):
        assert ObjectiveType.AV_AN.requires_measure
        assert not ObjectiveType.CV.requires_measure

    def test_bounds(self):
        config = ObjectiveConfig(ObjectiveType.CV, lower_bound=0.2, upper_bound=0.9)
        assert config.bounds == (0.2, 0.9)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"weight": -1.0},
            {"lower_bound": 0.0},
            {"lower_bound": 1.0, "upper_bound": 0.5},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ConstructionError):
            ObjectiveConfig(ObjectiveType.CV, **kwargs)

    def test_invalid_types(self):
        with pytest.raises(ConstructionError):
            ObjectiveConfig("CV")
        with pytest.raises(ConstructionError):
            ObjectiveConfig(ObjectiveType.AV_EE, measure="Gower")

    def test_id_and_str(self):
        a = ObjectiveConfig(ObjectiveType.AV_EN, MeasureType.GOWERS, weight=0.5)
        b = ObjectiveConfig(ObjectiveType.AV_EN, MeasureType.GOWERS, weight=0.5)
        c = ObjectiveConfig(ObjectiveType.AV_EN, MeasureType.PRECOMPUTED_DISTANCE, weight=0.5)
        assert a.get_id() == b.get_id()
        assert a.get_id() != c.get_id()
        parsed = json.loads(str(a))
        assert parsed["measure"] == "Gower"
        assert parsed["weight"] == 0.5


class TestCoreHunterArguments:
    """Test CoreHunterArguments validation."""

    def test_construction(self):
        arguments = make_arguments(always_selected=[0], never_selected={3, 4})
        assert arguments.always_selected == frozenset({0})
        assert arguments.never_selected == frozenset({3, 4})
        assert not arguments.is_normalized

    def test_subset_size_at_least_two(self):
        with pytest.raises(ConstructionError, match="at least be 2"):
            make_arguments(subset_size=1)

    def test_requires_objectives(self):
        with pytest.raises(ConstructionError, match="Objectives not defined"):
            make_arguments(objectives=[])

    def test_disjoint_sets(self):
        with pytest.raises(ConstructionError, match="disjoint"):
            make_arguments(always_selected={1}, never_selected={1, 2})

    def test_too_many_always_selected(self):
        with pytest.raises(ConstructionError, match="larger than subset size"):
            make_arguments(always_selected={0, 1, 2})

    def test_normalized_only_with_several_objectives(self):
        single = make_arguments(normalize=True)
        assert not single.is_normalized
        several = make_arguments(
            normalize=True,
            objectives=[ObjectiveConfig(ObjectiveType.CV), ObjectiveConfig(ObjectiveType.SH)],
        )
        assert several.is_normalized

    def test_validate(self, genotype_data):
        make_arguments(subset_size=4).validate(genotype_data)
        with pytest.raises(ConstructionError, match="less than total data size"):
            make_arguments(subset_size=5).validate(genotype_data)
        with pytest.raises(ConstructionError, match="not valid"):
            make_arguments(never_selected={7}).validate(genotype_data)
        with pytest.raises(ConstructionError, match="Too many never selected"):
            make_arguments(subset_size=3, never_selected={0, 1, 2}).validate(genotype_data)

    def test_id_ignores_set_order(self):
        a = make_arguments(never_selected=[4, 3])
        b = make_arguments(never_selected=[3, 4])
        assert a.get_id() == b.get_id()

    def test_copies_are_independent(self):
        arguments = make_arguments()
        copied = copy.deepcopy(arguments)
        copied.objectives.append(ObjectiveConfig(ObjectiveType.CV))
        assert len(arguments.objectives) == 1
