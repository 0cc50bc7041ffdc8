"""
Tests for phenotype data.

Tests for corehunter/data/phenotype.py
"""

from __future__ import annotations

import numpy as np
import pytest

from corehunter.common import ConstructionError
from corehunter.data import Feature, PhenotypeData, Scale, ScaleType
from corehunter.data.phenotype import FeatureKind


class TestPhenotypeData:
    """Test PhenotypeData encoding and validation."""

    def test_encoding(self, phenotypes):
        encoded = phenotypes.encoded_values
        np.testing.assert_array_equal(encoded[0], [1.0, 0.0, 0.0, 2.0])
        np.testing.assert_array_equal(encoded[1], [0.0, 1.0, 2.0, 8.0])
        assert np.isnan(encoded[2, 3])
        assert np.isnan(encoded[4, 1])

    def test_kinds_and_ranges(self, phenotypes):
        assert list(phenotypes.feature_kinds) == [
            FeatureKind.BINARY,
            FeatureKind.NOMINAL,
            FeatureKind.ORDINAL,
            FeatureKind.RANGED,
        ]
        np.testing.assert_array_equal(phenotypes.ranges, [0.0, 0.0, 2.0, 10.0])

    def test_values(self, phenotypes):
        assert phenotypes.value(3, 1) == "black"
        assert phenotypes.is_missing(4, 1)
        assert not phenotypes.is_missing(4, 0)

    def test_inferred_bounds(self):
        features = [Feature("weight", Scale(ScaleType.RATIO))]
        data = PhenotypeData(features, [[3.0], [7.5], [None]])
        scale = data.features[0].scale
        assert (scale.minimum, scale.maximum) == (3.0, 7.5)
        assert data.ranges[0] == pytest.approx(4.5)

    def test_inferred_categories(self):
        features = [Feature("shape", Scale(ScaleType.NOMINAL))]
        data = PhenotypeData(features, [["round"], ["long"], ["round"]])
        assert data.features[0].scale.values == ("round", "long")

    def test_binary_requires_booleans(self):
        features = [Feature("awned", Scale(ScaleType.BINARY))]
        with pytest.raises(ConstructionError, match="booleans"):
            PhenotypeData(features, [[1]])

    def test_ordinal_requires_values(self):
        features = [Feature("height", Scale(ScaleType.ORDINAL))]
        with pytest.raises(ConstructionError, match="ordinal"):
            PhenotypeData(features, [["low"]])

    def test_unknown_category(self):
        features = [Feature("height", Scale(ScaleType.ORDINAL, values=("low", "high")))]
        with pytest.raises(ConstructionError, match="not a possible value"):
            PhenotypeData(features, [["mid"]])

    def test_numeric_requires_numbers(self):
        features = [Feature("yield", Scale(ScaleType.INTERVAL))]
        with pytest.raises(ConstructionError, match="numbers"):
            PhenotypeData(features, [["high"]])
        with pytest.raises(ConstructionError, match="numbers"):
            PhenotypeData(features, [[True]])

    def test_value_outside_bounds(self):
        features = [Feature("yield", Scale(ScaleType.INTERVAL, minimum=0.0, maximum=1.0))]
        with pytest.raises(ConstructionError, match="outside"):
            PhenotypeData(features, [[2.0]])

    def test_row_length(self):
        features = [Feature("awned", Scale(ScaleType.BINARY))]
        with pytest.raises(ConstructionError, match="number of values"):
            PhenotypeData(features, [[True, False]])
