"""
Tests for genotype data.

Tests for corehunter/data/genotype.py
"""

from __future__ import annotations

import numpy as np
import pytest

from corehunter.common import ConstructionError, Header
from corehunter.data import GenotypeData


class TestGenotypeConstruction:
    """Test GenotypeData construction from frequencies."""

    def test_layout(self, genotypes):
        assert genotypes.size == 5
        assert genotypes.num_markers == 3
        assert [genotypes.num_alleles(m) for m in range(3)] == [2, 3, 2]
        assert genotypes.total_num_alleles == 7
        assert list(genotypes.marker_offsets) == [0, 2, 5, 7]
        assert genotypes.marker_slice(1) == slice(2, 5)
        assert genotypes.marker_name(2) == "mk3"
        assert genotypes.get_header(0) == Header(unique_identifier="acc-0")

    def test_frequencies(self, genotypes):
        assert genotypes.allele_frequency(1, 0, 1) == pytest.approx(0.5)
        np.testing.assert_allclose(genotypes.marker_frequencies(3, 1), [1 / 3] * 3)

    def test_read_only(self, genotypes):
        with pytest.raises(ValueError):
            genotypes.frequencies[0, 0] = 0.3

    def test_renormalizes_small_imprecision(self):
        data = GenotypeData([[[0.5, 0.495]]])
        total = data.marker_frequencies(0, 0).sum()
        assert total == pytest.approx(1.0, abs=1e-12)

    def test_rejects_sum_below_one(self):
        with pytest.raises(ConstructionError, match="sum to one"):
            GenotypeData([[[0.5, 0.4]]])

    def test_rejects_sum_above_one(self):
        with pytest.raises(ConstructionError, match="exceed one"):
            GenotypeData([[[0.7, 0.7]]])

    def test_rejects_negative(self):
        with pytest.raises(ConstructionError, match="Negative"):
            GenotypeData([[[1.2, -0.2]]])

    def test_rejects_inconsistent_alleles(self):
        with pytest.raises(ConstructionError, match="consistent"):
            GenotypeData([[[0.5, 0.5]], [[0.2, 0.3, 0.5]]])

    def test_rejects_inconsistent_markers(self):
        with pytest.raises(ConstructionError, match="number of markers"):
            GenotypeData([[[0.5, 0.5], [1.0]], [[0.5, 0.5]]])

    def test_rejects_empty(self):
        with pytest.raises(ConstructionError):
            GenotypeData([])
        with pytest.raises(ConstructionError):
            GenotypeData([[]])

    def test_rejects_wrong_name_counts(self):
        with pytest.raises(ConstructionError, match="marker names"):
            GenotypeData([[[1.0, 0.0]]], marker_names=["a", "b"])
        with pytest.raises(ConstructionError, match="allele names"):
            GenotypeData([[[1.0, 0.0]]], allele_names=[["x"]])


class TestGenotypeMissingValues:
    """Test handling of missing allele frequencies."""

    def test_missing_marker(self, genotypes_missing):
        assert genotypes_missing.has_missing_values(1, 0)
        assert genotypes_missing.allele_frequency(1, 0, 0) is None
        assert not genotypes_missing.has_missing_values(1, 1)

    def test_partially_missing_marker(self, genotypes_missing):
        """Test one missing allele makes the whole marker missing."""
        assert genotypes_missing.has_missing_values(4, 1)
        assert genotypes_missing.allele_frequency(4, 1, 0) == pytest.approx(0.5)

    def test_filled_frequencies(self, genotypes_missing):
        filled = genotypes_missing.filled_frequencies
        assert not np.any(np.isnan(filled))
        assert list(filled[1, 0:2]) == [0.0, 0.0]

    def test_missing_matrix(self, genotypes_missing):
        expected = np.zeros((5, 3), dtype=bool)
        expected[1, 0] = expected[3, 2] = expected[4, 1] = True
        np.testing.assert_array_equal(genotypes_missing.missing, expected)


class TestAlternativeFormats:
    """Test the bi-allelic score and observed allele factories."""

    def test_allele_scores(self):
        data = GenotypeData.from_allele_scores([[0, 1, None], [2, 2, 0]], marker_names=["a", "b", "c"])
        np.testing.assert_allclose(data.marker_frequencies(0, 1), [0.5, 0.5])
        np.testing.assert_allclose(data.marker_frequencies(1, 0), [0.0, 1.0])
        assert data.has_missing_values(0, 2)
        assert data.allele_name(0, 1) == "1"

    def test_invalid_score(self):
        with pytest.raises(ConstructionError, match="allele score"):
            GenotypeData.from_allele_scores([[3]])

    def test_observed_alleles(self):
        observed = [
            [("A", "B"), ("x", "x")],
            [("B", "B"), ("y", None)],
            [("C", "A"), ("x", "y")],
        ]
        data = GenotypeData.from_observed_alleles(observed)
        assert data.num_alleles(0) == 3
        assert [data.allele_name(0, a) for a in range(3)] == ["A", "B", "C"]
        np.testing.assert_allclose(data.marker_frequencies(0, 0), [0.5, 0.5, 0.0])
        np.testing.assert_allclose(data.marker_frequencies(2, 1), [0.5, 0.5])
        assert data.has_missing_values(1, 1)

    def test_observed_alleles_inconsistent_ploidy(self):
        with pytest.raises(ConstructionError, match="observations"):
            GenotypeData.from_observed_alleles([[("A", "B")], [("A",)]])
