"""
Tests for the unified dataset and header merging.

Tests for corehunter/data/dataset.py
"""

from __future__ import annotations

import pytest

from corehunter.common import ConstructionError, Header, MissingDataError
from corehunter.data import CoreHunterData, DistanceMatrixData, GenotypeData, merge_headers

MATRIX = [[0.0, 0.5], [0.5, 0.0]]
FREQUENCIES = [[[1.0, 0.0]], [[0.0, 1.0]]]


class TestCoreHunterData:
    """Test CoreHunterData construction."""

    def test_requires_some_data(self):
        with pytest.raises(ConstructionError, match="At least one"):
            CoreHunterData()

    def test_size_mismatch(self, genotypes):
        with pytest.raises(ConstructionError, match="different sizes"):
            CoreHunterData(genotypes=genotypes, distances=DistanceMatrixData(MATRIX))

    def test_all_data(self, full_data):
        assert full_data.size == 5
        assert full_data.genotypes is not None
        assert full_data.phenotypes is not None
        assert full_data.distances is not None

    def test_headers_merged(self, full_data):
        """Test headers of the genotypes are kept when others have none."""
        assert full_data.get_header(2) == Header("Accession 2", "acc-2")

    def test_missing_data(self, distance_data, genotype_data):
        with pytest.raises(MissingDataError) as info:
            distance_data.require_genotypes()
        assert info.value.kind == "genotypes"
        with pytest.raises(MissingDataError):
            distance_data.require_phenotypes()
        with pytest.raises(MissingDataError, match="precomputed distance matrix"):
            genotype_data.require_distances()
        assert distance_data.require_distances() is distance_data.distances


class TestMergeHeaders:
    """Test header merging rules."""

    def test_keeps_named_header(self):
        g = GenotypeData(FREQUENCIES, headers=[Header(None, "a"), None])
        d = DistanceMatrixData(MATRIX, headers=[Header("first", "a"), Header("second")])
        merged = merge_headers([g, d])
        assert merged[0].name == "first"
        assert merged[1] == Header("second")

    def test_conflicting_ids(self):
        g = GenotypeData(FREQUENCIES, headers=[Header("x", "a"), None])
        d = DistanceMatrixData(MATRIX, headers=[Header("x", "b"), None])
        with pytest.raises(ConstructionError, match="different ids"):
            CoreHunterData(genotypes=g, distances=d)

    def test_same_id_different_names(self):
        g = GenotypeData(FREQUENCIES, headers=[Header("x", "a"), None])
        d = DistanceMatrixData(MATRIX, headers=[Header("y", "a"), None])
        with pytest.raises(ConstructionError, match="different names"):
            CoreHunterData(genotypes=g, distances=d)

    def test_conflicting_names(self):
        g = GenotypeData(FREQUENCIES, headers=[None, Header("x")])
        d = DistanceMatrixData(MATRIX, headers=[None, Header("y")])
        with pytest.raises(ConstructionError, match="different names"):
            CoreHunterData(genotypes=g, distances=d)

    def test_id_on_one_side_only(self):
        """Test an id-only header conflicts with a name-only header."""
        g = GenotypeData(FREQUENCIES, headers=[Header("x", "a"), None])
        d = DistanceMatrixData(MATRIX, headers=[Header("x"), None])
        with pytest.raises(ConstructionError):
            CoreHunterData(genotypes=g, distances=d)
