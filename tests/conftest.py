"""
Pytest configuration and shared fixtures for corehunter tests.

Provides small hand-checkable datasets (genotypes, phenotypes, distances,
with and without missing values) and a seeded random dataset for
delta/full equivalence tests.
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from corehunter.common import Header
from corehunter.data import (
    CoreHunterData,
    DistanceMatrixData,
    Feature,
    GenotypeData,
    PhenotypeData,
    Scale,
    ScaleType,
)

# =============================================================================
# Genotype Fixtures
# =============================================================================

# 5 items, 3 markers with 2, 3 and 2 alleles
GENOTYPE_FREQUENCIES = [
    [[1.0, 0.0], [0.5, 0.5, 0.0], [0.0, 1.0]],
    [[0.5, 0.5], [0.0, 1.0, 0.0], [1.0, 0.0]],
    [[0.0, 1.0], [0.0, 0.0, 1.0], [0.5, 0.5]],
    [[1.0, 0.0], [1 / 3, 1 / 3, 1 / 3], [1.0, 0.0]],
    [[0.5, 0.5], [0.0, 0.5, 0.5], [0.0, 1.0]],
]

# Same items; item 1 misses marker 0, item 3 misses marker 2 and item 4
# has a partially missing marker 1
GENOTYPE_FREQUENCIES_MISSING = [
    [[1.0, 0.0], [0.5, 0.5, 0.0], [0.0, 1.0]],
    [[None, None], [0.0, 1.0, 0.0], [1.0, 0.0]],
    [[0.0, 1.0], [0.0, 0.0, 1.0], [0.5, 0.5]],
    [[1.0, 0.0], [1 / 3, 1 / 3, 1 / 3], [None, None]],
    [[0.5, 0.5], [0.5, None, None], [0.0, 1.0]],
]

ITEM_HEADERS = [Header(name=f"Accession {i}", unique_identifier=f"acc-{i}") for i in range(5)]


@pytest.fixture
def genotypes() -> GenotypeData:
    """Genotype data without missing values."""
    return GenotypeData(
        GENOTYPE_FREQUENCIES,
        headers=ITEM_HEADERS,
        marker_names=["mk1", "mk2", "mk3"],
    )


@pytest.fixture
def genotypes_missing() -> GenotypeData:
    """Genotype data with missing values."""
    return GenotypeData(GENOTYPE_FREQUENCIES_MISSING)


@pytest.fixture
def genotype_data(genotypes) -> CoreHunterData:
    return CoreHunterData(genotypes=genotypes)


@pytest.fixture
def genotype_data_missing(genotypes_missing) -> CoreHunterData:
    return CoreHunterData(genotypes=genotypes_missing)


# =============================================================================
# Phenotype Fixtures
# =============================================================================

PHENOTYPE_FEATURES = [
    Feature("awned", Scale(ScaleType.BINARY)),
    Feature("color", Scale(ScaleType.NOMINAL, values=("red", "white", "black"))),
    Feature("height", Scale(ScaleType.ORDINAL, values=("low", "mid", "high"))),
    Feature("yield", Scale(ScaleType.INTERVAL, minimum=0.0, maximum=10.0)),
]

PHENOTYPE_VALUES = [
    [True, "red", "low", 2.0],
    [False, "white", "high", 8.0],
    [False, "red", "mid", None],
    [True, "black", "low", 10.0],
    [True, None, "mid", 0.0],
]


@pytest.fixture
def phenotypes() -> PhenotypeData:
    """Phenotype data with one feature of each kind and two missing values."""
    return PhenotypeData(PHENOTYPE_FEATURES, PHENOTYPE_VALUES)


@pytest.fixture
def phenotype_data(phenotypes) -> CoreHunterData:
    return CoreHunterData(phenotypes=phenotypes)


# =============================================================================
# Distance Matrix Fixtures
# =============================================================================

DISTANCE_MATRIX = [
    [0.0, 0.2, 0.5, 0.7, 0.4],
    [0.2, 0.0, 0.3, 0.6, 0.9],
    [0.5, 0.3, 0.0, 0.1, 0.8],
    [0.7, 0.6, 0.1, 0.0, 0.35],
    [0.4, 0.9, 0.8, 0.35, 0.0],
]


@pytest.fixture
def distance_matrix() -> DistanceMatrixData:
    return DistanceMatrixData(DISTANCE_MATRIX)


@pytest.fixture
def distance_data(distance_matrix) -> CoreHunterData:
    return CoreHunterData(distances=distance_matrix)


@pytest.fixture
def full_data(genotypes, phenotypes, distance_matrix) -> CoreHunterData:
    """Dataset holding all three kinds of data."""
    return CoreHunterData(genotypes=genotypes, phenotypes=phenotypes, distances=distance_matrix)


# =============================================================================
# Random Dataset
# =============================================================================


def make_random_data(seed: int = 0, n: int = 12, missing_rate: float = 0.15) -> CoreHunterData:
    """Random genotypes, phenotypes and distances for n items."""
    rng = np.random.default_rng(seed)

    num_alleles = [2, 3, 4, 2, 3, 1]
    frequencies = []
    for _ in range(n):
        item = []
        for a in num_alleles:
            if rng.random() < missing_rate:
                item.append([None] * a)
            else:
                item.append(list(rng.dirichlet(np.ones(a))))
        frequencies.append(item)
    genotypes = GenotypeData(frequencies)

    colors = ("red", "white", "black")
    heights = ("low", "mid", "high", "very high")
    features = [
        Feature("awned", Scale(ScaleType.BINARY)),
        Feature("color", Scale(ScaleType.NOMINAL, values=colors)),
        Feature("height", Scale(ScaleType.ORDINAL, values=heights)),
        Feature("yield", Scale(ScaleType.RATIO)),
    ]
    values = []
    for _ in range(n):
        row = [
            bool(rng.random() < 0.5),
            colors[rng.integers(len(colors))],
            heights[rng.integers(len(heights))],
            float(rng.uniform(0.0, 20.0)),
        ]
        values.append([None if rng.random() < missing_rate else v for v in row])
    # ratio bounds are inferred, so keep at least one observed yield
    values[0][3] = 5.0
    phenotypes = PhenotypeData(features, values)

    points = rng.random((n, 3))
    matrix = np.sqrt(((points[:, None, :] - points[None, :, :]) ** 2).sum(axis=2))
    distances = DistanceMatrixData(matrix)

    return CoreHunterData(genotypes=genotypes, phenotypes=phenotypes, distances=distances)


@pytest.fixture
def random_data() -> CoreHunterData:
    """Seeded random dataset with missing genotype and phenotype values."""
    return make_random_data(seed=42)
