"""Shared fixtures: a tiny three-chromosome genome and plots drawn on it."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import pytest

from karyoplot import plot_karyotype

SMALL_GENOME = {"chr1": 1000, "chr2": 800, "chr3": 500}


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def small_genome():
    return dict(SMALL_GENOME)


@pytest.fixture
def kp():
    return plot_karyotype(genome=SMALL_GENOME, chromosomes="all", plot_type=1)


@pytest.fixture
def kp2():
    return plot_karyotype(genome=SMALL_GENOME, chromosomes="all", plot_type=2)


@pytest.fixture
def cytobands():
    return pd.DataFrame({
        "chromosome": ["chr1", "chr1", "chr1", "chr1", "chr2"],
        "start": [0, 300, 450, 500, 0],
        "end": [300, 450, 500, 1000, 800],
        "name": ["p12", "p11", "q11", "q12", "p1"],
        "stain": ["gneg", "acen", "acen", "gpos50", "gvar"],
    })
