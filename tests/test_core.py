"""Tests for the KaryoPlot object."""

import logging

import matplotlib.pyplot as plt
import numpy as np
import pytest

from karyoplot import KaryoPlot, plot_karyotype
from karyoplot.core import select_chromosomes
from karyoplot.genome import get_genome
from karyoplot.layouts import Coordinates

from conftest import SMALL_GENOME


class TestSelectChromosomes:
    """Which chromosomes get plotted."""

    def test_all(self):
        genome = get_genome({"chr1": 10, "chrUn_1": 5})
        assert select_chromosomes(genome, "all") == ["chr1", "chrUn_1"]

    def test_canonical(self):
        genome = get_genome({"chr1": 10, "chrUn_1": 5, "chrX": 7})
        assert select_chromosomes(genome, "canonical") == ["chr1", "chrX"]

    def test_canonical_fallback(self):
        genome = get_genome({"scaffold_1": 10, "scaffold_2": 5})
        assert select_chromosomes(genome, "canonical") == ["scaffold_1", "scaffold_2"]

    def test_list_keeps_order(self):
        assert select_chromosomes(get_genome(SMALL_GENOME), ["chr3", "chr1"]) == ["chr3", "chr1"]

    def test_missing(self):
        with pytest.raises(ValueError, match="not in the genome"):
            select_chromosomes(get_genome(SMALL_GENOME), ["chr1", "chr22"])


class TestKaryoPlot:
    """Construction, coordinates and output."""

    def test_visible_genome(self):
        kp = KaryoPlot(genome=SMALL_GENOME, chromosomes=["chr2", "chr3"])
        assert kp.chromosomes == ["chr2", "chr3"]
        assert kp.genome["end"].tolist() == [800, 500]
        assert not kp.zoomed
        assert kp.clip_rectangle() is None

    def test_unknown_plot_param(self):
        with pytest.raises(ValueError, match="Unknown plot params"):
            KaryoPlot(genome=SMALL_GENOME, plot_params={"data3_height": 10})

    def test_plot_params_override(self):
        kp = KaryoPlot(genome=SMALL_GENOME, plot_params={"data1_height": 100})
        assert kp.layout.block_height == 230

    def test_unsupported_plot_type(self):
        with pytest.raises(ValueError):
            KaryoPlot(genome=SMALL_GENOME, plot_type=9)

    def test_zoom_clipped_to_chromosome(self):
        kp = KaryoPlot(genome=SMALL_GENOME, zoom="chr2:500-5000")
        assert kp.zoomed
        assert kp.chromosomes == ["chr2"]
        assert kp.genome.at[0, "start"] == 500
        assert kp.genome.at[0, "end"] == 800
        rect = kp.clip_rectangle()
        assert rect.get_x() == pytest.approx(0.1)
        assert rect.get_width() == pytest.approx(0.85)
        assert kp.clip_rectangle(clipping=False) is None

    def test_zoom_unknown_chromosome(self):
        with pytest.raises(ValueError):
            KaryoPlot(genome=SMALL_GENOME, zoom="chr9:1-10")

    def test_coord_change(self, kp):
        coords = kp.coord_change("chr1", x=[0, 1000], y=[0, 1])
        np.testing.assert_allclose(coords.x, [0.1, 0.95])
        np.testing.assert_allclose(coords.y, [870, 1070])

    def test_custom_coord_change_function(self):
        def diagonal(chr, x=None, y=None, data_panel=1):
            return (None if x is None else np.asarray(x) / 1000.0,
                    None if y is None else np.asarray(y) * 10.0)

        kp = KaryoPlot(genome=SMALL_GENOME, coord_change_function=diagonal)
        coords = kp.coord_change("chr1", x=[500], y=[2])
        assert isinstance(coords, Coordinates)
        assert coords.x.tolist() == [0.5]
        assert coords.y.tolist() == [20.0]
        assert kp.is_upward("chr1")

    def test_existing_axes(self):
        fig, ax = plt.subplots()
        kp = plot_karyotype(genome=SMALL_GENOME, ax=ax)
        assert kp.fig is fig
        assert ax.get_ylim() == (0, kp.layout.height)

    def test_savefig(self, kp, tmp_path, caplog):
        out = tmp_path / "karyotype.png"
        with caplog.at_level(logging.INFO):
            kp.savefig(out, dpi=50)
        assert out.exists()
        assert "Saved:" in caplog.text
