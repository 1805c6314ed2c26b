"""Tests for ideograms, chromosome names and base numbers."""

import numpy as np
import pytest
from matplotlib.patches import PathPatch

from karyoplot import plot_karyotype
from karyoplot.config import BAND_COLORS, UNKNOWN_BAND_COLOR
from karyoplot.ideogram import _band_color, _format_position, kp_add_base_numbers, kp_add_chromosome_names

from conftest import SMALL_GENOME


class TestCytobands:
    """Band drawing."""

    def test_plain_bodies(self, kp):
        # white body and outline per chromosome
        assert len(kp.ax.patches) == 6

    def test_bands(self, cytobands):
        kp = plot_karyotype(genome=SMALL_GENOME, chromosomes="all", cytobands=cytobands)
        # chr1: 4 bands + outline, chr2: 1 band + outline, chr3: body + outline
        assert len(kp.ax.patches) == 9
        assert len([p for p in kp.ax.patches if isinstance(p, PathPatch)]) == 2

    def test_bands_trimmed_to_zoom(self, cytobands):
        kp = plot_karyotype(genome=SMALL_GENOME, cytobands=cytobands, zoom="chr1:600-900")
        # only q12 is visible, plus the outline
        assert len(kp.ax.patches) == 2
        band = kp.ax.patches[0]
        assert band.get_x() == pytest.approx(0.1)
        assert band.get_width() == pytest.approx(0.85)

    def test_bands_from_file(self, tmp_path):
        path = tmp_path / "cyto.bed"
        path.write_text("chr1\t0\t500\tp1\tgneg\nchr1\t500\t1000\tq1\tgpos100\n")
        kp = plot_karyotype(genome=SMALL_GENOME, chromosomes=["chr1"], cytobands=str(path))
        assert len(kp.cytobands) == 2
        assert len(kp.ax.patches) == 3

    def test_band_colors(self):
        assert _band_color("GPOS100") == BAND_COLORS["gpos100"]
        assert _band_color("stalk") == BAND_COLORS["stalk"]
        assert _band_color("unknown") == UNKNOWN_BAND_COLOR
        assert _band_color(None) == UNKNOWN_BAND_COLOR


class TestLabels:
    """Chromosome names."""

    def test_default_names(self, kp):
        assert [t.get_text() for t in kp.ax.texts] == ["chr1", "chr2", "chr3"]
        assert kp.ax.texts[0].get_ha() == "right"

    def test_single_line_names_centred(self):
        kp = plot_karyotype(genome=SMALL_GENOME, chromosomes="all", plot_type=4)
        assert all(t.get_ha() == "center" for t in kp.ax.texts)

    def test_custom_names(self):
        kp = plot_karyotype(genome=SMALL_GENOME, chromosomes="all", labels=False)
        kp_add_chromosome_names(kp, chr_names=["1", "2", "3"])
        assert [t.get_text() for t in kp.ax.texts] == ["1", "2", "3"]

    def test_wrong_number_of_names(self, kp):
        with pytest.raises(ValueError):
            kp_add_chromosome_names(kp, chr_names=["1"])


class TestBaseNumbers:
    """Position ticks."""

    def test_ticks(self, kp):
        n_texts = len(kp.ax.texts)
        kp_add_base_numbers(kp, tick_dist=250, units="bp")
        labels = [t.get_text() for t in kp.ax.texts[n_texts:]]
        # chr1: 0..1000, chr2: 0..750, chr3: 0..500
        assert len(labels) == 12
        assert labels[:5] == ["0", "250", "500", "750", "1000"]
        assert len(kp.ax.collections) == 1

    def test_minor_ticks(self, kp):
        kp_add_base_numbers(kp, tick_dist=500, units="bp", minor_tick_dist=100)
        segments = kp.ax.collections[0].get_segments()
        # major 3 + 2 + 2, minor 11 + 9 + 6
        assert len(segments) == 33

    def test_bad_tick_dist(self, kp):
        with pytest.raises(ValueError):
            kp_add_base_numbers(kp, tick_dist=0)

    def test_format_position(self):
        assert _format_position(20_000_000, "Mb") == "20Mb"
        assert _format_position(1500, "kb") == "1.5kb"
        assert _format_position(42.0, "bp") == "42"

class TestCustomCoordChange:
    """Ideograms stay on the layout under a user-supplied coordinate-change function."""

    @staticmethod
    def shifted(chr, x=None, y=None, data_panel=1):
        return (None if x is None else np.asarray(x, dtype=float) / 1000.0 + 0.4,
                None if y is None else np.asarray(y, dtype=float))

    def test_bands_match_outline(self, cytobands):
        kp = plot_karyotype(genome=SMALL_GENOME, chromosomes="all", cytobands=cytobands,
                            coord_change_function=self.shifted)
        first_band, outline = kp.ax.patches[0], kp.ax.patches[4]
        assert first_band.get_x() == pytest.approx(0.1)
        assert outline.get_x() == pytest.approx(0.1)
        assert first_band.get_width() == pytest.approx(0.255)
        assert kp.ax.patches[3].get_x() + kp.ax.patches[3].get_width() == pytest.approx(0.95)

    def test_base_numbers_on_layout(self):
        kp = plot_karyotype(genome=SMALL_GENOME, chromosomes="all", coord_change_function=self.shifted)
        kp_add_base_numbers(kp, tick_dist=500, units="bp")
        first = kp.ax.collections[0].get_segments()[0]
        assert first[0][0] == pytest.approx(0.1)
        assert first[1][0] == pytest.approx(0.1)
