"""Tests for color assignment."""

import numpy as np
import pandas as pd
import pytest

from karyoplot.colors import (
    col_by_chr,
    darker,
    is_missing_color,
    lighter,
    preprocess_colors,
    transparent,
)
from karyoplot.config import CHROMOSOME_PALETTES
from karyoplot.genome import to_regions


class TestColByChr:
    """Colors chosen by chromosome."""

    def test_named_palette_recycles(self):
        cols = col_by_chr(["chr1", "chr2", "chr1", "chr3"], colors="2grays")
        assert cols == ["#888888", "#444444", "#888888", "#888888"]

    def test_output_length_matches_input(self):
        data = ["chr%d" % (i % 5) for i in range(17)]
        assert len(col_by_chr(data, colors="brewer.set1")) == 17

    def test_all_chrs_sets_positions(self):
        cols = col_by_chr(["chr3"], colors=["red", "green", "blue"], all_chrs=["chr1", "chr2", "chr3"])
        assert cols == ["blue"]

    def test_unlisted_chromosome_gets_default(self):
        cols = col_by_chr(["chr1", "chrZ"], colors=["red"], all_chrs=["chr1"], default_col="gray")
        assert cols == ["red", "gray"]

    def test_mapping_with_default(self):
        cols = col_by_chr(["chr1", "chr2", "chrX"], colors={"chr1": "red", "chrX": "blue"},
                          default_col="black")
        assert cols == ["red", "black", "blue"]

    def test_named_series(self):
        colors = pd.Series({"chr2": "orange"})
        assert col_by_chr(["chr2", "chr1"], colors=colors) == ["orange", "black"]

    def test_single_color(self):
        assert col_by_chr(["chr1", "chr2"], colors="purple") == ["purple", "purple"]

    def test_rgb_tuple_is_one_color(self):
        red = (1.0, 0.0, 0.0)
        assert col_by_chr(["chr1", "chr2"], colors=red) == [red, red]

    def test_regions_use_categories(self):
        df = pd.DataFrame({
            "chromosome": pd.Categorical(["chr3", "chr1"], categories=["chr1", "chr2", "chr3"]),
            "start": [1, 1], "end": [2, 2],
        })
        cols = col_by_chr(to_regions(df), colors=["a", "b", "c"])
        assert cols == ["c", "a"]

    def test_regions_order_of_appearance(self):
        regions = to_regions([("chr5", 1, 2), ("chr2", 1, 2), ("chr5", 3, 4)])
        assert col_by_chr(regions, colors="2blues") == ["#3333FF", "#0000AA", "#3333FF"]

    def test_empty_palette(self):
        with pytest.raises(ValueError):
            col_by_chr(["chr1"], colors=[])

    def test_palettes_are_hex(self):
        for name, palette in CHROMOSOME_PALETTES.items():
            assert palette, name
            assert all(c.startswith("#") for c in palette)


class TestColorHelpers:
    """lighter, darker, transparent and the fill/border defaults."""

    def test_lighter(self):
        assert lighter("#000000") == "#969696"
        assert lighter("#ffffff") == "#ffffff"

    def test_darker(self):
        assert darker("#ffffff") == "#696969"
        assert darker("#000000") == "#000000"

    def test_rgb_tuple(self):
        assert darker((1.0, 1.0, 1.0)) == "#696969"
        assert lighter([(0.0, 0.0, 0.0), "#ffffff"]) == ["#969696", "#ffffff"]

    def test_elementwise(self):
        assert darker(["#ffffff", "#000000"], amount=255) == ["#000000", "#000000"]

    def test_transparent(self):
        assert transparent("red", 0.5) == "#ff000080"
        with pytest.raises(ValueError):
            transparent("red", 2)

    def test_missing(self):
        assert is_missing_color(None)
        assert is_missing_color(False)
        assert is_missing_color(np.nan)
        assert is_missing_color("none")
        assert not is_missing_color("black")

    def test_preprocess_border_only(self):
        col, border = preprocess_colors(None, "#000000")
        assert col == "#969696"
        assert border == "#000000"

    def test_preprocess_col_only(self):
        col, border = preprocess_colors("#ffffff", None)
        assert col == "#ffffff"
        assert border == "#696969"

    def test_preprocess_no_border(self):
        col, border = preprocess_colors("#ffffff", False)
        assert border is False

    def test_preprocess_neither(self):
        assert preprocess_colors(None, None) == ("black", "#000000")
