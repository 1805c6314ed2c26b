"""
Coordinate-change functions: where a (chromosome, position, value) lands on the canvas.

Plot x runs over [0, 1] (fraction of the figure width). Plot y is in layout
units, the same units as the vertical entries of the plot params. Every
layout lays the visible genome out as chromosome blocks; inside a block, data
panel 1 sits above the ideogram and grows upward, data panel 2 sits below and
grows downward.
"""

from typing import NamedTuple, Optional

import numpy as np
import pandas as pd

DATA_PANELS = (1, 2, "ideogram", "all")


class Coordinates(NamedTuple):
    x: Optional[np.ndarray]
    y: Optional[np.ndarray]


def _as_array(values, dtype=float):
    return np.atleast_1d(np.asarray(values, dtype=dtype))


def _broadcast(chrs, values):
    chrs = np.atleast_1d(np.asarray(chrs, dtype=object)).astype(str)
    values = _as_array(values)
    if len(chrs) == 1 and len(values) != 1:
        chrs = np.repeat(chrs, len(values))
    elif len(values) == 1 and len(chrs) != 1:
        values = np.repeat(values, len(chrs))
    if len(chrs) != len(values):
        raise ValueError(f"chr has length {len(chrs)} but values have length {len(values)}")
    return chrs, values


def _check_panel(data_panel):
    if data_panel not in DATA_PANELS:
        raise ValueError(f"Unknown data panel: {data_panel!r}. Valid panels: {list(DATA_PANELS)}")


class _Layout:
    """Shared vertical arithmetic. Subclasses place the chromosome blocks."""

    def __init__(self, genome: pd.DataFrame, plot_params: dict):
        if genome.empty:
            raise ValueError("Cannot lay out an empty genome")
        self.genome = genome.reset_index(drop=True)
        self.params = plot_params
        self.chromosomes = [str(c) for c in self.genome["chromosome"]]
        self._start = dict(zip(self.chromosomes, self.genome["start"].astype(float)))
        self._end = dict(zip(self.chromosomes, self.genome["end"].astype(float)))
        p = plot_params
        self.block_height = (p["data2_out_margin"] + p["data2_height"] + p["data2_in_margin"]
                             + p["ideogram_height"]
                             + p["data1_in_margin"] + p["data1_height"] + p["data1_out_margin"])
        self.width = 1.0

    def _lookup(self, chrs, table):
        return pd.Series(chrs).map(table).to_numpy(dtype=float)

    def _ideogram_bottom(self, chrs):
        raise NotImplementedError

    def x(self, chr, pos):
        raise NotImplementedError

    def y(self, chr, y, data_panel=1):
        _check_panel(data_panel)
        chrs, y = _broadcast(chr, y)
        p = self.params
        base = self._ideogram_bottom(chrs)
        if data_panel == 1:
            return base + p["ideogram_height"] + p["data1_in_margin"] + y * p["data1_height"]
        if data_panel == 2:
            return base - p["data2_in_margin"] - y * p["data2_height"]
        if data_panel == "ideogram":
            return base + y * p["ideogram_height"]
        span = (p["data2_height"] + p["data2_in_margin"] + p["ideogram_height"]
                + p["data1_in_margin"] + p["data1_height"])
        return base - p["data2_in_margin"] - p["data2_height"] + y * span

    def __call__(self, chr, x=None, y=None, data_panel=1):
        return Coordinates(
            x=None if x is None else self.x(chr, x),
            y=None if y is None else self.y(chr, y, data_panel),
        )

    def chromosome_extent(self, chr):
        """Plot x of the first and last visible base of ``chr``."""
        x = self.x(chr, [self._start[chr], self._end[chr]])
        return float(x[0]), float(x[1])

    def ideogram_box(self, chr):
        """(x0, y0, width, height) of the ideogram of ``chr``."""
        x0, x1 = self.chromosome_extent(chr)
        y0 = float(self._ideogram_bottom(np.array([chr]))[0])
        return x0, y0, x1 - x0, float(self.params["ideogram_height"])

    def panel_box(self, chr, data_panel=1):
        """(x0, y0, width, height) of a data panel of ``chr``."""
        x0, x1 = self.chromosome_extent(chr)
        ys = self.y(chr, [0.0, 1.0], data_panel)
        return x0, float(ys.min()), x1 - x0, float(abs(ys[1] - ys[0]))


class StackedLayout(_Layout):
    """Plot types 1 and 2: one chromosome per row, first chromosome on top."""

    def __init__(self, genome, plot_params):
        super().__init__(genome, plot_params)
        p = plot_params
        self._row = {c: i for i, c in enumerate(self.chromosomes)}
        self.max_length = float((self.genome["end"] - self.genome["start"]).max())
        self.height = p["top_margin"] + len(self.chromosomes) * self.block_height + p["bottom_margin"]

    def _ideogram_bottom(self, chrs):
        p = self.params
        row = self._lookup(chrs, self._row)
        n = len(self.chromosomes)
        return (p["bottom_margin"] + (n - 1 - row) * self.block_height
                + p["data2_out_margin"] + p["data2_height"] + p["data2_in_margin"])

    def x(self, chr, pos):
        chrs, pos = _broadcast(chr, pos)
        p = self.params
        start = self._lookup(chrs, self._start)
        drawable = self.width - p["left_margin"] - p["right_margin"]
        return p["left_margin"] + (pos - start) / self.max_length * drawable


class SingleLineLayout(_Layout):
    """Plot types 3 and 4: every chromosome on one line, left to right."""

    def __init__(self, genome, plot_params):
        super().__init__(genome, plot_params)
        p = plot_params
        lengths = (self.genome["end"] - self.genome["start"]).to_numpy(dtype=float)
        n = len(lengths)
        gap = p["chromosome_gap"] if n > 1 else 0.0
        drawable = self.width - p["left_margin"] - p["right_margin"]
        usable = drawable * (1.0 - gap * (n - 1))
        if usable <= 0:
            raise ValueError("chromosome_gap leaves no room for the chromosomes")
        self.scale = usable / lengths.sum()
        offsets = p["left_margin"] + np.concatenate([[0.0], np.cumsum(lengths[:-1] * self.scale + gap * drawable)])
        self._x0 = dict(zip(self.chromosomes, offsets))
        self.height = p["top_margin"] + self.block_height + p["bottom_margin"]

    def _ideogram_bottom(self, chrs):
        p = self.params
        base = p["bottom_margin"] + p["data2_out_margin"] + p["data2_height"] + p["data2_in_margin"]
        # unknown chromosomes still map to NaN
        return base + 0.0 * self._lookup(chrs, self._x0)

    def x(self, chr, pos):
        chrs, pos = _broadcast(chr, pos)
        start = self._lookup(chrs, self._start)
        return self._lookup(chrs, self._x0) + (pos - start) * self.scale


def layout_for(plot_type, genome, plot_params):
    if plot_type in (1, 2):
        return StackedLayout(genome, plot_params)
    if plot_type in (3, 4):
        return SingleLineLayout(genome, plot_params)
    raise ValueError(f"Unsupported plot type: {plot_type}")
