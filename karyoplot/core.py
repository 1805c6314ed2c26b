"""
The KaryoPlot object: genome, layout and the matplotlib canvas they draw on.
"""

import logging

import matplotlib.pyplot as plt
import matplotlib.patches as patches
import numpy as np
import pandas as pd

from karyoplot.config import CANONICAL_CHROMOSOMES, default_plot_params
from karyoplot.genome import get_genome, read_cytobands, to_regions
from karyoplot.layouts import Coordinates, layout_for

logger = logging.getLogger(__name__)


def select_chromosomes(genome: pd.DataFrame, chromosomes="canonical") -> list:
    """
    Resolve the chromosomes to plot, in plot order.

    "canonical" keeps chr1..chr22, chrX, chrY when the genome has them (all
    chromosomes otherwise); "all" keeps every chromosome of the genome; a list
    is used as given.
    """
    available = [str(c) for c in genome["chromosome"]]
    if isinstance(chromosomes, str) and chromosomes == "all":
        return available
    if isinstance(chromosomes, str) and chromosomes == "canonical":
        canonical = [c for c in CANONICAL_CHROMOSOMES if c in available]
        return canonical or available
    if isinstance(chromosomes, str):
        chromosomes = [chromosomes]
    chromosomes = [str(c) for c in chromosomes]
    missing = [c for c in chromosomes if c not in available]
    if missing:
        raise ValueError(f"Chromosomes not in the genome: {missing}")
    return chromosomes


def _normalize_coordinates(result):
    if isinstance(result, Coordinates):
        return result
    if isinstance(result, dict):
        return Coordinates(x=result.get("x"), y=result.get("y"))
    x, y = result
    return Coordinates(x=x, y=y)


class KaryoPlot:
    """
    A karyotype drawn on a matplotlib Axes.

    ``genome`` holds only what is visible: one interval per plotted
    chromosome, or the single zoomed region. ``coord_change_function`` maps
    (chr, x, y, data_panel) to plot coordinates; it defaults to the layout
    that matches ``plot_type``.
    """

    def __init__(self, genome="hg38", chromosomes="canonical", plot_type=1,
                 plot_params=None, cytobands=None, zoom=None, ax=None,
                 coord_change_function=None, figsize=None):
        self.plot_type = plot_type
        self.plot_params = default_plot_params(plot_type)
        if plot_params:
            unknown = set(plot_params) - set(self.plot_params)
            if unknown:
                raise ValueError(f"Unknown plot params: {sorted(unknown)}")
            self.plot_params.update(plot_params)

        full_genome = get_genome(genome)
        self.chromosomes = select_chromosomes(full_genome, chromosomes)
        by_name = full_genome.set_index(full_genome["chromosome"].astype(str))
        visible = by_name.loc[self.chromosomes].reset_index(drop=True)

        self.zoom = None
        if zoom is not None:
            zoom = to_regions(zoom).iloc[[0]].reset_index(drop=True)
            chrom = zoom.at[0, "chromosome"]
            if chrom not in by_name.index:
                raise ValueError(f"Zoom chromosome {chrom} is not in the genome")
            zoom.at[0, "start"] = max(int(zoom.at[0, "start"]), int(by_name.at[chrom, "start"]))
            zoom.at[0, "end"] = min(int(zoom.at[0, "end"]), int(by_name.at[chrom, "end"]))
            if zoom.at[0, "start"] >= zoom.at[0, "end"]:
                raise ValueError("Zoom region does not overlap its chromosome")
            self.zoom = zoom
            self.chromosomes = [chrom]
            visible = zoom
        self.genome = visible[["chromosome", "start", "end", "strand"]].copy()

        if isinstance(cytobands, pd.DataFrame):
            cyto = cytobands.copy()
        elif cytobands is not None:
            cyto = read_cytobands(cytobands)
        else:
            cyto = None
        if cyto is not None:
            cyto = cyto[cyto["chromosome"].astype(str).isin(self.chromosomes)].reset_index(drop=True)
        self.cytobands = cyto

        self.layout = layout_for(plot_type, self.genome, self.plot_params)
        self.coord_change_function = coord_change_function or self.layout

        if ax is None:
            if figsize is None:
                figsize = (12, max(3.0, self.layout.height / 300.0))
            fig, ax = plt.subplots(figsize=figsize)
        self.ax = ax
        self.fig = ax.figure
        ax.set_xlim(0, self.layout.width)
        ax.set_ylim(0, self.layout.height)
        ax.axis("off")
        logger.debug(f"KaryoPlot type {plot_type} with {len(self.chromosomes)} chromosome(s)")

    @property
    def zoomed(self) -> bool:
        return self.zoom is not None

    def coord_change(self, chr, x=None, y=None, data_panel=1) -> Coordinates:
        result = _normalize_coordinates(self.coord_change_function(chr, x=x, y=y, data_panel=data_panel))
        return Coordinates(
            x=None if result.x is None else np.asarray(result.x, dtype=float),
            y=None if result.y is None else np.asarray(result.y, dtype=float),
        )

    def is_upward(self, chr, data_panel=1) -> bool:
        """True when larger values of ``data_panel`` are drawn higher on the canvas."""
        ys = self.coord_change(chr, x=None, y=[0.0, 1.0], data_panel=data_panel).y
        return bool(ys[0] < ys[1])

    def clip_rectangle(self, clipping=True):
        """
        The region artists are clipped to, or None when nothing is clipped.
        Only zoomed plots clip: data may not spill into the side margins.
        """
        if not (clipping and self.zoomed):
            return None
        x0, x1 = self.layout.chromosome_extent(self.chromosomes[0])
        return patches.Rectangle((x0, 0), x1 - x0, self.layout.height,
                                 transform=self.ax.transData, fill=False, visible=False)

    def apply_clipping(self, artist, clipping=True):
        rect = self.clip_rectangle(clipping)
        if rect is not None:
            artist.set_clip_path(rect)
        return artist

    def savefig(self, path, **kwargs):
        kwargs.setdefault("dpi", 300)
        kwargs.setdefault("bbox_inches", "tight")
        self.fig.savefig(path, **kwargs)
        logger.info(f"Saved: {path}")

    def close(self):
        plt.close(self.fig)
