"""
Ideograms: cytobands, chromosome names and base-number ticks.
"""

import logging

import matplotlib.patches as patches
import matplotlib.path as mpath
import numpy as np
from matplotlib.collections import LineCollection

from karyoplot.config import BAND_COLORS, UNKNOWN_BAND_COLOR
from karyoplot.core import KaryoPlot
from karyoplot.layouts import StackedLayout

logger = logging.getLogger(__name__)


def _band_color(stain) -> str:
    return BAND_COLORS.get(str(stain or "").lower(), UNKNOWN_BAND_COLOR)


def _visible_bands(kp, chrom):
    """Cytobands of ``chrom`` trimmed to the visible part of the chromosome."""
    g = kp.genome[kp.genome["chromosome"] == chrom].iloc[0]
    bands = kp.cytobands[kp.cytobands["chromosome"].astype(str) == chrom]
    bands = bands[(bands["end"] >= g["start"]) & (bands["start"] <= g["end"])].copy()
    bands["start"] = bands["start"].clip(lower=g["start"])
    bands["end"] = bands["end"].clip(upper=g["end"])
    return bands.sort_values("start")


def kp_add_cytobands(kp: KaryoPlot, lwd=0.15, clipping=True):
    """
    Draw the ideogram of every chromosome.

    Without cytobands each chromosome is a plain white body. Centromeric
    (acen) bands are drawn as wedges pointing at the centromere.
    """
    for chrom in kp.chromosomes:
        x_start, y0, width, height = kp.layout.ideogram_box(chrom)
        y1 = y0 + height

        bands = None
        if kp.cytobands is not None and not kp.cytobands.empty:
            bands = _visible_bands(kp, chrom)

        if bands is not None and not bands.empty:
            xs0 = kp.layout.x(chrom, bands["start"].to_numpy())
            xs1 = kp.layout.x(chrom, bands["end"].to_numpy())
            for x0, x1, stain, name in zip(xs0, xs1, bands["stain"].astype(str),
                                           bands["name"].astype(str)):
                stain = stain.lower()
                if stain == "acen":
                    Path = mpath.Path
                    if name.lower().startswith("q"):
                        verts = [(x1, y0), (x1, y1), (x0, (y0 + y1) / 2.0), (x1, y0)]
                    else:
                        verts = [(x0, y0), (x0, y1), (x1, (y0 + y1) / 2.0), (x0, y0)]
                    codes = [Path.MOVETO, Path.LINETO, Path.LINETO, Path.CLOSEPOLY]
                    patch = patches.PathPatch(mpath.Path(verts, codes),
                                              facecolor=BAND_COLORS["acen"],
                                              edgecolor="none", lw=0, zorder=0.5)
                else:
                    patch = patches.Rectangle((x0, y0), x1 - x0, height,
                                              facecolor=_band_color(stain),
                                              edgecolor="black", linewidth=lwd,
                                              zorder=0.5)
                kp.apply_clipping(kp.ax.add_patch(patch), clipping)
        else:
            kp.ax.add_patch(patches.Rectangle((x_start, y0), width, height,
                                              facecolor="white", edgecolor="none",
                                              zorder=0.5))

        # outline whole chromosome silhouette
        kp.ax.add_patch(patches.Rectangle((x_start, y0), width, height, fill=False,
                                          edgecolor="black", linewidth=lwd + 0.2,
                                          zorder=0.6))
    return kp


def kp_add_chromosome_names(kp: KaryoPlot, chr_names=None, xoffset=0.0, yoffset=0.0, **kwargs):
    """
    Label every chromosome: left of the ideogram on stacked layouts, centred
    below it when all chromosomes share one line.
    """
    if chr_names is None:
        chr_names = kp.chromosomes
    if len(chr_names) != len(kp.chromosomes):
        raise ValueError("chr_names must have one name per plotted chromosome")

    stacked = isinstance(kp.layout, StackedLayout)
    kwargs.setdefault("fontsize", 7)
    for chrom, label in zip(kp.chromosomes, chr_names):
        x0, y0, width, height = kp.layout.ideogram_box(chrom)
        if stacked:
            kp.ax.text(x0 - 0.005 + xoffset, y0 + height / 2.0 + yoffset, label,
                       ha="right", va="center", **kwargs)
        else:
            kp.ax.text(x0 + width / 2.0 + xoffset, y0 - kp.plot_params["data2_in_margin"] / 2.0 + yoffset,
                       label, ha="center", va="top", **kwargs)
    return kp


def _format_position(pos, units):
    if units == "Mb":
        return f"{pos / 1e6:g}Mb"
    if units == "kb":
        return f"{pos / 1e3:g}kb"
    return f"{int(pos)}"


def kp_add_base_numbers(kp: KaryoPlot, tick_dist=20_000_000, tick_len=10, units="Mb",
                        minor_tick_dist=None, minor_tick_len=5, clipping=True, **kwargs):
    """Tick marks and position labels under every ideogram."""
    if tick_dist <= 0:
        raise ValueError("tick_dist must be positive")
    kwargs.setdefault("fontsize", 5)
    segments = []
    for chrom, g_start, g_end in zip(kp.genome["chromosome"], kp.genome["start"], kp.genome["end"]):
        _, y0, _, _ = kp.layout.ideogram_box(chrom)
        ticks = np.arange(np.ceil(g_start / tick_dist) * tick_dist, g_end + 1, tick_dist)
        xs = kp.layout.x(chrom, ticks) if len(ticks) else []
        for pos, x in zip(ticks, xs):
            segments.append([(x, y0), (x, y0 - tick_len)])
            text = kp.ax.text(x, y0 - tick_len * 1.5, _format_position(pos, units),
                              ha="center", va="top", **kwargs)
            kp.apply_clipping(text, clipping)
        if minor_tick_dist:
            minor = np.arange(np.ceil(g_start / minor_tick_dist) * minor_tick_dist, g_end + 1, minor_tick_dist)
            if len(minor):
                for x in kp.layout.x(chrom, minor):
                    segments.append([(x, y0), (x, y0 - minor_tick_len)])
    if segments:
        lines = LineCollection(segments, colors="black", linewidths=0.4)
        kp.apply_clipping(kp.ax.add_collection(lines), clipping)
    return kp


def plot_karyotype(genome="hg38", chromosomes="canonical", plot_type=1, cytobands=None,
                   zoom=None, plot_params=None, ax=None, ideogram=True, labels=True,
                   coord_change_function=None, figsize=None) -> KaryoPlot:
    """
    Create a KaryoPlot and draw its ideograms and chromosome names.

    Every other plotting function takes the returned object as first argument.
    """
    kp = KaryoPlot(genome=genome, chromosomes=chromosomes, plot_type=plot_type,
                   plot_params=plot_params, cytobands=cytobands, zoom=zoom, ax=ax,
                   coord_change_function=coord_change_function, figsize=figsize)
    if ideogram:
        kp_add_cytobands(kp)
    if labels:
        kp_add_chromosome_names(kp)
    logger.info(f"Plotted karyotype with {len(kp.chromosomes)} chromosome(s)")
    return kp
