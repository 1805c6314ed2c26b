"""
Data overlays: points, lines, segments, rectangles, text, ribbons and regions.

Every function takes the KaryoPlot first, accepts either ``data`` (a regions
frame) or explicit chr/x/y vectors, and returns the KaryoPlot unchanged.
Remaining keyword arguments go to matplotlib; list or array values with one
entry per input element are filtered along with the data.
"""

import logging

import matplotlib.patches as patches
import numpy as np
import pandas as pd
from matplotlib.collections import LineCollection

from karyoplot.colors import is_missing_color, preprocess_colors
from karyoplot.core import KaryoPlot
from karyoplot.genome import to_regions
from karyoplot.transform import (
    filter_params,
    panel_defaults,
    prepare_parameters2,
    prepare_parameters4,
    recycle,
    scale_y,
)

logger = logging.getLogger(__name__)


def _check_kp(kp):
    if not isinstance(kp, KaryoPlot):
        raise TypeError("'karyoplot' must be a valid KaryoPlot object")


# matplotlib properties whose single value is itself a sequence
_SEQUENCE_KWARGS = {"dashes", "path_effects"}


def _per_element_keys(kwargs: dict, n: int) -> set:
    return {k for k, v in kwargs.items()
            if k not in _SEQUENCE_KWARGS
            and isinstance(v, (list, np.ndarray, pd.Series)) and len(v) == n}


def filter_kwargs(kwargs: dict, mask) -> dict:
    """Filter per-element keyword values (lists, arrays, Series with one entry per element) by ``mask``."""
    keys = _per_element_keys(kwargs, len(mask))
    return {k: filter_params(v, mask, len(mask)) if k in keys else v for k, v in kwargs.items()}


def split_kwargs(kwargs: dict, mask):
    """
    Split keyword arguments into the ones shared by every element and the
    per-element ones, the latter filtered by ``mask``.
    """
    keys = _per_element_keys(kwargs, len(mask))
    shared = {k: v for k, v in kwargs.items() if k not in keys}
    per_element = {k: filter_params(kwargs[k], mask, len(mask)) for k in keys}
    return shared, per_element


def element_kwargs(shared: dict, per_element: dict, i: int) -> dict:
    """The keyword arguments of element ``i``."""
    kwargs = dict(shared)
    kwargs.update({k: v[i] for k, v in per_element.items()})
    return kwargs


def kp_points(kp, data=None, chr=None, x=None, y=None, ymin=None, ymax=None, r0=None, r1=None,
              data_panel=1, clipping=True, **kwargs):
    _check_kp(kp)
    pp = prepare_parameters2(kp, data=data, chr=chr, x=x, y=y, ymin=ymin, ymax=ymax,
                             r0=r0, r1=r1, data_panel=data_panel)
    if len(pp.chr) == 0:
        return kp
    kwargs = filter_kwargs(kwargs, pp.mask)
    kwargs.setdefault("s", 4)
    coords = kp.coord_change(pp.chr, x=pp.x, y=pp.y, data_panel=data_panel)
    artist = kp.ax.scatter(coords.x, coords.y, **kwargs)
    kp.apply_clipping(artist, clipping)
    return kp


def kp_lines(kp, data=None, chr=None, x=None, y=None, ymin=None, ymax=None, r0=None, r1=None,
             data_panel=1, clipping=True, **kwargs):
    """One polyline per chromosome, through the points in position order."""
    _check_kp(kp)
    pp = prepare_parameters2(kp, data=data, chr=chr, x=x, y=y, ymin=ymin, ymax=ymax,
                             r0=r0, r1=r1, data_panel=data_panel)
    kwargs.setdefault("linewidth", 0.6)
    for chrom in pd.unique(pp.chr):
        sel = pp.chr == chrom
        order = np.argsort(pp.x[sel], kind="stable")
        coords = kp.coord_change(chrom, x=pp.x[sel][order], y=pp.y[sel][order], data_panel=data_panel)
        for line in kp.ax.plot(coords.x, coords.y, **kwargs):
            kp.apply_clipping(line, clipping)
    return kp


def kp_segments(kp, data=None, chr=None, x0=None, x1=None, y0=None, y1=None, ymin=None, ymax=None,
                r0=None, r1=None, data_panel=1, clipping=True, **kwargs):
    _check_kp(kp)
    pp = prepare_parameters4(kp, data=data, chr=chr, x0=x0, x1=x1, y0=y0, y1=y1, ymin=ymin,
                             ymax=ymax, r0=r0, r1=r1, data_panel=data_panel)
    if len(pp.chr) == 0:
        return kp
    kwargs = filter_kwargs(kwargs, pp.mask)
    start = kp.coord_change(pp.chr, x=pp.x0, y=pp.y0, data_panel=data_panel)
    end = kp.coord_change(pp.chr, x=pp.x1, y=pp.y1, data_panel=data_panel)
    segments = np.stack([np.column_stack([start.x, start.y]),
                         np.column_stack([end.x, end.y])], axis=1)
    lines = LineCollection(segments, **kwargs)
    kp.apply_clipping(kp.ax.add_collection(lines), clipping)
    return kp


def kp_rect(kp, data=None, chr=None, x0=None, x1=None, y0=None, y1=None, ymin=None, ymax=None,
            r0=None, r1=None, data_panel=1, col="gray", border=None, clipping=True, **kwargs):
    """Rectangles spanning [x0, x1] horizontally and [y0, y1] vertically."""
    _check_kp(kp)
    pp = prepare_parameters4(kp, data=data, chr=chr, x0=x0, x1=x1, y0=y0, y1=y1, ymin=ymin,
                             ymax=ymax, r0=r0, r1=r1, data_panel=data_panel)
    n = len(pp.chr)
    if n == 0:
        return kp
    col, border = preprocess_colors(col, border)
    col = recycle(filter_params(col, pp.mask, len(pp.mask), color=True), n, color=True)
    border = recycle(filter_params(border, pp.mask, len(pp.mask), color=True), n, color=True)
    shared, per_element = split_kwargs(kwargs, pp.mask)

    low = kp.coord_change(pp.chr, x=pp.x0, y=pp.y0, data_panel=data_panel)
    high = kp.coord_change(pp.chr, x=pp.x1, y=pp.y1, data_panel=data_panel)
    for i in range(n):
        rect = patches.Rectangle((low.x[i], low.y[i]), high.x[i] - low.x[i], high.y[i] - low.y[i],
                                 facecolor="none" if is_missing_color(col[i]) else col[i],
                                 edgecolor="none" if is_missing_color(border[i]) else border[i],
                                 **element_kwargs(shared, per_element, i))
        kp.apply_clipping(kp.ax.add_patch(rect), clipping)
    return kp


def kp_text(kp, data=None, chr=None, x=None, y=None, labels=None, ymin=None, ymax=None, r0=None,
            r1=None, data_panel=1, clipping=True, **kwargs):
    _check_kp(kp)
    if labels is None:
        if data is not None and "name" in getattr(data, "columns", []):
            labels = data["name"].astype(str).tolist()
        else:
            raise ValueError("labels must be given (or data must have a 'name' column)")
    pp = prepare_parameters2(kp, data=data, chr=chr, x=x, y=y, ymin=ymin, ymax=ymax,
                             r0=r0, r1=r1, data_panel=data_panel)
    n = len(pp.chr)
    labels = recycle(filter_params(labels, pp.mask, len(pp.mask)), n)
    shared, per_element = split_kwargs(kwargs, pp.mask)
    shared.setdefault("ha", "center")
    shared.setdefault("va", "center")
    shared.setdefault("fontsize", 6)
    coords = kp.coord_change(pp.chr, x=pp.x, y=pp.y, data_panel=data_panel)
    for i in range(n):
        text = kp.ax.text(coords.x[i], coords.y[i], str(labels[i]), **element_kwargs(shared, per_element, i))
        kp.apply_clipping(text, clipping)
    return kp


def kp_plot_ribbon(kp, data=None, chr=None, x0=None, x1=None, y0=None, y1=None, ymin=None,
                   ymax=None, r0=None, r1=None, data_panel=1, col="gray", border=None,
                   clipping=True, **kwargs):
    """
    A filled band between y0 and y1, one per chromosome, following the
    regions from left to right.
    """
    _check_kp(kp)
    pp = prepare_parameters4(kp, data=data, chr=chr, x0=x0, x1=x1, y0=y0, y1=y1, ymin=ymin,
                             ymax=ymax, r0=r0, r1=r1, data_panel=data_panel)
    col, border = preprocess_colors(col, border)
    for chrom in pd.unique(pp.chr):
        sel = np.flatnonzero(pp.chr == chrom)
        sel = sel[np.argsort(pp.x0[sel], kind="stable")]
        # each region contributes its two boundaries
        xs = np.column_stack([pp.x0[sel], pp.x1[sel]]).ravel()
        tops = np.repeat(pp.y1[sel], 2)
        bottoms = np.repeat(pp.y0[sel], 2)
        top = kp.coord_change(chrom, x=xs, y=tops, data_panel=data_panel)
        bottom = kp.coord_change(chrom, x=xs, y=bottoms, data_panel=data_panel)
        poly = patches.Polygon(
            np.column_stack([np.concatenate([top.x, bottom.x[::-1]]),
                             np.concatenate([top.y, bottom.y[::-1]])]),
            closed=True,
            facecolor="none" if is_missing_color(col) else col,
            edgecolor="none" if is_missing_color(border) else border,
            **kwargs)
        kp.apply_clipping(kp.ax.add_patch(poly), clipping)
    return kp


def assign_layers(regions: pd.DataFrame) -> np.ndarray:
    """
    Greedy layer index for every region so that no two overlapping regions on
    the same chromosome share a layer.
    """
    layers = np.zeros(len(regions), dtype=int)
    for _, idx in regions.groupby(regions["chromosome"].astype(str), sort=False).groups.items():
        sub = regions.loc[idx].sort_values(["start", "end"], kind="stable")
        layer_ends = []
        for i, (start, end) in zip(sub.index, zip(sub["start"], sub["end"])):
            for layer, last_end in enumerate(layer_ends):
                if start > last_end:
                    layer_ends[layer] = end
                    layers[i] = layer
                    break
            else:
                layer_ends.append(end)
                layers[i] = len(layer_ends) - 1
    return layers


def kp_plot_regions(kp, data, data_panel=1, r0=None, r1=None, col="black", border=None,
                    avoid_overlapping=True, num_layers=None, layer_margin=0.05,
                    clipping=True, **kwargs):
    """
    Rectangles for genomic regions; overlapping regions are stacked on
    separate layers unless ``avoid_overlapping`` is False.
    """
    _check_kp(kp)
    regions = to_regions(data)
    if regions.empty:
        return kp
    layers = assign_layers(regions) if avoid_overlapping else np.zeros(len(regions), dtype=int)
    if num_layers is None:
        num_layers = int(layers.max()) + 1
    if layers.max() >= num_layers:
        logger.warning(f"{int((layers >= num_layers).sum())} region(s) need more than {num_layers} layer(s); "
                       "they will overflow the panel")

    r0, r1, _, _ = panel_defaults(kp, data_panel, r0, r1)
    layer_height = 1.0 / num_layers
    y0 = layers * layer_height
    y1 = y0 + layer_height * (1.0 - layer_margin)
    return kp_rect(kp, data=regions, y0=y0, y1=y1, ymin=0, ymax=1, r0=r0, r1=r1,
                   data_panel=data_panel, col=col, border=border, clipping=clipping, **kwargs)


def kp_data_background(kp, r0=None, r1=None, data_panel=1, color="#EEEEEE", **kwargs):
    """Shade the [r0, r1] range of a data panel behind every chromosome."""
    _check_kp(kp)
    r0, r1, _, _ = panel_defaults(kp, data_panel, r0, r1)
    kwargs.setdefault("zorder", 0.1)
    for chrom in kp.chromosomes:
        x0, x1 = kp.layout.chromosome_extent(chrom)
        ys = kp.coord_change(chrom, y=scale_y([0.0, 1.0], 0, 1, r0, r1), data_panel=data_panel).y
        kp.ax.add_patch(patches.Rectangle((x0, ys.min()), x1 - x0, abs(ys[1] - ys[0]),
                                          facecolor=color, edgecolor="none", **kwargs))
    return kp


def kp_axis(kp, ymin=None, ymax=None, r0=None, r1=None, data_panel=1, tick_pos=None,
            labels=None, numticks=3, side="left", tick_len=0.003, **kwargs):
    """A value axis along one side of every chromosome's data panel."""
    _check_kp(kp)
    if side not in ("left", "right"):
        raise ValueError(f"side must be 'left' or 'right', got {side!r}")
    r0, r1, ymin, ymax = panel_defaults(kp, data_panel, r0, r1, ymin, ymax)
    if tick_pos is None:
        tick_pos = np.linspace(ymin, ymax, numticks)
    tick_pos = np.asarray(tick_pos, dtype=float)
    if labels is None:
        labels = [f"{v:g}" for v in tick_pos]
    if len(labels) != len(tick_pos):
        raise ValueError("labels must have one entry per tick")
    kwargs.setdefault("fontsize", 5)

    for chrom in kp.chromosomes:
        x0, x1 = kp.layout.chromosome_extent(chrom)
        x = x0 if side == "left" else x1
        sign = -1 if side == "left" else 1
        ys = kp.coord_change(chrom, y=scale_y(tick_pos, ymin, ymax, r0, r1), data_panel=data_panel).y
        segments = [[(x, ys.min()), (x, ys.max())]]
        segments += [[(x, y), (x + sign * tick_len, y)] for y in ys]
        kp.ax.add_collection(LineCollection(segments, colors="black", linewidths=0.4))
        for y, label in zip(ys, labels):
            kp.ax.text(x + sign * tick_len * 1.5, y, label,
                       ha="right" if side == "left" else "left", va="center", **kwargs)
    return kp
