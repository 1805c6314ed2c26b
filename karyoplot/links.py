"""
Links between pairs of genomic regions, drawn as Bezier ribbons.
"""

import logging

import matplotlib.patches as patches
import numpy as np
import pandas as pd

from karyoplot.bezier import bezier, bezier_steps
from karyoplot.colors import is_missing_color, preprocess_colors
from karyoplot.config import DEFAULT_LINK_COLOR
from karyoplot.core import KaryoPlot
from karyoplot.genome import metadata_columns, overlaps_any, to_regions
from karyoplot.plotting import element_kwargs, split_kwargs
from karyoplot.transform import (
    filter_params,
    panel_defaults,
    panel_range,
    prepare_parameters4,
    recycle,
    scale_y,
)

logger = logging.getLogger(__name__)


def links_from_metadata(data: pd.DataFrame) -> pd.DataFrame:
    """
    Build the link ends from the metadata columns of ``data``.

    The first three metadata columns are read as chromosome, start and end (any
    names); the strand, if any, comes from the first column with "strand" in
    its name.
    """
    meta = metadata_columns(data)
    try:
        if len(meta) < 3:
            raise ValueError(f"need at least 3 metadata columns, found {len(meta)}")
        ends = pd.DataFrame({
            "chromosome": data[meta[0]].astype(str).to_numpy(),
            "start": data[meta[1]].to_numpy(),
            "end": data[meta[2]].to_numpy(),
        })
        strand_cols = [c for c in meta[3:] if "strand" in str(c)]
        if strand_cols:
            ends["strand"] = data[strand_cols[0]].to_numpy()
        return to_regions(ends)
    except (ValueError, TypeError, KeyError) as e:
        raise ValueError(f"It was not possible to create data2 from the metadata of data. {e}") from e


def _swap_reversed(x0, x1, strand):
    """Swap the boundaries of regions on the negative strand, flipping the link end."""
    neg = np.asarray(strand) == "-"
    x0, x1 = x0.copy(), x1.copy()
    x0[neg], x1[neg] = x1[neg], x0[neg]
    return x0, x1


def control_offsets(y_start, y_end, y_ctrl, upward):
    """
    Vertical offsets of the two inner control points of a link.

    The curve leaves the start towards the end: a start above the end bends
    down from the start and up into the end, and vice versa. Ends at the same
    height arch away from the ideogram, which is up on an upward panel and
    down on a downward one.
    """
    if y_start > y_end:
        return -y_ctrl, y_ctrl
    if y_start < y_end:
        return y_ctrl, -y_ctrl
    if upward:
        return y_ctrl, y_ctrl
    return -y_ctrl, -y_ctrl


def link_curves(x0_start, x1_start, y_start, x0_end, x1_end, y_end, y_ctrl, upward, t):
    """The two boundary curves of a single link, each an array of shape (len(t), 2)."""
    c_start, c_end = control_offsets(y_start, y_end, y_ctrl, upward)
    py = [y_start, y_start + c_start, y_end + c_end, y_end]
    curve1 = bezier(t, [x0_start, x0_start, x0_end, x0_end], py)
    curve2 = bezier(t, [x1_start, x1_start, x1_end, x1_end], py)
    return curve1, curve2


def kp_plot_links(kp, data, data2=None, y=0, arch_height=None, data_panel=1, r0=None, r1=None,
                  ymin=None, ymax=None, col=DEFAULT_LINK_COLOR, border=None, clipping=True,
                  num_bezier_segments=50, **kwargs):
    """
    Plot links (lines or ribbons) between pairs of regions.

    Links join the first region of ``data`` with the first of ``data2``, the
    second with the second, and so on. When ``data2`` is None the link ends are
    read from the metadata columns of ``data`` (see ``links_from_metadata``).
    A region on the negative strand is flipped, so the start of one region is
    linked to the end of its pair.

    A link is only drawn when both of its ends are visible; links touching a
    chromosome that is not plotted (or outside the zoomed region) are dropped
    silently.

    Args:
        kp: The KaryoPlot to draw on
        data: Link start regions
        data2: Link end regions, same length as ``data``
        y: Value where links start and end, per link or shared
        arch_height: Approximate arch height of links in ``y`` units. Defaults
            to the whole span of the data panel
        data_panel: Data panel to draw on
        r0, r1: Vertical range of the panel to use
        ymin, ymax: Value range mapped onto [r0, r1]
        col: Fill color(s). If None and border is given, a lighter border
        border: Border color(s). If None, a darker col; False for no border
        clipping: Keep zoomed plots from drawing into the margins
        num_bezier_segments: Samples per boundary curve
        **kwargs: Passed to matplotlib; per-link lists are filtered with the links

    Returns:
        The KaryoPlot, unchanged
    """
    if not isinstance(kp, KaryoPlot):
        raise TypeError("'karyoplot' must be a valid KaryoPlot object")
    if data is None:
        raise ValueError("The parameter 'data' is required")
    if not isinstance(data, pd.DataFrame):
        raise TypeError("'data' must be a regions DataFrame")
    data = to_regions(data)

    if arch_height is None:
        pmin, pmax = panel_range(kp.plot_params, data_panel)
        arch_height = pmax - pmin

    col, border = preprocess_colors(col, border)

    if data2 is not None:
        if not isinstance(data2, pd.DataFrame):
            raise TypeError("If present, data2 must be a regions DataFrame")
        if len(data) != len(data2):
            raise ValueError("data and data2 must have the same length")
        data2 = to_regions(data2)
    else:
        data2 = links_from_metadata(data)

    # remove any links with at least one end out of the plotted regions
    to_keep = overlaps_any(data, kp.genome) & overlaps_any(data2, kp.genome)
    n_total = len(to_keep)
    if not to_keep.all():
        logger.debug(f"Dropping {int((~to_keep).sum())} of {n_total} link(s) with an end outside the plot")
        data = data[to_keep].reset_index(drop=True)
        data2 = data2[to_keep].reset_index(drop=True)

    n = len(data)
    if n == 0:
        return kp

    shared, per_element = split_kwargs(kwargs, to_keep)
    col = recycle(filter_params(col, to_keep, n_total, color=True), n, color=True)
    border = recycle(filter_params(border, to_keep, n_total, color=True), n, color=True)
    y = np.asarray(recycle(filter_params(y, to_keep, n_total), n), dtype=float)
    arch_height = np.asarray(recycle(filter_params(arch_height, to_keep, n_total), n), dtype=float)

    pp_start = prepare_parameters4(kp, data=data, y0=y, y1=y, ymin=ymin, ymax=ymax, r0=r0, r1=r1,
                                   data_panel=data_panel, filter_data=False)
    pp_end = prepare_parameters4(kp, data=data2, y0=y, y1=y, ymin=ymin, ymax=ymax, r0=r0, r1=r1,
                                 data_panel=data_panel, filter_data=False)

    ccf = kp.coord_change
    x0_start = ccf(pp_start.chr, x=pp_start.x0, data_panel=data_panel).x
    x1_start = ccf(pp_start.chr, x=pp_start.x1, data_panel=data_panel).x
    y_start = ccf(pp_start.chr, y=pp_start.y0, data_panel=data_panel).y
    x0_start, x1_start = _swap_reversed(x0_start, x1_start, data["strand"])

    x0_end = ccf(pp_end.chr, x=pp_end.x0, data_panel=data_panel).x
    x1_end = ccf(pp_end.chr, x=pp_end.x1, data_panel=data_panel).x
    y_end = ccf(pp_end.chr, y=pp_end.y0, data_panel=data_panel).y
    x0_end, x1_end = _swap_reversed(x0_end, x1_end, data2["strand"])

    # arch height in plot units, measured on the first chromosome
    r0, r1, ymin, ymax = panel_defaults(kp, data_panel, r0, r1, ymin, ymax)
    ref_chr = kp.chromosomes[0]
    y_low = ccf(ref_chr, y=np.repeat(scale_y(0.0, ymin, ymax, r0, r1), n), data_panel=data_panel).y
    y_high = ccf(ref_chr, y=scale_y(arch_height, ymin, ymax, r0, r1), data_panel=data_panel).y
    y_ctrl = np.abs(y_low - y_high)

    upward = kp.is_upward(str(data.at[0, "chromosome"]), data_panel)
    t = bezier_steps(num_bezier_segments)
    clip_rect = kp.clip_rectangle(clipping)

    for i in range(n):
        curve1, curve2 = link_curves(x0_start[i], x1_start[i], y_start[i],
                                     x0_end[i], x1_end[i], y_end[i], y_ctrl[i], upward, t)
        extra = element_kwargs(shared, per_element, i)
        poly = patches.Polygon(
            np.vstack([curve1, curve2[::-1]]), closed=True,
            facecolor="none" if is_missing_color(col[i]) else col[i],
            edgecolor="none", **extra)
        kp.ax.add_patch(poly)
        artists = [poly]
        if not is_missing_color(border[i]):
            artists += kp.ax.plot(curve1[:, 0], curve1[:, 1], color=border[i], **extra)
            artists += kp.ax.plot(curve2[:, 0], curve2[:, 1], color=border[i], **extra)
        if clip_rect is not None:
            for artist in artists:
                artist.set_clip_path(clip_rect)

    logger.debug(f"Plotted {n} link(s)")
    return kp
