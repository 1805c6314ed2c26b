"""
Argument glue shared by the plotting functions: recycling, filtering,
value-range scaling and visibility checks.
"""

from typing import NamedTuple

import numpy as np
import pandas as pd
from matplotlib.colors import is_color_like

from karyoplot.genome import overlaps_any, to_regions


class PointParams(NamedTuple):
    chr: np.ndarray
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray


class SegmentParams(NamedTuple):
    chr: np.ndarray
    x0: np.ndarray
    x1: np.ndarray
    y0: np.ndarray
    y1: np.ndarray
    mask: np.ndarray


def is_color_tuple(values) -> bool:
    """An RGB(A) tuple such as (1.0, 0.0, 0.0) is one color, not one value per element."""
    return isinstance(values, tuple) and is_color_like(values)


def is_vector(values, color=False) -> bool:
    if color and is_color_tuple(values):
        return False
    return isinstance(values, (list, tuple, np.ndarray, pd.Series, pd.Index))


def recycle(values, n, color=False) -> list:
    """
    Repeat ``values`` until it has ``n`` elements (scalars are repeated).
    With ``color`` an RGB(A) tuple counts as a scalar.
    """
    if not is_vector(values, color):
        return [values] * n
    seq = list(values)
    if not seq:
        if n == 0:
            return []
        raise ValueError("Cannot recycle an empty sequence")
    return [seq[i % len(seq)] for i in range(n)]


def filter_params(values, mask, n, color=False):
    """Keep the elements of ``values`` selected by ``mask`` when it has one value per element."""
    if is_vector(values, color) and len(values) == n:
        mask = np.asarray(mask, dtype=bool)
        return [v for v, keep in zip(values, mask) if keep]
    return values


def scale_y(y, ymin, ymax, r0, r1):
    """Map values in [ymin, ymax] onto the vertical range [r0, r1] of a data panel."""
    ymin = np.asarray(ymin, dtype=float)
    ymax = np.asarray(ymax, dtype=float)
    if np.any(ymin == ymax):
        raise ValueError(f"ymin and ymax must differ (got {ymin} and {ymax})")
    y = np.asarray(y, dtype=float)
    return r0 + (y - ymin) / (ymax - ymin) * (np.asarray(r1, dtype=float) - r0)


def panel_range(plot_params, data_panel):
    if data_panel in (1, 2):
        return plot_params[f"data{data_panel}_min"], plot_params[f"data{data_panel}_max"]
    return 0, 1


def panel_defaults(kp, data_panel=1, r0=None, r1=None, ymin=None, ymax=None):
    """
    Fill the unset ones of r0/r1/ymin/ymax: r0 and r1 default to the whole
    panel (0 and 1), ymin and ymax to the panel's data min and max.
    """
    pmin, pmax = panel_range(kp.plot_params, data_panel)
    return (0.0 if r0 is None else r0,
            1.0 if r1 is None else r1,
            pmin if ymin is None else ymin,
            pmax if ymax is None else ymax)


def auto_track(current_track, total_tracks, margin=0.0, r0=0.0, r1=1.0):
    """
    The (r0, r1) of track ``current_track`` (0-based) when [r0, r1] is split
    into ``total_tracks`` equal tracks. ``margin`` is the fraction of a track
    left empty at its top.
    """
    if total_tracks < 1:
        raise ValueError("total_tracks must be at least 1")
    if not 0 <= current_track < total_tracks:
        raise ValueError(f"current_track must be in [0, {total_tracks - 1}], got {current_track}")
    height = (r1 - r0) / total_tracks
    t0 = r0 + current_track * height
    return t0, t0 + height * (1.0 - margin)


def visible_mask(kp, chrs, x0, x1=None) -> np.ndarray:
    """True where the interval [x0, x1] on ``chrs`` overlaps the visible genome."""
    x1 = x0 if x1 is None else x1
    lo = np.minimum(x0, x1)
    hi = np.maximum(x0, x1)
    regions = pd.DataFrame({"chromosome": np.asarray(chrs, dtype=str),
                            "start": lo, "end": hi})
    return overlaps_any(regions, kp.genome)


def _column_or(data, name, value):
    if value is None and data is not None and name in data.columns:
        return data[name].to_numpy()
    return value


def prepare_parameters2(kp, data=None, chr=None, x=None, y=None, ymin=None, ymax=None,
                        r0=None, r1=None, data_panel=1, filter_data=True) -> PointParams:
    """
    Point-like parameters ready for the coordinate-change function.

    With ``data`` the chromosome comes from the regions and x is their
    midpoint; a ``y`` metadata column is used when ``y`` is not given.
    """
    if data is not None:
        data = to_regions(data)
        chr = data["chromosome"].astype(str).to_numpy()
        x = ((data["start"] + data["end"]) / 2.0).to_numpy()
        y = _column_or(data, "y", y)
    if chr is None or x is None:
        raise ValueError("Either data or chr and x must be given")
    if y is None:
        raise ValueError("y must be given (or be a column of data)")

    n = max(len(v) if is_vector(v) else 1 for v in (chr, x, y))
    chrs = np.asarray(recycle(chr, n), dtype=str)
    x = np.asarray(recycle(x, n), dtype=float)
    y = np.asarray(recycle(y, n), dtype=float)

    mask = visible_mask(kp, chrs, x) if filter_data else np.ones(n, dtype=bool)
    r0, r1, ymin, ymax = panel_defaults(kp, data_panel, r0, r1, ymin, ymax)
    return PointParams(chrs[mask], x[mask], scale_y(y[mask], ymin, ymax, r0, r1), mask)


def prepare_parameters4(kp, data=None, chr=None, x0=None, x1=None, y0=None, y1=None,
                        ymin=None, ymax=None, r0=None, r1=None, data_panel=1,
                        filter_data=True) -> SegmentParams:
    """
    Segment-like parameters ready for the coordinate-change function.

    With ``data`` the chromosome, x0 and x1 come from the regions; ``y0`` and
    ``y1`` metadata columns are used when not given explicitly.
    """
    if data is not None:
        data = to_regions(data)
        chr = data["chromosome"].astype(str).to_numpy()
        x0 = data["start"].to_numpy()
        x1 = data["end"].to_numpy()
        y0 = _column_or(data, "y0", y0)
        y1 = _column_or(data, "y1", y1)
    if chr is None or x0 is None or x1 is None:
        raise ValueError("Either data or chr, x0 and x1 must be given")
    if y0 is None or y1 is None:
        raise ValueError("y0 and y1 must be given (or be columns of data)")

    values = (chr, x0, x1, y0, y1)
    n = max(len(v) if is_vector(v) else 1 for v in values)
    chrs = np.asarray(recycle(chr, n), dtype=str)
    x0, x1, y0, y1 = (np.asarray(recycle(v, n), dtype=float) for v in (x0, x1, y0, y1))

    mask = visible_mask(kp, chrs, x0, x1) if filter_data else np.ones(n, dtype=bool)
    r0, r1, ymin, ymax = panel_defaults(kp, data_panel, r0, r1, ymin, ymax)
    return SegmentParams(chrs[mask], x0[mask], x1[mask],
                         scale_y(y0[mask], ymin, ymax, r0, r1),
                         scale_y(y1[mask], ymin, ymax, r0, r1), mask)
