"""
Color assignment helpers.
"""

import logging
from collections.abc import Mapping

import numpy as np
import pandas as pd
from matplotlib.colors import to_hex, to_rgb, to_rgba

from karyoplot.config import CHROMOSOME_PALETTES
from karyoplot.genome import chromosome_labels, chromosome_levels
from karyoplot.transform import is_vector, recycle

logger = logging.getLogger(__name__)


def is_missing_color(col) -> bool:
    """None, False, NaN and 'none'/'NA' all mean 'do not draw'."""
    if col is None or col is False:
        return True
    if isinstance(col, float) and np.isnan(col):
        return True
    return isinstance(col, str) and col.lower() in ("none", "na", "")


def _elementwise(func, col, *args):
    if is_vector(col, color=True):
        return [func(c, *args) for c in col]
    return func(col, *args)


def _shift(col, amount):
    if is_missing_color(col):
        return col
    rgb = np.clip(np.asarray(to_rgb(col)) + amount / 255.0, 0.0, 1.0)
    return to_hex(rgb)


def lighter(col, amount=150):
    """Add ``amount`` (0-255 scale) to every RGB channel, clamped to white."""
    return _elementwise(_shift, col, amount)


def darker(col, amount=150):
    """Subtract ``amount`` (0-255 scale) from every RGB channel, clamped to black."""
    return _elementwise(_shift, col, -amount)


def _alpha(col, amount):
    if is_missing_color(col):
        return col
    r, g, b, _ = to_rgba(col)
    return to_hex((r, g, b, 1.0 - amount), keep_alpha=True)


def transparent(col, amount=0.5):
    """Return ``col`` with alpha set to ``1 - amount``."""
    if not 0 <= amount <= 1:
        raise ValueError(f"amount must be in [0, 1], got {amount}")
    return _elementwise(_alpha, col, amount)


def preprocess_colors(col=None, border=None):
    """
    Fill in the missing one of a fill/border pair.

    Only border given -> fill is a lighter border. Only col given -> border is
    a darker col. Neither given -> black fill with a black border. A border of
    False/'none'/NaN stays missing and means no stroke.
    """
    if col is None and border is None:
        col = "black"
    if col is None:
        col = lighter(border)
    if border is None:
        border = darker(col)
    return col, border


def col_by_chr(data, colors="2grays", all_chrs=None, default_col="black") -> list:
    """
    Assign a color to every element of ``data`` according to its chromosome.

    ``data`` is a regions frame or a sequence of chromosome names. ``colors``
    is the name of a palette in CHROMOSOME_PALETTES, a single color, a
    sequence of colors (recycled over ``all_chrs`` in order) or a mapping
    {chromosome: color}. Chromosomes a mapping does not cover get
    ``default_col``.

    Returns a list with one color per element of ``data``.
    """
    if isinstance(colors, str):
        colors = CHROMOSOME_PALETTES.get(colors, [colors])
    elif not is_vector(colors, color=True) and not isinstance(colors, (Mapping, pd.Series)):
        colors = [colors]

    chrs = chromosome_labels(data)

    named = isinstance(colors, Mapping) or (
        isinstance(colors, pd.Series) and not isinstance(colors.index, pd.RangeIndex)
    )
    if named:
        mapping = {str(k): v for k, v in dict(colors).items()}
        missing = sorted(set(chrs) - set(mapping))
        if missing:
            logger.debug(f"No color for {missing}; using {default_col}")
        return [mapping.get(c, default_col) for c in chrs]

    palette = list(colors)
    if not palette:
        raise ValueError("colors must not be empty")
    if all_chrs is None:
        all_chrs = chromosome_levels(data)
    all_chrs = [str(c) for c in all_chrs]
    lookup = dict(zip(all_chrs, recycle(palette, len(all_chrs))))
    return [lookup.get(c, default_col) for c in chrs]
