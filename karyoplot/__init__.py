"""
karyoplot: chromosome ideograms with data overlays and links, drawn with matplotlib.
"""

from karyoplot.bezier import bezier, bezier_steps
from karyoplot.colors import col_by_chr, darker, lighter, preprocess_colors, transparent
from karyoplot.config import default_plot_params
from karyoplot.core import KaryoPlot
from karyoplot.genome import (
    get_genome,
    overlaps_any,
    read_bed,
    read_bedpe,
    read_chrom_sizes,
    read_cytobands,
    to_regions,
)
from karyoplot.ideogram import (
    kp_add_base_numbers,
    kp_add_chromosome_names,
    kp_add_cytobands,
    plot_karyotype,
)
from karyoplot.layouts import Coordinates, SingleLineLayout, StackedLayout
from karyoplot.links import kp_plot_links
from karyoplot.plotting import (
    kp_axis,
    kp_data_background,
    kp_lines,
    kp_plot_regions,
    kp_plot_ribbon,
    kp_points,
    kp_rect,
    kp_segments,
    kp_text,
)
from karyoplot.transform import auto_track

__version__ = "0.1.0"

__all__ = [
    "Coordinates",
    "KaryoPlot",
    "SingleLineLayout",
    "StackedLayout",
    "auto_track",
    "bezier",
    "bezier_steps",
    "col_by_chr",
    "darker",
    "default_plot_params",
    "get_genome",
    "kp_add_base_numbers",
    "kp_add_chromosome_names",
    "kp_add_cytobands",
    "kp_axis",
    "kp_data_background",
    "kp_lines",
    "kp_plot_links",
    "kp_plot_regions",
    "kp_plot_ribbon",
    "kp_points",
    "kp_rect",
    "kp_segments",
    "kp_text",
    "lighter",
    "overlaps_any",
    "plot_karyotype",
    "preprocess_colors",
    "read_bed",
    "read_bedpe",
    "read_chrom_sizes",
    "read_cytobands",
    "to_regions",
    "transparent",
]
