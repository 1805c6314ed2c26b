"""
Plot links between genomic regions on a karyotype.

Links come from a BEDPE file (chrom1 start1 end1 chrom2 start2 end2
[name score strand1 strand2]); cytobands and point tracks are optional BEDs.
e.g. karyoplot -i links.bedpe --bed-cytoband hg38_cytoBand.bed --chromosomes chr1,chr2 --plot-type 2
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from karyoplot.colors import col_by_chr
from karyoplot.config import CHROMOSOME_PALETTES, DEFAULT_LINK_COLOR, PLOT_TYPES
from karyoplot.genome import read_bed, read_bedpe
from karyoplot.ideogram import kp_add_base_numbers, plot_karyotype
from karyoplot.links import kp_plot_links
from karyoplot.plotting import kp_data_background, kp_points

logger = logging.getLogger("karyoplot")


def setup_logger(
    name: str = "karyoplot",
    log_file: Optional[str] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Console (and optional file) logging for the command line tool."""
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    log = logging.getLogger(name)
    log.setLevel(level)
    log.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    log.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)
    return log


def _parse_list(s):
    """Parse comma/space separated list."""
    if not s:
        return []
    return [t.strip() for t in s.replace(",", " ").split() if t.strip()]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Plot links between genomic regions on a karyotype.")
    parser.add_argument("-i", "--input", required=True,
                        help="BEDPE file with the link pairs")
    parser.add_argument("-o", "--out", default="karyoplot_links.pdf",
                        help="Output figure; format from the extension (default: karyoplot_links.pdf)")
    parser.add_argument("--title", default=None, help="Plot title")

    # Genome and layout
    parser.add_argument("--genome", default="hg38",
                        help="Assembly name (hg38, hg19, GRCh38, GRCh37) or chrom.sizes file (default: hg38)")
    parser.add_argument("--chromosomes", default="canonical",
                        help="'canonical', 'all' or a comma/space-separated list of chromosomes")
    parser.add_argument("--zoom", default=None,
                        help="Only plot this region, e.g. chr1:1,000,000-5,000,000")
    parser.add_argument("--plot-type", type=int, choices=PLOT_TYPES, default=1,
                        help="1/2: one chromosome per row; 3/4: all chromosomes on one line (default: 1)")
    parser.add_argument("--bed-cytoband", default=None,
                        help="BED with cytobands (chrom, start, end, name, stain)")
    parser.add_argument("--base-numbers", action="store_true",
                        help="Add position ticks under the ideograms")
    parser.add_argument("--tick-dist", type=int, default=20_000_000,
                        help="Distance between position ticks (default: 20000000)")

    # Links
    parser.add_argument("--link-color", default=DEFAULT_LINK_COLOR,
                        help=f"Link fill color (default: {DEFAULT_LINK_COLOR})")
    parser.add_argument("--link-border", default=None,
                        help="Link border color; 'none' for no border (default: darker fill)")
    parser.add_argument("--color-by-chr", default=None, choices=sorted(CHROMOSOME_PALETTES),
                        help="Color links by the chromosome of their start with this palette")
    parser.add_argument("--link-panel", default="1", choices=["1", "2"],
                        help="Data panel the links are drawn on (default: 1)")
    parser.add_argument("--link-y", type=float, default=0.0,
                        help="Value where links start and end (default: 0)")
    parser.add_argument("--arch-height", type=float, default=None,
                        help="Approximate arch height in data panel units (default: whole panel)")
    parser.add_argument("--alpha", type=float, default=0.6, help="Link transparency (default: 0.6)")
    parser.add_argument("--num-segments", type=int, default=50,
                        help="Samples per Bezier curve (default: 50)")

    # Points
    parser.add_argument("--points", default=None,
                        help="Optional BED of points; the score column (if any) is plotted as y")
    parser.add_argument("--points-panel", default="1", choices=["1", "2"],
                        help="Data panel for the points (default: 1)")
    parser.add_argument("--points-color", default="black", help="Point color (default: black)")

    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logger(log_file=args.log_file, level=logging.DEBUG if args.verbose else logging.INFO)
    logger.debug(f"Arguments: {vars(args)}")

    chromosomes = args.chromosomes
    if chromosomes not in ("canonical", "all"):
        chromosomes = _parse_list(chromosomes)

    print("Reading links...")
    try:
        starts, ends = read_bedpe(args.input)
    except (FileNotFoundError, ValueError) as e:
        sys.exit(f"Error: {e}")
    print(f"  Links: {len(starts)}")

    kp = plot_karyotype(genome=args.genome, chromosomes=chromosomes, plot_type=args.plot_type,
                        cytobands=args.bed_cytoband, zoom=args.zoom)
    if args.base_numbers:
        kp_add_base_numbers(kp, tick_dist=args.tick_dist)

    if args.points:
        points = read_bed(args.points, chroms_keep=kp.chromosomes)
        print(f"  Points: {len(points)}")
        if not points.empty:
            panel = int(args.points_panel)
            if "score" in points.columns:
                y = points["score"].to_numpy(dtype=float)
                ymin, ymax = float(np.nanmin(y)), float(np.nanmax(y))
                if ymin == ymax:
                    ymin, ymax = ymin - 1.0, ymax + 1.0
            else:
                y, ymin, ymax = 0.5, 0, 1
            kp_data_background(kp, data_panel=panel)
            kp_points(kp, data=points, y=y, ymin=ymin, ymax=ymax, data_panel=panel,
                      color=args.points_color)

    col = args.link_color
    if args.color_by_chr:
        col = col_by_chr(starts, colors=args.color_by_chr)
    border = False if args.link_border and args.link_border.lower() == "none" else args.link_border

    print("\nPlotting links...")
    kp_plot_links(kp, data=starts, data2=ends, y=args.link_y, arch_height=args.arch_height,
                  data_panel=int(args.link_panel), col=col, border=border, alpha=args.alpha,
                  num_bezier_segments=args.num_segments)

    if args.title:
        kp.fig.suptitle(args.title, fontsize=12, fontweight="bold")

    kp.savefig(args.out)
    plt.close(kp.fig)

    print("\nDone!")
    print(f"  - {args.out}")


if __name__ == "__main__":
    main()
