"""
Constants and layout defaults for karyoplot.
"""

from matplotlib import colormaps
from matplotlib.colors import to_hex

# ---------------- Genomes ----------------

HG38_GENOME_SIZES = {
    "chr1": 248956422,
    "chr2": 242193529,
    "chr3": 198295559,
    "chr4": 190214555,
    "chr5": 181538259,
    "chr6": 170805979,
    "chr7": 159345973,
    "chr8": 145138636,
    "chr9": 138394717,
    "chr10": 133797422,
    "chr11": 135086622,
    "chr12": 133275309,
    "chr13": 114364328,
    "chr14": 107043718,
    "chr15": 101991189,
    "chr16": 90338345,
    "chr17": 83257441,
    "chr18": 80373285,
    "chr19": 58617616,
    "chr20": 64444167,
    "chr21": 46709983,
    "chr22": 50818468,
    "chrX": 156040895,
    "chrY": 57227415,
}

HG19_GENOME_SIZES = {
    "chr1": 249250621,
    "chr2": 243199373,
    "chr3": 198022430,
    "chr4": 191154276,
    "chr5": 180915260,
    "chr6": 171115067,
    "chr7": 159138663,
    "chr8": 146364022,
    "chr9": 141213431,
    "chr10": 135534747,
    "chr11": 135006516,
    "chr12": 133851895,
    "chr13": 115169878,
    "chr14": 107349540,
    "chr15": 102531392,
    "chr16": 90354753,
    "chr17": 81195210,
    "chr18": 78077248,
    "chr19": 59128983,
    "chr20": 63025520,
    "chr21": 48129895,
    "chr22": 51304566,
    "chrX": 155270560,
    "chrY": 59373566,
}

GENOME_SIZES = {
    "hg38": HG38_GENOME_SIZES,
    "GRCh38": HG38_GENOME_SIZES,
    "hg19": HG19_GENOME_SIZES,
    "GRCh37": HG19_GENOME_SIZES,
}

CANONICAL_CHROMOSOMES = [f"chr{i}" for i in range(1, 23)] + ["chrX", "chrY"]

# ---------------- Colors ----------------

BAND_COLORS = {
    "gneg":    "#FFFFFF",
    "gpos25":  "#D9D9D9",
    "gpos33":  "#C0C0C0",
    "gpos50":  "#A6A6A6",
    "gpos66":  "#8C8C8C",
    "gpos75":  "#737373",
    "gpos100": "#595959",
    "gvar":    "#BFBFBF",  # variable; light gray
    "stalk":   "#A0A0FF",  # stalks; bluish
    "acen":    "#CC3333",  # centromere; red
}
UNKNOWN_BAND_COLOR = "#CCCCCC"


def _colormap_hex(name, n=None):
    cmap = colormaps[name]
    if n is None:
        return [to_hex(c) for c in cmap.colors]
    return [to_hex(cmap(i / n)) for i in range(n)]


CHROMOSOME_PALETTES = {
    "2grays":         ["#888888", "#444444"],
    "2blues":         ["#3333FF", "#0000AA"],
    "blackandwhite":  ["#000000", "#FFFFFF"],
    "rainbow":        _colormap_hex("hsv", 24),
    "brewer.set1":    _colormap_hex("Set1"),
    "brewer.set2":    _colormap_hex("Set2"),
    "brewer.set3":    _colormap_hex("Set3"),
    "brewer.pastel1": _colormap_hex("Pastel1"),
}

DEFAULT_LINK_COLOR = "#8e87eb"

# ---------------- Layout ----------------

PLOT_TYPES = (1, 2, 3, 4)

_BASE_PLOT_PARAMS = {
    "left_margin": 0.1,      # fraction of the figure width
    "right_margin": 0.05,
    "top_margin": 120,       # layout units from here on
    "bottom_margin": 100,
    "ideogram_height": 50,
    "data1_height": 200,
    "data1_in_margin": 20,
    "data1_out_margin": 20,
    "data1_min": 0,
    "data1_max": 1,
    "data2_height": 0,
    "data2_in_margin": 20,
    "data2_out_margin": 20,
    "data2_min": 0,
    "data2_max": 1,
    "chromosome_gap": 0.01,  # fraction of the drawable width, single-line layouts
}


def default_plot_params(plot_type: int = 1) -> dict:
    """
    Layout parameters for a plot type.

    1: one chromosome per row, data panel above the ideogram.
    2: one chromosome per row, data panels above and below.
    3: all chromosomes on one line, data panels above and below.
    4: all chromosomes on one line, data panel above.
    """
    if plot_type not in PLOT_TYPES:
        raise ValueError(f"Unsupported plot type: {plot_type}. Supported: {list(PLOT_TYPES)}")
    params = dict(_BASE_PLOT_PARAMS)
    if plot_type == 2:
        params["data2_height"] = 200
    elif plot_type == 3:
        params.update(left_margin=0.05, top_margin=200, bottom_margin=200, data2_height=200)
    elif plot_type == 4:
        params.update(left_margin=0.05, top_margin=200, bottom_margin=100)
    return params
