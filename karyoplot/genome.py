"""
Genomic interval collections and the readers that produce them.

A regions frame is a pandas DataFrame with the columns
``chromosome``, ``start``, ``end`` and ``strand`` followed by any number of
metadata columns. Strand is one of ``"+"``, ``"-"`` or ``"*"``.
"""

import logging
import re
from collections.abc import Mapping
from pathlib import Path

import numpy as np
import pandas as pd

from karyoplot.config import GENOME_SIZES

logger = logging.getLogger(__name__)

REGION_COLUMNS = ["chromosome", "start", "end", "strand"]
CYTOBAND_COLUMNS = ["chromosome", "start", "end", "name", "stain"]

_COLUMN_ALIASES = {
    "chr": "chromosome",
    "chrom": "chromosome",
    "#chrom": "chromosome",
    "seqnames": "chromosome",
    "seqname": "chromosome",
    "contig": "chromosome",
    "chromstart": "start",
    "chromend": "end",
}

_REGION_STRING = re.compile(r"^\s*([^:\s]+):([\d,]+)-([\d,]+)(?::([+\-*]))?\s*$")


def empty_regions(extra_columns=()) -> pd.DataFrame:
    return pd.DataFrame(columns=REGION_COLUMNS + list(extra_columns))


def _parse_region_string(s):
    m = _REGION_STRING.match(str(s))
    if m is None:
        raise ValueError(f"Could not parse genomic region: {s!r} (expected 'chr:start-end')")
    chrom, start, end, strand = m.groups()
    return chrom, int(start.replace(",", "")), int(end.replace(",", "")), strand or "*"


def to_regions(obj) -> pd.DataFrame:
    """
    Normalize ``obj`` into a regions frame.

    Accepts a DataFrame (chromosome column may be called chr/chrom/seqnames,
    a single ``pos`` column is used for both start and end), a sequence of
    ``(chr, start, end[, strand])`` tuples, or ``"chr1:100-200"`` strings.
    """
    if obj is None:
        raise ValueError("Cannot build genomic regions from None")

    if isinstance(obj, pd.DataFrame):
        df = obj.rename(columns={c: _COLUMN_ALIASES[str(c).lower()]
                                 for c in obj.columns if str(c).lower() in _COLUMN_ALIASES})
    elif isinstance(obj, str):
        df = pd.DataFrame([_parse_region_string(obj)], columns=REGION_COLUMNS)
    else:
        records = list(obj)
        if not records:
            return empty_regions()
        if all(isinstance(r, str) for r in records):
            records = [_parse_region_string(r) for r in records]
        df = pd.DataFrame([tuple(r) for r in records])
        if df.shape[1] < 3:
            raise ValueError("Region tuples need at least chromosome, start and end")
        names = REGION_COLUMNS + [f"V{i}" for i in range(5, df.shape[1] + 1)]
        df.columns = names[:df.shape[1]]

    if "chromosome" not in df.columns:
        raise ValueError(f"No chromosome column found among: {list(df.columns)}")
    if "start" not in df.columns and "pos" in df.columns:
        df = df.rename(columns={"pos": "start"})
        df["end"] = df["start"]
    missing = [c for c in ("start", "end") if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    df = df.copy()
    if not isinstance(df["chromosome"].dtype, pd.CategoricalDtype):
        df["chromosome"] = df["chromosome"].astype(str)
    df["start"] = df["start"].astype(np.int64)
    df["end"] = df["end"].astype(np.int64)
    if "strand" not in df.columns:
        df["strand"] = "*"
    df["strand"] = df["strand"].fillna("*").astype(str)

    bad = df["start"] > df["end"]
    if bad.any():
        raise ValueError(f"{int(bad.sum())} region(s) have start > end")

    metadata = [c for c in df.columns if c not in REGION_COLUMNS]
    return df[REGION_COLUMNS + metadata].reset_index(drop=True)


def metadata_columns(regions: pd.DataFrame) -> list:
    return [c for c in regions.columns if c not in REGION_COLUMNS]


def chromosome_labels(data) -> list:
    """Per-element chromosome labels of a regions frame, or the labels themselves."""
    if isinstance(data, pd.DataFrame):
        return data["chromosome"].astype(str).tolist()
    if isinstance(data, str):
        return [data]
    return [str(d) for d in data]


def chromosome_levels(data) -> list:
    """
    The ordered set of chromosome labels of ``data``.

    Categorical chromosome columns contribute all their categories (even
    unused ones); otherwise labels are taken in order of first appearance.
    """
    values = data["chromosome"] if isinstance(data, pd.DataFrame) else pd.Series(chromosome_labels(data))
    if isinstance(values.dtype, pd.CategoricalDtype):
        return [str(c) for c in values.cat.categories]
    return [str(c) for c in pd.unique(values)]


def overlaps_any(regions: pd.DataFrame, genome: pd.DataFrame) -> np.ndarray:
    """Boolean mask: True where a region overlaps any genome interval (closed intervals)."""
    chroms = regions["chromosome"].astype(str).to_numpy()
    starts = regions["start"].to_numpy()
    ends = regions["end"].to_numpy()
    mask = np.zeros(len(regions), dtype=bool)
    for g_chr, g_start, g_end in zip(genome["chromosome"].astype(str), genome["start"], genome["end"]):
        mask |= (chroms == g_chr) & (starts <= g_end) & (ends >= g_start)
    return mask


# ---------------- Genomes ----------------

def _genome_from_sizes(sizes) -> pd.DataFrame:
    return pd.DataFrame({
        "chromosome": [str(c) for c in sizes],
        "start": np.zeros(len(sizes), dtype=np.int64),
        "end": np.asarray(list(sizes.values()), dtype=np.int64),
        "strand": "*",
    })


def get_genome(genome="hg38") -> pd.DataFrame:
    """
    Build the genome regions frame (one interval per chromosome).

    ``genome`` may be an assembly name (hg38, hg19, GRCh38, GRCh37), a mapping
    {chromosome: length}, a path to a chrom.sizes file or a regions frame.
    """
    if isinstance(genome, pd.DataFrame):
        return to_regions(genome)
    if isinstance(genome, Mapping):
        return _genome_from_sizes(genome)
    if isinstance(genome, (str, Path)):
        if str(genome) in GENOME_SIZES:
            return _genome_from_sizes(GENOME_SIZES[str(genome)])
        if Path(genome).exists():
            return _genome_from_sizes(read_chrom_sizes(genome))
        raise ValueError(
            f"Unsupported genome: {genome}. "
            f"Use one of {list(GENOME_SIZES.keys())}, a chrom.sizes file or a mapping"
        )
    raise TypeError(f"Cannot build a genome from {type(genome).__name__}")


# ---------------- I/O helpers ----------------

def read_chrom_sizes(path) -> dict:
    """Two-column chrom.sizes file -> {chromosome: length}, in file order."""
    sizes = pd.read_csv(path, sep=r"\s+", header=None, usecols=[0, 1],
                        names=["chromosome", "size"], comment="#",
                        dtype={"chromosome": str, "size": np.int64})
    return dict(zip(sizes["chromosome"], sizes["size"]))


def read_bed(bed_path, chroms_keep=None) -> pd.DataFrame:
    """
    Read a BED file (0-based, half-open) into a regions frame.
    Columns 4-6 become name, score and strand; further columns are kept as
    metadata named V7, V8, ...
    """
    p = Path(bed_path)
    if not p.exists():
        raise FileNotFoundError(f"BED file not found: {p}")
    df = pd.read_csv(p, sep="\t", header=None, comment="#")
    if df.empty:
        return empty_regions()
    names = ["chromosome", "start", "end", "name", "score", "strand"]
    names += [f"V{i}" for i in range(len(names) + 1, df.shape[1] + 1)]
    df.columns = names[:df.shape[1]]
    df["chromosome"] = df["chromosome"].astype(str)
    if chroms_keep is not None:
        df = df[df["chromosome"].isin(chroms_keep)]
    return to_regions(df)


def read_cytobands(bed_path, chroms_keep=None) -> pd.DataFrame:
    """
    Read a UCSC-style cytoBand file (chromosome, start, end, band name, Giemsa
    stain; extra columns ignored), optionally keeping only ``chroms_keep``.

    Cytobands are optional, so a missing file only logs a warning and yields
    an empty frame; ideograms are then drawn as plain bodies.
    """
    p = Path(bed_path)
    if not p.exists():
        logger.warning(f"cytoband BED not found: {p}")
        return pd.DataFrame(columns=CYTOBAND_COLUMNS)
    bands = pd.read_csv(p, sep="\t", header=None, comment="#", usecols=list(range(len(CYTOBAND_COLUMNS))),
                        names=CYTOBAND_COLUMNS, dtype=str)
    bands["start"] = bands["start"].astype(np.int64)
    bands["end"] = bands["end"].astype(np.int64)
    if chroms_keep is not None:
        bands = bands[bands["chromosome"].isin([str(c) for c in chroms_keep])]
    logger.debug(f"Read {len(bands)} cytoband(s) from {p}")
    return bands.reset_index(drop=True)


def read_bedpe(bedpe_path):
    """
    Read a BEDPE file of region pairs.

    Returns ``(starts, ends)`` regions frames of equal length. Columns 9 and 10
    (strand1, strand2) set the strands; name and score (columns 7 and 8) are
    kept as metadata of ``starts``.
    """
    p = Path(bedpe_path)
    if not p.exists():
        raise FileNotFoundError(f"BEDPE file not found: {p}")
    df = pd.read_csv(p, sep="\t", header=None, comment="#")
    if df.shape[1] < 6:
        raise ValueError(f"BEDPE needs at least 6 columns, found {df.shape[1]} in {p}")

    starts = pd.DataFrame({"chromosome": df[0].astype(str), "start": df[1], "end": df[2]})
    ends = pd.DataFrame({"chromosome": df[3].astype(str), "start": df[4], "end": df[5]})
    if df.shape[1] > 6:
        starts["name"] = df[6].astype(str)
    if df.shape[1] > 7:
        starts["score"] = df[7]
    if df.shape[1] > 9:
        starts["strand"] = df[8].replace(".", "*")
        ends["strand"] = df[9].replace(".", "*")
    logger.debug(f"Read {len(df)} link(s) from {p}")
    return to_regions(starts), to_regions(ends)
