"""Cepstral distances between frames around every possible landmark."""

from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, TextIO

import numpy as np

from .htkfile import HtkFile, HtkFormatError

LAST_S = 4


def load_stats(stream: TextIO) -> tuple[np.ndarray, np.ndarray]:
    """Read a text matrix (height, width, then rows) and return rows 0 and 1.

    Row 0 holds the per-coefficient means, row 1 the standard deviations.
    """
    tokens = stream.read().split()
    if len(tokens) < 2:
        raise ValueError("statistics file has no matrix dimensions")
    height, width = int(tokens[0]), int(tokens[1])
    if height < 2:
        raise ValueError(f"statistics matrix has {height} rows, expected at least 2")
    values = tokens[2 : 2 + height * width]
    if len(values) != height * width:
        raise ValueError(
            f"statistics matrix of size {height}x{width} holds only {len(values)} values"
        )
    matrix = np.array([float(v) for v in values], dtype=np.float64).reshape(height, width)
    return matrix[0].copy(), matrix[1].copy()


def read_features(
    stream: BinaryIO, stats: tuple[np.ndarray, np.ndarray] | None = None
) -> np.ndarray:
    """Read all frames of an HTK stream as float64, normalised when stats are given."""
    htk = HtkFile(stream)
    header = htk.read_header()
    n = header.num_coefs()
    frames = [vector.astype(np.float64) for vector in htk.iter_vectors()]
    features = np.array(frames, dtype=np.float64).reshape(len(frames), n)
    if stats is not None:
        mean, std = (np.asarray(s, dtype=np.float64)[:n] for s in stats)
        with np.errstate(divide="ignore", invalid="ignore"):
            features = (features - mean) / std
    return features


def cepstral_distances(features) -> np.ndarray:
    """Return, for every frame index, the s-distances for s in 1..LAST_S.

    The s-distance at landmark i is the mean over j = 1..s of the squared
    Euclidean distance between frames i-j and i+j-1. Where the frames are
    out of range the value is -1.
    """
    feats = np.asarray(features, dtype=np.float64)
    n = len(feats)
    out = np.full((n, LAST_S), -1.0)
    for i in range(n):
        for s in range(1, LAST_S + 1):
            if i - s < 0 or i + s - 1 >= n:
                continue
            before = feats[i - s : i][::-1]
            after = feats[i : i + s]
            out[i, s - 1] = float(np.sum((before - after) ** 2)) / s
    return out


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Computes the cepstral distance between all frames. Each line "
        "in the output file corresponds to a landmark and the values along the "
        "columns are the s-distance between the frames around the landmark. "
        "s-distance is the distance of two frames that are 2*s-1 apart around the "
        "landmark. s in {1,2,3,4}",
        usage="%(prog)s <htk file> [<htk stats>] <output file>",
    )
    parser.add_argument("files", nargs="*")
    args = parser.parse_args(argv)

    if len(args.files) == 2:
        htk_path, out_path = args.files
        stats_path = ""
        print(f"Info: input HTK file {htk_path}, output file {out_path}")
    elif len(args.files) == 3:
        htk_path, stats_path, out_path = args.files
    else:
        parser.print_help()
        return 1

    stats = None
    if stats_path:
        try:
            with open(stats_path, "r", encoding="utf-8") as stats_stream:
                stats = load_stats(stats_stream)
        except OSError:
            print(f"Warning: Unable to mfcc stats from {stats_path}", file=sys.stderr)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    try:
        instream = open(htk_path, "rb")
    except OSError:
        print(f"Cannot open input file {htk_path}.", file=sys.stderr)
        return 1
    with instream:
        try:
            features = read_features(instream, stats)
        except HtkFormatError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    distances = cepstral_distances(features)
    try:
        outstream = open(out_path, "w", encoding="utf-8")
    except OSError:
        print(f"Cannot open output file {out_path}.", file=sys.stderr)
        return 1
    with outstream:
        outstream.write(f"{len(features)} {LAST_S}\n")
        for row in distances:
            outstream.write("".join(f"{float(v):g} " for v in row) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())