"""Per-coefficient mean and standard deviation over a list of HTK files."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Iterable

import numpy as np

from .htkfile import HtkFile, HtkFormatError


def _read_into(htk: HtkFile, buffer: np.ndarray) -> None:
    """Overwrite the front of the buffer with the next frame, however much was read."""
    vector = htk.read_vector()
    buffer[: len(vector)] = vector


def feature_stats(paths: Iterable[str | os.PathLike]) -> tuple[np.ndarray, np.ndarray]:
    """Return running float32 means and standard deviations of all frames.

    Every file contributes ``nSamples`` reads. For every file after the first,
    the first frame is read and discarded before counting starts; a read past
    the end of a file leaves the previous frame in place and it is counted
    again.
    """
    paths = list(paths)
    if not paths:
        raise ValueError("the file list is empty")

    buffer = means = squares = None
    count = 0
    for index, path in enumerate(paths):
        with open(path, "rb") as stream:
            htk = HtkFile(stream)
            header = htk.read_header()
            n = header.num_coefs()
            if buffer is None:
                buffer = np.zeros(n, dtype=np.float32)
                means = np.zeros(n, dtype=np.float32)
                squares = np.zeros(n, dtype=np.float32)
            elif n != len(buffer):
                raise HtkFormatError(
                    f"{path} has {n} coefficients per frame, expected {len(buffer)}"
                )
            if index > 0:
                _read_into(htk, buffer)
            for _ in range(header.n_samples):
                _read_into(htk, buffer)
                count += 1
                scale = np.float32(count)
                means = (buffer + (count - 1) * means) / scale
                squares = (buffer * buffer + (count - 1) * squares) / scale

    with np.errstate(invalid="ignore"):
        stddev = np.sqrt(squares - means * means)
    return means, stddev


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Computes the mean and the variance of each of the feature in "
        "the given list of HTK files."
    )
    parser.add_argument("file_list", metavar="htk-file-list")
    args = parser.parse_args(argv)

    try:
        with open(args.file_list, "r", encoding="utf-8") as list_stream:
            paths = list_stream.read().split()
    except OSError:
        print(f"Error: Unable to open file list {args.file_list}", file=sys.stderr)
        return 1
    if not paths:
        print("Error: Cannot open HTK file .", file=sys.stderr)
        return 1

    try:
        means, stddev = feature_stats(paths)
    except OSError as exc:
        print(f"Error: Cannot open HTK file {exc.filename}.", file=sys.stderr)
        return 1
    except HtkFormatError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"2 {len(means)}")
    print("".join(f"{float(v):g} " for v in means))
    print("".join(f"{float(v):g} " for v in stddev))
    return 0


if __name__ == "__main__":
    sys.exit(main())