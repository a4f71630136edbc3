"""Split an HTK file into one HTK file per labelled segment."""

from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from typing import Iterable, Sequence

from .contract import Segment, read_phn
from .htkfile import HtkFile, HtkFormatError, HtkHeader


def split_by_segments(
    header: HtkHeader,
    frames: Sequence,
    segments: Iterable[Segment],
    out_prefix: str | os.PathLike,
) -> list[tuple[str, Segment]]:
    """Write the frames of segment i (counted from 1) to ``<out_prefix>.<i>``.

    Each output keeps the period, size and kind of ``header`` and takes its
    sample count from the segment length. Returns the written paths with
    their segments, in order.
    """
    segments = list(segments)
    for segment in segments:
        if segment.start < 0 or segment.end > len(frames):
            raise ValueError(
                f"segment {segment.start}-{segment.end} ({segment.phoneme}) lies "
                f"outside the {len(frames)} frames"
            )
    prefix = os.fspath(out_prefix)
    written = []
    for index, segment in enumerate(segments, start=1):
        path = f"{prefix}.{index}"
        with open(path, "wb") as outstream:
            out_htk = HtkFile(outstream)
            out_htk.header = dataclasses.replace(header, n_samples=segment.length)
            out_htk.write_header()
            for t in range(segment.start, segment.end):
                out_htk.write_vector(frames[t])
        written.append((path, segment))
    return written


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Split an HTK file to several HTK files based on the events in "
        "PHN file. The generated HTK files will have the extension .1, .2, ..."
    )
    parser.add_argument("-v", dest="verbose", action="store_true", help="verbose")
    parser.add_argument("input_htk")
    parser.add_argument("input_phn")
    parser.add_argument("out_htk")
    args = parser.parse_args(argv)

    try:
        instream = open(args.input_htk, "rb")
    except OSError:
        print(f"Error: Cannot open input file {args.input_htk}.", file=sys.stderr)
        return 1
    with instream:
        in_htk = HtkFile(instream)
        try:
            header = in_htk.read_header()
        except HtkFormatError:
            print(f"Error: Unable to read HTK header of {args.input_htk}", file=sys.stderr)
            return 1
        if args.verbose:
            print(in_htk.format_header())
        frames = list(in_htk.iter_vectors())

    try:
        with open(args.input_phn, "r", encoding="utf-8") as phn_stream:
            segments = read_phn(phn_stream, rounded=True)
    except OSError:
        print(f"Error: Unable to open labels file {args.input_phn}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        written = split_by_segments(header, frames, segments, args.out_htk)
    except OSError as exc:
        print(f"Cannot open output file {exc.filename}.", file=sys.stderr)
        return 1
    except (ValueError, HtkFormatError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.verbose:
        for path, segment in written:
            print(
                f"{path} includes {max(segment.length, 0)} frames "
                f"({segment.start}-{segment.end - 1})."
            )
    return 0


if __name__ == "__main__":
    sys.exit(main())