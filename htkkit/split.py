"""Split an HTK file into overlapping fixed-length pieces."""

from __future__ import annotations

import argparse
import dataclasses
import sys

from .htkfile import HtkFile, HtkFormatError


def split_ranges(n_samples: int, frame_length: int, frame_shift: int) -> list[tuple[int, int]]:
    """Return the ``(start, end)`` frame ranges of every piece.

    Piece k starts at ``k * frame_shift`` and holds ``frame_length`` frames;
    pieces are produced while their end lies strictly before ``n_samples``.
    """
    if frame_shift < 1:
        raise ValueError("the frame shift must be at least 1")
    if frame_length < 0:
        raise ValueError("the frame length cannot be negative")
    ranges = []
    start = 0
    while start + frame_length < n_samples:
        ranges.append((start, start + frame_length))
        start += frame_shift
    return ranges


def output_name(htk_path: str, index: int) -> str:
    """Name of piece ``index``: the path cut at its first ``.htk``, then ``.<index>.htk``."""
    position = htk_path.find(".htk")
    base = htk_path if position < 0 else htk_path[:position]
    return f"{base}.{index}.htk"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Split an HTK file to several HTK files with a given frame length. "
        "The generated HTK files will have the extension .1, .2, ..."
    )
    parser.add_argument(
        "-l", dest="frame_length", type=int, default=200,
        help="number of frames per HTK file",
    )
    parser.add_argument(
        "-s", dest="frame_shift", type=int, default=100,
        help="number of frames to shift between one file and onther",
    )
    parser.add_argument("htk_file")
    args = parser.parse_args(argv)

    try:
        instream = open(args.htk_file, "rb")
    except OSError:
        print(f"Cannot open input file {args.htk_file}.", file=sys.stderr)
        return 1
    with instream:
        htk = HtkFile(instream)
        try:
            header = htk.read_header()
        except HtkFormatError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        print(htk.format_header())
        frames = list(htk.iter_vectors())

    try:
        ranges = split_ranges(header.n_samples, args.frame_length, args.frame_shift)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for index, (start, end) in enumerate(ranges):
        if end > len(frames):
            print(
                f"Error: {args.htk_file} holds {len(frames)} frames, "
                f"its header announces {header.n_samples}",
                file=sys.stderr,
            )
            return 1
        name = output_name(args.htk_file, index)
        try:
            outstream = open(name, "wb")
        except OSError:
            print(f"Cannot open output file {name}.", file=sys.stderr)
            return 1
        with outstream:
            out_htk = HtkFile(outstream)
            out_htk.header = dataclasses.replace(header, n_samples=args.frame_length)
            out_htk.write_header()
            for vector in frames[start:end]:
                out_htk.write_vector(vector)
    return 0


if __name__ == "__main__":
    sys.exit(main())