"""Convert a text file of whitespace-separated frames into an HTK file."""

from __future__ import annotations

import argparse
import re
import sys
from typing import BinaryIO, Iterable

import numpy as np

from .htkfile import USER, HtkFile, HtkHeader

_NUMBER_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _strtod(token: str) -> float:
    """Parse the longest numeric prefix of a token; 0.0 when there is none."""
    match = _NUMBER_PREFIX.match(token)
    return float(match.group()) if match else 0.0


def text_to_htk(lines: Iterable[str], out_stream: BinaryIO, samp_period: int = 100000) -> int:
    """Write frames read from text lines as an HTK file; return the frame count.

    Reading stops at the first blank line. The number of coefficients is taken
    from the first line; a shorter later line keeps the trailing values of the
    frame before it. The stream must be seekable, as the header is rewritten
    with the final frame count.
    """
    htk = HtkFile(out_stream)
    start = out_stream.tell()
    buffer = None
    count = 0
    for line in lines:
        tokens = line.split()
        if not tokens:
            break
        if buffer is None:
            buffer = np.zeros(len(tokens), dtype=np.float32)
            htk.header = HtkHeader(0, samp_period, len(tokens) * 4, USER)
            htk.write_header()
        if len(tokens) > len(buffer):
            raise ValueError(
                f"line {count + 1} has {len(tokens)} values, expected at most {len(buffer)}"
            )
        buffer[: len(tokens)] = [_strtod(t) for t in tokens]
        htk.write_vector(buffer)
        count += 1

    if buffer is None:
        htk.header.samp_period = samp_period
    out_stream.seek(start)
    htk.header.n_samples = count
    htk.write_header()
    out_stream.seek(0, 2)
    return count


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Convert a text file into an HTK file.")
    parser.add_argument(
        "-sampPeriod", dest="samp_period", type=int, default=100000,
        help="sample period in 100ns units [100000]",
    )
    parser.add_argument("txt_file")
    parser.add_argument("htk_file")
    args = parser.parse_args(argv)

    try:
        instream = open(args.txt_file, "r", encoding="utf-8")
    except OSError:
        print(f"Cannot open input file {args.txt_file}.", file=sys.stderr)
        return 1
    with instream:
        try:
            outstream = open(args.htk_file, "wb")
        except OSError:
            print(f"Cannot open output file {args.htk_file}.", file=sys.stderr)
            return 1
        with outstream:
            try:
                text_to_htk(instream, outstream, args.samp_period)
            except ValueError as exc:
                print(f"Error: {exc}", file=sys.stderr)
                return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())