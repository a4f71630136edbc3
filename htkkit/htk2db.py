"""Convert an HTK file into a stream of stacked multi-frame vectors."""

from __future__ import annotations

import argparse
import sys
from collections import deque
from typing import BinaryIO

import numpy as np

from .binary import BinaryKind, save_scalar, save_vector
from .htkfile import HtkFile, HtkFormatError


def htk_to_db(in_stream: BinaryIO, out_stream: BinaryIO, num_multiframes: int = 1) -> int:
    """Write every window of ``num_multiframes`` consecutive frames as a vector.

    The output starts with an unsigned-long record holding the number of
    vectors, followed by one vector record per window. The output stream
    must be seekable, since the count is rewritten at the end. Returns the
    number of vectors written.
    """
    if num_multiframes < 1:
        raise ValueError("the number of multiframes must be at least 1")
    htk = HtkFile(in_stream)
    htk.read_header()
    n = htk.header.num_coefs()

    window: deque[np.ndarray] = deque()
    for _ in range(num_multiframes - 1):
        vector = htk.read_vector()
        if len(vector) != n:
            raise HtkFormatError("the HTK file holds fewer frames than one multiframe")
        window.append(vector.astype(np.float64))

    start = out_stream.tell()
    save_scalar(out_stream, 0, BinaryKind.UNSIGNED_LONG)

    count = 0
    for vector in htk.iter_vectors():
        window.append(vector.astype(np.float64))
        save_vector(out_stream, np.concatenate(window))
        count += 1
        window.popleft()

    end = out_stream.tell()
    out_stream.seek(start)
    save_scalar(out_stream, count, BinaryKind.UNSIGNED_LONG)
    out_stream.seek(end)
    return count


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Convert HTK file to DB file format.", add_help=False
    )
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument(
        "-h", dest="print_header", action="store_true",
        help="prints HTK header [optional]",
    )
    parser.add_argument(
        "-m", dest="num_multiframes", type=int, default=1,
        help="number multiframes [1]",
    )
    parser.add_argument("htk_file")
    parser.add_argument("db_file")
    args = parser.parse_args(argv)

    try:
        instream = open(args.htk_file, "rb")
    except OSError:
        print(f"Cannot open input file {args.htk_file}.", file=sys.stderr)
        return 1
    with instream:
        try:
            outstream = open(args.db_file, "wb")
        except OSError:
            print(f"Cannot open output file {args.db_file}.", file=sys.stderr)
            return 1
        with outstream:
            try:
                if args.print_header:
                    htk = HtkFile(instream)
                    htk.read_header()
                    print(htk.format_header())
                    print(f"num_coefs = {htk.header.num_coefs()}")
                    instream.seek(0)
                htk_to_db(instream, outstream, args.num_multiframes)
            except (HtkFormatError, ValueError) as exc:
                print(f"Error: {exc}", file=sys.stderr)
                return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())