"""Convert an HTK file into text, one frame per line."""

from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, TextIO

from .htkfile import HtkFile, HtkFormatError


def htk_to_text(in_stream: BinaryIO, out: TextIO) -> int:
    """Write each frame of an HTK stream as a text line; return the frame count."""
    htk = HtkFile(in_stream)
    htk.read_header()
    count = 0
    for vector in htk.iter_vectors():
        out.write("".join(f"{float(v):g} " for v in vector) + "\n")
        count += 1
    return count


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Convert HTK file to text file. Print result to stdout if no "
        "txt_file is given.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument(
        "-h", dest="print_header", action="store_true",
        help="prints HTK header to stdout [optional]",
    )
    parser.add_argument("htk_file")
    parser.add_argument("txt_file", nargs="?", default="")
    args = parser.parse_args(argv)

    try:
        instream = open(args.htk_file, "rb")
    except OSError:
        print(f"Cannot open input file {args.htk_file}.", file=sys.stderr)
        return 1

    with instream:
        if args.txt_file:
            try:
                out = open(args.txt_file, "w", encoding="utf-8")
            except OSError:
                print(f"Cannot open output file {args.txt_file}.", file=sys.stderr)
                return 1
        else:
            out = sys.stdout

        try:
            if args.print_header:
                htk = HtkFile(instream)
                htk.read_header()
                print(htk.format_header())
                instream.seek(0)
            htk_to_text(instream, out)
        except HtkFormatError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        finally:
            if out is not sys.stdout:
                out.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())