"""Remove silence frames from an HTK file and rewrite its phoneme labels."""

from __future__ import annotations

import argparse
import dataclasses
import math
import sys
from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Sequence, TextIO

import numpy as np

from .htkfile import HtkFile, HtkFormatError

FRAMES_PER_SECOND = 100


@dataclass(frozen=True)
class Segment:
    """A labelled span of frames, from ``start`` up to but excluding ``end``."""

    start: int
    end: int
    phoneme: str

    @property
    def length(self) -> int:
        return self.end - self.start


def _to_frame(seconds: str, rounded: bool) -> int:
    scaled = np.float32(float(seconds)) * np.float32(FRAMES_PER_SECOND)
    if rounded:
        return int(math.floor(float(scaled) + 0.5))
    return int(scaled)


def read_phn(stream: TextIO | Iterable[str], rounded: bool = False) -> list[Segment]:
    """Read ``start end phoneme`` triples, times in seconds, into frame segments.

    Times are converted to a 10 ms frame rate, truncated unless ``rounded``
    is set, in which case they are rounded to the nearest frame.
    """
    text = stream.read() if hasattr(stream, "read") else "".join(stream)
    tokens = text.split()
    segments = []
    for pos in range(0, len(tokens) - 2, 3):
        start, end, phoneme = tokens[pos : pos + 3]
        segments.append(Segment(_to_frame(start, rounded), _to_frame(end, rounded), phoneme))
    return segments


def contract_frames(
    frames: Sequence, segments: Iterable[Segment], silence_symbol: str
) -> tuple[np.ndarray, list[Segment]]:
    """Keep only the frames of non-silence segments.

    Returns the kept frames and the segments placed back to back from
    frame 0 in the contracted stream.
    """
    width = len(frames[0]) if len(frames) else 0
    kept = []
    new_segments = []
    position = 0
    for segment in segments:
        if segment.phoneme == silence_symbol:
            continue
        if segment.start < 0 or segment.end > len(frames):
            raise ValueError(
                f"segment {segment.start}-{segment.end} ({segment.phoneme}) lies "
                f"outside the {len(frames)} frames"
            )
        kept.extend(frames[t] for t in range(segment.start, segment.end))
        length = max(segment.length, 0)
        new_segments.append(Segment(position, position + length, segment.phoneme))
        position += length
    result = np.array(kept, dtype=np.float32).reshape(len(kept), width)
    return result, new_segments


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Remove silence frames from HTK file")
    parser.add_argument("-v", dest="verbose", action="store_true", help="verbose")
    parser.add_argument("silence_symbol")
    parser.add_argument("input_htk")
    parser.add_argument("input_phn")
    parser.add_argument("out_htk")
    parser.add_argument("output_phn")
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
        frames = list(islice(in_htk.iter_vectors(), header.n_samples))

    try:
        with open(args.input_phn, "r", encoding="utf-8") as phn_stream:
            segments = read_phn(phn_stream)
    except OSError:
        print(f"Error: Unable to open labels file {args.input_phn}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        kept, new_segments = contract_frames(frames, segments, args.silence_symbol)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if len(kept) == 0:
        print(
            "Warning: All phonemes are in the input PHN are siences. "
            "HTK was not generated"
        )
        return 0

    try:
        outstream = open(args.out_htk, "wb")
    except OSError:
        print(f"Error: Cannot open output file {args.out_htk}.", file=sys.stderr)
        return 1
    with outstream:
        out_htk = HtkFile(outstream)
        out_htk.header = dataclasses.replace(header, n_samples=len(kept))
        try:
            out_htk.write_header()
        except HtkFormatError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        for vector in kept:
            out_htk.write_vector(vector)

    try:
        with open(args.output_phn, "w", encoding="utf-8") as phn_out:
            for segment in new_segments:
                phn_out.write(
                    f"{segment.start / 100.0:g} {segment.end / 100.0:g} {segment.phoneme}\n"
                )
    except OSError:
        print(f"Error: Unable to open labels file {args.output_phn}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Read {len(frames)} frames. Wrote {len(kept)} frames to HTK file.")
    return 0


if __name__ == "__main__":
    sys.exit(main())