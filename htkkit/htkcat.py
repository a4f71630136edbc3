"""Stack each frame with its neighbours and keep the matching frame labels."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

import numpy as np

from .htkfile import USER, HtkFile, HtkFormatError, HtkHeader


def concat_frames(
    frames: Sequence, labels: Sequence[str], cat_frames: int = 0
) -> tuple[np.ndarray, list[str]]:
    """Concatenate every frame with ``cat_frames`` neighbours on each side.

    Frames too close to either end to have a full context are dropped, as are
    their labels. Returns the stacked frames and the labels kept.
    """
    if cat_frames < 0:
        raise ValueError("the number of frames to concatenate cannot be negative")
    frames = [np.asarray(f, dtype=np.float32) for f in frames]
    if len(labels) < len(frames):
        raise ValueError("labels and HTK file do not have the same number of frames.")
    width = (2 * cat_frames + 1) * (len(frames[0]) if frames else 0)
    stacked = [
        np.concatenate(frames[i - cat_frames : i + cat_frames + 1])
        for i in range(cat_frames, len(frames) - cat_frames)
    ]
    kept = [labels[i] for i in range(cat_frames, len(frames) - cat_frames)]
    result = np.array(stacked, dtype=np.float32).reshape(len(stacked), width)
    return result, kept


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Concatenate several features vectors and arrange their "
        "corresponding frame labels. This utility assumes that the labels are "
        "given for each speech frame.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument(
        "-h", dest="print_header", action="store_true", help="prints HTK header to stdout"
    )
    parser.add_argument(
        "-n", dest="cat_frames", type=int, default=0,
        help="num. frames to concate from each side",
    )
    parser.add_argument("in_htk", metavar="<input htk file>")
    parser.add_argument("in_labels", metavar="<input lab list>")
    parser.add_argument("out_htk", metavar="<output htk file>")
    parser.add_argument("out_labels", metavar="<output lab file>")
    args = parser.parse_args(argv)

    try:
        with open(args.in_htk, "rb") as instream:
            in_htk = HtkFile(instream)
            try:
                header = in_htk.read_header()
            except HtkFormatError:
                print(f"Error: Unable to read HTK header of {args.in_htk}", file=sys.stderr)
                return 1
            if args.print_header:
                print(in_htk.format_header())
            frames = list(in_htk.iter_vectors())
    except OSError:
        print(f"Error: Cannot open input file {args.in_htk}.", file=sys.stderr)
        return 1

    try:
        with open(args.in_labels, "r", encoding="utf-8") as label_stream:
            labels = label_stream.read().split()
    except OSError:
        print(f"Error: unable to open file: {args.in_labels}", file=sys.stderr)
        return 1

    if len(frames) < header.n_samples:
        print(
            f"Error: {args.in_htk} holds {len(frames)} frames, "
            f"its header announces {header.n_samples}",
            file=sys.stderr,
        )
        return 1
    frames = frames[: header.n_samples]

    try:
        stacked, kept = concat_frames(frames, labels, args.cat_frames)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        with open(args.out_htk, "wb") as outstream:
            out_htk = HtkFile(outstream)
            out_htk.header = HtkHeader(
                len(stacked),
                header.samp_period,
                header.samp_size * (2 * args.cat_frames + 1),
                USER,
            )
            out_htk.write_header()
            for vector in stacked:
                out_htk.write_vector(vector)
    except OSError:
        print(f"Cannot open input file {args.out_htk}.", file=sys.stderr)
        return 1
    except HtkFormatError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        with open(args.out_labels, "w", encoding="utf-8") as out_labels:
            out_labels.writelines(f"{label}\n" for label in kept)
    except OSError:
        print(f"Error: unable to open file: {args.out_labels}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())