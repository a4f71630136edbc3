"""Pool frames and frame labels from many HTK files and shuffle them together."""

from __future__ import annotations

import argparse
import os
import random
import sys
from typing import Sequence

import numpy as np

from .htkfile import HtkFile, HtkFormatError, HtkHeader


def trim_silences(targets: Sequence[str], silence_symbol: str) -> tuple[int, int]:
    """Return the ``(start, stop)`` range left after removing leading and
    trailing silence labels; an all-silence sequence gives an empty range."""
    speech = [i for i, target in enumerate(targets) if target != silence_symbol]
    if not speech:
        return 0, 0
    return speech[0], speech[-1] + 1


def _read_pair(
    htk_path: str | os.PathLike, target_path: str | os.PathLike
) -> tuple[HtkHeader, list[np.ndarray], list[str]]:
    with open(htk_path, "rb") as stream:
        htk = HtkFile(stream)
        header = htk.read_header()
        n = header.num_coefs()
        frames = []
        for _ in range(header.n_samples):
            vector = htk.read_vector()
            if len(vector) != n:
                raise HtkFormatError(
                    f"{htk_path} holds fewer frames than its header announces"
                )
            frames.append(vector)
    with open(target_path, "r", encoding="utf-8") as target_stream:
        targets = target_stream.read().split()
    if len(targets) < header.n_samples:
        raise ValueError(f"unable to read from {target_path}")
    return header, frames, targets[: header.n_samples]


def shuffle_corpus(
    htk_paths: Sequence[str | os.PathLike],
    target_paths: Sequence[str | os.PathLike],
    remove_silences: bool = False,
    silence_symbol: str = "sil",
    dump: bool = False,
    rng: random.Random | None = None,
) -> tuple[HtkHeader, np.ndarray, list[str]]:
    """Read every HTK file with its per-frame label file and pool the frames.

    With ``remove_silences`` the leading and trailing silence frames of each
    file are dropped. Unless ``dump`` is set, frames and labels are shuffled
    by one random permutation. The returned header takes its period, size
    and kind from the last file and its sample count from the pooled frames.
    """
    if len(target_paths) < len(htk_paths):
        raise ValueError("the target list is shorter than the HTK list")
    rng = rng if rng is not None else random.Random()

    header = HtkHeader()
    frames: list[np.ndarray] = []
    targets: list[str] = []
    width = None
    for htk_path, target_path in zip(htk_paths, target_paths):
        file_header, file_frames, file_targets = _read_pair(htk_path, target_path)
        n = file_header.num_coefs()
        if width is not None and n != width:
            raise HtkFormatError(
                f"{htk_path} has {n} coefficients per frame, expected {width}"
            )
        width = n
        header = HtkHeader(0, file_header.samp_period, file_header.samp_size,
                           file_header.parm_kind)
        if remove_silences:
            start, stop = trim_silences(file_targets, silence_symbol)
        else:
            start, stop = 0, len(file_targets)
        frames.extend(file_frames[start:stop])
        targets.extend(file_targets[start:stop])

    perm = list(range(len(frames)))
    if not dump:
        rng.shuffle(perm)
    header.n_samples = len(frames)
    pooled = np.array([frames[i] for i in perm], dtype=np.float32).reshape(
        len(frames), width or 0
    )
    return header, pooled, [targets[i] for i in perm]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Create new HTK file and a new label file from a given list of "
        "HTK files and labels. This utility assumes that the labels are given for "
        "each speech frame. The resulted files contains the same speech frames, "
        "but random shuffled."
    )
    parser.add_argument(
        "-remove_silences", action="store_true",
        help="removes the silence at the beginning and end of each file",
    )
    parser.add_argument("-silence_symbol", default="sil", help="silence symbol [sil]")
    parser.add_argument("-dump", action="store_true", help="the shuffle is not performed")
    parser.add_argument("input_htk_list")
    parser.add_argument("input_target_list")
    parser.add_argument("output_htk_file")
    parser.add_argument("output_target_file")
    args = parser.parse_args(argv)

    lists = []
    for list_path in (args.input_htk_list, args.input_target_list):
        try:
            with open(list_path, "r", encoding="utf-8") as list_stream:
                lists.append(list_stream.read().split())
        except OSError:
            print(f"Error: unable to open file: {list_path}", file=sys.stderr)
            return 1
    htk_paths, target_paths = lists

    for path in htk_paths:
        print(path)
    try:
        header, frames, targets = shuffle_corpus(
            htk_paths, target_paths, args.remove_silences, args.silence_symbol, args.dump
        )
    except OSError as exc:
        print(f"Error: Cannot open file {exc.filename}.", file=sys.stderr)
        return 1
    except (HtkFormatError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        with open(args.output_htk_file, "wb") as outstream:
            out_htk = HtkFile(outstream)
            out_htk.header = header
            out_htk.write_header()
            print(f"Processed {len(frames)} frames.")
            for vector in frames:
                out_htk.write_vector(vector)
    except OSError:
        print(f"Error: Cannot open HTK file {args.output_htk_file}.", file=sys.stderr)
        return 1
    except HtkFormatError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        with open(args.output_target_file, "w", encoding="utf-8") as target_out:
            target_out.writelines(f"{target}\n" for target in targets)
    except OSError:
        print(f"Error: unable to open file: {args.output_target_file}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())