"""Reading and writing HTK parameter files (big-endian header plus float frames)."""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass
from typing import BinaryIO, Iterator

import numpy as np

HASENERGY = 0o100
HASNULLE = 0o200
HASDELTA = 0o400
HASACCS = 0o1000
HASCOMPX = 0o2000
HASZEROM = 0o4000
HASCRCC = 0o10000
HASZEROC = 0o20000
HASVQ = 0o40000
HASTHIRD = 0o100000
BASEMASK = 0o77

USER = 9

MAX_SAMP_SIZE = 5000
MAX_SAMP_PERIOD = 1000000

_HEADER = struct.Struct(">iihh")
_FLOAT_SIZE = 4

_BASE_NAMES = (
    "WAVEFORM", "LPC", "LPREFC", "LPCEPSTRA", "LPDELCEP", "IREFC",
    "MFCC", "FBANK", "MELSPEC", "USER", "DISCRETE", "PLP", "ANON",
)

_QUALIFIERS = (
    (HASENERGY, "_E"),
    (HASDELTA, "_D"),
    (HASACCS, "_N"),
    (HASTHIRD, "_A"),
    (HASNULLE, "_T"),
    (HASCOMPX, "_C"),
    (HASCRCC, "_K"),
    (HASZEROM, "_Z"),
    (HASZEROC, "_O"),
    (HASVQ, "_V"),
)


class HtkFormatError(Exception):
    """Raised when an HTK header cannot be read or written."""


def parm_kind_to_str(parm_kind: int) -> str:
    """Return the textual name of a parameter kind, with its qualifiers."""
    base = parm_kind & BASEMASK
    name = _BASE_NAMES[base] if base < len(_BASE_NAMES) else ""
    return name + "".join(suffix for flag, suffix in _QUALIFIERS if parm_kind & flag)


@dataclass
class HtkHeader:
    """The four fields of an HTK file header."""

    n_samples: int = 0
    samp_period: int = 0
    samp_size: int = 0
    parm_kind: int = 0

    def num_coefs(self) -> int:
        """Number of float coefficients in one frame."""
        return self.samp_size // _FLOAT_SIZE


class HtkFile:
    """An HTK feature file on a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self.header = HtkHeader()

    def read_header(self) -> HtkHeader:
        """Read and validate the header; it is stored and returned."""
        raw = self.stream.read(_HEADER.size)
        if len(raw) != _HEADER.size:
            raise HtkFormatError("HTK header is truncated.")
        n_samples, samp_period, samp_size, parm_kind = _HEADER.unpack(raw)
        if (
            samp_size <= 0
            or samp_size > MAX_SAMP_SIZE
            or n_samples <= 0
            or samp_period <= 0
            or samp_period > MAX_SAMP_PERIOD
        ):
            raise HtkFormatError("HTK header is not readable.")
        self.header = HtkHeader(n_samples, samp_period, samp_size, parm_kind)
        return self.header

    def write_header(self) -> None:
        """Write the current header at the stream position."""
        h = self.header
        try:
            raw = _HEADER.pack(h.n_samples, h.samp_period, h.samp_size, h.parm_kind)
        except struct.error as exc:
            raise HtkFormatError(f"HTK header cannot be written: {exc}") from exc
        self.stream.write(raw)

    def format_header(self) -> str:
        """Describe the header in human-readable lines."""
        h = self.header
        lines = [
            f"  nSamples: {h.n_samples}",
            f"  sampPeriod: {h.samp_period / 10.0:g} us",
            f"  SampSize: {h.samp_size}",
            f"  parmKind: {parm_kind_to_str(h.parm_kind)}",
            f"  Num Coefs: {h.num_coefs()}",
            f"  Machine type: {sys.byteorder} endian.",
        ]
        return "\n".join(lines)

    def read_vector(self) -> np.ndarray:
        """Read one frame; near the end of the stream it may be shorter."""
        n = self.header.num_coefs()
        raw = self.stream.read(n * _FLOAT_SIZE)
        count = len(raw) // _FLOAT_SIZE
        return np.frombuffer(raw[: count * _FLOAT_SIZE], dtype=">f4").astype(np.float32)

    def iter_vectors(self) -> Iterator[np.ndarray]:
        """Yield complete frames until the stream runs out."""
        n = self.header.num_coefs()
        while True:
            vector = self.read_vector()
            if len(vector) != n:
                return
            yield vector

    def write_vector(self, data) -> int:
        """Write one frame of num_coefs floats; return how many were written."""
        n = self.header.num_coefs()
        values = np.asarray(data, dtype=np.float32).ravel()
        if values.size < n:
            raise ValueError(f"frame has {values.size} values, expected {n}")
        self.stream.write(values[:n].astype(">f4").tobytes())
        return n