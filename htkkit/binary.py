"""A small tagged binary format for scalars and vectors of doubles.

Every record starts with a one-byte type tag and a 64-bit block size, followed
by the payload. All numbers are stored little-endian; ``long`` and
``size_t`` occupy eight bytes.
"""

from __future__ import annotations

import enum
import struct
from typing import BinaryIO, Iterable

import numpy as np

_SIZE = struct.Struct("<Q")


class BinaryFormatError(Exception):
    """Raised when a record on the stream is not of the expected form."""


class BinaryKind(enum.Enum):
    """Record types, identified by their header byte."""

    VECTOR = "v"
    MATRIX = "M"
    LONG = "l"
    UNSIGNED_LONG = "L"
    SHORT = "i"
    UNSIGNED_SHORT = "I"
    DOUBLE = "r"

    @property
    def header(self) -> bytes:
        return self.value.encode("ascii")

    @property
    def scalar_format(self) -> struct.Struct:
        try:
            return _SCALAR_FORMATS[self]
        except KeyError:
            raise ValueError(f"{self.name} is not a scalar kind") from None


_SCALAR_FORMATS = {
    BinaryKind.LONG: struct.Struct("<q"),
    BinaryKind.UNSIGNED_LONG: struct.Struct("<Q"),
    BinaryKind.SHORT: struct.Struct("<h"),
    BinaryKind.UNSIGNED_SHORT: struct.Struct("<H"),
    BinaryKind.DOUBLE: struct.Struct("<d"),
}


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    raw = stream.read(size)
    if len(raw) != size:
        raise BinaryFormatError("unexpected end of stream")
    return raw


def _read_header(stream: BinaryIO, kind: BinaryKind) -> int:
    tag = _read_exact(stream, 1)
    if tag != kind.header:
        raise BinaryFormatError(
            f"wrong file format: expected record {kind.value!r}, found {tag!r}"
        )
    (block_size,) = _SIZE.unpack(_read_exact(stream, _SIZE.size))
    return block_size


def save_scalar(stream: BinaryIO, value, kind: BinaryKind) -> None:
    """Write one scalar record of the given kind."""
    fmt = kind.scalar_format
    try:
        payload = fmt.pack(value)
    except struct.error as exc:
        raise ValueError(f"{value!r} does not fit a {kind.name} record: {exc}") from exc
    stream.write(kind.header + _SIZE.pack(fmt.size) + payload)


def load_scalar(stream: BinaryIO, kind: BinaryKind):
    """Read one scalar record of the given kind and return its value."""
    fmt = kind.scalar_format
    block_size = _read_header(stream, kind)
    if block_size != fmt.size:
        raise BinaryFormatError(
            f"{kind.name} record has block size {block_size}, expected {fmt.size}"
        )
    (value,) = fmt.unpack(_read_exact(stream, fmt.size))
    return value


def save_vector(stream: BinaryIO, values: Iterable[float]) -> None:
    """Write a sequence of numbers as a vector record of doubles."""
    data = np.asarray(values, dtype="<f8").ravel()
    block_size = _SIZE.size + data.nbytes
    stream.write(
        BinaryKind.VECTOR.header
        + _SIZE.pack(block_size)
        + _SIZE.pack(data.size)
        + data.tobytes()
    )


def load_vector(stream: BinaryIO) -> np.ndarray:
    """Read a vector record and return its values as float64."""
    block_size = _read_header(stream, BinaryKind.VECTOR)
    (length,) = _SIZE.unpack(_read_exact(stream, _SIZE.size))
    if block_size != _SIZE.size + 8 * length:
        raise BinaryFormatError(
            f"vector record of length {length} has block size {block_size}"
        )
    raw = _read_exact(stream, 8 * length)
    return np.frombuffer(raw, dtype="<f8").astype(np.float64)


def is_binary(stream: BinaryIO, kind: BinaryKind) -> bool:
    """Tell whether the next record is of the given kind, without consuming it."""
    position = stream.tell()
    tag = stream.read(1)
    stream.seek(position)
    return tag == kind.header