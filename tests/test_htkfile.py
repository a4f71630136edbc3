import io

import numpy as np
import pytest

from htkkit.htkfile import (
    HASDELTA,
    HASENERGY,
    HtkFile,
    HtkFormatError,
    HtkHeader,
    parm_kind_to_str,
)


def _write(header, frames):
    buf = io.BytesIO()
    htk = HtkFile(buf)
    htk.header = header
    htk.write_header()
    for frame in frames:
        htk.write_vector(frame)
    buf.seek(0)
    return buf


def test_header_wire_bytes():
    buf = io.BytesIO()
    htk = HtkFile(buf)
    htk.header = HtkHeader(2, 100000, 8, 9)
    htk.write_header()
    assert buf.getvalue() == b"\x00\x00\x00\x02\x00\x01\x86\xa0\x00\x08\x00\x09"


def test_header_round_trip():
    header = HtkHeader(3, 100000, 12, 6 | HASENERGY)
    buf = _write(header, [])
    assert HtkFile(buf).read_header() == header


def test_num_coefs():
    assert HtkHeader(1, 1, 12, 0).num_coefs() == 3


def test_parm_kind_names():
    assert parm_kind_to_str(9) == "USER"
    assert parm_kind_to_str(6 | HASENERGY | HASDELTA) == "MFCC_E_D"
    assert parm_kind_to_str(0) == "WAVEFORM"


def test_parm_kind_unknown_base_is_empty():
    assert parm_kind_to_str(40 | HASENERGY) == "_E"


def test_truncated_header_raises():
    with pytest.raises(HtkFormatError):
        HtkFile(io.BytesIO(b"\x00\x00\x00\x01")).read_header()


@pytest.mark.parametrize(
    "header",
    [
        HtkHeader(1, 100000, 0, 9),
        HtkHeader(0, 100000, 4, 9),
        HtkHeader(1, 0, 4, 9),
        HtkHeader(1, 2000000, 4, 9),
        HtkHeader(1, 100000, 6000, 9),
    ],
)
def test_invalid_header_raises(header):
    buf = _write(header, [])
    with pytest.raises(HtkFormatError):
        HtkFile(buf).read_header()


def test_vectors_round_trip():
    frames = [[0.5, -1.25], [3.0, 4.5]]
    buf = _write(HtkHeader(2, 100000, 8, 9), frames)
    htk = HtkFile(buf)
    htk.read_header()
    got = [v.tolist() for v in htk.iter_vectors()]
    assert got == frames


def test_partial_vector_is_short():
    buf = _write(HtkHeader(1, 100000, 8, 9), [[1.0, 2.0]])
    data = buf.getvalue()[:-4]
    htk = HtkFile(io.BytesIO(data))
    htk.read_header()
    assert htk.read_vector().tolist() == [1.0]
    assert list(htk.iter_vectors()) == []


def test_write_vector_too_short_raises():
    htk = HtkFile(io.BytesIO())
    htk.header = HtkHeader(1, 100000, 12, 9)
    with pytest.raises(ValueError):
        htk.write_vector([1.0, 2.0])


def test_write_vector_uses_num_coefs_values():
    buf = io.BytesIO()
    htk = HtkFile(buf)
    htk.header = HtkHeader(1, 100000, 4, 9)
    assert htk.write_vector(np.array([1.0, 2.0])) == 1
    assert buf.getvalue() == b"\x3f\x80\x00\x00"


def test_format_header_lines():
    htk = HtkFile(io.BytesIO())
    htk.header = HtkHeader(2, 100000, 8, 9)
    lines = htk.format_header().splitlines()
    assert lines[0] == "  nSamples: 2"
    assert lines[3] == "  parmKind: USER"
    assert lines[4] == "  Num Coefs: 2"
    assert lines[5].endswith(" endian.")