import struct

import numpy as np
import pytest

from htkkit.contract import Segment
from htkkit.htkfile import USER, HtkFile, HtkHeader
from htkkit.split_phn import main, split_by_segments


def _frames(n, width=2):
    return np.arange(n * width, dtype=np.float32).reshape(n, width)


def _read(path):
    with open(path, "rb") as stream:
        htk = HtkFile(stream)
        header = htk.read_header()
        return header, np.array(list(htk.iter_vectors()), dtype=np.float32)


def test_split_writes_one_file_per_segment(tmp_path):
    header = HtkHeader(6, 100000, 8, USER)
    frames = _frames(6)
    segments = [Segment(0, 2, "a"), Segment(2, 5, "b")]
    written = split_by_segments(header, frames, segments, tmp_path / "out.htk")
    paths = [path for path, _ in written]
    assert paths == [str(tmp_path / "out.htk.1"), str(tmp_path / "out.htk.2")]
    for path, segment in written:
        out_header, out_frames = _read(path)
        assert out_header.n_samples == segment.length
        assert out_header.samp_period == header.samp_period
        assert out_header.samp_size == header.samp_size
        assert out_header.parm_kind == header.parm_kind
        np.testing.assert_array_equal(out_frames, frames[segment.start : segment.end])


def test_split_header_bytes(tmp_path):
    header = HtkHeader(4, 100000, 8, USER)
    written = split_by_segments(header, _frames(4), [Segment(1, 4, "x")], tmp_path / "p")
    raw = (tmp_path / "p.1").read_bytes()
    assert raw[:12] == struct.pack(">iihh", 3, 100000, 8, 9)
    assert len(raw) == 12 + 3 * 8
    assert written[0][1] == Segment(1, 4, "x")


def test_segment_out_of_range_raises_before_writing(tmp_path):
    header = HtkHeader(3, 100000, 8, USER)
    with pytest.raises(ValueError):
        split_by_segments(header, _frames(3), [Segment(0, 1, "a"), Segment(1, 9, "b")],
                          tmp_path / "o")
    assert not (tmp_path / "o.1").exists()


def test_main_splits_from_phn(tmp_path):
    frames = _frames(6, width=3)
    htk_path = tmp_path / "in.htk"
    with open(htk_path, "wb") as stream:
        htk = HtkFile(stream)
        htk.header = HtkHeader(6, 100000, 12, USER)
        htk.write_header()
        for vector in frames:
            htk.write_vector(vector)
    phn_path = tmp_path / "in.phn"
    phn_path.write_text("0.0 0.02 a\n0.02 0.05 b\n", encoding="utf-8")
    prefix = tmp_path / "piece"
    assert main([str(htk_path), str(phn_path), str(prefix)]) == 0
    _, first = _read(f"{prefix}.1")
    _, second = _read(f"{prefix}.2")
    np.testing.assert_array_equal(first, frames[0:2])
    np.testing.assert_array_equal(second, frames[2:5])
    assert not (tmp_path / "piece.3").exists()


def test_main_missing_input_fails(tmp_path):
    code = main([str(tmp_path / "none.htk"), str(tmp_path / "none.phn"),
                 str(tmp_path / "out")])
    assert code == 1
    assert not (tmp_path / "out.1").exists()