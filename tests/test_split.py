import numpy as np
import pytest

from htkkit.htkfile import USER, HtkFile, HtkHeader
from htkkit.split import main, output_name, split_ranges


def test_split_ranges_with_defaults():
    assert split_ranges(500, 200, 100) == [(0, 200), (100, 300), (200, 400)]


@pytest.mark.parametrize("n,length,shift", [(50, 7, 3), (100, 10, 10), (33, 5, 4)])
def test_split_ranges_invariants(n, length, shift):
    ranges = split_ranges(n, length, shift)
    assert all(end - start == length for start, end in ranges)
    assert all(end < n for _, end in ranges)
    assert [s for s, _ in ranges] == [k * shift for k in range(len(ranges))]
    assert len(ranges) * shift + length >= n


def test_split_ranges_too_short_gives_none():
    assert split_ranges(200, 200, 100) == []


def test_split_ranges_zero_shift_raises():
    with pytest.raises(ValueError):
        split_ranges(10, 2, 0)


def test_output_name_replaces_extension():
    assert output_name("data/utt.htk", 0) == "data/utt.0.htk"


def test_output_name_without_extension_appends():
    assert output_name("utt", 3) == "utt.3.htk"


def test_main_writes_pieces(tmp_path, capsys):
    frames = np.arange(10, dtype=np.float32).reshape(5, 2)
    path = tmp_path / "utt.htk"
    with open(path, "wb") as stream:
        htk = HtkFile(stream)
        htk.header = HtkHeader(5, 100000, 8, USER)
        htk.write_header()
        for frame in frames:
            htk.write_vector(frame)

    rc = main(["-l", "2", "-s", "1", str(path)])

    assert rc == 0
    assert "nSamples: 5" in capsys.readouterr().out
    for index, (start, end) in enumerate(split_ranges(5, 2, 1)):
        with open(output_name(str(path), index), "rb") as stream:
            piece = HtkFile(stream)
            header = piece.read_header()
            assert header.n_samples == 2
            assert np.array_equal(np.array(list(piece.iter_vectors())), frames[start:end])
    assert not (tmp_path / "utt.3.htk").exists()


def test_main_missing_file_fails(tmp_path):
    assert main([str(tmp_path / "missing.htk")]) == 1