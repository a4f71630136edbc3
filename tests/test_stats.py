import io

import numpy as np
import pytest

from htkkit.htkfile import USER, HtkFile, HtkFormatError, HtkHeader
from htkkit.stats import feature_stats, main


def _write_htk(path, frames):
    stream = io.BytesIO()
    htk = HtkFile(stream)
    htk.header = HtkHeader(len(frames), 100000, 4 * len(frames[0]), USER)
    htk.write_header()
    for frame in frames:
        htk.write_vector(frame)
    path.write_bytes(stream.getvalue())
    return path


def test_single_file_mean_and_std(tmp_path):
    frames = [[1.0, 2.0], [3.0, 2.0], [5.0, 2.0], [7.0, 2.0]]
    path = _write_htk(tmp_path / "a.htk", frames)
    means, stddev = feature_stats([path])
    np.testing.assert_allclose(means, np.mean(frames, axis=0), rtol=1e-6)
    np.testing.assert_allclose(stddev, np.std(frames, axis=0), rtol=1e-5, atol=1e-6)


def test_constant_feature_has_zero_spread(tmp_path):
    path = _write_htk(tmp_path / "a.htk", [[4.0], [4.0], [4.0]])
    means, stddev = feature_stats([path])
    assert means.tolist() == [4.0]
    assert stddev.tolist() == [0.0]


def test_later_files_skip_first_frame_and_repeat_last(tmp_path):
    first = [[1.0], [2.0]]
    second = [[100.0], [3.0], [5.0]]
    a = _write_htk(tmp_path / "a.htk", first)
    b = _write_htk(tmp_path / "b.htk", second)
    means, _ = feature_stats([a, b])
    counted = first + second[1:] + [second[-1]]
    np.testing.assert_allclose(means, np.mean(counted, axis=0), rtol=1e-6)


def test_order_of_single_files_matters_only_through_skip(tmp_path):
    frames = [[2.0, -1.0], [4.0, 1.0]]
    a = _write_htk(tmp_path / "a.htk", frames)
    means_one, _ = feature_stats([a])
    means_two, _ = feature_stats([a, a])
    np.testing.assert_allclose(means_one, np.mean(frames, axis=0))
    counted = frames + [frames[1], frames[1]]
    np.testing.assert_allclose(means_two, np.mean(counted, axis=0), rtol=1e-6)


def test_empty_list_raises():
    with pytest.raises(ValueError):
        feature_stats([])


def test_mismatched_coefficients_raise(tmp_path):
    a = _write_htk(tmp_path / "a.htk", [[1.0, 2.0]])
    b = _write_htk(tmp_path / "b.htk", [[1.0], [2.0]])
    with pytest.raises(HtkFormatError):
        feature_stats([a, b])


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        feature_stats([tmp_path / "missing.htk"])


def test_main_prints_two_rows(tmp_path, capsys):
    a = _write_htk(tmp_path / "a.htk", [[1.0, 2.0], [3.0, 2.0]])
    listing = tmp_path / "list.txt"
    listing.write_text(f"{a}\n\n")
    assert main([str(listing)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "2 2"
    assert [float(v) for v in lines[1].split()] == [2.0, 2.0]
    assert [float(v) for v in lines[2].split()] == [1.0, 0.0]


def test_main_missing_list(tmp_path):
    assert main([str(tmp_path / "nothing.txt")]) == 1