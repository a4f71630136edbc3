# htkkit

Tools for working with HTK parameter files. An HTK file is a big-endian binary
format. A 12-byte header gives the number of samples, the sample period in 100 ns
units, the sample size in bytes and the parameter kind. After the header comes
one vector of 32-bit floats per sample, for example one MFCC frame per sample.

## Installation

```
pip install .
```

The tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Library

```python
from htkkit.htkfile import HtkFile, parm_kind_to_str

with open("utterance.htk", "rb") as stream:
    htk = HtkFile(stream)
    htk.read_header()
    print(htk.format_header())
    for vector in htk.iter_vectors():
        ...
```

- `htkkit.htkfile`
  - `HtkFile` reads and writes headers (`read_header`, `write_header`) and frames (`read_vector`, `iter_vectors`, `write_vector`).
  - `HtkHeader` holds the four header fields. Its `num_coefs()` gives the number of floats in one frame.
  - A header that fails validation raises `HtkFormatError`.
  - `parm_kind_to_str` turns a parameter kind code into its name with qualifiers, such as `MFCC_E_D`.
- `htkkit.binary` handles a tagged little-endian binary format:
  - `save_scalar` and `load_scalar` write and read scalars of a `BinaryKind`.
  - `save_vector` and `load_vector` write and read vectors of doubles.
  - `is_binary` looks at the next record's tag without consuming it.
  - Malformed records raise `BinaryFormatError`.
- `htkkit.matrix_products` gives the products `prod`, `t_prod` and `prod_t`. It raises `DimensionError` when the shapes do not match.
- `htkkit.matrix_arith` gives coordinate-wise and scalar matrix arithmetic, with dimension and divide-by-zero checks.
- `htkkit.vector_products` gives matrix-vector and vector-matrix products. The `add_*` and `subtract_*` variants return a new vector.
- `htkkit.htk2db.htk_to_db` writes windows of consecutive frames as vector records.
- `htkkit.stats.feature_stats` computes the per-coefficient mean and standard deviation over a list of files.
- `htkkit.ceps_dist`: `load_stats`, `read_features` and `cepstral_distances` compute the s-distances between frames around each landmark, for s in 1 to 4.
- `htkkit.htkcat.concat_frames` stacks each frame with its neighbours.
- `htkkit.contract`: `read_phn` reads PHN label files into `Segment`s. `contract_frames` drops the frames of silence segments.
- `htkkit.split`: `split_ranges` and `output_name` cut a file into fixed-length pieces.
- `htkkit.split_phn.split_by_segments` writes one file per segment.
- `htkkit.shuffle`: `shuffle_corpus` pools the frames and labels of many files and shuffles them. `trim_silences` finds the range left after removing leading and trailing silence.

## Commands

Each command prints its usage with `--help`.

| Command         | What it does                                                        |
|-----------------|---------------------------------------------------------------------|
| `txt2htk`       | Convert a text file, one vector per line, into an HTK file          |
| `htk2txt`       | Print an HTK file as text, one vector per line                      |
| `htk2db`        | Convert an HTK file into the binary vector format, with multiframes |
| `htk-stats`     | Mean and standard deviation of each coefficient over a file list    |
| `htk-ceps-dist` | Cepstral distances between frames around each landmark              |
| `htkcat`        | Concatenate neighbouring frames and keep their frame labels         |
| `htk-contract`  | Remove silence frames using a PHN label file                        |
| `htk-split`     | Split an HTK file into overlapping fixed-length pieces              |
| `htk-shuffle`   | Build one shuffled HTK file and label file from lists of files      |
| `htk-split-phn` | Split an HTK file into one file per PHN segment                     |

Example:

```
txt2htk features.txt features.htk
htk2txt features.htk
```

## What is not included

The package has no row-wise or column-wise reduction helpers (minimum, maximum or
sum per row or column). It also cannot add a vector to every row or column of a
matrix. Use numpy directly for these.