# bitbench

A set of small, self-contained data-processing workloads in pure Python,
with no third-party dependencies:

- **ID3 entropy and information gain** over a categorical CSV whose last
  column is a `Yes`/`No` target (`bitbench.entropy`).
- **Synthetic weather datasets** for the "play tennis" problem, in a simple
  five-column form, a richer ten-column form and a uniformly random form
  (`bitbench.datagen`).
- **PGM image generation**: greyscale gradients and random-noise images in
  the binary `P5` format, plus a reader (`bitbench.pgm`).
- **Compressors**: Huffman coding (`bitbench.huffman`), Huffman coding in
  independently packed chunks (`bitbench.chunked`), Burrows–Wheeler and
  move-to-front transforms in front of Huffman (`bitbench.bwt`), and three
  run-length coders (`bitbench.rle`).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

| Command            | What it does                                                 |
|--------------------|--------------------------------------------------------------|
| `bitbench-entropy` | Total entropy and per-column information gain of a CSV       |
| `bitbench-datagen` | Writes a synthetic weather dataset as CSV                    |
| `bitbench-pgm`     | Writes a greyscale PGM image                                 |
| `bitbench-huffman` | Huffman-compresses a file, then restores it                  |
| `bitbench-chunked` | Huffman-compresses a file in chunks, then restores it        |
| `bitbench-bwt`     | BWT/MTF + Huffman round trip of a file                       |
| `bitbench-rle`     | Run-length round trip of a file or a string                  |

Every command accepts `--help`.

### bitbench-entropy

```
bitbench-entropy [FILENAME] [MAX_ROWS]
```

Reads `FILENAME` (default `data.csv`), at most `MAX_ROWS` data rows
(default 100,000,000). The first line holds the column names. Fields are
split on commas, empty fields are skipped, and rows with too few fields are
dropped. It prints the Yes/No totals, the total entropy, and for every
column but the last the per-value counts, entropies and weights followed by
the information gain and the time it took.

### bitbench-datagen

```
bitbench-datagen [ROWS] [--kind {simple,complex,uniform}] [--output PATH] [--seed N]
```

- `complex` (default): ten columns (`Outlook,Temp,Humidity,Windy,Time,
  Season,Forecast,Pressure,Visibility,Play`); `Play` follows many feature
  interactions, with its Yes probability clamped to 5–95 %. Rows default to
  1,000,000; a count that is not positive or exceeds 1,000,000 falls back to
  1,000,000. The default file name is `id3_data_<N>M.csv`, `<N>` being the
  row count in whole millions.
- `simple`: five columns (`Outlook,Temp,Humidity,Windy,Play`) with a few
  strong correlations; default 100,000,000 rows.
- `uniform`: the same five columns, every value drawn uniformly; default
  10,000 rows.

`simple` and `uniform` write to `large_data.csv` unless `--output` is given.
`--seed` makes the output reproducible.

To generate a dataset and analyse it:

```
bitbench-datagen 100000 --output data.csv
bitbench-entropy data.csv
```

### bitbench-pgm

```
bitbench-pgm [OUTPUT] [--pattern {gradient,random}] [--width W] [--height H] [--workers N] [--seed N]
```

`gradient` (default) writes a 16384×16384 image whose pixel in column `x`
is `x % 256`, to `image.pgm`; `--workers` sets how many threads fill the
rows. `random` writes a 1024×1024 image of random bytes to
`image_random.pgm`.

### bitbench-huffman, bitbench-chunked, bitbench-bwt

```
bitbench-huffman [INPUT] [--compressed PATH] [--output PATH]
bitbench-chunked [INPUT] [--compressed PATH] [--output PATH] [--threads N]
bitbench-bwt     [INPUT] [--method {bwt,mtf}] [--compressed PATH] [--output PATH]
```

Each compresses `INPUT`, writes the compressed file, reads it back,
decompresses it and writes the result. `bitbench-huffman` and
`bitbench-chunked` default to `gatsby.txt`, `compressed.bin` and
`decompressed.txt`; `bitbench-chunked` uses 6 chunks by default.
`bitbench-bwt` defaults to `frank.txt` and `decompressed_frank.txt`, with a
compressed file named after the method.

### bitbench-rle

```
bitbench-rle [INPUT] [--method {block,bytes,text}] [--compressed PATH] [--output PATH]
```

- `block` (default): 32-byte block coding of `INPUT` (default `frank.txt`);
  prints the compression ratio.
- `bytes`: (byte, run length) pairs of the first 10 MiB of `INPUT`
  (default `gatsby.txt`).
- `text`: `INPUT` is the string itself (default `AAAABBBCCDAAAA`); prints
  the compressed and decompressed forms.

## Library use

```python
from bitbench.huffman import compress, decompress
from bitbench.bwt import mtf_encode, mtf_decode
from bitbench.rle import rle_encode_text, rle_decode_text

blob = compress(b"abracadabra")
assert decompress(blob) == b"abracadabra"

assert mtf_decode(mtf_encode(b"bananaaa")) == b"bananaaa"

assert rle_encode_text("AAAABBBCCDAAAA") == "A4B3C2D1A4"
assert rle_decode_text("A4B3C2D1A4") == "AAAABBBCCDAAAA"
```

Entropy and information gain:

```python
from bitbench.entropy import entropy, read_csv, information_gain

entropy(9, 5)   # about 0.9403
entropy(4, 0)   # 0.0

dataset = read_csv("data.csv", 1000)
gain = information_gain(dataset, 0)
```

Writing and reading back a gradient image:

```python
from bitbench.pgm import gradient_pixels, write_pgm, read_pgm

pixels = gradient_pixels(256, 4, 1)
write_pgm("gradient.pgm", 256, 4, pixels)
width, height, data = read_pgm("gradient.pgm")
```

## Formats

- `huffman.compress`: the input length as 8 little-endian bytes, the code
  tree in pre-order (`1` and the symbol for a leaf, `0` for an inner node),
  then the code bits, most significant first, zero-padded to a byte.
- `chunked.compress_chunked`: length, tree, a 4-byte chunk count, then for
  each chunk its 8-byte length and its separately padded bits, with
  `FF FF FF FF` between chunks.
- `bwt.compress_bwt`: length, a 4-byte BWT index, then Huffman-coded MTF of
  the BWT. `bwt.compress_mtf`: length, then Huffman-coded MTF of the data.
- `rle.block_compress`: `00 v` for a 32-byte block of the value `v`, `FF`
  and 32 raw bytes otherwise, and `FE n` with `n` raw bytes for the tail.

Corrupt input is reported with `bitbench.huffman.CorruptDataError` (used by
the Huffman, chunked and BWT decoders) and `bitbench.rle.InvalidMarkerError`;
truncated block data raises `ValueError`.

## Limitations

- All coders work on whole byte strings in memory; there is no streaming.
- The BWT appends a `0x00` sentinel, so input that itself contains `0x00`
  bytes may not round-trip through `compress_bwt`.
- Thread pools in `chunked` and `pgm` split the work but, being pure Python,
  are not tuned for speed.