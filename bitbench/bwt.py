"""Burrows-Wheeler and move-to-front transforms feeding a Huffman coder."""

from __future__ import annotations

import argparse
import io
import struct
import sys
from itertools import accumulate
from pathlib import Path
from typing import Sequence

from bitbench.huffman import (
    ALPHABET_SIZE,
    CorruptDataError,
    build_codes,
    build_tree,
    count_frequencies,
    decode,
    encode,
    load_tree,
    store_tree,
)

SENTINEL = 0x00
_SIZE = struct.Struct("<Q")
_INDEX = struct.Struct("<i")

DEFAULT_INPUT = "frank.txt"
DEFAULT_DECOMPRESSED = "decompressed_frank.txt"
DEFAULT_COMPRESSED = {
    "bwt": "compressed_huffmann_frank(1).bin",
    "mtf": "compressed_mtf_huffman_frank.bin",
}


def _suffix_array(text: bytes) -> list[int]:
    """Start offsets of all suffixes of ``text`` in lexicographic order."""
    n = len(text)
    order = list(range(n))
    if n <= 1:
        return order
    rank = list(text)
    step = 1
    while True:
        def key(i: int, rank: list[int] = rank, step: int = step) -> tuple[int, int]:
            return rank[i], rank[i + step] if i + step < n else -1

        order.sort(key=key)
        new_rank = [0] * n
        for prev, cur in zip(order, order[1:]):
            new_rank[cur] = new_rank[prev] + (key(cur) != key(prev))
        rank = new_rank
        if rank[order[-1]] == n - 1:
            return order
        step *= 2


def bwt_transform(data: bytes) -> tuple[bytes, int]:
    """BWT of ``data`` plus a trailing 0x00 sentinel; returns the output and the sentinel row."""
    text = bytes(data) + bytes([SENTINEL])
    n = len(text)
    suffixes = _suffix_array(text)
    out = bytes(text[(start + n - 1) % n] for start in suffixes)
    return out, suffixes.index(0)


def inverse_bwt(data: bytes, orig_index: int) -> bytes:
    """Invert bwt_transform, dropping the sentinel from the result."""
    n = len(data)
    if n == 0:
        raise ValueError("BWT data must contain at least the sentinel")
    if not 0 <= orig_index < n:
        raise ValueError(f"BWT index {orig_index} out of range for {n} bytes")

    seen = [0] * ALPHABET_SIZE
    ranks = []
    for byte in data:
        ranks.append(seen[byte])
        seen[byte] += 1
    starts = [0, *accumulate(seen)]

    out = bytearray(n)
    idx = orig_index
    for pos in range(n - 1, -1, -1):
        byte = data[idx]
        out[pos] = byte
        idx = starts[byte] + ranks[idx]
    return bytes(out[:-1])


def mtf_encode(data: bytes) -> bytes:
    """Replace each byte by its position in a move-to-front list."""
    alphabet = list(range(ALPHABET_SIZE))
    out = bytearray()
    for symbol in data:
        index = alphabet.index(symbol)
        out.append(index)
        del alphabet[index]
        alphabet.insert(0, symbol)
    return bytes(out)


def mtf_decode(data: bytes) -> bytes:
    """Invert mtf_encode."""
    alphabet = list(range(ALPHABET_SIZE))
    out = bytearray()
    for index in data:
        symbol = alphabet.pop(index)
        out.append(symbol)
        alphabet.insert(0, symbol)
    return bytes(out)


def _huffman_payload(data: bytes) -> bytes:
    root = build_tree(count_frequencies(data))
    return store_tree(root) + encode(data, build_codes(root))


def _read_exact(stream: io.BytesIO, length: int, message: str) -> bytes:
    chunk = stream.read(length)
    if len(chunk) != length:
        raise CorruptDataError(message)
    return chunk


def compress_bwt(data: bytes) -> bytes:
    """Length (8 bytes), BWT index (4 bytes), then Huffman-coded MTF of the BWT."""
    transformed, index = bwt_transform(data)
    return _SIZE.pack(len(data)) + _INDEX.pack(index) + _huffman_payload(mtf_encode(transformed))


def decompress_bwt(blob: bytes) -> bytes:
    """Invert compress_bwt."""
    stream = io.BytesIO(blob)
    (size,) = _SIZE.unpack(_read_exact(stream, _SIZE.size, "Error reading size"))
    (index,) = _INDEX.unpack(_read_exact(stream, _INDEX.size, "Error reading BWT index"))
    root = load_tree(stream)
    symbols = decode(stream, root, size + 1)
    try:
        return inverse_bwt(mtf_decode(symbols), index)
    except (ValueError, IndexError) as exc:
        if isinstance(exc, CorruptDataError):
            raise
        raise CorruptDataError(str(exc)) from exc


def compress_mtf(data: bytes) -> bytes:
    """Length (8 bytes), then Huffman-coded MTF of the data."""
    return _SIZE.pack(len(data)) + _huffman_payload(mtf_encode(data))


def decompress_mtf(blob: bytes) -> bytes:
    """Invert compress_mtf."""
    stream = io.BytesIO(blob)
    (size,) = _SIZE.unpack(_read_exact(stream, _SIZE.size, "Error reading size"))
    if size == 0:
        return b""
    root = load_tree(stream)
    return mtf_decode(decode(stream, root, size))


_METHODS = {
    "bwt": (compress_bwt, decompress_bwt),
    "mtf": (compress_mtf, decompress_mtf),
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compress a file with BWT/MTF and Huffman coding, then restore it."
    )
    parser.add_argument("input", nargs="?", default=DEFAULT_INPUT)
    parser.add_argument("--method", choices=sorted(_METHODS), default="bwt")
    parser.add_argument("--compressed", default=None)
    parser.add_argument("--output", default=DEFAULT_DECOMPRESSED)
    args = parser.parse_args(argv)

    compress, decompress = _METHODS[args.method]
    compressed_path = Path(args.compressed or DEFAULT_COMPRESSED[args.method])
    try:
        text = Path(args.input).read_bytes()
        compressed_path.write_bytes(compress(text))
        print("Compression successful.")
        restored = decompress(compressed_path.read_bytes())
        Path(args.output).write_bytes(restored)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except CorruptDataError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print("Decompression successful.")
    return 0


if __name__ == "__main__":
    sys.exit(main())