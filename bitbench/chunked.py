"""Huffman coding with the payload split into independently packed chunks."""

from __future__ import annotations

import argparse
import io
import struct
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import BinaryIO, Sequence

from bitbench.huffman import (
    CorruptDataError,
    build_codes,
    build_tree,
    count_frequencies,
    decode,
    encode,
    load_tree,
    store_tree,
)

DEFAULT_CHUNKS = 6
SYNC_MARKER = b"\xff\xff\xff\xff"
_SIZE = struct.Struct("<Q")
_COUNT = struct.Struct("<i")

DEFAULT_INPUT = "gatsby.txt"
DEFAULT_COMPRESSED = "compressed.bin"
DEFAULT_DECOMPRESSED = "decompressed.txt"


def split_ranges(size: int, count: int) -> list[tuple[int, int]]:
    """Split ``size`` items into ``count`` half-open ranges; the last takes the remainder."""
    if count < 1:
        raise ValueError("chunk count must be at least 1")
    if size < 0:
        raise ValueError("size must not be negative")
    step = size // count
    return [
        (t * step, size if t == count - 1 else (t + 1) * step) for t in range(count)
    ]


def compress_chunked(data: bytes, chunks: int = DEFAULT_CHUNKS) -> bytes:
    """Length, tree, chunk count, then each chunk's length and bits, separated by sync markers."""
    ranges = split_ranges(len(data), chunks)
    root = build_tree(count_frequencies(data))
    codes = build_codes(root)

    with ThreadPoolExecutor(max_workers=chunks) as pool:
        encoded = list(pool.map(lambda r: encode(data[r[0] : r[1]], codes), ranges))

    out = bytearray(_SIZE.pack(len(data)))
    out += store_tree(root)
    out += _COUNT.pack(chunks)
    for index, chunk in enumerate(encoded):
        out += _SIZE.pack(len(chunk))
        out += chunk
        if index < chunks - 1:
            out += SYNC_MARKER
    return bytes(out)


def _read_exact(stream: BinaryIO, length: int, message: str) -> bytes:
    chunk = stream.read(length)
    if len(chunk) != length:
        raise CorruptDataError(message)
    return chunk


def decompress_chunked(blob: bytes) -> bytes:
    """Invert compress_chunked."""
    stream = io.BytesIO(blob)
    (size,) = _SIZE.unpack(_read_exact(stream, _SIZE.size, "Error reading size"))
    if size == 0:
        return b""
    root = load_tree(stream)
    (count,) = _COUNT.unpack(
        _read_exact(stream, _COUNT.size, "Error reading number of chunks")
    )
    try:
        ranges = split_ranges(size, count)
    except ValueError as exc:
        raise CorruptDataError(f"Invalid number of chunks: {count}") from exc

    out = bytearray()
    for index, (start, end) in enumerate(ranges):
        (chunk_size,) = _SIZE.unpack(
            _read_exact(stream, _SIZE.size, "Error reading chunk size")
        )
        chunk = _read_exact(stream, chunk_size, "Unexpected end of compressed data")
        out += decode(io.BytesIO(chunk), root, end - start)
        if index < count - 1:
            marker = stream.read(len(SYNC_MARKER))
            if marker != SYNC_MARKER:
                raise CorruptDataError("Sync marker not found")

    if len(out) != size:
        raise CorruptDataError(
            f"Decompression size mismatch: got {len(out)}, expected {size}"
        )
    return bytes(out)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Huffman-compress a file in parallel chunks and restore it."
    )
    parser.add_argument("input", nargs="?", default=DEFAULT_INPUT)
    parser.add_argument("--compressed", default=DEFAULT_COMPRESSED)
    parser.add_argument("--output", default=DEFAULT_DECOMPRESSED)
    parser.add_argument("--threads", type=int, default=DEFAULT_CHUNKS)
    args = parser.parse_args(argv)

    if args.threads < 1:
        print("Thread count must be at least 1", file=sys.stderr)
        return 1
    print(f"Using {args.threads} threads for compression")
    try:
        text = Path(args.input).read_bytes()
        print(f"Compressing {args.input} ({len(text)} bytes)...")
        blob = compress_chunked(text, args.threads)
        Path(args.compressed).write_bytes(blob)
        compressed_size = Path(args.compressed).stat().st_size
        ratio = compressed_size * 100 / len(text) if text else 0.0
        print(
            f"Compression successful. Original: {len(text)} bytes, "
            f"Compressed: {compressed_size} bytes ({ratio:.2f}%)"
        )
        print(f"Decompressing to {args.output}...")
        restored = decompress_chunked(Path(args.compressed).read_bytes())
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