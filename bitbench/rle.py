"""Run-length coders: textual char+count, byte pairs, and 32-byte block markers."""

from __future__ import annotations

import argparse
import re
import sys
from itertools import groupby
from pathlib import Path
from typing import Sequence

BLOCK_SIZE = 32
UNIFORM_MARKER = 0x00
RAW_MARKER = 0xFF
PARTIAL_MARKER = 0xFE
MAX_RUN = 255
MAX_FILE_SIZE = 10 * 1024 * 1024

DEMO_TEXT = "AAAABBBCCDAAAA"
_TEXT_RUN = re.compile(r"(.)([0-9]*)", re.DOTALL)


class InvalidMarkerError(ValueError):
    """Raised when block-compressed data holds an unknown marker byte."""

    def __init__(self, marker: int) -> None:
        super().__init__(f"Invalid marker byte: 0x{marker:02X}")
        self.marker = marker


def rle_encode_text(text: str) -> str:
    """Write each run as its character followed by the decimal run length."""
    return "".join(f"{char}{sum(1 for _ in run)}" for char, run in groupby(text))


def rle_decode_text(text: str) -> str:
    """Expand character+count pairs; a character with no digits after it yields nothing."""
    return "".join(
        match.group(1) * (int(match.group(2)) if match.group(2) else 0)
        for match in _TEXT_RUN.finditer(text)
    )


def rle_encode_bytes(data: bytes) -> bytes:
    """Encode as (byte, run length) pairs, with runs capped at 255."""
    out = bytearray()
    for value, run in groupby(bytes(data)):
        length = sum(1 for _ in run)
        while length > 0:
            step = min(length, MAX_RUN)
            out += bytes((value, step))
            length -= step
    return bytes(out)


def rle_decode_bytes(data: bytes) -> bytes:
    """Expand (byte, run length) pairs; a trailing unpaired byte is ignored."""
    pairs = iter(bytes(data))
    return b"".join(bytes((value,)) * length for value, length in zip(pairs, pairs))


def block_compress(data: bytes) -> bytes:
    """Code 32-byte blocks as uniform (marker, value) or raw; the tail as a partial block."""
    data = bytes(data)
    full = len(data) - len(data) % BLOCK_SIZE
    out = bytearray()
    for start in range(0, full, BLOCK_SIZE):
        block = data[start : start + BLOCK_SIZE]
        if block.count(block[0]) == BLOCK_SIZE:
            out += bytes((UNIFORM_MARKER, block[0]))
        else:
            out.append(RAW_MARKER)
            out += block
    remaining = len(data) - full
    if remaining:
        out += bytes((PARTIAL_MARKER, remaining))
        out += data[full:]
    return bytes(out)


def _take(data: bytes, pos: int, length: int) -> bytes:
    chunk = data[pos : pos + length]
    if len(chunk) != length:
        raise ValueError("Truncated block-compressed data")
    return chunk


def block_decompress(data: bytes) -> bytes:
    """Invert block_compress."""
    data = bytes(data)
    out = bytearray()
    pos = 0
    while pos < len(data):
        marker = data[pos]
        pos += 1
        if marker == UNIFORM_MARKER:
            out += _take(data, pos, 1) * BLOCK_SIZE
            pos += 1
        elif marker == RAW_MARKER:
            out += _take(data, pos, BLOCK_SIZE)
            pos += BLOCK_SIZE
        elif marker == PARTIAL_MARKER:
            count = _take(data, pos, 1)[0]
            pos += 1
            out += _take(data, pos, count)
            pos += count
        else:
            raise InvalidMarkerError(marker)
    return bytes(out)


def _run_text(text: str) -> int:
    compressed = rle_encode_text(text)
    print(f"Compressed: {compressed}")
    print(f"Decompressed: {rle_decode_text(compressed)}")
    return 0


def _run_bytes(source: Path, compressed: Path, output: Path) -> int:
    with open(source, "rb") as handle:
        data = handle.read(MAX_FILE_SIZE)
    compressed.write_bytes(rle_encode_bytes(data))
    print("Compression complete!")
    output.write_bytes(rle_decode_bytes(compressed.read_bytes()))
    print("Decompression complete!")
    return 0


def _run_block(source: Path, compressed: Path, output: Path) -> int:
    data = source.read_bytes()
    packed = block_compress(data)
    compressed.write_bytes(packed)
    ratio = len(packed) * 100.0 / len(data) if data else 0.0
    print(f"Compression ratio: {ratio:.2f}%")
    output.write_bytes(block_decompress(compressed.read_bytes()))
    print("Decompression successful.")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run-length compress and restore data.")
    parser.add_argument("input", nargs="?", default=None,
                        help="input file, or the string itself for the text method")
    parser.add_argument("--method", choices=("block", "bytes", "text"), default="block")
    parser.add_argument("--compressed", default="compressed.bin")
    parser.add_argument("--output", default=None)
    args = parser.parse_args(argv)

    if args.method == "text":
        return _run_text(DEMO_TEXT if args.input is None else args.input)

    if args.method == "bytes":
        source = Path(args.input or "gatsby.txt")
        output = Path(args.output or "decompressed.txt")
        runner = _run_bytes
    else:
        source = Path(args.input or "frank.txt")
        output = Path(args.output or "decompressed.txt")
        runner = _run_block
    try:
        return runner(source, Path(args.compressed), output)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())