"""Binary PGM (P5) grayscale images: gradient and random test patterns."""

from __future__ import annotations

import argparse
import random
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Sequence

MAGIC = b"P5"
MAX_GRAY = 255
GRADIENT_SIZE = 16384
RANDOM_SIZE = 1024
_WHITESPACE = b" \t\r\n\v\f"
_COMMENT = ord("#")


def pgm_header(width: int, height: int) -> bytes:
    """The P5 header for an 8-bit image of the given size."""
    return f"P5\n{width} {height}\n{MAX_GRAY}\n".encode("ascii")


def _check_size(width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")


def gradient_row(width: int) -> bytes:
    """One row whose pixel at column x has value x modulo 256."""
    _check_size(width, 0)
    ramp = bytes(range(256))
    return (ramp * (width // 256 + 1))[:width]


def gradient_pixels(width: int, height: int, workers: int = 1) -> bytes:
    """A horizontal gradient image, with rows filled by a pool of worker threads."""
    _check_size(width, height)
    if workers < 1:
        raise ValueError("workers must be at least 1")
    row = gradient_row(width)
    step = height // workers
    ranges = [
        (t * step, height if t == workers - 1 else (t + 1) * step) for t in range(workers)
    ]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        parts = pool.map(lambda r: row * (r[1] - r[0]), ranges)
        return b"".join(parts)


def random_pixels(width: int, height: int, rng: random.Random | None = None) -> bytes:
    """An image of uniformly random bytes."""
    _check_size(width, height)
    rng = rng if rng is not None else random.Random()
    return rng.randbytes(width * height)


def write_pgm(path: str | Path, width: int, height: int, pixels: bytes) -> None:
    """Write header and pixels to a P5 file."""
    _check_size(width, height)
    pixels = bytes(pixels)
    if len(pixels) != width * height:
        raise ValueError(
            f"expected {width * height} pixels, got {len(pixels)}"
        )
    with open(path, "wb") as handle:
        handle.write(pgm_header(width, height))
        handle.write(pixels)


def _header_fields(data: bytes) -> tuple[list[bytes], int]:
    fields: list[bytes] = []
    pos = 0
    size = len(data)
    while len(fields) < 4:
        while pos < size and (data[pos] in _WHITESPACE or data[pos] == _COMMENT):
            if data[pos] == _COMMENT:
                end = data.find(b"\n", pos)
                pos = size if end < 0 else end + 1
            else:
                pos += 1
        start = pos
        while pos < size and data[pos] not in _WHITESPACE and data[pos] != _COMMENT:
            pos += 1
        if start == pos:
            raise ValueError("truncated PGM header")
        fields.append(data[start:pos])
    # A single whitespace byte separates the header from the raster.
    if pos < size:
        pos += 1
    return fields, pos


def read_pgm(path: str | Path) -> tuple[int, int, bytes]:
    """Read a P5 file; return width, height and the raw pixels."""
    data = Path(path).read_bytes()
    if not data.startswith(MAGIC):
        raise ValueError("not a binary PGM file")
    (magic, width_field, height_field, maxval_field), pos = _header_fields(data)
    if magic != MAGIC:
        raise ValueError("not a binary PGM file")
    width, height, maxval = int(width_field), int(height_field), int(maxval_field)
    _check_size(width, height)
    if not 0 < maxval <= MAX_GRAY:
        raise ValueError(f"unsupported maximum gray value {maxval}")
    pixels = data[pos : pos + width * height]
    if len(pixels) != width * height:
        raise ValueError("truncated PGM raster")
    return width, height, pixels


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a grayscale PGM test image.")
    parser.add_argument("output", nargs="?", default=None)
    parser.add_argument("--pattern", choices=("gradient", "random"), default="gradient")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    default_size = GRADIENT_SIZE if args.pattern == "gradient" else RANDOM_SIZE
    width = default_size if args.width is None else args.width
    height = default_size if args.height is None else args.height
    default_name = "image.pgm" if args.pattern == "gradient" else "image_random.pgm"
    output = args.output or default_name

    try:
        if args.pattern == "gradient":
            pixels = gradient_pixels(width, height, args.workers)
        else:
            pixels = random_pixels(width, height, random.Random(args.seed))
        write_pgm(output, width, height, pixels)
    except OSError:
        print("[ERROR] Cannot open file")
        return 1
    except ValueError as exc:
        print(f"[ERROR] {exc}")
        return 1
    print("[MESSAGE] Image generated successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())