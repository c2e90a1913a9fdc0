"""Static Huffman coding of byte strings with a serialised code tree."""

from __future__ import annotations

import argparse
import io
import struct
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Sequence

ALPHABET_SIZE = 256
LEAF_FLAG = 1
INTERNAL_FLAG = 0
MAX_TREE_DEPTH = ALPHABET_SIZE
_SIZE_HEADER = struct.Struct("<Q")

DEFAULT_INPUT = "gatsby.txt"
DEFAULT_COMPRESSED = "compressed.bin"
DEFAULT_DECOMPRESSED = "decompressed.txt"


class CorruptDataError(ValueError):
    """Raised when compressed data cannot be decoded."""


@dataclass
class HuffmanNode:
    """A node of a Huffman tree; leaves carry a byte symbol."""

    symbol: int = 0
    freq: int = 0
    left: HuffmanNode | None = None
    right: HuffmanNode | None = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class BitWriter:
    """Packs bits most-significant first into bytes."""

    def __init__(self) -> None:
        self._data = bytearray()
        self._current = 0
        self._bit_count = 0

    def write_bit(self, bit: int) -> None:
        self._current = (self._current << 1) | (bit & 1)
        self._bit_count += 1
        if self._bit_count == 8:
            self._data.append(self._current)
            self._current = 0
            self._bit_count = 0

    def getvalue(self) -> bytes:
        """Bytes written so far, with a partial last byte padded by zero bits."""
        if self._bit_count:
            return bytes(self._data) + bytes([self._current << (8 - self._bit_count)])
        return bytes(self._data)


class _NodeHeap:
    """Binary min-heap on node frequency with the tie-breaking the format relies on."""

    def __init__(self) -> None:
        self._nodes: list[HuffmanNode] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def push(self, node: HuffmanNode) -> None:
        nodes = self._nodes
        nodes.append(node)
        i = len(nodes) - 1
        while i > 0:
            parent = (i - 1) // 2
            if not node.freq < nodes[parent].freq:
                break
            nodes[i] = nodes[parent]
            i = parent
        nodes[i] = node

    def pop(self) -> HuffmanNode:
        nodes = self._nodes
        top = nodes[0]
        last = nodes.pop()
        if not nodes:
            return top
        size = len(nodes)
        i = 0
        while 2 * i + 1 < size:
            j = 2 * i + 1
            if j + 1 < size and nodes[j + 1].freq < nodes[j].freq:
                j += 1
            if last.freq <= nodes[j].freq:
                break
            nodes[i] = nodes[j]
            i = j
        nodes[i] = last
        return top


def count_frequencies(data: bytes) -> list[int]:
    """Occurrences of each byte value, indexed by value."""
    frequencies = [0] * ALPHABET_SIZE
    for byte in data:
        frequencies[byte] += 1
    return frequencies


def build_tree(frequencies: Sequence[int]) -> HuffmanNode | None:
    """Build a Huffman tree from per-byte counts; None when every count is zero."""
    if len(frequencies) > ALPHABET_SIZE:
        raise ValueError("at most 256 symbol frequencies are allowed")
    heap = _NodeHeap()
    for symbol, freq in enumerate(frequencies):
        if freq > 0:
            heap.push(HuffmanNode(symbol=symbol, freq=freq))
    if not heap:
        return None
    while len(heap) > 1:
        left = heap.pop()
        right = heap.pop()
        heap.push(HuffmanNode(freq=left.freq + right.freq, left=left, right=right))
    return heap.pop()


def build_codes(root: HuffmanNode | None) -> dict[int, str]:
    """Map each leaf symbol to its code as a string of '0' and '1'."""
    codes: dict[int, str] = {}
    if root is None:
        return codes
    pending: list[tuple[HuffmanNode, str]] = [(root, "")]
    while pending:
        node, prefix = pending.pop()
        if node.is_leaf:
            codes[node.symbol] = prefix
            continue
        if node.right is not None:
            pending.append((node.right, prefix + "1"))
        if node.left is not None:
            pending.append((node.left, prefix + "0"))
    return codes


def store_tree(root: HuffmanNode | None) -> bytes:
    """Serialise a tree in pre-order: 1 and the symbol for a leaf, 0 for an inner node."""
    out = bytearray()

    def visit(node: HuffmanNode | None) -> None:
        if node is None:
            return
        if node.is_leaf:
            out.append(LEAF_FLAG)
            out.append(node.symbol)
        else:
            out.append(INTERNAL_FLAG)
            visit(node.left)
            visit(node.right)

    visit(root)
    return bytes(out)


def _read_byte(stream: BinaryIO, message: str) -> int:
    chunk = stream.read(1)
    if not chunk:
        raise CorruptDataError(message)
    return chunk[0]


def load_tree(stream: BinaryIO) -> HuffmanNode:
    """Read a tree written by store_tree from a binary stream."""

    def read(depth: int) -> HuffmanNode:
        if depth > MAX_TREE_DEPTH:
            raise CorruptDataError("Huffman tree is too deep")
        flag = _read_byte(stream, "Error reading tree")
        if flag == LEAF_FLAG:
            return HuffmanNode(symbol=_read_byte(stream, "Error reading tree"))
        left = read(depth + 1)
        right = read(depth + 1)
        return HuffmanNode(left=left, right=right)

    return read(0)


def encode(data: bytes, codes: dict[int, str]) -> bytes:
    """Concatenate the code of every byte, packed into zero-padded bytes."""
    writer = BitWriter()
    for byte in data:
        try:
            code = codes[byte]
        except KeyError:
            raise ValueError(f"no Huffman code for byte 0x{byte:02X}") from None
        for bit in code:
            writer.write_bit(bit == "1")
    return writer.getvalue()


def decode(stream: BinaryIO, root: HuffmanNode, size: int) -> bytes:
    """Decode ``size`` symbols from a bit stream using the given tree."""
    if root.is_leaf:
        return bytes([root.symbol]) * size
    out = bytearray()
    current = root
    while len(out) < size:
        byte = _read_byte(stream, "Unexpected end of compressed data")
        for shift in range(7, -1, -1):
            child = current.right if (byte >> shift) & 1 else current.left
            if child is None:
                raise CorruptDataError("Invalid compressed data")
            current = child
            if current.is_leaf:
                out.append(current.symbol)
                current = root
                if len(out) == size:
                    break
    return bytes(out)


def compress(data: bytes) -> bytes:
    """Original length (8 bytes, little-endian), then the tree, then the coded bits."""
    root = build_tree(count_frequencies(data))
    codes = build_codes(root)
    return _SIZE_HEADER.pack(len(data)) + store_tree(root) + encode(data, codes)


def decompress(blob: bytes) -> bytes:
    """Invert compress."""
    if len(blob) < _SIZE_HEADER.size:
        raise CorruptDataError("Error reading size")
    (size,) = _SIZE_HEADER.unpack_from(blob)
    if size == 0:
        return b""
    stream = io.BytesIO(blob[_SIZE_HEADER.size :])
    root = load_tree(stream)
    return decode(stream, root, size)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Huffman-compress a file and restore it.")
    parser.add_argument("input", nargs="?", default=DEFAULT_INPUT)
    parser.add_argument("--compressed", default=DEFAULT_COMPRESSED)
    parser.add_argument("--output", default=DEFAULT_DECOMPRESSED)
    args = parser.parse_args(argv)

    try:
        text = Path(args.input).read_bytes()
        Path(args.compressed).write_bytes(compress(text))
        print("Compression successful.")
        restored = decompress(Path(args.compressed).read_bytes())
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