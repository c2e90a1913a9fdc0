import random
import struct

import pytest

from bitbench.chunked import (
    DEFAULT_CHUNKS,
    SYNC_MARKER,
    compress_chunked,
    decompress_chunked,
    main,
    split_ranges,
)
from bitbench.huffman import CorruptDataError


def _chunk_layout(blob, tree_len):
    """Offsets of each chunk-size field, parsed from a compressed blob."""
    pos = 8 + tree_len
    (count,) = struct.unpack_from("<i", blob, pos)
    pos += 4
    offsets = []
    for index in range(count):
        offsets.append(pos)
        (length,) = struct.unpack_from("<Q", blob, pos)
        pos += 8 + length
        if index < count - 1:
            pos += len(SYNC_MARKER)
    return count, offsets, pos


def test_split_ranges_last_takes_remainder():
    assert split_ranges(10, 3) == [(0, 3), (3, 6), (6, 10)]


def test_split_ranges_cover_everything():
    for size in range(0, 40):
        for count in range(1, 8):
            ranges = split_ranges(size, count)
            assert len(ranges) == count
            assert ranges[0][0] == 0
            assert ranges[-1][1] == size
            for (_, end), (start, _) in zip(ranges, ranges[1:]):
                assert end == start


def test_split_ranges_rejects_zero_count():
    with pytest.raises(ValueError):
        split_ranges(10, 0)


@pytest.mark.parametrize("chunks", [1, 2, 3, DEFAULT_CHUNKS, 11])
@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"a",
        b"aaaaaaaaaaaa",
        b"AAAABBBCCDAAAA",
        b"The quick brown fox jumps over the lazy dog" * 5,
        bytes(range(256)) * 3,
    ],
)
def test_round_trip(data, chunks):
    assert decompress_chunked(compress_chunked(data, chunks)) == data


def test_round_trip_random_bytes():
    rng = random.Random(7)
    data = bytes(rng.randrange(256) for _ in range(5000))
    assert decompress_chunked(compress_chunked(data)) == data


def test_wire_format_single_symbol():
    blob = compress_chunked(b"aaaa", 2)
    expected = (
        struct.pack("<Q", 4)
        + b"\x01a"
        + struct.pack("<i", 2)
        + struct.pack("<Q", 0)
        + SYNC_MARKER
        + struct.pack("<Q", 0)
    )
    assert blob == expected


def test_header_records_size_and_chunk_count():
    data = b"ab" * 50
    blob = compress_chunked(data, 4)
    assert struct.unpack_from("<Q", blob, 0)[0] == len(data)
    tree = blob[8:13]
    assert tree[0] == 0
    count, _, end = _chunk_layout(blob, len(tree))
    assert count == 4
    assert end == len(blob)


def test_corrupt_sync_marker_detected():
    data = b"ab" * 10
    blob = bytearray(compress_chunked(data, 2))
    _, offsets, _ = _chunk_layout(bytes(blob), 5)
    (length,) = struct.unpack_from("<Q", blob, offsets[0])
    marker_at = offsets[0] + 8 + length
    assert bytes(blob[marker_at : marker_at + 4]) == SYNC_MARKER
    blob[marker_at] = 0x00
    with pytest.raises(CorruptDataError):
        decompress_chunked(bytes(blob))


def test_truncated_blob_detected():
    blob = compress_chunked(b"hello world, hello chunks", 3)
    with pytest.raises(CorruptDataError):
        decompress_chunked(blob[:-3])


def test_missing_size_header():
    with pytest.raises(CorruptDataError):
        decompress_chunked(b"\x01\x02")


def test_invalid_chunk_count_detected():
    blob = bytearray(compress_chunked(b"aaaa", 1))
    struct.pack_into("<i", blob, 10, 0)
    with pytest.raises(CorruptDataError):
        decompress_chunked(bytes(blob))


def test_main_round_trips_file(tmp_path, capsys):
    source = tmp_path / "input.txt"
    compressed = tmp_path / "out.bin"
    restored = tmp_path / "restored.txt"
    source.write_bytes(b"In my younger and more vulnerable years" * 20)
    status = main(
        [str(source), "--compressed", str(compressed), "--output", str(restored)]
    )
    assert status == 0
    assert restored.read_bytes() == source.read_bytes()
    out = capsys.readouterr().out
    assert "Using 6 threads for compression" in out
    assert "Decompression successful." in out


def test_main_missing_input(tmp_path):
    status = main(
        [
            str(tmp_path / "absent.txt"),
            "--compressed",
            str(tmp_path / "c.bin"),
            "--output",
            str(tmp_path / "d.txt"),
        ]
    )
    assert status == 1