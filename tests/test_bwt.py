import pytest

from bitbench.bwt import (
    bwt_transform,
    compress_bwt,
    compress_mtf,
    decompress_bwt,
    decompress_mtf,
    inverse_bwt,
    main,
    mtf_decode,
    mtf_encode,
)
from bitbench.huffman import CorruptDataError

SAMPLES = [
    b"a",
    b"banana",
    b"abracadabra",
    b"mississippi river",
    b"The quick brown fox jumps over the lazy dog. " * 20,
    bytes(range(1, 256)),
    b"zzzzzzzzzzzzzzzzzzzz",
]


def test_banana_worked_example():
    out, index = bwt_transform(b"banana")
    assert out == b"annb\x00aa"
    assert index == 4


def test_empty_input_is_only_sentinel():
    out, index = bwt_transform(b"")
    assert out == b"\x00"
    assert index == 0
    assert inverse_bwt(out, index) == b""


@pytest.mark.parametrize("data", SAMPLES)
def test_bwt_is_permutation_with_sentinel(data):
    out, index = bwt_transform(data)
    assert sorted(out) == sorted(data + b"\x00")
    assert out[index] == 0


@pytest.mark.parametrize("data", SAMPLES)
def test_bwt_round_trip(data):
    out, index = bwt_transform(data)
    assert inverse_bwt(out, index) == data


def test_inverse_bwt_rejects_bad_index():
    out, _ = bwt_transform(b"banana")
    with pytest.raises(ValueError):
        inverse_bwt(out, len(out))
    with pytest.raises(ValueError):
        inverse_bwt(out, -1)


def test_inverse_bwt_rejects_empty():
    with pytest.raises(ValueError):
        inverse_bwt(b"", 0)


def test_mtf_known_values():
    assert mtf_encode(b"aab") == bytes([97, 0, 98])


def test_mtf_repeated_byte_becomes_zeros():
    data = b"q" * 10
    encoded = mtf_encode(data)
    assert encoded[0] == ord("q")
    assert set(encoded[1:]) == {0}


@pytest.mark.parametrize("data", SAMPLES + [b"", bytes(range(256)), b"\x00\xff\x00\xff"])
def test_mtf_round_trip(data):
    encoded = mtf_encode(data)
    assert len(encoded) == len(data)
    assert mtf_decode(encoded) == data


@pytest.mark.parametrize("data", SAMPLES + [b""])
def test_compress_bwt_round_trip(data):
    assert decompress_bwt(compress_bwt(data)) == data


def test_compress_bwt_header():
    data = b"banana"
    blob = compress_bwt(data)
    assert blob[:8] == len(data).to_bytes(8, "little")
    _, index = bwt_transform(data)
    assert blob[8:12] == index.to_bytes(4, "little", signed=True)


@pytest.mark.parametrize("data", SAMPLES + [b"", b"\x00\x01\x00"])
def test_compress_mtf_round_trip(data):
    assert decompress_mtf(compress_mtf(data)) == data


def test_compress_mtf_header():
    data = b"abc"
    assert compress_mtf(data)[:8] == len(data).to_bytes(8, "little")


def test_decompress_bwt_truncated_header():
    with pytest.raises(CorruptDataError):
        decompress_bwt(b"\x00")


def test_decompress_bwt_truncated_body():
    blob = compress_bwt(b"The quick brown fox jumps over the lazy dog")
    with pytest.raises(CorruptDataError):
        decompress_bwt(blob[:-3])


def test_decompress_mtf_truncated():
    blob = compress_mtf(b"The quick brown fox jumps over the lazy dog")
    with pytest.raises(CorruptDataError):
        decompress_mtf(blob[:-3])
    with pytest.raises(CorruptDataError):
        decompress_mtf(b"\x01\x02")


def test_repetitive_text_shrinks():
    data = b"abcabcabcabc" * 100
    assert len(compress_bwt(data)) < len(data)


@pytest.mark.parametrize("method", ["bwt", "mtf"])
def test_main_round_trip(tmp_path, method):
    source = tmp_path / "in.txt"
    source.write_bytes(b"It was a dark and stormy night. " * 30)
    compressed = tmp_path / "out.bin"
    restored = tmp_path / "restored.txt"
    code = main(
        [
            str(source),
            "--method",
            method,
            "--compressed",
            str(compressed),
            "--output",
            str(restored),
        ]
    )
    assert code == 0
    assert restored.read_bytes() == source.read_bytes()
    assert compressed.stat().st_size < source.stat().st_size


def test_main_missing_input(tmp_path):
    code = main(
        [
            str(tmp_path / "missing.txt"),
            "--compressed",
            str(tmp_path / "c.bin"),
            "--output",
            str(tmp_path / "d.txt"),
        ]
    )
    assert code == 1