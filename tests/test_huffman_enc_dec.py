import random

import pytest

from huffcodec import CompressedFile, compress, decompress
from huffcodec.encoding_schemes import huffman_decode, huffman_encode
from huffcodec.encoding_schemes.huffman_tree import is_prefix_free


def _samples():
    rng = random.Random(1234)
    return [
        b"",
        b"\x00",
        b"z",
        b"A" * 10_000,
        bytes(range(256)),
        bytes(range(256)) * 3 + b"\xff" * 500,
        b"hello huffman!",
        b"aaabbc",
        bytes(rng.getrandbits(8) for _ in range(10 * 1024)),
        bytes(rng.choice(b"ACGT") for _ in range(3000)),
    ]


@pytest.mark.parametrize("data", _samples())
def test_roundtrip(data):
    packed = compress(data)
    assert decompress(packed) == data
    assert decompress(packed.to_bytes()) == data
    assert huffman_decode(huffman_encode(data)) == data


@pytest.mark.parametrize("n", [1, 2, 3, 7, 8, 9, 100])
def test_small_random_inputs(n):
    rng = random.Random(n)
    data = bytes(rng.getrandbits(8) for _ in range(n))
    assert decompress(compress(data)) == data


def test_empty_input_is_a_zero_symbol_file():
    packed = compress(b"")
    assert packed.codes == {}
    assert packed.body == b""
    assert packed.padding_bits == 0
    assert packed.to_bytes() == b"\x00\x00\x00\x00" + b"\x00" + b"\x00" * 8
    assert decompress(packed) == b""


def test_degenerate_alphabet():
    packed = compress(b"q" * 37)
    assert packed.codes == {ord("q"): "0"}
    assert packed.total_bits == 37
    assert decompress(packed) == b"q" * 37


def test_aaabbc_file_bytes():
    packed = compress(b"aaabbc")
    assert packed.codes == {97: "0", 98: "11", 99: "10"}
    assert packed.total_bits == 3 * 1 + 2 * 2 + 1 * 2
    assert packed.to_bytes() == bytes.fromhex(
        "00000003"
        "61" "00000001" "00"
        "62" "00000002" "c0"
        "63" "00000002" "80"
        "07" "0000000000000006"
        "1f00"
    )
    assert decompress(packed) == b"aaabbc"


@pytest.mark.parametrize("data", _samples())
def test_padding_matches_encoded_bits(data):
    packed = compress(data)
    freqs = {s: data.count(bytes([s])) for s in set(data)}
    total_bits = sum(freqs[s] * len(packed.codes[s]) for s in freqs)
    assert packed.total_bits == total_bits
    assert packed.padding_bits == (8 - total_bits % 8) % 8
    assert len(packed.body) == (total_bits + 7) // 8


@pytest.mark.parametrize("data", _samples())
def test_codes_prefix_free(data):
    assert is_prefix_free(compress(data).codes)


def test_deterministic_output():
    data = bytes(random.Random(7).getrandbits(8) for _ in range(4096))
    assert compress(data).to_bytes() == compress(bytes(data)).to_bytes()
    assert huffman_encode(data) == huffman_encode(bytearray(data))


def test_compressed_file_roundtrips_through_bytes():
    packed = compress(b"mississippi river")
    parsed = CompressedFile.from_bytes(packed.to_bytes())
    assert parsed == packed


def test_text_compresses():
    data = b"to be or not to be, that is the question. " * 200
    assert len(huffman_encode(data)) < len(data)
