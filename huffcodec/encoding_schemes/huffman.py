from typing import Union

from huffcodec.encoding_schemes.file_format import CompressedFile
from huffcodec.encoding_schemes.huffman_tree import (
    build_tree,
    count_frequencies,
    generate_codes,
)
from huffcodec.errors import FormatError
from huffcodec.utils.bits_bytes_utils import BitReader, BitWriter
from huffcodec.utils.debug import dbg


def compress(data: bytes) -> CompressedFile:
    """
    Huffman-encode `data`.

    Empty input gives a file with no symbols and an empty body. The same input
    always produces the same file.
    """
    data = bytes(data)
    freqs = count_frequencies(data)
    tree = build_tree(freqs)
    if tree is None:
        dbg("HUF", "empty input")
        return CompressedFile()

    codes = generate_codes(tree)

    table = [(0, 0)] * 256
    for symbol, code in codes.items():
        table[symbol] = (int(code, 2), len(code))

    writer = BitWriter()
    for byte in data:
        value, width = table[byte]
        writer.write_value(value, width)
    total_bits = writer.total_bits
    body, padding = writer.finish()

    dbg(
        "HUF",
        f"encode len={len(data)} symbols={len(codes)} bits={total_bits} "
        f"body_bytes={len(body)} padding={padding}",
    )
    return CompressedFile(codes=codes, padding_bits=padding, body=body, symbol_total=len(data))


def decompress(file: Union[CompressedFile, bytes]) -> bytes:
    """
    Rebuild the original bytes.

    Accepts a `CompressedFile` or its serialized bytes. Nothing is returned
    unless the whole body decodes cleanly; any structural problem raises
    FormatError.
    """
    if not isinstance(file, CompressedFile):
        file = CompressedFile.from_bytes(file)

    trie = file.validate()
    if not file.codes:
        return b""

    reader = BitReader(file.body, file.padding_bits)
    expected = file.symbol_total

    out = bytearray()
    node = 0
    if expected:
        for bit in reader:
            node = trie.step(node, bit)
            symbol = trie.symbols[node]
            if symbol is not None:
                out.append(symbol)
                node = 0
                if len(out) == expected:
                    break

    if len(out) < expected:
        raise FormatError("body too short for the declared symbol total", "symbols", expected, len(out))
    if reader.remaining:
        raise FormatError(
            "unused bits after the last symbol",
            "bits",
            reader.position,
            reader.total_bits,
        )
    if "1" in reader.padding_bitstring():
        raise FormatError(
            "padding bits are not zero",
            "padding",
            "0" * file.padding_bits,
            reader.padding_bitstring(),
        )

    dbg("HUF", f"decode symbols={len(out)} bits={reader.total_bits}")
    return bytes(out)


def huffman_encode(data: bytes) -> bytes:
    """Compress raw bytes straight to the serialized file format."""
    return compress(data).to_bytes()


def huffman_decode(blob: bytes) -> bytes:
    """Decode a serialized file back to the original bytes."""
    return decompress(CompressedFile.from_bytes(blob))
