"""Lossless Huffman compression of byte streams."""

from huffcodec.encoding_schemes import CompressedFile, compress, decompress
from huffcodec.errors import FormatError, IOUnavailable

__all__ = [
    "CompressedFile",
    "compress",
    "decompress",
    "FormatError",
    "IOUnavailable",
]
