"""Utility helpers shared across codec components."""

from huffcodec.utils.bits_bytes_utils import (
    BitReader,
    BitWriter,
    bitstring_to_bytes,
    bytes_to_bitstring,
)
from huffcodec.utils.file_utils import (
    add_suffix_to_top_level,
    compressed_filename,
    decompressed_filename,
    suffix_filename,
)

__all__ = [
    "BitReader",
    "BitWriter",
    "bitstring_to_bytes",
    "bytes_to_bitstring",
    "add_suffix_to_top_level",
    "compressed_filename",
    "decompressed_filename",
    "suffix_filename",
]
