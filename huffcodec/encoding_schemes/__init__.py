from huffcodec.encoding_schemes.file_format import CompressedFile
from huffcodec.encoding_schemes.huffman import (
    compress,
    decompress,
    huffman_decode,
    huffman_encode,
)

__all__ = [
    "CompressedFile",
    "compress",
    "decompress",
    "huffman_encode",
    "huffman_decode",
]
