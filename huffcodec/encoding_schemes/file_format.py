"""
On-disk layout of a compressed file.

All integers are big-endian::

    [symbol_count: u32]
    symbol_count x:
        [symbol: u8][code_length: u32][code bits, ceil(code_length / 8) bytes]
    [padding_bits: u8][symbol_total: u64]
    [body bytes]

Code-table entries are written in ascending symbol order. Code bits and body
bits are packed most-significant-bit first and zero-padded to a byte
boundary. `symbol_total` is the number of encoded input bytes; the decoder
uses it to tell a clean end of message from a truncated body.
"""

import struct
from dataclasses import dataclass, field
from typing import Dict

from huffcodec.encoding_schemes.huffman_tree import CodeTable, DecodeTrie
from huffcodec.errors import FormatError
from huffcodec.utils.bits_bytes_utils import bitstring_to_bytes, bytes_to_bitstring, padding_for
from huffcodec.utils.debug import dbg

COUNT_FMT = ">I"          # symbol_count (u32)
ENTRY_FMT = ">BI"         # symbol (u8), code_length (u32)
BODY_HEADER_FMT = ">BQ"   # padding_bits (u8), symbol_total (u64)

COUNT_SIZE = struct.calcsize(COUNT_FMT)
ENTRY_SIZE = struct.calcsize(ENTRY_FMT)
BODY_HEADER_SIZE = struct.calcsize(BODY_HEADER_FMT)

MAX_SYMBOLS = 256


@dataclass
class CompressedFile:
    """
    Code table plus packed message body.

    - codes: symbol -> code bitstring (e.g. {97: '0', 98: '11'})
    - padding_bits: zero bits appended to the last body byte (0..7)
    - body: packed encoded message
    - symbol_total: number of symbols (input bytes) the body encodes
    """
    codes: CodeTable = field(default_factory=dict)
    padding_bits: int = 0
    body: bytes = b""
    symbol_total: int = 0

    @property
    def total_bits(self) -> int:
        """Meaningful bits in the body."""
        return len(self.body) * 8 - self.padding_bits

    def validate(self) -> DecodeTrie:
        """
        Check the table and body header for structural consistency.

        Returns the decode trie built from the code table. Raises FormatError
        on the first problem found.
        """
        if len(self.codes) > MAX_SYMBOLS:
            raise FormatError("too many symbols declared", "symbol_count", f"<= {MAX_SYMBOLS}", len(self.codes))
        for symbol in self.codes:
            if not isinstance(symbol, int) or not 0 <= symbol <= 255:
                raise FormatError("symbol is not a byte value", "symbol", "0..255", symbol)

        trie = DecodeTrie.from_codes(self.codes)

        if not 0 <= self.padding_bits <= 7:
            raise FormatError("padding bit count out of range", "padding_bits", "0..7", self.padding_bits)
        if self.symbol_total < 0:
            raise FormatError("negative symbol total", "symbol_total", ">= 0", self.symbol_total)
        if not self.codes and (self.symbol_total or self.body or self.padding_bits):
            raise FormatError(
                "empty code table with a non-empty body",
                "symbol_total/body",
                "0/0 bytes",
                f"{self.symbol_total}/{len(self.body)} bytes",
            )
        if self.codes and not self.symbol_total:
            raise FormatError("code table present but no symbols encoded", "symbol_total", ">= 1", 0)
        if self.padding_bits and not self.body:
            raise FormatError("padding declared on an empty body", "padding_bits", 0, self.padding_bits)
        return trie

    def to_bytes(self) -> bytes:
        self.validate()
        out = bytearray(struct.pack(COUNT_FMT, len(self.codes)))
        for symbol in sorted(self.codes):
            code = self.codes[symbol]
            out += struct.pack(ENTRY_FMT, symbol, len(code))
            out += bitstring_to_bytes(code + "0" * padding_for(len(code)))
        out += struct.pack(BODY_HEADER_FMT, self.padding_bits, self.symbol_total)
        out += self.body
        return bytes(out)

    @classmethod
    def from_bytes(cls, data: bytes) -> "CompressedFile":
        """
        Parse and validate a serialized file.

        The whole header, code table included, is checked before the body is
        touched. Raises FormatError on the first inconsistency.
        """
        view = memoryview(data)
        pos = 0

        def take(size: int, what: str) -> memoryview:
            nonlocal pos
            if pos + size > len(view):
                raise FormatError(
                    f"truncated header while reading {what}",
                    "bytes",
                    pos + size,
                    len(view),
                )
            chunk = view[pos:pos + size]
            pos += size
            return chunk

        (symbol_count,) = struct.unpack(COUNT_FMT, take(COUNT_SIZE, "symbol count"))
        if symbol_count > MAX_SYMBOLS:
            raise FormatError("too many symbols declared", "symbol_count", f"<= {MAX_SYMBOLS}", symbol_count)

        codes: Dict[int, str] = {}
        for entry in range(symbol_count):
            symbol, code_length = struct.unpack(ENTRY_FMT, take(ENTRY_SIZE, f"entry {entry}"))
            if code_length == 0:
                raise FormatError(f"zero-length code for symbol {symbol}", "code_length", ">= 1", 0)
            if symbol in codes:
                raise FormatError(f"symbol {symbol} declared twice", "symbol", "unique", symbol)
            bits = bytes_to_bitstring(take((code_length + 7) // 8, f"code bits of symbol {symbol}"))
            if "1" in bits[code_length:]:
                raise FormatError(
                    f"non-zero padding after code of symbol {symbol}",
                    "code_padding",
                    "0" * padding_for(code_length),
                    bits[code_length:],
                )
            codes[symbol] = bits[:code_length]

        padding_bits, symbol_total = struct.unpack(
            BODY_HEADER_FMT, take(BODY_HEADER_SIZE, "body header")
        )
        parsed = cls(
            codes=codes,
            padding_bits=padding_bits,
            body=view[pos:].tobytes(),
            symbol_total=symbol_total,
        )
        parsed.validate()

        dbg(
            "FMT",
            f"parsed symbols={symbol_count} symbol_total={symbol_total} "
            f"body_bytes={len(parsed.body)} padding={padding_bits}",
        )
        return parsed
