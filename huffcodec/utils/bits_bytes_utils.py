"""
Bit-level packing helpers.

Bits are packed most-significant-bit first inside every byte. A partially
filled final byte is zero-padded on the right and the number of padding bits
travels alongside the packed bytes.
"""

from typing import Tuple

from huffcodec.errors import FormatError


def bytes_to_bitstring(data: bytes) -> str:
    """Convert bytes -> bitstring (8 bits per byte)."""
    return "".join(f"{byte:08b}" for byte in data)


def bitstring_to_bytes(bits: str) -> bytes:
    """
    Convert bitstring -> bytes.

    Length must be a multiple of 8.
    """
    if len(bits) % 8 != 0:
        raise ValueError(
            f"Bitstring length must be multiple of 8, got {len(bits)}"
        )
    return bytes(int(bits[i:i + 8], 2) for i in range(0, len(bits), 8))


def padding_for(bit_count: int) -> int:
    """Number of zero bits needed to round `bit_count` up to a whole byte."""
    return (8 - bit_count % 8) % 8


class BitWriter:
    """
    Accumulates single bits and emits whole bytes.

    Call `finish()` once to flush the last partial byte; it returns the packed
    bytes together with the number of padding bits in the final byte.
    """

    def __init__(self) -> None:
        self._out = bytearray()
        self._acc = 0
        self._acc_bits = 0
        self._total_bits = 0
        self._finished = False

    @property
    def total_bits(self) -> int:
        return self._total_bits

    def append(self, bit: int) -> None:
        if bit not in (0, 1):
            raise ValueError(f"bit must be 0 or 1, got {bit!r}")
        self._push(bit, 1)

    def write_value(self, value: int, width: int) -> None:
        """Append the low `width` bits of `value`, most significant first."""
        if width < 0 or value < 0 or value >> width:
            raise ValueError(f"value {value} does not fit in {width} bits")
        self._push(value, width)

    def _push(self, value: int, width: int) -> None:
        if self._finished:
            raise ValueError("BitWriter already finished")
        self._acc = (self._acc << width) | value
        self._acc_bits += width
        self._total_bits += width
        while self._acc_bits >= 8:
            self._acc_bits -= 8
            self._out.append((self._acc >> self._acc_bits) & 0xFF)
        self._acc &= (1 << self._acc_bits) - 1

    def finish(self) -> Tuple[bytes, int]:
        """Flush buffered bits; returns (packed_bytes, padding_bits)."""
        if self._finished:
            raise ValueError("BitWriter already finished")
        self._finished = True
        padding = padding_for(self._acc_bits)
        if self._acc_bits:
            self._out.append((self._acc << padding) & 0xFF)
            self._acc = 0
            self._acc_bits = 0
        return bytes(self._out), padding


class BitReader:
    """
    Reads back bits written by `BitWriter`.

    The trailing `padding_bits` of the final byte are not part of the
    message and are never returned by `read_bit`.
    """

    def __init__(self, data: bytes, padding_bits: int = 0):
        if not 0 <= padding_bits <= 7:
            raise FormatError("padding bit count out of range", "padding_bits", "0..7", padding_bits)
        if padding_bits and not data:
            raise FormatError("padding declared on an empty bitstream", "padding_bits", 0, padding_bits)
        self._data = bytes(data)
        self._padding = padding_bits
        self._limit = len(self._data) * 8 - padding_bits
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def total_bits(self) -> int:
        return self._limit

    @property
    def remaining(self) -> int:
        return self._limit - self._pos

    def read_bit(self) -> int:
        if self._pos >= self._limit:
            raise FormatError("bitstream exhausted", "bits", self._pos + 1, self._limit)
        pos = self._pos
        self._pos += 1
        return (self._data[pos >> 3] >> (7 - (pos & 7))) & 1

    def __iter__(self):
        while self._pos < self._limit:
            yield self.read_bit()

    def padding_bitstring(self) -> str:
        """The padding bits of the final byte, as stored."""
        if not self._padding:
            return ""
        return f"{self._data[-1]:08b}"[8 - self._padding:]