from typing import Tuple


class BitWriter:
    """Packs a stream of single bits into bytes, MSB first.

    :ivar buffer: Completed bytes.
    :type buffer: bytearray
    :ivar bit_buffer: Scratch register for the byte being filled.
    :type bit_buffer: int
    :ivar bit_count: Number of bits currently held in ``bit_buffer`` (0-7).
    :type bit_count: int
    """

    def __init__(self):
        self.buffer = bytearray()
        self.bit_buffer = 0
        self.bit_count = 0

    def write_bit(self, bit: int):
        """Append one bit (0 or 1)."""
        self.bit_buffer = (self.bit_buffer << 1) | (bit & 1)
        self.bit_count += 1
        if self.bit_count == 8:
            self.buffer.append(self.bit_buffer)
            self.bit_buffer = 0
            self.bit_count = 0

    def padding(self) -> int:
        """Number of zero bits :meth:`flush` will append to close the last byte."""
        return (8 - self.bit_count) % 8

    def flush(self) -> bytes:
        """Zero-pad the pending bits to a full byte and return all bytes.

        :returns: The packed bytes written so far.
        :rtype: bytes
        """
        if self.bit_count > 0:
            self.bit_buffer <<= (8 - self.bit_count)
            self.buffer.append(self.bit_buffer)
            self.bit_buffer = 0
            self.bit_count = 0
        return bytes(self.buffer)


class BitReader:
    """Reads single bits back out of packed bytes, MSB first.

    :ivar data: Packed source bytes.
    :type data: bytes
    :ivar pos: Index of the next byte to load from ``data``.
    :type pos: int
    :ivar bit_buffer: The byte currently being consumed.
    :type bit_buffer: int
    :ivar bit_count: Unread bits remaining in ``bit_buffer`` (0-8).
    :type bit_count: int
    """

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0
        self.bit_buffer = 0
        self.bit_count = 0

    def read_bit(self) -> int:
        """Read the next bit.

        :returns: 0 or 1.
        :rtype: int
        :raises EOFError: If all bytes have been consumed.
        """
        if self.bit_count == 0:
            if self.pos >= len(self.data):
                raise EOFError("Unexpected end of data")
            self.bit_buffer = self.data[self.pos]
            self.pos += 1
            self.bit_count = 8
        self.bit_count -= 1
        return (self.bit_buffer >> self.bit_count) & 1


def pack_bits(bits: str) -> Tuple[bytes, int]:
    """Pack a ``'0'``/``'1'`` string into bytes.

    :param bits: Bitstream text.
    :type bits: str
    :returns: Packed bytes and the number of padding bits in the last byte.
    :rtype: Tuple[bytes, int]
    :raises ValueError: If ``bits`` holds a character other than ``'0'``/``'1'``.
    """
    writer = BitWriter()
    for bit in bits:
        if bit not in "01":
            raise ValueError(f"Invalid bit character: {bit!r}")
        writer.write_bit(1 if bit == "1" else 0)
    padding = writer.padding()
    return writer.flush(), padding


def unpack_bits(data: bytes, padding: int = 0) -> str:
    """Inverse of :func:`pack_bits`.

    :param data: Packed bytes.
    :type data: bytes
    :param padding: Number of padding bits to drop from the last byte.
    :type padding: int
    :returns: Bitstream text.
    :rtype: str
    :raises ValueError: If ``padding`` is outside 0-7 or exceeds the data.
    """
    if not 0 <= padding <= 7:
        raise ValueError(f"Padding must be between 0 and 7, got {padding}")
    total = len(data) * 8 - padding
    if total < 0:
        raise ValueError("Padding is larger than the packed data")
    reader = BitReader(data)
    return "".join("1" if reader.read_bit() else "0" for _ in range(total))
