import pytest

from bitops import BitReader, BitWriter, pack_bits, unpack_bits


def test_bitwriter_packs_msb_first_and_pads():
    bw = BitWriter()
    for bit in (1, 0, 1, 0, 1, 1, 1, 1, 0, 1):
        bw.write_bit(bit)
    assert bw.padding() == 6
    out = bw.flush()
    assert out == bytes([0b10101111, 0b01000000])
    assert bw.padding() == 0


def test_bitreader_reads_msb_first():
    br = BitReader(bytes([0b11001010]))
    assert [br.read_bit() for _ in range(8)] == [1, 1, 0, 0, 1, 0, 1, 0]


def test_bitreader_eoferror_when_exhausted():
    br = BitReader(b"\xF0")
    for _ in range(8):
        br.read_bit()
    with pytest.raises(EOFError):
        br.read_bit()


def test_pack_bits_padding():
    packed, padding = pack_bits("110")
    assert packed == bytes([0b11000000])
    assert padding == 5
    assert pack_bits("") == (b"", 0)
    assert pack_bits("01010101") == (bytes([0x55]), 0)


def test_unpack_bits_reverses_pack():
    bits = "1011001110001"
    assert unpack_bits(*pack_bits(bits)) == bits


def test_pack_bits_rejects_non_bits():
    with pytest.raises(ValueError):
        pack_bits("0120")


def test_unpack_bits_rejects_bad_padding():
    with pytest.raises(ValueError):
        unpack_bits(b"\x00", 8)
    with pytest.raises(ValueError):
        unpack_bits(b"", 3)
