import pytest

from elfstruct.codec import unpack_uint, unpack_uint16, unpack_uint32, unpack_uint64
from elfstruct.meta import Endianess


def test_little_endian():
    assert unpack_uint(b'\x7fELF') == 0x464c457f
    assert unpack_uint16(b'\x01\x02') == 0x0201
    assert unpack_uint32(b'\xef\xbe\xad\xde') == 0xdeadbeef
    assert unpack_uint64(b'\x01\x00\x00\x00\x00\x00\x00\x80') == 0x8000000000000001


def test_big_endian():
    assert unpack_uint16(b'\x01\x02', Endianess.BIG_ENDIAN) == 0x0102
    assert unpack_uint32(b'\xde\xad\xbe\xef', endianess=Endianess.BIG_ENDIAN) == 0xdeadbeef
    assert unpack_uint(b'\x00\x00\x00\x00\x00\x00\x10\x00', Endianess.BIG_ENDIAN) == 0x1000


def test_single_byte():
    assert unpack_uint(b'\xff') == 0xff
    assert unpack_uint(b'\x02', Endianess.BIG_ENDIAN) == 2


def test_accepts_any_bytes_like():
    assert unpack_uint16(bytearray(b'\x34\x12')) == 0x1234
    assert unpack_uint16(memoryview(b'\x34\x12')) == 0x1234


@pytest.mark.parametrize('function, raw', [
    (unpack_uint16, b'\x01'),
    (unpack_uint16, b'\x01\x02\x03\x04'),
    (unpack_uint32, b'\x01\x02'),
    (unpack_uint64, b'\x01\x02\x03\x04'),
    (unpack_uint, b''),
    (unpack_uint, b'\x00\x00\x00'),
])
def test_wrong_width(function, raw):
    """Passing the wrong number of bytes is a misuse of the interface."""
    with pytest.raises(ValueError):
        function(raw)
