'''
Fixed-width unsigned integers from raw bytes.

All the multi-byte reads of the decoder end up here: the caller slices
exactly the bytes of a field and we interpret them with the requested
endianess.
'''
from bitstring import Bits

from .meta import Endianess


WIDTHS = (1, 2, 4, 8)


def unpack_uint(raw: bytes, endianess=Endianess.LITTLE_ENDIAN) -> int:
    '''Interpret raw (1, 2, 4 or 8 bytes) as an unsigned integer.'''
    if len(raw) not in WIDTHS:
        raise ValueError(f'passed in {len(raw)} bytes, expected one of {WIDTHS}')

    bits = Bits(bytes(raw))

    if endianess == Endianess.BIG_ENDIAN:
        return bits.uintbe

    return bits.uintle


def _unpack_width(raw: bytes, width: int, endianess) -> int:
    if len(raw) != width:
        raise ValueError(f'passed in {len(raw)} bytes instead of {width}')

    return unpack_uint(raw, endianess=endianess)


def unpack_uint16(raw: bytes, endianess=Endianess.LITTLE_ENDIAN) -> int:
    return _unpack_width(raw, 2, endianess)


def unpack_uint32(raw: bytes, endianess=Endianess.LITTLE_ENDIAN) -> int:
    return _unpack_width(raw, 4, endianess)


def unpack_uint64(raw: bytes, endianess=Endianess.LITTLE_ENDIAN) -> int:
    return _unpack_width(raw, 8, endianess)
