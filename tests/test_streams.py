import pytest

from elfstruct.core import Chunk
from elfstruct.exceptions import TruncatedInput
from elfstruct.fields import StructField
from elfstruct.properties import Dependency
from elfstruct.streams import Stream


def test_stream():
    stream = Stream(b'\x00\x01\x02\x03')

    assert len(stream) == 4
    assert stream.read(2) == b'\x00\x01'
    assert stream.tell() == 2

    with pytest.raises(TruncatedInput):
        stream.read(3)

    with pytest.raises(ValueError):
        Stream('miao')


def test_stream_seek():
    stream = Stream(b'\x00\x01\x02\x03')

    # the end is a valid position but there is nothing to read
    stream.seek(4)
    assert stream.read(0) == b''
    with pytest.raises(TruncatedInput):
        stream.read(1)

    for offset in (5, -1, 2 ** 64):
        with pytest.raises(TruncatedInput):
            stream.seek(offset)

    with pytest.raises(ValueError):
        stream.seek('1')


def test_stream_read_at():
    stream = Stream(b'\x00\x01\x02\x03')
    stream.seek(1)

    assert stream.read_at(2, 2) == b'\x02\x03'
    assert stream.tell() == 1

    with pytest.raises(TruncatedInput):
        stream.read_at(3, 2)
    assert stream.tell() == 1


def test_chunk_field_beyond_the_end():
    class Dummy(Chunk):
        start = StructField('Q')
        data  = StructField('B', offset=Dependency('.start'))

    with pytest.raises(TruncatedInput) as e:
        Dummy(b'\xff' * 8)

    assert e.value.chain == ['data']
