import io
import logging
from contextlib import contextmanager

from .exceptions import TruncatedInput


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around an in-memory buffer to uniform
    its properties: reads never go silently past the end and every
    position can be checked against the total length before jumping there.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        try:
            init_method = getattr(self, init_method_name)
        except AttributeError:
            raise ValueError('\'%s\' is the wrong kind of object to stream' % self._type.__name__)

        init_method()

        self.length = len(self.obj.getbuffer())

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __len__(self):
        return self.length

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    def getvalue(self) -> bytes:
        return self.obj.getvalue()

    def check_range(self, offset: int, size: int):
        '''Raise TruncatedInput if [offset, offset + size) is not inside the buffer.'''
        if offset < 0 or size < 0 or offset + size > self.length:
            raise TruncatedInput(
                f'range [0x{offset:x}, 0x{offset + size:x}) exceeds buffer of 0x{self.length:x} bytes')

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        # the end itself is a valid position, reading from there is not
        self.check_range(offset, 0)
        self.obj.seek(offset)

        return self

    def read(self, size: int) -> bytes:
        '''Read exactly size bytes or raise TruncatedInput.'''
        offset = self.obj.tell()
        self.check_range(offset, size)

        return self.obj.read(size)

    def read_at(self, offset: int, size: int) -> bytes:
        self.check_range(offset, size)
        with self.preserve_position():
            self.obj.seek(offset)
            return self.obj.read(size)

    def read_all(self):
        return self.obj.read()

    @contextmanager
    def preserve_position(self):
        position = self.obj.tell()
        try:
            yield self
        finally:
            self.obj.seek(position)
