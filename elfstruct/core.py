"""
Core module for the declarative description of a binary layout

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import ElfStructException
from .properties import get_root_from_chunk


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: the class
    attributes that are fields describe, in order, the layout of the
    chunk and unpack() is the one generic routine that reads them.

    A Chunk can contain sub-chunks.
    """

    def __init__(self, data=None, **kwargs):
        super().__init__(**kwargs)

        if data is not None:
            stream = data if isinstance(data, Stream) else Stream(data)
            self.logger.debug('unpacking \'%s\' from %d bytes', self.__class__.__name__, len(stream))
            self.unpack(stream)

    def init(self):
        # sub-fields are created on first access
        pass

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    @property
    def isRoot(self):
        return self.root is self

    def _get_size(self):
        '''the size MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        '''Map each field name to (offset, size), relative to the start of the chunk.'''
        result = {}
        offset = 0
        for name, field in self.get_fields():
            size = field.size
            result[name] = (offset, size)
            offset += size

        return result

    def unpack(self, stream):
        '''Read the fields in order from the stream.

        A field with an explicit offset is read from there, all the others
        follow the previous one. Any failure is re-raised with the name of
        the field appended to its chain.
        '''
        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s' % (self.__class__.__name__, field_name))

            try:
                offset = field.get_offset()
                if offset is not None:
                    field.seek(stream, offset)
                else:
                    offset = stream.tell()

                self.logger.debug('offset at %d' % offset)

                field.unpack(stream)
            except ElfStructException as e:
                e.chain.append(field_name)
                raise

            field.offset = offset
