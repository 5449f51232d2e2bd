"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from a stream.
"""
import logging
from enum import Enum

from .codec import unpack_uint
from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Dependency, resolve
from .exceptions import ElfStructException, MalformedHeader, MagicException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def get_dependencies(self):
        """Return the dictionary containing as key the attribute name"""
        instance_dict = self.__dict__
        return {_k: _v for _k, _v in instance_dict.items() if isinstance(_v, Dependency)}

    def get_offset(self):
        return resolve(self.offset, self)

    def is_compliant(self, level):
        '''Returns True if this field or one of its fathers asks for the given level'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def seek(self, stream, offset):
        '''Move the stream where this field starts.'''
        stream.seek(offset)

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: an unsigned integer of the width indicated by
    the format ('B', 'H', 'I' or 'Q', the same letters of the struct module).

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """
    SIZES = {
        'B': 1,
        'H': 2,
        'I': 4,
        'Q': 8,
    }

    def __init__(self, format, default=0, enum=None, is_magic=False, **kw):
        if format not in self.SIZES:
            raise ValueError(f'format \'{format}\' is not supported')
        self.format = format
        self.enum = enum
        self.is_magic = is_magic
        super().__init__(default=default, **kw)

    def __repr__(self):
        if isinstance(self.value, Enum):
            return f'<{self.__class__.__name__}({self.value!r})>'

        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def __str__(self):
        if isinstance(self.value, Enum):
            return self.value.name

        width = self.size * 2
        formatter = '0x%%0%dx' % width
        return formatter % (self.value,)

    def __int__(self):
        return self.value.value if isinstance(self.value, Enum) else self.value

    def value_from_default(self):
        if not self.enum or isinstance(self.default, self.enum):
            return super().value_from_default()

        return self._unpack_enum(self.default)

    def get_format(self):
        return self.format

    def get_endianess(self):
        return resolve(self.endianess, self)

    def _get_size(self):
        return self.SIZES[self.get_format()]

    def _unpack_enum(self, value: int):
        try:
            return self.enum(value)
        except ValueError:
            if self.is_compliant(Compliant.ENUM):
                raise MalformedHeader(f'{self.enum.__name__} has no element with value 0x{value:x}')

            self.logger.warning(f'enum {self.enum.__name__} doesn\'t have element with value 0x{value:x} in it')

        return value

    def _unpack(self, raw):
        value = unpack_uint(raw, endianess=self.get_endianess())
        if self.enum:
            value = self._unpack_enum(value)

        if self.is_magic and value != self.default:
            self.logger.warning('the magic doesn\'t correspond')
            if self.is_compliant(Compliant.MAGIC):
                raise MagicException(f'expected magic 0x{self.default:x}, found 0x{value:x}')

        return value

    def unpack(self, stream):
        self.value = self._unpack(stream.read(self.size))


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self._length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    @property
    def length(self):
        return resolve(self._length, self)

    def value_from_default(self):
        if self.default:
            return self.default

        # the length could depend on fields not yet unpacked
        return b'\x00' * self._length if isinstance(self._length, int) else b''

    def _get_size(self):
        return self.length

    def unpack(self, stream):
        self.value = stream.read(self.length)


class ArrayField(Field):
    '''Unpack an array of Chunks (or Fields).

    You indicate the number of elements via the parameter named "n", the position
    of the first one with "offset" and the distance between two consecutive
    elements with "stride"; all of them can be a Dependency.

    When the stride is not indicated the elements are contiguous; when it is
    larger than an element the bytes in between are skipped.
    '''

    def __init__(self, field_cls, n=0, stride=None, **kw):
        self.field_cls = field_cls
        if not isinstance(n, (Dependency, int)):
            raise ValueError('n is \'%s\' must be of the right type' % n.__class__.__name__)

        kw.setdefault('default', [])

        super().__init__(**kw)
        self._n = n
        self._stride = stride

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default)

    @property
    def n(self):
        return resolve(self._n, self)

    @property
    def stride(self):
        return resolve(self._stride, self)

    def _get_size(self):
        size = 0
        for element in self.value:
            size += element.size

        return size

    def seek(self, stream, offset):
        # unpack() places every element, an empty table is never read
        pass

    def instance_element(self):
        # pass the father so that we don't lose the hierarchy
        if isinstance(self.field_cls, type):
            return self.field_cls(father=self)

        return self.field_cls.create(father=self)

    def unpack(self, stream):
        n = self.n
        base = self.get_offset()
        if base is None:
            base = stream.tell()
        stride = self.stride

        self.logger.debug('unpacking %d elements of %s from 0x%x', n, self.name, base)

        self.value = []
        for index in range(n):
            element = self.instance_element()
            element_size = element.size

            if stride is None:
                stride = element_size

            if stride < element_size:
                raise MalformedHeader(
                    f'entry size {stride} is smaller than the {element_size} bytes of an entry')

            position = base + index * stride
            self.logger.debug('element %d at 0x%x', index, position)

            try:
                stream.check_range(position, stride)
                stream.seek(position)
                element.unpack(stream)
            except ElfStructException as e:
                e.chain.append(str(index))
                raise

            element.offset = position
            self.value.append(element)
