'''
# Elf datatypes

The width and the byte order of most of the ELF fields are not fixed: they
depend on the EI_CLASS and EI_DATA bytes of the identification at the start
of the file, so each datatype asks its nearest ancestor that knows them.
'''
import logging
from typing import Tuple

from .. import fields
from ..exceptions import ElfStructException
from ..meta import Endianess
from ..properties import Dependency, get_instance_from_chunk
from .enum import (
    ElfEIClass,
    ElfEIData,
    ElfSectionType,
)


logger = logging.getLogger(__name__)


DEFAULT_DATA_FORMAT = (ElfEIClass.ELFCLASS32, ElfEIData.ELFDATA2LSB)


def data_format_of(instance) -> Tuple[ElfEIClass, ElfEIData]:
    '''Return the (class, data) couple of the nearest ancestor describing it.

    Records unpacked on their own, without an header above them, are
    considered 32 bits little endian.'''
    owner = get_instance_from_chunk(
        instance,
        condition=lambda x: hasattr(type(x), 'get_data_format'),
    )

    if owner is None:
        return DEFAULT_DATA_FORMAT

    return owner.get_data_format()


class Elf_DataType(fields.StructField):
    '''Wrapper for all the datatype that resolves internally to the EI_CLASS'''

    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'I',
        ElfEIClass.ELFCLASS64: 'I',
    }

    def __init__(self, **kwargs):
        super().__init__('I', **kwargs)

    def get_format(self):
        elf_class, _ = data_format_of(self)

        return self.MAP_CLASS_TYPE[elf_class]

    def get_endianess(self):
        _, elf_data = data_format_of(self)

        return Endianess.BIG_ENDIAN if elf_data == ElfEIData.ELFDATA2MSB else Endianess.LITTLE_ENDIAN


class Elf_Addr(Elf_DataType):
    '''Unsigned program address'''

    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'I',
        ElfEIClass.ELFCLASS64: 'Q',
    }


class Elf_Off(Elf_DataType):
    '''Unsigned file offset'''

    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'I',
        ElfEIClass.ELFCLASS64: 'Q',
    }


class Elf_Xword(Elf_DataType):
    '''Sizes and flags: a word for ELF32, a double word for ELF64'''

    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'I',
        ElfEIClass.ELFCLASS64: 'Q',
    }


class Elf_Word(Elf_DataType):
    pass


class Elf_Half(Elf_DataType):

    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'H',
        ElfEIClass.ELFCLASS64: 'H',
    }


class ELFSectionsField(fields.Field):
    '''Handles the data pointed by the entries of the section header table.

    Each payload is a copy of the bytes [sh_offset, sh_offset + sh_size)
    so that nothing keeps the original buffer alive.'''

    def __init__(self, header, *args, **kwargs):
        '''Use the header parameter to get the entries needed'''
        kwargs.setdefault('default', [])
        super().__init__(*args, **kwargs)
        if not isinstance(header, Dependency):
            raise ValueError('the header of ELFSectionsField MUST be a Dependency')
        self.header = header

    def value_from_default(self):
        return list(self.default)

    def __len__(self):
        return len(self.value)

    def __getitem__(self, item):
        return self.value[item]

    def _get_size(self):
        return sum(len(_) for _ in self.value)

    def unpack(self, stream):
        self.value = []  # reset the entries
        for index, field in enumerate(self.header.resolve(self)):
            self.value.append(self.unpack_section(stream, field, index))

    def unpack_section(self, stream, header, index) -> bytes:
        section_type = header.sh_type.value
        offset, size = int(header.sh_offset), int(header.sh_size)

        logger.debug('section %d of type %s at offset: %d size: %d', index, section_type, offset, size)

        # it occupies no space in the file
        if section_type == ElfSectionType.SHT_NOBITS:
            return b''

        try:
            return stream.read_at(offset, size)
        except ElfStructException as e:
            e.chain.append(str(index))
            raise
