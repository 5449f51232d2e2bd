'''
# ELF format

Executable and Linkable Format is a file format vastly used in the *nix world;
here we are interested in its static description: the file header, the
program header table (segments) and the section header table together with
the data each section points to.

Reference to <http://www.sco.com/developers/devspecs/gabi41.pdf>, a more
complete one is at <http://www.sco.com/developers/gabi/latest/contents.html>.
'''
import logging
from typing import List, Tuple

from . import fields as elf_fields
from ..core import Chunk
from ..exceptions import TruncatedInput
from ..properties import Dependency
from .enum import (
    ELF_MAGIC,
    ELF32_HEADER_SIZE,
    ElfEIClass,
    ElfEIData,
    ElfOsABI,
    ElfType,
    ElfMachine,
    ElfVersion,
    ElfSectionType,
    ElfSegmentType,
)
from .. import fields


logger = logging.getLogger(__name__)


def _number(path):
    '''Read-only numeric view of the field at the given dotted path.'''
    def fget(self):
        field = self
        for component in path.split('.'):
            field = getattr(field, component)

        return int(field)

    return property(fget, doc=f'numeric value of {path}')


class ElfIdent(Chunk):
    '''The first sixteen bytes, they don't depend on class nor byte order.'''
    EI_MAG        = fields.StructField('I', default=ELF_MAGIC, is_magic=True)
    EI_CLASS      = fields.StructField('B', enum=ElfEIClass, default=ElfEIClass.ELFCLASS32)  # determines the architecture
    EI_DATA       = fields.StructField('B', enum=ElfEIData, default=ElfEIData.ELFDATA2LSB)  # determines the endianess of the binary data
    EI_VERSION    = fields.StructField('B', default=1)  # always 1
    EI_OSABI      = fields.StructField('B', enum=ElfOsABI, default=ElfOsABI.ELFOSABI_NONE)
    EI_ABIVERSION = fields.StructField('B')
    EI_PAD        = fields.StringField(7)


class ElfHeader(Chunk):
    e_ident     = ElfIdent()
    e_type      = elf_fields.Elf_Half(enum=ElfType, default=ElfType.ET_NONE)
    e_machine   = elf_fields.Elf_Half(enum=ElfMachine, default=ElfMachine.EM_NONE)
    e_version   = elf_fields.Elf_Word(enum=ElfVersion, default=ElfVersion.EV_CURRENT)
    e_entry     = elf_fields.Elf_Addr()
    e_phoff     = elf_fields.Elf_Off()
    e_shoff     = elf_fields.Elf_Off()
    e_flags     = elf_fields.Elf_Word()
    e_ehsize    = elf_fields.Elf_Half()
    e_phentsize = elf_fields.Elf_Half()
    e_phnum     = elf_fields.Elf_Half()
    e_shentsize = elf_fields.Elf_Half()
    e_shnum     = elf_fields.Elf_Half()
    e_shstrndx  = elf_fields.Elf_Half()

    magic_number = _number('e_ident.EI_MAG')
    version      = _number('e_ident.EI_VERSION')
    abi          = _number('e_ident.EI_OSABI')
    abi_version  = _number('e_ident.EI_ABIVERSION')
    elf_type     = _number('e_type')
    machine      = _number('e_machine')
    elf_version  = _number('e_version')
    entry_pc     = _number('e_entry')
    program_header_start = _number('e_phoff')
    section_header_start = _number('e_shoff')
    flags        = _number('e_flags')
    this_size    = _number('e_ehsize')
    program_header_entry_size  = _number('e_phentsize')
    program_header_entry_count = _number('e_phnum')
    section_header_entry_size  = _number('e_shentsize')
    section_header_entry_count = _number('e_shnum')
    shstrtab_index = _number('e_shstrndx')

    @property
    def padding(self) -> bytes:
        return self.e_ident.EI_PAD.value

    @property
    def is_64_bit(self) -> bool:
        return self.e_ident.EI_CLASS.value == ElfEIClass.ELFCLASS64

    @property
    def is_big_endian(self) -> bool:
        return self.e_ident.EI_DATA.value == ElfEIData.ELFDATA2MSB

    def get_data_format(self) -> Tuple[ElfEIClass, ElfEIData]:
        return (
            ElfEIClass.ELFCLASS64 if self.is_64_bit else ElfEIClass.ELFCLASS32,
            ElfEIData.ELFDATA2MSB if self.is_big_endian else ElfEIData.ELFDATA2LSB,
        )

    def is_valid(self) -> bool:
        return self.magic_number == ELF_MAGIC

    def unpack(self, stream):
        available = len(stream) - stream.tell()
        if available < ELF32_HEADER_SIZE:
            raise TruncatedInput(
                f'an ELF header needs at least 0x{ELF32_HEADER_SIZE:x} bytes, only 0x{available:x} available')

        super().unpack(stream)


class SectionHeader(Chunk):
    '''One entry of the section header table.

    The name is only an offset inside the section names string table:
    it's resolved afterwards, when all the sections are available.'''
    sh_name      = elf_fields.Elf_Word()
    sh_type      = elf_fields.Elf_Word(enum=ElfSectionType, default=ElfSectionType.SHT_NULL)
    sh_flags     = elf_fields.Elf_Xword()
    sh_addr      = elf_fields.Elf_Addr()
    sh_offset    = elf_fields.Elf_Off()
    sh_size      = elf_fields.Elf_Xword()
    sh_link      = elf_fields.Elf_Word()
    sh_info      = elf_fields.Elf_Word()
    sh_addralign = elf_fields.Elf_Xword()
    sh_entsize   = elf_fields.Elf_Xword()

    name_offset         = _number('sh_name')
    section_header_type = _number('sh_type')
    flags               = _number('sh_flags')
    addr                = _number('sh_addr')
    link                = _number('sh_link')
    info                = _number('sh_info')
    address_align       = _number('sh_addralign')
    entry_size          = _number('sh_entsize')


class ProgramHeader(Chunk):
    '''This entity represent runtime information of the executable.

    Note: the field "p_flags"'s position depends on the ELF class.
    '''
    p_type   = elf_fields.Elf_Word(enum=ElfSegmentType, default=ElfSegmentType.PT_NULL)
    p_offset = elf_fields.Elf_Off()
    p_vaddr  = elf_fields.Elf_Addr()
    p_paddr  = elf_fields.Elf_Addr()
    p_filesz = elf_fields.Elf_Xword()
    p_memsz  = elf_fields.Elf_Xword()
    p_flags  = elf_fields.Elf_Word()
    p_align  = elf_fields.Elf_Xword()

    ORDERING_64 = [
        'p_type',
        'p_flags',
        'p_offset',
        'p_vaddr',
        'p_paddr',
        'p_filesz',
        'p_memsz',
        'p_align',
    ]

    header_type      = _number('p_type')
    virtual_address  = _number('p_vaddr')
    physical_address = _number('p_paddr')
    file_image_size  = _number('p_filesz')
    memory_size      = _number('p_memsz')
    flags            = _number('p_flags')
    alignment        = _number('p_align')

    def get_ordered_fields_name(self) -> List[str]:
        elf_class, _ = elf_fields.data_format_of(self)
        if elf_class == ElfEIClass.ELFCLASS32:
            return super().get_ordered_fields_name()

        return self.ORDERING_64


class ElfSection(object):
    '''A section header together with its resolved name and a copy of its payload.'''

    def __init__(self, header: SectionHeader, name: str, payload: bytes):
        self._header = header
        self._name = name
        self._payload = bytes(payload)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._name!r}, offset=0x{self.offset:x}, size=0x{self.size:x})>'

    @property
    def header(self) -> SectionHeader:
        return self._header

    @property
    def name(self) -> str:
        return self._name

    @property
    def payload(self) -> bytes:
        return self._payload

    @property
    def type(self):
        return self._header.sh_type.value

    @property
    def offset(self) -> int:
        return int(self._header.sh_offset)

    @property
    def size(self) -> int:
        return int(self._header.sh_size)


class ElfFile(Chunk):
    elf_header = ElfHeader()
    programs   = fields.ArrayField(
        ProgramHeader,
        n=Dependency('elf_header.e_phnum'),
        offset=Dependency('elf_header.e_phoff'),
        stride=Dependency('elf_header.e_phentsize'),
    )
    sections   = fields.ArrayField(
        SectionHeader,
        n=Dependency('elf_header.e_shnum'),
        offset=Dependency('elf_header.e_shoff'),
        stride=Dependency('elf_header.e_shentsize'),
    )
    sections_data = elf_fields.ELFSectionsField(Dependency('.sections'))

    def get_data_format(self):
        return self.elf_header.get_data_format()


def decode_header(data, **kwargs) -> ElfHeader:
    '''Decode only the file header from the start of data.'''
    return ElfHeader(data, **kwargs)
