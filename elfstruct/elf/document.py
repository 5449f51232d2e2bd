'''
The parsed ELF file as handed to the callers.

    document = parse(data)
    if document.is_valid():
        print(document.summarize())

A document is built once and it's not modified afterwards: all the section
names are resolved before parse() returns.
'''
import logging
from typing import List

from ..enum import Compliant
from ..exceptions import MalformedStringTable
from ..streams import Stream
from . import ElfFile, ElfHeader, ElfSection, ProgramHeader
from .strtab import SectionStringTable, find_string_table_index, resolve_names


logger = logging.getLogger(__name__)


class ElfDocument(object):

    def __init__(self, elf_file: ElfFile, sections: List[ElfSection], errors: List[MalformedStringTable], data: bytes):
        self._elf = elf_file
        self._sections = list(sections)
        self._errors = list(errors)
        self._data = data

    @classmethod
    def from_bytes(cls, data, compliant=Compliant.NONE) -> 'ElfDocument':
        return parse(data, compliant=compliant)

    def __repr__(self):
        return '<%s(programs=%d, sections=%r)>' % (
            self.__class__.__name__, len(self.programs()), self.section_names)

    @property
    def data(self) -> bytes:
        '''The buffer the document was parsed from.'''
        return self._data

    @property
    def errors(self) -> List[MalformedStringTable]:
        '''The section names that were replaced by a placeholder.'''
        return list(self._errors)

    def header(self) -> ElfHeader:
        return self._elf.elf_header

    def is_valid(self) -> bool:
        return self.header().is_valid()

    def programs(self) -> List[ProgramHeader]:
        return list(self._elf.programs.value)

    def sections(self) -> List[ElfSection]:
        return list(self._sections)

    @property
    def section_names(self) -> List[str]:
        return [_.name for _ in self._sections]

    @property
    def section_names_table(self) -> SectionStringTable:
        '''return the string table with the names of the sections'''
        index = find_string_table_index(
            [_.header for _ in self._sections],
            [_.payload for _ in self._sections],
            self.header().shstrtab_index,
        )

        return SectionStringTable(self._sections[index].payload) if index is not None else None

    def get_section_by_name(self, name: str) -> ElfSection:
        index = self.section_names.index(name)

        return self._sections[index]

    def summarize(self) -> str:
        lines = ['Programs: %d' % len(self._elf.programs)]
        lines.extend(self.section_names)

        return ''.join(f'{_}\n' for _ in lines)


def parse(data, compliant=Compliant.NONE) -> ElfDocument:
    '''Decode data, failing with a ParseError when the structure cannot be read.

    The compliant flags decide which defects of the content are fatal: by
    default an invalid magic is only reported by is_valid() and unresolvable
    section names become "NULL".'''
    stream = Stream(data)

    logger.debug('parsing %d bytes', len(stream))

    elf = ElfFile(stream, compliant=compliant)

    if not elf.elf_header.is_valid():
        logger.warning('magic 0x%08x is not the ELF one', elf.elf_header.magic_number)

    sections, errors = resolve_names(
        elf.sections.value,
        elf.sections_data.value,
        elf.elf_header.shstrtab_index,
        compliant=compliant,
    )

    return ElfDocument(elf, sections, errors, stream.getvalue())
