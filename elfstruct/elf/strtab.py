'''
Section names.

There are three string tables identified by their section name

    1. ".shstrtab" for section names (this is actually indicated by the e_shstrndx header field)
    2. ".strtab" names associated with the symbol table entries
    3. ".dynstr" names associated with dynamic linking

only the first one is of interest here. Since the string table is itself
one of the sections to be named, names are resolved in a second pass, once
all the section headers and their payloads are available.
'''
import logging
from typing import List, Optional, Sequence, Tuple

from ..enum import Compliant
from ..exceptions import MalformedHeader, MalformedStringTable
from . import ElfSection, SectionHeader
from .enum import ElfSectionIndex, ElfSectionType


logger = logging.getLogger(__name__)


NULL_NAME = 'NULL'


class SectionStringTable(object):
    '''A concatenation of NUL terminated strings addressed by byte offset.'''

    def __init__(self, contents: bytes):
        self._contents = bytes(contents)

    def __len__(self):
        return len(self._contents)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.strings!r})>'

    def get(self, index: int) -> str:
        '''return the string pointed at index'''
        if index >= len(self._contents):
            raise MalformedStringTable(
                f'offset 0x{index:x} is outside the string table of 0x{len(self._contents):x} bytes',
                name_offset=index,
            )

        end = self._contents.find(b'\x00', index)
        if end < 0:  # the last string is not terminated
            end = len(self._contents)

        try:
            return self._contents[index:end].decode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedStringTable(f'string at offset 0x{index:x} is not valid text: {e}', name_offset=index)

    @property
    def strings(self) -> List[str]:
        '''All the strings, in order, the first one usually is the empty one.'''
        strings = self._contents.split(b'\x00')

        # a terminated table leaves an empty element after the last NUL
        if strings and strings[-1] == b'':
            strings = strings[:-1]

        return [_.decode('utf-8', errors='replace') for _ in strings]


def _scan_string_table(headers: Sequence[SectionHeader], payloads: Sequence[bytes]) -> Optional[int]:
    '''Look for the section names table by type: prefer the one naming itself ".shstrtab".'''
    candidates = [
        index for index, header in enumerate(headers)
        if header.sh_type.value == ElfSectionType.SHT_STRTAB
    ]

    for index in candidates:
        try:
            if SectionStringTable(payloads[index]).get(headers[index].name_offset) == '.shstrtab':
                return index
        except MalformedStringTable:
            continue

    return candidates[0] if candidates else None


def find_string_table_index(headers: Sequence[SectionHeader], payloads: Sequence[bytes], shstrtab_index: int) -> Optional[int]:
    '''Return the index of the section containing the section names, None if there is none.'''
    count = len(headers)

    if shstrtab_index == ElfSectionIndex.SHN_XINDEX.value:
        # the real index doesn't fit in the header and lives in the first entry
        if count == 0:
            raise MalformedHeader('e_shstrndx is SHN_XINDEX but there are no sections', chain=['e_shstrndx', 'elf_header'])
        shstrtab_index = headers[0].link
        logger.debug('e_shstrndx is SHN_XINDEX, using sh_link of section 0: %d', shstrtab_index)

    if shstrtab_index == ElfSectionIndex.SHN_UNDEF.value:
        index = _scan_string_table(headers, payloads)
        logger.debug('no string table index in the header, found by type: %s', index)
        return index

    if shstrtab_index >= count:
        raise MalformedHeader(
            f'string table index {shstrtab_index} is out of range for {count} sections', chain=['e_shstrndx', 'elf_header'])

    return shstrtab_index


def resolve_names(headers: Sequence[SectionHeader], payloads: Sequence[bytes], shstrtab_index: int,
                  compliant=Compliant.NONE) -> Tuple[List[ElfSection], List[MalformedStringTable]]:
    '''Build the named sections from the headers and their payloads.

    A name that cannot be resolved is replaced by NULL_NAME and the error is
    returned alongside the sections, unless compliant asks for Compliant.STRTAB
    in which case it's raised.'''
    if len(headers) != len(payloads):
        raise ValueError(f'{len(headers)} headers but {len(payloads)} payloads')

    if not headers:
        return [], []

    index_table = find_string_table_index(headers, payloads, shstrtab_index)
    string_table = SectionStringTable(payloads[index_table]) if index_table is not None else None

    sections = []
    errors = []

    for index, (header, payload) in enumerate(zip(headers, payloads)):
        name = NULL_NAME

        if string_table is not None:
            try:
                name = string_table.get(header.name_offset) or NULL_NAME
            except MalformedStringTable as e:
                e.index = index
                e.chain.extend([str(index), 'sections'])
                if compliant & Compliant.STRTAB:
                    raise

                logger.warning('unable to resolve the name of section %d: %s', index, e.message)
                errors.append(e)

        sections.append(ElfSection(header, name, payload))

    return sections, errors
