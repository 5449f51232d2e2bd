#!/usr/bin/env python3
import sys
import os
import logging

from elfstruct import parse, ParseError
from elfstruct.elf.enum import ElfSectionFlag, ElfSegmentFlag


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print('usage: %s <elf file>' % progname)
    sys.exit(1)


SECTION_FLAG_LETTERS = {
    ElfSectionFlag.SHF_WRITE: 'W',
    ElfSectionFlag.SHF_ALLOC: 'A',
    ElfSectionFlag.SHF_EXECINSTR: 'X',
    ElfSectionFlag.SHF_MERGE: 'M',
    ElfSectionFlag.SHF_STRINGS: 'S',
    ElfSectionFlag.SHF_INFO_LINK: 'I',
    ElfSectionFlag.SHF_LINK_ORDER: 'L',
    ElfSectionFlag.SHF_OS_NONCONFORMING: 'O',
    ElfSectionFlag.SHF_GROUP: 'G',
    ElfSectionFlag.SHF_TLS: 'T',
    ElfSectionFlag.SHF_COMPRESSED: 'C',
}

SEGMENT_FLAG_LETTERS = {
    ElfSegmentFlag.PF_R: 'R',
    ElfSegmentFlag.PF_W: 'W',
    ElfSegmentFlag.PF_X: 'E',
}


def flags_to_str(letters, value):
    return ''.join(letter for flag, letter in letters.items() if flag.value & value)


def dump_header(hdr):
    magic = hdr.magic_number.to_bytes(4, 'little').hex()
    print(f'''ELF Header:
  Magic:                             {magic}
  Class:                             {hdr.e_ident.EI_CLASS}
  Data:                              {hdr.e_ident.EI_DATA}
  Version:                           {hdr.version}
  OS/ABI:                            {hdr.e_ident.EI_OSABI}
  ABI Version:                       {hdr.abi_version}
  Type:                              {hdr.e_type}
  Machine:                           {hdr.e_machine}
  Version:                           0x{hdr.elf_version:x}
  Entry point address:               0x{hdr.entry_pc:x}
  Start of program headers:          {hdr.program_header_start} (bytes into file)
  Start of section headers:          {hdr.section_header_start} (bytes into file)
  Flags:                             0x{hdr.flags:x}
  Size of this header:               {hdr.this_size} (bytes)
  Size of program headers:           {hdr.program_header_entry_size} (bytes)
  Number of program headers:         {hdr.program_header_entry_count}
  Size of section headers:           {hdr.section_header_entry_size} (bytes)
  Number of section headers:         {hdr.section_header_entry_count}
  Section header string table index: {hdr.shstrtab_index}''')


def dump_segments(programs):
    print('''Program Headers:
  Type               Offset     VirtAddr   PhysAddr   FileSiz    MemSiz     Flg Align''')
    for segment in programs:
        print(f'''  {str(segment.p_type):<18} 0x{int(segment.p_offset):08x} 0x{segment.virtual_address:08x} 0x{segment.physical_address:08x} 0x{segment.file_image_size:08x} 0x{segment.memory_size:08x} {flags_to_str(SEGMENT_FLAG_LETTERS, segment.flags):<3} 0x{segment.alignment:x}''')


def dump_sections(sections):
    print('''Section Headers:
  [Nr] Name                 Type               Address    Off      Size     ES Flg Lk Inf Al''')
    for idx, section in enumerate(sections):
        sh = section.header
        print(f'''  [{idx: >2d}] {section.name:<20} {str(sh.sh_type):<18} {sh.addr:08x}   {section.offset:06x}   {section.size:06x}   {sh.entry_size:02x} {flags_to_str(SECTION_FLAG_LETTERS, sh.flags):>3} {sh.link:2d} {sh.info:3d} {sh.address_align:2d}''')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]

    with open(path, 'rb') as f:
        data = f.read()

    try:
        elf = parse(data)
    except ParseError as e:
        logger.error(f'failed to parse \'{path}\': {e}')
        sys.exit(1)

    print(f'good elf magic number: {elf.is_valid()}')

    dump_header(elf.header())

    if elf.programs():
        dump_segments(elf.programs())

    if elf.sections():
        dump_sections(elf.sections())

    for error in elf.errors:
        logger.warning(f'section name not resolved: {error}')

    print(elf.summarize(), end='')
