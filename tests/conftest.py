import struct

import pytest


ELFCLASS32 = 1
ELFCLASS64 = 2
ELFDATA2LSB = 1
ELFDATA2MSB = 2

SHT_NULL = 0
SHT_PROGBITS = 1
SHT_STRTAB = 3
SHT_NOBITS = 8


def _pad(raw, size):
    return raw + b'\x00' * (size - len(raw)) if size > len(raw) else raw


def _pack_program(order, is_64, program):
    p_type, p_offset, p_vaddr, p_paddr, p_filesz, p_memsz, p_flags, p_align = program
    if is_64:
        return struct.pack(order + 'IIQQQQQQ',
                           p_type, p_flags, p_offset, p_vaddr, p_paddr, p_filesz, p_memsz, p_align)

    return struct.pack(order + '8I', *program)


def _pack_section(order, is_64, entry, offset, size):
    values = (
        entry['name_offset'],
        entry['type'],
        entry.get('flags', 0),
        entry.get('addr', 0),
        offset,
        size,
        entry.get('link', 0),
        entry.get('info', 0),
        entry.get('align', 1),
        entry.get('entsize', 0),
    )
    return struct.pack(order + ('IIQQQQIIQQ' if is_64 else '10I'), *values)


def build_elf(programs=(), sections=(), elf_class=ELFCLASS32, elf_data=ELFDATA2LSB,
              e_type=2, machine=3, entry=0x8048000, flags=0, shstrndx=None,
              names_table=True, phentsize=None, shentsize=None, magic=b'\x7fELF'):
    '''Build an ELF image laid out as header, program headers, payloads, section headers.

    With names_table a SHT_NULL section is prepended, a ".shstrtab" is appended
    and the name offsets are computed from the 'name' of each section;
    otherwise each section carries its own 'name_offset'.

    A SHT_NOBITS payload can be an integer: its size, without any byte in the file.'''
    is_64 = elf_class == ELFCLASS64
    order = '>' if elf_data == ELFDATA2MSB else '<'
    ehsize = 0x40 if is_64 else 0x34
    phentsize = phentsize or (56 if is_64 else 32)
    shentsize = shentsize or (64 if is_64 else 40)

    entries = [dict(_) for _ in sections]
    if names_table:
        names = b'\x00'
        for entry_ in entries:
            entry_['name_offset'] = len(names)
            names += entry_['name'].encode() + b'\x00'
        shstrtab_name = len(names)
        names += b'.shstrtab\x00'

        entries = (
            [dict(name_offset=0, type=SHT_NULL, payload=b'')] +
            entries +
            [dict(name_offset=shstrtab_name, type=SHT_STRTAB, payload=names)]
        )
        if shstrndx is None:
            shstrndx = len(entries) - 1

    phoff = ehsize if programs else 0
    body_offset = ehsize + len(programs) * phentsize
    body = b''
    raw_sections = b''

    for entry_ in entries:
        payload = entry_.get('payload', b'')
        if entry_['type'] == SHT_NULL:
            offset, size = 0, 0
        elif isinstance(payload, int):
            offset, size = body_offset + len(body), payload
        else:
            offset, size = body_offset + len(body), len(payload)
            body += payload

        raw_sections += _pad(_pack_section(order, is_64, entry_, offset, size), shentsize)

    shoff = body_offset + len(body) if entries else 0

    ident = magic + bytes([elf_class, elf_data, 1, 0, 0]) + b'\x00' * 7
    header = struct.pack(
        order + ('16sHHIQQQIHHHHHH' if is_64 else '16sHHIIIIIHHHHHH'),
        ident, e_type, machine, 1, entry, phoff, shoff, flags,
        ehsize, phentsize, len(programs), shentsize, len(entries), shstrndx or 0,
    )
    raw_programs = b''.join(_pad(_pack_program(order, is_64, _), phentsize) for _ in programs)

    return header + raw_programs + body + raw_sections


PROGRAMS = [
    (1, 0x0000, 0x08048000, 0x08048000, 0x0200, 0x0200, 0x5, 0x1000),
    (1, 0x1000, 0x08049000, 0x08049000, 0x0100, 0x0300, 0x6, 0x1000),
]

SECTIONS = [
    dict(name='.text', type=SHT_PROGBITS, payload=b'\x55\x89\xe5\xc3', addr=0x08048100, flags=0x6),
    dict(name='.data', type=SHT_PROGBITS, payload=b'\x01\x02\x03\x04\x05\x06', addr=0x08049000, flags=0x3),
    dict(name='.bss', type=SHT_NOBITS, payload=0x1000, addr=0x08049006, flags=0x3),
]


@pytest.fixture
def make_elf():
    return build_elf


@pytest.fixture
def sample_elf():
    '''A 32 bits little endian executable with two segments and five sections.'''
    return build_elf(programs=PROGRAMS, sections=SECTIONS)
