import struct

import pytest

from elfstruct.enum import Compliant
from elfstruct.exceptions import MalformedHeader, MalformedStringTable
from elfstruct.elf import ElfFile
from elfstruct.elf.strtab import (
    NULL_NAME,
    SectionStringTable,
    find_string_table_index,
    resolve_names,
)

from conftest import SECTIONS, SHT_NULL, SHT_PROGBITS, SHT_STRTAB


def _tables(data):
    elf = ElfFile(data)

    return elf.sections.value, elf.sections_data.value, elf.elf_header.shstrtab_index


def test_string_table():
    table = SectionStringTable(b'\x00.text\x00.data\x00')

    assert len(table) == 13
    assert table.get(0) == ''
    assert table.get(1) == '.text'
    assert table.get(7) == '.data'
    assert table.get(12) == ''
    # pointing in the middle of a string is legit
    assert table.get(3) == 'ext'

    assert table.strings == ['', '.text', '.data']


def test_string_table_out_of_range():
    table = SectionStringTable(b'\x00.text\x00.data\x00')

    with pytest.raises(MalformedStringTable) as e:
        table.get(13)

    assert e.value.name_offset == 13

    with pytest.raises(MalformedStringTable):
        SectionStringTable(b'').get(0)


def test_string_table_unterminated():
    table = SectionStringTable(b'\x00.text\x00.da')

    assert table.get(7) == '.da'
    assert table.strings == ['', '.text', '.da']


def test_string_table_invalid_text():
    table = SectionStringTable(b'\x00\xff\xfe\x00.ok\x00')

    with pytest.raises(MalformedStringTable) as e:
        table.get(1)

    assert e.value.name_offset == 1
    assert table.get(4) == '.ok'


def test_resolve_names(sample_elf):
    sections, errors = resolve_names(*_tables(sample_elf))

    assert errors == []
    assert [_.name for _ in sections] == [NULL_NAME, '.text', '.data', '.bss', '.shstrtab']
    assert sections[2].payload == b'\x01\x02\x03\x04\x05\x06'
    assert sections[2].offset == 0x78
    assert sections[2].size == 6


def test_resolve_names_bad_offset(make_elf):
    data = make_elf(
        names_table=False,
        sections=[
            dict(name_offset=0, type=SHT_NULL),
            dict(name_offset=0x100, type=SHT_PROGBITS, payload=b'ab'),
            dict(name_offset=1, type=SHT_STRTAB, payload=b'\x00.shstrtab\x00'),
        ],
        shstrndx=2,
    )

    sections, errors = resolve_names(*_tables(data))

    assert [_.name for _ in sections] == [NULL_NAME, NULL_NAME, '.shstrtab']
    # the section is there anyway
    assert sections[1].payload == b'ab'

    assert len(errors) == 1
    error = errors[0]
    assert isinstance(error, MalformedStringTable)
    assert error.index == 1
    assert error.name_offset == 0x100
    assert error.path == 'sections.1'

    with pytest.raises(MalformedStringTable):
        resolve_names(*_tables(data), compliant=Compliant.STRTAB)


def test_string_table_index(sample_elf):
    headers, payloads, index = _tables(sample_elf)

    assert find_string_table_index(headers, payloads, index) == 4


def test_string_table_index_undefined(make_elf):
    """Without an index in the header the string tables are looked for by type"""
    sections = [dict(name='.strtab', type=SHT_STRTAB, payload=b'\x00main\x00')] + SECTIONS
    data = make_elf(sections=sections)
    data = bytearray(data)
    struct.pack_into('<H', data, 0x32, 0)  # e_shstrndx

    headers, payloads, index = _tables(bytes(data))

    assert index == 0
    assert find_string_table_index(headers, payloads, index) == 5

    sections, errors = resolve_names(headers, payloads, index)

    assert errors == []
    assert [_.name for _ in sections] == [NULL_NAME, '.strtab', '.text', '.data', '.bss', '.shstrtab']


def test_string_table_index_extended(sample_elf):
    """SHN_XINDEX moves the index in the sh_link of the first section"""
    data = bytearray(sample_elf)
    shoff = struct.unpack_from('<I', data, 0x20)[0]
    struct.pack_into('<H', data, 0x32, 0xffff)  # e_shstrndx
    struct.pack_into('<I', data, shoff + 0x18, 4)  # sh_link of section 0

    headers, payloads, index = _tables(bytes(data))

    assert find_string_table_index(headers, payloads, index) == 4

    sections, _ = resolve_names(headers, payloads, index)

    assert [_.name for _ in sections] == [NULL_NAME, '.text', '.data', '.bss', '.shstrtab']


@pytest.mark.parametrize('shstrndx', [5, 0xff00, 0xfffe])
def test_string_table_index_out_of_range(sample_elf, shstrndx):
    data = bytearray(sample_elf)
    struct.pack_into('<H', data, 0x32, shstrndx)

    headers, payloads, index = _tables(bytes(data))

    with pytest.raises(MalformedHeader) as e:
        resolve_names(headers, payloads, index)

    assert e.value.path == 'elf_header.e_shstrndx'


def test_no_string_table(make_elf):
    data = make_elf(
        names_table=False,
        sections=[
            dict(name_offset=0, type=SHT_NULL),
            dict(name_offset=1, type=SHT_PROGBITS, payload=b'\x90\x90'),
        ],
        shstrndx=0,
    )

    headers, payloads, index = _tables(data)

    assert find_string_table_index(headers, payloads, index) is None

    sections, errors = resolve_names(headers, payloads, index)

    assert [_.name for _ in sections] == [NULL_NAME, NULL_NAME]
    assert errors == []


def test_resolve_names_empty():
    assert resolve_names([], [], 0) == ([], [])


def test_resolve_names_mismatch(sample_elf):
    headers, payloads, index = _tables(sample_elf)

    with pytest.raises(ValueError):
        resolve_names(headers, payloads[:-1], index)
