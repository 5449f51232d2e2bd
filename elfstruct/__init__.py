"""
# ELF files for humans.

A binary format is described declaratively: a Chunk lists, in order, the
fields that compose it and each field knows how many bytes it takes and how
to interpret them. One generic routine, Chunk.unpack(), walks the fields and
reads them from a stream, so that the offsets of the on-disk layout are never
written by hand.

Fields can depend on other fields via Dependency(): the number of entries of
a table, its position and the distance between two entries all come from the
ELF header, for example.

The main entry point is

    from elfstruct import parse

    document = parse(data)

that returns an ElfDocument with the file header, the program headers and
the sections with their names and payloads. Structural problems (not enough
bytes, inconsistent header) raise a ParseError; the content ones (wrong
magic, unresolvable names) are reported but not fatal unless asked via the
Compliant flags.
"""
from .enum import Compliant
from .exceptions import (
    ElfStructException,
    ParseError,
    TruncatedInput,
    MalformedHeader,
    MalformedStringTable,
    MagicException,
)
from .elf.document import ElfDocument, parse
