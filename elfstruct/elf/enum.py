'''
This module contains the constant values used throught the ELF specification.

Note: use Enum for value that cannot ORed together, Flag for the others.
'''
from enum import Enum, Flag


ELF_MAGIC = 0x464c457f  # b'\x7fELF' read as little endian

ELF32_HEADER_SIZE = 0x34
ELF64_HEADER_SIZE = 0x40


class ElfEIClass(Enum):
    ELFCLASSNONE = 0
    ELFCLASS32   = 1
    ELFCLASS64   = 2


class ElfEIData(Enum):
    ELFDATANONE = 0
    ELFDATA2LSB = 1
    ELFDATA2MSB = 2


class ElfOsABI(Enum):
    ELFOSABI_NONE = 0
    ELFOSABI_HPUX = 1
    ELFOSABI_NETBSD = 2
    ELFOSABI_GNU = 3
    ELFOSABI_SOLARIS = 6
    ELFOSABI_AIX = 7
    ELFOSABI_IRIX = 8
    ELFOSABI_FREEBSD = 9
    ELFOSABI_TRU64 = 10
    ELFOSABI_MODESTO = 11
    ELFOSABI_OPENBSD = 12
    ELFOSABI_OPENVMS = 13
    ELFOSABI_NSK = 14
    ELFOSABI_AROS = 15
    ELFOSABI_FENIXOS = 16
    ELFOSABI_CLOUDABI = 17
    ELFOSABI_OPENVOS = 18
    ELFOSABI_ARM = 97
    ELFOSABI_STANDALONE = 255


class ElfType(Enum):
    ET_NONE = 0
    ET_REL  = 1
    ET_EXEC = 2
    ET_DYN  = 3
    ET_CORE = 4
    ET_LOOS = 0xfe00
    ET_HIOS = 0xfeff
    ET_LOPROC = 0xff00
    ET_HIPROC = 0xffff


class ElfMachine(Enum):
    EM_NONE  = 0
    EM_M32   = 1
    EM_SPARC = 2
    EM_386   = 3
    EM_68K   = 4
    EM_88K   = 5
    EM_IAMCU = 6
    EM_860   = 7
    EM_MIPS  = 8
    EM_S370  = 9
    EM_MIPS_RS3_LE = 10
    EM_PARISC = 15
    EM_VPP500 = 17
    EM_SPARC32PLUS = 18
    EM_960    = 19
    EM_PPC    = 20
    EM_PPC64  = 21
    EM_S390   = 22
    EM_SPU    = 23
    EM_V800   = 36
    EM_FR20   = 37
    EM_RH32   = 38
    EM_RCE    = 39
    EM_ARM    = 40
    EM_ALPHA  = 41
    EM_SH     = 42
    EM_SPARCV9 = 43
    EM_TRICORE = 44
    EM_ARC     = 45
    EM_H8_300  = 46
    EM_H8_300H = 47
    EM_H8S     = 48
    EM_H8_500  = 49
    EM_IA_64   = 50
    EM_MIPS_X  = 51
    EM_COLDFIRE = 52
    EM_68HC12  = 53
    EM_X86_64  = 62
    EM_AVR     = 83
    EM_XTENSA  = 94
    EM_MSP430  = 105
    EM_BLACKFIN = 106
    EM_ALTERA_NIOS2 = 113
    EM_AARCH64 = 183
    EM_AVR32   = 185
    EM_CUDA    = 190
    EM_AMDGPU  = 224
    EM_RISCV   = 243
    EM_BPF     = 247
    EM_LOONGARCH = 258


class ElfVersion(Enum):
    EV_NONE    = 0
    EV_CURRENT = 1


class ElfSectionIndex(Enum):
    SHN_UNDEF     = 0
    SHN_LORESERVE = 0xff00
    SHN_HIPROC    = 0xff1f
    SHN_ABS       = 0xfff1
    SHN_COMMON    = 0xfff2
    SHN_XINDEX    = 0xffff


class ElfSectionType(Enum):
    SHT_NULL     = 0
    SHT_PROGBITS = 1
    SHT_SYMTAB   = 2
    SHT_STRTAB   = 3
    SHT_RELA     = 4
    SHT_HASH     = 5
    SHT_DYNAMIC  = 6
    SHT_NOTE     = 7
    SHT_NOBITS   = 8
    SHT_REL      = 9
    SHT_SHLIB    = 10
    SHT_DYNSYM   = 11
    SHT_INIT_ARRAY = 14
    SHT_FINI_ARRAY = 15
    SHT_PREINIT_ARRAY = 16
    SHT_GROUP    = 17
    SHT_SYMTAB_SHNDX = 18
    SHT_LOOS     = 0x60000000
    SHT_GNU_ATTRIBUTES = 0x6ffffff5
    SHT_GNU_HASH = 0x6ffffff6
    SHT_GNU_LIBLIST = 0x6ffffff7
    SHT_GNU_verdef = 0x6ffffffd
    SHT_GNU_verneed = 0x6ffffffe
    SHT_GNU_versym = 0x6fffffff
    SHT_LOPROC   = 0x70000000
    SHT_ARM_EXIDX = 0x70000001
    SHT_ARM_ATTRIBUTES = 0x70000003
    SHT_HIPROC   = 0x7fffffff
    SHT_LOUSER   = 0x80000000
    SHT_HIUSER   = 0xffffffff


class ElfSectionFlag(Flag):
    SHF_WRITE     = 0x001
    SHF_ALLOC     = 0x002
    SHF_EXECINSTR = 0x004
    SHF_MERGE     = 0x010
    SHF_STRINGS   = 0x020
    SHF_INFO_LINK = 0x040
    SHF_LINK_ORDER = 0x080
    SHF_OS_NONCONFORMING = 0x100
    SHF_GROUP     = 0x200
    SHF_TLS       = 0x400
    SHF_COMPRESSED = 0x800


class ElfSegmentType(Enum):
    PT_NULL = 0
    PT_LOAD = 1
    PT_DYNAMIC = 2
    PT_INTERP  = 3
    PT_NOTE    = 4
    PT_SHLIB   = 5
    PT_PHDR    = 6
    PT_TLS     = 7
    PT_LOOS  = 0x60000000
    PT_SUNW_UNWIND = 0x6464e550
    # see <https://refspecs.linuxfoundation.org/LSB_4.0.0/LSB-Core-generic/LSB-Core-generic.html#PROGHEADER>
    PT_GNU_EH_FRAME = 0x6474e550
    PT_GNU_STACK = 0x6474e551
    PT_GNU_RELRO = 0x6474e552
    PT_GNU_PROPERTY = 0x6474e553
    PT_HIOS = 0x6fffffff
    PT_LOPROC  = 0x70000000
    PT_ARM_EXIDX = 0x70000001
    PT_HIPROC  = 0x7fffffff


class ElfSegmentFlag(Flag):
    PF_X = 0x01
    PF_W = 0x02
    PF_R = 0x04
