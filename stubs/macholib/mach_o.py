import typing

CPU_TYPE_NAMES: dict[int, str]
LC_NAMES: dict[int, str]

MH_MAGIC = 0xFEEDFACE
MH_CIGAM = 0xCEFAEDFE
MH_MAGIC_64 = 0xFEEDFACF
MH_CIGAM_64 = 0xCFFAEDFE
FAT_MAGIC = 0xCAFEBABE
FAT_MAGIC_64 = 0xCAFEBABF

LC_LOAD_DYLIB = 0xC
LC_ID_DYLIB = 0xD
LC_LOAD_WEAK_DYLIB = 0x18 | 0x80000000
LC_RPATH = 0x1C | 0x80000000

_S = typing.TypeVar("_S")


class _Structure:
    @classmethod
    def from_str(cls: typing.Type[_S], s: bytes, **kw: typing.Any) -> _S: ...


class mach_header(_Structure):
    magic: int
    cputype: int
    cpusubtype: int
    filetype: int
    ncmds: int
    sizeofcmds: int
    flags: int


class mach_header_64(mach_header):
    reserved: int


class fat_header(_Structure):
    magic: int
    nfat_arch: int


class fat_arch(_Structure):
    cputype: int
    cpusubtype: int
    offset: int
    size: int
    align: int


class fat_arch64(fat_arch):
    reserved: int


class load_command(_Structure):
    cmd: int
    cmdsize: int


class dylib_command(_Structure):
    name: int
    timestamp: int
    current_version: int
    compatibility_version: int


class rpath_command(_Structure):
    path: int
