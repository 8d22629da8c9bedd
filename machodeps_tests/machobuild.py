"""
Helpers for synthesizing Mach-O images and universal binaries
in memory.
"""

import struct
import typing

MH_MAGIC = 0xFEEDFACE
MH_MAGIC_64 = 0xFEEDFACF
FAT_MAGIC = 0xCAFEBABE
FAT_MAGIC_64 = 0xCAFEBABF

LC_REQ_DYLD = 0x80000000
LC_LOAD_DYLIB = 0xC
LC_ID_DYLIB = 0xD
LC_LOAD_WEAK_DYLIB = 0x18 | LC_REQ_DYLD
LC_UUID = 0x1B
LC_RPATH = 0x1C | LC_REQ_DYLD

CPU_TYPE_I386 = 7
CPU_TYPE_X86_64 = 0x01000007
CPU_TYPE_ARM64 = 0x0100000C
CPU_TYPE_POWERPC = 18
CPU_SUBTYPE_X86_ALL = 3
CPU_SUBTYPE_ARM64_ALL = 0
CPU_SUBTYPE_ARM64E = 2

MH_EXECUTE = 0x2
MH_DYLIB = 0x6


def _pad(data: bytes, alignment: int) -> bytes:
    if len(data) % alignment:
        data += b"\0" * (alignment - len(data) % alignment)
    return data


def raw_command(cmd: int, payload: bytes = b"", endian: str = "<", cmdsize=None):
    """
    A load command with an arbitrary payload, *cmdsize* overrides
    the size stored in the command header.
    """
    if cmdsize is None:
        cmdsize = 8 + len(payload)
    return struct.pack(endian + "II", cmd, cmdsize) + payload


def dylib_command(
    cmd: int, name: str, endian: str = "<", alignment: int = 8, name_offset=None
) -> bytes:
    """
    LC_LOAD_DYLIB, LC_LOAD_WEAK_DYLIB or LC_ID_DYLIB referring to *name*
    """
    body = _pad(
        struct.pack(endian + "IIII", 0, 0, 0, 0) + name.encode() + b"\0",
        alignment,
    )
    if name_offset is None:
        name_offset = 24
    body = struct.pack(endian + "IIII", name_offset, 2, 0x10000, 0x10000) + body[16:]
    return raw_command(cmd, body, endian)


def rpath_command(
    path: str, endian: str = "<", alignment: int = 8, path_offset=None
) -> bytes:
    body = _pad(struct.pack(endian + "I", 0) + path.encode() + b"\0", alignment)
    if path_offset is None:
        path_offset = 12
    body = struct.pack(endian + "I", path_offset) + body[4:]
    return raw_command(LC_RPATH, body, endian)


def uuid_command(endian: str = "<") -> bytes:
    return raw_command(LC_UUID, bytes(range(16)), endian)


def thin_image(
    commands: typing.Sequence[bytes],
    cputype: int = CPU_TYPE_X86_64,
    cpusubtype: int = CPU_SUBTYPE_X86_ALL,
    is_64: bool = True,
    endian: str = "<",
    filetype: int = MH_DYLIB,
    ncmds=None,
    sizeofcmds=None,
) -> bytes:
    """
    A thin Mach-O image with the given load commands. *ncmds* and
    *sizeofcmds* override the values that are calculated from *commands*.
    """
    data = b"".join(commands)
    if ncmds is None:
        ncmds = len(commands)
    if sizeofcmds is None:
        sizeofcmds = len(data)

    if is_64:
        header = struct.pack(
            endian + "IiiIIIII",
            MH_MAGIC_64,
            cputype,
            cpusubtype,
            filetype,
            ncmds,
            sizeofcmds,
            0,
            0,
        )
    else:
        header = struct.pack(
            endian + "IiiIIII",
            MH_MAGIC,
            cputype,
            cpusubtype,
            filetype,
            ncmds,
            sizeofcmds,
            0,
        )
    return header + data


def fat_binary(
    slices: typing.Sequence[typing.Tuple[int, int, bytes]],
    is_64: bool = False,
    swapped_magic: bool = False,
    alignment: int = 16,
) -> bytes:
    """
    A universal binary containing *slices*, a sequence of
    (cputype, cpusubtype, image). The header and architecture
    table are big-endian, *swapped_magic* only affects how the
    magic number is stored.
    """
    magic = FAT_MAGIC_64 if is_64 else FAT_MAGIC
    header = struct.pack("<I" if swapped_magic else ">I", magic)
    header += struct.pack(">I", len(slices))

    record_size = 32 if is_64 else 20
    offset = len(header) + record_size * len(slices)
    offset += -offset % alignment

    table = b""
    body = b""
    for cputype, cpusubtype, image in slices:
        if is_64:
            table += struct.pack(
                ">iiQQII", cputype, cpusubtype, offset, len(image), 4, 0
            )
        else:
            table += struct.pack(">iiIII", cputype, cpusubtype, offset, len(image), 4)
        padded = _pad(image, alignment)
        body += padded
        offset += len(padded)

    data = header + table
    data += b"\0" * (-len(data) % alignment)
    return data + body
