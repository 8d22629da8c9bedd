"""
Parser for universal ("fat") binaries: a header, a table of
architectures and a thin Mach-O image per architecture.

The fat header and the architecture table are always stored
in big-endian byte order, independent of the magic variant.
"""

__all__ = ("read_fat_header", "read_fat_arch", "parse_fat")

import typing

from macholib.mach_o import fat_arch, fat_arch64, fat_header
from macholib.ptypes import sizeof

from ._archinfo import describe_cputype, resolve
from ._bytesource import ByteSource
from ._errors import (
    MachOError,
    NotMachOError,
    TruncatedInputError,
    UnresolvedArchitectureError,
)
from ._magic import MagicKind, byte_order, detect
from ._records import ArchitectureRecord, FatArchEntry
from ._thin import parse_thin

_ARCH_TYPES = {
    MagicKind.FAT32: fat_arch,
    MagicKind.FAT64: fat_arch64,
}


def read_fat_header(source: ByteSource) -> int:
    """
    Return the number of architectures in the universal binary
    """
    header = fat_header.from_str(
        source.read_exact(0, sizeof(fat_header)), _endian_=">"
    )
    return int(header.nfat_arch)


def read_fat_arch(source: ByteSource, kind: MagicKind, index: int) -> FatArchEntry:
    """
    Return entry *index* of the architecture table, *kind* selects
    between the 32-bit and 64-bit table layout.
    """
    arch_type = _ARCH_TYPES[kind]
    record_size = sizeof(arch_type)
    offset = sizeof(fat_header) + index * record_size

    try:
        data = source.read_exact(offset, record_size)
    except TruncatedInputError:
        raise TruncatedInputError(
            f"{source.name}: entry {index} of the architecture table "
            "extends beyond the end of the file"
        ) from None

    entry = arch_type.from_str(data, _endian_=">")
    return FatArchEntry(
        cputype=int(entry.cputype),
        cpusubtype=int(entry.cpusubtype),
        offset=int(entry.offset),
        size=int(entry.size),
    )


def _parse_slice(
    source: ByteSource, index: int, entry: FatArchEntry, architecture: str
) -> ArchitectureRecord:
    if entry.offset + entry.size > source.size:
        raise TruncatedInputError(
            f"{source.name}: architecture {index} (offset {entry.offset:#x}, "
            f"size {entry.size:#x}) extends beyond the end of the file"
        )

    kind = detect(source, entry.offset)
    if not kind.is_thin:
        raise NotMachOError(
            f"{source.name}: architecture {index} at offset {entry.offset:#x} "
            f"is not a thin Mach-O image ({kind.value})"
        )

    endian = byte_order(source.read_exact(entry.offset, 4))
    return parse_thin(source, entry.offset, kind, endian, architecture=architecture)


def parse_fat(
    source: ByteSource, kind: MagicKind
) -> typing.Tuple[typing.List[ArchitectureRecord], typing.List[MachOError]]:
    """
    Parse all architectures in a universal binary.

    Returns (records, issues): the records for the architectures that
    could be parsed in table order, and the problems for the ones that
    were skipped. A problem with one architecture does not affect the
    others. Architecture names come from the table entries, not
    from the headers of the slices.

    Raises TruncatedInputError when the file is too short for the
    fat header itself.
    """
    records: typing.List[ArchitectureRecord] = []
    issues: typing.List[MachOError] = []

    for index in range(read_fat_header(source)):
        try:
            entry = read_fat_arch(source, kind, index)
        except TruncatedInputError as exc:
            # Later entries are even further beyond the end of the file.
            issues.append(exc)
            break

        architecture = resolve(entry.cputype, entry.cpusubtype)
        if architecture is None:
            issues.append(
                UnresolvedArchitectureError(
                    entry.cputype,
                    entry.cpusubtype,
                    f"{source.name}: architecture {index} has unknown type "
                    f"{describe_cputype(entry.cputype)} "
                    f"(subtype {entry.cpusubtype & 0xFFFFFFFF:#x})",
                )
            )
            continue

        try:
            records.append(_parse_slice(source, index, entry, architecture))
        except MachOError as exc:
            issues.append(exc)

    return records, issues
