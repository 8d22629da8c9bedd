"""
Parser for a single architecture ("thin") Mach-O image, either
a complete file or a slice of a universal binary.
"""

__all__ = ("parse_thin",)

import typing

from macholib.mach_o import mach_header, mach_header_64
from macholib.ptypes import sizeof

from ._archinfo import describe_cputype, resolve
from ._bytesource import ByteSource
from ._errors import UnresolvedArchitectureError
from ._loadcommands import decode_load_commands
from ._magic import MagicKind
from ._records import ArchitectureRecord

_HEADER_TYPES = {
    MagicKind.THIN32: mach_header,
    MagicKind.THIN64: mach_header_64,
}


def parse_thin(
    source: ByteSource,
    offset: int,
    kind: MagicKind,
    endian: str,
    architecture: typing.Optional[str] = None,
) -> ArchitectureRecord:
    """
    Parse the Mach-O header at *offset* in *source* and the load
    commands following it.

    *kind* selects the 32-bit or 64-bit header layout and *endian*
    is the byte order of the image. When *architecture* is given it
    is used as the name of the image, as for slices of a universal
    binary where the architecture table is authoritative.

    Raises UnresolvedArchitectureError for an unknown cputype when
    *architecture* is not given, and TruncatedInputError when the
    header or load commands extend beyond the end of the file.
    """
    header_type = _HEADER_TYPES[kind]
    header_size = sizeof(header_type)

    header = header_type.from_str(
        source.read_exact(offset, header_size), _endian_=endian
    )
    cputype = int(header.cputype)
    cpusubtype = int(header.cpusubtype)

    if architecture is None:
        architecture = resolve(cputype, cpusubtype)
        if architecture is None:
            raise UnresolvedArchitectureError(
                cputype,
                cpusubtype,
                f"{source.name}: unknown architecture {describe_cputype(cputype)} "
                f"(subtype {cpusubtype & 0xFFFFFFFF:#x}) at offset {offset:#x}",
            )

    commands = source.read_exact(offset + header_size, int(header.sizeofcmds))
    info = decode_load_commands(commands, int(header.ncmds), endian)

    return ArchitectureRecord(
        architecture=architecture,
        install_name=info.install_name,
        dependencies=tuple(info.dependencies),
        rpaths=tuple(info.rpaths),
        issues=tuple(info.issues),
    )
