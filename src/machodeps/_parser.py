"""
Entry points for inspecting a Mach-O file: detect the kind of
file and dispatch to the thin or universal binary parser.
"""

__all__ = ("parse_file", "parse_source")

import os
import pathlib
import typing

from ._bytesource import ByteSource
from ._errors import MachOError
from ._fat import parse_fat
from ._magic import byte_order, detect
from ._records import ArchitectureRecord, MachOFile
from ._thin import parse_thin


def parse_source(source: ByteSource) -> MachOFile:
    """
    Return the linker information for all architectures in *source*.

    Raises NotMachOError when *source* is not a Mach-O file and
    TruncatedInputError when a universal binary is too short for its
    header. Problems that affect a single architecture, including the
    only architecture of a thin file, end up in ``MachOFile.issues``.
    """
    kind = detect(source)

    records: typing.List[ArchitectureRecord]
    issues: typing.List[MachOError]

    if kind.is_fat:
        records, issues = parse_fat(source, kind)

    else:
        endian = byte_order(source.read_exact(0, 4))
        try:
            records, issues = [parse_thin(source, 0, kind, endian)], []
        except MachOError as exc:
            records, issues = [], [exc]

    return MachOFile(
        path=pathlib.Path(source.name),
        kind=kind,
        records=tuple(records),
        issues=tuple(issues),
    )


def parse_file(path: typing.Union[str, os.PathLike]) -> MachOFile:
    """
    Open *path* and return its linker information, see *parse_source*.

    Raises OSError when the file cannot be read.
    """
    with ByteSource.open(path) as source:
        return parse_source(source)
