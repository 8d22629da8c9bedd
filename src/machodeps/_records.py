"""
Result types for Mach-O inspection.
"""

import dataclasses
import pathlib
import typing

from ._errors import MachOError
from ._magic import MagicKind

__all__ = ("ArchitectureRecord", "MachOFile", "FatArchEntry")


@dataclasses.dataclass(frozen=True)
class ArchitectureRecord:
    """
    Linker information for one architecture in a Mach-O file:

    - ``architecture``: Architecture name (``x86_64``, ``arm64``, ...);
    - ``install_name``: Install name of a shared library (LC_ID_DYLIB), or None;
    - ``dependencies``: Libraries loaded by this image, in load command order;
    - ``rpaths``: Runtime search path entries, in load command order;
    - ``issues``: Recoverable problems found while decoding the load commands.
    """

    architecture: str
    install_name: typing.Optional[str] = None
    dependencies: typing.Tuple[str, ...] = ()
    rpaths: typing.Tuple[str, ...] = ()
    issues: typing.Tuple[MachOError, ...] = ()


@dataclasses.dataclass(frozen=True)
class MachOFile:
    """
    All architectures found in a single file.

    ``issues`` contains the problems that caused architectures
    to be skipped, ``records`` the architectures that could be
    read, in the order they are stored in the file.
    """

    path: pathlib.Path
    kind: MagicKind
    records: typing.Tuple[ArchitectureRecord, ...] = ()
    issues: typing.Tuple[MachOError, ...] = ()

    @property
    def is_fat(self) -> bool:
        return self.kind.is_fat

    def architectures(self) -> typing.List[str]:
        """
        Return the names of the architectures in the file
        """
        return [record.architecture for record in self.records]


@dataclasses.dataclass(frozen=True)
class FatArchEntry:
    """
    An entry in the architecture table of a universal binary,
    with all fields converted to host values.
    """

    cputype: int
    cpusubtype: int
    offset: int
    size: int
