"""
Inspect the dynamic linking information of Mach-O files.
"""

__version__ = "1.0"

from ._errors import (
    MachOError,
    MalformedCommandError,
    NotMachOError,
    TruncatedCommandError,
    TruncatedInputError,
    UnresolvedArchitectureError,
)
from ._parser import parse_file, parse_source
from ._records import ArchitectureRecord, MachOFile

__all__ = (
    "ArchitectureRecord",
    "MachOFile",
    "MachOError",
    "MalformedCommandError",
    "NotMachOError",
    "TruncatedCommandError",
    "TruncatedInputError",
    "UnresolvedArchitectureError",
    "parse_file",
    "parse_source",
)
