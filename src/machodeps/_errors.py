"""
Exceptions raised while inspecting Mach-O files.

Problems that only affect part of a file (a single slice in a
universal binary, a single load command) are not raised to the
caller but are collected on the result objects, see
``ArchitectureRecord.issues`` and ``MachOFile.issues``.
"""

__all__ = (
    "MachOError",
    "NotMachOError",
    "TruncatedInputError",
    "UnresolvedArchitectureError",
    "TruncatedCommandError",
    "MalformedCommandError",
)


class MachOError(Exception):
    """
    Base class for problems with the contents of a Mach-O file.
    """

    pass


class NotMachOError(MachOError):
    """
    The data does not start with a Mach-O or universal binary magic.
    """

    pass


class TruncatedInputError(MachOError):
    """
    A read would extend beyond the end of the file.
    """

    pass


class UnresolvedArchitectureError(MachOError):
    """
    The cputype/cpusubtype pair does not name a known architecture.
    """

    def __init__(self, cputype: int, cpusubtype: int, message: str):
        super().__init__(message)
        self.cputype = cputype
        self.cpusubtype = cpusubtype


class TruncatedCommandError(MachOError):
    """
    The load command stream ends early or contains a command
    with an impossible size. Decoding of the image stops here.
    """

    pass


class MalformedCommandError(MachOError):
    """
    A single field of a load command cannot be decoded, the
    rest of the command stream is still usable.
    """

    pass
