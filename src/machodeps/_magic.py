"""
Classification of the magic number at the start of a Mach-O
image or universal binary.
"""

__all__ = ("MagicKind", "classify", "byte_order", "detect")

import enum
import struct

from macholib.mach_o import (
    FAT_MAGIC,
    FAT_MAGIC_64,
    MH_CIGAM,
    MH_CIGAM_64,
    MH_MAGIC,
    MH_MAGIC_64,
)

from ._bytesource import ByteSource
from ._errors import NotMachOError, TruncatedInputError


def _swap32(value: int) -> int:
    return struct.unpack("<I", struct.pack(">I", value))[0]


FAT_CIGAM = _swap32(FAT_MAGIC)
FAT_CIGAM_64 = _swap32(FAT_MAGIC_64)


class MagicKind(enum.Enum):
    THIN32 = "thin-32"
    THIN64 = "thin-64"
    FAT32 = "fat-32"
    FAT64 = "fat-64"
    UNRECOGNIZED = "unrecognized"

    @property
    def is_fat(self) -> bool:
        return self in {MagicKind.FAT32, MagicKind.FAT64}

    @property
    def is_thin(self) -> bool:
        return self in {MagicKind.THIN32, MagicKind.THIN64}


# Magic values as read in big-endian order. A thin header whose magic
# reads as *_CIGAM is stored little-endian.
_MAGIC_KINDS = {
    MH_MAGIC: MagicKind.THIN32,
    MH_CIGAM: MagicKind.THIN32,
    MH_MAGIC_64: MagicKind.THIN64,
    MH_CIGAM_64: MagicKind.THIN64,
    FAT_MAGIC: MagicKind.FAT32,
    FAT_CIGAM: MagicKind.FAT32,
    FAT_MAGIC_64: MagicKind.FAT64,
    FAT_CIGAM_64: MagicKind.FAT64,
}

_SWAPPED = {MH_CIGAM, MH_CIGAM_64, FAT_CIGAM, FAT_CIGAM_64}


def _magic_value(first4: bytes) -> int:
    if len(first4) < 4:
        return 0
    return struct.unpack(">I", first4[:4])[0]


def classify(first4: bytes) -> MagicKind:
    """
    Classify the first 4 bytes of a file (or of a slice in
    a universal binary).
    """
    return _MAGIC_KINDS.get(_magic_value(first4), MagicKind.UNRECOGNIZED)


def byte_order(first4: bytes) -> str:
    """
    Return the struct byte order (``">"`` or ``"<"``) for the
    header that starts with *first4*.
    """
    if _magic_value(first4) in _SWAPPED:
        return "<"
    return ">"


def detect(source: ByteSource, offset: int = 0) -> MagicKind:
    """
    Classify the magic at *offset* in *source*, raises NotMachOError
    when that is not a Mach-O or universal binary magic.
    """
    try:
        first4 = source.read_exact(offset, 4)
    except TruncatedInputError:
        raise NotMachOError(
            f"{source.name}: too short for a Mach-O header at offset {offset:#x}"
        ) from None

    kind = classify(first4)
    if kind is MagicKind.UNRECOGNIZED:
        raise NotMachOError(
            f"{source.name}: not a Mach-O file "
            f"(magic {first4.hex()} at offset {offset:#x})"
        )
    return kind
