"""
Mapping from (cputype, cpusubtype) to the architecture names
used by Apple's tools (``lipo``, ``otool``, ``NXGetArchInfoFromCpuType``).
"""

__all__ = ("resolve", "describe_cputype")

import typing

from macholib import mach_o

CPU_ARCH_ABI64 = 0x01000000
CPU_ARCH_ABI64_32 = 0x02000000

# High byte of the subtype contains capability bits
# (for example CPU_SUBTYPE_LIB64 or the arm64e pointer authentication ABI)
CPU_SUBTYPE_MASK = 0xFF000000

CPU_TYPE_MC680x0 = 6
CPU_TYPE_I386 = 7
CPU_TYPE_X86_64 = CPU_TYPE_I386 | CPU_ARCH_ABI64
CPU_TYPE_HPPA = 11
CPU_TYPE_ARM = 12
CPU_TYPE_ARM64 = CPU_TYPE_ARM | CPU_ARCH_ABI64
CPU_TYPE_ARM64_32 = CPU_TYPE_ARM | CPU_ARCH_ABI64_32
CPU_TYPE_MC88000 = 13
CPU_TYPE_SPARC = 14
CPU_TYPE_I860 = 15
CPU_TYPE_POWERPC = 18
CPU_TYPE_POWERPC64 = CPU_TYPE_POWERPC | CPU_ARCH_ABI64

# Order matters: the first entry for a cputype is the generic
# name of the family, used for subtypes not listed here.
_ARCH_TABLE: typing.Tuple[typing.Tuple[str, int, int], ...] = (
    ("hppa", CPU_TYPE_HPPA, 0),
    ("hppa7100LC", CPU_TYPE_HPPA, 2),
    ("i386", CPU_TYPE_I386, 3),
    ("i486", CPU_TYPE_I386, 4),
    ("i486SX", CPU_TYPE_I386, 0x84),
    ("pentium", CPU_TYPE_I386, 5),
    ("pentpro", CPU_TYPE_I386, 0x16),
    ("pentIIm3", CPU_TYPE_I386, 0x36),
    ("pentIIm5", CPU_TYPE_I386, 0x56),
    ("pentium4", CPU_TYPE_I386, 0x0A),
    ("x86_64", CPU_TYPE_X86_64, 3),
    ("x86_64h", CPU_TYPE_X86_64, 8),
    ("i860", CPU_TYPE_I860, 0),
    ("m68k", CPU_TYPE_MC680x0, 1),
    ("m68030", CPU_TYPE_MC680x0, 3),
    ("m68040", CPU_TYPE_MC680x0, 2),
    ("m88k", CPU_TYPE_MC88000, 0),
    ("ppc", CPU_TYPE_POWERPC, 0),
    ("ppc601", CPU_TYPE_POWERPC, 1),
    ("ppc603", CPU_TYPE_POWERPC, 3),
    ("ppc603e", CPU_TYPE_POWERPC, 4),
    ("ppc603ev", CPU_TYPE_POWERPC, 5),
    ("ppc604", CPU_TYPE_POWERPC, 6),
    ("ppc604e", CPU_TYPE_POWERPC, 7),
    ("ppc750", CPU_TYPE_POWERPC, 9),
    ("ppc7400", CPU_TYPE_POWERPC, 10),
    ("ppc7450", CPU_TYPE_POWERPC, 11),
    ("ppc970", CPU_TYPE_POWERPC, 100),
    ("ppc64", CPU_TYPE_POWERPC64, 0),
    ("ppc970-64", CPU_TYPE_POWERPC64, 100),
    ("sparc", CPU_TYPE_SPARC, 0),
    ("arm", CPU_TYPE_ARM, 0),
    ("armv4t", CPU_TYPE_ARM, 5),
    ("armv6", CPU_TYPE_ARM, 6),
    ("armv5", CPU_TYPE_ARM, 7),
    ("xscale", CPU_TYPE_ARM, 8),
    ("armv7", CPU_TYPE_ARM, 9),
    ("armv7f", CPU_TYPE_ARM, 10),
    ("armv7s", CPU_TYPE_ARM, 11),
    ("armv7k", CPU_TYPE_ARM, 12),
    ("armv8", CPU_TYPE_ARM, 13),
    ("armv6m", CPU_TYPE_ARM, 14),
    ("armv7m", CPU_TYPE_ARM, 15),
    ("armv7em", CPU_TYPE_ARM, 16),
    ("arm64", CPU_TYPE_ARM64, 0),
    ("arm64v8", CPU_TYPE_ARM64, 1),
    ("arm64e", CPU_TYPE_ARM64, 2),
    ("arm64_32", CPU_TYPE_ARM64_32, 1),
)

_BY_TYPE_AND_SUBTYPE: typing.Dict[typing.Tuple[int, int], str] = {}
_FAMILY_NAME: typing.Dict[int, str] = {}
for _name, _cputype, _cpusubtype in _ARCH_TABLE:
    _BY_TYPE_AND_SUBTYPE.setdefault((_cputype, _cpusubtype), _name)
    _FAMILY_NAME.setdefault(_cputype, _name)
del _name, _cputype, _cpusubtype


def resolve(cputype: int, cpusubtype: int) -> typing.Optional[str]:
    """
    Return the architecture name for *cputype* and *cpusubtype*, or
    None when the cputype is not known.

    Capability bits in the subtype are ignored, and an unknown subtype
    of a known cputype resolves to the name of the family.
    """
    cputype &= 0xFFFFFFFF
    cpusubtype &= ~CPU_SUBTYPE_MASK & 0xFFFFFFFF

    try:
        return _BY_TYPE_AND_SUBTYPE[(cputype, cpusubtype)]
    except KeyError:
        return _FAMILY_NAME.get(cputype)


def describe_cputype(cputype: int) -> str:
    """
    Human readable label for *cputype*, for use in diagnostics
    """
    try:
        return mach_o.CPU_TYPE_NAMES[cputype]
    except KeyError:
        return f"cputype {cputype & 0xFFFFFFFF:#x}"
