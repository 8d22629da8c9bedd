"""
Decoder for the load command stream of a Mach-O image.

Only the commands that describe dynamic linking are interpreted:

* ``LC_LOAD_DYLIB`` and ``LC_LOAD_WEAK_DYLIB``: a library dependency
* ``LC_RPATH``: an entry on the runtime search path
* ``LC_ID_DYLIB``: the install name of a shared library

All reads are checked against the size of the command buffer; a
corrupt command stream results in an issue on the result and never
in a read outside of the buffer.
"""

__all__ = ("LoadCommandInfo", "decode_load_commands")

import dataclasses
import typing

from macholib.mach_o import (
    LC_ID_DYLIB,
    LC_LOAD_DYLIB,
    LC_LOAD_WEAK_DYLIB,
    LC_NAMES,
    LC_RPATH,
    dylib_command,
    load_command,
    rpath_command,
)
from macholib.ptypes import sizeof

from ._errors import MachOError, MalformedCommandError, TruncatedCommandError

# Commands with an lc_str field: command -> (structure, field name)
_STRING_COMMANDS: typing.Dict[int, typing.Tuple[type, str]] = {
    LC_LOAD_DYLIB: (dylib_command, "name"),
    LC_LOAD_WEAK_DYLIB: (dylib_command, "name"),
    LC_ID_DYLIB: (dylib_command, "name"),
    LC_RPATH: (rpath_command, "path"),
}

_HEADER_SIZE = sizeof(load_command)


@dataclasses.dataclass
class LoadCommandInfo:
    install_name: typing.Optional[str] = None
    dependencies: typing.List[str] = dataclasses.field(default_factory=list)
    rpaths: typing.List[str] = dataclasses.field(default_factory=list)
    issues: typing.List[MachOError] = dataclasses.field(default_factory=list)


def command_name(cmd: int) -> str:
    return LC_NAMES.get(cmd, f"load command {cmd:#x}")


def _read_string(
    commands: bytes, start: int, cmdsize: int, cmd: int, endian: str
) -> str:
    """
    Return the lc_str value of the command at *start*.

    The string offset is relative to the start of the command
    and the string must be NUL terminated within the command.
    """
    klass, field = _STRING_COMMANDS[cmd]
    body_start = start + _HEADER_SIZE
    body_end = body_start + sizeof(klass)
    if body_end > start + cmdsize:
        raise MalformedCommandError(
            f"{command_name(cmd)} at {start:#x}: command size {cmdsize} "
            f"is too small for {klass.__name__}"
        )

    body = klass.from_str(commands[body_start:body_end], _endian_=endian)
    offset = int(getattr(body, field))
    if not 0 <= offset < cmdsize:
        raise MalformedCommandError(
            f"{command_name(cmd)} at {start:#x}: string offset {offset} "
            f"is outside of the command (size {cmdsize})"
        )

    end = commands.find(b"\0", start + offset, start + cmdsize)
    if end == -1:
        raise MalformedCommandError(
            f"{command_name(cmd)} at {start:#x}: string is not NUL terminated"
        )

    return commands[start + offset : end].decode("utf-8", "surrogateescape")


def decode_load_commands(commands: bytes, ncmds: int, endian: str) -> LoadCommandInfo:
    """
    Walk at most *ncmds* load commands in *commands* (the ``sizeofcmds``
    bytes following a Mach-O header) with byte order *endian*.

    Decoding stops at the first command that does not fit in the
    buffer; everything found before that point is kept.
    """
    info = LoadCommandInfo()

    cursor = 0
    for index in range(ncmds):
        remaining = len(commands) - cursor
        if remaining < _HEADER_SIZE:
            info.issues.append(
                TruncatedCommandError(
                    f"load command {index} at {cursor:#x}: only {remaining} bytes "
                    f"left, {ncmds} commands expected"
                )
            )
            break

        header = load_command.from_str(
            commands[cursor : cursor + _HEADER_SIZE], _endian_=endian
        )
        cmd = int(header.cmd)
        cmdsize = int(header.cmdsize)

        if cmdsize < _HEADER_SIZE:
            info.issues.append(
                TruncatedCommandError(
                    f"load command {index} ({command_name(cmd)}) at {cursor:#x}: "
                    f"invalid command size {cmdsize}"
                )
            )
            break

        if cmdsize > remaining:
            info.issues.append(
                TruncatedCommandError(
                    f"load command {index} ({command_name(cmd)}) at {cursor:#x}: "
                    f"command size {cmdsize} exceeds the remaining {remaining} bytes"
                )
            )
            break

        if cmd in _STRING_COMMANDS:
            try:
                value = _read_string(commands, cursor, cmdsize, cmd, endian)
            except MalformedCommandError as exc:
                info.issues.append(exc)
            else:
                if cmd == LC_ID_DYLIB:
                    # XXX: Last one wins when there are multiple LC_ID_DYLIB
                    #      commands, ld64 never emits more than one.
                    info.install_name = value
                elif cmd == LC_RPATH:
                    info.rpaths.append(value)
                else:
                    info.dependencies.append(value)

        cursor += cmdsize

    return info
