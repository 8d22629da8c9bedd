import typing


def sizeof(s: typing.Any) -> int: ...
