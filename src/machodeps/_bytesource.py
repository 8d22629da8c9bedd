"""
Random access to the bytes of a single input file.
"""

__all__ = ("ByteSource",)

import io
import os
import pathlib
import typing

from ._errors import TruncatedInputError


class ByteSource:
    """
    Read-only, random access view of a file. All reads are
    at an absolute offset and must be satisfied completely.
    """

    def __init__(self, stream: typing.BinaryIO, name: str):
        self._stream = stream
        self.name = name
        self._stream.seek(0, io.SEEK_END)
        self.size = self._stream.tell()

    @classmethod
    def open(cls, path: typing.Union[str, os.PathLike]) -> "ByteSource":
        """
        Open *path* for reading, raises OSError when that is not possible.
        """
        path = pathlib.Path(path)
        return cls(path.open("rb"), str(path))

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "<bytes>") -> "ByteSource":
        return cls(io.BytesIO(data), name)

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> "ByteSource":
        return self

    def __exit__(self, *exc_info: typing.Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<ByteSource name={self.name!r} size={self.size}>"

    def read_exact(self, offset: int, length: int) -> bytes:
        """
        Return *length* bytes starting at *offset*.

        Raises TruncatedInputError when the range is not completely
        inside the file.
        """
        if offset < 0 or length < 0 or offset + length > self.size:
            raise TruncatedInputError(
                f"{self.name}: cannot read {length} bytes at offset {offset:#x}, "
                f"file size is {self.size:#x}"
            )

        self._stream.seek(offset)
        data = self._stream.read(length)
        if len(data) != length:
            # The file shrunk while we were reading it.
            raise TruncatedInputError(
                f"{self.name}: short read of {len(data)} bytes at offset {offset:#x}, "
                f"expected {length}"
            )
        return data
