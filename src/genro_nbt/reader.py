# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Forward-only byte cursor over an NBT buffer.

All multi-byte values in NBT are big-endian. The cursor decodes them
explicitly with big-endian ``struct`` formats, so the result never depends
on the host byte order.

Every read is bounds-checked before it happens: reading past the end of the
buffer raises EofReachedError and leaves the cursor where it was.

Example:
    >>> cursor = ByteCursor(b'\\x00\\x02hi')
    >>> cursor.read_string()
    'hi'
    >>> cursor.at_end
    True
"""

from __future__ import annotations

import struct

from .exceptions import EofReachedError, InvalidDataError
from .tags import Tag

_UBYTE = struct.Struct('>B')
_SHORT = struct.Struct('>h')
_USHORT = struct.Struct('>H')
_INT = struct.Struct('>i')
_LONG = struct.Struct('>q')
_FLOAT = struct.Struct('>f')
_DOUBLE = struct.Struct('>d')

_MAX_TAG = max(Tag)


class ByteCursor:
    """A read position inside a byte buffer.

    Attributes:
        position: Offset of the next byte to read.
        end: Length of the buffer; no read goes past it.
    """

    __slots__ = ('_data', 'position', 'end')

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = data if isinstance(data, bytes) else bytes(data)
        self.position = 0
        self.end = len(self._data)

    def __repr__(self) -> str:
        return f"ByteCursor(position={self.position}, end={self.end})"

    @property
    def remaining(self) -> int:
        """Number of bytes left to read."""
        return self.end - self.position

    @property
    def at_end(self) -> bool:
        """True once every byte of the buffer has been consumed."""
        return self.position >= self.end

    def _take(self, size: int) -> bytes:
        """Return the next ``size`` bytes and advance past them.

        Raises:
            EofReachedError: If fewer than ``size`` bytes remain.
        """
        if size > self.remaining:
            raise EofReachedError(
                f"need {size} bytes, only {self.remaining} left", offset=self.position
            )
        start = self.position
        self.position += size
        return self._data[start:self.position]

    def read_fixed(self, fmt: struct.Struct) -> int | float:
        """Read one fixed-width big-endian value described by ``fmt``."""
        return fmt.unpack(self._take(fmt.size))[0]

    def read_byte(self) -> int:
        return self.read_fixed(_UBYTE)

    def read_short(self) -> int:
        return self.read_fixed(_SHORT)

    def read_int(self) -> int:
        return self.read_fixed(_INT)

    def read_long(self) -> int:
        return self.read_fixed(_LONG)

    def read_float(self) -> float:
        return self.read_fixed(_FLOAT)

    def read_double(self) -> float:
        return self.read_fixed(_DOUBLE)

    def read_tag(self) -> Tag:
        """Read a one-byte tag code.

        Raises:
            InvalidDataError: If the byte is not a known tag.
            EofReachedError: If the buffer is exhausted.
        """
        offset = self.position
        raw = self.read_byte()
        if raw > _MAX_TAG:
            raise InvalidDataError(f"unknown tag {raw}", offset=offset)
        return Tag(raw)

    def read_length(self) -> int:
        """Read a signed 32-bit element count, rejecting negative values."""
        offset = self.position
        length = self.read_int()
        if length < 0:
            raise InvalidDataError(f"negative length {length}", offset=offset)
        return length

    def read_string(self) -> str:
        """Read a string prefixed by its unsigned 16-bit byte length.

        Raises:
            InvalidDataError: If the bytes are not valid UTF-8.
            EofReachedError: If the declared length exceeds the buffer.
        """
        offset = self.position
        length = self.read_fixed(_USHORT)
        raw = self._take(length)
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidDataError(f"invalid UTF-8 string: {e.reason}", offset=offset) from e

    def read_array(self, code: str) -> list[int]:
        """Read a count-prefixed array of fixed-width elements.

        Args:
            code: ``struct`` format character of one element (e.g. 'b', 'i').

        Returns:
            The elements in stream order.
        """
        length = self.read_length()
        fmt = struct.Struct(f'>{length}{code}')
        return list(fmt.unpack(self._take(fmt.size)))
