# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""NBT tree builder.

NBTParser walks a decompressed buffer tag by tag and builds the tree of
NBTDictionary and NBTList values. It keeps an explicit stack of open scopes
instead of recursing, so nesting depth is bounded only by the buffer:

- a dictionary scope reads ``[tag][key][payload]`` entries until END;
- a list scope reads a known number of keyless payloads.

Opening a compound or a non-empty list pushes a scope; END (or the last list
element) pops it. Parsing is done when the root scope is popped.

Document shape:
    An NBT document is normally one named compound: ``0x0A``, the root name,
    the root's entries, ``0x00``. The entries of that compound become the
    entries of the returned root and its name is kept in ``root.name``.
    A stream that does not start with a compound tag is read as a bare
    sequence of root entries closed by END.

Example:
    >>> parser = NBTParser(b'\\x0a\\x00\\x00\\x01\\x00\\x01b\\x01\\x00')
    >>> root = parser.parse()
    >>> root.items()
    [('b', 1)]
    >>> parser.state
    <ParseState.DONE: 'done'>
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from .exceptions import EofReachedError, InvalidDataError, NBTError
from .reader import ByteCursor
from .store import NBTDictionary, NBTList
from .tags import Tag

_PAYLOAD_READERS: dict[Tag, Callable[[ByteCursor], Any]] = {
    Tag.BYTE: ByteCursor.read_byte,
    Tag.SHORT: ByteCursor.read_short,
    Tag.INT: ByteCursor.read_int,
    Tag.LONG: ByteCursor.read_long,
    Tag.FLOAT: ByteCursor.read_float,
    Tag.DOUBLE: ByteCursor.read_double,
    Tag.BYTE_ARRAY: lambda cursor: cursor.read_array('b'),
    Tag.STRING: ByteCursor.read_string,
    Tag.INT_ARRAY: lambda cursor: cursor.read_array('i'),
}


class ParseState(str, Enum):
    """States of the tree builder."""

    READING_ENTRY = 'reading_entry'
    CLOSING_SCOPE = 'closing_scope'
    DONE = 'done'
    FAILED = 'failed'


class _ListScope:
    """An open list: the list being filled and how many elements are left.

    ``owner`` is the dictionary holding the list; compound elements are
    parented to it.
    """

    __slots__ = ('items', 'remaining', 'owner')

    def __init__(self, items: NBTList, remaining: int, owner: NBTDictionary) -> None:
        self.items = items
        self.remaining = remaining
        self.owner = owner


class NBTParser:
    """Decodes one uncompressed NBT buffer into an NBTDictionary.

    A parser is single use: call parse() once.

    Attributes:
        state: Current ParseState; FAILED after parse() raised.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._cursor = ByteCursor(data)
        self._scopes: list[NBTDictionary | _ListScope] = []
        self.state = ParseState.READING_ENTRY

    @property
    def position(self) -> int:
        """Offset of the next byte to be read."""
        return self._cursor.position

    def parse(self) -> NBTDictionary:
        """Build the tree.

        Returns:
            The root NBTDictionary.

        Raises:
            InvalidDataError: On an unknown tag, invalid UTF-8, END used as
                a value, or a negative length.
            EofReachedError: If the buffer ends before the root is closed.
        """
        try:
            root = self._run()
        except NBTError:
            self.state = ParseState.FAILED
            raise
        self.state = ParseState.DONE
        return root

    def _run(self) -> NBTDictionary:
        cursor = self._cursor
        root = NBTDictionary()
        self._scopes = [root]

        tag = cursor.read_tag()
        if tag is Tag.COMPOUND:
            root.name = cursor.read_string()
        else:
            self._read_entry(root, tag)

        while self._scopes:
            scope = self._scopes[-1]
            if isinstance(scope, _ListScope):
                self._read_element(scope)
            else:
                self._read_entry(scope, cursor.read_tag())
        return root

    def _read_entry(self, scope: NBTDictionary, tag: Tag) -> None:
        if tag is Tag.END:
            self.state = ParseState.CLOSING_SCOPE
            self._scopes.pop()
            return
        self.state = ParseState.READING_ENTRY
        if self._cursor.at_end:
            raise EofReachedError(
                f"{tag.name} tag is the last byte of the stream", offset=self._cursor.position
            )
        key = self._cursor.read_string()
        scope._set_item(key, self._decode_value(tag, scope), tag)

    def _read_element(self, scope: _ListScope) -> None:
        if not scope.remaining:
            self.state = ParseState.CLOSING_SCOPE
            self._scopes.pop()
            return
        self.state = ParseState.READING_ENTRY
        scope.remaining -= 1
        scope.items.append(self._decode_value(scope.items.tag, scope.owner))

    def _decode_value(self, tag: Tag, owner: NBTDictionary) -> Any:
        """Decode the payload of one value.

        COMPOUND and non-empty LIST values are returned empty and pushed as
        the current scope; the main loop fills them.
        """
        if tag is Tag.COMPOUND:
            child = NBTDictionary(parent=owner)
            self._scopes.append(child)
            return child
        if tag is Tag.LIST:
            element_tag = self._cursor.read_tag()
            items = NBTList(element_tag)
            length = self._cursor.read_length()
            if length:
                self._scopes.append(_ListScope(items, length, owner))
            return items
        if tag is Tag.END:
            raise InvalidDataError("END tag used as a value", offset=self._cursor.position)
        return _PAYLOAD_READERS[tag](self._cursor)
