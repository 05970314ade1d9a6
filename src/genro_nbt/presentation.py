# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Read-only view of a decoded tree for browsers and dumps.

A tree browser needs to know, for any value, whether it can be expanded,
how many children it has, which (key, child) pair sits at a position and
what single-line text to show. Dictionaries expose their keys; list
children are keyed by their decimal position.
"""

from __future__ import annotations

from typing import Any, Iterator

from .store import NBTDictionary, NBTList

INDENT = '    '


def is_countable(value: Any) -> bool:
    """True if value has children (a dictionary or a list/array)."""
    return isinstance(value, (NBTDictionary, list))


def child_count(value: Any) -> int:
    """Number of children of a countable value, 0 otherwise."""
    return len(value) if is_countable(value) else 0


def child_at(value: Any, index: int) -> tuple[str, Any]:
    """Return the (key, child) pair at index.

    Raises:
        IndexError: If index is out of range.
        TypeError: If value is not countable.
    """
    if isinstance(value, NBTDictionary):
        key = value.key_at(index)
        if key is None:
            raise IndexError(f"Position {index} out of range (0-{len(value)-1})")
        return key, value[key]
    if isinstance(value, list):
        if not 0 <= index < len(value):
            raise IndexError(f"Position {index} out of range (0-{len(value)-1})")
        return str(index), value[index]
    raise TypeError(f"{type(value).__name__} has no children")


def _entries(count: int) -> str:
    return f"{count} entr{'y' if count == 1 else 'ies'}"


def display_value(value: Any) -> str:
    """Single-line text for value: its entry count if countable, else str()."""
    if is_countable(value):
        return _entries(len(value))
    return str(value)


def _dictionary_rows(dictionary: NBTDictionary) -> Iterator[tuple[str, Any]]:
    for index, (key, value) in enumerate(dictionary.iter_items()):
        item_count = f" ({_entries(len(value))})" if is_countable(value) else ''
        yield f"[{index}]: {key}{item_count} => ", value


def _list_rows(items: NBTList) -> Iterator[tuple[str, Any]]:
    for value in items:
        yield '', value


def describe(dictionary: NBTDictionary) -> str:
    """Multi-line description of a dictionary.

    One line per entry, ``[index]: key (N entries) => value``; the count is
    shown only for countable values. Nested dictionaries, and lists whose
    elements are dictionaries or lists, are expanded one element per line
    and indented. Expansion uses an explicit stack, so any nesting depth
    the parser accepts can be described.

    Example:
        >>> print(describe(root))
        {
            [0]: name => Steve
            [1]: pos (3 entries) => NBTList(DOUBLE, [0.5, 64.0, 0.5])
            [2]: Inventory (1 entry) => NBTList(COMPOUND, [
                {
                    [0]: id => stone
                }
            ])
        }
    """
    lines = ['{']
    # (rows still to print, indentation level, closing text)
    stack = [(_dictionary_rows(dictionary), 1, '}')]
    while stack:
        rows, level, closing = stack[-1]
        row = next(rows, None)
        if row is None:
            stack.pop()
            lines.append(INDENT * (level - 1) + closing)
            continue
        prefix, value = row
        pad = INDENT * level
        if isinstance(value, NBTDictionary):
            lines.append(f"{pad}{prefix}{{")
            stack.append((_dictionary_rows(value), level + 1, '}'))
        elif isinstance(value, NBTList) and value.tag.is_container:
            lines.append(f"{pad}{prefix}NBTList({value.tag.name}, [")
            stack.append((_list_rows(value), level + 1, '])'))
        else:
            text = repr(value) if isinstance(value, list) else str(value)
            first, *rest = text.split('\n')
            lines.append(f"{pad}{prefix}{first}")
            lines.extend(pad + line for line in rest)
    return '\n'.join(lines)
