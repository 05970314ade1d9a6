# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""NBTDictionary - ordered, read-only container for decoded NBT compounds.

This module provides the NBTDictionary class, the in-memory form of an NBT
compound, and NBTList, the in-memory form of an NBT list.

Key Features:
    - **Ordered keys**: Entries keep the order in which they were first read
    - **O(1) lookup**: Internal dict-based storage for access by key
    - **Positional access**: value_at(i) / key_at(i) return None when out of range
    - **Typed entries**: Every value is stored in an NBTNode with its Tag
    - **Parent linkage**: Each nested dictionary knows its enclosing dictionary
      through a weak reference, so children never keep their parent alive

Consumers treat an NBTDictionary as read-only. The only mutators are the
underscore methods used by the parser while a document is being decoded.

Thread safety:
    A dictionary is populated by a single parse call and never modified
    afterwards, so a finished tree can be read from many threads at once.

Example:
    >>> root = parse_nbt(data)
    >>> root.keys()
    ['Level', 'DataVersion']
    >>> root['Level'].key_at(0)
    'xPos'
    >>> root.value_at(99) is None
    True
"""

from __future__ import annotations

import weakref
from typing import Any, Callable, Iterator

from ..node import NBTNode
from ..tags import Tag


class NBTList(list):
    """A decoded NBT list: a plain list that remembers its element tag.

    Attributes:
        tag: The Tag shared by every element.

    Example:
        >>> items = NBTList(Tag.INT, [1, 2, 3])
        >>> items.tag
        <Tag.INT: 3>
    """

    def __init__(self, tag: Tag, items: Any = ()) -> None:
        super().__init__(items)
        self.tag = tag

    def __repr__(self) -> str:
        return f"NBTList({self.tag.name}, {list.__repr__(self)})"


class NBTDictionary:
    """An ordered mapping from string keys to decoded NBT values.

    NBTDictionary provides:
    - get(key) / d[key]: Value by key
    - value_at(index) / key_at(index): Bounds-checked positional access
    - keys() / values() / items() / nodes(): Ordered views
    - walk(): Depth-first traversal of nested dictionaries
    - as_dict(): Conversion to plain Python containers

    Attributes:
        name: Name of the document's outer compound for a root parsed from a
            headed stream, None otherwise.
    """

    __slots__ = ('_nodes', '_order', '_parent_ref', 'name', '__weakref__')

    def __init__(
        self,
        source: NBTDictionary | None = None,
        parent: NBTDictionary | None = None,
    ) -> None:
        """Initialize an NBTDictionary.

        Args:
            source: Optional dictionary whose keys and values are copied
                (shallow: nested values are shared, not duplicated).
            parent: The dictionary enclosing this one. Set once, here.
        """
        self._nodes: dict[str, NBTNode] = {}
        self._order: list[NBTNode] = []
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self.name: str | None = None

        if source is not None:
            if not isinstance(source, NBTDictionary):
                raise TypeError(
                    f"source must be NBTDictionary, not {type(source).__name__}"
                )
            for node in source._order:
                self._set_item(node.key, node.value, node.tag)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing keys."""
        return f"NBTDictionary({list(self._nodes.keys())})"

    def __str__(self) -> str:
        from ..presentation import describe
        return describe(self)

    def __len__(self) -> int:
        """Return the number of entries in this dictionary."""
        return len(self._order)

    def __iter__(self) -> Iterator[NBTNode]:
        """Iterate over entries in insertion order."""
        return iter(self._order)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __getitem__(self, key: str | int) -> Any:
        """Get value by key or by position.

        Raises:
            KeyError: If a string key is not present.
            IndexError: If an integer position is out of range.
        """
        if isinstance(key, int):
            return self._get_node_by_position(key).value
        return self._nodes[key].value

    # ==================== Internal Mutation ====================

    def _set_item(self, key: str, value: Any, tag: Tag) -> NBTNode:
        """Insert or overwrite an entry.

        An existing key keeps its position; only its value and tag change.
        """
        node = self._nodes.get(key)
        if node is not None:
            node.value = value
            node.tag = tag
            return node
        node = NBTNode(key, value, tag, parent=self)
        self._nodes[key] = node
        self._order.append(node)
        return node

    def _remove_item(self, key: str) -> NBTNode:
        """Remove an entry from both lookup and order.

        Raises:
            KeyError: If key not found.
        """
        node = self._nodes.pop(key)
        self._order.remove(node)
        return node

    def _get_node_by_position(self, index: int) -> NBTNode:
        if index < 0 or index >= len(self._order):
            raise IndexError(f"Position {index} out of range (0-{len(self._order)-1})")
        return self._order[index]

    # ==================== Core API ====================

    @property
    def count(self) -> int:
        """Number of entries."""
        return len(self._order)

    def get(self, key: str, default: Any = None) -> Any:
        """Get the value stored under key, or default."""
        node = self._nodes.get(key)
        return default if node is None else node.value

    def get_node(self, key: str) -> NBTNode:
        """Get the entry stored under key.

        Raises:
            KeyError: If key not found.
        """
        return self._nodes[key]

    def tag_of(self, key: str) -> Tag | None:
        """Get the Tag of the entry stored under key, or None."""
        node = self._nodes.get(key)
        return None if node is None else node.tag

    def value_at(self, index: int) -> Any:
        """Get the value at a position, or None if out of range.

        Negative positions are out of range.
        """
        if index < 0 or index >= len(self._order):
            return None
        return self._order[index].value

    def key_at(self, index: int) -> str | None:
        """Get the key at a position, or None if out of range."""
        if index < 0 or index >= len(self._order):
            return None
        return self._order[index].key

    # ==================== Iteration ====================

    def iter_keys(self) -> Iterator[str]:
        """Yield keys in insertion order."""
        for n in self._order:
            yield n.key

    def iter_values(self) -> Iterator[Any]:
        """Yield values in insertion order."""
        for n in self._order:
            yield n.value

    def iter_items(self) -> Iterator[tuple[str, Any]]:
        """Yield (key, value) pairs in insertion order."""
        for n in self._order:
            yield n.key, n.value

    def keys(self) -> list[str]:
        """Return list of keys in insertion order."""
        return list(self.iter_keys())

    def values(self) -> list[Any]:
        """Return list of values in insertion order."""
        return list(self.iter_values())

    def items(self) -> list[tuple[str, Any]]:
        """Return list of (key, value) pairs in insertion order."""
        return list(self.iter_items())

    def nodes(self) -> list[NBTNode]:
        """Return list of entries in insertion order."""
        return list(self._order)

    # ==================== Walk ====================

    def walk(
        self,
        callback: Callable[[NBTNode], Any] | None = None,
    ) -> Iterator[tuple[str, NBTNode]] | None:
        """Walk the tree depth-first, descending into compounds.

        Compounds held in lists are visited too; their entries get a
        '#N' path segment for the list position.

        Args:
            callback: Optional function to call on each node.
                      If provided, walk returns None.

        Yields:
            Tuples of (path, node) if no callback provided.

        Example:
            >>> for path, node in root.walk():
            ...     print(path, node.tag.name)
            Level COMPOUND
            Level.xPos INT
            Level.Entities LIST
            Level.Entities.#0.id STRING
        """
        if callback is not None:
            for _path, node in _walk_gen(self, ''):
                callback(node)
            return None
        return _walk_gen(self, '')

    # ==================== Navigation ====================

    @property
    def parent(self) -> NBTDictionary | None:
        """The enclosing dictionary, or None for a root.

        The link is weak: it is None as well once the parent has been
        released.
        """
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def root(self) -> NBTDictionary:
        """Get the outermost dictionary of this hierarchy."""
        current = self
        while current.parent is not None:
            current = current.parent
        return current

    @property
    def depth(self) -> int:
        """Get the nesting depth of this dictionary (root=0)."""
        depth = 0
        current = self.parent
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to plain dict.

        Nested dictionaries become dicts and NBTLists become lists, at any
        depth, including dictionaries held in lists. Conversion uses an
        explicit stack, so nesting depth is not limited by recursion.

        Returns:
            Nested dictionary representation of the tree.
        """
        return _plain(self)


def _plain(value: Any) -> Any:
    if not isinstance(value, (NBTDictionary, list)):
        return value
    result: dict[str, Any] | list[Any] = {} if isinstance(value, NBTDictionary) else []
    pending = [(value, result)]
    while pending:
        source, target = pending.pop()
        pairs = source.iter_items() if isinstance(source, NBTDictionary) else enumerate(source)
        for key, item in pairs:
            if isinstance(item, NBTDictionary):
                converted: Any = {}
                pending.append((item, converted))
            elif isinstance(item, list):
                converted = []
                pending.append((item, converted))
            else:
                converted = item
            if isinstance(target, dict):
                target[key] = converted
            else:
                target.append(converted)
    return result


def _entries_of(store: NBTDictionary, prefix: str) -> Iterator[tuple[str, Any, NBTNode | None]]:
    for node in store._order:
        yield (f"{prefix}.{node.key}" if prefix else node.key), node.value, node


def _elements_of(items: NBTList, prefix: str) -> Iterator[tuple[str, Any, NBTNode | None]]:
    for i, item in enumerate(items):
        yield f"{prefix}.#{i}", item, None


def _walk_gen(store: NBTDictionary, prefix: str) -> Iterator[tuple[str, NBTNode]]:
    # One iterator per open dictionary or list; the innermost is advanced first.
    stack = [_entries_of(store, prefix)]
    while stack:
        step = next(stack[-1], None)
        if step is None:
            stack.pop()
            continue
        path, value, node = step
        if node is not None:
            yield path, node
        if isinstance(value, NBTDictionary):
            stack.append(_entries_of(value, path))
        elif isinstance(value, NBTList):
            stack.append(_elements_of(value, path))
