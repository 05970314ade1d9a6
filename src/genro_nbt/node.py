# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""NBTNode - one key/value entry of an NBTDictionary."""

from __future__ import annotations

import weakref
from typing import Any, TYPE_CHECKING

from .tags import Tag

if TYPE_CHECKING:
    from .store import NBTDictionary


class NBTNode:
    """An entry in an NBTDictionary.

    Each node has:
    - key: The entry's unique name within its dictionary
    - value: The decoded payload (scalar, array, NBTList or NBTDictionary)
    - tag: The Tag the value was decoded from
    - parent: The NBTDictionary containing this entry (weakly referenced)

    Example:
        >>> node = NBTNode('health', 20, Tag.SHORT)
        >>> node.key
        'health'
        >>> node.tag
        <Tag.SHORT: 2>
    """

    __slots__ = ('key', 'value', 'tag', '_parent_ref')

    def __init__(
        self,
        key: str,
        value: Any,
        tag: Tag,
        parent: NBTDictionary | None = None,
    ) -> None:
        self.key = key
        self.value = value
        self.tag = tag
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    def __repr__(self) -> str:
        if self.tag is Tag.COMPOUND:
            value_repr = f"NBTDictionary({len(self.value)})"
        elif self.tag is Tag.LIST:
            value_repr = f"NBTList({self.value.tag.name}, {len(self.value)})"
        else:
            value_repr = repr(self.value)
        return f"NBTNode({self.key!r}, {self.tag.name}, value={value_repr})"

    @property
    def parent(self) -> NBTDictionary | None:
        """The containing dictionary, or None once it has been released."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_branch(self) -> bool:
        """True if this node contains a nested NBTDictionary."""
        return self.tag is Tag.COMPOUND

    @property
    def is_leaf(self) -> bool:
        """True if this node does not contain a nested NBTDictionary."""
        return self.tag is not Tag.COMPOUND

    @property
    def _(self) -> NBTDictionary:
        """Return the containing NBTDictionary."""
        parent = self.parent
        if parent is None:
            raise ValueError("Node has no parent")
        return parent
