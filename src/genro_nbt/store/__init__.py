# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - containers for decoded NBT data.

The package is organized into:
- core: NBTDictionary (ordered compound container) and NBTList

Example:
    >>> from genro_nbt import parse_nbt
    >>> root = parse_nbt(data)
    >>> root.key_at(0)
    'Level'
"""

from .core import NBTDictionary, NBTList

__all__ = ["NBTDictionary", "NBTList"]
