# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-NBT - Read-only decoder for Named Binary Tag (NBT) data.

A lightweight, zero-dependency library that turns NBT bytes, optionally
gzip-compressed, into an ordered tree of NBTDictionary and NBTList values.
"""

__version__ = "0.1.0"

from .exceptions import (
    EofReachedError,
    InvalidDataError,
    NBTError,
    NoDataError,
)
from .loading import (
    can_read_concurrently,
    decompress,
    parse_nbt,
    parse_nbt_file,
    parse_nbt_url,
)
from .node import NBTNode
from .parser import NBTParser, ParseState
from .presentation import child_at, child_count, describe, display_value, is_countable
from .reader import ByteCursor
from .store import NBTDictionary, NBTList
from .tags import Tag

__all__ = [
    # Core classes
    "NBTDictionary",
    "NBTList",
    "NBTNode",
    "Tag",
    # Parsing
    "ByteCursor",
    "NBTParser",
    "ParseState",
    "parse_nbt",
    "parse_nbt_file",
    "parse_nbt_url",
    "decompress",
    "can_read_concurrently",
    # Presentation
    "is_countable",
    "child_count",
    "child_at",
    "display_value",
    "describe",
    # Exceptions
    "NBTError",
    "NoDataError",
    "InvalidDataError",
    "EofReachedError",
]
