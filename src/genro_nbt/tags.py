# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""NBT tag codes."""

from __future__ import annotations

from enum import IntEnum


class Tag(IntEnum):
    """One-byte type codes of the NBT format.

    END is the sentinel that closes a compound; it is never stored as a value.
    """

    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11

    @property
    def is_container(self) -> bool:
        """True for tags whose value has children (LIST and COMPOUND)."""
        return self in (Tag.LIST, Tag.COMPOUND)
