# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""NBT decoding exceptions."""

from __future__ import annotations


class NBTError(Exception):
    """Base exception for NBT decoding errors.

    Attributes:
        offset: Byte offset in the (decompressed) buffer where the error
            was detected, or None if not applicable.
    """

    def __init__(self, message: str = '', offset: int | None = None) -> None:
        if offset is not None:
            message = f"{message} (at offset {offset})" if message else f"at offset {offset}"
        super().__init__(message)
        self.offset = offset


class NoDataError(NBTError):
    """Raised when there is no data to parse."""

    pass


class InvalidDataError(NBTError):
    """Raised when the data is not in a valid NBT format."""

    pass


class EofReachedError(NBTError):
    """Raised when the end of the buffer is reached before parsing finished."""

    pass
