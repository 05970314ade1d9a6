# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Entry points for parsing NBT from bytes, files and URLs.

Gzip-framed input is detected by its magic bytes and decompressed in memory
before parsing. I/O and decompression errors are not wrapped: callers see
the OSError, URLError or gzip error raised by the standard library.

Example:
    >>> from genro_nbt import parse_nbt_file
    >>> level = parse_nbt_file('world/level.dat')
    >>> level['Data'].get('LevelName')
    'New World'
"""

from __future__ import annotations

import gzip
import logging
import urllib.parse
import urllib.request
from pathlib import Path

from .exceptions import NoDataError
from .parser import NBTParser
from .store import NBTDictionary

logger = logging.getLogger(__name__)

GZIP_MAGIC = b'\x1f\x8b'

#: Document type name whose files may be read concurrently.
DOCUMENT_TYPE = 'NBT'


def is_gzipped(data: bytes | bytearray | memoryview) -> bool:
    """True if data starts with the gzip magic header."""
    return bytes(data[:2]) == GZIP_MAGIC


def decompress(data: bytes | bytearray | memoryview) -> bytes | bytearray | memoryview:
    """Return data with any gzip framing removed.

    Raises:
        gzip.BadGzipFile, zlib.error, EOFError: If gzip data is corrupt.
    """
    if not is_gzipped(data):
        return data
    logger.debug("Decompressing %d bytes of gzip data", len(data))
    return gzip.decompress(data)


def parse_nbt(data: bytes | bytearray | memoryview) -> NBTDictionary:
    """Parse NBT data, decompressing it first if it is gzipped.

    Args:
        data: Raw or gzip-compressed NBT bytes.

    Returns:
        The root NBTDictionary.

    Raises:
        NoDataError: If there is nothing to parse after decompression.
        InvalidDataError: If the data is not valid NBT.
        EofReachedError: If the data ends before the document is closed.
    """
    data = decompress(data)
    if not len(data):
        raise NoDataError("no data to parse")
    return NBTParser(data).parse()


def parse_nbt_file(path: str | Path) -> NBTDictionary:
    """Parse an NBT file, decompressing it if needed.

    Raises:
        OSError: If the file cannot be read.
    """
    path = Path(path)
    logger.debug("Reading NBT file %s", path)
    return parse_nbt(path.read_bytes())


def parse_nbt_url(url: str) -> NBTDictionary:
    """Parse NBT data fetched from a URL, decompressing it if needed.

    Any scheme supported by urllib works (file, http, https). A string
    without a scheme is treated as a filesystem path.

    Raises:
        urllib.error.URLError, OSError: If the URL cannot be read.
    """
    if not urllib.parse.urlsplit(url).scheme:
        return parse_nbt_file(url)
    logger.debug("Fetching NBT data from %s", url)
    with urllib.request.urlopen(url) as response:
        data = response.read()
    return parse_nbt(data)


def can_read_concurrently(type_name: str) -> bool:
    """True if documents of type_name may be parsed on several threads at once.

    Each parse owns its buffer and tree, and finished trees are never
    modified, so NBT documents qualify. This is a contract for hosts that
    schedule document reads; the library itself takes no locks.
    """
    return type_name == DOCUMENT_TYPE
