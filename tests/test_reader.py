# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for ByteCursor and Tag."""

import struct

import pytest

from genro_nbt import ByteCursor, EofReachedError, InvalidDataError, NBTError, Tag


class TestTag:
    """Tests for the Tag enumeration."""

    def test_wire_codes(self):
        """Test tag codes match the format."""
        assert Tag.END == 0
        assert Tag.BYTE == 1
        assert Tag.STRING == 8
        assert Tag.COMPOUND == 10
        assert Tag.INT_ARRAY == 11
        assert len(Tag) == 12

    def test_is_container(self):
        """Test only LIST and COMPOUND are containers."""
        assert Tag.LIST.is_container is True
        assert Tag.COMPOUND.is_container is True
        assert Tag.INT_ARRAY.is_container is False
        assert Tag.END.is_container is False


class TestByteCursorBasic:
    """Tests for cursor position tracking."""

    def test_new_cursor(self):
        """Test a fresh cursor starts at offset 0."""
        cursor = ByteCursor(b'abc')
        assert cursor.position == 0
        assert cursor.end == 3
        assert cursor.remaining == 3
        assert cursor.at_end is False

    def test_empty_cursor_is_at_end(self):
        """Test an empty buffer is immediately exhausted."""
        assert ByteCursor(b'').at_end is True

    def test_accepts_bytearray_and_memoryview(self):
        """Test non-bytes buffers are accepted."""
        assert ByteCursor(bytearray(b'\x00\x05')).read_short() == 5
        assert ByteCursor(memoryview(b'\x00\x05')).read_short() == 5

    def test_reads_advance(self):
        """Test each read advances by its width."""
        cursor = ByteCursor(b'\x01' + b'\x00\x02' + b'\x00\x00\x00\x03')
        cursor.read_byte()
        assert cursor.position == 1
        cursor.read_short()
        assert cursor.position == 3
        cursor.read_int()
        assert cursor.position == 7
        assert cursor.at_end is True

    def test_repr(self):
        """Test string representation."""
        assert repr(ByteCursor(b'ab')) == 'ByteCursor(position=0, end=2)'


class TestByteCursorNumbers:
    """Tests for fixed-width big-endian reads."""

    def test_byte_is_unsigned(self):
        """Test bytes decode as 0..255."""
        assert ByteCursor(b'\xff').read_byte() == 255

    def test_short_big_endian(self):
        """Test shorts decode big-endian and signed."""
        assert ByteCursor(b'\x01\x02').read_short() == 258
        assert ByteCursor(b'\xff\xfe').read_short() == -2

    def test_int_big_endian(self):
        """Test ints decode big-endian and signed."""
        assert ByteCursor(b'\x00\x01\x00\x00').read_int() == 65536
        assert ByteCursor(b'\x80\x00\x00\x00').read_int() == -2**31

    def test_long_big_endian(self):
        """Test longs decode big-endian and signed."""
        assert ByteCursor(b'\x00\x00\x00\x01\x00\x00\x00\x00').read_long() == 2**32
        assert ByteCursor(b'\xff' * 8).read_long() == -1

    def test_float(self):
        """Test floats decode from a 32-bit big-endian pattern."""
        assert ByteCursor(struct.pack('>f', 1.5)).read_float() == 1.5

    def test_double(self):
        """Test doubles decode from a 64-bit big-endian pattern."""
        assert ByteCursor(struct.pack('>d', -0.125)).read_double() == -0.125

    @pytest.mark.parametrize('method, size', [
        ('read_byte', 1),
        ('read_short', 2),
        ('read_int', 4),
        ('read_long', 8),
        ('read_float', 4),
        ('read_double', 8),
    ])
    def test_read_past_end_raises(self, method, size):
        """Test every width is bounds-checked."""
        cursor = ByteCursor(b'\x00' * (size - 1))
        with pytest.raises(EofReachedError):
            getattr(cursor, method)()
        assert cursor.position == 0


class TestByteCursorTags:
    """Tests for read_tag."""

    def test_known_tags(self):
        """Test every code 0..11 maps to a Tag."""
        cursor = ByteCursor(bytes(range(12)))
        assert [cursor.read_tag() for _ in range(12)] == list(Tag)

    @pytest.mark.parametrize('raw', [12, 99, 255])
    def test_unknown_tag_raises(self, raw):
        """Test codes outside 0..11 are invalid."""
        with pytest.raises(InvalidDataError, match=f"unknown tag {raw}"):
            ByteCursor(bytes([raw])).read_tag()

    def test_error_carries_offset(self):
        """Test the error reports where the bad byte was."""
        cursor = ByteCursor(b'\x01\x0c')
        cursor.read_tag()
        with pytest.raises(InvalidDataError) as exc_info:
            cursor.read_tag()
        assert exc_info.value.offset == 1
        assert 'offset 1' in str(exc_info.value)
        assert isinstance(exc_info.value, NBTError)


class TestByteCursorStrings:
    """Tests for read_string."""

    def test_read_string(self):
        """Test length-prefixed UTF-8 decoding."""
        cursor = ByteCursor(b'\x00\x05hello!')
        assert cursor.read_string() == 'hello'
        assert cursor.position == 7

    def test_read_empty_string(self):
        """Test a zero length gives an empty string."""
        assert ByteCursor(b'\x00\x00').read_string() == ''

    def test_read_multibyte_string(self):
        """Test non-ASCII text."""
        raw = 'caffè'.encode('utf-8')
        assert ByteCursor(struct.pack('>H', len(raw)) + raw).read_string() == 'caffè'

    def test_length_is_unsigned(self):
        """Test lengths above 32767 are not read as negative."""
        raw = b'a' * 40000
        assert ByteCursor(struct.pack('>H', 40000) + raw).read_string() == 'a' * 40000

    def test_invalid_utf8_raises(self):
        """Test malformed UTF-8 is invalid."""
        with pytest.raises(InvalidDataError, match="UTF-8"):
            ByteCursor(b'\x00\x02\xc3\x28').read_string()

    def test_length_beyond_buffer_raises(self):
        """Test a length prefix larger than the buffer does not over-read."""
        with pytest.raises(EofReachedError):
            ByteCursor(b'\x00\x10abc').read_string()


class TestByteCursorArrays:
    """Tests for read_array."""

    def test_byte_array_is_signed(self):
        """Test byte array elements decode as -128..127."""
        cursor = ByteCursor(b'\x00\x00\x00\x03\x01\xff\x80')
        assert cursor.read_array('b') == [1, -1, -128]
        assert cursor.at_end is True

    def test_int_array_big_endian(self):
        """Test each int element is decoded big-endian."""
        data = struct.pack('>i3i', 3, 1, -2, 70000)
        assert ByteCursor(data).read_array('i') == [1, -2, 70000]

    def test_empty_array(self):
        """Test a zero count gives an empty list."""
        assert ByteCursor(b'\x00\x00\x00\x00').read_array('i') == []

    def test_negative_length_raises(self):
        """Test a negative count is invalid."""
        with pytest.raises(InvalidDataError, match="negative length"):
            ByteCursor(b'\xff\xff\xff\xff').read_array('b')

    def test_count_beyond_buffer_raises(self):
        """Test a count larger than the buffer does not over-read."""
        with pytest.raises(EofReachedError):
            ByteCursor(struct.pack('>i2i', 5, 1, 2)).read_array('i')
