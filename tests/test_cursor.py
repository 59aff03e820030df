"""
Tests for the byte cursor — little-endian reads/writes, bounds, growth.
"""

from __future__ import annotations

import struct

import pytest

from kmp._format.cursor import ByteCursor, tag_bytes
from kmp._format.errors import OutOfBoundsError


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

class TestReads:

    def test_little_endian_integers(self):
        cur = ByteCursor(b"\x34\x12" + b"\x78\x56\x34\x12" + b"\xfe\xff\xff\xff")
        assert cur.read_u16() == 0x1234
        assert cur.read_u32() == 0x12345678
        assert cur.read_i32() == -2
        assert cur.position == 10
        assert cur.remaining == 0

    def test_read_tag(self):
        cur = ByteCursor(b"DMDCrest")
        assert cur.read_tag() == "DMDC"
        assert cur.position == 4

    def test_read_bytes(self):
        cur = ByteCursor(b"abcdef")
        cur.seek(2)
        assert cur.read_bytes(3) == b"cde"
        assert cur.position == 5

    def test_read_past_end(self):
        cur = ByteCursor(b"\x01\x02\x03")
        with pytest.raises(OutOfBoundsError, match="exceeds buffer"):
            cur.read_u32()
        # Failed read does not move the cursor
        assert cur.position == 0

    def test_read_after_seek_past_end(self):
        cur = ByteCursor(b"\x00" * 4)
        cur.seek(10)
        with pytest.raises(OutOfBoundsError):
            cur.read_bytes(1)

    def test_read_zero_bytes_at_end(self):
        cur = ByteCursor(b"ab")
        cur.seek(2)
        assert cur.read_bytes(0) == b""

    def test_negative_length_rejected(self):
        with pytest.raises(ValueError, match="Negative"):
            ByteCursor(b"ab").read_bytes(-1)

    def test_peek_does_not_consume(self):
        cur = ByteCursor(b"\x03\x00\xff\xff")
        assert cur.peek_u16() == 3
        assert cur.position == 0
        assert cur.read_u16() == 3

    def test_negative_seek(self):
        cur = ByteCursor(b"abc")
        with pytest.raises(OutOfBoundsError, match="negative"):
            cur.seek(-1)
        with pytest.raises(OutOfBoundsError):
            cur.position = -4


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

class TestWrites:

    def test_write_extends_buffer(self):
        cur = ByteCursor()
        cur.write_tag("DMDC")
        cur.write_u32(0x58)
        cur.write_u16(0x12)
        cur.write_i32(-1)
        assert cur.getvalue() == b"DMDC" + b"\x58\x00\x00\x00" + b"\x12\x00" + b"\xff" * 4
        assert len(cur) == 14

    def test_overwrite_in_place(self):
        cur = ByteCursor(b"\x00" * 8)
        cur.seek(4)
        cur.write_u32(0xAABBCCDD)
        cur.seek(0)
        cur.write_u16(1)
        assert cur.getvalue() == b"\x01\x00\x00\x00\xdd\xcc\xbb\xaa"
        assert len(cur) == 8

    def test_write_after_seek_past_end_zero_fills(self):
        cur = ByteCursor(b"ab")
        cur.position = 5
        cur.write_bytes(b"z")
        assert cur.getvalue() == b"ab\x00\x00\x00z"

    def test_overwrite_straddling_end(self):
        cur = ByteCursor(b"abcd")
        cur.seek(2)
        cur.write_bytes(b"XYZ")
        assert cur.getvalue() == b"abXYZ"

    def test_integer_range_checked(self):
        cur = ByteCursor()
        with pytest.raises(ValueError):
            cur.write_u16(0x10000)
        with pytest.raises(ValueError):
            cur.write_u32(-1)
        with pytest.raises(ValueError):
            cur.write_i32(2 ** 31)
        assert len(cur) == 0

    def test_tag_length_checked(self):
        with pytest.raises(ValueError, match="4 ASCII chars"):
            ByteCursor().write_tag("TOOLONG")

    def test_getvalue_is_snapshot(self):
        cur = ByteCursor()
        cur.write_u16(7)
        snap = cur.getvalue()
        cur.write_u16(8)
        assert snap == b"\x07\x00"


# ---------------------------------------------------------------------------
# Structs
# ---------------------------------------------------------------------------

PAIR = struct.Struct("<4sH")


class TestStructs:

    def test_read_struct(self):
        cur = ByteCursor(b"TPTK\x02\x00rest")
        assert cur.read_struct(PAIR) == (b"TPTK", 2)
        assert cur.position == PAIR.size

    def test_read_struct_past_end(self):
        with pytest.raises(OutOfBoundsError):
            ByteCursor(b"TPTK\x02").read_struct(PAIR)

    def test_write_struct(self):
        cur = ByteCursor()
        cur.write_struct(PAIR, b"HPLG", 0x0102)
        assert cur.getvalue() == b"HPLG\x02\x01"

    def test_write_struct_range_checked(self):
        cur = ByteCursor()
        with pytest.raises(ValueError, match="do not fit"):
            cur.write_struct(PAIR, b"HPLG", -1)
        assert len(cur) == 0

    def test_tag_bytes(self):
        assert tag_bytes("JBOG") == b"JBOG"
        with pytest.raises(ValueError, match="4 ASCII chars"):
            tag_bytes("JBO")
