"""
Byte cursor — sequential little-endian reads and writes over one buffer.

Reads never grow the buffer and fail with OutOfBoundsError when fewer
bytes remain than requested. Writes overwrite in place and extend the
buffer (zero-filling any gap left by a forward seek).
"""

from __future__ import annotations

import struct

from kmp._format.errors import OutOfBoundsError
from kmp._format.spec import TAG_SIZE

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")


def tag_bytes(tag: str) -> bytes:
    """Encode a tag, rejecting anything but exactly four ASCII chars."""
    raw = tag.encode("ascii")
    if len(raw) != TAG_SIZE:
        raise ValueError(f"Tag must be {TAG_SIZE} ASCII chars, got {tag!r}")
    return raw


class ByteCursor:
    """Read/write cursor over an in-memory buffer.

    Usage:
        cur = ByteCursor(data)
        magic = cur.read_tag()
        size = cur.read_u32()

        out = ByteCursor()
        out.write_tag("DMDC")
        out.write_u32(0)
    """

    def __init__(self, data: bytes | bytearray = b"") -> None:
        self._buf = bytearray(data)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._buf)

    @property
    def position(self) -> int:
        return self._pos

    @position.setter
    def position(self, value: int) -> None:
        self.seek(value)

    def seek(self, position: int) -> None:
        if position < 0:
            raise OutOfBoundsError(f"Seek to negative position {position}")
        self._pos = position

    @property
    def remaining(self) -> int:
        return max(0, len(self._buf) - self._pos)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    # --- Reads ---

    def read_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"Negative read length: {length}")
        if length > self.remaining:
            raise OutOfBoundsError(
                f"Read of {length} bytes at 0x{self._pos:X} exceeds buffer "
                f"length 0x{len(self._buf):X}"
            )
        chunk = bytes(self._buf[self._pos:self._pos + length])
        self._pos += length
        return chunk

    def read_struct(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack(self.read_bytes(fmt.size))

    def _unpack(self, fmt: struct.Struct) -> int:
        return self.read_struct(fmt)[0]

    def read_tag(self) -> str:
        return self.read_bytes(TAG_SIZE).decode("latin-1")

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def peek_u16(self) -> int:
        value = self.read_u16()
        self._pos -= _U16.size
        return value

    # --- Writes ---

    def write_bytes(self, data: bytes) -> None:
        end = self._pos + len(data)
        if self._pos > len(self._buf):
            self._buf.extend(bytes(self._pos - len(self._buf)))
        self._buf[self._pos:end] = data
        self._pos = end

    def write_struct(self, fmt: struct.Struct, *values) -> None:
        try:
            packed = fmt.pack(*values)
        except struct.error as e:
            raise ValueError(f"Values {values!r} do not fit {fmt.format!r}: {e}") from e
        self.write_bytes(packed)

    def _pack(self, fmt: struct.Struct, value: int) -> None:
        self.write_struct(fmt, value)

    def write_tag(self, tag: str) -> None:
        self.write_bytes(tag_bytes(tag))

    def write_u16(self, value: int) -> None:
        self._pack(_U16, value)

    def write_u32(self, value: int) -> None:
        self._pack(_U32, value)

    def write_i32(self, value: int) -> None:
        self._pack(_I32, value)
