"""Shared fixtures: synthetic DMDC containers built in memory."""

from __future__ import annotations

import struct

import pytest


def build_kmp(
    sections: list[tuple[str, int, int, bytes]],
    version: int = 0xC1C,
    header_size: int | None = None,
    section_count: int | None = None,
) -> bytes:
    """Build a container from (tag, entry count, extra, payload) tuples.

    Sections are laid out back to back in list order, and the offset table
    lists them in the same order.
    """
    count = len(sections) if section_count is None else section_count
    start = count * 4 + 0x10

    body = b""
    offsets = []
    for tag, entry_count, extra, payload in sections:
        offsets.append(len(body))
        body += tag.encode("ascii") + struct.pack("<HH", entry_count, extra) + payload

    header = struct.pack(
        "<4sIHHi", b"DMDC", start + len(body), count,
        start if header_size is None else header_size, version,
    )
    table = b"".join(struct.pack("<I", off) for off in offsets)
    return header + table + body


def entry(size: int, fill: int) -> bytes:
    """A recognisable entry block: ``fill`` followed by its index bytes."""
    return bytes((fill + i) & 0xFF for i in range(size))


@pytest.fixture
def make_kmp():
    return build_kmp
