"""
Section codec — per-tag entry layouts.

Every known tag maps to one rule:
    FixedRule(size)      <- every entry is ``size`` bytes
    VariableRule(fn)     <- entry length measured from the cursor, not consumed
    EmptyRule()          <- entry count is carried but no bytes follow
    VersionedRule(...)   <- short legacy records padded to the current shape

Decoded entries are raw byte blocks; encoding writes them back unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from kmp import JBOG_LEGACY_MAX_VERSION
from kmp._format.cursor import ByteCursor, tag_bytes
from kmp._format.document import KMPSection
from kmp._format.errors import UnknownTagError
from kmp._format.spec import SECTION_HEADER_STRUCT

log = logging.getLogger(__name__)

# Padding appended to legacy JBOG records (presence flags)
JBOG_LEGACY_PADDING = b"\xff\xff\x00\x00"


@dataclass(frozen=True)
class FixedRule:
    size: int

    def read_entry(self, cursor: ByteCursor, version: int) -> bytes:
        return cursor.read_bytes(self.size)


@dataclass(frozen=True)
class VariableRule:
    measure: Callable[[ByteCursor], int]

    def read_entry(self, cursor: ByteCursor, version: int) -> bytes:
        return cursor.read_bytes(self.measure(cursor))


@dataclass(frozen=True)
class EmptyRule:

    def read_entry(self, cursor: ByteCursor, version: int) -> bytes | None:
        return None


@dataclass(frozen=True)
class VersionedRule:
    """Records that grew between versions.

    Files at or below ``legacy_max_version`` store ``legacy_size`` bytes per
    entry, which are padded with ``padding`` up to ``size``.
    """

    size: int
    legacy_size: int
    legacy_max_version: int
    padding: bytes

    def __post_init__(self) -> None:
        if self.legacy_size + len(self.padding) != self.size:
            raise ValueError(
                f"Padding of {len(self.padding)} bytes does not extend "
                f"{self.legacy_size} to {self.size}"
            )

    def read_entry(self, cursor: ByteCursor, version: int) -> bytes:
        if version <= self.legacy_max_version:
            return cursor.read_bytes(self.legacy_size) + self.padding
        return cursor.read_bytes(self.size)


def _route_length(cursor: ByteCursor) -> int:
    """Route entry: u16 point count, u16 settings, then 0x10 bytes per point."""
    return 4 + cursor.peek_u16() * 0x10


SECTION_RULES: dict[str, FixedRule | VariableRule | EmptyRule | VersionedRule] = {
    "TPTK": FixedRule(0x1C),
    "TPNE": FixedRule(0x18),
    "HPNE": FixedRule(0x48),
    "TPTI": FixedRule(0x14),
    "HPTI": FixedRule(0x1C),
    "TPKC": FixedRule(0x18),
    "HPKC": FixedRule(0x10),
    "JBOG": VersionedRule(
        size=0x40,
        legacy_size=0x3C,
        legacy_max_version=JBOG_LEGACY_MAX_VERSION,
        padding=JBOG_LEGACY_PADDING,
    ),
    "ITOP": VariableRule(_route_length),
    "AERA": FixedRule(0x30),
    "EMAC": FixedRule(0x48),
    "TPGJ": FixedRule(0x1C),
    "TPNC": EmptyRule(),
    "TPSM": EmptyRule(),
    "IGTS": FixedRule(0x0C),
    "SROC": EmptyRule(),
    "TPLG": FixedRule(0x18),
    "HPLG": FixedRule(0x0C),
}


def is_known_tag(tag: str) -> bool:
    return tag in SECTION_RULES


def decode_section(cursor: ByteCursor, version: int) -> KMPSection:
    """Decode one section at the cursor position.

    Raises UnknownTagError for tags without a rule (the entries are left
    unread), OutOfBoundsError when the entries run past the buffer.
    """
    raw_tag, entry_count, extra = cursor.read_struct(SECTION_HEADER_STRUCT)
    tag = raw_tag.decode("latin-1")

    rule = SECTION_RULES.get(tag)
    if rule is None:
        raise UnknownTagError(tag)

    section = KMPSection(tag=tag, entry_count=entry_count, extra=extra)
    for _ in range(entry_count):
        entry = rule.read_entry(cursor, version)
        if entry is not None:
            section.entries.append(entry)

    log.debug("Decoded %s: %d entries, %d bytes", tag, entry_count, section.payload_size)
    return section


def encode_section(cursor: ByteCursor, section: KMPSection) -> None:
    """Write section header and raw entry blocks at the cursor position."""
    cursor.write_struct(
        SECTION_HEADER_STRUCT, tag_bytes(section.tag), section.entry_count, section.extra,
    )
    for entry in section.entries:
        if entry:
            cursor.write_bytes(entry)
