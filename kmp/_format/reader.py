"""
Reader — offset-table driven parser for DMDC containers.

Each offset slot is decoded independently: the cursor jumps to the slot's
section, decodes it, and returns to the next slot. A bad slot (unknown tag,
duplicate tag, or a truncated body in lenient mode) is reported on the
document and parsing continues with the remaining slots.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kmp import MAGIC, MAX_FILE_SIZE
from kmp._format.codec import SECTION_RULES, EmptyRule, decode_section
from kmp._format.cursor import ByteCursor
from kmp._format.document import KMPDocument
from kmp._format.errors import (
    BadMagicError,
    DuplicateSectionError,
    ErrorKind,
    FileTooLargeError,
    InvalidSectionCountError,
    OutOfBoundsError,
    UnknownTagError,
)
from kmp._format.spec import HEADER_STRUCT, TAG_SIZE, section_start

log = logging.getLogger(__name__)


class KMPReader:
    """
    Container file reader.

    Usage:
        doc = KMPReader.read("course.kmp")
        doc = KMPReader.parse(data, strict=False)
    """

    @staticmethod
    def is_kmp_bytes(data: bytes) -> bool:
        """Fast check if bytes start with the container magic."""
        return data[:TAG_SIZE] == MAGIC

    @classmethod
    def read(cls, path: str | Path, strict: bool = True, max_size: int = MAX_FILE_SIZE) -> KMPDocument:
        """Fully parse a file into a KMPDocument."""
        path = Path(path)
        file_size = path.stat().st_size
        if file_size > max_size:
            raise FileTooLargeError(
                f"File size {file_size} exceeds maximum {max_size} bytes. "
                f"Pass max_size= to override."
            )
        return cls.parse(path.read_bytes(), strict=strict, max_size=max_size)

    @classmethod
    def parse(cls, data: bytes, strict: bool = True, max_size: int = MAX_FILE_SIZE) -> KMPDocument:
        """Parse bytes into a KMPDocument.

        With ``strict`` a section body running past the buffer aborts the
        parse; otherwise that slot is dropped and reported.
        """
        if len(data) > max_size:
            raise FileTooLargeError(
                f"Input size {len(data)} exceeds maximum {max_size} bytes. "
                f"Pass max_size= to override."
            )
        cursor = ByteCursor(data)

        if not cls.is_kmp_bytes(data):
            raise BadMagicError(f"Invalid magic: {bytes(data[:TAG_SIZE])!r}")

        doc = KMPDocument()
        _, doc.total_size, section_count, doc.header_size, doc.version = (
            cursor.read_struct(HEADER_STRUCT)
        )

        if section_count <= 0:
            raise InvalidSectionCountError(f"Invalid nrSections: {section_count}")

        start = section_start(section_count)
        for slot in range(section_count):
            offset = cursor.read_u32()
            resume = cursor.position
            cls._read_slot(doc, cursor, slot, start + offset, strict)
            cursor.seek(resume)

        return doc

    @staticmethod
    def _read_slot(doc: KMPDocument, cursor: ByteCursor, slot: int, position: int, strict: bool) -> None:
        cursor.seek(position)
        try:
            section = decode_section(cursor, doc.version)
        except UnknownTagError as e:
            log.warning("Slot %d: %s", slot, e)
            doc.note(ErrorKind.UNKNOWN_TAG, f"slot {slot}: {e.tag}")
            return
        except OutOfBoundsError as e:
            if strict:
                raise
            log.warning("Slot %d: section at 0x%X truncated: %s", slot, position, e)
            doc.note(ErrorKind.OUT_OF_BOUNDS, f"slot {slot}: {e}")
            return

        try:
            doc.add_section(section)
        except DuplicateSectionError as e:
            log.warning("Slot %d: %s", slot, e)
            doc.note(ErrorKind.DUPLICATE_SECTION, f"slot {slot}: {e.tag}")
            return

        if section.entry_count and isinstance(SECTION_RULES[section.tag], EmptyRule):
            log.warning(
                "Section %s declares %d entries but carries no entry data",
                section.tag, section.entry_count,
            )
            doc.note(
                ErrorKind.EMPTY_WITH_ENTRIES,
                f"{section.tag}: {section.entry_count} entries without payload",
            )
