"""
Writer — serializes documents to the canonical container layout.

Strategy:
  1. Header with a zero total size, fixed count/header size/version
  2. Offset table reserved (18 slots)
  3. Sections in canonical order; before each one, seek back and write
     its slot (position - section start), then seek forward and write it
  4. Patch the total size once the stream length is known
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from kmp import MAGIC, OUTPUT_HEADER_SIZE, OUTPUT_SECTION_COUNT, OUTPUT_VERSION
from kmp._format.codec import encode_section
from kmp._format.cursor import ByteCursor
from kmp._format.document import KMPDocument, KMPSection
from kmp._format.spec import (
    CANONICAL_ORDER, HEADER_SIZE, HEADER_STRUCT, OFFSET_SLOT_SIZE, section_start,
)

TOTAL_SIZE_POSITION = 0x04


def canonical_sections(doc: KMPDocument) -> list[KMPSection]:
    """The 18 output sections, empty placeholders for tags not in ``doc``."""
    return [doc.sections.get(tag) or KMPSection.empty(tag) for tag in CANONICAL_ORDER]


class KMPWriter:

    @staticmethod
    def serialize(doc: KMPDocument) -> bytes:
        """Serialize a document to bytes. Pure — does not mutate the input."""
        sections = canonical_sections(doc)
        start = section_start(OUTPUT_SECTION_COUNT)

        out = ByteCursor()
        # Total size is patched once the stream is complete
        out.write_struct(
            HEADER_STRUCT, MAGIC, 0, OUTPUT_SECTION_COUNT, OUTPUT_HEADER_SIZE, OUTPUT_VERSION,
        )

        # Reserve the offset table
        out.write_bytes(bytes(OUTPUT_SECTION_COUNT * OFFSET_SLOT_SIZE))

        current = out.position
        for slot, section in enumerate(sections):
            out.seek(HEADER_SIZE + slot * OFFSET_SLOT_SIZE)
            out.write_u32(current - start)
            out.seek(current)
            encode_section(out, section)
            current = out.position

        out.seek(TOTAL_SIZE_POSITION)
        out.write_u32(len(out))
        return out.getvalue()

    @staticmethod
    def write(doc: KMPDocument, path: str | Path, mode: int = 0o644) -> int:
        """Write a document to file atomically. Returns bytes written."""
        data = KMPWriter.serialize(doc)
        dir_name = os.path.dirname(os.path.abspath(path)) or "."
        fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix=".kmp.tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        return len(data)
