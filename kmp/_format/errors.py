"""Error kinds raised while decoding or encoding a container."""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    BAD_MAGIC = "bad-magic"
    INVALID_SECTION_COUNT = "invalid-section-count"
    DUPLICATE_SECTION = "duplicate-section"
    UNKNOWN_TAG = "unknown-tag"
    OUT_OF_BOUNDS = "out-of-bounds"
    EMPTY_WITH_ENTRIES = "empty-with-entries"
    TOO_LARGE = "too-large"
    IO = "io"


class KMPFormatError(Exception):
    """Malformed container or section."""

    kind: ErrorKind


class BadMagicError(KMPFormatError):
    kind = ErrorKind.BAD_MAGIC


class InvalidSectionCountError(KMPFormatError):
    kind = ErrorKind.INVALID_SECTION_COUNT


class FileTooLargeError(KMPFormatError, ValueError):
    """Input exceeds the configured size limit."""

    kind = ErrorKind.TOO_LARGE


class DuplicateSectionError(KMPFormatError):
    kind = ErrorKind.DUPLICATE_SECTION

    def __init__(self, tag: str) -> None:
        super().__init__(f"Duplicate section: {tag}")
        self.tag = tag


class UnknownTagError(KMPFormatError):
    kind = ErrorKind.UNKNOWN_TAG

    def __init__(self, tag: str) -> None:
        super().__init__(f"Unknown section magic: {tag}")
        self.tag = tag


class OutOfBoundsError(KMPFormatError):
    """Read past the end of the buffer, or seek before its start."""

    kind = ErrorKind.OUT_OF_BOUNDS
