"""
Document model — one decoded container and its tag-keyed sections.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kmp._format.errors import DuplicateSectionError, ErrorKind


@dataclass
class KMPSection:
    """A tagged block of entries.

    ``entry_count`` is kept separately from ``entries`` because zero-payload
    tags carry a count with no per-entry bytes.
    """

    tag: str
    entry_count: int = 0
    extra: int = 0
    entries: list[bytes] = field(default_factory=list)

    @classmethod
    def empty(cls, tag: str) -> KMPSection:
        return cls(tag=tag)

    @property
    def payload_size(self) -> int:
        return sum(len(e) for e in self.entries)


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem noticed while parsing."""

    kind: ErrorKind
    detail: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.detail}"


@dataclass
class KMPDocument:
    version: int = 0
    header_size: int = 0
    total_size: int = 0
    sections: dict[str, KMPSection] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add_section(self, section: KMPSection) -> None:
        """Insert a section; the first occurrence of a tag wins."""
        if section.tag in self.sections:
            raise DuplicateSectionError(section.tag)
        self.sections[section.tag] = section

    def note(self, kind: ErrorKind, detail: str) -> None:
        self.diagnostics.append(Diagnostic(kind, detail))

    @property
    def section_names(self) -> list[str]:
        return list(self.sections.keys())
