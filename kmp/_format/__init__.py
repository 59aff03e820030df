"""
Internal container format engine for DMDC course files.

Layout: 16-byte header, offset table (one u32 per section, relative to the
end of the table), then sections of 4-char tag + u16 count + u16 extra +
entries. All integers little-endian.
"""

from kmp._format.spec import CANONICAL_ORDER, HEADER_STRUCT, SECTION_HEADER_STRUCT
from kmp._format.errors import ErrorKind, KMPFormatError
from kmp._format.cursor import ByteCursor
from kmp._format.document import Diagnostic, KMPDocument, KMPSection
from kmp._format.reader import KMPReader
from kmp._format.writer import KMPWriter, canonical_sections
