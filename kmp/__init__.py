"""
KMP Updater — upgrade DMDC course files to the canonical newer layout.

Architecture:
    Parse:    header + offset table -> tag-keyed sections (version-aware JBOG)
    Assemble: fixed 18-tag order, empty placeholders for missing sections
    Write:    chained offsets back-patched per section + patched total size
"""

__version__ = "0.1.0"

MAGIC = b"DMDC"

# Output header constants
OUTPUT_SECTION_COUNT = 0x12
OUTPUT_HEADER_SIZE = 0x58  # 0x10 header + 18 * 4 offset slots
OUTPUT_VERSION = 0xC1C

# Input versions at or below this carry 0x3C-byte JBOG records
JBOG_LEGACY_MAX_VERSION = 0xBB8

OUTPUT_SUFFIX = ".new.kmp"
MAX_FILE_SIZE = 16 * 1024 * 1024  # 16 MB
