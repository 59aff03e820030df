"""
Container Layout Specification.

Layout:
    0x00  "DMDC"                 <- Magic (4 ASCII bytes)
    0x04  u32 total size         <- Byte length of the whole file
    0x08  u16 section count
    0x0A  u16 header size
    0x0C  i32 format version
    0x10  u32[count] offsets     <- Relative to section_start(count)
    ....  sections

Section:
    4-char tag, u16 entry count, u16 extra value, entry blocks

Output always carries the 18 tags of CANONICAL_ORDER, in that order.
"""

import struct

HEADER_SIZE = 0x10
HEADER_STRUCT = struct.Struct("<4sIHHi")  # magic, total size, count, header size, version

SECTION_HEADER_STRUCT = struct.Struct("<4sHH")  # tag, entry count, extra value

OFFSET_SLOT_SIZE = 4
TAG_SIZE = 4

CANONICAL_ORDER = (
    "TPTK",  # kart start points
    "TPNE",  # enemy points
    "HPNE",  # enemy paths
    "TPTI",  # item points
    "HPTI",  # item paths
    "TPKC",  # checkpoints
    "HPKC",  # checkpoint paths
    "JBOG",  # objects
    "ITOP",  # routes
    "AERA",  # areas
    "EMAC",  # cameras
    "TPGJ",  # respawn points
    "TPNC",
    "TPSM",
    "IGTS",  # stage info
    "SROC",
    "TPLG",  # glider points
    "HPLG",  # glider paths
)


def section_start(section_count: int) -> int:
    """Absolute position that section offsets are relative to."""
    return section_count * OFFSET_SLOT_SIZE + HEADER_SIZE
