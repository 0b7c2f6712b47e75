"""Scoped Unique IDs - short, distributed, human-readable identifiers."""

from __future__ import annotations

from suid.suid import (
    ALPHABET,
    BLOCK_COUNT,
    IDS_PER_BLOCK,
    MASK_BLOCK,
    MASK_ID,
    MASK_RESERVED,
    MAX_LENGTH,
    Suid,
    SuidError,
    SuidFormatError,
    SuidNullOperandError,
    from_ints,
    from_strings,
    looks_valid,
    to_ints,
    to_strings,
)


__all__ = [
    "ALPHABET",
    "BLOCK_COUNT",
    "IDS_PER_BLOCK",
    "MASK_BLOCK",
    "MASK_ID",
    "MASK_RESERVED",
    "MAX_LENGTH",
    "Suid",
    "SuidError",
    "SuidFormatError",
    "SuidNullOperandError",
    "from_ints",
    "from_strings",
    "looks_valid",
    "to_ints",
    "to_strings",
]
