#!/usr/bin/env python3
"""
Tokenizing helpers for columnar tool output.

readelf prints section headers behind a bracketed index whose width varies
(``[ 1]`` vs ``[12]``), so columns are addressed relative to that anchor
rather than by absolute position.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

ANCHOR_PATTERN = re.compile(r'\s*\[\s*(\d+)\]')
HEX_PATTERN = re.compile(r'(0[xX])?[0-9a-fA-F]+')
SIZE_PATTERN = re.compile(r'^(\d+\.?\d*)(Ki|Mi|Gi)?$')

# Multipliers to convert a bloaty size suffix to kibibytes
SIZE_UNITS_KB = {
    None: 1 / 1024,
    'Ki': 1,
    'Mi': 1024,
    'Gi': 1024 * 1024,
}


@dataclass
class AnchoredLine:
    """A line split around its bracketed index token"""
    index: int
    fields: List[str]

    def field(self, offset: int) -> Optional[str]:
        """Return the column ``offset`` places after the anchor, or None.

        Offset 1 is the first column following the anchor.
        """
        if offset < 1 or offset > len(self.fields):
            return None
        return self.fields[offset - 1]


def locate_anchor(line: str) -> Optional[AnchoredLine]:
    """
    Find the leading ``[N]`` token of a line.

    Args:
        line: A single line of tool output

    Returns:
        AnchoredLine with the index and following columns, or None if the
        line does not start with a bracketed index
    """
    match = ANCHOR_PATTERN.match(line)
    if not match:
        return None
    return AnchoredLine(index=int(match.group(1)), fields=line[match.end():].split())


def parse_hex(text: Optional[str], default: int = 0) -> int:
    """
    Parse an unsigned hexadecimal field, with or without a 0x prefix.

    Args:
        text: Field text
        default: Value returned when the field is absent or malformed

    Returns:
        Parsed integer, or default
    """
    if not text or not HEX_PATTERN.fullmatch(text):
        return default
    return int(text, 16)


def parse_size_to_kb(text: Optional[str]) -> Optional[float]:
    """
    Normalize a bloaty size column to kibibytes.

    Accepts ``Ki``, ``Mi`` and ``Gi`` suffixes; a bare number is a byte count.

    Examples:
        >>> parse_size_to_kb('2.5Mi')
        2560.0
        >>> parse_size_to_kb('512')
        0.5

    Returns:
        Size in kibibytes, or None for unrecognized formats
    """
    if not text:
        return None
    match = SIZE_PATTERN.match(text)
    if not match:
        return None
    return float(match.group(1)) * SIZE_UNITS_KB[match.group(2)]
