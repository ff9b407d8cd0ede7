#!/usr/bin/env python3
"""
readelf output parsing.

Handles section header dumps (``readelf -W -S``) and combined section and
program header dumps (``readelf -W -S -l``).
"""

from enum import Enum
from typing import Dict, Iterator, Optional

from ..core.models import SectionLayout, SectionRecord
from .tokens import locate_anchor, parse_hex

# Column offsets relative to the [Nr] anchor in `readelf -W -S` output:
# [Nr] Name Type Address Off Size ES Flg Lk Inf Al
SECTION_NAME_OFFSET = 1
SECTION_SIZE_OFFSET = 5

# Column index of MemSiz in a program header line:
# Type Offset VirtAddr PhysAddr FileSiz MemSiz Flg Align
LOAD_MEMSIZ_COLUMN = 5


class DumpState(Enum):
    """Which part of a combined readelf dump is being read"""

    PREAMBLE = 0
    SECTION_HEADERS = 1
    PROGRAM_HEADERS = 2
    SEGMENT_MAPPING = 3


STATE_HEADINGS = (
    ('Section Headers:', DumpState.SECTION_HEADERS),
    ('Program Headers:', DumpState.PROGRAM_HEADERS),
    ('Section to Segment', DumpState.SEGMENT_MAPPING),
)


def parse_section_line(line: str) -> Optional[SectionRecord]:
    """
    Parse one section header line.

    The reserved null section at index 0 has no name and is skipped.

    Returns:
        SectionRecord, or None if the line is not a named section header
    """
    anchored = locate_anchor(line)
    if anchored is None or anchored.index == 0:
        return None
    name = anchored.field(SECTION_NAME_OFFSET)
    if not name:
        return None
    return SectionRecord(name=name, size_bytes=parse_hex(anchored.field(SECTION_SIZE_OFFSET)))


def iter_sections(output: str) -> Iterator[SectionRecord]:
    """Yield a SectionRecord for every section header line in output."""
    for line in output.splitlines():
        record = parse_section_line(line)
        if record is not None:
            yield record


def parse_section_sizes(output: str) -> Dict[str, int]:
    """
    Map section names to sizes from a `readelf -W -S` dump.

    Duplicate names keep the last size seen.
    """
    return {record.name: record.size_bytes for record in iter_sections(output)}


def parse_section_layout(output: str) -> SectionLayout:
    """
    Collect the section size table values from a `readelf -W -S -l` dump.

    Sizes of all .text* sections are summed, and the VM size is the sum of
    MemSiz over LOAD program headers.

    Returns:
        SectionLayout with text, eh, sframe and vm totals
    """
    state = DumpState.PREAMBLE
    text = eh_frame = eh_frame_hdr = sframe = vm = 0

    for line in output.splitlines():
        for heading, next_state in STATE_HEADINGS:
            if heading in line:
                state = next_state

        if state is DumpState.SECTION_HEADERS:
            record = parse_section_line(line)
            if record is None:
                continue
            if record.name.startswith('.text'):
                text += record.size_bytes
            elif record.name == '.eh_frame':
                eh_frame = record.size_bytes
            elif record.name == '.eh_frame_hdr':
                eh_frame_hdr = record.size_bytes
            elif record.name == '.sframe':
                sframe = record.size_bytes

        elif state is DumpState.PROGRAM_HEADERS:
            parts = line.split()
            if len(parts) > LOAD_MEMSIZ_COLUMN and parts[0] == 'LOAD':
                vm += parse_hex(parts[LOAD_MEMSIZ_COLUMN])

    return SectionLayout(text=text, eh=eh_frame + eh_frame_hdr, sframe=sframe, vm=vm)
