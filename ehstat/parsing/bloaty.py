"""bloaty output parsing."""

import logging
from typing import List, Optional

from ..analysis.metrics import percent_of
from ..core.exceptions import ParseError
from ..core.models import FileMetrics
from .tokens import parse_size_to_kb

logger = logging.getLogger(__name__)

TOTAL_LABEL = 'TOTAL'


def _vm_size_kb(parts: List[str]) -> Optional[float]:
    """VM size is the second-to-last column of a bloaty row."""
    if len(parts) < 2:
        return None
    return parse_size_to_kb(parts[-2])


def find_row(output: str, label: str) -> Optional[List[str]]:
    """Return the columns of the first row whose label column is exactly label."""
    for line in output.splitlines():
        parts = line.split()
        if parts and parts[-1] == label:
            return parts
    return None


def parse_section_share(output: str, path: str, section: str = '.eh_frame') -> FileMetrics:
    """
    Compute a section's share of the total VM size from bloaty output.

    Args:
        output: Default bloaty report (sections, FILE SIZE and VM SIZE columns)
        path: File the report describes
        section: Section whose share is measured

    Returns:
        FileMetrics for path

    Raises:
        ParseError: If the TOTAL or section row is missing or unparseable,
            or the total VM size is zero
    """
    total_row = find_row(output, TOTAL_LABEL)
    if total_row is None:
        raise ParseError(f"No {TOTAL_LABEL} row in bloaty output")
    total_vm_kb = _vm_size_kb(total_row)
    if not total_vm_kb:
        raise ParseError(f"Unusable total VM size in row: {' '.join(total_row)}")

    section_row = find_row(output, section)
    if section_row is None:
        raise ParseError(f"No {section} row in bloaty output")
    section_vm_kb = _vm_size_kb(section_row)
    if section_vm_kb is None:
        raise ParseError(f"Unusable {section} VM size in row: {' '.join(section_row)}")

    ratio = percent_of(section_vm_kb, total_vm_kb, 4)
    logger.debug("%s: %s %.4f of %.4f KiB", path, section, section_vm_kb, total_vm_kb)
    return FileMetrics(path=path, total_vm_kb=total_vm_kb,
                       section_vm_kb=section_vm_kb, ratio_percent=ratio)
