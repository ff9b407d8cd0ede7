"""nm symbol table parsing."""

from typing import Dict, Iterator, Optional

from ..core.models import SymbolKind, SymbolRecord
from .tokens import parse_hex

DATA_TYPE_CODES = frozenset('bBdDgGrRsS')


def classify_symbol_type(type_code: str) -> SymbolKind:
    """Map an nm type letter to a SymbolKind (case selects local/global only)."""
    if type_code in ('t', 'T'):
        return SymbolKind.TEXT
    if type_code in DATA_TYPE_CODES:
        return SymbolKind.DATA
    return SymbolKind.OTHER


def parse_symbol_line(line: str) -> Optional[SymbolRecord]:
    """
    Parse a `nm --size-sort` line of the form ``<size> <type> <name>``.

    Returns:
        SymbolRecord, or None for lines with fewer than three fields
    """
    parts = line.strip().split(None, 2)
    if len(parts) < 3:
        return None
    size, type_code, name = parts
    if len(type_code) != 1:
        return None
    return SymbolRecord(name=name, size_bytes=parse_hex(size), kind=classify_symbol_type(type_code))


def iter_symbols(output: str) -> Iterator[SymbolRecord]:
    """Yield a SymbolRecord for every well-formed line of nm output."""
    for line in output.splitlines():
        record = parse_symbol_line(line)
        if record is not None:
            yield record


def parse_text_symbols(output: str, threshold: int) -> Dict[str, int]:
    """
    Map code symbol names to sizes, keeping only symbols larger than threshold.

    Args:
        output: nm output
        threshold: Exclusive lower bound on symbol size in bytes

    Returns:
        Dictionary of symbol name to size; duplicate names keep the last size
    """
    return {
        record.name: record.size_bytes
        for record in iter_symbols(output)
        if record.kind is SymbolKind.TEXT and record.size_bytes > threshold
    }
