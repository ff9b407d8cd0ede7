#!/usr/bin/env python3
"""
Ratio, percentage and delta computations.

Every computation whose denominator may be zero returns None instead of
raising; reports render None as "N/A".
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Mapping, Optional

from ..core.models import ComparisonRow, EhFrameSizes

NOT_AVAILABLE = 'N/A'


def round_half_up(value: float, places: int) -> float:
    """
    Round to places, with ties going away from zero.

    Example:
        >>> round_half_up(12.25, 1)
        12.3
    """
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def compare_symbol_sizes(sizes_a: Mapping[str, int], sizes_b: Mapping[str, int]) -> List[ComparisonRow]:
    """
    Compare sizes of symbols present in both mappings.

    Args:
        sizes_a: Symbol sizes in the first file
        sizes_b: Symbol sizes in the second file

    Returns:
        One row per common symbol, sorted by ratio (size_b / size_a)
        descending, then by name. Symbols with zero size in the first file
        are left out.
    """
    rows = [
        ComparisonRow(name=name, size_a=sizes_a[name], size_b=sizes_b[name])
        for name in sizes_a.keys() & sizes_b.keys()
        if sizes_a[name] > 0
    ]
    rows.sort(key=lambda row: (-row.ratio, row.name))
    return rows


def safe_ratio(numerator: float, denominator: float, places: int = 4) -> Optional[float]:
    """Return numerator / denominator rounded to places, or None if denominator is 0."""
    if not denominator:
        return None
    return round_half_up(numerator / denominator, places)


def percent_of(part: float, whole: float, places: int = 1) -> Optional[float]:
    """Return part as a percentage of whole, or None if whole is 0."""
    if not whole:
        return None
    return round_half_up(part / whole * 100, places)


def percent_change(baseline: float, value: float, places: int = 1) -> Optional[float]:
    """Return the percentage change from baseline to value, or None if baseline is 0."""
    if not baseline:
        return None
    return round_half_up((value - baseline) / baseline * 100, places)


def eh_frame_sizes(sections: Dict[str, int]) -> EhFrameSizes:
    """
    Collect unwinding section sizes from a section name to size mapping.

    The .sframe ratios are only defined when the file has an .sframe section
    and the denominator is non-zero.
    """
    sizes = EhFrameSizes(
        sframe=sections.get('.sframe', 0),
        eh_frame=sections.get('.eh_frame', 0),
        eh_frame_hdr=sections.get('.eh_frame_hdr', 0),
    )
    if '.sframe' in sections:
        sizes.sframe_to_eh_frame = safe_ratio(sizes.sframe, sizes.eh_frame)
        sizes.sframe_to_eh = safe_ratio(sizes.sframe, sizes.eh)
    return sizes


def format_optional(value: Optional[float], suffix: str = '') -> str:
    """Render a computed value, or N/A when it is undefined."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value}{suffix}"


def format_signed_percent(value: Optional[float]) -> str:
    """Render a percentage change with an explicit + for increases."""
    if value is None:
        return NOT_AVAILABLE
    sign = '+' if value > 0 else ''
    return f"{sign}{value}%"
