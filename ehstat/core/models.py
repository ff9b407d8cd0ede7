#!/usr/bin/env python3
"""
Data structures shared by the ehstat parsers and reports.

All records are transient: built from one tool invocation, reported, and
discarded within a single run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class SymbolKind(Enum):
    """Symbol categories derived from nm type letters"""

    TEXT = "text"
    DATA = "data"
    OTHER = "other"


@dataclass
class SectionRecord:
    """Represents a section header line from readelf"""
    name: str
    size_bytes: int


@dataclass
class SymbolRecord:
    """Represents a symbol line from nm"""
    name: str
    size_bytes: int
    kind: SymbolKind


@dataclass
class ComparisonRow:
    """Size of one symbol in two files"""
    name: str
    size_a: int
    size_b: int

    @property
    def ratio(self) -> float:
        """Size in the second file relative to the first"""
        return self.size_b / self.size_a


@dataclass
class FileMetrics:
    """VM size share of a single section in one file, as reported by bloaty"""
    path: str
    total_vm_kb: float
    section_vm_kb: float
    ratio_percent: float

    def to_row(self) -> List[Any]:
        """Convert to a CSV row"""
        return [self.path, self.total_vm_kb, self.section_vm_kb, self.ratio_percent]


@dataclass
class SectionLayout:
    """Per-file totals for the section size table"""
    text: int = 0
    eh: int = 0
    sframe: int = 0
    vm: int = 0


@dataclass
class EhFrameSizes:
    """Unwinding metadata section sizes of one file"""
    sframe: int
    eh_frame: int
    eh_frame_hdr: int
    sframe_to_eh_frame: Optional[float] = None
    sframe_to_eh: Optional[float] = None

    @property
    def eh(self) -> int:
        """Combined .eh_frame and .eh_frame_hdr size"""
        return self.eh_frame + self.eh_frame_hdr

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for JSON serialization"""
        return {
            'sframe': self.sframe,
            'eh_frame': self.eh_frame,
            'eh_frame_hdr': self.eh_frame_hdr,
            'eh': self.eh,
            'sframe_to_eh_frame': self.sframe_to_eh_frame,
            'sframe_to_eh': self.sframe_to_eh,
        }


@dataclass
class HistogramBucket:
    """Count of values in the half-open interval [lower, upper)"""
    lower: float
    upper: float
    count: int = 0

    def contains(self, value: float) -> bool:
        """Check whether value falls in this bucket"""
        return self.lower <= value < self.upper


@dataclass
class SummaryStatistics:
    """Distribution summary of a sequence of ratios"""
    count: int
    minimum: float
    maximum: float
    mean: float
    median: float
    histogram: List[HistogramBucket]
