"""Incremental CSV output."""

import csv
from typing import Any, Sequence, TextIO


class CsvStream:
    """Writes CSV rows one at a time, flushing after each so partial runs are usable"""

    def __init__(self, stream: TextIO, header: Sequence[str]):
        self.stream = stream
        self._writer = csv.writer(stream, lineterminator='\n')
        self._write(header)

    def _write(self, row: Sequence[Any]) -> None:
        self._writer.writerow(row)
        self.stream.flush()

    def write_row(self, row: Sequence[Any]) -> None:
        """Write a data row."""
        self._write(row)
