"""Report formatting utilities for ehstat."""

from . import csv_stream
from . import summary_formatter
from . import table

__all__ = ['csv_stream', 'summary_formatter', 'table']
