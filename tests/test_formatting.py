#!/usr/bin/env python3
"""
test_formatting.py - Tests for table, CSV and summary rendering
"""

import io
import unittest

from ehstat.analysis.stats import summarize
from ehstat.commands.compare import format_comparison, truncate_name
from ehstat.core.models import ComparisonRow
from ehstat.utils.csv_stream import CsvStream
from ehstat.utils.summary_formatter import build_summary_context, render_summary
from ehstat.utils.table import format_table


class TestFormatTable(unittest.TestCase):
    """Test fixed-width table rendering"""

    def test_alignment_and_rule(self):
        """Test column widths, alignment and separator rule"""
        table = format_table(['Filename', 'VM size'], [['a', '12'], ['longer/name', '3456']])
        lines = table.split('\n')
        self.assertEqual(lines[0], 'Filename    | VM size')
        self.assertEqual(lines[1], '------------+--------')
        self.assertEqual(lines[2], 'a           |      12')
        self.assertEqual(lines[3], 'longer/name |    3456')

    def test_header_only(self):
        """Test a table without data rows"""
        self.assertEqual(format_table(['A', 'Bee'], []), 'A | Bee\n--+----')


class TestCsvStream(unittest.TestCase):
    """Test incremental CSV output"""

    class _FlushCounter(io.StringIO):
        flushes = 0

        def flush(self):
            self.flushes += 1
            super().flush()

    def test_header_then_rows_flushed(self):
        """Test that every row is flushed as it is written"""
        out = self._FlushCounter()
        stream = CsvStream(out, ['File', 'Ratio'])
        self.assertEqual(out.getvalue(), 'File,Ratio\n')
        stream.write_row(['/usr/bin/ls', 6.1111])
        self.assertEqual(out.getvalue(), 'File,Ratio\n/usr/bin/ls,6.1111\n')
        self.assertEqual(out.flushes, 2)

    def test_quotes_commas(self):
        """Test that fields containing commas stay one column"""
        out = io.StringIO()
        CsvStream(out, ['Symbol']).write_row(['f(int, int)'])
        self.assertEqual(out.getvalue().splitlines()[1], '"f(int, int)"')


class TestComparisonTable(unittest.TestCase):
    """Test the symbol comparison layout"""

    def test_layout(self):
        """Test heading, rule and row formatting"""
        text = format_comparison([ComparisonRow('foo', 0x10, 0x20)], 'a.out', 'b.out', 0x5)
        lines = text.split('\n')
        self.assertEqual(lines[0], '')
        self.assertEqual(lines[1], 'Comparing 1 common functions above threshold 0x5')
        self.assertEqual(lines[2], '%-60s %12s %12s %8s' % ('Symbol', 'a.out', 'b.out', 'Ratio'))
        self.assertEqual(lines[3], '-' * 88)
        self.assertEqual(lines[4], '%-60s %12s %12s %8s' % ('foo', '0x10', '0x20', '2.000'))

    def test_truncate_long_names(self):
        """Test that names over 60 characters are shortened to 60"""
        name = 'n' * 75
        self.assertEqual(truncate_name(name), 'n' * 57 + '...')
        self.assertEqual(truncate_name('n' * 60), 'n' * 60)


class TestSummaryRendering(unittest.TestCase):
    """Test the Jinja2 scan summary"""

    def test_context_rounding_and_labels(self):
        """Test rounded statistics and bucket labels"""
        stats = summarize([1.23456, 2.5], [0, 1, 2.5, 4])
        context = build_summary_context(stats, 2)
        self.assertEqual(context['stats']['min'], 1.2346)
        self.assertEqual([b['label'] for b in context['buckets']], ['0%-1%', '1%-2.5%', '2.5%-4%'])
        self.assertEqual([b['count'] for b in context['buckets']], [0, 1, 1])

    def test_default_template(self):
        """Test the built-in summary template"""
        stats = summarize([3.0, 5.5, 0.3], [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 12])
        text = render_summary(stats, 3)
        self.assertIn('=== Summary Statistics ===', text)
        self.assertIn('Total files analyzed: 3', text)
        self.assertIn('  Min: 0.3%', text)
        self.assertIn('  Max: 5.5%', text)
        self.assertIn('  Median: 3.0%', text)
        self.assertIn('  3%-4%: 1 files', text)
        self.assertIn('  2%-3%: 0 files', text)
        self.assertIn('  10%-12%: 0 files', text)

    def test_no_results(self):
        """Test that statistics are omitted when nothing was analyzed"""
        text = render_summary(None, 0)
        self.assertIn('Total files analyzed: 0', text)
        self.assertNotIn('Min:', text)
        self.assertNotIn('Distribution', text)

    def test_missing_custom_template(self):
        """Test that a missing template path raises FileNotFoundError"""
        with self.assertRaises(FileNotFoundError):
            render_summary(None, 0, '/nonexistent/summary.j2')


if __name__ == '__main__':
    unittest.main()
