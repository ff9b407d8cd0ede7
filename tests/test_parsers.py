#!/usr/bin/env python3
"""
test_parsers.py - Unit tests for readelf, nm and bloaty output parsing
"""

import unittest

from ehstat.core.exceptions import ParseError
from ehstat.core.models import SymbolKind
from ehstat.parsing.bloaty import parse_section_share
from ehstat.parsing.nm import classify_symbol_type, parse_symbol_line, parse_text_symbols
from ehstat.parsing.readelf import parse_section_layout, parse_section_line, parse_section_sizes

from tests.tool_output import (
    BLOATY_OUTPUT,
    BLOATY_OUTPUT_NO_EH_FRAME,
    LAYOUT_EH,
    LAYOUT_SFRAME,
    LAYOUT_TEXT,
    LAYOUT_VM,
    NM_OUTPUT_A,
    READELF_LAYOUT_WITH_SFRAME,
    READELF_SECTIONS_NO_SFRAME,
)


class TestReadelfSections(unittest.TestCase):
    """Test `readelf -W -S` parsing"""

    def test_section_sizes(self):
        """Test name to size mapping"""
        sections = parse_section_sizes(READELF_SECTIONS_NO_SFRAME)
        self.assertEqual(sections['.text'], 0x100)
        self.assertEqual(sections['.eh_frame'], 0x40)
        self.assertEqual(sections['.interp'], 0x1c)
        self.assertNotIn('.sframe', sections)
        self.assertNotIn('.eh_frame_hdr', sections)

    def test_null_section_skipped(self):
        """Test that the unnamed index 0 entry is not retained"""
        sections = parse_section_sizes(READELF_SECTIONS_NO_SFRAME)
        self.assertNotIn('NULL', sections)
        self.assertNotIn('', sections)
        self.assertEqual(len(sections), 7)

    def test_last_duplicate_wins(self):
        """Test duplicate section names keep the last size"""
        output = (
            "  [ 1] .note PROGBITS 0000000000000000 000100 000010 00 A 0 0 4\n"
            "  [ 2] .note PROGBITS 0000000000000000 000110 000020 00 A 0 0 4\n"
        )
        self.assertEqual(parse_section_sizes(output), {'.note': 0x20})

    def test_malformed_size_is_zero(self):
        """Test that a garbled size column yields 0"""
        record = parse_section_line("  [ 4] .eh_frame PROGBITS 0000000000002010 002010 zz40 00 A 0 0 8")
        self.assertEqual(record.name, '.eh_frame')
        self.assertEqual(record.size_bytes, 0)

    def test_truncated_line(self):
        """Test that a line without a size column still yields a record"""
        record = parse_section_line("  [ 4] .eh_frame")
        self.assertEqual(record.size_bytes, 0)

    def test_empty_output(self):
        """Test empty readelf output"""
        self.assertEqual(parse_section_sizes(''), {})


class TestReadelfLayout(unittest.TestCase):
    """Test `readelf -W -S -l` parsing"""

    def test_layout_totals(self):
        """Test .text sum, EH, .sframe and LOAD MemSiz totals"""
        layout = parse_section_layout(READELF_LAYOUT_WITH_SFRAME)
        self.assertEqual(layout.text, LAYOUT_TEXT)
        self.assertEqual(layout.eh, LAYOUT_EH)
        self.assertEqual(layout.sframe, LAYOUT_SFRAME)
        self.assertEqual(layout.vm, LAYOUT_VM)

    def test_load_lines_outside_program_headers_ignored(self):
        """Test that LOAD rows only count under Program Headers"""
        output = (
            "Section Headers:\n"
            "  [ 1] .text PROGBITS 0000000000001000 001000 000100 00 AX 0 0 16\n"
            "  LOAD 0x000000 0x0 0x0 0x000100 0x000100 R 0x1000\n"
        )
        layout = parse_section_layout(output)
        self.assertEqual(layout.text, 0x100)
        self.assertEqual(layout.vm, 0)

    def test_sections_only_dump(self):
        """Test a dump without program headers"""
        layout = parse_section_layout(READELF_SECTIONS_NO_SFRAME)
        self.assertEqual(layout.text, 0x100)
        self.assertEqual(layout.eh, 0x40)
        self.assertEqual(layout.sframe, 0)
        self.assertEqual(layout.vm, 0)


class TestNmSymbols(unittest.TestCase):
    """Test `nm --size-sort` parsing"""

    def test_text_symbols_above_threshold(self):
        """Test that only T/t symbols larger than the threshold are kept"""
        symbols = parse_text_symbols(NM_OUTPUT_A, 0x5)
        self.assertEqual(symbols, {'foo': 0x10, 'local_helper': 0x18, 'bar': 0x30})

    def test_threshold_is_exclusive(self):
        """Test that a symbol exactly at the threshold is dropped"""
        symbols = parse_text_symbols(NM_OUTPUT_A, 0x10)
        self.assertNotIn('foo', symbols)
        self.assertIn('bar', symbols)

    def test_classify(self):
        """Test symbol type letter classification"""
        self.assertIs(classify_symbol_type('T'), SymbolKind.TEXT)
        self.assertIs(classify_symbol_type('t'), SymbolKind.TEXT)
        self.assertIs(classify_symbol_type('D'), SymbolKind.DATA)
        self.assertIs(classify_symbol_type('b'), SymbolKind.DATA)
        self.assertIs(classify_symbol_type('W'), SymbolKind.OTHER)
        self.assertIs(classify_symbol_type('U'), SymbolKind.OTHER)

    def test_name_with_spaces(self):
        """Test that demangled names keep their spaces"""
        record = parse_symbol_line("0000000000000040 T foo(int, char const*)")
        self.assertEqual(record.name, 'foo(int, char const*)')
        self.assertEqual(record.size_bytes, 0x40)

    def test_short_lines_skipped(self):
        """Test lines with fewer than three fields"""
        self.assertIsNone(parse_symbol_line("0000000000000040 T"))
        self.assertIsNone(parse_symbol_line(""))
        self.assertEqual(parse_text_symbols("\nnm: a.out: no symbols\n", 0), {})


class TestBloaty(unittest.TestCase):
    """Test bloaty report parsing"""

    def test_eh_frame_share(self):
        """Test VM size share of .eh_frame"""
        metrics = parse_section_share(BLOATY_OUTPUT, '/usr/bin/ls')
        self.assertEqual(metrics.path, '/usr/bin/ls')
        self.assertEqual(metrics.total_vm_kb, 450.0)
        self.assertEqual(metrics.section_vm_kb, 27.5)
        self.assertEqual(metrics.ratio_percent, round(27.5 / 450 * 100, 4))

    def test_eh_frame_hdr_not_mistaken(self):
        """Test that .eh_frame_hdr is not read as .eh_frame"""
        metrics = parse_section_share(BLOATY_OUTPUT, 'x', section='.eh_frame_hdr')
        self.assertEqual(metrics.section_vm_kb, 5.22)

    def test_missing_section(self):
        """Test that a file without .eh_frame is a parse failure"""
        with self.assertRaises(ParseError):
            parse_section_share(BLOATY_OUTPUT_NO_EH_FRAME, 'x')

    def test_missing_total(self):
        """Test that output without a TOTAL row is a parse failure"""
        with self.assertRaises(ParseError):
            parse_section_share("   5.2%  27.5Ki   6.1%  27.5Ki    .eh_frame\n", 'x')

    def test_zero_total(self):
        """Test that a zero total VM size is rejected"""
        output = (
            "   5.2%  27.5Ki   0.0%       0    .eh_frame\n"
            " 100.0%   527Ki 100.0%       0    TOTAL\n"
        )
        with self.assertRaises(ParseError):
            parse_section_share(output, 'x')

    def test_unrecognized_unit(self):
        """Test that an unknown size suffix skips the record"""
        output = (
            "   5.2%  27.5Ki   6.1%  27.5KB    .eh_frame\n"
            " 100.0%   527Ki 100.0%   450Ki    TOTAL\n"
        )
        with self.assertRaises(ParseError):
            parse_section_share(output, 'x')


if __name__ == '__main__':
    unittest.main()
