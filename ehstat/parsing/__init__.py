#!/usr/bin/env python3
"""
Parsers for the textual output of readelf, nm and bloaty.

Each parser turns loosely structured tool output into plain mappings or
records, treating missing and malformed fields as absent.
"""
