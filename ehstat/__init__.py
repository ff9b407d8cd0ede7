#!/usr/bin/env python3
"""
ehstat - exception-handling section and symbol size statistics.

This package wraps readelf, nm and bloaty to report on ELF section sizes,
symbol sizes and unwinding metadata (.eh_frame, .eh_frame_hdr, .sframe)
overhead in executables and shared libraries.
"""

__version__ = "1.0.0"
