#!/usr/bin/env python

from .objects import BitRow, Result, CODABAR
from .parser import valid_check_digit, to_narrow_wide_pattern
from .linescan import (
    decode_row, decode_linescan, find_start_pattern, is_valid,
    LibraryCodabarReader)

__all__ = [
    'BitRow', 'Result', 'CODABAR', 'valid_check_digit',
    'to_narrow_wide_pattern', 'decode_row', 'decode_linescan',
    'find_start_pattern', 'is_valid', 'LibraryCodabarReader']
