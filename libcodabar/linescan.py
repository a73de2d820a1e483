#!/usr/bin/env python
"""
BitRow to Library Codabar result

Find a start character with a quiet zone in front of it, read 7 run
characters until the row runs out, trim at the stop character and check
the length and check digit.
"""

import logging

from . import parser
from .objects import BitRow, Result, CODABAR


log = logging.getLogger(__name__)


errors = {
    -1: 'missing start pattern',
    -2: 'invalid character pattern',
    -3: 'missing quiet zone after end pattern',
    -4: 'invalid start character',
    -5: 'invalid number of characters',
    -6: 'invalid check digit',
    -7: 'invalid input',
}


default_kwargs = {
    'ral': None,
    'dark': True,
}


def error_string(code):
    return errors.get(code, 'unknown error')


def is_valid(r):
    return isinstance(r, Result)


def record_pattern(row, start, n=parser.n_runs):
    """Count the next n runs starting at start

    Returns None if the row ends before n runs are seen. Ending exactly on
    the last run is fine.
    """
    end = row.size
    if start >= end:
        return None
    counters = [0] * n
    is_white = not row.get(start)
    counter_position = 0
    i = start
    while i < end:
        if row.get(i) != is_white:
            counters[counter_position] += 1
        else:
            counter_position += 1
            if counter_position == n:
                break
            counters[counter_position] = 1
            is_white = not is_white
        i += 1
    if not (counter_position == n or (
            counter_position == n - 1 and i == end)):
        return None
    return counters


def find_start_pattern(row):
    """Bounds [start, end) of the first start character in row

    Each 7 run window is classified on its own. A match needs white space
    in front of it at least half as wide as the window. Returns None if
    there is no match.
    """
    width = row.size
    row_offset = row.next_set(0)
    pattern_length = parser.n_runs
    counters = [0] * pattern_length
    counter_position = 0
    pattern_start = row_offset
    is_white = False
    for i in range(row_offset, width):
        if row.get(i) != is_white:
            counters[counter_position] += 1
            continue
        if counter_position == pattern_length - 1:
            char = parser.to_narrow_wide_pattern(counters)
            if parser.is_sentinel(char):
                quiet_start = max(0, pattern_start - (i - pattern_start) // 2)
                if row.is_range(quiet_start, pattern_start, False):
                    return pattern_start, i
            # slide past the oldest bar/space pair
            pattern_start += counters[0] + counters[1]
            counters = counters[2:] + [0, 0]
            counter_position -= 1
        else:
            counter_position += 1
        counters[counter_position] = 1
        is_white = not is_white
    return None


def _fail(code, row_number):
    log.debug("row %s not decodable: %s", row_number, error_string(code))
    return code


def decode_row(row_number, row, hints=None):
    """Decode one row, returns a Result or a negative error code

    hints is accepted for symmetry with other readers and ignored.
    """
    if row is None or not hasattr(row, 'next_set'):
        return _fail(-7, row_number)
    start = find_start_pattern(row)
    if start is None:
        return _fail(-1, row_number)
    pattern_start, pattern_end = start

    # the start bounds only place the left point, reading starts at the
    # first bar of the row
    next_start = row.next_set(0)
    end = row.size
    result = []
    counters = None
    last_start = next_start
    while True:
        counters = record_pattern(row, next_start)
        if counters is None:
            return _fail(-2, row_number)
        char = parser.to_narrow_wide_pattern(counters)
        if char is None:
            return _fail(-2, row_number)
        result.append(char)
        last_start = next_start
        next_start = row.next_set(next_start + sum(counters))
        if next_start >= end:
            break

    # white space after the last character, unless the row ran out; the
    # loop above only stops at the row end, so this never fails today
    last_pattern_size = sum(counters)
    white_space_after_end = next_start - last_start - last_pattern_size
    if next_start != end and white_space_after_end * 2 < last_pattern_size:
        return _fail(-3, row_number)

    if len(result) < 2:
        return _fail(-5, row_number)
    start_char = result[0]
    if not parser.is_sentinel(start_char):
        return _fail(-4, row_number)

    # drop anything after the stop character
    for k in range(1, len(result)):
        if result[k] == start_char:
            if k + 1 != len(result):
                del result[k + 1:]
            break

    if len(result) != parser.character_length + 2:
        return _fail(-5, row_number)
    payload = ''.join(result[1:-1])

    if not parser.valid_check_digit(payload):
        return _fail(-6, row_number)

    left = (pattern_start + pattern_end) / 2.
    right = (next_start + last_start) / 2.
    log.debug("row %s decoded: %s", row_number, payload)
    return Result(
        payload,
        ((left, float(row_number)), (right, float(row_number))),
        CODABAR)


def decode_linescan(vs, row_number=0, **kwargs):
    """Binarize a grayscale linescan and decode it"""
    if len(vs) == 0:
        return _fail(-7, row_number)
    kw = dict(default_kwargs)
    kw.update(kwargs)
    row = BitRow.from_linescan(vs, ral=kw['ral'], dark=kw['dark'])
    return decode_row(row_number, row)


class LibraryCodabarReader(object):
    """Row reader for 14 digit Library Codabar

    Callers pick a reader by format and call decode_row on each row.
    """
    format = CODABAR

    def decode_row(self, row_number, row, hints=None):
        return decode_row(row_number, row, hints=hints)

    def __repr__(self):
        return "LibraryCodabarReader()"
