#!/usr/bin/env python
"""
Library Codabar characters, narrow/wide classification and check digits

A character is 7 runs (bar, space, bar, space, bar, space, bar). Its code
is a 7 bit mask with bit i set when run i is wide.
"""

import numpy

from .objects import BitRow


narrow_char = 'n'
wide_char = 'W'

n_runs = 7

# payload digits, not counting start/stop characters
character_length = 14

alphabet = '0123456789-$:/.+ABCDTN'

# narrow/wide runs for each character
patterns = {
    '0': 'nnnnnWW',
    '1': 'nnnnWWn',
    '2': 'nnnWnnW',
    '3': 'WWnnnnn',
    '4': 'nnWnnWn',
    '5': 'WnnnnWn',
    '6': 'nWnnnnW',
    '7': 'nWnnWnn',
    '8': 'nWWnnnn',
    '9': 'WnnWnnn',
    '-': 'nnnWWnn',
    '$': 'nnWWnnn',
    ':': 'WnnnWnW',
    '/': 'WnWnnnW',
    '.': 'WnWnWnn',
    '+': 'nnWnWnW',
    'A': 'nnWWnWn',
    'B': 'nWnWnnW',
    'C': 'nnnWnWW',
    'D': 'nnnWWWn',
}

# T and N share the codes of C and D
aliases = {'T': 'C', 'N': 'D'}

# start/stop characters
sentinels = 'ABCDTN'


def pattern_to_code(pattern):
    code = 0
    for (i, c) in enumerate(pattern):
        if c == wide_char:
            code |= 1 << i
    return code


def code_to_pattern(code):
    return ''.join(
        [wide_char if (code >> i) & 1 else narrow_char
         for i in range(n_runs)])


codes = {c: pattern_to_code(p) for (c, p) in patterns.items()}
for _a, _c in aliases.items():
    codes[_a] = codes[_c]
del _a, _c

# reverse lookup, aliases excluded so C and D are returned
chars = {pattern_to_code(p): c for (c, p) in patterns.items()}


def lookup_char(code):
    return chars.get(code, None)


def is_sentinel(char):
    return char is not None and char in sentinels


def to_narrow_wide_pattern(counters):
    """Classify 7 run lengths as a character

    The threshold sweeps down from the widest run; at each step runs
    strictly wider than the threshold are wide. The first threshold giving
    2 or 3 wide runs that form a known code wins. Returns None on a miss.
    """
    if len(counters) != n_runs:
        return None
    min_counter = min(counters)
    max_narrow_counter = max(counters)
    while max_narrow_counter >= min_counter:
        wide_counters = 0
        code = 0
        for (i, counter) in enumerate(counters):
            if counter > max_narrow_counter:
                code |= 1 << i
                wide_counters += 1
        if wide_counters in (2, 3):
            char = lookup_char(code)
            if char is not None:
                return char
        max_narrow_counter -= 1
    return None


def compute_check_digit(data):
    """Mod 10 check digit for a string of data digits

    Digits at even (0 based) positions are summed as is, digits at odd
    positions are doubled (less 9 if over 9).
    """
    even_total = 0
    odd_total = 0
    for (i, c) in enumerate(data):
        d = int(c)
        if i % 2 == 0:
            even_total += d
        else:
            d *= 2
            if d > 9:
                d -= 9
            odd_total += d
    r = (even_total + odd_total) % 10
    if r == 0:
        return 0
    return 10 - r


def valid_check_digit(payload):
    """True if the last digit of payload checks the digits before it"""
    if len(payload) < 2:
        return False
    if not all(c in '0123456789' for c in payload):
        return False
    return int(payload[-1]) == compute_check_digit(payload[:-1])


def counters_for_pattern(pattern, narrow=1, ratio=2):
    wide = int(round(narrow * ratio))
    return [wide if c == wide_char else narrow for c in pattern]


def encode_char(char, narrow=1, ratio=2):
    """Run lengths for one character"""
    if char not in codes:
        raise ValueError("Invalid character: %r" % (char, ))
    return counters_for_pattern(
        code_to_pattern(codes[char]), narrow=narrow, ratio=ratio)


def gen_counters(text, narrow=1, ratio=2):
    """Run lengths for a full symbol, characters joined by narrow gaps

    text must include its start and stop characters.
    """
    if narrow < 1:
        raise ValueError("narrow must be >= 1: %s" % narrow)
    if ratio < 2:
        raise ValueError("ratio must be >= 2: %s" % ratio)
    counters = []
    for (i, char) in enumerate(text):
        if i:
            counters.append(narrow)
        counters.extend(encode_char(char, narrow=narrow, ratio=ratio))
    return counters


def gen_row(text, narrow=1, ratio=2, quiet=None, start='A', stop=None):
    """Render a payload as a BitRow with quiet zones on both sides

    text is the payload; start and stop characters are added unless text
    already begins with a sentinel. quiet defaults to 10 narrow modules.
    """
    if stop is None:
        stop = start
    if len(text) == 0 or not is_sentinel(text[0]):
        text = start + text + stop
    if quiet is None:
        quiet = 10 * narrow
    counters = gen_counters(text, narrow=narrow, ratio=ratio)
    bits = [False] * quiet
    for (i, counter) in enumerate(counters):
        bits.extend([i % 2 == 0] * counter)
    bits.extend([False] * quiet)
    return BitRow(numpy.array(bits, dtype='bool'))


def gen_payload(data):
    """Append the check digit to a string of data digits"""
    return data + str(compute_check_digit(data))
