import pytest

from libcodabar import parser


def test_codes_have_two_or_three_wide_runs():
    for c, code in parser.codes.items():
        assert bin(code).count('1') in (2, 3), c
        assert code < (1 << parser.n_runs)


def test_codes_are_unique():
    assert len(parser.chars) == len(parser.patterns) == 20
    assert set(parser.codes) == set(parser.alphabet)


def test_aliases_share_codes():
    assert parser.codes['T'] == parser.codes['C']
    assert parser.codes['N'] == parser.codes['D']
    assert parser.lookup_char(parser.codes['T']) == 'C'
    assert parser.lookup_char(parser.codes['N']) == 'D'


def test_bit_i_is_run_i():
    # '0' ends on two wide runs
    assert parser.codes['0'] == (1 << 5) | (1 << 6)
    assert parser.code_to_pattern(parser.codes['A']) == 'nnWWnWn'
    assert parser.pattern_to_code('WWnnnnn') == parser.codes['3']


@pytest.mark.parametrize('narrow', [1, 2, 3, 5, 8])
def test_classify_at_every_scale(narrow):
    for c in parser.patterns:
        counters = parser.encode_char(c, narrow=narrow, ratio=2)
        assert parser.to_narrow_wide_pattern(counters) == c


@pytest.mark.parametrize('ratio', [2, 2.5, 3])
def test_classify_ratios(ratio):
    for c in parser.alphabet:
        counters = parser.encode_char(c, narrow=4, ratio=ratio)
        assert parser.to_narrow_wide_pattern(counters) == \
            parser.aliases.get(c, c)


def test_classify_uneven_widths():
    # 'A' with a bit of skew in the narrow and wide runs
    assert parser.to_narrow_wide_pattern([3, 4, 8, 9, 3, 8, 4]) == 'A'


def test_classify_sweep_reaches_min():
    # wide runs only one pixel wider than narrow ones
    assert parser.to_narrow_wide_pattern([1, 1, 1, 1, 1, 2, 2]) == '0'
    assert parser.to_narrow_wide_pattern([1, 1, 2, 2, 1, 2, 1]) == 'A'


def test_classify_misses():
    assert parser.to_narrow_wide_pattern([2] * 7) is None
    assert parser.to_narrow_wide_pattern([1, 1, 1, 1, 1, 1, 5]) is None
    assert parser.to_narrow_wide_pattern([1, 2, 1]) is None
    assert parser.to_narrow_wide_pattern([5, 5, 5, 5, 1, 1, 1]) is None


def test_check_digit():
    assert parser.compute_check_digit('123456789012') == 8
    assert parser.valid_check_digit('1234567890128')
    assert parser.compute_check_digit('2123400012345') == 3
    assert parser.valid_check_digit('21234000123453')


def test_altered_check_digit_fails():
    for d in range(1, 10):
        c = str((8 + d) % 10)
        assert not parser.valid_check_digit('123456789012' + c)


def test_check_digit_zero():
    assert parser.compute_check_digit('0000000000000') == 0
    assert parser.valid_check_digit('00000000000000')


def test_invalid_payloads():
    assert not parser.valid_check_digit('')
    assert not parser.valid_check_digit('7')
    assert not parser.valid_check_digit('12345-789012$8')


def test_gen_counters():
    counters = parser.gen_counters('A0A', narrow=2, ratio=3)
    assert len(counters) == 3 * 7 + 2
    assert counters[7] == 2
    assert counters[:7] == [2, 2, 6, 6, 2, 6, 2]
    with pytest.raises(ValueError):
        parser.gen_counters('A0A', narrow=0)
    with pytest.raises(ValueError):
        parser.gen_counters('A0A', ratio=1.5)
    with pytest.raises(ValueError):
        parser.encode_char('Z')


def test_gen_row_adds_sentinels():
    row = parser.gen_row('12', narrow=1, quiet=3)
    assert row.size == 3 * 2 + sum(parser.gen_counters('A12A'))
    assert not row.get(0)
    assert row.get(3)
