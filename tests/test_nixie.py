import pytest

from espnixie.nixie import (
    DIGIT_OFF,
    NixieDisplay,
    digit_code,
    digit_enabled,
    digit_group_high,
    digit_group_low,
    digit_value,
    int_codes,
    point_enabled,
)


def test_digit_code_round_trip():
    for v in range(10):
        code = digit_code(v, True, True)
        assert digit_value(code) == v
        assert digit_enabled(code) and point_enabled(code)
    assert DIGIT_OFF == 0


def test_group_bytes_for_disabled_zero():
    assert digit_group_high(DIGIT_OFF, True, True, True) == 0
    assert digit_group_low(DIGIT_OFF, True, True, True) == 0


def test_int_codes_positions():
    codes = int_codes(42, 1, 1)
    assert [digit_value(c) for c in codes[1:3]] == [2, 4]
    assert [digit_enabled(c) for c in codes] == [False, True, True, False, False, False]


def test_int_codes_min_digits_pads_zeros():
    codes = int_codes(5, 0, 3)
    assert [digit_enabled(c) for c in codes[:3]] == [True, True, True]
    assert [digit_value(c) for c in codes[:3]] == [5, 0, 0]


def test_int_codes_invalid():
    with pytest.raises(ValueError):
        int_codes(1, 6, 1)
    with pytest.raises(ValueError):
        int_codes(1, 0, 0)


def test_set_float_point():
    d = NixieDisplay()
    d.set_float(-3.5, 1, 1)
    codes = d.digits
    assert digit_value(codes[0]) == 5
    assert digit_value(codes[1]) == 3 and point_enabled(codes[1])


def test_set_digits_and_clear():
    d = NixieDisplay()
    d.set_digits([1, 2, 3, 4], 1, 2, 2)
    assert d.digits == [DIGIT_OFF, DIGIT_OFF, digit_code(2, 1, 0), digit_code(3, 1, 0), DIGIT_OFF, DIGIT_OFF]
    d.clear()
    assert d.digits == [DIGIT_OFF] * 6


def test_update_cycles_and_writes():
    written = []
    d = NixieDisplay(lambda h, l: written.append((h, l)))
    d.set_int(123456, 0)
    outs = [d.update() for _ in range(3)]
    assert written == outs
    assert outs[0] != outs[1]
    assert d.update() == outs[0]


def test_set_codes_length():
    with pytest.raises(ValueError):
        NixieDisplay().set_codes([0, 0])