"""Six-digit nixie tube display driven by two multiplexed shift-register bytes."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

NIXIE_DIGITS_COUNT = 6
NIXIE_GROUP_COUNT = 2


def _bv(bit: int) -> int:
    return 1 << bit


def digit_code(value: int, enabled, point) -> int:
    """Pack a digit value with its enable and decimal point flags."""
    return ((int(enabled) & 1) << 7) | ((int(point) & 1) << 6) | (value & 0x0F)


DIGIT_OFF = digit_code(0, 0, 0)


def digit_value(code: int) -> int:
    return code & 0x0F


def digit_enabled(code: int) -> bool:
    return bool(code & _bv(7))


def point_enabled(code: int) -> bool:
    return bool(code & _bv(6))


def _bits(d: int, mapping: Sequence[int]) -> int:
    return sum(_bv(target) for bit, target in enumerate(mapping) if d & _bv(bit))


def digit_group_high(code: int, r0, r1, r2) -> int:
    """Byte for the high tube group."""
    on = digit_enabled(code)
    return (
        _bits(digit_value(code), (4, 2, 1, 3))
        | (_bv(7) if point_enabled(code) else 0)
        | (_bv(0) if on and r0 else 0)
        | (_bv(5) if on and r1 else 0)
        | (_bv(6) if on and r2 else 0)
    )


def digit_group_low(code: int, r0, r1, r2) -> int:
    """Byte for the low tube group."""
    on = digit_enabled(code)
    return (
        _bits(digit_value(code), (7, 5, 4, 6))
        | (_bv(3) if point_enabled(code) else 0)
        | (_bv(2) if on and r0 else 0)
        | (_bv(1) if on and r1 else 0)
        | (_bv(0) if on and r2 else 0)
    )


def int_codes(value: int, pos: int, min_num_digits: int) -> list[int]:
    """Codes showing value with its lowest digit at position pos (0 is rightmost)."""
    if min_num_digits < 1 or not 0 <= pos < NIXIE_DIGITS_COUNT:
        raise ValueError("invalid position or digit count")
    digits = [0] * NIXIE_DIGITS_COUNT
    p = pos
    while True:
        digits[p] = value % 10
        value //= 10
        p += 1
        if not (p < NIXIE_DIGITS_COUNT and (value > 0 or p - pos < min_num_digits)):
            break
    return [digit_code(d, pos <= i < p, 0) for i, d in enumerate(digits)]


class NixieDisplay:
    """Holds the digit codes and produces the bytes for each multiplex step."""

    def __init__(self, write: Optional[Callable[[int, int], None]] = None):
        self._write = write
        self._counter = 0
        self._digits = [DIGIT_OFF] * NIXIE_DIGITS_COUNT

    @property
    def digits(self) -> list[int]:
        return list(self._digits)

    def set_codes(self, codes: Sequence[int]) -> None:
        """Set the six codes, index 0 being the rightmost tube."""
        if len(codes) != NIXIE_DIGITS_COUNT:
            raise ValueError(f"expected {NIXIE_DIGITS_COUNT} codes")
        self._digits = list(codes)

    def clear(self) -> None:
        self._digits = [DIGIT_OFF] * NIXIE_DIGITS_COUNT

    def clear_force(self) -> None:
        self.clear()
        for _ in range(NIXIE_GROUP_COUNT):
            self.update()

    def update(self) -> tuple[int, int]:
        """Advance to the next multiplex group and emit its two bytes."""
        self._counter += 1
        if self._counter > NIXIE_GROUP_COUNT:
            self._counter = 0
        c = self._counter
        high = digit_group_high(self._digits[c], c == 2, c == 1, c == 0)
        low = digit_group_low(self._digits[3 + c], c == 2, c == 1, c == 0)
        if self._write:
            self._write(high, low)
        return high, low

    def set_digits(self, digits: Sequence[int], offset: int, count: int, pos: int) -> None:
        """Show count digits starting at digits[offset], placed from position pos."""
        self.set_codes(
            [
                digit_code(digits[i - pos + offset], 1, 0) if i >= pos and i - pos < count else DIGIT_OFF
                for i in range(NIXIE_DIGITS_COUNT)
            ]
        )

    def set_int(self, value: int, pos: int) -> None:
        self.set_codes(int_codes(value, pos, 1))

    def set_float(self, value: float, pos: int, num_frac: int) -> None:
        """Show value with num_frac fractional digits; the point follows position pos."""
        for _ in range(num_frac):
            value *= 10
        codes = int_codes(int(abs(value)), pos - num_frac, num_frac + 1)
        codes[pos] = digit_code(digit_value(codes[pos]), 1, num_frac > 0)
        self.set_codes(codes)