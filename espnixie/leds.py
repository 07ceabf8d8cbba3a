"""RGB LED strip with backlight, custom fills and a rainbow effect."""

from __future__ import annotations

import colorsys
import math
import time
from typing import Callable, NamedTuple, Optional

LED_COUNT = 6
DEFAULT_BACKLIGHT_BRIGHTNESS = 40
BRIGHTNESS_MIN_VALUE = 10
BRIGHTNESS_MAX_VALUE = 255
_INITIAL_BRIGHTNESS = 255
_BPM = 60


class Color(NamedTuple):
    r: int
    g: int
    b: int

    def hex(self) -> str:
        return f"{self.r:02x}{self.g:02x}{self.b:02x}"


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)

ShowCallback = Callable[[list[Color], int], None]


class LedStrip:
    """LED strip whose hardware order is reversed relative to the logical order."""

    def __init__(self, show: Optional[ShowCallback] = None, count: int = LED_COUNT):
        self._show = show
        self._num = count
        self._leds = [BLACK] * count
        self.brightness = _INITIAL_BRIGHTNESS
        self._backlight_on = False
        self._backlight_color = WHITE
        self.backlight_brightness = DEFAULT_BACKLIGHT_BRIGHTNESS
        self._hue16 = 0
        self._clock = time.monotonic
        self.backlight()

    @property
    def is_backlight_on(self) -> bool:
        return self._backlight_on

    @property
    def backlight_color(self) -> Color:
        return self._backlight_color

    def get(self) -> list[Color]:
        """Current colors in logical order."""
        return self._leds[::-1]

    def info(self) -> str:
        return "".join(f"{c.hex()}\r\n" for c in self.get())

    def set_with_brightness(self, setup: Callable[[list[Color], int], int]) -> None:
        """setup edits the color list in place and returns the new brightness."""
        leds = self.get()
        brightness = setup(leds, self.brightness)
        new = leds[::-1]
        if new != self._leds or brightness != self.brightness:
            self._leds = new
            self.brightness = brightness
            if self._show:
                self._show(list(self._leds), brightness)

    def set(self, setup: Callable[[list[Color]], None]) -> None:
        """setup edits the color list in place; backlight brightness is used."""
        def wrapped(leds, _brightness):
            setup(leds)
            return self.backlight_brightness

        self.set_with_brightness(wrapped)

    def fill(self, color: Color, brightness: int) -> None:
        def wrapped(leds, _brightness):
            leds[:] = [color] * len(leds)
            return brightness

        self.set_with_brightness(wrapped)

    def backlight(self) -> None:
        self.fill(self._backlight_color if self._backlight_on else BLACK, self.backlight_brightness)

    def rainbow(self) -> None:
        self._hue16 = (self._hue16 + 9) & 0xFFFF
        hue = (self._hue16 // 256) / 256
        r, g, b = colorsys.hsv_to_rgb(hue, 1.0, 1.0)
        color = Color(round(r * 255), round(g * 255), round(b * 255))
        phase = self._clock() * _BPM / 60
        brightness = round((math.sin(2 * math.pi * phase) + 1) / 2 * 255)

        def wrapped(leds, _brightness):
            leds[:] = [color] * len(leds)
            return brightness

        self.set_with_brightness(wrapped)

    def _set_backlight(self, on: bool) -> None:
        self._backlight_on = on
        self.backlight()

    def backlight_on(self) -> None:
        self._set_backlight(True)

    def backlight_off(self) -> None:
        self._set_backlight(False)

    def backlight_toggle(self) -> None:
        self._set_backlight(not self._backlight_on)

    def set_backlight_brightness(self, brightness: int) -> None:
        if BRIGHTNESS_MIN_VALUE <= brightness < BRIGHTNESS_MAX_VALUE:
            self.backlight_brightness = brightness

    def set_backlight_color(self, color: Color) -> None:
        self._backlight_color = color

    def up_backlight_brightness(self, delta: int = 10) -> None:
        self.set_backlight_brightness(min(self.backlight_brightness + delta, BRIGHTNESS_MAX_VALUE))

    def down_backlight_brightness(self, delta: int = 10) -> None:
        self.set_backlight_brightness(max(self.backlight_brightness - delta, BRIGHTNESS_MIN_VALUE))