"""Colour wheel and frame generators for LED strip animations."""

from __future__ import annotations

from collections.abc import Iterator

from .leds import BLACK, Color


def wheel(pos: int) -> Color:
    """Colour for a wheel position 0-255, going red - green - blue - back to red."""
    pos = 255 - (pos & 0xFF)
    if pos < 85:
        return Color(255 - pos * 3, 0, pos * 3)
    if pos < 170:
        pos -= 85
        return Color(0, pos * 3, 255 - pos * 3)
    pos -= 170
    return Color(pos * 3, 255 - pos * 3, 0)


def theater_chase_rainbow_frames(num_pixels: int) -> Iterator[list[Color]]:
    """Frames of theatre-style crawling lights with a rainbow effect."""
    strip = [BLACK] * num_pixels
    for j in range(256):
        for q in range(3):
            for i in range(0, num_pixels, 3):
                if i + q < num_pixels:
                    strip[i + q] = wheel((i + j) % 255)
            yield list(strip)
            for i in range(0, num_pixels, 3):
                if i + q < num_pixels:
                    strip[i + q] = BLACK


def rainbow_cycle_frames(num_pixels: int) -> Iterator[list[Color]]:
    """Frames of a rainbow spread evenly over the strip, five full cycles."""
    for j in range(256 * 5):
        yield [wheel(((i * 256 // num_pixels) + j) & 255) for i in range(num_pixels)]