import pytest

from espnixie.effects import rainbow_cycle_frames, theater_chase_rainbow_frames, wheel
from espnixie.leds import BLACK


def test_wheel_primary_points():
    assert wheel(0) == (255, 0, 0)
    assert wheel(85) == (0, 255, 0)
    assert wheel(170) == (0, 0, 255)


@pytest.mark.parametrize("pos", range(256))
def test_wheel_components_sum_to_full(pos):
    color = wheel(pos)
    assert sum(color) == 255
    assert all(0 <= c <= 255 for c in color)


def test_wheel_wraps_byte():
    assert wheel(256 + 40) == wheel(40)


def test_theater_chase_lights_every_third_pixel():
    frames = list(theater_chase_rainbow_frames(6))
    for index, frame in enumerate(frames[:30]):
        q = index % 3
        for i, color in enumerate(frame):
            if i % 3 != q:
                assert color == BLACK


def test_theater_chase_first_frame_uses_wheel():
    first = next(theater_chase_rainbow_frames(6))
    assert first[0] == wheel(0)
    assert first[3] == wheel(3)


def test_theater_chase_repeats_after_255_steps():
    frames = list(theater_chase_rainbow_frames(7))
    assert frames[0:3] == frames[255 * 3 : 255 * 3 + 3]


def test_rainbow_cycle_is_periodic():
    frames = list(rainbow_cycle_frames(6))
    assert len(frames) % 256 == 0
    assert frames[10] == frames[10 + 256]
    assert all(len(frame) == 6 for frame in frames)


def test_rainbow_cycle_first_pixel_follows_wheel():
    for j, frame in enumerate(rainbow_cycle_frames(4)):
        if j >= 300:
            break
        assert frame[0] == wheel(j)