# espnixie

The logic of a six-digit nixie-tube clock, kept apart from the hardware it
drives. Hardware outputs are callables that you pass in. Time comes from a
clock callable where one is needed. So every part runs and tests on any machine.

## Parts

- `espnixie.nixie` encodes tube digits.
  - `digit_code` packs a digit value, an enable bit and a decimal-point bit
    into one code. `digit_value`, `digit_enabled` and `point_enabled` unpack it.
  - `digit_group_high` and `digit_group_low` map a code onto the two
    shift-register bytes of a multiplexed group.
  - `int_codes` renders an integer as six codes. It raises `ValueError` for a
    bad position or digit count.
  - `NixieDisplay` holds the six codes. Each call to `update()` moves to the
    next group, returns its `(high, low)` bytes and passes them to the optional
    `write` callable.
  - `NixieDisplay` also has `set_codes`, `set_int`, `set_float`, `set_digits`,
    `clear` and `clear_force`.
- `espnixie.leds` has `LedStrip` and a `Color` named tuple; `Color.hex()`
  gives `rrggbb`.
  - The strip keeps a backlight colour and brightness: `backlight_on`,
    `backlight_off`, `backlight_toggle`, `set_backlight_color`,
    `set_backlight_brightness`, `up_backlight_brightness`,
    `down_backlight_brightness`.
  - Custom fills go through `set`, `set_with_brightness` and `fill`.
    `rainbow()` gives a rainbow effect with pulsing brightness.
  - The optional `show(colors, brightness)` callable is called only when the
    colours or the brightness really change.
- `espnixie.effects` has the colour wheel `wheel(pos)` and two frame
  generators, `theater_chase_rainbow_frames(num_pixels)` and
  `rainbow_cycle_frames(num_pixels)`.
- `espnixie.history` has `HistoryObservation`, which keeps seven days of hourly
  averages in memory.
  - `add_next_value(time, value)` records a value.
  - `get_hour_value(time)` and `get_day_value(time)` read averages back, or
    return 0 when nothing is known.
  - `HourAccumulator` is the running average it uses; zero values are ignored.
- `espnixie.tasks` has `TaskWrapper`, a cooperative scheduler with a
  millisecond clock.
  - It runs one continuous task at a time and rotates through a queue
    (`add_continuous_task`).
  - `call_continuous_task` makes a task current at once.
  - It also runs periodical tasks (`add_periodical_task`).
  - Each queue holds at most ten entries. Adding past that, or with a missing
    duration, period or callable, raises `ValueError`.
- `espnixie.narodmon` has `Narodmon`, a client for the narodmon.ru
  `sensorsNearby` API.
  - `build_request()` gives the JSON body and `http_request(body)` the raw
    HTTP POST.
  - `request()` sends it over plain HTTP. It does nothing within a minute of
    the previous request.
  - `handle_response(data)` reads the JSON reply. It picks temperature
    (`ResolveMode.MIN`), humidity and pressure (`ResolveMode.CLOSEST`) with
    `resolve_value`.
  - `has_t`, `get_t`, `has_h`, `get_h`, `has_p` and `get_p` report the
    readings. Each `has_` is true only while its reading is fresh.
  - Debug and error lines are collected in a `BufferLogger` (`log`), which is
    off by default.
- `espnixie.logs` has `LogDispatcher`, which forwards records to a `Logger`
  or drops them when none is set.
  - `StreamLogger` writes `PREFIX file:line message` lines to a text stream.
    The prefix comes from the `LoggingLevel`, and only the last part of the
    file path is kept.

## Examples

```python
from espnixie.nixie import NixieDisplay

frames = []
display = NixieDisplay(write=lambda high, low: frames.append((high, low)))
display.set_float(21.5, 2, 1)
display.clear_force()
```

```python
from espnixie.tasks import TaskWrapper

ticks = []
scheduler = TaskWrapper(min_update_period=0, clock=lambda: 1000)
scheduler.add_periodical_task(0, 500, lambda: ticks.append("tick"))
scheduler.update()
```

```python
from espnixie.narodmon import Narodmon

client = Narodmon("clock-01", clock=lambda: 1000)
client.handle_response(
    '{"devices": [{"distance": 1.2, "sensors": [{"type": 1, "value": 21.5}]}]}'
)
client.has_t(), client.get_t()  # (True, 21.5)
```

## What it does not do

- There is no command and no main loop. The package gives the parts, and your
  program wires them together.
- It talks to no hardware itself. SPI, LED drivers and pins are whatever
  callables you pass in, and there is no reader for a local thermometer.
- `HistoryObservation` keeps its history in memory only. Nothing is saved to
  disk or loaded from it.
- There is no Wi-Fi setup and no network configuration.

## Tests

```
pip install .[test]
pytest
```