"""Hourly history of observed values with per-hour and per-day averages."""

from __future__ import annotations

from dataclasses import dataclass

HISTORY_NUM_DAYS = 7
HISTORY_NUM_HOURS = HISTORY_NUM_DAYS * 24

_U32 = 0xFFFFFFFF


def hour_of(time: int) -> int:
    """Hour number of a UNIX timestamp."""
    return time // 3600


def day_by_hour(hour: int) -> int:
    """Day number of an hour number."""
    return hour // 24


@dataclass
class HourAccumulator:
    """Running average of the non-zero values seen within one hour."""

    hour: int = 0
    total: int = 0
    count: int = 0

    def add(self, value: int) -> None:
        if value:
            self.total += value
            self.count += 1

    def avg(self) -> int:
        return self.total // self.count if self.count else 0

    def reset(self) -> None:
        self.total = 0
        self.count = 0


class HistoryObservation:
    """Keeps a week of hourly averages; index 0 holds the most recent hour."""

    def __init__(self) -> None:
        self._current = HourAccumulator()
        self._hour = 0
        self._values = [0] * HISTORY_NUM_HOURS

    @property
    def values(self) -> list[int]:
        return list(self._values)

    def _in_range(self, hour: int) -> bool:
        lower = (self._hour - HISTORY_NUM_HOURS) & _U32
        return hour <= self._hour and hour > lower

    def _put(self, hour: int, value: int) -> None:
        if not hour or hour < self._hour:
            return
        delta = min(hour - self._hour, HISTORY_NUM_HOURS)
        if delta:
            self._values = [0] * delta + self._values[: HISTORY_NUM_HOURS - delta]
        self._hour = hour
        self._values[0] = value

    def add_next_value(self, time: int, value: int) -> None:
        """Record a value observed at the given timestamp (seconds)."""
        if not time:
            return
        hour = hour_of(time)
        if self._current.hour != hour:
            self._current.reset()
            self._current.hour = hour
        self._current.add(value)
        self._put(hour, self._current.avg())

    def get_hour_value(self, time: int) -> int:
        """Average for the hour containing the timestamp, or 0 if unknown."""
        if time:
            hour = hour_of(time)
            if self._in_range(hour):
                return self._values[self._hour - hour]
        return 0

    def get_day_value(self, time: int) -> int:
        """Average of the known non-zero hourly values of the timestamp's day."""
        if not time:
            return 0
        day = day_by_hour(hour_of(time))
        hour = hour_of(time)
        acc = HourAccumulator()
        current = hour
        for sign in (-1, 1):
            while self._in_range(current):
                if day_by_hour(current) != day:
                    break
                acc.add(self._values[self._hour - current])
                current = (current + sign) & _U32
            current = hour + 1
        return acc.avg()