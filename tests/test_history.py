from espnixie.history import HISTORY_NUM_HOURS, HistoryObservation, HourAccumulator

BASE = 400_000 * 3600  # start of a day, far from zero


def test_accumulator_ignores_zero():
    acc = HourAccumulator()
    acc.add(0)
    acc.add(4)
    acc.add(6)
    assert acc.avg() == 5
    acc.reset()
    assert acc.avg() == 0


def test_hour_value_average():
    h = HistoryObservation()
    h.add_next_value(BASE + 10, 10)
    h.add_next_value(BASE + 20, 20)
    assert h.get_hour_value(BASE + 100) == 15


def test_unknown_hour_is_zero():
    h = HistoryObservation()
    h.add_next_value(BASE, 10)
    assert h.get_hour_value(BASE + 3600) == 0
    assert h.get_hour_value(0) == 0


def test_shift_fills_gap_with_zero():
    h = HistoryObservation()
    h.add_next_value(BASE, 10)
    h.add_next_value(BASE + 3 * 3600, 30)
    assert h.get_hour_value(BASE) == 10
    assert h.get_hour_value(BASE + 3600) == 0
    assert h.get_hour_value(BASE + 3 * 3600) == 30


def test_old_values_fall_out():
    h = HistoryObservation()
    h.add_next_value(BASE, 10)
    h.add_next_value(BASE + HISTORY_NUM_HOURS * 3600, 30)
    assert h.get_hour_value(BASE) == 0
    assert len(h.values) == HISTORY_NUM_HOURS


def test_day_value_averages_same_day():
    h = HistoryObservation()
    h.add_next_value(BASE, 10)
    h.add_next_value(BASE + 3600, 30)
    h.add_next_value(BASE + 24 * 3600, 100)
    assert h.get_day_value(BASE + 1800) == 20
    assert h.get_day_value(BASE + 24 * 3600) == 100