import pytest

from espnixie.tasks import TASK_LIST_MAX_LENGTH, TaskWrapper


class Clock:
    def __init__(self):
        self.now = 1000

    def __call__(self):
        return self.now


def test_periodical_task_runs_on_schedule():
    clock = Clock()
    tw = TaskWrapper(clock=clock)
    calls = []
    tw.add_periodical_task(1000, 500, lambda: calls.append(clock.now))
    tw.update()
    clock.now = 1400
    tw.update()
    clock.now = 1500
    tw.update()
    assert calls == [1000, 1500]


def test_call_continuous_task_runs_each_update():
    clock = Clock()
    tw = TaskWrapper(clock=clock)
    calls = []
    tw.call_continuous_task(lambda: calls.append(1))
    tw.update()
    tw.update()
    assert len(calls) == 2


def test_queue_rotates_after_duration():
    clock = Clock()
    tw = TaskWrapper(clock=clock)
    log = []
    tw.add_continuous_task(100, lambda: True, lambda: log.append("a"))
    tw.add_continuous_task(100, lambda: True, lambda: log.append("b"))
    tw.update()
    clock.now += 100
    tw.update()
    assert log[0] != log[1]
    assert set(log) == {"a", "b"}


def test_min_update_period_throttles():
    clock = Clock()
    tw = TaskWrapper(min_update_period=50, clock=clock)
    calls = []
    tw.call_continuous_task(lambda: calls.append(1))
    tw.update()
    clock.now += 50
    tw.update()
    assert len(calls) == 1


def test_add_validation_and_limit():
    tw = TaskWrapper(clock=Clock())
    with pytest.raises(ValueError):
        tw.add_continuous_task(0, None, lambda: None)
    with pytest.raises(ValueError):
        tw.add_periodical_task(0, 0, lambda: None)
    indexes = [tw.add_periodical_task(0, 1, lambda: None) for _ in range(TASK_LIST_MAX_LENGTH)]
    assert indexes == list(range(TASK_LIST_MAX_LENGTH))
    with pytest.raises(ValueError):
        tw.add_periodical_task(0, 1, lambda: None)