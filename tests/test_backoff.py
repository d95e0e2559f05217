from itertools import islice

import pytest

from build_watcher.jobs.poller import BackoffPolicy


def test_default_sequence_starts_at_base_and_steps_by_increment():
    policy = BackoffPolicy()
    assert list(islice(policy.intervals(), 4)) == [5.0, 6.0, 7.0, 8.0]


def test_sequence_is_capped():
    policy = BackoffPolicy()
    intervals = list(islice(policy.intervals(), 40))
    assert intervals[25] == 30.0
    assert intervals[-1] == 30.0
    assert max(intervals) == 30.0


@pytest.mark.parametrize(
    "base,increment,cap",
    [(5, 1, 30), (1, 0, 1), (2, 3, 10), (0.5, 0.25, 4), (10, 1, 5)],
)
def test_sequence_is_non_decreasing_and_bounded(base, increment, cap):
    policy = BackoffPolicy(base_seconds=base, increment_seconds=increment, max_seconds=cap)
    intervals = list(islice(policy.intervals(), 100))
    for prev, nxt in zip(intervals, intervals[1:]):
        assert nxt >= prev
    assert all(i <= cap for i in intervals)


def test_negative_increment_does_not_shrink_interval():
    policy = BackoffPolicy(base_seconds=5, increment_seconds=-1, max_seconds=30)
    assert list(islice(policy.intervals(), 3)) == [5.0, 5.0, 5.0]


def test_from_settings(settings):
    settings.POLL_BASE_SECONDS = 2
    settings.POLL_MAX_SECONDS = 3
    policy = BackoffPolicy.from_settings(settings)
    assert policy.interval(1) == 2
    assert policy.interval(2) == 3
    assert policy.interval(10) == 3
