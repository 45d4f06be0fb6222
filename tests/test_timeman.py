import pytest

from weissearch.timeman import (
    OVERHEAD,
    SearchLimits,
    init_time_management,
    now_ms,
    out_of_time,
    time_since,
)


def test_time_since_non_negative():
    start = now_ms()
    assert time_since(start) >= 0
    assert now_ms() >= start


def test_no_timelimit_leaves_usage():
    limits = SearchLimits(time=60000)
    init_time_management(limits)
    assert limits.optimal_usage == 0
    assert limits.max_usage == 0


def test_movetime_uses_all_but_overhead():
    limits = SearchLimits(movetime=1000, timelimit=True)
    init_time_management(limits)
    assert limits.optimal_usage == 1000 - OVERHEAD
    assert limits.max_usage == 1000 - OVERHEAD


@pytest.mark.parametrize("clock,inc,mtg", [
    (60000, 0, 0), (60000, 1000, 0), (5000, 100, 0),
    (60000, 0, 40), (3000, 0, 5), (100, 0, 1),
])
def test_usage_invariants(clock, inc, mtg):
    limits = SearchLimits(time=clock, inc=inc, movestogo=mtg, timelimit=True)
    init_time_management(limits)
    assert 0 <= limits.optimal_usage <= limits.max_usage
    assert limits.max_usage <= 0.8 * clock
    if not mtg:
        assert limits.optimal_usage <= 0.2 * clock


def test_more_time_gives_more_usage():
    short = SearchLimits(time=10000, timelimit=True)
    long = SearchLimits(time=100000, timelimit=True)
    init_time_management(short)
    init_time_management(long)
    assert long.optimal_usage > short.optimal_usage


def test_helper_threads_and_depth_one_never_stop():
    limits = SearchLimits(timelimit=True, max_usage=0, node_time=True, nodes=1)
    assert out_of_time(limits, 1, 5, 4095, False, 10**6) == (False, False)
    assert out_of_time(limits, 0, 1, 4095, False, 10**6) == (False, False)


def test_node_limit_stops():
    limits = SearchLimits(node_time=True, nodes=500)
    assert out_of_time(limits, 0, 5, 500, True, 0) == (True, True)
    assert out_of_time(limits, 0, 5, 499, True, 0) == (False, True)


def test_clock_checked_only_every_2048_nodes():
    limits = SearchLimits(timelimit=True, max_usage=10, optimal_usage=100)
    assert out_of_time(limits, 0, 5, 2046, False, 1000) == (False, False)
    stop, pruning = out_of_time(limits, 0, 5, 2047, False, 1000)
    assert stop is True
    assert pruning is True


def test_within_time_keeps_going():
    limits = SearchLimits(timelimit=True, max_usage=10000, optimal_usage=3200)
    stop, pruning = out_of_time(limits, 0, 5, 2047, False, 50)
    assert stop is False
    assert pruning is False


def test_infinite_enables_pruning_late():
    limits = SearchLimits(infinite=True)
    assert out_of_time(limits, 0, 5, 2047, False, 4000) == (False, False)
    assert out_of_time(limits, 0, 5, 2047, False, 6000) == (False, True)