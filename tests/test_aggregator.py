# tests/test_aggregator.py
import pytest

from tcpping.brain.aggregator import fold, summarize, update
from tcpping.brain.state import RunningStatistics
from tcpping.schemas import ProbeOutcome

S = ProbeOutcome.success
T = ProbeOutcome.timeout
E = ProbeOutcome.connect_error

MIXED = [S(12.5), T(), S(9.1), E("ECONNREFUSED"), S(30.2), S(11.0), T(), S(10.4)]


def test_counts_add_up_after_every_update():
    stats = RunningStatistics()
    for outcome in MIXED:
        stats = update(stats, outcome)
        assert stats.total_count == stats.success_count + stats.fail_count
        assert stats.loss_percent == pytest.approx(stats.fail_count / stats.total_count * 100)


def test_min_mean_max_ordering():
    stats = RunningStatistics()
    for outcome in MIXED:
        stats = update(stats, outcome)
        if stats.success_count:
            assert stats.min_rtt <= stats.mean_rtt <= stats.max_rtt


def test_replay_is_deterministic():
    assert fold(MIXED) == fold(MIXED)


def test_update_does_not_mutate_input():
    before = RunningStatistics()
    after = update(before, S(3.0))
    assert before.total_count == 0
    assert after.total_count == 1


def test_empty_statistics_are_undefined_not_zero():
    stats = RunningStatistics()
    assert stats.min_rtt is None
    assert stats.max_rtt is None
    assert stats.mean_rtt is None
    assert stats.range_rtt is None
    assert stats.jitter is None


def test_single_success_has_no_jitter():
    stats = fold([S(4.2)])
    assert stats.min_rtt == stats.max_rtt == stats.mean_rtt == 4.2
    assert stats.jitter is None


def test_two_successes_jitter_is_their_difference():
    assert fold([S(7.5), S(5.0)]).jitter == pytest.approx(2.5)


def test_jitter_is_running_mean_of_differences():
    # diffs: 2, 4, 1 -> mean 7/3
    stats = fold([S(10.0), S(12.0), S(8.0), S(9.0)])
    assert stats.jitter_samples == 3
    assert stats.jitter == pytest.approx(7 / 3)


def test_failure_keeps_jitter_reference_by_default():
    stats = fold([S(10.0), T(), S(20.0)])
    assert stats.jitter == pytest.approx(10.0)


def test_failure_resets_jitter_reference_when_asked():
    stats = fold([S(10.0), T(), S(20.0)], reset_jitter_on_failure=True)
    assert stats.jitter is None
    assert stats.previous_rtt == 20.0


def test_failures_leave_rtt_fields_alone():
    stats = fold([S(5.0)])
    after = fold([T(), E("EHOSTUNREACH")], stats=stats)
    assert after.min_rtt == after.max_rtt == after.mean_rtt == 5.0
    assert after.sum_rtt == 5.0
    assert after.fail_count == 2
    assert after.loss_percent == pytest.approx(200 / 3)


def test_all_failures():
    stats = fold([T(), T()])
    assert stats.loss_percent == 100.0
    assert stats.success_count == 0
    assert stats.mean_rtt is None


def test_reference_run_values():
    stats = fold([S(r) for r in (7.738, 7.942, 8.488, 7.794, 7.828)])
    assert stats.min_rtt == pytest.approx(7.738)
    assert stats.max_rtt == pytest.approx(8.488)
    assert stats.mean_rtt == pytest.approx(7.958)
    assert stats.range_rtt == pytest.approx(0.750)
    assert stats.loss_percent == 0.0


def test_no_rounding_inside_statistics():
    stats = fold([S(1.0001), S(1.0004)])
    assert stats.mean_rtt == pytest.approx(1.00025, abs=1e-12)


def test_summarize_record():
    stats = fold([S(10.0), T(), S(20.0)])
    summary = summarize(stats, hostname="example.org", ip="192.0.2.1", port=443,
                        total_run_ms=2001.5, stop_reason="count_reached")
    assert summary == {
        "hostname": "example.org",
        "ip": "192.0.2.1",
        "port": 443,
        "total_count": 3,
        "success_count": 2,
        "fail_count": 1,
        "loss_percent": pytest.approx(100 / 3),
        "total_run_ms": 2001.5,
        "min_rtt": 10.0,
        "mean_rtt": 15.0,
        "max_rtt": 20.0,
        "range": 10.0,
        "jitter_mean": 10.0,
        "stop_reason": "count_reached",
    }


def test_negative_rtt_is_clamped():
    assert S(-0.001).rtt_ms == 0.0
