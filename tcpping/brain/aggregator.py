# tcpping/brain/aggregator.py
from dataclasses import replace
from typing import Iterable, Optional

from tcpping.brain.state import RunningStatistics
from tcpping.schemas import ProbeOutcome, StatsSummary, StopReason


def update(stats: RunningStatistics,
           outcome: ProbeOutcome,
           reset_jitter_on_failure: bool = False) -> RunningStatistics:
    """
    Fold one probe outcome into the statistics and return the new value.

    Failures only bump the counters. By default they leave the jitter
    reference alone, so jitter compares the last two successes even with
    timeouts in between; reset_jitter_on_failure drops the reference instead.
    """
    total = stats.total_count + 1

    if not outcome.ok:
        fail = stats.fail_count + 1
        return replace(
            stats,
            total_count=total,
            fail_count=fail,
            previous_rtt=None if reset_jitter_on_failure else stats.previous_rtt,
            loss_percent=fail / total * 100.0,
        )

    rtt = outcome.rtt_ms
    success = stats.success_count + 1
    sum_rtt = stats.sum_rtt + rtt

    if stats.min_rtt is None:
        min_rtt = max_rtt = rtt
    else:
        min_rtt = min(stats.min_rtt, rtt)
        max_rtt = max(stats.max_rtt, rtt)

    jitter_mean, jitter_samples = stats.jitter_mean, stats.jitter_samples
    if stats.previous_rtt is not None:
        diff = abs(rtt - stats.previous_rtt)
        jitter_mean = (jitter_mean * jitter_samples + diff) / (jitter_samples + 1)
        jitter_samples += 1

    return replace(
        stats,
        total_count=total,
        success_count=success,
        sum_rtt=sum_rtt,
        min_rtt=min_rtt,
        max_rtt=max_rtt,
        mean_rtt=sum_rtt / success,
        jitter_mean=jitter_mean,
        jitter_samples=jitter_samples,
        previous_rtt=rtt,
        loss_percent=stats.fail_count / total * 100.0,
    )


def fold(outcomes: Iterable[ProbeOutcome],
         stats: Optional[RunningStatistics] = None,
         reset_jitter_on_failure: bool = False) -> RunningStatistics:
    stats = stats or RunningStatistics()
    for outcome in outcomes:
        stats = update(stats, outcome, reset_jitter_on_failure)
    return stats


def summarize(stats: RunningStatistics,
              hostname: str,
              ip: str,
              port: int,
              total_run_ms: float,
              stop_reason: Optional[StopReason] = None) -> StatsSummary:
    return {
        "hostname": hostname,
        "ip": ip,
        "port": port,
        "total_count": stats.total_count,
        "success_count": stats.success_count,
        "fail_count": stats.fail_count,
        "loss_percent": stats.loss_percent,
        "total_run_ms": total_run_ms,
        "min_rtt": stats.min_rtt,
        "mean_rtt": stats.mean_rtt,
        "max_rtt": stats.max_rtt,
        "range": stats.range_rtt,
        "jitter_mean": stats.jitter,
        "stop_reason": stop_reason,
    }
