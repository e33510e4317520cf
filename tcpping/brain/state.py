# tcpping/brain/state.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tcpping.schemas import StopReason


@dataclass(frozen=True)
class RunningStatistics:
    total_count: int = 0
    success_count: int = 0
    fail_count: int = 0
    sum_rtt: float = 0.0
    # None until the first success
    min_rtt: Optional[float] = None
    max_rtt: Optional[float] = None
    mean_rtt: Optional[float] = None
    # running mean of |rtt - previous_rtt|; meaningless while jitter_samples == 0
    jitter_mean: float = 0.0
    jitter_samples: int = 0
    previous_rtt: Optional[float] = None
    loss_percent: float = 0.0

    @property
    def jitter(self) -> Optional[float]:
        return self.jitter_mean if self.jitter_samples else None

    @property
    def range_rtt(self) -> Optional[float]:
        if self.min_rtt is None or self.max_rtt is None:
            return None
        return self.max_rtt - self.min_rtt


class Phase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    TERMINATED = "terminated"


@dataclass
class RunState:
    remaining_skip: int = 0
    phase: Phase = Phase.IDLE
    sequence: int = 0                  # probes issued, skipped ones included
    started_at: Optional[float] = None
    ended_at: Optional[float] = None
    stop_reason: Optional[StopReason] = None

    @property
    def total_run_ms(self) -> float:
        if self.started_at is None or self.ended_at is None:
            return 0.0
        return (self.ended_at - self.started_at) * 1000.0
