from dataclasses import dataclass
from typing import Literal, Optional, TypedDict

OutcomeKind = Literal["success", "timeout", "connect_error"]
StopReason = Literal["cancelled", "count_reached", "local_error"]


@dataclass(frozen=True)
class ProbeOutcome:
    kind: OutcomeKind
    rtt_ms: Optional[float] = None   # only set for "success"
    error: Optional[str] = None      # OS detail for "connect_error"

    @property
    def ok(self) -> bool:
        return self.kind == "success"

    @classmethod
    def success(cls, rtt_ms: float) -> "ProbeOutcome":
        return cls("success", rtt_ms=max(0.0, rtt_ms))

    @classmethod
    def timeout(cls) -> "ProbeOutcome":
        return cls("timeout")

    @classmethod
    def connect_error(cls, error: Optional[str] = None) -> "ProbeOutcome":
        return cls("connect_error", error=error)

    def as_dict(self) -> dict:
        return {"kind": self.kind, "rtt_ms": self.rtt_ms, "error": self.error}


class ProbeRecord(TypedDict, total=False):
    sequence: int
    outcome: ProbeOutcome
    remaining_skip: int
    skipped: bool
    stats: object  # RunningStatistics snapshot after this probe


class StatsSummary(TypedDict):
    hostname: str
    ip: str
    port: int
    total_count: int
    success_count: int
    fail_count: int
    loss_percent: float
    total_run_ms: float
    min_rtt: Optional[float]
    mean_rtt: Optional[float]
    max_rtt: Optional[float]
    range: Optional[float]
    jitter_mean: Optional[float]
    stop_reason: Optional[StopReason]
