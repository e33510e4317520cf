# tcpping/brain/controller.py

import logging
from typing import Optional

from tcpping.brain import rules
from tcpping.brain.aggregator import summarize, update
from tcpping.brain.cancel import CancellationToken
from tcpping.brain.state import Phase, RunningStatistics, RunState
from tcpping.clock import Clock, monotonic
from tcpping.config import ScheduleConfig
from tcpping.errors import SocketCreationError
from tcpping.prober.base import Prober
from tcpping.render import NullRenderer, Renderer
from tcpping.schemas import StatsSummary

log = logging.getLogger(__name__)


class ProbeScheduler:
    """
    Runs probes back to back until the count is used up or the token is
    cancelled. Single-threaded: one probe finishes (or times out) before the
    next one starts, and cancellation is only looked at between probes.
    """

    def __init__(self,
                 prober: Prober,
                 config: ScheduleConfig,
                 renderer: Optional[Renderer] = None,
                 cancel: Optional[CancellationToken] = None,
                 clock: Clock = monotonic):
        self.prober = prober
        self.config = config
        self.renderer = renderer or NullRenderer()
        # created in run(), after validation, when the caller supplies none
        self._owns_cancel = cancel is None
        self.cancel = cancel
        self.clock = clock
        self.stats = RunningStatistics()
        self.state = RunState()

    def run(self) -> StatsSummary:
        cfg = self.config.validate()
        run = self.state
        if run.phase is not Phase.IDLE:
            raise RuntimeError(f"scheduler already used (phase={run.phase.value})")
        if self.cancel is None:
            self.cancel = CancellationToken()

        run.remaining_skip = cfg.skip_count
        self.renderer.on_start(cfg)

        run.phase = Phase.RUNNING
        run.started_at = self.clock()
        log.info("probing %s (%s) port %d, count=%s, interval=%.3fs, timeout=%.3fs",
                 cfg.label, cfg.target_ip, cfg.target_port,
                 cfg.probe_count or "unlimited", cfg.interval_seconds, cfg.timeout_seconds)

        try:
            self._loop(cfg, run)
        except SocketCreationError:
            run.stop_reason = "local_error"
            run.ended_at = self.clock()
            run.phase = Phase.TERMINATED
            log.error("run aborted after %d probes: no sockets available", run.sequence)
            raise
        finally:
            if self._owns_cancel:
                self.cancel.close()

        # -------------------------------
        # Draining: stamp the end, report
        # -------------------------------
        run.phase = Phase.DRAINING
        run.ended_at = self.clock()
        summary = summarize(
            self.stats,
            hostname=cfg.label,
            ip=cfg.target_ip,
            port=cfg.target_port,
            total_run_ms=run.total_run_ms,
            stop_reason=run.stop_reason,
        )
        log.info("run finished (%s): %d probes, %d recorded",
                 run.stop_reason, run.sequence, self.stats.total_count)
        self.renderer.on_summary(summary)
        run.phase = Phase.TERMINATED
        return summary

    def _loop(self, cfg: ScheduleConfig, run: RunState) -> None:
        while True:
            # 1) cancellation is only honoured here, never mid-probe
            if self.cancel.cancelled:
                run.stop_reason = "cancelled"
                break

            # 2) bounded count
            if rules.count_exhausted(cfg.probe_count, run.sequence):
                run.stop_reason = "count_reached"
                break

            # 3) one probe
            outcome = self.prober.probe_once(cfg.target_ip, cfg.target_port, cfg.timeout_seconds)

            # 4) numbering always advances
            run.sequence += 1

            # 5) warm-up probes are shown but never counted
            skipped = rules.in_skip_window(run.remaining_skip)
            if skipped:
                run.remaining_skip -= 1
            else:
                self.stats = update(self.stats, outcome, cfg.reset_jitter_on_failure)

            # 6) hand off to the renderer
            self.renderer.on_probe(cfg, {
                "sequence": run.sequence,
                "outcome": outcome,
                "remaining_skip": run.remaining_skip,
                "skipped": skipped,
                "stats": self.stats,
            })

            # 7) interval, unless that was the last one
            if rules.should_wait(cfg.probe_count, run.sequence, self.cancel.cancelled):
                self.cancel.wait(cfg.interval_seconds)
