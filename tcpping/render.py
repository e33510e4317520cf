# tcpping/render.py
import json
import sys
from typing import Optional, TextIO

from tcpping.config import DisplayMode, ScheduleConfig
from tcpping.schemas import ProbeRecord, StatsSummary


def fmt_ms(value: Optional[float]) -> str:
    return "n/a" if value is None else f"{value:.3f}"


class Renderer:
    """Receives run events from the scheduler. Every hook is a no-op here."""

    def on_start(self, config: ScheduleConfig) -> None:
        pass

    def on_probe(self, config: ScheduleConfig, record: ProbeRecord) -> None:
        pass

    def on_summary(self, summary: StatsSummary) -> None:
        pass


class NullRenderer(Renderer):
    pass


class TextRenderer(Renderer):
    """
    ping(8)-style output. QUIET keeps the header and the summary, VERBOSE
    adds running statistics to every probe line, JSON emits one object
    per line instead of text.
    """

    def __init__(self, stream: Optional[TextIO] = None, mode: DisplayMode = DisplayMode.NORMAL):
        self.stream = stream or sys.stdout
        self.mode = mode

    def _write(self, line: str) -> None:
        print(line, file=self.stream, flush=True)

    def _emit_json(self, payload: dict) -> None:
        self._write(json.dumps(payload))

    def on_start(self, config: ScheduleConfig) -> None:
        if self.mode is DisplayMode.JSON:
            self._emit_json({
                "event": "start",
                "hostname": config.label,
                "ip": config.target_ip,
                "port": config.target_port,
            })
            return
        self._write(f"TCP PING {config.label} ({config.target_ip}) tcp port {config.target_port}")

    def on_probe(self, config: ScheduleConfig, record: ProbeRecord) -> None:
        if self.mode is DisplayMode.QUIET:
            return

        outcome = record["outcome"]
        if self.mode is DisplayMode.JSON:
            self._emit_json({
                "event": "probe",
                "sequence": record["sequence"],
                "skipped": record.get("skipped", False),
                "remaining_skip": record.get("remaining_skip", 0),
                **outcome.as_dict(),
            })
            return

        if outcome.kind == "success":
            result = f"{outcome.rtt_ms:.3f} ms"
        elif outcome.kind == "timeout":
            result = "timeout"
        else:
            result = "connection error"
        line = f"{config.target_ip}: seq={record['sequence']} {result}"
        if record.get("skipped"):
            line += " (skipped)"

        stats = record.get("stats")
        if self.mode is DisplayMode.VERBOSE and stats is not None:
            line += (f"  [min/ave/max = {fmt_ms(stats.min_rtt)}/{fmt_ms(stats.mean_rtt)}/"
                     f"{fmt_ms(stats.max_rtt)} ms, loss {stats.loss_percent:.1f}%]")
        self._write(line)

    def on_summary(self, summary: StatsSummary) -> None:
        if self.mode is DisplayMode.JSON:
            self._emit_json({"event": "summary", **summary})
            return
        self._write(f"--- {summary['hostname']} tcp ping statistics ---")
        self._write(
            f"{summary['total_count']} pings, {summary['success_count']} success, "
            f"{summary['fail_count']} failed, {summary['loss_percent']:.1f}% loss, "
            f"time: {summary['total_run_ms']:.3f} ms"
        )
        self._write(
            "rtt min/ave/max/range = "
            f"{fmt_ms(summary['min_rtt'])}/{fmt_ms(summary['mean_rtt'])}/"
            f"{fmt_ms(summary['max_rtt'])}/{fmt_ms(summary['range'])} ms"
        )
        self._write(f"jitter = {fmt_ms(summary['jitter_mean'])} ms")
