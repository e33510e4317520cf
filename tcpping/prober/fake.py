# tcpping/prober/fake.py
from collections import deque
from typing import Callable, Iterable, Optional, Union

from tcpping.prober.base import Prober
from tcpping.schemas import ProbeOutcome

ScriptItem = Union[ProbeOutcome, float, BaseException]


class FakeProber(Prober):
    """
    script: sequence of outcomes returned one per call. A bare float is
    shorthand for a success with that RTT; an exception instance is raised.
    Once the script runs dry every call returns a timeout.

    on_probe(n) is called after the n-th probe (1-based), before returning.
    """
    def __init__(self,
                 script: Optional[Iterable[ScriptItem]] = None,
                 on_probe: Optional[Callable[[int], None]] = None):
        self.script = deque(script or [])
        self.on_probe = on_probe
        self.calls: list[tuple[str, int, float]] = []

    def probe_once(self, ip: str, port: int, timeout_s: float) -> ProbeOutcome:
        self.calls.append((ip, port, timeout_s))
        item = self.script.popleft() if self.script else ProbeOutcome.timeout()
        if isinstance(item, BaseException):
            raise item
        if not isinstance(item, ProbeOutcome):
            item = ProbeOutcome.success(float(item))
        if self.on_probe is not None:
            self.on_probe(len(self.calls))
        return item
