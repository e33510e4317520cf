# tcpping/prober/base.py
from abc import ABC, abstractmethod

from tcpping.schemas import ProbeOutcome


class Prober(ABC):
    @abstractmethod
    def probe_once(self, ip: str, port: int, timeout_s: float) -> ProbeOutcome:
        """Make exactly one connection attempt to ip:port and return its outcome."""
        raise NotImplementedError
