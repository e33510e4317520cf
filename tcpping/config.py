import math
from dataclasses import dataclass
from enum import Enum

from tcpping.errors import ConfigError

VERSION = "1.0.0"

DEFAULT_PORT = 443
DEFAULT_TIMEOUT_S = 3.0
DEFAULT_INTERVAL_S = 1.0


class DisplayMode(str, Enum):
    NORMAL = "normal"
    QUIET = "quiet"      # header + summary only
    VERBOSE = "verbose"  # running stats after every probe
    JSON = "json"


@dataclass(frozen=True)
class ScheduleConfig:
    target_ip: str
    target_port: int = DEFAULT_PORT
    hostname: str | None = None      # display label; falls back to target_ip
    probe_count: int = 0             # 0 = run until cancelled
    interval_seconds: float = DEFAULT_INTERVAL_S
    timeout_seconds: float = DEFAULT_TIMEOUT_S
    skip_count: int = 0              # leading probes excluded from stats
    display_mode: DisplayMode = DisplayMode.NORMAL

    # jitter policy: drop the "previous RTT" reference after a failed probe
    reset_jitter_on_failure: bool = False

    @property
    def label(self) -> str:
        return self.hostname or self.target_ip

    def validate(self) -> "ScheduleConfig":
        """Raise ConfigError on the first invalid field; return self otherwise."""
        if not self.target_ip:
            raise ConfigError("target address must not be empty")
        if not 1 <= self.target_port <= 65535:
            raise ConfigError(f"port must be in 1..65535, got {self.target_port}")
        if self.probe_count < 0:
            raise ConfigError(f"probe count must be >= 0, got {self.probe_count}")
        if self.skip_count < 0:
            raise ConfigError(f"skip count must be >= 0, got {self.skip_count}")
        if not math.isfinite(self.interval_seconds) or self.interval_seconds < 0:
            raise ConfigError(f"interval must be a finite number >= 0, got {self.interval_seconds}")
        if not math.isfinite(self.timeout_seconds) or self.timeout_seconds <= 0:
            raise ConfigError(f"timeout must be a finite number > 0, got {self.timeout_seconds}")
        return self
