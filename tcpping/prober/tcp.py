# tcpping/prober/tcp.py
import errno
import logging
import os
import selectors
import socket
from typing import Callable, Optional

from tcpping.clock import Clock, elapsed_ms, monotonic
from tcpping.errors import SocketCreationError
from tcpping.prober.base import Prober
from tcpping.schemas import ProbeOutcome

log = logging.getLogger(__name__)

# connect_ex() results meaning "handshake started, wait for writability"
_IN_PROGRESS = {errno.EINPROGRESS, errno.EWOULDBLOCK, errno.EALREADY}


def describe_errno(code: int) -> str:
    name = errno.errorcode.get(code, str(code))
    return f"{name}: {os.strerror(code)}"


class TcpProber(Prober):
    """
    Times a single TCP three-way handshake.

    The socket is put in non-blocking mode, connect() is issued, and the
    prober waits for the socket to become writable, which is when the local
    stack has seen the SYN-ACK. The timer brackets exactly that window; no
    application data is exchanged and the socket is closed right after.

    A readiness wait interrupted by a signal resumes with whatever is left
    of the initial timeout, so an operator's Ctrl-C never shows up as a
    connection error. selectors already retries EINTR with a recomputed
    timeout (PEP 475) when the handler returns normally; the InterruptedError
    branch covers selector factories that surface it instead.
    """

    def __init__(self,
                 clock: Clock = monotonic,
                 family: int = socket.AF_INET,
                 selector_factory: Callable[[], selectors.BaseSelector] = selectors.DefaultSelector):
        self.clock = clock
        self.family = family
        self.selector_factory = selector_factory

    def _open_socket(self) -> socket.socket:
        try:
            sock = socket.socket(self.family, socket.SOCK_STREAM)
        except OSError as e:
            log.error("cannot create socket: %s", e)
            raise SocketCreationError(e) from e
        sock.setblocking(False)
        return sock

    def _wait_writable(self, sock: socket.socket, deadline: float) -> Optional[float]:
        """Return the clock reading at readiness, or None once the deadline passes."""
        with self.selector_factory() as sel:
            sel.register(sock, selectors.EVENT_WRITE)
            while True:
                remaining = deadline - self.clock()
                if remaining <= 0:
                    return None
                try:
                    events = sel.select(remaining)
                except InterruptedError:
                    log.debug("readiness wait interrupted, %.3f s left", remaining)
                    continue
                if events:
                    return self.clock()
                # empty result before the deadline: spurious wakeup, go round again

    def probe_once(self, ip: str, port: int, timeout_s: float) -> ProbeOutcome:
        sock = self._open_socket()
        try:
            outcome = self._connect(sock, ip, port, timeout_s)
        finally:
            sock.close()
        log.debug("probe %s:%d -> %s", ip, port, outcome)
        return outcome

    def _connect(self, sock: socket.socket, ip: str, port: int, timeout_s: float) -> ProbeOutcome:
        start = self.clock()
        try:
            status = sock.connect_ex((ip, port))
        except OSError as e:
            # bad address literal and the like
            return ProbeOutcome.connect_error(str(e))

        if status == 0:
            # handshake finished inside connect() (loopback can do this)
            return ProbeOutcome.success(elapsed_ms(start, self.clock()))
        if status not in _IN_PROGRESS:
            return ProbeOutcome.connect_error(describe_errno(status))

        try:
            ready_at = self._wait_writable(sock, start + timeout_s)
        except OSError as e:
            return ProbeOutcome.connect_error(f"wait failed: {e}")
        if ready_at is None:
            return ProbeOutcome.timeout()

        # writable also means "failed"; SO_ERROR tells which
        so_error = sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)
        if so_error != 0:
            return ProbeOutcome.connect_error(describe_errno(so_error))
        return ProbeOutcome.success(elapsed_ms(start, ready_at))
