# tcpping/brain/cancel.py
import contextlib
import selectors
import signal
import socket


class CancellationToken:
    """
    One-way stop flag shared between the scheduler and a signal handler.

    cancel() only flips a boolean and writes a byte into a socketpair, both
    safe from inside a Python signal handler. wait() sleeps on the other end
    of the pair, so a cancel during the inter-probe interval wakes it at once.
    """

    def __init__(self):
        self._cancelled = False
        self._rsock, self._wsock = socket.socketpair()
        self._rsock.setblocking(False)
        self._wsock.setblocking(False)
        self._selector = selectors.DefaultSelector()
        self._selector.register(self._rsock, selectors.EVENT_READ)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        # the flag is what counts; a full or closed pair just means no wake-up byte
        with contextlib.suppress(OSError):
            self._wsock.send(b"\0")

    def wait(self, timeout: float) -> bool:
        """Sleep up to timeout seconds; return True if cancelled."""
        if self._cancelled or timeout <= 0:
            return self._cancelled
        self._selector.select(timeout)
        return self._cancelled

    def close(self) -> None:
        self._selector.close()
        self._rsock.close()
        self._wsock.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def install_signal_handlers(token: CancellationToken,
                            signals=(signal.SIGINT, signal.SIGTERM)) -> dict:
    """Route the given signals to token.cancel(); return the handlers replaced."""
    def _handler(signum, frame):
        token.cancel()

    previous = {}
    for sig in signals:
        previous[sig] = signal.signal(sig, _handler)
    return previous


def restore_signal_handlers(previous: dict) -> None:
    for sig, handler in previous.items():
        signal.signal(sig, handler)
