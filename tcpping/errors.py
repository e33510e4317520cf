# tcpping/errors.py


class TcppingError(Exception):
    """Base class for every error raised by tcpping itself."""


class ConfigError(TcppingError, ValueError):
    """Schedule settings rejected before the run starts."""


class ResolutionError(TcppingError):
    """Hostname could not be turned into an IPv4 address."""


class SocketCreationError(TcppingError):
    """
    The local stack refused to hand out a socket (EMFILE, ENOBUFS, ...).
    Not a probe failure: the run cannot continue at all.
    """

    def __init__(self, cause: OSError):
        super().__init__(f"socket creation failed: {cause}")
        self.cause = cause
