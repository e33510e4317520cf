# tcpping/resolve.py
import ipaddress
import logging
import socket

from tcpping.errors import ResolutionError

log = logging.getLogger(__name__)


def resolve(hostname: str) -> str:
    """Return the first IPv4 address for hostname. IPv4 literals come back as-is."""
    try:
        return str(ipaddress.IPv4Address(hostname))
    except ValueError:
        pass

    try:
        infos = socket.getaddrinfo(hostname, None, socket.AF_INET, socket.SOCK_STREAM)
    except socket.gaierror as e:
        raise ResolutionError(f"lookup for '{hostname}' failed: {e}") from e
    if not infos:
        raise ResolutionError(f"lookup for '{hostname}' returned no IPv4 address")

    ip = infos[0][4][0]
    log.debug("resolved %s -> %s (%d candidates)", hostname, ip, len(infos))
    return ip
