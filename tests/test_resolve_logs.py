# tests/test_resolve_logs.py
import logging
import socket

import colorama
import pytest

from tcpping import resolve as resolve_mod
from tcpping.errors import ResolutionError
from tcpping.logs import ColoredFormatter, setup_logging
from tcpping.resolve import resolve


def test_ipv4_literal_passes_through(monkeypatch):
    def no_lookup(*a, **kw):
        raise AssertionError("getaddrinfo should not be called")
    monkeypatch.setattr(resolve_mod.socket, "getaddrinfo", no_lookup)
    assert resolve("192.0.2.44") == "192.0.2.44"


def test_first_address_wins(monkeypatch):
    infos = [
        (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("198.51.100.1", 0)),
        (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("198.51.100.2", 0)),
    ]
    monkeypatch.setattr(resolve_mod.socket, "getaddrinfo", lambda *a, **kw: infos)
    assert resolve("multi.example") == "198.51.100.1"


def test_lookup_failure(monkeypatch):
    def fail(*a, **kw):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
    monkeypatch.setattr(resolve_mod.socket, "getaddrinfo", fail)
    with pytest.raises(ResolutionError):
        resolve("nowhere.invalid")


def test_colored_formatter_wraps_record():
    fmt = ColoredFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("tcpping", logging.ERROR, __file__, 1, "boom", None, None)
    text = fmt.format(record)
    assert text.startswith(colorama.Fore.RED)
    assert text.endswith(colorama.Style.RESET_ALL)
    assert "ERROR boom" in text


def test_setup_logging_is_idempotent():
    logger = setup_logging("DEBUG", colored=False)
    setup_logging("INFO", colored=False)
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    assert logging.getLogger("tcpping.prober.tcp").getEffectiveLevel() == logging.INFO
