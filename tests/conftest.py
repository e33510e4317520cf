# tests/conftest.py
import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_tcpping_logger():
    """CLI tests call setup_logging(); keep its stderr handler from leaking across tests."""
    logger = logging.getLogger("tcpping")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers, logger.level, logger.propagate = saved[0], saved[1], saved[2]
