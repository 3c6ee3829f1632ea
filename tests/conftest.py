import logging

import pytest


@pytest.fixture(autouse=True)
def restore_shop_logger():
    """CLI runs configure the ``shop`` logger; put it back after every test."""
    logger = logging.getLogger("shop")
    handlers, propagate, level = list(logger.handlers), logger.propagate, logger.level
    yield
    logger.handlers[:] = handlers
    logger.propagate = propagate
    logger.setLevel(level)
