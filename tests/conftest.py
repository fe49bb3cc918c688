import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """``gridpath.main`` reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
