import sys, os

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
TESTS = os.path.dirname(__file__)
if TESTS not in sys.path:
    sys.path.insert(0, TESTS)

from flowgame.events.bus import EventBus


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def levels_dir():
    return os.path.join(ROOT, 'levels')
