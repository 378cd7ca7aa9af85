import sys
from pathlib import Path

import pytest
import simpy

# Add project root to path so main.py and elvcar import without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from elvcar.analyzer.trip_recorder import TripRecorder  # noqa: E402
from elvcar.config.simulation import ElevatorConfig  # noqa: E402
from elvcar.core.elevator import Elevator  # noqa: E402
from elvcar.infrastructure.message_broker import MessageBroker  # noqa: E402


@pytest.fixture
def env():
    return simpy.Environment()


@pytest.fixture
def broker(env):
    return MessageBroker(env)


@pytest.fixture
def recorder(env, broker):
    recorder = TripRecorder(env, broker.get_broadcast_pipe())
    env.process(recorder.start_listening())
    return recorder


@pytest.fixture
def make_car(env, broker):
    """Build a car on floors 1-5 with the default 400/700/0 ms timings."""
    def _make(**overrides):
        settings = {"min_floor": 1, "max_floor": 5, "name": "Car"}
        settings.update(overrides)
        return Elevator(env, ElevatorConfig(**settings), broker)
    return _make
