"""
elvcar - single car elevator controller

SimPy based controller for one elevator car: panel requests, hall calls,
direction selection, door cycle and the control loop tying them together.
"""

__version__ = "0.1.0"

from .core.elevator import Elevator
from .core.door import Door
from .core.demand import DemandRegistry
from .core.dispatch import UP, DOWN, IDLE, decide_direction, normalize_direction
from .core.entity import Entity

from .config import ElevatorConfig, SimulationConfig, StimulusConfig

from .infrastructure.message_broker import MessageBroker
from .infrastructure.realtime_env import RealtimeEnvironment

from .analyzer.trip_recorder import TripRecorder

__all__ = [
    'Elevator',
    'Door',
    'DemandRegistry',
    'Entity',
    'UP',
    'DOWN',
    'IDLE',
    'decide_direction',
    'normalize_direction',
    'ElevatorConfig',
    'SimulationConfig',
    'StimulusConfig',
    'MessageBroker',
    'RealtimeEnvironment',
    'TripRecorder',
]
