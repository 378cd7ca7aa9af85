"""Core simulation entities"""

from .entity import Entity
from .dispatch import UP, DOWN, IDLE, decide_direction, normalize_direction
from .demand import DemandRegistry
from .door import Door
from .elevator import Elevator

__all__ = [
    'Entity',
    'UP',
    'DOWN',
    'IDLE',
    'decide_direction',
    'normalize_direction',
    'DemandRegistry',
    'Door',
    'Elevator',
]
