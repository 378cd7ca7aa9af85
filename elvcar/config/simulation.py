"""
Simulation Configuration

Car specification (floor range, timings, call handling) and the scenario
used by the demo driver: timed stimuli and when to stop.
"""

from dataclasses import dataclass, field
from typing import List, Optional

STIMULUS_ACTIONS = ("press", "call")


@dataclass
class ElevatorConfig:
    """Car specification. All timings are in milliseconds."""
    min_floor: int = 1
    max_floor: int = 10
    name: str = "Elevator"
    travel_time_ms: float = 400  # one floor-to-floor hop
    door_operate_ms: float = 700  # open OR close
    door_dwell_ms: float = 0  # fully open before closing starts
    idle_poll_ms: float = 250  # re-check interval while idle
    strict_directions: bool = False  # reject hall call directions other than up/down

    def __post_init__(self):
        if isinstance(self.min_floor, bool) or not isinstance(self.min_floor, int):
            raise ValueError("min_floor must be an integer")
        if isinstance(self.max_floor, bool) or not isinstance(self.max_floor, int):
            raise ValueError("max_floor must be an integer")
        if self.min_floor >= self.max_floor:
            raise ValueError(f"min_floor ({self.min_floor}) must be below max_floor ({self.max_floor})")
        if self.travel_time_ms < 0:
            raise ValueError("travel_time_ms cannot be negative")
        if self.door_operate_ms < 0:
            raise ValueError("door_operate_ms cannot be negative")
        if self.door_dwell_ms < 0:
            raise ValueError("door_dwell_ms cannot be negative")
        if self.idle_poll_ms <= 0:
            raise ValueError("idle_poll_ms must be positive")

    @property
    def travel_time(self) -> float:
        """Hop duration in simulation seconds."""
        return self.travel_time_ms / 1000.0

    @property
    def door_operate_time(self) -> float:
        return self.door_operate_ms / 1000.0

    @property
    def door_dwell_time(self) -> float:
        return self.door_dwell_ms / 1000.0

    @property
    def idle_poll_time(self) -> float:
        return self.idle_poll_ms / 1000.0

    @classmethod
    def from_dict(cls, data: dict) -> 'ElevatorConfig':
        return cls(
            min_floor=data.get('min_floor', 1),
            max_floor=data.get('max_floor', 10),
            name=data.get('name', 'Elevator'),
            travel_time_ms=data.get('travel_time_ms', 400),
            door_operate_ms=data.get('door_operate_ms', 700),
            door_dwell_ms=data.get('door_dwell_ms', 0),
            idle_poll_ms=data.get('idle_poll_ms', 250),
            strict_directions=data.get('strict_directions', False)
        )

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'min_floor': self.min_floor,
            'max_floor': self.max_floor,
            'travel_time_ms': self.travel_time_ms,
            'door_operate_ms': self.door_operate_ms,
            'door_dwell_ms': self.door_dwell_ms,
            'idle_poll_ms': self.idle_poll_ms,
            'strict_directions': self.strict_directions
        }


@dataclass
class StimulusConfig:
    """
    One timed input delivered to the car by the demo driver.

    action "press" is a panel press, action "call" a hall call. Floors are
    not range-checked here: the controller rejects bad input at runtime.
    """
    at_ms: float
    action: str
    floor: int
    direction: Optional[str] = None

    def __post_init__(self):
        if self.at_ms < 0:
            raise ValueError("at_ms cannot be negative")
        if self.action not in STIMULUS_ACTIONS:
            raise ValueError(f"Unknown stimulus action '{self.action}'. Available: {', '.join(STIMULUS_ACTIONS)}")
        if self.action == "call" and self.direction is None:
            raise ValueError("call stimuli need a direction")

    def to_dict(self) -> dict:
        result = {'at_ms': self.at_ms, 'action': self.action, 'floor': self.floor}
        if self.direction is not None:
            result['direction'] = self.direction
        return result


@dataclass
class SimulationConfig:
    """
    Complete demo scenario: the car plus the stimuli fed to it.
    """
    elevator: ElevatorConfig = field(default_factory=ElevatorConfig)
    stimuli: List[StimulusConfig] = field(default_factory=list)
    stop_after_ms: float = 8000
    realtime_factor: float = 0.0  # 1.0 = realtime, 0.0 = as fast as possible
    event_log_path: Optional[str] = None

    def __post_init__(self):
        if self.stop_after_ms < 0:
            raise ValueError("stop_after_ms cannot be negative")
        if self.realtime_factor < 0:
            raise ValueError("realtime_factor cannot be negative")

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary"""
        sim_data = data.get('simulation', data)

        elevator = ElevatorConfig.from_dict(sim_data.get('elevator', {}))

        stimuli = [
            StimulusConfig(
                at_ms=s['at_ms'],
                action=s['action'],
                floor=s['floor'],
                direction=s.get('direction')
            )
            for s in sim_data.get('stimuli', [])
        ]

        return cls(
            elevator=elevator,
            stimuli=stimuli,
            stop_after_ms=sim_data.get('stop_after_ms', 8000),
            realtime_factor=sim_data.get('realtime_factor', 0.0),
            event_log_path=sim_data.get('event_log_path')
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        result = {
            'simulation': {
                'elevator': self.elevator.to_dict(),
                'stimuli': [s.to_dict() for s in self.stimuli],
                'stop_after_ms': self.stop_after_ms,
                'realtime_factor': self.realtime_factor
            }
        }

        if self.event_log_path is not None:
            result['simulation']['event_log_path'] = self.event_log_path

        return result

    def validate(self):
        """Validate consistency between stimuli and the stop time"""
        late = [s for s in self.stimuli if s.at_ms > self.stop_after_ms]
        if late:
            raise ValueError(
                f"{len(late)} stimuli are scheduled after stop_after_ms ({self.stop_after_ms}) and would never reach the car"
            )
