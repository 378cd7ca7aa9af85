import simpy
from .entity import Entity

CLOSED = "CLOSED"
OPENING = "OPENING"
OPEN = "OPEN"
CLOSING = "CLOSING"


class Door(Entity):
    """
    Car door operated directly by the elevator.

    CLOSED -> OPENING -> OPEN -> CLOSING -> CLOSED. open() only starts from
    CLOSED and close() only from OPEN, so a request arriving mid-transition
    is a no-op.
    """
    def __init__(self, env: simpy.Environment, name: str, operate_time=0.7, broker=None, elevator_name: str = None):
        super().__init__(env, name)
        self.operate_time = operate_time  # seconds to open OR close
        self.broker = broker
        self.elevator_name: str = elevator_name
        self._current_floor: int = None
        self.set_state(CLOSED)

    @property
    def is_open(self) -> bool:
        """True from the end of opening until the end of closing."""
        return self.state in (OPEN, CLOSING)

    @property
    def is_closed(self) -> bool:
        return self.state == CLOSED

    def set_broker_and_elevator(self, broker, elevator_name: str):
        """Set MessageBroker and elevator name after initialization."""
        self.broker = broker
        self.elevator_name = elevator_name

    def set_current_floor(self, floor: int):
        self._current_floor = floor

    def _broadcast_door_event(self, event_type: str):
        if not self.broker or not self.elevator_name:
            return
        door_event_message = {
            "timestamp": self.env.now,
            "elevator_name": self.elevator_name,
            "door_id": self.name,
            "event_type": event_type,
            "floor": self._current_floor
        }
        self.broker.put(f"elevator/{self.elevator_name}/door_events", door_event_message)

    def open(self):
        """
        Opening process.

        Returns:
            bool: True if the door went from CLOSED to OPEN, False if it was
            not closed when asked.
        """
        if self.state != CLOSED:
            return False
        self.set_state(OPENING)
        self._broadcast_door_event("DOOR_OPENING_START")
        yield self.env.timeout(self.operate_time)
        self.set_state(OPEN)
        self._broadcast_door_event("DOOR_OPENED")
        return True

    def close(self):
        """
        Closing process.

        Returns:
            bool: True if the door went from OPEN to CLOSED, False if it was
            not open when asked.
        """
        if self.state != OPEN:
            return False
        self.set_state(CLOSING)
        self._broadcast_door_event("DOOR_CLOSING_START")
        yield self.env.timeout(self.operate_time)
        self.set_state(CLOSED)
        self._broadcast_door_event("DOOR_CLOSED")
        return True
