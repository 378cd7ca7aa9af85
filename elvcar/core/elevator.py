import simpy
from .entity import Entity
from .demand import DemandRegistry
from .dispatch import UP, DOWN, IDLE, decide_direction, normalize_direction
from .door import Door
from ..config.simulation import ElevatorConfig
from ..infrastructure.message_broker import MessageBroker


class Elevator(Entity):
    """
    Single car controller.

    Owns position, direction, door and outstanding demand. press_floor() and
    call_from() only add demand; the run() loop is the only writer of
    position, direction and door state, and the only one removing demand.
    """

    def __init__(self, env: simpy.Environment, config: ElevatorConfig = None, broker: MessageBroker = None, door: Door = None):
        config = config if config is not None else ElevatorConfig()

        # Initialize before super().__init__ because state changes report status
        self.direction = IDLE
        self.broker = broker

        super().__init__(env, config.name)
        self.config = config
        self.min_floor = config.min_floor
        self.max_floor = config.max_floor

        # Timings in simulation seconds
        self.travel_time = config.travel_time
        self.door_dwell_time = config.door_dwell_time
        self.idle_poll_time = config.idle_poll_time

        self.current_floor = self.min_floor
        self.demand = DemandRegistry()

        if door is None:
            door = Door(env, f"{self.name}_Door", operate_time=config.door_operate_time)
        self.door = door
        self.door.set_broker_and_elevator(self.broker, self.name)
        self.door.set_current_floor(self.current_floor)

        self._running = False
        self.invariant_violations = 0
        self.status_topic = f"elevator/{self.name}/status"

        self.set_state("IDLE")

    # --- Read-only views ---

    @property
    def doors_open(self) -> bool:
        return self.door.is_open

    @property
    def requests(self):
        return self.demand.requests

    @property
    def calls(self):
        return self.demand.calls

    @property
    def is_running(self) -> bool:
        return self._running

    def snapshot(self) -> dict:
        snapshot = {
            "timestamp": self.env.now,
            "elevator_name": self.name,
            "current_floor": self.current_floor,
            "direction": self.direction,
            "state": self.state,
            "door_state": self.door.state,
            "doors_open": self.doors_open,
            "running": self._running,
            "min_floor": self.min_floor,
            "max_floor": self.max_floor,
        }
        snapshot.update(self.demand.snapshot())
        return snapshot

    # --- Messaging ---

    def _publish(self, topic: str, payload: dict):
        if self.broker:
            message = {"timestamp": self.env.now, "elevator_name": self.name}
            message.update(payload)
            self.broker.put(f"elevator/{self.name}/{topic}", message)

    def _report_status(self):
        if self.broker:
            self.broker.put(self.status_topic, self.snapshot())

    def _on_state_changed(self, old_state: str, new_state: str):
        super()._on_state_changed(old_state, new_state)
        self._report_status()

    def _update_direction(self, new_direction: str):
        if self.direction != new_direction:
            old_direction = self.direction
            self.direction = new_direction
            print(f"{self.env.now:.2f} [{self.name}] Direction: {old_direction} -> {new_direction}")
            self._report_status()

    def _reject(self, kind: str, reason: str, **details):
        print(f"{self.env.now:.2f} [{self.name}] WARNING: {reason}")
        payload = {"kind": kind, "reason": reason}
        payload.update(details)
        self._publish("rejected", payload)

    def _report_invariant_violation(self, reason: str):
        """Should be unreachable; reported distinctly from input rejections."""
        self.invariant_violations += 1
        print(f"{self.env.now:.2f} [{self.name}] ERROR: {reason}")
        self._publish("invariant_violation", {
            "reason": reason,
            "floor": self.current_floor,
            "direction": self.direction,
            "door_state": self.door.state,
        })

    # --- Demand registration ---

    def _valid_floor(self, floor) -> bool:
        if isinstance(floor, bool) or not isinstance(floor, int):
            return False
        return self.min_floor <= floor <= self.max_floor

    def press_floor(self, floor):
        """Passenger inside presses a floor button."""
        if not self._valid_floor(floor):
            self._reject("car_call", f"invalid floor request {floor!r}", floor=floor)
            return

        if not self.demand.add_request(floor):
            print(f"{self.env.now:.2f} [{self.name}] Car call for {floor} already registered (button already lit).")
            return

        print(f"{self.env.now:.2f} [{self.name}] Internal request for floor {floor}.")
        self._publish("car_call", {"destination": floor})

    def call_from(self, floor, direction):
        """Hall call from a floor with the desired travel direction."""
        normalized = normalize_direction(direction, strict=self.config.strict_directions)
        if normalized is None:
            self._reject("hall_call", f"unrecognized call direction {direction!r} at floor {floor!r}",
                         floor=floor, direction=direction)
            return
        if not self._valid_floor(floor):
            self._reject("hall_call", f"invalid call from floor {floor!r}", floor=floor, direction=normalized)
            return
        if floor == self.max_floor and normalized == UP:
            self._reject("hall_call", f"can't call up from top floor {floor}", floor=floor, direction=normalized)
            return
        if floor == self.min_floor and normalized == DOWN:
            self._reject("hall_call", f"can't call down from bottom floor {floor}", floor=floor, direction=normalized)
            return

        if not self.demand.add_call(floor, normalized):
            print(f"{self.env.now:.2f} [{self.name}] Hall call at floor {floor} ({normalized}) already registered.")
            return

        print(f"{self.env.now:.2f} [{self.name}] External call at floor {floor} wanting {normalized}.")
        self._publish("hall_call", {"floor": floor, "direction": normalized})

    # --- Lifecycle ---

    def start(self):
        """Begin the control loop. Calling it while running does nothing."""
        if self._running:
            return
        self._running = True
        if self._process is not None and self._process.is_alive:
            # The previous loop has not exited yet; it simply keeps going
            print(f"{self.env.now:.2f} [{self.name}] Main loop resumed.")
            return
        print(f"{self.env.now:.2f} [{self.name}] Starting main loop (floors {self.min_floor}-{self.max_floor}).")
        self.start_process()

    def stop(self):
        """
        Request the loop to exit. The timed step in flight completes first.
        """
        if not self._running:
            return
        self._running = False
        print(f"{self.env.now:.2f} [{self.name}] Stopping main loop.")

    # --- Control loop ---

    def run(self):
        while self._running:
            self._update_direction(self._decide_direction())

            # Demand at the floor the car is parked on is served in place, never stranded
            if self.door.is_closed and self._should_open_here():
                yield self.env.process(self.open_doors("serving demand at current floor"))
                continue

            if self.direction == IDLE:
                self.set_state("IDLE")
                yield self.env.timeout(self.idle_poll_time)
                continue

            if self.doors_open:
                yield self.env.process(self.close_doors())

            yield self.env.process(self._move_one_floor())

        self.set_state("STOPPED")
        print(f"{self.env.now:.2f} [{self.name}] Main loop exited at floor {self.current_floor}.")

    def _decide_direction(self) -> str:
        return decide_direction(self.current_floor, self.direction, self.demand.target_floors())

    def _should_open_here(self) -> bool:
        """
        Stop rule: a car call here, a hall call here in the direction the
        car is about to take, or any hall call here when the car is idle.
        """
        floor = self.current_floor
        if self.demand.has_request(floor):
            return True
        calls_here = self.demand.calls_at(floor)
        if not calls_here:
            return False
        if self.direction == IDLE:
            return True
        return self.direction in calls_here

    def _move_one_floor(self):
        """Hop to the adjacent floor in the current direction (doors must be closed)."""
        if not self.door.is_closed:
            self._report_invariant_violation(f"cannot move while doors are {self.door.state}")
            return
        if self.direction == IDLE:
            return

        target_floor = self.current_floor + 1 if self.direction == UP else self.current_floor - 1
        if not self._valid_floor(target_floor):
            self._report_invariant_violation(
                f"hop {self.direction} from floor {self.current_floor} would leave {self.min_floor}-{self.max_floor}")
            self._update_direction(IDLE)
            return

        print(f"{self.env.now:.2f} [{self.name}] Moving {self.direction} from {self.current_floor} to {target_floor}.")
        self.set_state("MOVING")
        yield self.env.timeout(self.travel_time)

        self.current_floor = target_floor
        self.door.set_current_floor(self.current_floor)
        self._report_status()

        # Direction the car is about to take from here decides which call is served
        self._update_direction(self._decide_direction())

        if self._should_open_here():
            self._publish("arrival", {"floor": self.current_floor, "stopping": True})
            yield self.env.process(self.open_doors("arrived to serve request/call"))
        else:
            print(f"{self.env.now:.2f} [{self.name}] Passing floor {self.current_floor}.")
            self._publish("arrival", {"floor": self.current_floor, "stopping": False})

    # --- Door cycle ---

    def open_doors(self, reason: str = ""):
        """Open, fulfill the demand served here, dwell, then close."""
        if not self.door.is_closed:
            return
        suffix = f" ({reason})" if reason else ""
        print(f"{self.env.now:.2f} [{self.name}] Opening doors at floor {self.current_floor}{suffix}.")
        self.set_state("STOPPING")

        opened = yield self.env.process(self.door.open())
        if not opened:
            return

        self._fulfill_demand_here()

        if self.door_dwell_time > 0:
            yield self.env.timeout(self.door_dwell_time)
        yield self.env.process(self.close_doors())

    def close_doors(self):
        if not self.doors_open:
            return
        print(f"{self.env.now:.2f} [{self.name}] Closing doors at floor {self.current_floor}.")
        yield self.env.process(self.door.close())

    def _fulfill_demand_here(self):
        floor = self.current_floor

        if self.demand.fulfill_request(floor):
            print(f"{self.env.now:.2f} [{self.name}] Fulfilled internal request for floor {floor}.")
            self._publish("car_call_off", {"destination": floor})

        # Idle: everyone boards and picks a floor inside, so all calls here are served
        served = self.demand.fulfill_calls(floor, self.direction)
        for direction in served:
            note = " (idle)" if self.direction == IDLE else ""
            print(f"{self.env.now:.2f} [{self.name}] Fulfilled external call at {floor} for {direction}{note}.")
            self._publish("hall_call_off", {"floor": floor, "direction": direction})

        self._report_status()
