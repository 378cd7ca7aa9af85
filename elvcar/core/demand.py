from typing import Dict, FrozenSet, List, Set

from .dispatch import IDLE


class DemandRegistry:
    """
    Outstanding demand of one car.

    requests: floors pressed on the car panel (car calls)
    calls: floor -> directions of hall calls waiting at that floor

    Registration is idempotent, like a lit button: pressing it again has no
    further effect. A floor never maps to an empty direction set.
    Every method runs to completion between SimPy events, so the control
    loop never sees a half-applied update.
    """
    def __init__(self):
        self._requests: Set[int] = set()
        self._calls: Dict[int, Set[str]] = {}

    def add_request(self, floor: int) -> bool:
        """Register a car call. Returns True if it was not registered before."""
        if floor in self._requests:
            return False
        self._requests.add(floor)
        return True

    def add_call(self, floor: int, direction: str) -> bool:
        """Register a hall call. Returns True if it was not registered before."""
        directions = self._calls.get(floor)
        if directions is not None and direction in directions:
            return False
        self._calls.setdefault(floor, set()).add(direction)
        return True

    def has_request(self, floor: int) -> bool:
        return floor in self._requests

    def has_call(self, floor: int, direction: str) -> bool:
        return direction in self._calls.get(floor, ())

    def calls_at(self, floor: int) -> FrozenSet[str]:
        return frozenset(self._calls.get(floor, ()))

    def fulfill_request(self, floor: int) -> bool:
        """Remove the car call for this floor. Returns True if there was one."""
        if floor not in self._requests:
            return False
        self._requests.discard(floor)
        return True

    def fulfill_calls(self, floor: int, direction: str) -> List[str]:
        """
        Retire the hall calls served by a stop at this floor.

        An idle car serves every call at the floor (boarding passengers pick
        their own destination). A car with a direction only serves the call
        matching it; the opposite call stays pending.

        Returns:
            The directions that were served, sorted.
        """
        directions = self._calls.get(floor)
        if not directions:
            return []

        if direction == IDLE:
            served = sorted(directions)
            del self._calls[floor]
            return served

        served = []
        if direction in directions:
            directions.discard(direction)
            served.append(direction)
        if not directions:
            del self._calls[floor]
        return served

    def target_floors(self) -> Set[int]:
        """All floors with outstanding demand."""
        return self._requests | set(self._calls)

    @property
    def requests(self) -> FrozenSet[int]:
        return frozenset(self._requests)

    @property
    def calls(self) -> Dict[int, FrozenSet[str]]:
        return {floor: frozenset(directions) for floor, directions in self._calls.items()}

    def snapshot(self) -> dict:
        """Plain, sorted view for status messages."""
        return {
            "requests": sorted(self._requests),
            "calls": {floor: sorted(directions) for floor, directions in sorted(self._calls.items())},
        }
