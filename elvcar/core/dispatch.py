"""
Direction selection for a single car (collective control).

The car keeps its current travel direction while there is demand ahead of
it and only reverses once that side is exhausted. An idle car heads for the
nearer side, preferring UP on a tie.
"""

from typing import Iterable, List, Optional

UP = "UP"
DOWN = "DOWN"
IDLE = "IDLE"

CALL_DIRECTIONS = (UP, DOWN)


def normalize_direction(direction, strict: bool = False) -> Optional[str]:
    """
    Map a caller supplied hall call direction to UP or DOWN.

    Args:
        direction: Any value; "up" (case-insensitive) means UP.
        strict: If False, every value other than "up" is read as DOWN.
            If True, only "up" and "down" are recognized.

    Returns:
        UP, DOWN, or None when strict and the value is not recognized.
    """
    text = str(direction).strip().lower() if direction is not None else ""
    if text == "up":
        return UP
    if strict and text != "down":
        return None
    return DOWN


def decide_direction(current_floor: int, direction: str, target_floors: Iterable[int]) -> str:
    """
    Decide the next travel direction.

    Args:
        current_floor: Floor the car is at.
        direction: Current direction (UP, DOWN or IDLE).
        target_floors: Every floor with outstanding demand.

    Returns:
        UP, DOWN or IDLE
    """
    targets = set(target_floors)
    if not targets:
        return IDLE

    above = [f for f in targets if f > current_floor]
    below = [f for f in targets if f < current_floor]

    if direction == UP:
        return _decide_from_up_direction(above, below)
    if direction == DOWN:
        return _decide_from_down_direction(above, below)
    return _decide_from_no_direction(current_floor, above, below)


def _decide_from_up_direction(above: List[int], below: List[int]) -> str:
    if above:
        return UP
    if below:
        return DOWN
    return IDLE


def _decide_from_down_direction(above: List[int], below: List[int]) -> str:
    if below:
        return DOWN
    if above:
        return UP
    return IDLE


def _decide_from_no_direction(current_floor: int, above: List[int], below: List[int]) -> str:
    """Idle car: go to the nearer side, UP on a tie."""
    if not above and not below:
        # Demand only at the current floor
        return IDLE
    if not below:
        return UP
    if not above:
        return DOWN
    nearest_above = min(above) - current_floor
    nearest_below = current_floor - max(below)
    return UP if nearest_above <= nearest_below else DOWN
