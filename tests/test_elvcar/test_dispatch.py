import pytest

from elvcar.core.dispatch import UP, DOWN, IDLE, decide_direction, normalize_direction


@pytest.mark.parametrize("current, direction, targets, expected", [
    # No demand
    (3, UP, [], IDLE),
    (3, IDLE, set(), IDLE),
    # Moving up: keep going while anything is above, then reverse
    (3, UP, [5], UP),
    (3, UP, [1, 5], UP),
    (3, UP, [1], DOWN),
    (3, UP, [3], IDLE),
    # Moving down: symmetric
    (3, DOWN, [1], DOWN),
    (3, DOWN, [1, 5], DOWN),
    (3, DOWN, [5], UP),
    (3, DOWN, [3], IDLE),
    # Idle: nearer side wins, UP on a tie
    (3, IDLE, [5], UP),
    (3, IDLE, [1], DOWN),
    (3, IDLE, [1, 5], UP),
    (3, IDLE, [2, 5], DOWN),
    (3, IDLE, [1, 4], UP),
    (3, IDLE, [3], IDLE),
])
def test_decide_direction(current, direction, targets, expected):
    assert decide_direction(current, direction, targets) == expected


def test_moving_up_sails_past_nearer_demand_below():
    # Demand one floor below is nearer, but the car is heading up to 10
    assert decide_direction(5, UP, [4, 10]) == UP


def test_current_floor_demand_does_not_count_as_either_side():
    assert decide_direction(2, IDLE, [2, 4]) == UP
    assert decide_direction(2, DOWN, [2, 4]) == UP


@pytest.mark.parametrize("raw, expected", [
    ("up", UP),
    ("UP", UP),
    (" Up ", UP),
    ("down", DOWN),
    ("sideways", DOWN),
    ("", DOWN),
    (None, DOWN),
    (1, DOWN),
])
def test_normalize_direction_is_permissive_by_default(raw, expected):
    assert normalize_direction(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("up", UP),
    ("DOWN", DOWN),
    ("sideways", None),
    ("", None),
    (None, None),
])
def test_normalize_direction_strict(raw, expected):
    assert normalize_direction(raw, strict=True) == expected
