import time

import pytest

from elvcar.analyzer.trip_recorder import TripRecorder
from elvcar.config.simulation import ElevatorConfig
from elvcar.core.elevator import Elevator
from elvcar.infrastructure.message_broker import MessageBroker
from elvcar.infrastructure.realtime_env import RealtimeEnvironment


def test_topic_subscriber_receives_message(env):
    broker = MessageBroker(env)
    received = []

    def subscriber():
        message = yield broker.get("elevator/Car/hall_call")
        received.append((env.now, message))

    def publisher():
        yield env.timeout(1.5)
        broker.put("elevator/Car/hall_call", {"floor": 3, "direction": "UP"})

    env.process(subscriber())
    env.process(publisher())
    env.run()

    assert received == [(1.5, {"floor": 3, "direction": "UP"})]


def test_unsubscribed_topics_are_dropped(env):
    broker = MessageBroker(env)
    assert broker.put("elevator/Car/status", {"current_floor": 1}) is None
    assert broker.topics == {}
    assert broker.broadcast_pipe is None


def test_broadcast_only_after_recorder_asks(env):
    broker = MessageBroker(env)
    broker.put("elevator/Car/status", {"current_floor": 1})
    pipe = broker.get_broadcast_pipe()
    broker.put("elevator/Car/status", {"current_floor": 2})
    assert [item["message"]["current_floor"] for item in pipe.items] == [2]
    assert broker.get_broadcast_pipe() is pipe


def _commute(env, car, hours):
    """Alternate between the bottom and top floor every 10 s."""
    def _proc():
        for i in range(int(hours * 360)):
            car.press_floor(car.max_floor if i % 2 == 0 else car.min_floor)
            yield env.timeout(10)
        car.stop()
    env.process(_proc())


def test_long_run_without_observers_keeps_nothing(env):
    broker = MessageBroker(env)
    car = Elevator(env, ElevatorConfig(min_floor=1, max_floor=5, name="Car"), broker)
    car.start()
    _commute(env, car, hours=0.5)
    env.run(until=2000)

    assert broker.topics == {}
    assert broker.broadcast_pipe is None


def test_long_run_with_recorder_and_subscriber_stays_bounded(env):
    broker = MessageBroker(env)
    recorder = TripRecorder(env, broker.get_broadcast_pipe())
    env.process(recorder.start_listening())
    arrivals = []

    def arrival_listener():
        while True:
            message = yield broker.get("elevator/Car/arrival")
            arrivals.append(message["floor"])

    env.process(arrival_listener())
    car = Elevator(env, ElevatorConfig(min_floor=1, max_floor=5, name="Car"), broker)
    car.start()
    _commute(env, car, hours=0.5)
    env.run(until=2000)

    assert len(arrivals) > 100
    assert list(broker.topics) == ["elevator/Car/arrival"]
    assert len(broker.topics["elevator/Car/arrival"].items) == 0
    assert len(broker.get_broadcast_pipe().items) == 0


def test_verbose_broker_prints(env, capsys):
    broker = MessageBroker(env, verbose=True)
    broker.put("elevator/Car/status", {"current_floor": 1})
    assert "Publish on 'elevator/Car/status'" in capsys.readouterr().out


def test_realtime_environment_follows_wall_clock():
    env = RealtimeEnvironment(speed_factor=10.0)

    def ticker():
        yield env.timeout(1.0)

    env.process(ticker())
    start = time.monotonic()
    env.run()
    # 1 simulated second at 10x is about 0.1 s of wall time
    assert time.monotonic() - start >= 0.09
    assert env.now == 1.0


def test_zero_speed_never_sleeps():
    env = RealtimeEnvironment(speed_factor=0.0)

    def ticker():
        yield env.timeout(1000.0)

    env.process(ticker())
    start = time.monotonic()
    env.run()
    assert time.monotonic() - start < 1.0


def test_negative_speed_rejected():
    with pytest.raises(ValueError):
        RealtimeEnvironment(speed_factor=-0.5)
