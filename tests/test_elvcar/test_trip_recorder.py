import json

import pytest


def test_recorder_parses_topics(env, broker, recorder):
    broker.put("elevator/Car_A/arrival", {"timestamp": 0.0, "floor": 2, "stopping": False})
    broker.put("system/other", {"timestamp": 0.0})
    env.run(until=0.1)

    assert recorder.event_log[0]["elevator_name"] == "Car_A"
    assert recorder.event_log[0]["type"] == "arrival"
    assert recorder.event_log[1]["elevator_name"] is None
    assert recorder.event_log[1]["type"] == "system/other"
    assert len(recorder.events("arrival", elevator_name="Car_A")) == 1
    assert recorder.events("arrival", elevator_name="Car_B") == []


def test_trip_of_a_single_request(env, make_car, recorder):
    car = make_car()
    car.press_floor(3)
    car.press_floor(9)
    car.start()
    env.run(until=3.0)

    assert recorder.trajectory() == [
        (0.0, 1),
        (pytest.approx(0.4), 2),
        (pytest.approx(0.8), 3),
    ]
    assert [f for _, f in recorder.door_stops()] == [3]
    assert [f for _, f in recorder.fulfilled_requests()] == [3]
    assert recorder.rejections()[0]["floor"] == 9


def test_save_event_log(env, make_car, recorder, tmp_path):
    car = make_car()
    car.call_from(2, "down")
    car.start()
    env.run(until=2.0)

    path = tmp_path / "out" / "events.jsonl"
    recorder.save_event_log(path)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == len(recorder.event_log)
    records = [json.loads(line) for line in lines]
    assert {"time", "topic", "elevator_name", "type", "data"} <= set(records[0])
    assert any(r["type"] == "hall_call_off" for r in records)


def test_print_summary(env, make_car, recorder, capsys):
    car = make_car()
    car.press_floor(2)
    car.start()
    env.run(until=2.0)
    recorder.print_summary()

    out = capsys.readouterr().out
    assert "TRIP SUMMARY" in out
    assert "1 -> 2" in out
