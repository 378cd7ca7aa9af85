import json
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

_TOPIC_PATTERN = re.compile(r'elevator/(.*?)/(\w+)$')


class TripRecorder:
    """
    Independent "recorder" listening to every broker message.

    Keeps the raw event log (exportable as JSON Lines for offline playback)
    and derives what each car actually did: where it stopped, what it
    served, and the floors it passed through.
    """
    def __init__(self, env, broadcast_pipe):
        self.env = env
        self.broadcast_pipe = broadcast_pipe
        self.event_log = []  # {"time", "topic", "elevator_name", "type", "data"}

    def start_listening(self):
        """
        SimPy process draining the broadcast pipe.
        """
        while True:
            data = yield self.broadcast_pipe.get()
            topic = data.get('topic', '')
            message = data.get('message', {})

            match = _TOPIC_PATTERN.match(topic)
            elevator_name = match.group(1) if match else None
            event_type = match.group(2) if match else topic

            self.event_log.append({
                "time": self.env.now,
                "topic": topic,
                "elevator_name": elevator_name,
                "type": event_type,
                "data": message
            })

    def events(self, event_type: str, elevator_name: Optional[str] = None) -> List[dict]:
        return [
            e for e in self.event_log
            if e["type"] == event_type and (elevator_name is None or e["elevator_name"] == elevator_name)
        ]

    def door_stops(self, elevator_name: Optional[str] = None) -> List[Tuple[float, int]]:
        """(time, floor) for every completed door opening."""
        return [
            (e["data"]["timestamp"], e["data"]["floor"])
            for e in self.events("door_events", elevator_name)
            if e["data"].get("event_type") == "DOOR_OPENED"
        ]

    def fulfilled_calls(self, elevator_name: Optional[str] = None) -> List[Tuple[float, int, str]]:
        return [
            (e["data"]["timestamp"], e["data"]["floor"], e["data"]["direction"])
            for e in self.events("hall_call_off", elevator_name)
        ]

    def fulfilled_requests(self, elevator_name: Optional[str] = None) -> List[Tuple[float, int]]:
        return [
            (e["data"]["timestamp"], e["data"]["destination"])
            for e in self.events("car_call_off", elevator_name)
        ]

    def rejections(self, elevator_name: Optional[str] = None) -> List[dict]:
        return [e["data"] for e in self.events("rejected", elevator_name)]

    def trajectory(self, elevator_name: Optional[str] = None) -> List[Tuple[float, int]]:
        """
        (time, floor) at every position change, starting with the first
        reported position.
        """
        points: List[Tuple[float, int]] = []
        for e in self.events("status", elevator_name):
            floor = e["data"].get("current_floor")
            if not points or points[-1][1] != floor:
                points.append((e["data"]["timestamp"], floor))
        return points

    def save_event_log(self, file_path: Union[str, Path]):
        """Write the event log as JSON Lines."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            for event in self.event_log:
                f.write(json.dumps(event, default=str) + "\n")

    def print_summary(self):
        print("\n" + "=" * 60)
        print("   TRIP SUMMARY")
        print("=" * 60)
        floors = [floor for _, floor in self.trajectory()]
        print(f"Floors visited:      {' -> '.join(str(f) for f in floors) if floors else '-'}")
        print(f"Door stops:          {len(self.door_stops())}")
        for time_s, floor in self.door_stops():
            print(f"  {time_s:8.2f}s  floor {floor}")
        print(f"Requests fulfilled:  {len(self.fulfilled_requests())}")
        print(f"Calls fulfilled:     {len(self.fulfilled_calls())}")
        print(f"Rejected inputs:     {len(self.rejections())}")
        violations = self.events("invariant_violation")
        if violations:
            print(f"Invariant violations: {len(violations)}")
        print("=" * 60)
