import simpy
import sys
from pathlib import Path

import elvcar
from elvcar.config import load_simulation_config
from elvcar.core.elevator import Elevator
from elvcar.infrastructure.message_broker import MessageBroker
from elvcar.infrastructure.realtime_env import RealtimeEnvironment
from elvcar.analyzer.trip_recorder import TripRecorder

# Shipped inside the package so the installed console script finds it too
DEFAULT_SCENARIO = Path(elvcar.__file__).parent / "scenarios" / "fahrstuhl_demo.yaml"


def stimulus_driver(env, elevator, stimuli, stop_after_ms):
    """Deliver each stimulus at its time, then ask the car to stop."""
    for stimulus in sorted(stimuli, key=lambda s: s.at_ms):
        delay = stimulus.at_ms / 1000.0 - env.now
        if delay > 0:
            yield env.timeout(delay)
        if stimulus.action == "press":
            elevator.press_floor(stimulus.floor)
        else:
            elevator.call_from(stimulus.floor, stimulus.direction)

    remaining = stop_after_ms / 1000.0 - env.now
    if remaining > 0:
        yield env.timeout(remaining)
    elevator.stop()
    print(f"{env.now:.2f} [Driver] Demo complete.")


def run_simulation(config_path=DEFAULT_SCENARIO):
    """
    Set up and run one demo scenario

    Args:
        config_path: Path to the scenario YAML file

    Returns:
        TripRecorder holding everything the car did
    """
    print("--- Loading Configuration ---")
    sim_config = load_simulation_config(config_path)
    print(f"Scenario: {config_path}")

    print("\n--- Simulation Setup ---")
    if sim_config.realtime_factor > 0:
        env = RealtimeEnvironment(speed_factor=sim_config.realtime_factor)
        print(f"Realtime playback at speed factor {sim_config.realtime_factor}")
    else:
        env = simpy.Environment()

    broker = MessageBroker(env)
    recorder = TripRecorder(env, broker.get_broadcast_pipe())
    env.process(recorder.start_listening())

    elevator = Elevator(env, sim_config.elevator, broker)
    elevator.start()
    env.process(stimulus_driver(env, elevator, sim_config.stimuli, sim_config.stop_after_ms))

    print("\n--- Simulation Start ---")
    # Ends once the loop has exited and nothing is left scheduled
    env.run()

    recorder.print_summary()
    if sim_config.event_log_path:
        recorder.save_event_log(sim_config.event_log_path)
        print(f"Event log written to {sim_config.event_log_path}")

    return recorder


def main():
    config_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_SCENARIO
    run_simulation(config_path=config_path)


if __name__ == '__main__':
    main()
