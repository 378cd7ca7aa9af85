"""
SimPy environment whose clock follows the wall clock.

Used by the demo driver so that a scenario written in milliseconds plays out
at a watchable pace. Tests use a plain simpy.Environment instead.
"""

import simpy
import time


class RealtimeEnvironment(simpy.Environment):
    """
    simpy.Environment that sleeps after each step until wall-clock time
    catches up with simulation time.

    Args:
        speed_factor (float): Simulated seconds per real second.
            1.0 plays in real time, 2.0 twice as fast, 0.0 never sleeps.
    """

    def __init__(self, speed_factor=1.0, initial_time=0):
        super().__init__(initial_time=initial_time)
        if speed_factor < 0:
            raise ValueError("speed_factor cannot be negative")
        self.speed_factor = speed_factor
        self._anchor_real = time.monotonic()
        self._anchor_sim = self.now

    def step(self):
        """Process the next event, then wait for the wall clock if ahead."""
        result = super().step()

        if self.speed_factor > 0:
            sim_elapsed = self.now - self._anchor_sim
            due = self._anchor_real + sim_elapsed / self.speed_factor
            lag = due - time.monotonic()
            if lag > 0:
                time.sleep(lag)

        return result

