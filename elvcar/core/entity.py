import simpy
import itertools  # Helper for entity ID counter
from typing import Optional


class Entity:
    """
    Base class for entities living in a SimPy environment.

    Holds the environment handle, a unique ID, a name and a string state
    whose transitions are logged. Unlike a free-running process, an entity
    only gets a SimPy process when start_process() is called, so owners
    decide when the main loop begins.
    """
    # Entity ID counter shared across all class instances
    _entity_id_counter = itertools.count()

    def __init__(self, env: simpy.Environment, name: str = None):
        """
        Initialize the entity.

        Args:
            env: The SimPy environment this entity belongs to.
            name: Entity name. If not specified, generated from class name and ID.
        """
        self.env = env
        self.entity_id: int = next(self._entity_id_counter)
        self.name: str = name if name is not None else f"{self.__class__.__name__}_{self.entity_id}"

        # Concrete classes set their real initial state in __init__
        self.state: str = "INITIAL"

        self._process: Optional[simpy.Process] = None

    def run(self):
        """
        Generator serving as the SimPy process body of the entity.

        Use yield on SimPy events (typically env.timeout) to advance
        simulation time. Passive entities such as the door are driven by
        their owner and do not override it.
        """
        raise NotImplementedError(f"{self.__class__.__name__} has no process of its own")

    def start_process(self) -> simpy.Process:
        """Start run() as a SimPy process, unless one is already alive."""
        if self._process is None or not self._process.is_alive:
            self._process = self.env.process(self.run())
        return self._process

    # --- Common utility methods ---

    def set_state(self, new_state: str):
        """
        Transition the entity's state.

        Args:
            new_state: Target state.
        """
        if self.state != new_state:
            old_state = self.state
            self.state = new_state
            self._on_state_changed(old_state, new_state)

    def _on_state_changed(self, old_state: str, new_state: str):
        """Hook called after each state transition. Subclasses extend it."""
        self._log_state_change(old_state, new_state)

    def _log_state_change(self, old_state: str, new_state: str):
        print(f'{self.env.now:.2f} [{self.name}] State: {old_state} -> {new_state}')

    @property
    def process(self) -> Optional[simpy.Process]:
        """
        The SimPy process running this entity, or None if never started.
        """
        return self._process
