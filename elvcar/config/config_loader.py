"""
Scenario file loader

Reads and writes demo scenarios (car specification plus timed stimuli) as
YAML. A relative event_log_path is taken relative to the scenario file, so
a scenario can be run from any working directory.
"""

import yaml
from pathlib import Path
from typing import Union

from .simulation import SimulationConfig


class ConfigLoader:
    """Loads and saves scenario files"""

    @staticmethod
    def load_simulation(file_path: Union[str, Path]) -> SimulationConfig:
        """
        Load a scenario from a YAML file

        Args:
            file_path: Path to YAML file. An empty file gives the defaults.

        Returns:
            Validated SimulationConfig

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file is not a mapping or the scenario is inconsistent
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Scenario file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Scenario file {file_path} must contain a mapping, got {type(data).__name__}")

        config = SimulationConfig.from_dict(data)
        config.validate()

        if config.event_log_path and not Path(config.event_log_path).is_absolute():
            config.event_log_path = str(file_path.parent / config.event_log_path)

        return config

    @staticmethod
    def save_simulation(config: SimulationConfig, file_path: Union[str, Path]):
        """
        Write a scenario as YAML, keeping the field order of to_dict()

        Args:
            config: Scenario to save
            file_path: Destination, parent directories are created
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)


def load_simulation_config(file_path: Union[str, Path]) -> SimulationConfig:
    """Load a scenario from a YAML file"""
    return ConfigLoader.load_simulation(file_path)


def save_simulation_config(config: SimulationConfig, file_path: Union[str, Path]):
    """Save a scenario to a YAML file"""
    ConfigLoader.save_simulation(config, file_path)
