"""
Configuration management package

Provides the car specification and the demo scenario configuration.
"""

from .simulation import (
    ElevatorConfig,
    StimulusConfig,
    SimulationConfig
)

from .config_loader import (
    ConfigLoader,
    load_simulation_config,
    save_simulation_config
)

__all__ = [
    'ElevatorConfig',
    'StimulusConfig',
    'SimulationConfig',
    'ConfigLoader',
    'load_simulation_config',
    'save_simulation_config',
]
