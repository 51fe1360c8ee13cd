"""
Simulation Core Module
======================

Core simulation components.
"""

from .simulator import Simulator, SimulationState, SimulatorStatus
from .satellite import SatelliteState
from .time_sync import ManualClock, SimulationClock, TimeSynchronizer
from .config import SimulatorConfig, SatelliteParameters, DeviceConfig, load_config
from .exceptions import (
    SimulationError,
    ConfigurationError,
    SimulatorStateError,
    DeviceNotFoundError,
    NumericalError,
    SingularInertiaError,
)

__all__ = [
    'Simulator',
    'SimulationState',
    'SimulatorStatus',
    'SatelliteState',
    'ManualClock',
    'SimulationClock',
    'TimeSynchronizer',
    'SimulatorConfig',
    'SatelliteParameters',
    'DeviceConfig',
    'load_config',
    'SimulationError',
    'ConfigurationError',
    'SimulatorStateError',
    'DeviceNotFoundError',
    'NumericalError',
    'SingularInertiaError',
]
