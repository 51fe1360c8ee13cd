"""
ADCS Simulation Framework
=========================

Rotational dynamics emulator for exercising attitude determination and
control software against synthetic sensor and actuator data.

Components:
- Rigid-body rotational dynamics (explicit Euler, flat attitude vector)
- Wall-clock time synchronization with the control loop
- Sensor models (accelerometer)
- Actuator models (reaction wheels, magnetorquers)
- Device registry and catalog
"""

__version__ = "1.0.0"

from adcs_simulation.core.simulator import Simulator
from adcs_simulation.core.satellite import SatelliteState
from adcs_simulation.core.config import SimulatorConfig, load_config
from adcs_simulation.core.time_sync import SimulationClock, TimeSynchronizer

__all__ = [
    'Simulator',
    'SatelliteState',
    'SimulatorConfig',
    'load_config',
    'SimulationClock',
    'TimeSynchronizer',
]
