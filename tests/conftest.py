"""Pytest configuration and fixtures for the ADCS simulator tests."""
import os
import sys

import numpy as np
import pytest

# Ensure project root is in path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from adcs_simulation.core.config import DeviceConfig, SatelliteParameters, SimulatorConfig
from adcs_simulation.core.time_sync import ManualClock


@pytest.fixture
def wall_clock():
    """Wall clock that only advances when the test says so."""
    return ManualClock(start_ms=1_000_000)


@pytest.fixture
def wheel_config():
    """Simulator with one frictionless z-axis wheel and one accelerometer on +x."""
    return SimulatorConfig(
        timestep_ms=10,
        satellite=SatelliteParameters(),
        sensors=[
            DeviceConfig(name="accel_x", type="accelerometer", params={"position_m": [0.05, 0.0, 0.0]}),
        ],
        actuators=[
            DeviceConfig(name="wheel_z", type="reaction_wheel",
                         params={"axis_body": [0.0, 0.0, 1.0], "friction_Nm": 0.0}),
        ],
    )


@pytest.fixture
def tumbling_config():
    """Axisymmetric body spinning about a skewed axis, no devices."""
    return SimulatorConfig(
        timestep_ms=10,
        satellite=SatelliteParameters(angular_velocity=np.array([0.05, -0.02, 0.1])),
    )
