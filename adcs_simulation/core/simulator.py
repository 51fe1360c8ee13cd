"""
Main Simulator
==============

Entry point used by ADCS control code. Keeps the simulated satellite
in step with the wall-clock time the control code spends running.
"""

import enum
import logging
import numpy as np
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Deque, Dict, Optional, Union

from .config import SimulatorConfig, load_config
from .exceptions import SimulatorStateError
from .satellite import SatelliteState
from .time_sync import SimulationClock, TimeSynchronizer
from ..devices.catalog import DeviceCatalog
from ..devices.registry import DeviceRegistry
from ..dynamics.rigid_body import RigidBodyIntegrator

logger = logging.getLogger(__name__)


class SimulatorStatus(enum.Enum):
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"


@dataclass
class SimulationState:
    """Snapshot of the simulation for logging."""
    time_ms: int = 0
    orientation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_acceleration: np.ndarray = field(default_factory=lambda: np.zeros(3))
    steps: int = 0

    @property
    def time_s(self) -> float:
        return self.time_ms / 1000.0


class Simulator:
    """
    ADCS simulation engine.

    Integrates:
    - Rigid-body rotational dynamics
    - Reaction torques from actuators
    - Sensor refresh with local accelerations
    - Wall-clock synchronization with the control code
    """

    def __init__(self,
                 config: SimulatorConfig = None,
                 catalog: DeviceCatalog = None,
                 clock: Optional[Callable[[], int]] = None):
        """
        Initialize simulator.

        Args:
            config: Simulator configuration
            catalog: Device catalog used to build configured devices
            clock: Wall-clock source in milliseconds (defaults to system time)

        Raises:
            ConfigurationError: A configured device has invalid parameters
        """
        self.status = SimulatorStatus.UNINITIALIZED
        self.config = config or SimulatorConfig()

        self.devices = DeviceRegistry(catalog)
        for sensor in self.config.sensors:
            self.devices.create_sensor(sensor.name, sensor.type, **sensor.params)
        for actuator in self.config.actuators:
            self.devices.create_actuator(actuator.name, actuator.type, **actuator.params)

        self.satellite = SatelliteState.from_parameters(self.config.satellite)
        self.clock = SimulationClock(self.config.timestep_ms)
        self.integrator = RigidBodyIntegrator(self.satellite, self.devices, self.clock)
        self.synchronizer = TimeSynchronizer(clock)

        self.print_stats = self.config.print_stats
        self.last_steps = 0
        self.history: Deque[SimulationState] = deque(maxlen=self.config.history_limit)

        self.status = SimulatorStatus.RUNNING
        logger.info("Simulator running: %d sensors, %d actuators, timestep %d ms",
                    len(self.devices.sensors), len(self.devices.actuators),
                    self.config.timestep_ms)

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs) -> 'Simulator':
        """Construct from a YAML configuration file."""
        return cls(load_config(path), **kwargs)

    @property
    def simulation_time(self) -> int:
        """Simulated time [ms]."""
        return self.clock.simulation_time

    @property
    def is_running(self) -> bool:
        return self.status is SimulatorStatus.RUNNING

    def _require_running(self):
        if not self.is_running:
            raise SimulatorStateError(f"Simulator is {self.status.value}")

    def _record_state(self):
        """Store a history sample if the state moved far enough since the last one."""
        if self.last_steps == 0:
            return
        if self.history and \
                self.clock.simulation_time - self.history[-1].time_ms < self.config.history_interval_ms:
            return
        self.history.append(SimulationState(
            time_ms=self.clock.simulation_time,
            orientation=self.satellite.orientation.copy(),
            angular_velocity=self.satellite.angular_velocity.copy(),
            angular_acceleration=self.satellite.angular_acceleration.copy(),
            steps=self.last_steps,
        ))

    def _advance(self, sleep_ms: int = 0) -> int:
        self._require_running()
        target = self.synchronizer.request(sleep_ms)
        self.last_steps = self.integrator.simulate(target - self.clock.simulation_time)

        self._record_state()
        if self.print_stats:
            self.log_stats()
        return self.clock.simulation_time

    def update_simulation(self) -> int:
        """
        Advance the simulation by the time the control code spent running.

        Used when the control code requests up to date sensor values.

        Returns:
            Simulation time at the end of calculations [ms]
        """
        return self._advance()

    def set_adcs_sleep(self, duration: int) -> int:
        """
        Advance by the time spent running plus ``duration``.

        Used when the control code intends to idle until new data
        can be processed.

        Args:
            duration: Additional time to simulate [ms]

        Returns:
            Simulation time at the end of calculations [ms]
        """
        return self._advance(duration)

    def set_command(self, name: str, command: float) -> float:
        """Command a named actuator."""
        self._require_running()
        return self.devices.set_command(name, command)

    def get_sensor_value(self, name: str) -> np.ndarray:
        """Read a named sensor."""
        self._require_running()
        return self.devices.get_sensor_value(name)

    def log_stats(self):
        """Log the current state of every device."""
        logger.info("t=%d ms steps=%d |omega|=%.6f rad/s", self.clock.simulation_time,
                    self.last_steps, np.linalg.norm(self.satellite.angular_velocity))
        for name, device in list(self.devices.sensors.items()) + list(self.devices.actuators.items()):
            logger.info("  %-20s %s", name, device.stats())

    def get_telemetry(self) -> Dict:
        """
        Get current telemetry data.

        Returns:
            Dictionary of telemetry values
        """
        return {
            'time_ms': self.clock.simulation_time,
            'step_count': self.clock.step_count,
            'orientation_rad': self.satellite.orientation.tolist(),
            'angular_velocity_deg_s': np.degrees(self.satellite.angular_velocity).tolist(),
            'angular_acceleration_rad_s2': self.satellite.angular_acceleration.tolist(),
            'kinetic_energy_J': self.satellite.kinetic_energy(),
            'devices': sorted(self.devices.names()),
        }
