"""
Rigid-Body Dynamics
===================

Fixed-step rotational integration of the satellite body under the
reaction torques of its actuators.
"""

import logging
import numpy as np
from typing import Iterable

from ..core.exceptions import NumericalError, SingularInertiaError
from ..core.satellite import SatelliteState
from ..core.time_sync import SimulationClock
from ..devices.base import Actuator
from ..devices.registry import DeviceRegistry

logger = logging.getLogger(__name__)

# Tensors with a condition number above this are treated as singular
MAX_INERTIA_CONDITION = 1e12


def invert_inertia(inertia: np.ndarray) -> np.ndarray:
    """
    Invert an inertia tensor.

    Raises:
        SingularInertiaError: Tensor is singular or numerically close to it
    """
    inertia = np.asarray(inertia, dtype=float)
    if inertia.shape != (3, 3) or not np.all(np.isfinite(inertia)):
        raise SingularInertiaError(f"Inertia tensor must be a finite 3x3 matrix, got {inertia!r}")

    with np.errstate(divide='ignore', invalid='ignore'):
        cond = np.linalg.cond(inertia)
    if not np.isfinite(cond) or cond > MAX_INERTIA_CONDITION:
        raise SingularInertiaError(f"Inertia tensor is singular (condition number {cond:.3g})")
    try:
        return np.linalg.inv(inertia)
    except np.linalg.LinAlgError as exc:
        raise SingularInertiaError(f"Inertia tensor is singular: {exc}") from exc


def actuator_torque(omega_body: np.ndarray, actuators: Iterable[Actuator]) -> np.ndarray:
    """
    Net reaction torque of all actuators on the body.

    Each actuator with rotating mass contributes
    τ = -I_i·α_i - ω_b × (I_i·ω_i).

    Args:
        omega_body: Body angular velocity [rad/s]
        actuators: Actuators mounted on the body

    Returns:
        Total torque in body frame [Nm]
    """
    torque = np.zeros(3)
    for actuator in actuators:
        inertia_i = actuator.inertia_matrix()
        torque -= inertia_i @ actuator.current_accelerations()
        torque -= np.cross(omega_body, inertia_i @ actuator.current_velocities())
    return torque


class RigidBodyIntegrator:
    """
    Explicit Euler integrator for the satellite's rotational state.

    Each step:
    1. Sums actuator reaction torques
    2. Solves Euler's equations: I·ω̇ = τ - ω × (I·ω)
    3. Updates ω then θ
    4. Lets actuators advance their own spin state
    5. Advances the simulated clock
    """

    def __init__(self,
                 satellite: SatelliteState,
                 devices: DeviceRegistry,
                 clock: SimulationClock):
        self.satellite = satellite
        self.devices = devices
        self.clock = clock

        self._inverse_source = None
        self._inertia_inv = None

    def inverse_inertia(self) -> np.ndarray:
        """Inverse body inertia, recomputed when the tensor changes."""
        inertia = self.satellite.inertia_tensor
        if self._inverse_source is None or not np.array_equal(self._inverse_source, inertia):
            self._inertia_inv = invert_inertia(inertia)
            self._inverse_source = inertia.copy()
        return self._inertia_inv

    def angular_acceleration(self, omega: np.ndarray, torque: np.ndarray) -> np.ndarray:
        """
        Euler's equations for angular acceleration.

        Args:
            omega: Body angular velocity [rad/s]
            torque: External torque [Nm]

        Returns:
            Angular acceleration [rad/s²]
        """
        H = self.satellite.inertia_tensor @ omega
        gyro_torque = np.cross(omega, H)
        return self.inverse_inertia() @ (torque - gyro_torque)

    def timestep(self):
        """Perform a single integration step."""
        sat = self.satellite
        dt = self.clock.timestep_seconds
        actuators = list(self.devices.actuators.values())

        torque = actuator_torque(sat.angular_velocity, actuators)
        alpha = self.angular_acceleration(sat.angular_velocity, torque)

        omega = sat.angular_velocity + alpha * dt
        theta = sat.orientation + omega * dt
        if not (np.all(np.isfinite(alpha)) and np.all(np.isfinite(omega)) and np.all(np.isfinite(theta))):
            raise NumericalError(
                f"Non-finite state at t={self.clock.simulation_time} ms: alpha={alpha}, omega={omega}")

        sat.angular_acceleration = alpha
        sat.angular_velocity = omega
        sat.orientation = theta

        for actuator in actuators:
            actuator.propagate(dt)

        self.clock.step()

    def simulate(self, duration_ms: int) -> int:
        """
        Integrate over ``duration_ms`` of simulated time.

        Runs ``ceil(duration_ms / timestep_ms)`` whole steps, then refreshes
        the sensors once with the final state.

        Args:
            duration_ms: Simulated time to cover [ms]

        Returns:
            Number of steps performed
        """
        steps = self.clock.steps_for(duration_ms)
        if steps:
            # Fail before touching any state
            self.inverse_inertia()
        for _ in range(steps):
            self.timestep()

        self.devices.update_adcs_devices(self.satellite.angular_acceleration)
        logger.debug("Integrated %d steps to t=%d ms", steps, self.clock.simulation_time)
        return steps
