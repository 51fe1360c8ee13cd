"""
Device Interfaces
=================

Capability interfaces the simulator uses to talk to sensors and
actuators.
"""

import numpy as np
from abc import ABC, abstractmethod


class Device(ABC):
    """Common base for simulated ADCS devices."""

    #: Catalog type name
    device_type = "device"

    def reset(self):
        """Reset device state."""

    def stats(self) -> dict:
        """Diagnostic values for stats output."""
        return {}


class Sensor(Device):
    """
    A sensor mounted on the satellite body.

    The simulator computes the local acceleration at the mounting
    position and hands it to the sensor; control code reads it back
    through ``get_value``.
    """

    @property
    @abstractmethod
    def position(self) -> np.ndarray:
        """Mounting position relative to the body origin [m]."""

    @abstractmethod
    def set_current_values(self, values: np.ndarray):
        """Store the simulated local acceleration [rad/s²·m]."""

    @abstractmethod
    def get_value(self) -> np.ndarray:
        """Latest reading as seen by control code."""


class Actuator(Device):
    """
    An actuator that may carry rotating mass.

    Devices without rotating mass report zero velocity, acceleration
    and inertia, and so contribute no torque.
    """

    @abstractmethod
    def current_velocities(self) -> np.ndarray:
        """Spin velocity vector in body frame [rad/s]."""

    @abstractmethod
    def current_accelerations(self) -> np.ndarray:
        """Spin acceleration vector in body frame [rad/s²]."""

    @abstractmethod
    def inertia_matrix(self) -> np.ndarray:
        """3x3 inertia tensor of the rotating mass [kg·m²]."""

    @abstractmethod
    def set_command(self, command: float) -> float:
        """
        Apply a scalar command.

        Returns:
            Command actually applied (after limits)
        """

    def propagate(self, dt: float):
        """Advance internal state by ``dt`` seconds."""
