"""
Magnetorquer Model
==================

Magnetic torque rod. Carries no rotating mass, so it adds no
reaction torque to the rigid-body integration.
"""

import numpy as np
from dataclasses import dataclass

from ..devices.base import Actuator


@dataclass
class MagnetorquerConfig:
    """Magnetorquer configuration."""
    max_dipole_Am2: float = 0.2  # Maximum magnetic dipole [Am²]
    residual_dipole_Am2: float = 0.001  # Residual when off [Am²]

    # Axis
    axis_body: np.ndarray = None  # Torquer axis in body frame

    def __post_init__(self):
        if self.axis_body is None:
            self.axis_body = np.array([1.0, 0.0, 0.0])
        axis = np.asarray(self.axis_body, dtype=float).reshape(-1)
        norm = np.linalg.norm(axis)
        if axis.shape != (3,) or norm < 1e-12:
            raise ValueError(f"axis_body must be a non-zero 3-vector, got {self.axis_body!r}")
        self.axis_body = axis / norm


class Magnetorquer(Actuator):
    """Single-axis magnetorquer (torque rod)."""

    device_type = "magnetorquer"

    def __init__(self, config: MagnetorquerConfig = None):
        self.config = config or MagnetorquerConfig()
        self.commanded_dipole = 0.0
        self.is_enabled = True

    @classmethod
    def from_params(cls, **params) -> 'Magnetorquer':
        return cls(MagnetorquerConfig(**params))

    @property
    def dipole_vector(self) -> np.ndarray:
        """Dipole moment in body frame [Am²]."""
        if not self.is_enabled or self.commanded_dipole == 0.0:
            return self.config.residual_dipole_Am2 * self.config.axis_body
        return self.commanded_dipole * self.config.axis_body

    def set_command(self, command: float) -> float:
        """
        Command dipole moment.

        Args:
            command: Commanded dipole [Am²]

        Returns:
            Actual commanded dipole (after saturation)
        """
        if not self.is_enabled:
            self.commanded_dipole = 0.0
            return 0.0

        self.commanded_dipole = float(np.clip(
            command,
            -self.config.max_dipole_Am2,
            self.config.max_dipole_Am2
        ))
        return self.commanded_dipole

    def current_velocities(self) -> np.ndarray:
        return np.zeros(3)

    def current_accelerations(self) -> np.ndarray:
        return np.zeros(3)

    def inertia_matrix(self) -> np.ndarray:
        return np.zeros((3, 3))

    def stats(self) -> dict:
        return {'dipole_Am2': self.commanded_dipole}

    def reset(self):
        self.commanded_dipole = 0.0
        self.is_enabled = True
