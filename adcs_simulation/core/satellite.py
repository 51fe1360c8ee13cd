"""
Satellite State
===============

Rigid-body rotational state of the satellite.
"""

import numpy as np
from dataclasses import dataclass, field

from .config import SatelliteParameters


@dataclass
class SatelliteState:
    """
    Rotational kinematics of the satellite body.

    All vectors are Cartesian in an arbitrary inertial frame. Orientation
    is an accumulated angular displacement and is only meaningful for
    small angles.
    """
    orientation: np.ndarray = field(default_factory=lambda: np.zeros(3))  # rad
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))  # rad/s
    angular_acceleration: np.ndarray = field(default_factory=lambda: np.zeros(3))  # rad/s²
    inertia_tensor: np.ndarray = field(default_factory=lambda: np.diag([0.008, 0.008, 0.002]))  # kg·m²

    @classmethod
    def from_parameters(cls, params: SatelliteParameters) -> 'SatelliteState':
        """Create the initial state from configured parameters."""
        return cls(
            orientation=np.asarray(params.orientation, dtype=float).copy(),
            angular_velocity=np.asarray(params.angular_velocity, dtype=float).copy(),
            inertia_tensor=params.inertia_matrix.astype(float),
        )

    def angular_momentum(self) -> np.ndarray:
        """Body angular momentum [Nms]."""
        return self.inertia_tensor @ self.angular_velocity

    def kinetic_energy(self) -> float:
        """Rotational kinetic energy [J]."""
        omega = self.angular_velocity
        return 0.5 * float(omega @ self.inertia_tensor @ omega)

    def copy(self) -> 'SatelliteState':
        return SatelliteState(
            orientation=self.orientation.copy(),
            angular_velocity=self.angular_velocity.copy(),
            angular_acceleration=self.angular_acceleration.copy(),
            inertia_tensor=self.inertia_tensor.copy(),
        )

    def to_array(self) -> np.ndarray:
        """Return orientation, velocity and acceleration as a 9-element array."""
        return np.concatenate([self.orientation, self.angular_velocity, self.angular_acceleration])

    def __repr__(self) -> str:
        return (f"SatelliteState(theta={self.orientation}, "
                f"omega={np.degrees(self.angular_velocity)} deg/s)")
