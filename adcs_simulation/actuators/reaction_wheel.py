"""
Reaction Wheel Model
====================

Reaction wheel actuator exchanging angular momentum with the body.
"""

import numpy as np
from dataclasses import dataclass

from ..devices.base import Actuator


@dataclass
class ReactionWheelConfig:
    """Reaction wheel configuration."""
    # Performance limits
    max_torque_Nm: float = 0.001  # Maximum motor torque [Nm]
    max_speed_rpm: float = 6000  # Maximum wheel speed [rpm]

    # Mass properties
    inertia_kg_m2: float = 1e-5  # Axial (spin) inertia [kg·m²]
    transverse_inertia_kg_m2: float = 5e-6  # Inertia about transverse axes [kg·m²]

    # Bearing friction [Nm]
    friction_Nm: float = 1e-5

    # Axis
    axis_body: np.ndarray = None  # Wheel spin axis in body frame

    def __post_init__(self):
        if self.axis_body is None:
            self.axis_body = np.array([1.0, 0.0, 0.0])
        axis = np.asarray(self.axis_body, dtype=float).reshape(-1)
        norm = np.linalg.norm(axis)
        if axis.shape != (3,) or norm < 1e-12:
            raise ValueError(f"axis_body must be a non-zero 3-vector, got {self.axis_body!r}")
        self.axis_body = axis / norm
        if self.inertia_kg_m2 <= 0:
            raise ValueError("inertia_kg_m2 must be positive")
        if self.max_torque_Nm < 0 or self.max_speed_rpm <= 0:
            raise ValueError("max_torque_Nm and max_speed_rpm must be positive")


class ReactionWheel(Actuator):
    """
    Single reaction wheel.

    The command is a motor torque [Nm]. The wheel spins up at
    ``torque / inertia`` along its axis until it reaches its speed limit.

    Features:
    - Torque limit
    - Friction model
    - Speed saturation
    """

    device_type = "reaction_wheel"

    def __init__(self, config: ReactionWheelConfig = None):
        """
        Initialize reaction wheel.

        Args:
            config: Wheel configuration
        """
        self.config = config or ReactionWheelConfig()

        # State
        self.wheel_speed_rad_s = 0.0
        self.commanded_torque = 0.0

        self.is_enabled = True
        self.is_saturated = False
        self.friction_scale = 1.0

    @classmethod
    def from_params(cls, **params) -> 'ReactionWheel':
        return cls(ReactionWheelConfig(**params))

    @property
    def max_speed_rad_s(self) -> float:
        return self.config.max_speed_rpm * 2 * np.pi / 60

    @property
    def wheel_speed_rpm(self) -> float:
        """Get wheel speed in RPM."""
        return self.wheel_speed_rad_s * 60 / (2 * np.pi)

    @property
    def wheel_acceleration_rad_s2(self) -> float:
        """Current spin acceleration along the wheel axis."""
        if not self.is_enabled:
            return 0.0

        friction = -np.sign(self.wheel_speed_rad_s) * self.config.friction_Nm * self.friction_scale
        accel = (self.commanded_torque + friction) / self.config.inertia_kg_m2

        # No further spin-up once at the speed limit
        if abs(self.wheel_speed_rad_s) >= self.max_speed_rad_s and \
                np.sign(accel) == np.sign(self.wheel_speed_rad_s):
            return 0.0
        return float(accel)

    @property
    def momentum(self) -> float:
        """Stored angular momentum along the axis [Nms]."""
        return self.config.inertia_kg_m2 * self.wheel_speed_rad_s

    def set_command(self, command: float) -> float:
        """
        Command wheel torque.

        Args:
            command: Commanded motor torque [Nm]

        Returns:
            Actual commanded torque (after limits)
        """
        if not self.is_enabled:
            self.commanded_torque = 0.0
            return 0.0

        self.commanded_torque = float(np.clip(
            command,
            -self.config.max_torque_Nm,
            self.config.max_torque_Nm
        ))
        return self.commanded_torque

    def current_velocities(self) -> np.ndarray:
        return self.wheel_speed_rad_s * self.config.axis_body

    def current_accelerations(self) -> np.ndarray:
        return self.wheel_acceleration_rad_s2 * self.config.axis_body

    def inertia_matrix(self) -> np.ndarray:
        a = self.config.axis_body
        axial = np.outer(a, a)
        return (self.config.inertia_kg_m2 * axial +
                self.config.transverse_inertia_kg_m2 * (np.eye(3) - axial))

    def propagate(self, dt: float):
        """
        Update wheel speed.

        Args:
            dt: Time step [s]
        """
        speed = self.wheel_speed_rad_s + self.wheel_acceleration_rad_s2 * dt

        # Friction must not reverse the wheel
        if self.commanded_torque == 0.0 and np.sign(speed) != np.sign(self.wheel_speed_rad_s):
            speed = 0.0

        max_speed = self.max_speed_rad_s
        if abs(speed) >= max_speed:
            speed = float(np.sign(speed) * max_speed)
            self.is_saturated = True
        else:
            self.is_saturated = False

        self.wheel_speed_rad_s = float(speed)

    def inject_fault(self, fault_type: str):
        """Inject actuator fault."""
        if fault_type == 'offline':
            self.is_enabled = False
            self.commanded_torque = 0.0
        elif fault_type == 'high_friction':
            self.friction_scale = 10.0
        else:
            raise ValueError(f"Unknown fault type: {fault_type}")

    def stats(self) -> dict:
        return {
            'speed_rpm': self.wheel_speed_rpm,
            'torque_Nm': self.commanded_torque,
            'momentum_Nms': self.momentum,
            'saturated': self.is_saturated,
        }

    def reset(self):
        """Reset wheel state."""
        self.wheel_speed_rad_s = 0.0
        self.commanded_torque = 0.0
        self.is_enabled = True
        self.is_saturated = False
        self.friction_scale = 1.0
