"""
Accelerometer Sensor Model
==========================

Body-mounted accelerometer reporting the tangential acceleration
at its mounting point, with optional bias and noise.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from ..devices.base import Sensor


@dataclass
class AccelerometerConfig:
    """Accelerometer configuration parameters."""
    # Mounting position relative to body origin [m]
    position_m: np.ndarray = None

    # Noise parameters
    noise_std_m_s2: float = 0.0  # White noise standard deviation [m/s²]
    bias_m_s2: np.ndarray = None  # Constant bias [m/s²]

    # Full scale range [m/s²]
    range_m_s2: float = 160.0

    # Seed for the noise generator
    seed: Optional[int] = None

    def __post_init__(self):
        if self.position_m is None:
            self.position_m = np.zeros(3)
        if self.bias_m_s2 is None:
            self.bias_m_s2 = np.zeros(3)
        self.position_m = np.asarray(self.position_m, dtype=float).reshape(-1)
        self.bias_m_s2 = np.asarray(self.bias_m_s2, dtype=float).reshape(-1)
        if self.position_m.shape != (3,) or self.bias_m_s2.shape != (3,):
            raise ValueError("position_m and bias_m_s2 must be 3-vectors")
        if self.noise_std_m_s2 < 0:
            raise ValueError("noise_std_m_s2 must be non-negative")


class Accelerometer(Sensor):
    """
    Three-axis accelerometer.

    Models:
    - Constant bias
    - White noise
    - Saturation
    """

    device_type = "accelerometer"

    def __init__(self, config: AccelerometerConfig = None):
        """
        Initialize accelerometer.

        Args:
            config: Sensor configuration
        """
        self.config = config or AccelerometerConfig()
        self.rng = np.random.default_rng(self.config.seed)

        self.true_value = np.zeros(3)
        self.last_reading = np.zeros(3)
        self.is_valid = True
        self.sample_count = 0
        self.noise_std_m_s2 = self.config.noise_std_m_s2

    @classmethod
    def from_params(cls, **params) -> 'Accelerometer':
        return cls(AccelerometerConfig(**params))

    @property
    def position(self) -> np.ndarray:
        return self.config.position_m

    def set_current_values(self, values: np.ndarray):
        """
        Store the simulated acceleration and sample a reading.

        Args:
            values: True acceleration at the mounting point [m/s²]
        """
        self.true_value = np.asarray(values, dtype=float).copy()

        if not self.is_valid:
            self.last_reading = np.full(3, np.nan)
            return

        reading = self.true_value + self.config.bias_m_s2
        if self.noise_std_m_s2 > 0:
            reading = reading + self.rng.normal(0, self.noise_std_m_s2, 3)

        self.last_reading = np.clip(reading, -self.config.range_m_s2, self.config.range_m_s2)
        self.sample_count += 1

    def get_value(self) -> np.ndarray:
        return self.last_reading.copy()

    def inject_fault(self, fault_type: str):
        """
        Inject sensor fault.

        Args:
            fault_type: 'noisy' or 'offline'
        """
        if fault_type == 'noisy':
            self.noise_std_m_s2 = max(self.config.noise_std_m_s2 * 10, 1e-3)
        elif fault_type == 'offline':
            self.is_valid = False
        else:
            raise ValueError(f"Unknown fault type: {fault_type}")

    def stats(self) -> dict:
        return {
            'reading': self.last_reading.tolist(),
            'samples': self.sample_count,
        }

    def reset(self):
        """Reset sensor state."""
        self.rng = np.random.default_rng(self.config.seed)
        self.true_value = np.zeros(3)
        self.last_reading = np.zeros(3)
        self.sample_count = 0
        self.is_valid = True
        self.noise_std_m_s2 = self.config.noise_std_m_s2
