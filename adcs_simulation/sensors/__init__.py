"""
Sensors Module
==============

Sensor models for spacecraft simulation.
"""

from .accelerometer import Accelerometer, AccelerometerConfig

__all__ = [
    'Accelerometer',
    'AccelerometerConfig',
]
