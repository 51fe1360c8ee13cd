"""
Devices Module
==============

Sensor/actuator interfaces, the device catalog and the registry.
"""

from .base import Device, Sensor, Actuator
from .catalog import DeviceCatalog, default_catalog
from .registry import DeviceRegistry

__all__ = [
    'Device',
    'Sensor',
    'Actuator',
    'DeviceCatalog',
    'default_catalog',
    'DeviceRegistry',
]
