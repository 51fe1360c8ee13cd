"""
Device Registry
===============

Owns the named sensor and actuator instances of a simulator.
"""

import logging
import numpy as np
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from ..core.exceptions import DeviceNotFoundError
from .base import Actuator, Sensor
from .catalog import DeviceCatalog, default_catalog

logger = logging.getLogger(__name__)


class DeviceRegistry:
    """
    Name-keyed store of sensors and actuators.

    Names are unique across sensors and actuators. Creation failures (empty name,
    unknown type) are logged and skipped so the simulator can run with
    a reduced device set.
    """

    def __init__(self, catalog: DeviceCatalog = None):
        self.catalog = catalog or default_catalog()
        self._sensors = {}
        self._actuators = {}

    @property
    def sensors(self) -> Mapping[str, Sensor]:
        """Read-only view of registered sensors."""
        return MappingProxyType(self._sensors)

    @property
    def actuators(self) -> Mapping[str, Actuator]:
        """Read-only view of registered actuators."""
        return MappingProxyType(self._actuators)

    def __len__(self) -> int:
        return len(self._sensors) + len(self._actuators)

    def __contains__(self, name: str) -> bool:
        return name in self._sensors or name in self._actuators

    def names(self) -> Iterator[str]:
        yield from self._sensors
        yield from self._actuators

    def _name_taken_by_other_kind(self, name: str, kind: str) -> bool:
        other, other_kind = (self._actuators, "actuator") if kind == "sensor" else (self._sensors, "sensor")
        if name in other:
            logger.warning("Device name %r already belongs to the %s, %s not created",
                           name, other_kind, kind)
            return True
        return False

    def _insert(self, store: dict, name: str, device, kind: str):
        previous = store.get(name)
        if previous is not None:
            logger.warning("Replacing existing %s %r", kind, name)
            previous.reset()
        store[name] = device
        logger.debug("Registered %s %r (%s)", kind, name, device.device_type)

    def create_sensor(self, name: str, type_name: str = None, **params) -> Optional[Sensor]:
        """
        Create and register a sensor.

        Args:
            name: Unique device name
            type_name: Catalog type, defaults to ``name``
            **params: Device parameters

        Returns:
            The new sensor, or None if it could not be created
        """
        if not name:
            logger.warning("Device name must be populated. Got %r", name)
            return None
        if self._name_taken_by_other_kind(name, "sensor"):
            return None

        sensor = self.catalog.create_sensor(type_name or name, **params)
        if sensor is None:
            logger.warning("Unknown sensor type: %s", type_name or name)
            return None

        self._insert(self._sensors, name, sensor, "sensor")
        return sensor

    def create_actuator(self, name: str, type_name: str = None, **params) -> Optional[Actuator]:
        """Create and register an actuator, or return None if it could not be created."""
        if not name:
            logger.warning("Device name must be populated. Got %r", name)
            return None
        if self._name_taken_by_other_kind(name, "actuator"):
            return None

        actuator = self.catalog.create_actuator(type_name or name, **params)
        if actuator is None:
            logger.warning("Unknown actuator type: %s", type_name or name)
            return None

        self._insert(self._actuators, name, actuator, "actuator")
        return actuator

    def get_sensor(self, name: str) -> Sensor:
        try:
            return self._sensors[name]
        except KeyError:
            raise DeviceNotFoundError(name, "sensor") from None

    def get_actuator(self, name: str) -> Actuator:
        try:
            return self._actuators[name]
        except KeyError:
            raise DeviceNotFoundError(name, "actuator") from None

    def set_command(self, name: str, command: float) -> float:
        """
        Send a command to a named actuator.

        Returns:
            Command actually applied

        Raises:
            DeviceNotFoundError: No actuator with that name
        """
        return self.get_actuator(name).set_command(command)

    def get_sensor_value(self, name: str) -> np.ndarray:
        """
        Read a named sensor.

        Raises:
            DeviceNotFoundError: No sensor with that name
        """
        return self.get_sensor(name).get_value()

    def update_adcs_devices(self, angular_acceleration: np.ndarray):
        """
        Push the body's current state into every sensor.

        Each sensor receives ``alpha x r`` for its mounting position ``r``.
        """
        for sensor in self._sensors.values():
            sensor.set_current_values(np.cross(angular_acceleration, sensor.position))
