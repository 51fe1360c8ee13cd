"""
Device Catalog
==============

Maps device type names to factories for simulated sensors and actuators.
"""

from typing import Callable, Dict, Optional

from ..core.exceptions import ConfigurationError
from .base import Actuator, Sensor

SensorFactory = Callable[..., Sensor]
ActuatorFactory = Callable[..., Actuator]


class DeviceCatalog:
    """
    Factory for devices by type name.

    Unknown type names resolve to ``None`` rather than raising, so callers
    decide whether a missing device is fatal.
    """

    def __init__(self):
        self._sensors: Dict[str, SensorFactory] = {}
        self._actuators: Dict[str, ActuatorFactory] = {}

    def register_sensor(self, type_name: str, factory: SensorFactory):
        self._sensors[type_name] = factory

    def register_actuator(self, type_name: str, factory: ActuatorFactory):
        self._actuators[type_name] = factory

    @property
    def sensor_types(self):
        return sorted(self._sensors)

    @property
    def actuator_types(self):
        return sorted(self._actuators)

    def _build(self, factories: Dict[str, Callable], type_name: str, params: dict):
        factory = factories.get(type_name)
        if factory is None:
            return None
        try:
            return factory(**params)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid parameters for device type {type_name!r}: {exc}") from exc

    def create_sensor(self, type_name: str, **params) -> Optional[Sensor]:
        """
        Construct a sensor.

        Args:
            type_name: Catalog type name
            **params: Device configuration parameters

        Returns:
            New sensor, or None if the type is unknown

        Raises:
            ConfigurationError: Known type with invalid parameters
        """
        return self._build(self._sensors, type_name, params)

    def create_actuator(self, type_name: str, **params) -> Optional[Actuator]:
        """Construct an actuator, or return None if the type is unknown."""
        return self._build(self._actuators, type_name, params)


def default_catalog() -> DeviceCatalog:
    """Catalog with the built-in device models."""
    from ..actuators.magnetorquer import Magnetorquer
    from ..actuators.reaction_wheel import ReactionWheel
    from ..sensors.accelerometer import Accelerometer

    catalog = DeviceCatalog()
    catalog.register_sensor(Accelerometer.device_type, Accelerometer.from_params)
    catalog.register_actuator(ReactionWheel.device_type, ReactionWheel.from_params)
    catalog.register_actuator(Magnetorquer.device_type, Magnetorquer.from_params)
    return catalog
